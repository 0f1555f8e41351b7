import logging
from dataclasses import dataclass, field

from cminus.value import Value

logger = logging.getLogger(__name__)


@dataclass
class CminusRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"[Runtime error] {self.errmsg}"


@dataclass
class Environment:
    """One flat namespace for a whole run, blocks do not open scopes"""

    variables: dict[str, Value] = field(default_factory=dict)

    def get(self, name: str) -> Value:
        if name not in self.variables:
            raise CminusRuntimeError(f"Unknown identifier: {name}")
        return self.variables[name]

    def set(self, name: str, value: Value) -> Value:
        logger.debug("%s = %s", name, value)
        self.variables[name] = value
        return value
