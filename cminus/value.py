import abc
from dataclasses import dataclass

from cminus.utils import INT_MAX, INT_MIN, wrap_int


class Value(abc.ABC):
    @classmethod
    @abc.abstractmethod
    def type_name(cls) -> str:
        ...


@dataclass(frozen=True)
class Integer(Value):
    v: int

    @classmethod
    def type_name(cls) -> str:
        return "Integer"

    @classmethod
    def wrapping(cls, v: int) -> "Integer":
        return cls(wrap_int(v))

    @classmethod
    def from_bool(cls, b: bool) -> "Integer":
        return TRUE if b else FALSE

    def is_true(self) -> bool:
        """Only exactly 1 counts as true, any other value (2 included) is false"""
        return self.v == 1

    def __str__(self) -> str:
        return str(self.v)


def parse_int(lexeme: str) -> int:
    v = int(lexeme)
    if not INT_MIN <= v <= INT_MAX:
        raise ValueError(f"Integer literal out of range: {lexeme}")
    return v


TRUE = Integer(1)
FALSE = Integer(0)
