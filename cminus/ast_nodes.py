"""AST of a C-- program.

Nodes are frozen dataclasses built in one step by the parser, so a finished tree can not be mutated. Each node keeps
the token that introduced it; it is only there for diagnostics, no source positions are tracked. ``str()`` of a node
gives back C-- source for it.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union

from cminus.lexer import Token
from cminus.utils import PrintableEnum


def _indent(text: str) -> str:
    return "\n".join("    " + line for line in text.splitlines())


# expressions


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()
    LT = enum.auto()
    GT = enum.auto()
    LE = enum.auto()
    GE = enum.auto()
    EQ = enum.auto()
    NE = enum.auto()
    AND = enum.auto()
    OR = enum.auto()


@dataclass(frozen=True)
class Identifier:
    token: Token
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral:
    token: Token
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class InfixExpression:
    token: Token
    left: "Expression"
    operator: BinaryOperator
    right: "Expression"

    def __str__(self) -> str:
        return f"({self.left} {self.token.lexeme} {self.right})"


Expression = Union[Identifier, IntegerLiteral, InfixExpression]


# statements


@dataclass(frozen=True)
class ExpressionStatement:
    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class VariableDecl:
    token: Token
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.name} = {self.value}"


@dataclass(frozen=True)
class BlockStatement:
    token: Token
    statements: tuple["Statement", ...]

    def __str__(self) -> str:
        if not self.statements:
            return "{\n}"
        return "{\n" + "\n".join(_indent(str(s)) for s in self.statements) + "\n}"


@dataclass(frozen=True)
class IfStatement:
    token: Token
    condition: Expression
    first_branch: BlockStatement
    second_branch: Optional[BlockStatement] = None

    def __str__(self) -> str:
        result = f"if ({self.condition}) {self.first_branch}"
        if self.second_branch is not None:
            result += f" else {self.second_branch}"
        return result


@dataclass(frozen=True)
class WhileStatement:
    token: Token
    condition: Expression
    body: BlockStatement

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


@dataclass(frozen=True)
class PrintStatement:
    token: Token
    expressions: tuple[Expression, ...]

    def __str__(self) -> str:
        return "print " + ", ".join(str(e) for e in self.expressions)


Statement = Union[ExpressionStatement, VariableDecl, BlockStatement, IfStatement, WhileStatement, PrintStatement]


@dataclass(frozen=True)
class Program:
    statements: tuple[Statement, ...]

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)


Node = Union[Program, Statement, Expression]
