import sys
from typing import Callable, Optional, TextIO

from cminus.ast_nodes import (
    BinaryOperator,
    BlockStatement,
    ExpressionStatement,
    Identifier,
    IfStatement,
    InfixExpression,
    IntegerLiteral,
    Node,
    PrintStatement,
    Program,
    Statement,
    VariableDecl,
    WhileStatement,
)
from cminus.environment import CminusRuntimeError, Environment
from cminus.utils import truncating_div, truncating_mod
from cminus.value import Integer, Value

PRINT_SEPARATOR = " "


def evaluate(node: Node, environment: Environment, output: Optional[TextIO] = None) -> Optional[Value]:
    """Evaluates a program, statement or expression. Statements that produce no value return None.

    Print statements write to ``output``, standard output by default.
    """
    if output is None:
        output = sys.stdout
    if isinstance(node, (Program, BlockStatement)):
        return evaluate_statements(node.statements, environment, output)
    elif isinstance(node, VariableDecl):
        return environment.set(node.name.name, evaluate_expression(node.value, environment))
    elif isinstance(node, ExpressionStatement):
        return evaluate_expression(node.expression, environment)
    elif isinstance(node, IfStatement):
        condition = evaluate_expression(node.condition, environment)
        # anything but exactly 1 or 0 runs neither branch
        if condition.v == 1:
            return evaluate(node.first_branch, environment, output)
        elif condition.v == 0 and node.second_branch is not None:
            return evaluate(node.second_branch, environment, output)
        return None
    elif isinstance(node, WhileStatement):
        while evaluate_expression(node.condition, environment).v == 1:
            evaluate(node.body, environment, output)
        return None
    elif isinstance(node, PrintStatement):
        for expression in node.expressions:
            output.write(f"{evaluate_expression(expression, environment)}{PRINT_SEPARATOR}")
        return None
    elif isinstance(node, (Identifier, IntegerLiteral, InfixExpression)):
        return evaluate_expression(node, environment)
    else:
        raise RuntimeError(f"Unexpected node type: {node}")


def evaluate_statements(statements: tuple[Statement, ...], environment: Environment, output: TextIO) -> Optional[Value]:
    result: Optional[Value] = None
    for statement in statements:
        result = evaluate(statement, environment, output)
    return result


def evaluate_expression(expression: Node, environment: Environment) -> Integer:
    if isinstance(expression, IntegerLiteral):
        return Integer(expression.value)
    elif isinstance(expression, Identifier):
        value = environment.get(expression.name)
        if not isinstance(value, Integer):
            raise RuntimeError(f"Unexpected value type for {expression.name}: {value.type_name()}")
        return value
    elif isinstance(expression, InfixExpression):
        # both sides are always evaluated, && and || do not short-circuit
        left_res = evaluate_expression(expression.left, environment)
        right_res = evaluate_expression(expression.right, environment)
        return eval_binary_operation(expression.operator, left_res, right_res)
    else:
        raise RuntimeError(f"Unexpected expression type: {expression}")


IntegerOperationImpl = Callable[[Integer, Integer], Integer]


def _checked_divisor(impl: IntegerOperationImpl, op_name: str) -> IntegerOperationImpl:
    def checked(a: Integer, b: Integer) -> Integer:
        if b.v == 0:
            raise CminusRuntimeError(f"{op_name} by zero")
        return impl(a, b)

    return checked


binary_operation_impls: dict[BinaryOperator, IntegerOperationImpl] = {
    BinaryOperator.ADD: lambda a, b: Integer.wrapping(a.v + b.v),
    BinaryOperator.SUB: lambda a, b: Integer.wrapping(a.v - b.v),
    BinaryOperator.MUL: lambda a, b: Integer.wrapping(a.v * b.v),
    BinaryOperator.DIV: _checked_divisor(lambda a, b: Integer.wrapping(truncating_div(a.v, b.v)), "Division"),
    BinaryOperator.MOD: _checked_divisor(lambda a, b: Integer.wrapping(truncating_mod(a.v, b.v)), "Modulo"),
    BinaryOperator.LT: lambda a, b: Integer.from_bool(a.v < b.v),
    BinaryOperator.GT: lambda a, b: Integer.from_bool(a.v > b.v),
    BinaryOperator.LE: lambda a, b: Integer.from_bool(a.v <= b.v),
    BinaryOperator.GE: lambda a, b: Integer.from_bool(a.v >= b.v),
    BinaryOperator.EQ: lambda a, b: Integer.from_bool(a.v == b.v),
    BinaryOperator.NE: lambda a, b: Integer.from_bool(a.v != b.v),
    BinaryOperator.AND: lambda a, b: Integer.from_bool(a.is_true() and b.is_true()),
    BinaryOperator.OR: lambda a, b: Integer.from_bool(a.is_true() or b.is_true()),
}


def eval_binary_operation(operator: BinaryOperator, a: Integer, b: Integer) -> Integer:
    impl = binary_operation_impls.get(operator)
    if impl is None:
        raise RuntimeError(f"Unexpected binary operator: {operator}")
    return impl(a, b)
