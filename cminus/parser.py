import logging
from dataclasses import dataclass
from typing import Optional

from cminus.ast_nodes import (
    BinaryOperator,
    BlockStatement,
    Expression,
    ExpressionStatement,
    Identifier,
    IfStatement,
    InfixExpression,
    IntegerLiteral,
    PrintStatement,
    Program,
    Statement,
    VariableDecl,
    WhileStatement,
)
from cminus.lexer import Lexer, Token, TokenType
from cminus.value import parse_int

logger = logging.getLogger(__name__)


@dataclass
class ParserError(Exception):
    errors: list[str]

    def __str__(self) -> str:
        return "\n".join(self.errors)


LOWEST = 0

PRECEDENCES = {
    TokenType.STAR: 6,
    TokenType.SLASH: 6,
    TokenType.PERCENT: 6,
    TokenType.PLUS: 5,
    TokenType.MINUS: 5,
    TokenType.LESS: 4,
    TokenType.GREATER: 4,
    TokenType.LESS_EQUAL: 4,
    TokenType.GREATER_EQUAL: 4,
    TokenType.EQUAL: 3,
    TokenType.NOT_EQUAL: 3,
    TokenType.AND: 2,
    TokenType.OR: 1,
}

INFIX_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.PERCENT: BinaryOperator.MOD,
    TokenType.LESS: BinaryOperator.LT,
    TokenType.GREATER: BinaryOperator.GT,
    TokenType.LESS_EQUAL: BinaryOperator.LE,
    TokenType.GREATER_EQUAL: BinaryOperator.GE,
    TokenType.EQUAL: BinaryOperator.EQ,
    TokenType.NOT_EQUAL: BinaryOperator.NE,
    TokenType.AND: BinaryOperator.AND,
    TokenType.OR: BinaryOperator.OR,
}


def get_precedence(token: Token) -> int:
    return PRECEDENCES.get(token.type, LOWEST)


class Parser:
    """Recursive descent parser for statements with Pratt-style precedence climbing for expressions.

    Syntax errors do not stop parsing: they are collected in ``errors`` and the statement they occur in is dropped.

    Statement parsers start on the first token of the statement and leave ``cur_token`` on the first token after it,
    ``parse_expression`` leaves ``cur_token`` on the last token of the expression.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []
        self.block_depth = 0
        self.cur_token = lexer.next_token()
        self.peek_token = lexer.next_token()

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _error(self, token: Token) -> None:
        errmsg = f"Syntax error, didn't expect {token.lexeme}"
        logger.debug(errmsg)
        self.errors.append(errmsg)

    def _expect_peek(self, token_type: TokenType) -> bool:
        if self.peek_token.type is token_type:
            self._next_token()
            return True
        self._error(self.peek_token)
        return False

    def parse_program(self) -> Program:
        statements: list[Statement] = []
        while self.cur_token.type is not TokenType.EOF:
            statement = self.parse_statement(in_block=False)
            if statement is None:
                self._next_token()
            else:
                logger.debug("Parsed statement: %s", statement)
                statements.append(statement)
        return Program(statements=tuple(statements))

    def parse_statement(self, in_block: bool) -> Optional[Statement]:
        token_type = self.cur_token.type
        if token_type is TokenType.IDENTIFIER:
            # inside a block a lone identifier is an expression, at top level it must start an assignment
            if in_block and self.peek_token.type is not TokenType.ASSIGN:
                return self._parse_expression_statement()
            return self._parse_variable_decl()
        elif token_type is TokenType.IF:
            return self._parse_if_statement()
        elif token_type is TokenType.WHILE:
            return self._parse_while_statement()
        elif token_type is TokenType.PRINT:
            return self._parse_print_statement()
        else:
            return self._parse_expression_statement()

    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None
        self._next_token()
        return ExpressionStatement(token=token, expression=expression)

    def _parse_variable_decl(self) -> Optional[VariableDecl]:
        token = self.cur_token
        name = Identifier(token=token, name=token.lexeme)
        if not self._expect_peek(TokenType.ASSIGN):
            return None
        self._next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        self._next_token()
        return VariableDecl(token=token, name=name, value=value)

    def _parse_condition(self) -> Optional[Expression]:
        """Parses ``( expr )`` following an ``if`` or ``while`` keyword"""
        if not self._expect_peek(TokenType.BRACKET_OPEN):
            return None
        self._next_token()
        condition = self.parse_expression(LOWEST)
        if condition is None:
            return None
        if not self._expect_peek(TokenType.BRACKET_CLOSE):
            return None
        self._next_token()
        return condition

    def _parse_if_statement(self) -> Optional[IfStatement]:
        token = self.cur_token
        condition = self._parse_condition()
        if condition is None:
            return None
        first_branch = self._parse_block_statement()
        if first_branch is None:
            return None
        second_branch = None
        if self.cur_token.type is TokenType.ELSE:
            self._next_token()
            second_branch = self._parse_block_statement()
            if second_branch is None:
                return None
        return IfStatement(token=token, condition=condition, first_branch=first_branch, second_branch=second_branch)

    def _parse_while_statement(self) -> Optional[WhileStatement]:
        token = self.cur_token
        condition = self._parse_condition()
        if condition is None:
            return None
        body = self._parse_block_statement()
        if body is None:
            return None
        return WhileStatement(token=token, condition=condition, body=body)

    def _parse_block_statement(self) -> Optional[BlockStatement]:
        token = self.cur_token
        if token.type is not TokenType.BRACE_OPEN:
            self._error(token)
            return None
        self._next_token()
        self.block_depth += 1

        statements: list[Statement] = []
        while self.cur_token.type not in (TokenType.BRACE_CLOSE, TokenType.EOF):
            if self.cur_token.type is TokenType.ELSE:
                # let the enclosing if statement pick it up
                break
            statement = self.parse_statement(in_block=True)
            if statement is None:
                # a closing brace here belongs to this block, keep it
                if self.cur_token.type is not TokenType.BRACE_CLOSE:
                    self._next_token()
            else:
                statements.append(statement)

        if self.cur_token.type is TokenType.BRACE_CLOSE:
            self._next_token()
        elif self.cur_token.type is TokenType.EOF and self.block_depth == 1:
            # reported once, by the outermost of the unclosed blocks
            self._error(self.cur_token)
        self.block_depth -= 1
        return BlockStatement(token=token, statements=tuple(statements))

    def _parse_print_statement(self) -> Optional[PrintStatement]:
        token = self.cur_token
        expressions: list[Expression] = []
        while True:
            self._next_token()
            expression = self.parse_expression(LOWEST)
            if expression is None:
                return None
            expressions.append(expression)
            if self.peek_token.type is not TokenType.COMMA:
                break
            self._next_token()
        self._next_token()
        return PrintStatement(token=token, expressions=tuple(expressions))

    def parse_expression(self, precedence: int) -> Optional[Expression]:
        left = self._parse_prefix()
        if left is None:
            return None

        # an identifier may start the next statement, but an integer right after an operand is a missing operator
        if self.peek_token.type is TokenType.INTEGER:
            self._error(self.peek_token)
            return None

        while precedence < get_precedence(self.peek_token):
            self._next_token()
            left = self._parse_infix(left)
            if left is None:
                return None
        return left

    def _parse_prefix(self) -> Optional[Expression]:
        token = self.cur_token
        if token.type is TokenType.IDENTIFIER:
            return Identifier(token=token, name=token.lexeme)
        elif token.type is TokenType.INTEGER:
            return self._parse_integer_literal()
        elif token.type is TokenType.BRACKET_OPEN:
            return self._parse_grouped_expression()
        else:
            self._error(token)
            return None

    def _parse_integer_literal(self) -> Optional[IntegerLiteral]:
        token = self.cur_token
        try:
            value = parse_int(token.lexeme)
        except ValueError:
            self._error(token)
            return None
        return IntegerLiteral(token=token, value=value)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        self._next_token()
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None
        if not self._expect_peek(TokenType.BRACKET_CLOSE):
            return None
        return expression

    def _parse_infix(self, left: Expression) -> Optional[InfixExpression]:
        token = self.cur_token
        precedence = get_precedence(token)
        self._next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token=token, left=left, operator=INFIX_OPERATORS[token.type], right=right)


def parse(code: str) -> Program:
    parser = Parser(Lexer(code))
    program = parser.parse_program()
    if parser.errors:
        raise ParserError(errors=parser.errors)
    return program
