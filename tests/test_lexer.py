import pytest

from cminus.lexer import EOF_LEXEME, Lexer, LexerError, Token, TokenType, tokenize


def types(code: str) -> list[TokenType]:
    return [t.type for t in tokenize(code)]


def test_assignment() -> None:
    assert tokenize("x = 10") == [
        Token(TokenType.IDENTIFIER, "x"),
        Token(TokenType.ASSIGN, "="),
        Token(TokenType.INTEGER, "10"),
        Token(TokenType.EOF, EOF_LEXEME),
    ]


@pytest.mark.parametrize(
    "code, expected_types",
    [
        pytest.param("while if else print", [TokenType.WHILE, TokenType.IF, TokenType.ELSE, TokenType.PRINT]),
        pytest.param("whilex", [TokenType.IDENTIFIER]),
        pytest.param("if1", [TokenType.IF, TokenType.INTEGER]),
        pytest.param("abc123", [TokenType.IDENTIFIER, TokenType.INTEGER]),
        pytest.param(
            "+ - * / %", [TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH, TokenType.PERCENT]
        ),
        pytest.param("= ==", [TokenType.ASSIGN, TokenType.EQUAL]),
        pytest.param("===", [TokenType.EQUAL, TokenType.ASSIGN]),
        pytest.param("!= < > <= >=", [
            TokenType.NOT_EQUAL, TokenType.LESS, TokenType.GREATER, TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL
        ]),
        pytest.param("a<=b", [TokenType.IDENTIFIER, TokenType.LESS_EQUAL, TokenType.IDENTIFIER]),
        pytest.param("&& ||", [TokenType.AND, TokenType.OR]),
        pytest.param(", ( ) { }", [
            TokenType.COMMA,
            TokenType.BRACKET_OPEN,
            TokenType.BRACKET_CLOSE,
            TokenType.BRACE_OPEN,
            TokenType.BRACE_CLOSE,
        ]),
        pytest.param("x\n=\t1\r\n", [TokenType.IDENTIFIER, TokenType.ASSIGN, TokenType.INTEGER]),
        pytest.param("", []),
        pytest.param("   ", []),
    ],
)
def test_token_types(code: str, expected_types: list[TokenType]) -> None:
    assert types(code) == expected_types + [TokenType.EOF]


def test_maximal_runs() -> None:
    tokens = tokenize("counter=12345")
    assert [t.lexeme for t in tokens[:-1]] == ["counter", "=", "12345"]


def test_end_of_input_is_repeated() -> None:
    lexer = Lexer("x")
    assert lexer.next_token().type is TokenType.IDENTIFIER
    assert lexer.next_token().type is TokenType.EOF
    assert lexer.next_token().type is TokenType.EOF


@pytest.mark.parametrize(
    "code, error_char_idx",
    [
        pytest.param("!", 0),
        pytest.param("x = !y", 4),
        pytest.param("a & b", 2),
        pytest.param("a | b", 2),
        pytest.param("x = 1;", 5),
        pytest.param("x = 1 @ 2", 6),
        pytest.param("x = 1 &", 6),
    ],
)
def test_invalid_character(code: str, error_char_idx: int) -> None:
    with pytest.raises(LexerError) as exc_info:
        tokenize(code)
    assert exc_info.value.error_char_idx == error_char_idx
    assert "Invalid character found" in str(exc_info.value)


def test_tokens_are_produced_on_demand() -> None:
    lexer = Lexer("x = 1 @")
    assert lexer.next_token() == Token(TokenType.IDENTIFIER, "x")
    assert lexer.next_token() == Token(TokenType.ASSIGN, "=")
    assert lexer.next_token() == Token(TokenType.INTEGER, "1")
    with pytest.raises(LexerError):
        lexer.next_token()


def test_error_display_points_at_character() -> None:
    error = LexerError("Invalid character found: '@'", code="x = 1 @ 2", error_char_idx=6)
    lines = str(error).splitlines()
    assert lines == ["[Lexer error] Invalid character found: '@'", "x = 1 @ 2", "      ^"]
