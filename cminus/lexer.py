import enum
import logging
import re
from dataclasses import dataclass
from typing import Callable

from cminus.utils import PrintableEnum

logger = logging.getLogger(__name__)


@dataclass
class LexerError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Lexer error] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class TokenType(PrintableEnum):
    IDENTIFIER = enum.auto()
    INTEGER = enum.auto()
    # keywords
    WHILE = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    PRINT = enum.auto()
    # operators
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    PERCENT = enum.auto()
    ASSIGN = enum.auto()
    EQUAL = enum.auto()
    NOT_EQUAL = enum.auto()
    LESS = enum.auto()
    GREATER = enum.auto()
    LESS_EQUAL = enum.auto()
    GREATER_EQUAL = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    # punctuation
    COMMA = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    BRACE_OPEN = enum.auto()
    BRACE_CLOSE = enum.auto()
    EOF = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


EOF_LEXEME = "end of input"

KEYWORDS = {
    "while": TokenType.WHILE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "print": TokenType.PRINT,
}

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    ",": TokenType.COMMA,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    "{": TokenType.BRACE_OPEN,
    "}": TokenType.BRACE_CLOSE,
}

# first char -> (second char, two-char token, one-char token or None if the first char is not a token by itself)
TWO_CHAR_TOKENS: dict[str, tuple[str, TokenType, TokenType | None]] = {
    "=": ("=", TokenType.EQUAL, TokenType.ASSIGN),
    "!": ("=", TokenType.NOT_EQUAL, None),
    "<": ("=", TokenType.LESS_EQUAL, TokenType.LESS),
    ">": ("=", TokenType.GREATER_EQUAL, TokenType.GREATER),
    "&": ("&", TokenType.AND, None),
    "|": ("|", TokenType.OR, None),
}


def _is_letter(s: str) -> bool:
    return s.isascii() and s.isalpha()


def _is_digit(s: str) -> bool:
    return s.isascii() and s.isdigit()


class Lexer:
    """Produces tokens one at a time from the source text, a single cursor walks over it"""

    def __init__(self, code: str) -> None:
        self.code = re.sub(r"[\t\r\n]", " ", code)
        self.pos = 0

    def _peek_char(self) -> str | None:
        nxt = self.pos + 1
        return self.code[nxt] if nxt < len(self.code) else None

    def _read_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        while self.pos < len(self.code) and predicate(self.code[self.pos]):
            self.pos += 1
        return self.code[start : self.pos]

    def next_token(self) -> Token:
        while self.pos < len(self.code) and self.code[self.pos] == " ":
            self.pos += 1

        if self.pos >= len(self.code):
            return Token(type=TokenType.EOF, lexeme=EOF_LEXEME)

        char = self.code[self.pos]
        if _is_letter(char):
            word = self._read_while(_is_letter)
            token = Token(type=KEYWORDS.get(word, TokenType.IDENTIFIER), lexeme=word)
        elif _is_digit(char):
            token = Token(type=TokenType.INTEGER, lexeme=self._read_while(_is_digit))
        elif char in SINGLE_CHAR_TOKENS:
            token = Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char)
            self.pos += 1
        elif char in TWO_CHAR_TOKENS:
            second, two_char_type, one_char_type = TWO_CHAR_TOKENS[char]
            if self._peek_char() == second:
                token = Token(type=two_char_type, lexeme=char + second)
                self.pos += 2
            elif one_char_type is not None:
                token = Token(type=one_char_type, lexeme=char)
                self.pos += 1
            else:
                raise LexerError(f"Invalid character found: {char!r}", code=self.code, error_char_idx=self.pos)
        else:
            raise LexerError(f"Invalid character found: {char!r}", code=self.code, error_char_idx=self.pos)

        logger.debug("Token %s", token)
        return token


def tokenize(code: str) -> list[Token]:
    lexer = Lexer(code)
    tokens: list[Token] = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.type is TokenType.EOF:
            return tokens
