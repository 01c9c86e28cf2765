"""Token types for ExprLang."""
from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any


class TokenType(Enum):
    # === Delimiters ===
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()
    SEMICOLON = auto()
    DOLLAR = auto()           # $ (user variable sigil)

    # === Arithmetic ===
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()

    # === Compound assignment ===
    MINUS_EQUAL = auto()      # -=
    PLUS_EQUAL = auto()       # +=
    SLASH_EQUAL = auto()      # /=
    STAR_EQUAL = auto()       # *=

    # === Logic / comparison ===
    BANG = auto()             # !
    BANG_EQUAL = auto()       # !=
    EQUAL = auto()            # =
    EQUAL_EQUAL = auto()      # ==
    LESS = auto()
    LESS_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()

    # === Literals ===
    IDENTIFIER = auto()
    NUMBER = auto()

    # === Keywords ===
    ELSE = auto()
    FALSE = auto()
    IF = auto()
    TRUE = auto()


@dataclass
class Token:
    type: TokenType
    value: Any
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)
    # Offsets into the source buffer; span is sliced on demand
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)
    source: str = field(default="", compare=False, repr=False)

    @property
    def span(self) -> str:
        return self.source[self.start:self.end]

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:C{self.column})"


# Keywords mapping
KEYWORDS: dict[str, TokenType] = {
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "true": TokenType.TRUE,
}

# Single-character operators that turn into a compound token when followed by '='
COMPOUND_OPERATORS: dict[str, tuple[TokenType, TokenType]] = {
    "-": (TokenType.MINUS, TokenType.MINUS_EQUAL),
    "+": (TokenType.PLUS, TokenType.PLUS_EQUAL),
    "/": (TokenType.SLASH, TokenType.SLASH_EQUAL),
    "*": (TokenType.STAR, TokenType.STAR_EQUAL),
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "$": TokenType.DOLLAR,
}
