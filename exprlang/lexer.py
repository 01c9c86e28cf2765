"""Lexer for ExprLang: scans source into a stream of Tokens and errors."""
from __future__ import annotations
import logging
from enum import Enum, auto

from .tokens import Token, TokenType, KEYWORDS, COMPOUND_OPERATORS, PUNCTUATION

logger = logging.getLogger(__name__)

TAB_SIZE = 4
WHITESPACE = (" ", "\t", "\r", "\n")


class LexErrorKind(Enum):
    UNEXPECTED_EOF = auto()
    UNTERMINATED_STRING = auto()  # reserved: the grammar has no string literals
    UNEXPECTED_CHARACTER = auto()


_MESSAGES = {
    LexErrorKind.UNEXPECTED_EOF: "Unexpected end of input",
    LexErrorKind.UNTERMINATED_STRING: "Unterminated string literal",
    LexErrorKind.UNEXPECTED_CHARACTER: "Unexpected character",
}


class LexerError(Exception):
    def __init__(self, kind: LexErrorKind, line: int, column: int, char: str | None = None):
        message = _MESSAGES[kind]
        if char is not None:
            message = f"{message}: {char!r}"
        super().__init__(f"[ExprLang L{line}:C{column}] Lexer error: {message}")
        self.kind = kind
        self.char = char
        self.line = line
        self.column = column


class LexerErrors(Exception):
    """Raised by tokenize() when scanning produced one or more errors."""

    def __init__(self, errors: list[LexerError]):
        super().__init__("\n".join(str(e) for e in errors))
        self.errors = errors


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


class Lexer:
    def __init__(self, source: str, tab_size: int = TAB_SIZE):
        self.source = source
        self.tab_size = tab_size
        self.pos = 0
        self.line = 1
        self.column = 1
        # Position of the first character of the token being scanned
        self.start = 0
        self.start_line = 1
        self.start_column = 1

    def error(self, kind: LexErrorKind, char: str | None = None) -> LexerError:
        return LexerError(kind, self.start_line, self.start_column, char)

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        if self.pos >= len(self.source):
            return "\0"
        return self.source[self.pos]

    def advance(self) -> str:
        if self.at_end():
            raise self.error(LexErrorKind.UNEXPECTED_EOF)
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        elif ch == "\t":
            self.column += self.tab_size
        elif ch != "\r":
            self.column += 1
        return ch

    def skip_whitespace(self):
        while not self.at_end() and self.current in WHITESPACE:
            self.advance()

    def make_token(self, ttype: TokenType, value=None) -> Token:
        return Token(
            type=ttype,
            value=value,
            line=self.start_line,
            column=self.start_column,
            start=self.start,
            end=self.pos,
            source=self.source,
        )

    def read_number(self) -> Token:
        """Read digits with an optional fractional part."""
        while not self.at_end() and is_digit(self.current):
            self.advance()
        if self.current == "." and self.pos + 1 < len(self.source) and is_digit(self.source[self.pos + 1]):
            self.advance()
            while not self.at_end() and is_digit(self.current):
                self.advance()
        return self.make_token(TokenType.NUMBER, float(self.source[self.start:self.pos]))

    def read_identifier(self) -> Token:
        """Read an identifier/keyword."""
        while not self.at_end() and (is_ident_start(self.current) or is_digit(self.current)):
            self.advance()
        ident = self.source[self.start:self.pos]
        if ident in KEYWORDS:
            return self.make_token(KEYWORDS[ident])
        return self.make_token(TokenType.IDENTIFIER, ident)

    def scan_token(self) -> Token:
        """Scan one token starting at the current position.

        Raises LexerError for input no rule accepts; the offending
        character has already been consumed by then.
        """
        self.start = self.pos
        self.start_line, self.start_column = self.line, self.column

        ch = self.advance()

        if ch in PUNCTUATION:
            return self.make_token(PUNCTUATION[ch])

        if ch in COMPOUND_OPERATORS:
            single, double = COMPOUND_OPERATORS[ch]
            if not self.at_end() and self.current == "=":
                self.advance()
                return self.make_token(double)
            return self.make_token(single)

        if is_digit(ch):
            return self.read_number()

        if is_ident_start(ch):
            return self.read_identifier()

        raise self.error(LexErrorKind.UNEXPECTED_CHARACTER, ch)

    def scan(self) -> list[Token | LexerError]:
        """Scan the entire source, collecting tokens and errors in order."""
        results: list[Token | LexerError] = []

        while True:
            self.skip_whitespace()
            if self.at_end():
                break
            try:
                results.append(self.scan_token())
            except LexerError as e:
                results.append(e)

        logger.debug("scanned %d item(s) from %d character(s)", len(results), len(self.source))
        return results


def scan(source: str, tab_size: int = TAB_SIZE) -> list[Token | LexerError]:
    return Lexer(source, tab_size).scan()


def tokenize(source: str, tab_size: int = TAB_SIZE) -> list[Token]:
    """Scan source and return its tokens, raising LexerErrors if any were invalid."""
    tokens: list[Token] = []
    errors: list[LexerError] = []
    for item in scan(source, tab_size):
        if isinstance(item, LexerError):
            errors.append(item)
        else:
            tokens.append(item)
    if errors:
        raise LexerErrors(errors)
    return tokens
