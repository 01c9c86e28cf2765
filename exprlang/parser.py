"""Recursive descent parser for ExprLang."""
from __future__ import annotations
import logging
from enum import Enum, auto
from typing import Optional

from .tokens import Token, TokenType
from .ast_nodes import *

logger = logging.getLogger(__name__)

MAX_DEPTH = 100


class ParseErrorKind(Enum):
    UNEXPECTED_EOF = auto()
    UNEXPECTED_TOKEN = auto()
    NESTING_TOO_DEEP = auto()


class ParseError(Exception):
    def __init__(
        self,
        kind: ParseErrorKind,
        line: int,
        column: int,
        token: Optional[Token] = None,
        expected: frozenset[TokenType] = frozenset(),
    ):
        super().__init__(f"[ExprLang L{line}:C{column}] Parse error: {_describe(kind, token, expected)}")
        self.kind = kind
        self.line = line
        self.column = column
        self.token = token
        self.expected = expected


def _describe(kind: ParseErrorKind, token: Optional[Token], expected: frozenset[TokenType]) -> str:
    if kind == ParseErrorKind.NESTING_TOO_DEEP:
        return "Expression nested too deeply"
    names = ", ".join(sorted(t.name for t in expected))
    if kind == ParseErrorKind.UNEXPECTED_EOF:
        return f"Unexpected end of input, expected one of: {names}"
    return f"Unexpected token {token.type.name} ({token.span!r}), expected one of: {names}"


# Tokens that can begin a primary expression
PRIMARY_START = frozenset({
    TokenType.NUMBER, TokenType.TRUE, TokenType.FALSE,
    TokenType.MINUS, TokenType.BANG,
    TokenType.IDENTIFIER, TokenType.DOLLAR,
    TokenType.LBRACE, TokenType.LPAREN, TokenType.IF,
})

EQUALITY_OPS = {
    TokenType.EQUAL_EQUAL: CmpOp.EQUAL,
    TokenType.BANG_EQUAL: CmpOp.NOT_EQUAL,
}

RELATIONAL_OPS = {
    TokenType.GREATER: CmpOp.GREATER,
    TokenType.GREATER_EQUAL: CmpOp.GREATER_EQUAL,
    TokenType.LESS: CmpOp.LESS,
    TokenType.LESS_EQUAL: CmpOp.LESS_EQUAL,
}

MULTIPLICATIVE_OPS = {
    TokenType.STAR: MathOp.MUL,
    TokenType.SLASH: MathOp.DIV,
}

ADDITIVE_OPS = {
    TokenType.PLUS: MathOp.ADD,
    TokenType.MINUS: MathOp.SUB,
}

ASSIGN_OPS = {
    TokenType.PLUS_EQUAL: MathOp.ADD,
    TokenType.MINUS_EQUAL: MathOp.SUB,
    TokenType.STAR_EQUAL: MathOp.MUL,
    TokenType.SLASH_EQUAL: MathOp.DIV,
}

# What may follow a complete top-level block
BLOCK_CONTINUATION = frozenset(
    {TokenType.SEMICOLON}
    | set(EQUALITY_OPS) | set(RELATIONAL_OPS)
    | set(MULTIPLICATIVE_OPS) | set(ADDITIVE_OPS)
)


class Parser:
    def __init__(self, tokens: list[Token], max_depth: int = MAX_DEPTH):
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth
        self.depth = 0

    # ================================================
    # Utilities
    # ================================================

    @property
    def current(self) -> Optional[Token]:
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    def check(self, *types: TokenType) -> bool:
        tok = self.current
        return tok is not None and tok.type in types

    def advance(self, expected=PRIMARY_START) -> Token:
        tok = self.current
        if tok is None:
            raise self.eof_error(expected)
        self.pos += 1
        return tok

    def expect(self, ttype: TokenType) -> Token:
        tok = self.advance({ttype})
        if tok.type != ttype:
            raise self.unexpected(tok, {ttype})
        return tok

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.check(*types):
            return self.advance()
        return None

    def eof_error(self, expected) -> ParseError:
        # Positioned just past the last token; spans never contain newlines
        if self.tokens:
            last = self.tokens[-1]
            line, col = last.line, last.column + (last.end - last.start)
        else:
            line, col = 1, 1
        return ParseError(ParseErrorKind.UNEXPECTED_EOF, line, col, expected=frozenset(expected))

    def unexpected(self, tok: Token, expected) -> ParseError:
        return ParseError(ParseErrorKind.UNEXPECTED_TOKEN, tok.line, tok.column, tok, frozenset(expected))

    # ================================================
    # Top-level
    # ================================================

    def parse(self) -> Block:
        """Parse the entire program as one implicit block."""
        program = self.parse_block_body()
        if self.current is not None:
            raise self.unexpected(self.current, BLOCK_CONTINUATION)
        logger.debug("parsed %d token(s)", len(self.tokens))
        return program

    def parse_block_body(self) -> Block:
        """Parse `expr; expr; ... ret`, always at least one expression."""
        tok = self.current
        line, col = (tok.line, tok.column) if tok else (0, 0)
        exprs: list[Expression] = []
        while True:
            expr = self.parse_expression()
            if self.match(TokenType.SEMICOLON):
                exprs.append(expr)
            else:
                return Block(line=line, column=col, exprs=exprs, ret=expr)

    # ================================================
    # Expressions — Precedence Climbing
    # ================================================

    def parse_expression(self) -> Expression:
        """Parse a full expression (lowest precedence)."""
        return self.parse_equality()

    def parse_equality(self) -> Expression:
        """Parse == and !=."""
        left = self.parse_relational()

        while self.check(*EQUALITY_OPS):
            op = EQUALITY_OPS[self.advance().type]
            right = self.parse_relational()
            left = CompareOp(line=left.line, column=left.column, op=op, left=left, right=right)

        return left

    def parse_relational(self) -> Expression:
        """Parse > >= < <=."""
        left = self.parse_addition()

        while self.check(*RELATIONAL_OPS):
            op = RELATIONAL_OPS[self.advance().type]
            right = self.parse_addition()
            left = CompareOp(line=left.line, column=left.column, op=op, left=left, right=right)

        return left

    def parse_addition(self) -> Expression:
        """Parse + and -."""
        left = self.parse_multiplication()

        while self.check(*ADDITIVE_OPS):
            op = ADDITIVE_OPS[self.advance().type]
            right = self.parse_multiplication()
            left = MathBinOp(line=left.line, column=left.column, op=op, left=left, right=right)

        return left

    def parse_multiplication(self) -> Expression:
        """Parse * and /."""
        left = self.parse_primary()

        while self.check(*MULTIPLICATIVE_OPS):
            op = MULTIPLICATIVE_OPS[self.advance().type]
            right = self.parse_primary()
            left = MathBinOp(line=left.line, column=left.column, op=op, left=left, right=right)

        return left

    def parse_primary(self) -> Expression:
        """Parse literals, unary operators, variables, calls, groups, blocks and if/else."""
        tok = self.advance()
        self.depth += 1
        if self.depth > self.max_depth:
            raise ParseError(ParseErrorKind.NESTING_TOO_DEEP, tok.line, tok.column, tok)
        try:
            return self._parse_primary(tok)
        finally:
            self.depth -= 1

    def _parse_primary(self, tok: Token) -> Expression:
        line, col = tok.line, tok.column

        if tok.type == TokenType.NUMBER:
            return NumberLiteral(line=line, column=col, value=tok.value)

        if tok.type == TokenType.TRUE:
            return BoolLiteral(line=line, column=col, value=True)
        if tok.type == TokenType.FALSE:
            return BoolLiteral(line=line, column=col, value=False)

        if tok.type == TokenType.MINUS:
            return Negate(line=line, column=col, operand=self.parse_primary())
        if tok.type == TokenType.BANG:
            return Not(line=line, column=col, operand=self.parse_primary())

        if tok.type == TokenType.IDENTIFIER:
            if self.match(TokenType.LPAREN):
                return Call(line=line, column=col, name=tok.value, args=self.parse_arguments())
            return Var(line=line, column=col, name=tok.value)

        if tok.type == TokenType.DOLLAR:
            return self.parse_user_var(tok)

        if tok.type == TokenType.LBRACE:
            block = self.parse_block_body()
            self.expect(TokenType.RBRACE)
            return Block(line=line, column=col, exprs=block.exprs, ret=block.ret)

        # Grouping only, no wrapper node
        if tok.type == TokenType.LPAREN:
            expr = self.parse_expression()
            self.expect(TokenType.RPAREN)
            return expr

        if tok.type == TokenType.IF:
            return self.parse_if(tok)

        raise self.unexpected(tok, PRIMARY_START)

    def parse_arguments(self) -> list[Expression]:
        """Parse `a, b, c)` after the opening paren of a call."""
        args: list[Expression] = []
        while not self.check(TokenType.RPAREN):
            args.append(self.parse_expression())
            if not self.check(TokenType.RPAREN):
                self.expect(TokenType.COMMA)
        self.expect(TokenType.RPAREN)
        return args

    def parse_user_var(self, dollar: Token) -> Expression:
        name = self.expect(TokenType.IDENTIFIER).value
        line, col = dollar.line, dollar.column

        if self.match(TokenType.EQUAL):
            return Assign(line=line, column=col, name=name, value=self.parse_expression())

        if self.check(*ASSIGN_OPS):
            op = ASSIGN_OPS[self.advance().type]
            return MathAssign(line=line, column=col, op=op, name=name, value=self.parse_expression())

        return UserVar(line=line, column=col, name=name)

    def parse_if(self, tok: Token) -> IfElse:
        self.expect(TokenType.LPAREN)
        cond = self.parse_expression()
        self.expect(TokenType.RPAREN)
        yes = self.parse_expression()
        self.expect(TokenType.ELSE)
        no = self.parse_expression()
        return IfElse(line=tok.line, column=tok.column, cond=cond, yes=yes, no=no)


def parse(tokens: list[Token], max_depth: int = MAX_DEPTH) -> Block:
    return Parser(tokens, max_depth).parse()
