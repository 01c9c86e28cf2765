"""Tests for the ExprLang lexer."""
import pytest
from exprlang.lexer import Lexer, LexerError, LexerErrors, LexErrorKind, tokenize
from exprlang.tokens import Token, TokenType


def lex(source: str) -> list:
    return Lexer(source).scan()


def token_types(source: str) -> list[TokenType]:
    return [t.type for t in lex(source)]


class TestLiterals:
    def test_integer(self):
        toks = lex("42")
        assert toks[0].type == TokenType.NUMBER
        assert toks[0].value == 42.0
        assert isinstance(toks[0].value, float)

    def test_float(self):
        toks = lex("3.14")
        assert toks[0].type == TokenType.NUMBER
        assert toks[0].value == 3.14
        assert toks[0].span == "3.14"

    def test_minus_is_separate_token(self):
        assert token_types("-7") == [TokenType.MINUS, TokenType.NUMBER]

    def test_trailing_dot_is_not_part_of_number(self):
        toks = lex("1.")
        assert toks[0].type == TokenType.NUMBER
        assert toks[0].span == "1"
        assert isinstance(toks[1], LexerError)
        assert toks[1].char == "."

    def test_number_then_identifier(self):
        toks = lex("12abc")
        assert toks[0].value == 12.0
        assert toks[1].type == TokenType.IDENTIFIER
        assert toks[1].value == "abc"


class TestIdentifiers:
    def test_identifier(self):
        toks = lex("foo_bar9")
        assert toks[0].type == TokenType.IDENTIFIER
        assert toks[0].value == "foo_bar9"

    def test_leading_underscore(self):
        assert lex("_x")[0].type == TokenType.IDENTIFIER

    def test_unicode_letters(self):
        toks = lex("café")
        assert toks[0].type == TokenType.IDENTIFIER
        assert toks[0].value == "café"

    def test_keywords(self):
        for kw, expected in [
            ("if", TokenType.IF), ("else", TokenType.ELSE),
            ("true", TokenType.TRUE), ("false", TokenType.FALSE),
        ]:
            toks = lex(kw)
            assert toks[0].type == expected, f"Expected {expected} for '{kw}'"
            assert toks[0].value is None

    def test_keyword_match_is_exact(self):
        assert lex("iffy")[0].type == TokenType.IDENTIFIER
        assert lex("If")[0].type == TokenType.IDENTIFIER
        assert lex("true_")[0].type == TokenType.IDENTIFIER


class TestOperators:
    def test_punctuation(self):
        assert token_types("(){},;$") == [
            TokenType.LPAREN, TokenType.RPAREN, TokenType.LBRACE, TokenType.RBRACE,
            TokenType.COMMA, TokenType.SEMICOLON, TokenType.DOLLAR,
        ]

    def test_single_operators(self):
        assert token_types("+ - * / ! = < >") == [
            TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH,
            TokenType.BANG, TokenType.EQUAL, TokenType.LESS, TokenType.GREATER,
        ]

    def test_compound_operators(self):
        assert token_types("+= -= *= /= != == <= >=") == [
            TokenType.PLUS_EQUAL, TokenType.MINUS_EQUAL, TokenType.STAR_EQUAL,
            TokenType.SLASH_EQUAL, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL,
            TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
        ]

    def test_compound_needs_adjacent_equals(self):
        assert token_types("+ =") == [TokenType.PLUS, TokenType.EQUAL]

    def test_triple_equals(self):
        assert token_types("===") == [TokenType.EQUAL_EQUAL, TokenType.EQUAL]

    def test_operator_at_end_of_input(self):
        assert token_types("1 <") == [TokenType.NUMBER, TokenType.LESS]


class TestPositions:
    def test_first_token(self):
        tok = lex("x")[0]
        assert (tok.line, tok.column) == (1, 1)

    def test_columns_advance(self):
        toks = lex("ab + 10")
        assert [t.column for t in toks] == [1, 4, 6]

    def test_newline_resets_column(self):
        toks = lex("a\n  b")
        assert (toks[1].line, toks[1].column) == (2, 3)

    def test_tab_is_flat_four(self):
        assert lex("\tx")[0].column == 5
        # Not aligned to the next tab stop
        assert lex(" \tx")[0].column == 6
        assert lex("ab\tx")[1].column == 7

    def test_tab_size_is_configurable(self):
        assert Lexer("\tx", tab_size=8).scan()[0].column == 9

    def test_carriage_return_does_not_advance(self):
        toks = lex("a\r\nb")
        assert (toks[1].line, toks[1].column) == (2, 1)
        assert lex("\rx")[0].column == 1

    def test_compound_token_position(self):
        toks = lex("$x  += 1")
        assert toks[2].type == TokenType.PLUS_EQUAL
        assert toks[2].column == 5
        assert toks[2].span == "+="


class TestSpans:
    SOURCE = "{ $total = f(1.5, x);\n\t$total /= 2 }"

    def test_span_matches_offsets(self):
        for tok in lex(self.SOURCE):
            assert tok.span == self.SOURCE[tok.start:tok.end]
            assert tok.span

    def test_tokens_and_whitespace_cover_input(self):
        pos = 0
        for tok in lex(self.SOURCE):
            gap = self.SOURCE[pos:tok.start]
            assert gap.strip(" \t\r\n") == ""
            pos = tok.end
        assert self.SOURCE[pos:].strip(" \t\r\n") == ""

    def test_deterministic(self):
        first = [(t.type, t.value, t.line, t.column, t.start, t.end) for t in lex(self.SOURCE)]
        second = [(t.type, t.value, t.line, t.column, t.start, t.end) for t in lex(self.SOURCE)]
        assert first == second

    def test_equality_ignores_position(self):
        a = lex("  x")[0]
        b = lex("x")[0]
        assert a == b
        assert a == Token(TokenType.IDENTIFIER, "x")
        assert a != Token(TokenType.IDENTIFIER, "y")


class TestErrors:
    def test_unexpected_character(self):
        results = lex("#")
        assert len(results) == 1
        err = results[0]
        assert isinstance(err, LexerError)
        assert err.kind == LexErrorKind.UNEXPECTED_CHARACTER
        assert err.char == "#"
        assert (err.line, err.column) == (1, 1)

    def test_scanning_continues_after_error(self):
        results = lex("1 # 2 @")
        assert isinstance(results[0], Token)
        assert isinstance(results[1], LexerError)
        assert isinstance(results[2], Token)
        assert isinstance(results[3], LexerError)
        assert [r.column for r in results] == [1, 3, 5, 7]

    def test_error_message(self):
        err = lex("\n  ?")[0]
        assert str(err) == "[ExprLang L2:C3] Lexer error: Unexpected character: '?'"

    def test_string_quotes_are_not_scanned(self):
        results = lex('"hi"')
        assert isinstance(results[0], LexerError)
        assert results[1].value == "hi"

    def test_trailing_whitespace_is_not_an_error(self):
        assert token_types("1 \n\t ") == [TokenType.NUMBER]

    def test_empty_and_blank_input(self):
        assert lex("") == []
        assert lex(" \t\r\n") == []


class TestTokenize:
    def test_returns_tokens(self):
        toks = tokenize("$a + 1")
        assert [t.type for t in toks] == [TokenType.DOLLAR, TokenType.IDENTIFIER, TokenType.PLUS, TokenType.NUMBER]

    def test_collects_every_error(self):
        with pytest.raises(LexerErrors) as info:
            tokenize("a & b | c")
        assert [e.char for e in info.value.errors] == ["&", "|"]
        assert "L1:C3" in str(info.value)
