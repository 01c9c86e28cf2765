# ExprLang front-end
# Source text in, expression tree out.
__version__ = "0.1.0"

from .tokens import Token, TokenType
from .lexer import Lexer, LexerError, LexerErrors, LexErrorKind, scan, tokenize
from .parser import Parser, ParseError, ParseErrorKind, parse
from .ast_nodes import Block, Expression


def parse_source(source: str) -> Block:
    """Scan and parse source, raising LexerErrors or ParseError on bad input."""
    return parse(tokenize(source))
