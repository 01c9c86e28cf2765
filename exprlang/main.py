"""CLI entry point for the ExprLang front-end."""
from __future__ import annotations
import sys
import json
import logging
import argparse
import traceback

from .lexer import TAB_SIZE, LexerError, scan
from .parser import MAX_DEPTH, ParseError, Parser
from .ast_nodes import ast_to_dict, format_tree

logger = logging.getLogger(__name__)

EXAMPLE_PROGRAM = "5 + 5 * 10 / $a > a($b = if (true) 13 else { $c = 10; $c })"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprlang",
        description="Scan and parse an ExprLang program, then print its syntax tree.",
    )
    parser.add_argument("file", nargs="?", help="Source file to parse")
    parser.add_argument("-e", "--expr", type=str, default=None, help="Parse SOURCE given on the command line")
    parser.add_argument("--tokens", action="store_true", help="Print the token stream instead of the tree")
    parser.add_argument("--json", action="store_true", help="Print the tree as JSON")
    parser.add_argument("--tab-size", type=int, default=TAB_SIZE, help="Columns a tab advances (default: %(default)s)")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH,
                        help="Deepest expression nesting accepted (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    return parser


def read_source(args: argparse.Namespace) -> str:
    if args.expr is not None:
        return args.expr
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    return EXAMPLE_PROGRAM


def run(source: str, args: argparse.Namespace) -> int:
    """Scan and parse one program, printing the outcome. Returns the exit status."""
    tokens = []
    errors: list[LexerError] = []
    for item in scan(source, args.tab_size):
        if isinstance(item, LexerError):
            errors.append(item)
        else:
            tokens.append(item)

    if errors:
        for e in errors:
            print(e)
        print(f"[ExprLang] {len(errors)} lexical error(s), nothing parsed.")
        return 1

    if args.tokens:
        for tok in tokens:
            print(tok)
        return 0

    logger.debug("parsing %d token(s)", len(tokens))
    try:
        tree = Parser(tokens, args.max_depth).parse()
    except ParseError as e:
        print(e)
        return 1

    if args.json:
        print(json.dumps(ast_to_dict(tree), indent=2))
    else:
        print(format_tree(tree))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        source = read_source(args)
    except OSError as e:
        print(f"[ExprLang] Cannot read {args.file}: {e.strerror}")
        return 1

    try:
        return run(source, args)
    except Exception as e:
        print(f"\n[ExprLang] Internal Error: {e}")
        traceback.print_exc()
        return 2


if __name__ == "__main__":
    sys.exit(main())
