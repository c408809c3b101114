"""Command-line driver for the PyCLite front end.

Usage:
    python main.py program.pycl [--print-tokens] [--print-ast]
                               [--dump-json PATH] [--viz-tree PATH]

The driver reads one source file, parses it and reports either success or the
first syntax error with its line and column. It exits with 0 on a clean parse
and 1 otherwise (missing argument, unreadable file or syntax error).
"""

from __future__ import annotations
import argparse
import json
import sys
from typing import List, Optional
from lexer import Lexer
from tokens import Token
from ast_nodes import ASTNode
from parser import Parser, ParseError
from pretty_printer import PrettyPrinter
from ast_json import ast_to_json, token_to_json
from tree_viz import write_and_render


def lex(text: str, keep_comments: bool = False) -> List[Token]:
    """Tokenize input string."""
    return Lexer(text, keep_comments=keep_comments).tokenize()


def parse_text(text: str) -> ASTNode:
    """Parse source text into a tree, raising ParseError on the first syntax error."""
    parser = Parser(text)
    program = parser.parse()
    if program is None:
        raise parser.parse_error
    return program


def process_program(
    text: str,
    *,
    print_tokens: bool = False,
    print_ast: bool = False,
    dump_json_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> int:
    """Parse a single program, optionally printing stages. Returns an exit code."""
    if print_tokens:
        tokens = lex(text)
        print(f"Tokens ({len(tokens)}):")
        for i, token in enumerate(tokens):
            print(f"  {i:3}: {token}")

    try:
        program = parse_text(text)
    except ParseError as e:
        print(
            f"Parse error at line {e.token.line}, column {e.token.column}: {e.message}",
            file=sys.stderr,
        )
        return 1

    if print_ast:
        print("\nAST:")
        print(PrettyPrinter.print_ast(program))

    if dump_json_path:
        export = {
            "tokens": [token_to_json(t) for t in lex(text)],
            "ast": ast_to_json(program),
        }
        try:
            with open(dump_json_path, "w", encoding="utf-8") as fh:
                json.dump(export, fh, indent=2)
            print(f"Wrote AST JSON to {dump_json_path}")
        except OSError as e:
            print(f"Failed to write AST JSON to {dump_json_path}: {e}", file=sys.stderr)

    if viz_path:
        try:
            write_and_render(program, viz_path, fmt=viz_format)
            print(f"Wrote tree visualization to {viz_path}.{viz_format}")
        except Exception as e:
            print(f"Failed to render tree visualization to {viz_path}: {e}", file=sys.stderr)

    print("Parse completed successfully.")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyclite",
        description="Check the syntax of a PyCLite source file",
    )
    parser.add_argument("file", nargs="?", help="Path to the .pycl file to parse")
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-ast", dest="print_ast", action="store_true", help="Print the syntax tree"
    )
    parser.add_argument(
        "--dump-json", dest="dump_json", help="Path to write tokens + tree as JSON"
    )
    parser.add_argument(
        "--viz-tree",
        dest="viz_tree",
        help="Path (without extension) to write a Graphviz rendering of the tree",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if args.file is None:
        print(f"Usage: {arg_parser.prog} <file.pycl>", file=sys.stderr)
        return 1

    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError):
        print(f"Could not read file: {args.file}", file=sys.stderr)
        return 1

    return process_program(
        text,
        print_tokens=args.print_tokens,
        print_ast=args.print_ast,
        dump_json_path=args.dump_json,
        viz_path=args.viz_tree,
        viz_format=args.viz_format,
    )


if __name__ == "__main__":
    sys.exit(main())
