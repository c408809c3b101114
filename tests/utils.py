from lexer import Lexer
from parser import Parser


def lex(text: str, keep_comments: bool = False):
    """Return a list of tokens for the given source text."""
    return Lexer(text, keep_comments=keep_comments).tokenize()


def token_types(text: str):
    """Token kinds for `text`, EOF included."""
    return [t.type for t in lex(text)]


def parse_text(text: str):
    """Parse `text`, returning the tree or None."""
    return Parser(text).parse()


def parse_failure(text: str):
    """Parse `text` that is expected to fail; return the parser for inspection."""
    parser = Parser(text)
    assert parser.parse() is None
    assert parser.had_error
    return parser


def instructions(program):
    """Top-level instructions of a parsed program."""
    return program.children[0].children


def shape(node):
    """Nested (kind, lexeme, children) tuples for compact tree assertions."""
    return (node.type.name, node.lexeme, [shape(c) for c in node.children])