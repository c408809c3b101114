"""
Lexer for the PyCLite scripting language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    pulls `Token` objects (defined in `tokens.py`) out of a source string one
    at a time. The parser drives it through `get_next_token()`; `tokenize()`
    collects the whole stream for tooling and tests.
- It recognizes keywords (e.g. `int`, `array`, `func`, `csay`), identifiers,
    numbers with an optional fractional part, string and char literals,
    single- and two-character operators and punctuation.
- Whitespace and four comment forms are skipped: `// ...` and `$ ...` run to
    the end of the line, `/* ... */` and `%% ... %%` run to the first closing
    delimiter (or to end of input when unterminated).

Examples:
    Input:  "int x = 5;"
    Tokens: [INT_TYPE, IDENTIFIER('x'), ASSIGN, NUMBER('5'), SEMICOLON, EOF]

Implementation notes:
- The lexer never fails. A character it does not recognize becomes a
    one-character `UNKNOWN` token and the parser decides whether that is an
    error.
- Two-character operators are checked before their one-character prefixes
    (maximal munch), so `+++` is `INCREMENT` followed by `PLUS`.
- A number stops at its second `.`: `1.2.3` is `NUMBER('1.2')`, `DOT`,
    `NUMBER('3')`.
- String and char literals keep their delimiters and escapes verbatim; a
    backslash only protects the following character from ending the literal.
"""

from __future__ import annotations
from typing import Optional, List
from tokens import Token, TokenType, KEYWORDS


WHITESPACE = " \t\r\n"

# Two-character operators, keyed by their first character.
DOUBLE_CHAR_TOKENS = {
    "+": ("+", TokenType.INCREMENT),
    "-": ("-", TokenType.DECREMENT),
    "=": ("=", TokenType.EQ),
    "!": ("=", TokenType.NEQ),
    "<": ("=", TokenType.LTE),
    ">": ("=", TokenType.GTE),
    "&": ("&", TokenType.AND),
    "|": ("|", TokenType.OR),
}

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.MOD,
    "=": TokenType.ASSIGN,
    "!": TokenType.NOT,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ".": TokenType.DOT,
}


def is_digit(char: Optional[str]) -> bool:
    return char is not None and "0" <= char <= "9"


def is_identifier_start(char: Optional[str]) -> bool:
    return char is not None and (
        "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"
    )


def is_identifier_part(char: Optional[str]) -> bool:
    return is_identifier_start(char) or is_digit(char)


class Lexer:
    def __init__(self, text: str, keep_comments: bool = False):
        self.text = text
        self.length = len(text)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None
        # When set, comments come back as COMMENT tokens instead of being skipped.
        self.keep_comments = keep_comments

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char is None:
            return

        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos < self.length:
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self) -> Optional[str]:
        """Look at next character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < self.length:
            return self.text[next_pos]
        return None

    def make_token(self, token_type: TokenType, start: int) -> Token:
        """Build a token for `text[start:pos]`.

        The lexer sits one column past the last character of the lexeme, so
        the start column is recovered by stepping back over its length. That
        is exact for tokens on a single line only.
        """
        lexeme = self.text[start : self.pos]
        column = max(1, self.column - len(lexeme))
        return Token(token_type, lexeme, self.line, column, start)

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs, carriage returns and newlines."""
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def at_comment(self) -> bool:
        """Return True when a comment starts at the current position."""
        char = self.current_char
        next_char = self.peek_char()
        if char == "$":
            return True
        if char == "/" and next_char in ("/", "*"):
            return True
        return char == "%" and next_char == "%"

    def skip_comment(self) -> None:
        """Consume one comment starting at the current position."""
        char = self.current_char
        next_char = self.peek_char()

        if char == "$" or (char == "/" and next_char == "/"):
            while self.current_char is not None and self.current_char != "\n":
                self.advance()
            return

        # Block comments: `/* ... */` or `%% ... %%`. The closing delimiter is
        # the first one found; an unterminated comment runs to end of input.
        closing = "*/" if next_char == "*" else "%%"
        self.advance()
        self.advance()
        while self.current_char is not None:
            if self.current_char == closing[0] and self.peek_char() == closing[1]:
                self.advance()
                self.advance()
                return
            self.advance()

    def number(self, start: int) -> Token:
        """Scan digits with at most one decimal point."""
        has_dot = False
        while is_digit(self.current_char) or self.current_char == ".":
            if self.current_char == ".":
                if has_dot:
                    break
                has_dot = True
            self.advance()
        return self.make_token(TokenType.NUMBER, start)

    def identifier(self, start: int) -> Token:
        """Scan an identifier and map it to a keyword token if it is one."""
        while is_identifier_part(self.current_char):
            self.advance()
        ident = self.text[start : self.pos]
        return self.make_token(KEYWORDS.get(ident, TokenType.IDENTIFIER), start)

    def string(self, start: int, quote: str) -> Token:
        """Scan a string or char literal; the opening quote is already consumed."""
        while self.current_char is not None:
            if self.current_char == quote:
                self.advance()
                break
            if self.current_char == "\\" and self.peek_char() is not None:
                self.advance()
            self.advance()
        token_type = TokenType.STRING if quote == '"' else TokenType.CHAR
        return self.make_token(token_type, start)

    def get_next_token(self) -> Token:
        """Lexical analyzer that returns tokens one at a time."""
        # Skip whitespace and comments until neither is found.
        while True:
            self.skip_whitespace()
            if not self.at_comment():
                break
            start = self.pos
            self.skip_comment()
            if self.keep_comments:
                return self.make_token(TokenType.COMMENT, start)

        start = self.pos
        char = self.current_char
        if char is None:
            return Token(TokenType.EOF, "", self.line, self.column, start)

        if is_identifier_start(char):
            return self.identifier(start)

        if is_digit(char):
            return self.number(start)

        self.advance()

        if char == '"' or char == "'":
            return self.string(start, char)

        # Handle two-character operators first so `==` is not lexed as `=` `=`.
        if char in DOUBLE_CHAR_TOKENS:
            second, token_type = DOUBLE_CHAR_TOKENS[char]
            if self.current_char == second:
                self.advance()
                return self.make_token(token_type, start)

        if char in SINGLE_CHAR_TOKENS:
            return self.make_token(SINGLE_CHAR_TOKENS[char], start)

        # Lone `&`, `|` and anything else unrecognized.
        return self.make_token(TokenType.UNKNOWN, start)

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string, ending with EOF."""
        tokens = []
        while True:
            token = self.get_next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens
