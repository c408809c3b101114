"""Token definitions for the lexer.

This module defines the `TokenType` enum for all token kinds recognized by
the PyCLite lexer and a small `Token` dataclass that records the token kind,
the exact lexeme it was scanned from and where it starts in the source.
Tokens are the atomic units produced by the lexer and consumed by the parser.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    # Special
    EOF = auto()

    # Literals
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    CHAR = auto()
    TRUE = auto()
    FALSE = auto()

    # Keywords
    INT_TYPE = auto()
    FLOAT_TYPE = auto()
    CHAR_TYPE = auto()
    BOOL_TYPE = auto()
    ARRAY_TYPE = auto()
    IF = auto()
    FOR = auto()
    IN = auto()
    WHILE = auto()
    FUNC = auto()
    RETURN = auto()
    CSAY = auto()
    CREAD = auto()

    # Arithmetic operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    MOD = auto()

    # Assignment and comparison operators
    ASSIGN = auto()
    EQ = auto()
    NEQ = auto()
    LT = auto()
    LTE = auto()
    GT = auto()
    GTE = auto()

    # Logical operators
    AND = auto()
    OR = auto()
    NOT = auto()

    # Increment / decrement
    INCREMENT = auto()
    DECREMENT = auto()

    # Parentheses and brackets
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()

    # Punctuation
    COMMA = auto()
    SEMICOLON = auto()
    DOT = auto()

    # Only produced when the lexer is asked to keep comments
    COMMENT = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name


KEYWORDS = {
    "array": TokenType.ARRAY_TYPE,
    "bool": TokenType.BOOL_TYPE,
    "char": TokenType.CHAR_TYPE,
    "cread": TokenType.CREAD,
    "csay": TokenType.CSAY,
    "false": TokenType.FALSE,
    "float": TokenType.FLOAT_TYPE,
    "for": TokenType.FOR,
    "func": TokenType.FUNC,
    "if": TokenType.IF,
    "in": TokenType.IN,
    "int": TokenType.INT_TYPE,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "while": TokenType.WHILE,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str = ""
    line: int = 1
    column: int = 1
    offset: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def end(self) -> int:
        """Offset one past the last character of the lexeme."""
        return self.offset + len(self.lexeme)
