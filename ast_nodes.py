"""Syntax tree definitions for the PyCLite front end.

The parser builds a concrete syntax tree out of a single generic node type.
Every `ASTNode` records its kind (`NodeType`), the token that introduced it and
an ordered list of children it owns exclusively. Child order carries meaning:
an `IF` node's children are always `[condition, body]`, a binary `EXPRESSION`
node's are `[left, right]` with the operator in its token, and so on.

Conventions:
- A tree is acyclic and every node except the root has exactly one parent.
- `add_child` ignores a missing parent or child, and `release` accepts `None`,
    so failure paths in the parser can hand over whatever they managed to
    build without checking it first.
- `release` detaches a whole subtree, leaving nothing reachable from it. The
    `building` context manager applies it to a node whose children are
    attached incrementally when the production building it fails.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional
from tokens import Token


class NodeType(Enum):
    PROGRAM = auto()
    INSTRUCTION_LIST = auto()
    DECLARATION = auto()
    ASSIGNMENT = auto()
    IF = auto()
    FOR = auto()
    WHILE = auto()
    FUNCTION = auto()
    CALL = auto()
    RETURN = auto()
    EXPRESSION = auto()
    LITERAL = auto()
    IDENTIFIER = auto()
    ARRAY_LITERAL = auto()
    PARAM_LIST = auto()
    ARG_LIST = auto()
    COMMENT = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class ASTNode:
    type: NodeType
    token: Token
    children: List[ASTNode] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"ASTNode({self.type}, {self.token.lexeme!r}, children={len(self.children)})"

    @property
    def lexeme(self) -> str:
        return self.token.lexeme

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    def add_child(self, child: Optional[ASTNode]) -> ASTNode:
        """Append `child` (if any) and return self."""
        add_child(self, child)
        return self


def add_child(parent: Optional[ASTNode], child: Optional[ASTNode]) -> None:
    """Append `child` to `parent`'s children; a no-op if either is None."""
    if parent is None or child is None:
        return
    parent.children.append(child)


def release(node: Optional[ASTNode]) -> None:
    """Recursively release `node`'s children, then detach them from it."""
    if node is None:
        return
    for child in node.children:
        release(child)
    node.children.clear()


@contextmanager
def building(node: ASTNode) -> Iterator[ASTNode]:
    """Yield `node`; release it if the body raises, then re-raise."""
    try:
        yield node
    except BaseException:
        release(node)
        raise


def iter_nodes(node: Optional[ASTNode]) -> Iterator[ASTNode]:
    """Yield `node` and all of its descendants in pre-order."""
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def count_nodes(node: Optional[ASTNode]) -> int:
    """Number of nodes reachable from `node` (0 for None)."""
    return sum(1 for _ in iter_nodes(node))
