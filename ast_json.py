"""Convert syntax tree nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure of
dicts/lists/primitives describing a tree: every node becomes its kind, the
token that introduced it and its children in order. `token_to_json` is the
same encoding for a single token and is reused by the driver's token dump.
"""

from typing import Any, Dict, Optional
from ast_nodes import ASTNode
from tokens import Token


def token_to_json(token: Token) -> Dict[str, Any]:
    return {
        "type": token.type.name,
        "lexeme": token.lexeme,
        "line": token.line,
        "column": token.column,
    }


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    return {
        "node_type": node.type.name,
        "token": token_to_json(node.token),
        "children": [ast_to_json(child) for child in node.children],
    }
