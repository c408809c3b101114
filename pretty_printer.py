"""Pretty-printer for the syntax tree.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders a tree
into a readable multi-line string, and `PrettyPrinter.print_surface(node)`
which renders a node back into compact, source-like text. The printer is
intended for debugging, tests and the driver's `--print-ast` flag rather
than for producing final source code.

Examples:
    PrettyPrinter.print_ast(program_node)
    PrettyPrinter.print_surface(expression_node)  # "(a + (b * 2))"
"""

from __future__ import annotations
from typing import Optional
from ast_nodes import ASTNode, NodeType
from tokens import TokenType

# Node kinds whose token text is worth showing next to the kind.
LABELLED_NODES = {
    NodeType.DECLARATION,
    NodeType.EXPRESSION,
    NodeType.LITERAL,
    NodeType.IDENTIFIER,
}

BUILTIN_CALLS = (TokenType.CSAY, TokenType.CREAD)


def is_statement_wrapper(node: ASTNode) -> bool:
    """True for the EXPRESSION node wrapping an expression statement."""
    return (
        node.type == NodeType.EXPRESSION
        and len(node.children) == 1
        and node.token == node.children[0].token
    )


class PrettyPrinter:
    @staticmethod
    def label(node: ASTNode) -> str:
        """Short one-line label for a node, e.g. `EXPRESSION(+)`."""
        if node.type == NodeType.CALL and node.token.type in BUILTIN_CALLS:
            return f"{node.type}({node.lexeme})"
        if node.type == NodeType.EXPRESSION and is_statement_wrapper(node):
            return str(node.type)
        if node.type in LABELLED_NODES:
            return f"{node.type}({node.lexeme})"
        return str(node.type)

    @staticmethod
    def print_ast(node: Optional[ASTNode], indent: int = 0, prefix: str = "") -> str:
        """Pretty print a tree and return it as a string."""
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            return f"{indent_str}{prefix}{node}"

        lines = [f"{indent_str}{prefix}{PrettyPrinter.label(node)}"]
        for i, child in enumerate(node.children):
            lines.append(PrettyPrinter.print_ast(child, indent + 2, f"[{i}] "))
        return "\n".join(lines)

    @staticmethod
    def print_surface(node: Optional[ASTNode]) -> str:
        """Return a compact, surface-syntax-like one-line representation of a node.

        Binary expressions are fully parenthesized so the grouping chosen by
        the parser is visible (e.g. `a + b * c` prints as `(a + (b * c))`).
        """
        if node is None:
            return ""

        def _p(n: ASTNode) -> str:
            return PrettyPrinter.print_surface(n)

        kids = node.children

        match node.type:
            case NodeType.LITERAL | NodeType.IDENTIFIER:
                return node.lexeme
            case NodeType.EXPRESSION:
                if is_statement_wrapper(node):
                    return f"{_p(kids[0])};"
                if len(kids) == 2:
                    return f"({_p(kids[0])} {node.lexeme} {_p(kids[1])})"
                return f"{node.lexeme}{_p(kids[0])}"
            case NodeType.ARRAY_LITERAL:
                return "[" + ", ".join(_p(k) for k in kids) + "]"
            case NodeType.ARG_LIST | NodeType.PARAM_LIST:
                return ", ".join(_p(k) for k in kids)
            case NodeType.CALL:
                if node.token.type == TokenType.CREAD:
                    return f"cread({_p(kids[0])}) {_p(kids[1])}"
                if node.token.type == TokenType.CSAY:
                    return f"csay({_p(kids[0])})"
                return f"{_p(kids[0])}({_p(kids[1])})"
            case NodeType.DECLARATION:
                return f"{node.lexeme} {_p(kids[0])} = {_p(kids[1])};"
            case NodeType.ASSIGNMENT:
                return f"{_p(kids[0])} = {_p(kids[1])};"
            case NodeType.RETURN:
                return f"return {_p(kids[0])};"
            case NodeType.IF:
                return f"if ({_p(kids[0])})"
            case NodeType.WHILE:
                return f"while ({_p(kids[0])})"
            case NodeType.FOR:
                return f"for ({_p(kids[0])} in {_p(kids[1])})"
            case NodeType.FUNCTION:
                return f"func {_p(kids[0])}({_p(kids[1])})"
            case NodeType.INSTRUCTION_LIST:
                return "{...}"
            case NodeType.PROGRAM:
                return "<program>"
            case _:
                return PrettyPrinter.label(node)
