"""Graphviz visualization helpers for syntax trees.

Provides `render_tree_dot(root)` which returns a `graphviz.Digraph` object
(not rendered). `write_and_render` writes the file to disk and needs the
Graphviz binaries installed; building the Digraph itself does not.

Layout: one box per node, labelled with the node kind and, where it carries
one, its token text. Edges run from parent to child and are numbered with
the child's position, since child order is meaningful. The subtree of each
`func` declaration is grouped into its own cluster.
"""

from typing import Optional
import html
import re
from graphviz import Digraph
from ast_nodes import ASTNode, NodeType
from pretty_printer import PrettyPrinter


def _node_label(node: ASTNode, use_surface: bool) -> str:
    text = PrettyPrinter.label(node)
    if use_surface and node.type not in (NodeType.PROGRAM, NodeType.INSTRUCTION_LIST):
        text = PrettyPrinter.print_surface(node)
    pos = f"{node.line}:{node.column}"
    return (
        f'<<FONT POINT-SIZE="10">{html.escape(text)}</FONT>'
        f'<BR/><FONT POINT-SIZE="8">{pos}</FONT>>'
    )


def render_tree_dot(root: Optional[ASTNode], use_surface: bool = False) -> Digraph:
    """Return a graphviz.Digraph for the tree rooted at `root`.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", shape="box", style="rounded")

    if root is None:
        return dot

    counter = 0

    def emit(node: ASTNode, graph: Digraph) -> str:
        nonlocal counter
        name = f"n{counter}"
        counter += 1

        if node.type == NodeType.FUNCTION and node.children:
            func_name = re.sub(r"[^0-9A-Za-z_]", "_", node.children[0].lexeme)
            with graph.subgraph(name=f"cluster_{func_name}_{name}") as sub:
                sub.attr(label=f"function: {node.children[0].lexeme}")
                sub.attr(style="dashed")
                sub.node(name, label=_node_label(node, use_surface))
                for i, child in enumerate(node.children):
                    child_name = emit(child, sub)
                    dot.edge(name, child_name, label=str(i))
            return name

        graph.node(name, label=_node_label(node, use_surface))
        for i, child in enumerate(node.children):
            child_name = emit(child, graph)
            dot.edge(name, child_name, label=str(i))
        return name

    emit(root, dot)
    return dot


def write_and_render(
    root: ASTNode,
    out_path: str,
    fmt: str = "svg",
    use_surface: bool = False,
) -> None:
    """Write and render the tree to the given path (without extension).

    Example: write_and_render(tree, 'out/tree', fmt='png') will create
    out/tree.png (requires Graphviz)."""
    dot = render_tree_dot(root, use_surface=use_surface)
    dot.format = fmt
    # Note: render will append extension automatically
    dot.render(out_path, cleanup=True)
