"""Exporters and renderers for traversal results."""

from deptree.export.graph import (
    export_dot,
    export_graph,
    list_to_graph,
    tree_to_graph,
)
from deptree.export.render import build_rich_tree, render_result

__all__ = [
    "export_dot",
    "export_graph",
    "list_to_graph",
    "tree_to_graph",
    "build_rich_tree",
    "render_result",
]
