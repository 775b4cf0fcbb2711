"""Rich rendering of dependency traversal results for the terminal."""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

logger = logging.getLogger("deptree.export.render")


def _label(path: str, directory: Optional[str]) -> Text:
    if directory:
        try:
            relative = os.path.relpath(path, directory)
        except ValueError:
            relative = path
        if not relative.startswith(".."):
            path = relative
    style = "yellow" if "node_modules" in path.split(os.sep) else "cyan"
    return Text(path, style=style)


def build_rich_tree(tree: Dict[str, Any], directory: Optional[str] = None) -> Tree:
    """Build a rich Tree from a tree-shaped result.

    Args:
        tree: Nested ``{path: {dependency: {...}}}`` mapping with one root.
        directory: Paths under this directory are shown relative to it.

    Returns:
        Tree: Renderable tree. Empty results render as an empty root.
    """
    if not tree:
        return Tree(Text("(no dependencies)", style="dim"))

    root_path, root_children = next(iter(tree.items()))
    rich_tree = Tree(_label(root_path, directory), guide_style="dim")

    stack: List[Tuple[Tree, Dict[str, Any]]] = [(rich_tree, root_children)]
    while stack:
        branch, children = stack.pop()
        for child, grandchildren in children.items():
            stack.append((branch.add(_label(child, directory)), grandchildren))
    return rich_tree


def render_result(
    result: Any,
    console: Optional[Console] = None,
    directory: Optional[str] = None,
) -> None:
    """Print a traversal result: a tree for mappings, one line per entry for lists."""
    console = console or Console()
    if isinstance(result, dict):
        console.print(build_rich_tree(result, directory))
        return
    for index, item in enumerate(result):
        console.print(Text(f"{index:>4} ", style="dim") + _label(item, directory))


__all__ = ["build_rich_tree", "render_result"]
