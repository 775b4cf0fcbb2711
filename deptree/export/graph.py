"""Graph export for dependency traversal results.

Converts tree- and list-shaped results into ``networkx.DiGraph`` objects
and writes them as node-link JSON or DOT. Edges point from the dependent
file to its dependency.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import networkx as nx
from networkx.drawing.nx_pydot import write_dot

logger = logging.getLogger("deptree.export.graph")


def tree_to_graph(tree: Dict[str, Any]) -> nx.DiGraph:
    """Build a directed graph from a tree-shaped result.

    Args:
        tree: Nested ``{path: {dependency: {...}}}`` mapping.

    Returns:
        nx.DiGraph: One node per file, one edge per dependency.
    """
    graph = nx.DiGraph()
    stack: List[Tuple[str, Dict[str, Any]]] = list(tree.items())
    for root in tree:
        graph.add_node(root, root=True)

    while stack:
        parent, children = stack.pop()
        graph.add_node(parent)
        for child, grandchildren in children.items():
            graph.add_edge(parent, child)
            stack.append((child, grandchildren))

    logger.debug(
        "built graph from tree: %d nodes, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def list_to_graph(order: List[str]) -> nx.DiGraph:
    """Build an edgeless graph from a list-shaped result.

    Each node carries its position in the bundling order as ``order``.
    """
    graph = nx.DiGraph()
    for index, path in enumerate(order):
        graph.add_node(path, order=index)
    return graph


def export_dot(graph: nx.DiGraph, output_path: Path) -> None:
    """Export graph to DOT format.

    Args:
        graph: Graph to export.
        output_path: Output file path.
    """
    logger.info("Exporting graph to DOT: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # pydot treats ':' in node names as a port separator
    quoted = nx.relabel_nodes(graph, {node: f'"{node}"' for node in graph.nodes})
    write_dot(quoted, str(output_path))

    logger.info("DOT export completed: %d nodes, %d edges",
                graph.number_of_nodes(), graph.number_of_edges())


def export_graph(graph: nx.DiGraph, output_path: Path) -> None:
    """Write a dependency graph, choosing the format from the file suffix.

    ``.dot``/``.gv`` produce DOT; anything else is node-link JSON with the
    edge list under ``"edges"`` and non-ASCII paths kept as written.
    """
    if output_path.suffix.lower() in (".dot", ".gv"):
        export_dot(graph, output_path)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = nx.node_link_data(graph, edges="edges")
    output_path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    logger.info("wrote %d files and %d edges to %s",
                graph.number_of_nodes(), graph.number_of_edges(), output_path)


__all__ = [
    "tree_to_graph",
    "list_to_graph",
    "export_dot",
    "export_graph",
]
