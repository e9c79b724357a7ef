"""Layout engine convenience functions."""

from __future__ import annotations

from ast_graph.config import LayoutConfig
from ast_graph.ir.graph import AstGraph, GraphEdge, GraphNode
from ast_graph.layout.tree import LayoutTree, TreeLayout


def layout(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    config: LayoutConfig | None = None,
) -> list[GraphNode]:
    """Position ``nodes`` as a tree; ``edges`` is left untouched."""
    return TreeLayout(config).layout(nodes, edges)


def layout_graph(graph: AstGraph, config: LayoutConfig | None = None) -> AstGraph:
    """Lay out an AstGraph in place and return it."""
    graph.nodes = layout(graph.nodes, graph.edges, config)
    return graph


def subtree_widths(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    config: LayoutConfig | None = None,
) -> dict[str, float]:
    """Horizontal footprint of every subtree, keyed by node id."""
    return TreeLayout(config).subtree_widths(LayoutTree.from_graph(nodes, edges))
