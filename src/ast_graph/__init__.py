"""ast-graph: turn a parser's JSON AST into a laid-out node/edge graph."""

from typing import Any

from ast_graph.builder import GraphBuilder, build
from ast_graph.config import BuildConfig, LayoutConfig
from ast_graph.export import export_graph
from ast_graph.ir.graph import AstGraph, GraphEdge, GraphNode, Position
from ast_graph.layout.tree import TreeLayout

__all__ = [
    "AstGraph",
    "BuildConfig",
    "GraphBuilder",
    "GraphEdge",
    "GraphNode",
    "LayoutConfig",
    "Position",
    "TreeLayout",
    "build",
    "visualize",
    "visualize_dict",
]


def visualize(
    ast: Any,
    layout_config: LayoutConfig | None = None,
    build_config: BuildConfig | None = None,
) -> AstGraph:
    """Build a graph from a decoded AST and lay it out.

    Args:
        ast: Decoded JSON tree from a parser collaborator.
        layout_config: Node size and gaps; defaults to 120x40 with 50/80 gaps.
        build_config: Satellite keys and program collapsing.

    Returns:
        The AstGraph with every reachable node positioned.
    """
    graph = build(ast, config=build_config)
    TreeLayout(layout_config).layout(graph.nodes, graph.edges)
    return graph


def visualize_dict(
    ast: Any,
    fmt: str = "json",
    layout_config: LayoutConfig | None = None,
    include_source: bool = True,
    build_config: BuildConfig | None = None,
) -> dict[str, Any]:
    """Like ``visualize`` but returns the exported JSON-ready dict.

    Raises:
        ValueError: If ``fmt`` is unknown.
    """
    graph = visualize(ast, layout_config, build_config)
    return export_graph(graph, fmt, layout_config, include_source)
