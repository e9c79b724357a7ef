"""JSON-ready views of a laid-out AstGraph for rendering front-ends."""

from __future__ import annotations

from typing import Any

from ast_graph.config import LayoutConfig
from ast_graph.ir.graph import AstGraph, GraphEdge, GraphNode


def node_dict(node: GraphNode, include_source: bool = True) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": node.id,
        "kind": node.kind,
        "position": {"x": node.position.x, "y": node.position.y},
    }
    if include_source:
        out["sourceRef"] = node.source
    return out


def edge_dict(edge: GraphEdge) -> dict[str, str]:
    return {"id": edge.id, "source": edge.source, "target": edge.target}


def to_dict(graph: AstGraph, include_source: bool = True) -> dict[str, Any]:
    """Plain ``{"nodes": [...], "edges": [...]}``; x is the node centre."""
    return {
        "nodes": [node_dict(node, include_source) for node in graph.nodes],
        "edges": [edge_dict(edge) for edge in graph.edges],
    }


def to_react_flow(graph: AstGraph, config: LayoutConfig | None = None) -> dict[str, Any]:
    """React Flow ``nodes``/``edges`` props.

    React Flow anchors a node at its top-left corner, so x is shifted left by
    half a node width.
    """
    cfg = config or LayoutConfig()
    nodes = [
        {
            "id": node.id,
            "type": "default",
            "data": {"label": node.kind},
            "position": {"x": node.position.x - cfg.node_width / 2, "y": node.position.y},
        }
        for node in graph.nodes
    ]
    edges = [{**edge_dict(edge), "type": "smoothstep"} for edge in graph.edges]
    return {"nodes": nodes, "edges": edges}


FORMATS = ("json", "react-flow")


def export_graph(
    graph: AstGraph,
    fmt: str = "json",
    config: LayoutConfig | None = None,
    include_source: bool = True,
) -> dict[str, Any]:
    """Dispatch on an output format name.

    Raises:
        ValueError: If ``fmt`` is not one of FORMATS.
    """
    if fmt == "json":
        return to_dict(graph, include_source)
    if fmt == "react-flow":
        return to_react_flow(graph, config)
    raise ValueError(f"Unknown format '{fmt}'; use json or react-flow")
