"""Graph IR — the flat, render-ready node/edge lists built from an AST.

``AstGraph`` owns the output of one build. Layout writes ``GraphNode.position``
in place; everything else is left alone after the build returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import networkx as nx

from ast_graph.ir.ast import SourceRange

if TYPE_CHECKING:
    from ast_graph.config import BuildConfig


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class GraphNode:
    id: str
    kind: str
    source: Any = None
    position: Position = field(default_factory=Position)

    @property
    def source_range(self) -> SourceRange | None:
        return SourceRange.from_value(self.source)


@dataclass
class GraphEdge:
    id: str
    source: str
    target: str

    @classmethod
    def between(cls, source: str, target: str) -> GraphEdge:
        return cls(id=f"{source}-{target}", source=source, target=target)


class AstGraph:
    """Nodes and parent→child edges produced by one build."""

    def __init__(self, nodes: list[GraphNode], edges: list[GraphEdge]) -> None:
        self.nodes = nodes
        self.edges = edges

    @classmethod
    def from_ast(cls, value: Any, parent_id: str | None = None, config: BuildConfig | None = None) -> AstGraph:
        """Build an AstGraph from a decoded AST value."""
        from ast_graph.builder import GraphBuilder

        return GraphBuilder(config).build(value, parent_id=parent_id)

    def __repr__(self) -> str:
        return f"AstGraph(nodes={self.node_count()}, edges={self.edge_count()})"

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_digraph(self) -> nx.DiGraph:
        """networkx view; edges whose endpoints are unknown are left out."""
        digraph: nx.DiGraph = nx.DiGraph()
        for node in self.nodes:
            digraph.add_node(node.id, data=node)
        for edge in self.edges:
            if edge.source in digraph and edge.target in digraph:
                digraph.add_edge(edge.source, edge.target, id=edge.id)
        return digraph

    def is_tree(self) -> bool:
        digraph = self.to_digraph()
        if digraph.number_of_nodes() == 0:
            return False
        return nx.is_arborescence(digraph)

    def root_ids(self) -> list[str]:
        """Ids of nodes that are not the target of any resolvable edge, in node order."""
        known = {node.id for node in self.nodes}
        targets = {
            edge.target
            for edge in self.edges
            if edge.source in known and edge.target in known and edge.source != edge.target
        }
        return [node.id for node in self.nodes if node.id not in targets]

    def root(self) -> GraphNode | None:
        roots = self.root_ids()
        if len(roots) != 1:
            return None
        return self.node(roots[0])

    def nodes_at(self, line: int, column: int) -> list[GraphNode]:
        """Nodes whose source range covers (line, column), outermost first."""
        hits: list[GraphNode] = []
        for node in self.nodes:
            span = node.source_range
            if span is not None and span.contains(line, column):
                hits.append(node)
        return hits
