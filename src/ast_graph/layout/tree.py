"""Tidy tree layout for AST graphs.

Two passes over the rooted tree rebuilt from the edge list:
  1. Width pass (post-order): every subtree claims
     max(node width, sum of child widths + gaps between them).
  2. Placement pass (pre-order): the root sits at (origin_x, 0); each row of
     children is centred under its parent, each child centred in a slice as
     wide as its own subtree. y depends on depth only.

Both passes use networkx's DFS generators, so depth is not bounded by the
recursion limit. Children keep the order of the edge list.
"""

from __future__ import annotations

import logging

import networkx as nx

from ast_graph.config import LayoutConfig
from ast_graph.ir.graph import GraphEdge, GraphNode, Position

logger = logging.getLogger(__name__)


class LayoutTree:
    """Rooted tree reconstructed from graph nodes and edges.

    Edges with an unknown endpoint are dropped, and so is any edge whose
    target already has a parent, so the result is always a forest.
    """

    def __init__(self, digraph: nx.DiGraph, root: str | None) -> None:
        self.digraph = digraph
        self.root = root

    @classmethod
    def from_graph(cls, nodes: list[GraphNode], edges: list[GraphEdge]) -> LayoutTree:
        digraph: nx.DiGraph = nx.DiGraph()
        for node in nodes:
            digraph.add_node(node.id)

        has_parent: set[str] = set()
        for edge in edges:
            if edge.source not in digraph or edge.target not in digraph:
                logger.debug("ignoring edge %s with unknown endpoint", edge.id)
                continue
            if edge.target in has_parent or edge.source == edge.target:
                logger.debug("ignoring edge %s: target already has a parent", edge.id)
                continue
            has_parent.add(edge.target)
            digraph.add_edge(edge.source, edge.target)

        roots = [node_id for node_id in digraph.nodes if node_id not in has_parent]
        root = roots[0] if len(roots) == 1 else None
        return cls(digraph=digraph, root=root)

    def children(self, node_id: str) -> list[str]:
        return list(self.digraph.successors(node_id))

    def depths(self) -> dict[str, int]:
        if self.root is None:
            return {}
        return nx.single_source_shortest_path_length(self.digraph, self.root)


class TreeLayout:
    """Assigns non-overlapping positions to the nodes of a rooted tree."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def subtree_widths(self, tree: LayoutTree) -> dict[str, float]:
        cfg = self.config
        widths: dict[str, float] = {}
        if tree.root is None:
            return widths
        for node_id in nx.dfs_postorder_nodes(tree.digraph, tree.root):
            kids = tree.children(node_id)
            if not kids:
                widths[node_id] = cfg.node_width
                continue
            row = sum(widths[kid] for kid in kids) + (len(kids) - 1) * cfg.h_gap
            widths[node_id] = max(cfg.node_width, row)
        return widths

    def positions(self, tree: LayoutTree) -> dict[str, Position]:
        cfg = self.config
        if tree.root is None:
            return {}

        widths = self.subtree_widths(tree)
        levels: dict[str, int] = {tree.root: 0}
        placed: dict[str, Position] = {tree.root: Position(cfg.origin_x, 0.0)}

        for node_id in nx.dfs_preorder_nodes(tree.digraph, tree.root):
            kids = tree.children(node_id)
            if not kids:
                continue
            level = levels[node_id] + 1
            row = sum(widths[kid] for kid in kids) + (len(kids) - 1) * cfg.h_gap
            left = placed[node_id].x - row / 2
            for kid in kids:
                levels[kid] = level
                placed[kid] = Position(left + widths[kid] / 2, level * cfg.level_height)
                left += widths[kid] + cfg.h_gap
        return placed

    def layout(self, nodes: list[GraphNode], edges: list[GraphEdge]) -> list[GraphNode]:
        """Write ``position`` on every node reachable from the root.

        Returns the nodes in input order. Without a unique root nothing is
        positioned and the nodes come back as they were.
        """
        tree = LayoutTree.from_graph(nodes, edges)
        if tree.root is None:
            if nodes:
                logger.warning("no unique root among %d nodes; layout skipped", len(nodes))
            return list(nodes)

        placed = self.positions(tree)
        for node in nodes:
            pos = placed.get(node.id)
            if pos is not None:
                node.position = pos
        logger.debug("laid out %d of %d nodes from root %s", len(placed), len(nodes), tree.root)
        return list(nodes)
