"""Layout engine public API."""

from __future__ import annotations

from ast_graph.layout.engine import layout, layout_graph, subtree_widths
from ast_graph.layout.tree import LayoutTree, TreeLayout

__all__ = [
    "LayoutTree",
    "TreeLayout",
    "layout",
    "layout_graph",
    "subtree_widths",
]
