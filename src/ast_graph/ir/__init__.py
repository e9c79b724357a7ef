"""Intermediate representation: tagged AST view and the flat graph."""

from ast_graph.ir.ast import Scalar, Sequence, SourceRange, TypedNode, UntypedMapping, classify
from ast_graph.ir.graph import AstGraph, GraphEdge, GraphNode, Position

__all__ = [
    "AstGraph",
    "GraphEdge",
    "GraphNode",
    "Position",
    "Scalar",
    "Sequence",
    "SourceRange",
    "TypedNode",
    "UntypedMapping",
    "classify",
]
