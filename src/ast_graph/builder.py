"""GraphBuilder — flattens an AST value into graph nodes and parent→child edges.

Traversal is depth-first and pre-order: mapping fields in insertion order,
sequence elements in index order. It is driven by an explicit stack so that
arbitrarily deep trees do not run into the interpreter's recursion limit.

Emission rules:
  - typed node (mapping with a string ``type``): one node; configured
    satellite keys holding a scalar get a ``simple_n`` child node
  - untyped mapping: one node labelled with its fields, plus a ``simple_n``
    child for every non-null scalar field
  - sequence held by a mapping field: no node of its own, its elements hang
    off the mapping's node
  - any other sequence (top level, nested in a sequence): one ``[...]`` node
  - scalar: folded into the parent's label; a top-level scalar becomes a node
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ast_graph.config import BuildConfig
from ast_graph.ir.ast import (
    Scalar,
    Sequence,
    TypedNode,
    UntypedMapping,
    classify,
    compact_json,
    is_composite,
    scalar_text,
)
from ast_graph.ir.graph import AstGraph, GraphEdge, GraphNode

logger = logging.getLogger(__name__)

UNNAMED = "unnamed"
SIMPLE = "simple"
SEQUENCE_LABEL = "[...]"
EMPTY_MAPPING_LABEL = "{}"

# How a value was reached; decides whether a sequence gets its own node.
_ELEMENT = "element"
_FIELD = "field"
_SATELLITE = "satellite"


@dataclass
class BuildState:
    """Accumulator owned by a single ``build`` call."""

    counters: dict[str, int] = field(default_factory=dict)
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def next_id(self, tag: str) -> str:
        count = self.counters.get(tag, 0) + 1
        self.counters[tag] = count
        return f"{tag}_{count}"

    def emit(self, tag: str, label: str, source: Any, parent_id: str | None) -> str:
        node_id = self.next_id(tag)
        self.nodes.append(GraphNode(id=node_id, kind=label, source=source))
        if parent_id is not None:
            self.edges.append(GraphEdge.between(parent_id, node_id))
        return node_id


def node_label(value: Any) -> str:
    """Human-readable label for an AST value of any shape."""
    variant = classify(value)
    if isinstance(variant, TypedNode):
        if isinstance(variant.value, str):
            return f'{variant.type}: "{variant.value}"'
        return variant.type
    if isinstance(variant, Sequence):
        return SEQUENCE_LABEL
    if isinstance(variant, UntypedMapping):
        if not variant.fields:
            return EMPTY_MAPPING_LABEL
        return ", ".join(f"{key}: {_field_text(val)}" for key, val in variant.fields.items())
    return variant.text()


def _field_text(value: Any) -> str:
    if is_composite(value):
        return compact_json(value)
    return scalar_text(value)


class GraphBuilder:
    """Builds an ``AstGraph`` from a decoded AST value."""

    def __init__(self, config: BuildConfig | None = None) -> None:
        self.config = config or BuildConfig()

    def build(self, ast: Any, parent_id: str | None = None) -> AstGraph:
        """Flatten ``ast`` into nodes and edges.

        Args:
            ast: Decoded JSON value; any shape is accepted.
            parent_id: Id of an existing node to hang the root under, for
                callers rendering a subtree. The resulting edge points at a
                node outside this build and is ignored by layout.

        Returns:
            A fresh AstGraph. Ids restart from ``_1`` on every call.
        """
        state = BuildState()
        variant = classify(ast)

        if isinstance(variant, Scalar):
            state.emit(UNNAMED, variant.text(), ast, parent_id)
        elif self.config.collapse_program and _is_program(variant):
            program_id = state.emit("program", "program", ast, parent_id)
            body = variant.fields["statements"]["body"]
            self._walk(state, [(item, program_id, _ELEMENT) for item in body])
        else:
            self._walk(state, [(ast, parent_id, _ELEMENT)])

        logger.debug("built %d nodes, %d edges", len(state.nodes), len(state.edges))
        return AstGraph(nodes=state.nodes, edges=state.edges)

    def _walk(self, state: BuildState, pending: list[tuple[Any, str | None, str]]) -> None:
        stack = list(reversed(pending))
        while stack:
            value, parent_id, role = stack.pop()

            if role == _SATELLITE:
                key, scalar = value
                state.emit(SIMPLE, f"{key}: {scalar_text(scalar)}", {key: scalar}, parent_id)
                continue
            if not is_composite(value):
                continue

            variant = classify(value)
            children: list[tuple[Any, str | None, str]] = []

            if isinstance(variant, Sequence):
                if role == _FIELD:
                    node_id = parent_id
                else:
                    node_id = state.emit(UNNAMED, SEQUENCE_LABEL, value, parent_id)
                children = [(item, node_id, _ELEMENT) for item in variant.items]
            else:
                tag = variant.type if isinstance(variant, TypedNode) else UNNAMED
                node_id = state.emit(tag, node_label(value), value, parent_id)
                for key, child in variant.fields.items():
                    if is_composite(child):
                        children.append((child, node_id, _FIELD))
                    elif self._is_satellite(variant, key, child):
                        children.append(((str(key), child), node_id, _SATELLITE))

            stack.extend(reversed(children))

    def _is_satellite(self, variant: TypedNode | UntypedMapping, key: Any, value: Any) -> bool:
        if isinstance(variant, UntypedMapping):
            return value is not None
        return key in self.config.satellite_keys


def _is_program(variant: Any) -> bool:
    if not isinstance(variant, TypedNode) or variant.type != "program":
        return False
    statements = variant.fields.get("statements")
    return isinstance(statements, dict) and isinstance(statements.get("body"), (list, tuple))


def build(ast: Any, parent_id: str | None = None, config: BuildConfig | None = None) -> AstGraph:
    """Build an AstGraph with a throwaway GraphBuilder."""
    return GraphBuilder(config).build(ast, parent_id=parent_id)
