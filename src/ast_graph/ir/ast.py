"""Tagged view over the untyped AST delivered by a parser collaborator.

The parser hands us decoded JSON of arbitrary shape. ``classify`` turns any
value into one of four variants (Scalar, Sequence, TypedNode, UntypedMapping)
so the builder can dispatch on a single match instead of probing types ad hoc.
The variants wrap the original value; nothing is copied or mutated.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

from ast_graph.types import AstKind, ColumnMode

TYPE_KEY = "type"
VALUE_KEY = "value"
LOCATION_KEY = "location"


@dataclass(frozen=True)
class Scalar:
    value: Any

    kind = AstKind.Scalar

    def text(self) -> str:
        return scalar_text(self.value)


@dataclass(frozen=True)
class Sequence:
    items: list[Any] | tuple[Any, ...]

    kind = AstKind.Sequence


@dataclass(frozen=True)
class TypedNode:
    type: str
    fields: dict[str, Any] = field(default_factory=dict)

    kind = AstKind.TypedNode

    @property
    def value(self) -> Any:
        return self.fields.get(VALUE_KEY)


@dataclass(frozen=True)
class UntypedMapping:
    fields: dict[str, Any] = field(default_factory=dict)

    kind = AstKind.UntypedMapping


AstVariant = Union[Scalar, Sequence, TypedNode, UntypedMapping]


def classify(value: Any) -> AstVariant:
    """Classify a decoded JSON value. Never raises."""
    if isinstance(value, dict):
        tag = value.get(TYPE_KEY)
        if isinstance(tag, str) and tag:
            return TypedNode(type=tag, fields=value)
        return UntypedMapping(fields=value)
    if isinstance(value, (list, tuple)):
        return Sequence(items=value)
    return Scalar(value=value)


def is_composite(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def scalar_text(value: Any) -> str:
    """String form of a scalar, with JSON spelling for null and booleans."""
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    return str(value)


def compact_json(value: Any) -> str:
    """Inline JSON text for composite values embedded in a label."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        # circular containers, non-string keys
        return scalar_text(value)


# ─── Source ranges ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SourceRange:
    """A ``location`` span: 1-based lines, columns per ``ColumnMode``."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def from_value(cls, value: Any) -> SourceRange | None:
        """Read the ``location`` field of an AST node, if it is well formed."""
        if not isinstance(value, dict):
            return None
        loc = value.get(LOCATION_KEY)
        if not isinstance(loc, (list, tuple)) or len(loc) != 4:
            return None
        if not all(isinstance(n, int) and not isinstance(n, bool) for n in loc):
            return None
        return cls(*loc)

    def contains(self, line: int, column: int) -> bool:
        """True if (line, column) lies inside the span (end exclusive)."""
        start = (self.start_line, self.start_column)
        end = (self.end_line, self.end_column)
        return start <= (line, column) < end

    def extract(self, text: str, mode: ColumnMode = ColumnMode.LINE) -> str:
        """Return the slice of ``text`` covered by this range."""
        if mode is ColumnMode.OFFSET:
            return text[self.start_column : self.end_column]

        lines = text.splitlines(keepends=True)
        if self.start_line < 1 or self.start_line > len(lines):
            return ""
        if self.start_line == self.end_line:
            return lines[self.start_line - 1][self.start_column : self.end_column]
        parts = [lines[self.start_line - 1][self.start_column :]]
        parts.extend(lines[self.start_line : self.end_line - 1])
        if self.end_line <= len(lines):
            parts.append(lines[self.end_line - 1][: self.end_column])
        return "".join(parts)
