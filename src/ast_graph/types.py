"""Shared type definitions for ast-graph.

Enums and small types used across the IR, layout, parsers and exporters.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Union

# Decoded JSON as handed over by a parser collaborator. No schema is enforced.
AstValue = Union[str, int, float, bool, None, list[Any], tuple[Any, ...], dict[str, Any]]


class AstKind(Enum):
    Scalar = auto()  # str, number, bool, null
    Sequence = auto()  # [a, b, ...]
    TypedNode = auto()  # {"type": "...", ...}
    UntypedMapping = auto()  # {...} without a string type

    @property
    def is_composite(self) -> bool:
        return self is not AstKind.Scalar


class ColumnMode(Enum):
    LINE = auto()  # 0-based column within the line
    OFFSET = auto()  # 0-based character offset into the whole source
