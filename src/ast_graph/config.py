"""Centralized configuration for ast-graph."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_PARSE_URL = "http://localhost:4000/parse"


@dataclass
class LayoutConfig:
    """Geometry of the tree layout, in render units."""

    node_width: float = 120
    node_height: float = 40
    h_gap: float = 50
    v_gap: float = 80
    origin_x: float = 0.0

    def __post_init__(self) -> None:
        for name in ("node_width", "node_height", "h_gap", "v_gap"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")

    @property
    def level_height(self) -> float:
        return self.node_height + self.v_gap


@dataclass
class BuildConfig:
    """Options for turning an AST into graph nodes."""

    satellite_keys: tuple[str, ...] = ("operator",)
    collapse_program: bool = True


@dataclass
class ParserConfig:
    """Where and how to reach the parser collaborator."""

    url: str = DEFAULT_PARSE_URL
    timeout: float = 10.0
    command: tuple[str, ...] = ("stree", "json")

    @classmethod
    def from_env(cls) -> ParserConfig:
        url = os.environ.get("AST_GRAPH_PARSE_URL") or os.environ.get("PARSE_URL") or DEFAULT_PARSE_URL
        timeout = os.environ.get("AST_GRAPH_PARSE_TIMEOUT")
        if timeout is None:
            return cls(url=url)
        try:
            return cls(url=url, timeout=float(timeout))
        except ValueError:
            raise ValueError(f"AST_GRAPH_PARSE_TIMEOUT must be a number, got {timeout!r}") from None


@dataclass
class ServiceConfig:
    host: str = "0.0.0.0"
    port: int = 4000
