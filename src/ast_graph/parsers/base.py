"""Base parser protocol and the collaborator failure type."""

from __future__ import annotations

from typing import Protocol

from ast_graph.types import AstValue


class ParseError(ValueError):
    """The parser collaborator could not turn source code into an AST."""


class AstParser(Protocol):
    """Protocol that all parser collaborators must implement."""

    def parse(self, code: str) -> AstValue:
        """Parse source text into a decoded JSON AST."""
        ...
