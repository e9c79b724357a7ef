"""Parser registry — pick a parser collaborator by name."""

from __future__ import annotations

from ast_graph.config import ParserConfig
from ast_graph.parsers.base import AstParser, ParseError
from ast_graph.parsers.remote import HttpParser
from ast_graph.parsers.stree import StreeParser

__all__ = ["AstParser", "HttpParser", "ParseError", "StreeParser", "get_parser"]


def get_parser(name: str, config: ParserConfig | None = None) -> AstParser:
    """Build the named parser ('http' or 'stree') from config."""
    cfg = config or ParserConfig.from_env()
    if name == "http":
        return HttpParser(url=cfg.url, timeout=cfg.timeout)
    if name == "stree":
        return StreeParser(command=cfg.command, timeout=cfg.timeout)
    raise ValueError(f"Unsupported parser: {name}")
