"""Visualizer session — holds the last graph that was built successfully."""

from __future__ import annotations

import logging
from typing import Any

from ast_graph.builder import GraphBuilder
from ast_graph.config import BuildConfig, LayoutConfig
from ast_graph.ir.graph import AstGraph
from ast_graph.layout.tree import TreeLayout
from ast_graph.parsers import AstParser, ParseError

logger = logging.getLogger(__name__)


class AstVisualizer:
    """Parse → build → layout, one user request at a time.

    A failed parse leaves ``graph`` as it was, so a front-end never shows a
    partial result.
    """

    def __init__(
        self,
        parser: AstParser,
        layout_config: LayoutConfig | None = None,
        build_config: BuildConfig | None = None,
    ) -> None:
        self.parser = parser
        self.builder = GraphBuilder(build_config)
        self.layout_engine = TreeLayout(layout_config)
        self.graph = AstGraph(nodes=[], edges=[])

    def render(self, code: str) -> AstGraph:
        """Parse ``code`` and replace the current graph.

        Raises:
            ParseError: The parser failed; the current graph is kept.
        """
        try:
            ast = self.parser.parse(code)
        except ParseError as e:
            logger.error("Failed to parse AST: %s", e)
            raise
        return self.render_ast(ast)

    def render_ast(self, ast: Any) -> AstGraph:
        graph = self.builder.build(ast)
        self.layout_engine.layout(graph.nodes, graph.edges)
        self.graph = graph
        return graph
