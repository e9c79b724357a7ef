"""CLI entry point for ast-graph."""

import json
import logging
import sys

import click

from ast_graph.builder import GraphBuilder
from ast_graph.config import LayoutConfig, ParserConfig, ServiceConfig
from ast_graph.export import FORMATS, export_graph
from ast_graph.layout.tree import TreeLayout
from ast_graph.parsers import ParseError, StreeParser, get_parser


def _read_input(input: str | None) -> str:
    if input:
        try:
            with open(input) as f:
                return f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    return sys.stdin.read()


def _write_output(text: str, output: str | None) -> None:
    if output:
        try:
            with open(output, "w") as f:
                f.write(text)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(text)


def _layout_config(ctx: click.Context) -> LayoutConfig:
    params = ctx.params
    try:
        return LayoutConfig(
            node_width=params["node_width"],
            node_height=params["node_height"],
            h_gap=params["h_gap"],
            v_gap=params["v_gap"],
        )
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)


def _emit_graph(ctx: click.Context, ast: object) -> None:
    params = ctx.params
    config = _layout_config(ctx)
    graph = GraphBuilder().build(ast)
    TreeLayout(config).layout(graph.nodes, graph.edges)
    data = export_graph(graph, params["fmt"], config, include_source=not params["no_source"])
    _write_output(json.dumps(data, indent=params["indent"], ensure_ascii=False), params["output"])


def _graph_options(f):
    options = [
        click.option("--format", "-f", "fmt", type=click.Choice(FORMATS), default="json", help="Output shape"),
        click.option("--no-source", "no_source", is_flag=True, help="Omit the AST back-reference of each node"),
        click.option("--node-width", "node_width", type=float, default=120, help="Node box width"),
        click.option("--node-height", "node_height", type=float, default=40, help="Node box height"),
        click.option("--h-gap", "h_gap", type=float, default=50, help="Gap between sibling subtrees"),
        click.option("--v-gap", "v_gap", type=float, default=80, help="Gap between tree levels"),
        click.option("--indent", "indent", type=int, default=None, help="Pretty-print JSON with this indent"),
        click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """AST to laid-out node/edge graph JSON."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@_graph_options
@click.pass_context
def build(ctx: click.Context, input: str | None, **_: object) -> None:
    """Build and lay out a graph from AST JSON (file or stdin)."""
    text = _read_input(input)
    try:
        ast = json.loads(text)
    except ValueError as e:
        click.echo(f"error: input is not valid JSON: {e}", err=True)
        sys.exit(1)
    _emit_graph(ctx, ast)


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--parser", "-p", "parser_name", type=click.Choice(["http", "stree"]), default="http", help="Parser collaborator")
@click.option("--url", "url", type=str, default=None, help="Parse service URL (http parser)")
@_graph_options
@click.pass_context
def parse(ctx: click.Context, input: str | None, parser_name: str, url: str | None, **_: object) -> None:
    """Parse source code with a parser collaborator, then build and lay out."""
    code = _read_input(input)
    config = ParserConfig.from_env()
    if url:
        config.url = url
    parser = get_parser(parser_name, config)
    try:
        ast = parser.parse(code)
    except ParseError as e:
        click.echo(f"Failed to parse AST. Please check your input and ensure the parser is available.\n{e}", err=True)
        sys.exit(1)
    _emit_graph(ctx, ast)


@main.command()
@click.option("--host", "host", type=str, default=ServiceConfig.host, help="Interface to bind")
@click.option("--port", "port", type=int, default=ServiceConfig.port, help="Port to listen on")
@click.option("--command", "command", type=str, default="stree json", help="Parser command; the source file path is appended")
def serve(host: str, port: int, command: str) -> None:
    """Run the parse service (POST /parse)."""
    from ast_graph.service import run

    run(host=host, port=port, parser=StreeParser(command=tuple(command.split())))


if __name__ == "__main__":
    main()
