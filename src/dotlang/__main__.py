"""CLI entry point for dotlang."""

import logging
import sys

import click

from dotlang.cmd import CommandArg, CustomArg, Format, FormatArg, Layout, LayoutArg, OutputArg, exec_dot
from dotlang.config import ExecConfig, PrinterContext
from dotlang.errors import DotExecError, DotParseError
from dotlang.ir.ast import Graph
from dotlang.parsers import parse
from dotlang.printer import print_dot


def _read_source(input: str | None) -> str:
    if not input:
        return sys.stdin.read()
    try:
        with open(input, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        click.echo(f"error: cannot read '{input}': {e}", err=True)
        sys.exit(1)


def _parse_or_exit(text: str) -> Graph:
    try:
        return parse(text)
    except DotParseError as e:
        click.echo(f"parse error: {e}\n{e.snippet()}", err=True)
        sys.exit(1)


def _write_text(output: str | None, text: str) -> None:
    if not output:
        click.echo(text)
        return
    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    except OSError as e:
        click.echo(f"error: cannot write '{output}': {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """Parse, reformat and render graphviz DOT files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--indent", "-i", "indent", type=int, default=2, help="Indent step in spaces")
@click.option("--semi", is_flag=True, help="Terminate statements with semicolons")
@click.option("--inline", "inline", is_flag=True, help="Print the whole graph on one line")
@click.option("--width", "-w", "width", type=int, default=90, help="Longest edge statement kept on one line")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def fmt(input: str | None, indent: int, semi: bool, inline: bool, width: int, output: str | None) -> None:
    """Reformat a DOT file into canonical layout."""
    graph = _parse_or_exit(_read_source(input))
    ctx = PrinterContext(indent_step=indent, always_inline=inline, use_semicolons=semi, inline_size_threshold=width)
    _write_text(output, print_dot(graph, ctx))


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True))
def check(input: str | None) -> None:
    """Check that a DOT file parses."""
    graph = _parse_or_exit(_read_source(input))
    kind = "digraph" if graph.directed else "graph"
    click.echo(f"ok: {kind} with {len(graph.body)} top-level statements")


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--format",
    "-T",
    "fmt_name",
    type=click.Choice([f.value for f in Format]),
    default=Format.Svg.value,
    help="Output format",
)
@click.option("--layout", "-K", "layout", type=click.Choice([e.value for e in Layout]), default=None, help="Layout engine")
@click.option("--output", "-o", "output", type=str, default=None, help="Let graphviz write to this file")
@click.option("--dot-binary", "binary", type=str, default="dot", help="Graphviz executable to run")
@click.option("--arg", "extra", multiple=True, help="Extra argument passed verbatim to graphviz")
def render(
    input: str | None,
    fmt_name: str,
    layout: str | None,
    output: str | None,
    binary: str,
    extra: tuple[str, ...],
) -> None:
    """Render a DOT file with graphviz."""
    graph = _parse_or_exit(_read_source(input))
    args: list[CommandArg] = [FormatArg(Format(fmt_name))]
    if layout is not None:
        args.append(LayoutArg(Layout(layout)))
    if output:
        args.append(OutputArg(output))
    args.extend(CustomArg(e) for e in extra)
    try:
        rendered = exec_dot(graph, PrinterContext(), args, ExecConfig(binary=binary))
    except DotExecError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    if rendered:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
