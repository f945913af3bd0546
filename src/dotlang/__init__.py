"""dotlang: parse, build and pretty-print graphviz DOT documents."""

from __future__ import annotations

import logging

from dotlang.cmd import exec_dot
from dotlang.config import ExecConfig, PrinterContext
from dotlang.errors import DotError, DotExecError, DotParseError, InvalidAstError
from dotlang.ir.ast import (
    Attribute,
    AttributeStatement,
    Edge,
    Graph,
    Id,
    Node,
    NodeId,
    Port,
    Subgraph,
)
from dotlang.parsers import parse, parse_statement
from dotlang.printer import DotPrinter, print_dot
from dotlang.types import AttributeTarget, CompassPoint, IdKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Attribute",
    "AttributeStatement",
    "AttributeTarget",
    "CompassPoint",
    "DotError",
    "DotExecError",
    "DotParseError",
    "DotPrinter",
    "Edge",
    "ExecConfig",
    "Graph",
    "Id",
    "IdKind",
    "InvalidAstError",
    "Node",
    "NodeId",
    "Port",
    "PrinterContext",
    "Subgraph",
    "exec_dot",
    "parse",
    "parse_statement",
    "print_dot",
    "reformat",
]


def reformat(src: str, ctx: PrinterContext | None = None) -> str:
    """Parse DOT source and print it back in canonical form.

    Raises:
        DotParseError: If the input cannot be parsed.
    """
    return print_dot(parse(src), ctx)
