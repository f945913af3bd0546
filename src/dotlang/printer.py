"""DOT pretty printer.

Serializes AST values back into DOT text under a PrinterContext. Bodies are
exploded one statement per line unless the context asks for everything on
one line; an edge statement is kept on one line whenever that rendering fits
within ``inline_size_threshold``, including any subgraphs in its chain.

Edge arrows always follow the directedness of the graph being printed, never
the token used in the source.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from dotlang.config import PrinterContext
from dotlang.ir.ast import (
    Attribute,
    AttributeStatement,
    Edge,
    Graph,
    Id,
    Node,
    NodeId,
    Port,
    Statement,
    Subgraph,
)
from dotlang.types import IdKind

logger = logging.getLogger(__name__)


def _ends_in_bare_subgraph(stmt: Statement) -> bool:
    """True when the statement ends with a node named by the bare word ``subgraph``.

    A following id or brace would be read as that subgraph's name or body,
    so such a statement is terminated with a semicolon.
    """
    if isinstance(stmt, Node):
        last, attrs = stmt.id, stmt.attrs
    elif isinstance(stmt, Edge):
        last, attrs = stmt.chain[-1], stmt.attrs
    else:
        return False
    return (
        not attrs
        and isinstance(last, NodeId)
        and last.port is None
        and last.id.kind is IdKind.Plain
        and last.id.value == "subgraph"
    )


class DotPrinter:
    """Prints AST values with one PrinterContext.

    ``directed`` selects the edge arrow for values printed outside a Graph;
    printing a Graph sets it from the graph itself.
    """

    def __init__(self, ctx: PrinterContext | None = None, directed: bool = False) -> None:
        self.ctx = ctx if ctx is not None else PrinterContext()
        self.directed = directed
        self._inline = self.ctx.always_inline

    def print(self, item: Graph | Statement | NodeId | Port | Id) -> str:
        if isinstance(item, Graph):
            return self.graph(item)
        if isinstance(item, NodeId):
            return self.node_id(item)
        if isinstance(item, Port):
            return self.port(item)
        if isinstance(item, Id):
            return str(item)
        return self.statement(item)

    # ── Leaves ────────────────────────────────────────────────────────────────

    def port(self, port: Port) -> str:
        parts = [str(port.id)] if port.id is not None else []
        if port.compass is not None:
            parts.append(port.compass.value)
        return "".join(f":{p}" for p in parts)

    def node_id(self, node_id: NodeId) -> str:
        if node_id.port is None:
            return str(node_id.id)
        return f"{node_id.id}{self.port(node_id.port)}"

    def attribute(self, attr: Attribute) -> str:
        return f"{attr.key}={attr.value}"

    def attr_list(self, attrs: tuple[Attribute, ...], always: bool = False) -> str:
        if not attrs and not always:
            return ""
        sep = ";" if self.ctx.use_semicolons else ","
        return "[" + sep.join(self.attribute(a) for a in attrs) + "]"

    # ── Statements ────────────────────────────────────────────────────────────

    def statement(self, stmt: Statement) -> str:
        if isinstance(stmt, Node):
            text = self.node_id(stmt.id) + self.attr_list(stmt.attrs)
        elif isinstance(stmt, Edge):
            text = self.edge(stmt)
        elif isinstance(stmt, Subgraph):
            text = self.subgraph(stmt)
        elif isinstance(stmt, Attribute):
            text = self.attribute(stmt)
        elif isinstance(stmt, AttributeStatement):
            # the bracket list is mandatory, otherwise `node` reads back as a node
            text = stmt.target.value + self.attr_list(stmt.attrs, always=True)
        else:
            raise TypeError(f"cannot print {type(stmt).__name__}")
        if self.ctx.use_semicolons or _ends_in_bare_subgraph(stmt):
            return text + ";"
        return text

    def edge(self, edge: Edge) -> str:
        if not self._inline:
            with self._inline_mode():
                one_line = self._edge_text(edge)
            if len(one_line) <= self.ctx.inline_size_threshold:
                return one_line
        return self._edge_text(edge)

    def _edge_text(self, edge: Edge) -> str:
        arrow = " -> " if self.directed else " -- "
        chain = arrow.join(self.subgraph(v) if isinstance(v, Subgraph) else self.node_id(v) for v in edge.chain)
        return f"{chain} {self.attr_list(edge.attrs)}"

    def subgraph(self, subgraph: Subgraph) -> str:
        header = "subgraph" if subgraph.id is None else f"subgraph {subgraph.id}"
        return f"{header} {self.body(subgraph.body)}"

    # ── Blocks ────────────────────────────────────────────────────────────────

    def body(self, stmts: tuple[Statement, ...]) -> str:
        if not stmts:
            return "{}"
        if self._inline:
            # one-line bodies drop the space an attribute-free edge ends with
            return "{" + " ".join(self.statement(s).rstrip(" ") for s in stmts) + "}"
        ls = self.ctx.line_separator
        closing = " " * self.ctx.current_indent + "}"
        # contents sit two steps in: one for the block, one for its statements
        with self._nested(2):
            pad = " " * self.ctx.current_indent
            lines = [pad + self.statement(s) for s in stmts]
        return "{" + ls + ls.join(lines) + ls + closing

    def graph(self, graph: Graph) -> str:
        self.directed = graph.directed
        header = ["strict"] if graph.strict else []
        header.append("digraph" if graph.directed else "graph")
        if graph.id is not None:
            header.append(str(graph.id))
        return " ".join(header) + " " + self.body(graph.body)

    @contextmanager
    def _nested(self, levels: int) -> Iterator[None]:
        step = self.ctx.indent_step * levels
        self.ctx.current_indent += step
        try:
            yield
        finally:
            self.ctx.current_indent -= step

    @contextmanager
    def _inline_mode(self) -> Iterator[None]:
        previous = self._inline
        self._inline = True
        try:
            yield
        finally:
            self._inline = previous


def print_dot(graph: Graph, ctx: PrinterContext | None = None) -> str:
    """Render a Graph as DOT text.

    Args:
        graph: The graph to print.
        ctx: Formatting settings; a default PrinterContext when omitted.

    Returns:
        The DOT source, without a trailing newline.

    Nesting is printed recursively, so a tree built by hand with many
    hundreds of nested subgraphs can exceed the interpreter recursion limit.
    Anything ``parse`` accepts prints within it.
    """
    text = DotPrinter(ctx).graph(graph)
    logger.debug("printed %d top-level statements into %d characters", len(graph.body), len(text))
    return text
