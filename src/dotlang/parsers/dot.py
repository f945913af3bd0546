"""DOT parser — hand-rolled recursive descent.

Implements the grammar documented in dotlang.grammar and builds the AST
types from dotlang.ir.ast. The parse is all-or-nothing: either a complete
Graph comes back or DotParseError is raised for the furthest position the
parser could reach.

Arrow tokens are accepted regardless of the declared graph type; the
printer normalizes them.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from dotlang import grammar
from dotlang.errors import DotParseError
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
    Vertex,
)
from dotlang.types import AttributeTarget, CompassPoint, IdKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _rule(name: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Name the grammar rule a parse method implements, for error reports."""

    def decorate(method: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(method)
        def wrapper(self: _Cursor, *args: object) -> T:
            self.rules.append(name)
            try:
                return method(self, *args)
            finally:
                self.rules.pop()

        return wrapper

    return decorate


@dataclass
class _Cursor:
    """Stateful parser cursor over the input string."""

    src: str
    pos: int = 0
    rules: list[str] = field(default_factory=list)
    # furthest failure seen so far, reported when the parse gives up
    fail_pos: int = -1
    fail_rule: str = "file"
    fail_depth: int = 0
    fail_expected: set[str] = field(default_factory=set)

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def skip_ws(self) -> None:
        """Skip whitespace and all three comment forms."""
        while True:
            m = grammar.WHITESPACE_RE.match(self.src, self.pos) or grammar.COMMENT_RE.match(self.src, self.pos)
            if not m:
                break
            self.pos = m.end()

    def expected(self, what: str) -> None:
        """Record a failed expectation at the current position.

        Only the furthest position is kept. Among failures at that position
        the outermost rule names the error.
        """
        if self.pos > self.fail_pos:
            self.fail_pos = self.pos
            self.fail_expected = {what}
            self._set_fail_rule()
        elif self.pos == self.fail_pos:
            self.fail_expected.add(what)
            if len(self.rules) < self.fail_depth:
                self._set_fail_rule()

    def _set_fail_rule(self) -> None:
        self.fail_rule = self.rules[-1] if self.rules else "file"
        self.fail_depth = len(self.rules)

    def literal(self, token: str) -> bool:
        self.skip_ws()
        if self.src.startswith(token, self.pos):
            self.pos += len(token)
            return True
        self.expected(repr(token))
        return False

    def keyword(self, word: str) -> bool:
        """Match ``word`` only when no identifier character follows it."""
        self.skip_ws()
        end = self.pos + len(word)
        if self.src.startswith(word, self.pos) and not (end < len(self.src) and grammar.is_ident_char(self.src[end])):
            self.pos = end
            return True
        self.expected(repr(word))
        return False

    def match_re(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        m = pattern.match(self.src, self.pos)
        if m:
            self.pos = m.end()
        return m

    def error(self) -> DotParseError:
        return DotParseError(self.src, self.fail_pos, self.fail_rule, frozenset(self.fail_expected))

    # ── Ids ───────────────────────────────────────────────────────────────────

    @_rule("id")
    def parse_id(self) -> Id | None:
        self.skip_ws()
        if self.src.startswith('"', self.pos):
            m = self.match_re(grammar.QUOTED_RE)
            if m:
                return Id.quoted(m.group(1))
            self.expected("closing '\"'")
            return None
        if self.src.startswith("<", self.pos):
            end = grammar.scan_html(self.src, self.pos)
            if end is not None:
                value = self.src[self.pos + 1 : end - 1]
                self.pos = end
                return Id.html(value)
            self.expected("closing '>'")
            return None
        m = self.match_re(grammar.PLAIN_RE)
        if m:
            return Id.plain(m.group(0))
        self.expected("id")
        return None

    # ── Node ids and ports ────────────────────────────────────────────────────

    @_rule("port")
    def parse_port(self) -> Port | None:
        saved = self.pos
        if not self.literal(":"):
            return None
        first = self.parse_id()
        if first is None:
            self.pos = saved
            return None
        before_compass = self.pos
        if self.literal(":"):
            compass = self.parse_compass()
            if compass is not None:
                return Port(first, compass)
            self.pos = before_compass
        # a lone component that spells a compass point is the compass point
        if first.kind is IdKind.Plain:
            compass = CompassPoint.parse(first.value)
            if compass is not None:
                return Port(None, compass)
        return Port(first, None)

    @_rule("compass")
    def parse_compass(self) -> CompassPoint | None:
        saved = self.pos
        self.skip_ws()
        m = grammar.IDENT_RE.match(self.src, self.pos)
        compass = CompassPoint.parse(m.group(0)) if m else None
        if m is None or compass is None:
            self.expected("compass point")
            self.pos = saved
            return None
        self.pos = m.end()
        return compass

    @_rule("node_id")
    def parse_node_id(self) -> NodeId | None:
        id = self.parse_id()
        if id is None:
            return None
        return NodeId(id, self.parse_port())

    # ── Attributes ────────────────────────────────────────────────────────────

    @_rule("bare_attr")
    def parse_bare_attr(self) -> Attribute | None:
        saved = self.pos
        key = self.parse_id()
        if key is not None and self.literal("="):
            value = self.parse_id()
            if value is not None:
                return Attribute(key, value)
        self.pos = saved
        return None

    @_rule("attr_list")
    def parse_attr_list(self) -> list[Attribute] | None:
        """One or more bracket groups, concatenated into one list."""
        attrs: list[Attribute] | None = None
        while True:
            saved = self.pos
            if not self.literal("["):
                return attrs
            group: list[Attribute] = []
            while True:
                attr = self.parse_bare_attr()
                if attr is None:
                    break
                group.append(attr)
                if not self.literal(";"):
                    self.literal(",")
            if not self.literal("]"):
                self.pos = saved
                return attrs
            attrs = (attrs or []) + group

    @_rule("attr_stmt")
    def parse_attr_stmt(self) -> AttributeStatement | None:
        saved = self.pos
        for target in AttributeTarget:
            if self.keyword(target.value):
                attrs = self.parse_attr_list()
                if attrs is not None:
                    return AttributeStatement(target, attrs)
                self.pos = saved
        return None

    # ── Subgraphs and bodies ──────────────────────────────────────────────────

    @_rule("subgraph")
    def parse_subgraph(self) -> Subgraph | None:
        saved = self.pos
        id = None
        if self.keyword("subgraph"):
            id = self.parse_id()
        body = self.parse_body()
        if body is None:
            self.pos = saved
            return None
        return Subgraph(id, body)

    @_rule("body")
    def parse_body(self) -> list[Statement] | None:
        saved = self.pos
        if not self.literal("{"):
            return None
        stmts: list[Statement] = []
        while True:
            stmt = self.parse_stmt()
            if stmt is None:
                break
            stmts.append(stmt)
            self.literal(";")
        if not self.literal("}"):
            self.pos = saved
            return None
        return stmts

    # ── Statements ────────────────────────────────────────────────────────────

    @_rule("vertex")
    def parse_vertex(self) -> Vertex | None:
        vertex: Vertex | None = self.parse_subgraph()
        if vertex is None:
            vertex = self.parse_node_id()
        if vertex is None:
            saved = self.pos
            self.skip_ws()
            self.expected("vertex")
            self.pos = saved
        return vertex

    @_rule("edge_stmt")
    def parse_edge_tail(self) -> list[Vertex]:
        """Zero or more ``arrow vertex`` hops following a first vertex."""
        hops: list[Vertex] = []
        while True:
            saved = self.pos
            if not (self.literal("->") or self.literal("--")):
                return hops
            vertex = self.parse_vertex()
            if vertex is None:
                self.pos = saved
                return hops
            hops.append(vertex)

    @_rule("stmt")
    def parse_stmt(self) -> Statement | None:
        """Try each statement form; longer forms win over a bare node.

        The first vertex is parsed once and shared between the edge,
        subgraph, bare attribute and node alternatives so nested subgraphs
        are not re-parsed on backtracking.
        """
        attr_stmt = self.parse_attr_stmt()
        if attr_stmt is not None:
            return attr_stmt

        saved = self.pos
        head = self.parse_vertex()
        if head is None:
            return None

        hops = self.parse_edge_tail()
        if hops:
            return Edge([head, *hops], self.parse_attr_list() or [])

        if isinstance(head, Subgraph):
            return head

        if head.port is None and self.literal("="):
            value = self.parse_id()
            if value is None:
                self.pos = saved
                return None
            return Attribute(head.id, value)

        return Node(head, self.parse_attr_list() or [])

    # ── Top level ─────────────────────────────────────────────────────────────

    @_rule("graph")
    def parse_graph(self) -> Graph | None:
        strict = self.keyword("strict")
        if self.keyword("digraph"):
            directed = True
        elif self.keyword("graph"):
            directed = False
        else:
            return None
        id = self.parse_id()
        body = self.parse_body()
        if body is None:
            return None
        return Graph(strict=strict, directed=directed, id=id, body=body)

    def finish(self) -> None:
        self.skip_ws()
        if not self.eof():
            self.expected("end of input")
            raise self.error()

    @_rule("file")
    def parse_file(self) -> Graph:
        graph = self.parse_graph()
        if graph is None:
            raise self.error()
        self.finish()
        return graph

    @_rule("fragment")
    def parse_fragment(self) -> Statement:
        stmt = self.parse_stmt()
        if stmt is None:
            raise self.error()
        self.literal(";")
        self.finish()
        return stmt


def _too_deep(cursor: _Cursor) -> DotParseError:
    """Nesting ran past the interpreter recursion limit at the cursor position."""
    return DotParseError(cursor.src, cursor.pos, "body", frozenset({"shallower nesting"}))


class DotParser:
    """Parses one DOT document into a Graph."""

    def __init__(self, src: str) -> None:
        self.src = src

    def parse(self) -> Graph:
        cursor = _Cursor(src=self.src)
        try:
            graph = cursor.parse_file()
        except RecursionError:
            raise _too_deep(cursor) from None
        logger.debug(
            "parsed %s %s with %d top-level statements",
            "digraph" if graph.directed else "graph",
            graph.id if graph.id is not None else "<anonymous>",
            len(graph.body),
        )
        return graph

    def parse_statement(self) -> Statement:
        cursor = _Cursor(src=self.src)
        try:
            return cursor.parse_fragment()
        except RecursionError:
            raise _too_deep(cursor) from None


def parse(src: str) -> Graph:
    """Parse DOT source text and return a Graph AST.

    Raises DotParseError (a ValueError) when the text does not match.
    """
    return DotParser(src).parse()


def parse_statement(src: str) -> Statement:
    """Parse a single statement such as ``a -> b [color=red]`` or a subgraph."""
    return DotParser(src).parse_statement()
