"""AST data structures for the DOT language.

The parser produces these values and the printer consumes them. They can
also be built directly (see builders.py). Every value is an immutable tree:
sequences are stored as tuples and constructors reject arguments that could
not have come out of a successful parse.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from dotlang import grammar
from dotlang.errors import InvalidAstError
from dotlang.types import AttributeTarget, CompassPoint, IdKind


@dataclass(frozen=True)
class Id:
    """An identifier as written in source.

    ``value`` holds the plain text for Plain ids, the still-escaped text
    between the quotes for Quoted ids, and the text inside the outer angle
    brackets for Html ids.
    """

    kind: IdKind
    value: str

    def __post_init__(self) -> None:
        if self.kind is IdKind.Plain and not grammar.is_plain(self.value):
            raise InvalidAstError(f"not a plain identifier or number: {self.value!r}")
        if self.kind is IdKind.Quoted and grammar.QUOTED_BODY_RE.fullmatch(self.value) is None:
            raise InvalidAstError(f"unescaped quote or dangling backslash in {self.value!r}")
        if self.kind is IdKind.Html and grammar.scan_html(f"<{self.value}>", 0) != len(self.value) + 2:
            raise InvalidAstError(f"unbalanced angle brackets in html label {self.value!r}")

    @classmethod
    def plain(cls, value: str) -> Id:
        return cls(IdKind.Plain, value)

    @classmethod
    def quoted(cls, value: str) -> Id:
        """Wrap text that is already escaped."""
        return cls(IdKind.Quoted, value)

    @classmethod
    def html(cls, value: str) -> Id:
        return cls(IdKind.Html, value)

    @classmethod
    def quote(cls, raw: str) -> Id:
        """Quote arbitrary text, escaping embedded quotes and backslashes."""
        return cls(IdKind.Quoted, grammar.escape(raw))

    @classmethod
    def of(cls, text: str) -> Id:
        """Plain when ``text`` can stand unquoted, quoted otherwise."""
        if grammar.is_plain(text) and text not in grammar.KEYWORDS:
            return cls.plain(text)
        return cls.quote(text)

    @property
    def text(self) -> str:
        """The logical value, with quoted-string escapes resolved."""
        if self.kind is IdKind.Quoted:
            return grammar.unescape(self.value)
        return self.value

    def __str__(self) -> str:
        if self.kind is IdKind.Quoted:
            return f'"{self.value}"'
        if self.kind is IdKind.Html:
            return f"<{self.value}>"
        return self.value


@dataclass(frozen=True)
class Port:
    id: Id | None = None
    compass: CompassPoint | None = None

    def __post_init__(self) -> None:
        if self.id is None and self.compass is None:
            raise InvalidAstError("a port needs an id, a compass point or both")


@dataclass(frozen=True)
class NodeId:
    id: Id
    port: Port | None = None


@dataclass(frozen=True)
class Attribute:
    key: Id
    value: Id


def _attributes(attrs: object) -> tuple[Attribute, ...]:
    result = tuple(attrs)  # type: ignore[call-overload]
    for a in result:
        if not isinstance(a, Attribute):
            raise InvalidAstError(f"expected Attribute, got {type(a).__name__}")
    return result


def _statements(body: object) -> tuple[Statement, ...]:
    result = tuple(body)  # type: ignore[call-overload]
    for stmt in result:
        if not isinstance(stmt, STATEMENT_TYPES):
            raise InvalidAstError(f"expected a statement, got {type(stmt).__name__}")
    return result


@dataclass(frozen=True)
class Node:
    id: NodeId
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", _attributes(self.attrs))
        # `node [...]` with a bare keyword always reads as an attribute statement
        if (
            self.attrs
            and self.id.port is None
            and self.id.id.kind is IdKind.Plain
            and self.id.id.value in _TARGET_KEYWORDS
        ):
            raise InvalidAstError(f"bare keyword {self.id.id.value!r} with attributes is an attribute statement")


_TARGET_KEYWORDS = frozenset(t.value for t in AttributeTarget)


@dataclass(frozen=True)
class Subgraph:
    id: Id | None = None
    body: tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", _statements(self.body))

    def extended(self, *stmts: Statement) -> Subgraph:
        return replace(self, body=self.body + stmts)


@dataclass(frozen=True)
class Edge:
    """A chain of two or more vertices sharing one attribute list."""

    chain: tuple[Vertex, ...]
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        chain = tuple(self.chain)
        if len(chain) < 2:
            raise InvalidAstError(f"an edge needs at least two vertices, got {len(chain)}")
        for v in chain:
            if not isinstance(v, (NodeId, Subgraph)):
                raise InvalidAstError(f"expected NodeId or Subgraph in edge chain, got {type(v).__name__}")
        object.__setattr__(self, "chain", chain)
        object.__setattr__(self, "attrs", _attributes(self.attrs))


@dataclass(frozen=True)
class AttributeStatement:
    """Default attributes for the graph, nodes or edges: ``node [shape=box]``."""

    target: AttributeTarget
    attrs: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", _attributes(self.attrs))


@dataclass(frozen=True)
class Graph:
    strict: bool = False
    directed: bool = False
    id: Id | None = None
    body: tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", _statements(self.body))

    def extended(self, *stmts: Statement) -> Graph:
        return replace(self, body=self.body + stmts)


Vertex = Union[NodeId, Subgraph]
Statement = Union[Node, Edge, Subgraph, Attribute, AttributeStatement]

STATEMENT_TYPES = (Node, Edge, Subgraph, Attribute, AttributeStatement)
