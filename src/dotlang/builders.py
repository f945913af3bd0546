"""Helpers for building AST values by hand.

Thin conveniences over the ir.ast constructors: strings, numbers, booleans
and enums are turned into Ids, and plain strings stand for node ids wherever
a vertex is expected.

    graph(
        "G",
        node("a", attr("shape", "box")),
        edge("a", "b", attrs=[attr("color", "red")]),
        directed=True,
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Union

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
from dotlang.types import AttributeTarget, CompassPoint

IdLike = Union[Id, str, int, float, bool, Enum]


def id_(value: IdLike) -> Id:
    """Coerce a Python value into an Id, quoting only when needed."""
    if isinstance(value, Id):
        return value
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return Id.plain("true" if value else "false")
    return Id.of(str(value))


def esc(text: str) -> Id:
    """Always-quoted id; quotes and backslashes in ``text`` are escaped."""
    return Id.quote(text)


def html(text: str) -> Id:
    """Html id from the text between the outer angle brackets."""
    return Id.html(text)


def attr(key: IdLike, value: IdLike) -> Attribute:
    return Attribute(id_(key), id_(value))


def port(id: IdLike | None = None, compass: CompassPoint | str | None = None) -> Port:
    if isinstance(compass, str):
        compass = CompassPoint(compass)
    return Port(id_(id) if id is not None else None, compass)


def node_id(id: IdLike, port: Port | None = None) -> NodeId:
    return NodeId(id_(id), port)


def _vertex(value: Vertex | IdLike) -> Vertex:
    if isinstance(value, (NodeId, Subgraph)):
        return value
    return node_id(value)


def node(id: NodeId | IdLike, *attrs: Attribute) -> Node:
    return Node(id if isinstance(id, NodeId) else node_id(id), attrs)


def edge(*vertices: Vertex | IdLike, attrs: Iterable[Attribute] = ()) -> Edge:
    """Edge through ``vertices`` in order; needs at least two of them."""
    return Edge(tuple(_vertex(v) for v in vertices), tuple(attrs))


def subgraph(id: IdLike | None = None, *stmts: Statement) -> Subgraph:
    return Subgraph(id_(id) if id is not None else None, stmts)


def attr_stmt(target: AttributeTarget | str, *attrs: Attribute) -> AttributeStatement:
    return AttributeStatement(AttributeTarget(target), attrs)


def graph(
    id: IdLike | None = None,
    *stmts: Statement,
    strict: bool = False,
    directed: bool = False,
) -> Graph:
    return Graph(strict=strict, directed=directed, id=id_(id) if id is not None else None, body=stmts)
