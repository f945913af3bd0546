"""Intermediate representation: AST and GraphIR."""

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
from dotlang.ir.graph import GraphIR

__all__ = [
    "Attribute",
    "AttributeStatement",
    "Edge",
    "Graph",
    "GraphIR",
    "Id",
    "Node",
    "NodeId",
    "Port",
    "Statement",
    "Subgraph",
    "Vertex",
]
