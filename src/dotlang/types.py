"""Shared type definitions for dotlang.

Enums used across the AST, parser, printer and attribute tables.
"""

from __future__ import annotations

from enum import Enum, auto


class IdKind(Enum):
    Plain = auto()  # abc, 42, -.5
    Quoted = auto()  # "a b"
    Html = auto()  # <<b>a</b>>


class CompassPoint(Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"
    C = "c"
    Any = "_"

    @classmethod
    def parse(cls, text: str) -> CompassPoint | None:
        try:
            return cls(text)
        except ValueError:
            return None


class AttributeTarget(Enum):
    Graph = "graph"
    Node = "node"
    Edge = "edge"
