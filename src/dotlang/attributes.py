"""Named graphviz attributes.

Each table class exposes one helper per attribute that may appear on that
kind of element; calling a helper returns an Attribute:

    NodeAttributes.shape(Shape.Box)      # shape=box
    EdgeAttributes.arrowhead(ArrowType.Vee)
    GraphAttributes.rankdir(RankDir.LR)

The tables only name attributes. Values are not checked against what
graphviz accepts.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from dotlang.builders import IdLike, attr
from dotlang.ir.ast import Attribute
from dotlang.types import AttributeTarget

AttributeHelper = Callable[[IdLike], Attribute]


class Shape(Enum):
    Box = "box"
    Polygon = "polygon"
    Ellipse = "ellipse"
    Oval = "oval"
    Circle = "circle"
    Point = "point"
    Egg = "egg"
    Triangle = "triangle"
    Plaintext = "plaintext"
    Plain = "plain"
    Diamond = "diamond"
    Trapezium = "trapezium"
    Parallelogram = "parallelogram"
    House = "house"
    Hexagon = "hexagon"
    Octagon = "octagon"
    DoubleCircle = "doublecircle"
    Rect = "rect"
    Square = "square"
    Star = "star"
    None_ = "none"
    Underline = "underline"
    Cylinder = "cylinder"
    Note = "note"
    Tab = "tab"
    Folder = "folder"
    Box3d = "box3d"
    Component = "component"
    Record = "record"
    Mrecord = "Mrecord"


class Style(Enum):
    Solid = "solid"
    Dashed = "dashed"
    Dotted = "dotted"
    Bold = "bold"
    Rounded = "rounded"
    Diagonals = "diagonals"
    Filled = "filled"
    Striped = "striped"
    Wedged = "wedged"
    Invis = "invis"


class RankDir(Enum):
    TB = "TB"
    LR = "LR"
    BT = "BT"
    RL = "RL"


class ArrowType(Enum):
    Normal = "normal"
    Inv = "inv"
    Dot = "dot"
    InvDot = "invdot"
    ODot = "odot"
    InvODot = "invodot"
    None_ = "none"
    Tee = "tee"
    Empty = "empty"
    InvEmpty = "invempty"
    Diamond = "diamond"
    ODiamond = "odiamond"
    EDiamond = "ediamond"
    Crow = "crow"
    Box = "box"
    OBox = "obox"
    Open = "open"
    HalfOpen = "halfopen"
    Vee = "vee"


class Dir(Enum):
    Forward = "forward"
    Back = "back"
    Both = "both"
    None_ = "none"


class Color(Enum):
    Black = "black"
    White = "white"
    Red = "red"
    Green = "green"
    Blue = "blue"
    Yellow = "yellow"
    Orange = "orange"
    Purple = "purple"
    Gray = "gray"
    LightGray = "lightgray"
    LightBlue = "lightblue"
    LightYellow = "lightyellow"
    Transparent = "transparent"


def _named(name: str) -> staticmethod:
    def helper(value: IdLike) -> Attribute:
        return attr(name, value)

    helper.__name__ = name
    helper.__doc__ = f"The ``{name}`` attribute."
    return staticmethod(helper)


_COMMON = ("class", "colorscheme", "comment", "fontcolor", "fontname", "fontsize", "href", "id", "label", "tooltip", "URL")


def _table(name: str, attribute_names: tuple[str, ...], doc: str) -> type:
    namespace: dict[str, object] = {"__doc__": doc, "NAMES": frozenset(attribute_names)}
    for attribute in attribute_names:
        # python keywords get a trailing underscore: NodeAttributes.class_
        key = attribute + "_" if attribute in {"class", "id"} else attribute
        namespace[key] = _named(attribute)
    return type(name, (), namespace)


GraphAttributes = _table(
    "GraphAttributes",
    _COMMON
    + (
        "bgcolor",
        "center",
        "charset",
        "compound",
        "concentrate",
        "dpi",
        "labelloc",
        "labeljust",
        "layout",
        "margin",
        "nodesep",
        "ordering",
        "outputorder",
        "overlap",
        "pad",
        "rank",
        "rankdir",
        "ranksep",
        "ratio",
        "rotate",
        "size",
        "splines",
        "style",
    ),
    "Attributes of the root graph.",
)

SubgraphAttributes = _table(
    "SubgraphAttributes",
    _COMMON + ("bgcolor", "cluster", "color", "fillcolor", "labelloc", "labeljust", "pencolor", "penwidth", "rank", "style"),
    "Attributes of subgraphs and clusters.",
)

NodeAttributes = _table(
    "NodeAttributes",
    _COMMON
    + (
        "color",
        "fillcolor",
        "fixedsize",
        "group",
        "height",
        "image",
        "margin",
        "orientation",
        "penwidth",
        "peripheries",
        "pos",
        "regular",
        "shape",
        "sides",
        "style",
        "width",
        "xlabel",
    ),
    "Attributes of nodes.",
)

EdgeAttributes = _table(
    "EdgeAttributes",
    _COMMON
    + (
        "arrowhead",
        "arrowsize",
        "arrowtail",
        "color",
        "constraint",
        "decorate",
        "dir",
        "headlabel",
        "headport",
        "lhead",
        "ltail",
        "minlen",
        "penwidth",
        "style",
        "taillabel",
        "tailport",
        "weight",
        "xlabel",
    ),
    "Attributes of edges.",
)

_TABLES: dict[str, type] = {
    "graph": GraphAttributes,
    "subgraph": SubgraphAttributes,
    "node": NodeAttributes,
    "edge": EdgeAttributes,
}


def lookup(target: AttributeTarget | str, name: str) -> AttributeHelper | None:
    """Return the helper for ``name`` on ``target`` elements, or None if unknown."""
    key = target.value if isinstance(target, AttributeTarget) else target
    table = _TABLES[key]
    if name not in table.NAMES:  # type: ignore[attr-defined]
        return None
    return lambda value: attr(name, value)
