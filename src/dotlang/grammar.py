"""Grammar of the DOT graph description language.

The PEG below documents the accepted language. parsers/dot.py implements it
by hand as a recursive-descent parser; the token patterns it relies on are
compiled here so the AST model can validate ids against the same rules.

Whitespace and comments may appear between any two tokens. Keywords are
lowercase and must not run into a following identifier character.
"""

from __future__ import annotations

import re

GRAMMAR = r"""
file        = SOI graph EOI
graph       = "strict"? ("graph" / "digraph") id? body
body        = "{" (stmt ";"?)* "}"
stmt        = attr_stmt / edge_stmt / subgraph / bare_attr / node
attr_stmt   = ("graph" / "node" / "edge") attr_list
edge_stmt   = vertex (arrow vertex)+ attr_list?
arrow       = "->" / "--"
vertex      = subgraph / node_id
subgraph    = ("subgraph" id?)? body
bare_attr   = id "=" id
node        = node_id attr_list?
node_id     = id port?
port        = ":" id (":" compass)?
compass     = "n" / "ne" / "e" / "se" / "s" / "sw" / "w" / "nw" / "c" / "_"
attr_list   = ("[" (bare_attr (";" / ",")?)* "]")+
id          = plain / string_qt / html
plain       = ~"[A-Za-z_][A-Za-z0-9_]*" / number
number      = ~"-?(?:(?:0|[1-9][0-9]*)(?:\.[0-9]+)?|\.[0-9]+)"
string_qt   = "\"" ~"(?:[^\"\\]|\\.)*" "\""
html        = "<" (html / ~"[^<>]")* ">"

WHITESPACE  = " " / "\t" / "\r\n" / "\n"
COMMENT     = ~"#[^\n]*" / ~"//[^\n]*" / ~"/\*.*?\*/"
"""

KEYWORDS = frozenset({"strict", "graph", "digraph", "subgraph", "node", "edge"})

WHITESPACE_RE = re.compile(r"(?:[ \t]|\r?\n)+")
COMMENT_RE = re.compile(r"#[^\n]*|//[^\n]*|/\*.*?\*/", re.DOTALL)

IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NUMBER_RE = re.compile(r"-?(?:(?:0|[1-9][0-9]*)(?:\.[0-9]+)?|\.[0-9]+)")
PLAIN_RE = re.compile(rf"{IDENT_RE.pattern}|{NUMBER_RE.pattern}")

QUOTED_BODY_RE = re.compile(r'(?:[^"\\]|\\.)*', re.DOTALL)
QUOTED_RE = re.compile(rf'"({QUOTED_BODY_RE.pattern})"', re.DOTALL)

_IDENT_CHAR_RE = re.compile(r"[A-Za-z0-9_]")
_UNESCAPE_RE = re.compile(r"\\(\r?\n|.)", re.DOTALL)
_ESCAPE_RE = re.compile(r'(["\\])')


def is_plain(text: str) -> bool:
    return PLAIN_RE.fullmatch(text) is not None


def is_ident_char(ch: str) -> bool:
    return _IDENT_CHAR_RE.fullmatch(ch) is not None


def scan_html(src: str, start: int) -> int | None:
    """Return the index just past the ``>`` closing the label opened at ``start``.

    Angle brackets nest, so the label ends where the depth returns to zero.
    Returns None when ``src[start]`` is not ``<`` or the label is unterminated.
    """
    if not src.startswith("<", start):
        return None
    depth = 0
    for i in range(start, len(src)):
        ch = src[i]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def escape(raw: str) -> str:
    """Escape ``raw`` so it can sit between double quotes."""
    return _ESCAPE_RE.sub(r"\\\1", raw)


def unescape(body: str) -> str:
    """Decode the text between double quotes.

    A backslash before a newline is a line continuation and vanishes together
    with the newline; a backslash before any other character is dropped and
    the character kept.
    """
    return _UNESCAPE_RE.sub(lambda m: "" if m.group(1).endswith("\n") else m.group(1), body)
