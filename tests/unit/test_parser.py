"""Tests for dotlang.parsers — grammar coverage and error reporting."""

import pytest

from dotlang.builders import attr, attr_stmt, edge, esc, graph, html, node, node_id, port, subgraph
from dotlang.errors import DotParseError
from dotlang.ir.ast import Attribute, Edge, Graph, Id, Node, NodeId, Port, Subgraph
from dotlang.parsers import parse, parse_statement
from dotlang.types import AttributeTarget, CompassPoint, IdKind


def _body(src: str):
    return parse(f"digraph {{ {src} }}").body


# ─── Ids ─────────────────────────────────────────────────────────────────────


def test_parse_plain_ids():
    stmts = _body("abc_a 42 -3.5 .5")
    assert [s.id.id for s in stmts] == [Id.plain("abc_a"), Id.plain("42"), Id.plain("-3.5"), Id.plain(".5")]


def test_parse_quoted_id_keeps_escapes():
    (stmt,) = _body(r'"a\b\c.\'\""')
    assert stmt.id.id == Id.quoted(r"a\b\c.\'\"")


def test_parse_quoted_id_with_escaped_quote():
    (stmt,) = _body(r'"ab\"c"')
    assert stmt.id.id.kind == IdKind.Quoted
    assert stmt.id.id.value == r"ab\"c"
    assert stmt.id.id.text == 'ab"c'


def test_parse_quoted_id_spanning_lines():
    (stmt,) = _body('"first\\\nsecond"')
    assert stmt.id.id.value == "first\\\nsecond"
    assert stmt.id.id.text == "firstsecond"


def test_parse_html_ids():
    (stmt,) = _body('a [label=<<IMG SCALE="FAL" SRC="value" /></B>abc </B>>]')
    assert stmt.attrs[0].value == Id.html('<IMG SCALE="FAL" SRC="value" /></B>abc </B>')

    (stmt,) = _body('d [label=<<tr><td>address_id:!@#$%^&*()_+/.,"\\| int</td></tr>>]')
    assert stmt.attrs[0].value == Id.html('<tr><td>address_id:!@#$%^&*()_+/.,"\\| int</td></tr>')


def test_parse_multiline_html_table():
    src = """digraph G {
        a [ label=< <TABLE BORDER="0">
                    <TR><TD>class</TD></TR>
                    </TABLE>>
           ]
        c [ label=<long line 1<BR/>line 2<BR ALIGN="LEFT"/>> ]
    }"""
    g = parse(src)
    assert g.body[0].attrs[0].value.kind == IdKind.Html
    assert g.body[0].attrs[0].value.value.startswith(' <TABLE BORDER="0">')
    assert g.body[1].attrs[0].value == Id.html('long line 1<BR/>line 2<BR ALIGN="LEFT"/>')


# ─── Attributes ──────────────────────────────────────────────────────────────


def test_parse_attr_list_separators():
    (stmt,) = _body("n [a=1 , b=c ; d=<<abc>> e=e]")
    assert stmt.attrs == (attr("a", 1), attr("b", "c"), Attribute(Id.plain("d"), html("<abc>")), attr("e", "e"))


def test_parse_attr_list_groups_concatenate():
    (one,) = _body("n [a=1 , b=c ; d=<<abc>> e=e]")
    (two,) = _body("n [a=1 , b=c] [ d=<<abc>> e=e]")
    assert one == two


def test_parse_empty_attr_list():
    (stmt,) = _body("node []")
    assert stmt == attr_stmt(AttributeTarget.Node)


def test_parse_attribute_statements():
    stmts = _body('graph [_draw_="c 9 "]; node [label="\\N"]; edge [color=red]')
    assert stmts[0] == attr_stmt("graph", Attribute(Id.plain("_draw_"), Id.quoted("c 9 ")))
    assert stmts[1] == attr_stmt("node", Attribute(Id.plain("label"), Id.quoted("\\N")))
    assert stmts[2] == attr_stmt("edge", attr("color", "red"))


def test_parse_bare_attribute():
    (stmt,) = _body("rankdir = LR")
    assert stmt == attr("rankdir", "LR")


def test_keyword_named_attribute_is_bare_attribute():
    (stmt,) = _body("graph = x")
    assert stmt == Attribute(Id.plain("graph"), Id.plain("x"))


def test_duplicate_attributes_preserved():
    (stmt,) = _body("a [color=red, color=blue]")
    assert [a.value.value for a in stmt.attrs] == ["red", "blue"]


# ─── Node ids and ports ──────────────────────────────────────────────────────


def test_parse_ports():
    assert parse_statement("abc:n") == node(node_id("abc", port(compass="n")))
    assert parse_statement("abc:abc") == node(node_id("abc", port("abc")))
    assert parse_statement("abc:abc:n") == node(node_id("abc", port("abc", "n")))


def test_parse_port_on_edge():
    assert parse("digraph test { A:s0 -> B;}").body == (edge(node_id("A", port("s0")), "B"),)
    assert parse("digraph test { A:s0:s -> B;}").body == (edge(node_id("A", port("s0", "s")), "B"),)
    assert parse("digraph test { A:s -> B;}").body == (edge(node_id("A", Port(None, CompassPoint.S)), "B"),)


def test_parse_node_with_port_and_attrs():
    stmt = parse_statement("abc:n[a=1 , b=c ; d=<<abc>> e=e]")
    assert stmt.id == NodeId(Id.plain("abc"), Port(None, CompassPoint.N))
    assert len(stmt.attrs) == 4


# ─── Edges ───────────────────────────────────────────────────────────────────


def test_parse_edge_chain():
    stmt = parse_statement("node -> node1 -> node2[a=2]")
    assert stmt == edge(node_id(Id.plain("node")), "node1", "node2", attrs=[attr("a", 2)])
    assert stmt.chain[0] == NodeId(Id.plain("node"))


def test_parse_three_vertex_chain_in_digraph():
    g = parse("digraph { a -> b -> c }")
    assert len(g.body) == 1
    assert isinstance(g.body[0], Edge)
    assert len(g.body[0].chain) == 3


def test_parse_edge_to_subgraph():
    stmt = parse_statement("node -> subgraph sg{a -> b}[a=2]")
    assert stmt == edge(node_id(Id.plain("node")), subgraph("sg", edge("a", "b")), attrs=[attr("a", 2)])


def test_parse_edge_from_subgraph():
    stmt = parse_statement("subgraph s { a b } -> c")
    assert isinstance(stmt, Edge)
    assert isinstance(stmt.chain[0], Subgraph)


def test_parse_anonymous_brace_subgraph():
    stmt = parse_statement("a -> { b c }")
    assert stmt == edge("a", subgraph(None, node("b"), node("c")))


def test_arrow_tokens_accepted_regardless_of_graph_type():
    assert isinstance(parse("graph { a -> b }").body[0], Edge)
    assert isinstance(parse("digraph { a -- b }").body[0], Edge)


def test_parse_keyword_as_vertex():
    stmt = parse_statement("node -> edge")
    assert stmt == Edge([NodeId(Id.plain("node")), NodeId(Id.plain("edge"))])


# ─── Graphs ──────────────────────────────────────────────────────────────────


def test_parse_strict_digraph():
    g = parse("strict digraph id {}")
    assert g == Graph(strict=True, directed=True, id=Id.plain("id"), body=())


def test_parse_anonymous_graph():
    g = parse("graph { a }")
    assert g.id is None
    assert not g.directed
    assert not g.strict


def test_parse_subgraph_statement():
    g = parse("graph g { subgraph id { abc; a -- b } }")
    assert g.body == (subgraph("id", node("abc"), edge("a", "b")),)


def test_parse_nested_graph():
    g = parse(
        """
        strict digraph t {
            aa[color=green,label="shouln't er\\ror"]
            subgraph v {
                aa[shape=square]
                subgraph vv{a2 -> b2}
                aaa[color=red]
                aaa -> bbb
            }
            aa -> be -> subgraph v { d -> aaa}
            aa -> aaa -> v
        }
        """
    )
    assert g == graph(
        "t",
        node("aa", attr("color", "green"), Attribute(Id.plain("label"), Id.quoted("shouln't er\\ror"))),
        subgraph(
            "v",
            node("aa", attr("shape", "square")),
            subgraph("vv", edge("a2", "b2")),
            node("aaa", attr("color", "red")),
            edge("aaa", "bbb"),
        ),
        edge("aa", "be", subgraph("v", edge("d", "aaa"))),
        edge("aa", "aaa", "v"),
        strict=True,
        directed=True,
    )


def test_statement_order_preserved():
    g = parse("digraph { b; a; c }")
    assert [s.id.id.value for s in g.body] == ["b", "a", "c"]


def test_semicolons_are_optional():
    assert parse("digraph { a; b; }") == parse("digraph { a b }")


def test_parse_comments():
    assert parse("// abc \n # abc \n strict digraph t { \n /* \n abc */ \n}") == graph("t", strict=True, directed=True)


def test_parse_comments_after_graph():
    assert parse("// b \n strict digraph t { \n /* \n abc */ \n} \n // a ") == graph("t", strict=True, directed=True)


def test_comment_between_tokens():
    plain = parse("digraph { a -> b [color=red] }")
    commented = parse("digraph /* c */ { a /* c */ -> // c\n b # c\n [ /* c */ color = red ] }")
    assert plain == commented


def test_crlf_line_endings():
    assert parse("digraph {\r\n  a -> b\r\n}\r\n") == parse("digraph { a -> b }")


def test_esc_builder_matches_parsed_quoted_id():
    assert parse_statement('"a b"') == Node(NodeId(esc("a b")))


# ─── Errors ──────────────────────────────────────────────────────────────────


def test_dangling_arrow_fails_at_end_of_input():
    src = "digraph { a ->"
    with pytest.raises(DotParseError) as exc:
        parse(src)
    assert exc.value.offset == len(src)
    assert exc.value.line == 1
    assert exc.value.column == len(src) + 1
    assert "vertex" in exc.value.expected


def test_dangling_arrow_with_trailing_whitespace():
    src = "digraph {\n  a -> \n"
    with pytest.raises(DotParseError) as exc:
        parse(src)
    assert exc.value.offset == len(src)
    assert exc.value.line == 3


def test_trailing_input_is_an_error():
    src = "graph {} extra"
    with pytest.raises(DotParseError) as exc:
        parse(src)
    assert exc.value.offset == src.index("extra")
    assert "end of input" in exc.value.expected


def test_missing_graph_keyword():
    with pytest.raises(DotParseError) as exc:
        parse("diagraph { }")
    assert exc.value.offset == 0
    assert "'digraph'" in exc.value.expected
    assert exc.value.rule == "graph"


def test_unterminated_quote():
    with pytest.raises(DotParseError) as exc:
        parse('graph { "abc }')
    assert exc.value.offset == len("graph { ")


def test_unclosed_attr_list_reports_position():
    src = "graph { a [color=red }"
    with pytest.raises(DotParseError) as exc:
        parse(src)
    assert exc.value.offset == src.index("}")
    assert "']'" in exc.value.expected


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse("")


def test_parse_error_message_has_location():
    with pytest.raises(DotParseError) as exc:
        parse("digraph {\n  a -> \n}")
    assert str(exc.value).startswith("3:1:")
    assert exc.value.snippet() == "}\n^"


def _nested_subgraphs(depth: int) -> str:
    return "digraph {" + "subgraph {" * depth + "a" + "}" * depth + "}"


def test_moderate_nesting_parses():
    g = parse(_nested_subgraphs(40))
    sg = g.body[0]
    for _ in range(39):
        sg = sg.body[0]
    assert sg.body == (node("a"),)


def test_excessive_nesting_is_a_parse_error():
    with pytest.raises(DotParseError) as exc:
        parse(_nested_subgraphs(5000))
    assert exc.value.rule == "body"
    assert "shallower nesting" in exc.value.expected


def test_excessive_nesting_in_statement_is_a_parse_error():
    with pytest.raises(DotParseError):
        parse_statement("{" * 5000 + "}" * 5000)
