"""Graph IR — a networkx view of a DOT AST.

Flattens the statement tree into a networkx multigraph the way graphviz
reads it: a node is identified by the logical text of its id, node
attributes from later statements override earlier ones, every hop of an
edge chain becomes one edge, and a subgraph used as an edge endpoint stands
for every node mentioned inside it. Named subgraph membership and default
attribute statements are kept alongside for callers that need them.

The AST stays the source of truth; nothing here feeds back into printing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx

from dotlang.ir import ast
from dotlang.types import AttributeTarget


def _attr_dict(attrs: tuple[ast.Attribute, ...]) -> dict[str, str]:
    return {a.key.text: a.value.text for a in attrs}


def _port_text(port: ast.Port | None) -> str | None:
    if port is None:
        return None
    parts = [port.id.text] if port.id is not None else []
    if port.compass is not None:
        parts.append(port.compass.value)
    return ":".join(parts)


@dataclass
class GraphIR:
    """The graph intermediate representation built from an AST Graph.

    Wraps a networkx MultiDiGraph (or MultiGraph for undirected input).
    """

    graph: nx.MultiGraph
    strict: bool
    subgraph_members: list[tuple[str, list[str]]] = field(default_factory=list)
    node_defaults: dict[str, str] = field(default_factory=dict)
    edge_defaults: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_ast(cls, ast_graph: ast.Graph) -> GraphIR:
        """Build a GraphIR from an AST Graph."""
        g: nx.MultiGraph = nx.MultiDiGraph() if ast_graph.directed else nx.MultiGraph()
        if ast_graph.id is not None:
            g.graph["name"] = ast_graph.id.text
        ir = cls(graph=g, strict=ast_graph.strict)
        ir._collect(ast_graph.body, subgraph=None, top_level=True)
        return ir

    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def degree(self, node_id: str) -> int:
        if node_id not in self.graph:
            return 0
        return self.graph.degree(node_id)

    # ── Construction ──────────────────────────────────────────────────────────

    def _ensure_node(self, node_id: ast.NodeId, subgraph: str | None) -> str:
        key = node_id.id.text
        if key not in self.graph:
            self.graph.add_node(key)
        if subgraph is not None:
            self.graph.nodes[key].setdefault("subgraph", subgraph)
        return key

    def _collect(self, body: tuple[ast.Statement, ...], subgraph: str | None, top_level: bool = False) -> list[str]:
        """Add every statement of ``body``; return the node ids it mentions, in order."""
        mentioned: list[str] = []

        def mention(keys: list[str]) -> None:
            mentioned.extend(k for k in keys if k not in mentioned)

        for stmt in body:
            if isinstance(stmt, ast.Node):
                key = self._ensure_node(stmt.id, subgraph)
                self.graph.nodes[key].update(_attr_dict(stmt.attrs))
                mention([key])
            elif isinstance(stmt, ast.Edge):
                mention(self._add_edge(stmt, subgraph))
            elif isinstance(stmt, ast.Subgraph):
                mention(self._collect_subgraph(stmt, subgraph))
            elif isinstance(stmt, ast.Attribute):
                if top_level:
                    self.graph.graph[stmt.key.text] = stmt.value.text
            elif stmt.target is AttributeTarget.Graph:
                if top_level:
                    self.graph.graph.update(_attr_dict(stmt.attrs))
            elif stmt.target is AttributeTarget.Node:
                self.node_defaults.update(_attr_dict(stmt.attrs))
            else:
                self.edge_defaults.update(_attr_dict(stmt.attrs))
        return mentioned

    def _collect_subgraph(self, sg: ast.Subgraph, parent: str | None) -> list[str]:
        name = sg.id.text if sg.id is not None else None
        members = self._collect(sg.body, subgraph=name if name is not None else parent)
        if name is not None:
            self.subgraph_members.append((name, members))
        return members

    def _endpoints(self, vertex: ast.Vertex, subgraph: str | None) -> tuple[list[str], str | None]:
        if isinstance(vertex, ast.Subgraph):
            return self._collect_subgraph(vertex, subgraph), None
        return [self._ensure_node(vertex, subgraph)], _port_text(vertex.port)

    def _add_edge(self, edge: ast.Edge, subgraph: str | None) -> list[str]:
        attrs = _attr_dict(edge.attrs)
        mentioned: list[str] = []
        tails, tail_port = self._endpoints(edge.chain[0], subgraph)
        mentioned.extend(tails)
        for vertex in edge.chain[1:]:
            heads, head_port = self._endpoints(vertex, subgraph)
            mentioned.extend(h for h in heads if h not in mentioned)
            for u in tails:
                for v in heads:
                    data = dict(attrs)
                    if tail_port is not None:
                        data.setdefault("tailport", tail_port)
                    if head_port is not None:
                        data.setdefault("headport", head_port)
                    self.graph.add_edges_from([(u, v, data)])
            tails, tail_port = heads, head_port
        return mentioned
