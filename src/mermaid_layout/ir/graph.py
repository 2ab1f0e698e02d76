"""Graph IR: wraps a DiagramGraph's topology in a networkx DiGraph.

The layout engine asks this module for adjacency and root nodes. Node insertion
order and successor discovery order follow the DiagramGraph's node dict and edge
list, so every traversal built on top of it is deterministic.
"""

from __future__ import annotations

import networkx as nx

from mermaid_layout.ir import ast


class GraphIR:
    """Topology view over a DiagramGraph.

    Duplicate edges collapse into one DiGraph edge; successor order is the order in
    which each (from, to) pair first appears in the edge list.
    """

    def __init__(self, digraph: nx.DiGraph, direction: object) -> None:
        self.digraph = digraph
        self.direction = direction

    @classmethod
    def from_diagram(cls, diagram: ast.DiagramGraph) -> GraphIR:
        """Build a GraphIR from a DiagramGraph.

        Edges referencing ids missing from the node set are ignored.
        """
        digraph: nx.DiGraph = nx.DiGraph()
        for node_id, node in diagram.nodes.items():
            digraph.add_node(node_id, data=node)

        for edge in diagram.edges:
            if edge.from_id in digraph and edge.to_id in digraph:
                if not digraph.has_edge(edge.from_id, edge.to_id):
                    digraph.add_edge(edge.from_id, edge.to_id, data=[])
                digraph.edges[edge.from_id, edge.to_id]["data"].append(edge)

        return cls(digraph=digraph, direction=diagram.direction)

    def node_ids(self) -> list[str]:
        return list(self.digraph.nodes)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def in_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.in_degree(node_id)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.out_degree(node_id)

    def successors(self, node_id: str) -> list[str]:
        if node_id not in self.digraph:
            return []
        return list(self.digraph.successors(node_id))

    def roots(self) -> list[str]:
        """Nodes with no incoming edges, falling back to the first node when every node has one."""
        roots = [n for n in self.digraph.nodes if self.digraph.in_degree(n) == 0]
        if not roots and self.digraph.number_of_nodes() > 0:
            roots = [next(iter(self.digraph.nodes))]
        return roots
