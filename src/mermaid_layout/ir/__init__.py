"""Intermediate representation: diagram model and GraphIR."""

from mermaid_layout.ir.ast import Bounds, DiagramGraph, Edge, Node, Subgraph
from mermaid_layout.ir.graph import GraphIR

__all__ = [
    "Bounds",
    "DiagramGraph",
    "Edge",
    "GraphIR",
    "Node",
    "Subgraph",
]
