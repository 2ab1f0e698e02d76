"""Data structures for a parsed flowchart diagram.

These types are produced by the parser and annotated in place by the layout engine:
dataclasses Node, Edge, Subgraph, Bounds and the DiagramGraph container, plus the
plain-record export consumed by external renderers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mermaid_layout.types import Direction, EdgeStyle, NodeShape


@dataclass
class Node:
    id: str
    text: str
    shape: NodeShape = field(default_factory=NodeShape.default)
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def new(cls, id: str, text: str, shape: NodeShape) -> Node:
        return cls(id=id, text=text or id, shape=shape)

    @classmethod
    def bare(cls, id: str) -> Node:
        """Create a bare node (text = id, default Rectangle shape)."""
        return cls(id=id, text=id, shape=NodeShape.Rectangle)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "type": self.shape.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class Edge:
    from_id: str
    to_id: str
    label: str = ""
    style: EdgeStyle = EdgeStyle.Solid

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "label": self.label,
            "style": self.style.value,
        }


@dataclass
class Bounds:
    """Axis-aligned box in layout units."""

    x: int
    y: int
    width: int
    height: int


@dataclass
class Subgraph:
    id: str
    title: str
    nodes: list[str] = field(default_factory=list)
    bounds: Bounds | None = None

    def add_member(self, node_id: str) -> None:
        if node_id not in self.nodes:
            self.nodes.append(node_id)

    def to_dict(self) -> dict[str, Any]:
        box = self.bounds or Bounds(0, 0, 0, 0)
        return {
            "id": self.id,
            "title": self.title,
            "nodes": list(self.nodes),
            "x": box.x,
            "y": box.y,
            "width": box.width,
            "height": box.height,
        }


@dataclass
class DiagramGraph:
    direction: Direction = field(default_factory=Direction.default)
    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)
    subgraphs: list[Subgraph] = field(default_factory=list)

    @classmethod
    def new(cls) -> DiagramGraph:
        return cls()

    def node_list(self) -> list[Node]:
        """Nodes in insertion order."""
        return list(self.nodes.values())

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges and not self.subgraphs

    def to_dict(self) -> dict[str, Any]:
        """Export the graph as the plain record consumed by renderers and serializers."""
        return {
            "direction": self.direction.value,
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
            "subgraphs": [sg.to_dict() for sg in self.subgraphs],
        }
