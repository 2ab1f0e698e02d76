"""mermaid-layout: Mermaid flowchart source to a laid-out graph record."""

from __future__ import annotations

from typing import Any

from mermaid_layout.config import LayoutConfig
from mermaid_layout.ir.ast import Bounds, DiagramGraph, Edge, Node, Subgraph
from mermaid_layout.layout import layout
from mermaid_layout.parsers import parse
from mermaid_layout.types import Direction, EdgeStyle, NodeShape

__version__ = "0.1.0"


def parse_and_layout(
    src: str,
    direction: str | None = None,
    config: LayoutConfig | None = None,
) -> DiagramGraph:
    """Parse a Mermaid flowchart string and lay it out.

    Args:
        src: Mermaid DSL source string.
        direction: Override graph direction ('TD', 'TB', 'LR', 'RL', 'BT'); None keeps parsed value.
        config: Layout geometry; None uses the defaults.

    Returns:
        The laid-out DiagramGraph. Empty input yields an empty TD graph.

    Raises:
        ValueError: If direction is unknown.
    """
    graph = parse(src)
    if direction is not None:
        graph.direction = Direction.parse(direction)
    return layout(graph, config)


def to_record(src: str, direction: str | None = None, config: LayoutConfig | None = None) -> dict[str, Any]:
    """Parse, lay out and export as the plain `{direction, nodes, edges, subgraphs}` record."""
    return parse_and_layout(src, direction, config).to_dict()


__all__ = [
    "Bounds",
    "DiagramGraph",
    "Direction",
    "Edge",
    "EdgeStyle",
    "LayoutConfig",
    "Node",
    "NodeShape",
    "Subgraph",
    "layout",
    "parse",
    "parse_and_layout",
    "to_record",
]
