"""Layout engine convenience functions."""

from __future__ import annotations

from mermaid_layout.config import LayoutConfig
from mermaid_layout.ir.ast import DiagramGraph
from mermaid_layout.layout.layered import LayeredLayout


def layout(diagram: DiagramGraph, config: LayoutConfig | None = None) -> DiagramGraph:
    """Run the default (layered) layout, annotating the diagram in place.

    Only node x/y/width/height and subgraph bounds are written; ids, text, edges and
    membership are left untouched. Returns the same diagram object.
    """
    return LayeredLayout(config).layout(diagram)
