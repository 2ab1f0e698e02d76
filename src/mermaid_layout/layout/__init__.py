"""Layout engine public API."""

from __future__ import annotations

from mermaid_layout.layout.engine import layout
from mermaid_layout.layout.layered import (
    LayerAssignment,
    LayeredLayout,
    assign_coordinates,
    compute_subgraph_bounds,
)

__all__ = [
    "LayerAssignment",
    "LayeredLayout",
    "assign_coordinates",
    "compute_subgraph_bounds",
    "layout",
]
