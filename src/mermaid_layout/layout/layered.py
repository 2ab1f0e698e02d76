"""Layered grid layout engine.

Phases:
  1. Adjacency (GraphIR)
  2. Root selection
  3. Breadth-first layer assignment
  4. Grid coordinate assignment (direction-aware)
  5. Subgraph bounding boxes
"""

from __future__ import annotations

import logging

from mermaid_layout.config import DEFAULT_CONFIG, LayoutConfig
from mermaid_layout.ir.ast import Bounds, DiagramGraph
from mermaid_layout.ir.graph import GraphIR
from mermaid_layout.types import Direction

logger = logging.getLogger(__name__)


# ─── Layer Assignment ────────────────────────────────────────────────────────


class LayerAssignment:
    """Nodes bucketed by breadth-first depth from the root set."""

    def __init__(self, layers: list[list[str]]) -> None:
        self.layers = layers

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    def layer_of(self, node_id: str) -> int | None:
        for idx, layer in enumerate(self.layers):
            if node_id in layer:
                return idx
        return None

    @classmethod
    def assign(cls, gir: GraphIR) -> LayerAssignment:
        layers: list[list[str]] = []
        assigned: set[str] = set()
        total = gir.node_count()

        current = gir.roots()
        while current and len(assigned) < total:
            layer: list[str] = []
            for node_id in current:
                if node_id not in assigned:
                    layer.append(node_id)
                    assigned.add(node_id)
            if layer:
                layers.append(layer)

            # dict keeps first-discovery order
            discovered: dict[str, None] = {}
            for node_id in layer:
                for succ in gir.successors(node_id):
                    if succ not in assigned:
                        discovered[succ] = None
            current = list(discovered)

        stragglers = [n for n in gir.node_ids() if n not in assigned]
        if stragglers:
            logger.debug("appending %d unreached nodes to the last layer", len(stragglers))
            if not layers:
                layers.append([])
            layers[-1].extend(stragglers)

        return cls(layers)


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def assign_coordinates(
    diagram: DiagramGraph,
    assignment: LayerAssignment,
    direction: Direction,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> None:
    """Place every node on the grid cell given by its layer and position within the layer."""
    layer_count = assignment.layer_count
    for layer_idx, layer in enumerate(assignment.layers):
        effective = layer_count - 1 - layer_idx if direction.is_reversed else layer_idx
        for order, node_id in enumerate(layer):
            node = diagram.nodes[node_id]
            if direction.is_horizontal:
                node.x = effective * config.column_step
                node.y = order * config.row_step
            else:
                node.x = order * config.column_step
                node.y = effective * config.row_step
            node.width = config.node_width
            node.height = config.node_height


# ─── Subgraph Bounds ─────────────────────────────────────────────────────────


def compute_subgraph_bounds(diagram: DiagramGraph, config: LayoutConfig = DEFAULT_CONFIG) -> None:
    """Wrap each subgraph's members in a padded bounding box."""
    pad = config.subgraph_padding
    for sg in diagram.subgraphs:
        members = [diagram.nodes[nid] for nid in sg.nodes if nid in diagram.nodes]
        if not members:
            logger.debug("subgraph %s has no members; no bounding box", sg.id)
            sg.bounds = None
            continue
        min_x = min(n.x for n in members)
        min_y = min(n.y for n in members)
        max_x = max(n.x + n.width for n in members)
        max_y = max(n.y + n.height for n in members)
        sg.bounds = Bounds(
            x=min_x - pad,
            y=min_y - pad,
            width=max_x - min_x + pad * 2,
            height=max_y - min_y + pad * 2,
        )


# ─── Engine ──────────────────────────────────────────────────────────────────


class LayeredLayout:
    """Layered placement by reachability depth."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def layout(self, diagram: DiagramGraph) -> DiagramGraph:
        gir = GraphIR.from_diagram(diagram)
        assignment = LayerAssignment.assign(gir)
        logger.debug("%d nodes in %d layers (%s)", gir.node_count(), assignment.layer_count, diagram.direction.value)
        assign_coordinates(diagram, assignment, diagram.direction, self.config)
        compute_subgraph_bounds(diagram, self.config)
        return diagram
