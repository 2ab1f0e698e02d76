"""Centralized configuration for mermaid-layout."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry used by the layered layout, in logical units."""

    node_width: int = 150
    node_height: int = 60
    h_gap: int = 80
    v_gap: int = 100
    subgraph_padding: int = 30

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")

    @property
    def column_step(self) -> int:
        return self.node_width + self.h_gap

    @property
    def row_step(self) -> int:
        return self.node_height + self.v_gap


DEFAULT_CONFIG = LayoutConfig()
