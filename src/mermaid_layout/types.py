"""Shared type definitions for mermaid-layout.

Enums used across the parser, the graph IR, the layout engine and the record export.
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    TD = "TD"
    TB = "TB"
    LR = "LR"
    RL = "RL"
    BT = "BT"

    @classmethod
    def default(cls) -> Direction:
        return cls.TD

    @classmethod
    def parse(cls, token: str) -> Direction:
        """Look up a direction token case-insensitively."""
        key = token.strip().upper()
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown direction '{token}'; use TD, TB, LR, RL, or BT") from None

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LR, Direction.RL)

    @property
    def is_reversed(self) -> bool:
        return self in (Direction.RL, Direction.BT)


class NodeShape(Enum):
    Rectangle = "rectangle"  # id[Label]
    Stadium = "stadium"  # id(Label)
    Diamond = "diamond"  # id{Label}
    Circle = "circle"  # id((Label))
    Subroutine = "subroutine"  # id[[Label]]
    Cylinder = "cylinder"  # id[(Label)]
    Hexagon = "hexagon"  # id{{Label}}
    Asymmetric = "asymmetric"  # id>Label]

    @classmethod
    def default(cls) -> NodeShape:
        return cls.Rectangle


class EdgeStyle(Enum):
    Solid = "solid"  # -->  ---
    Dotted = "dotted"  # -.->
    Thick = "thick"  # ==>

    @classmethod
    def from_arrow(cls, arrow: str) -> EdgeStyle:
        """Map an arrow token (plain or the open/close pair of a labelled arrow) to a style."""
        if "." in arrow:
            return cls.Dotted
        if "==" in arrow:
            return cls.Thick
        return cls.Solid
