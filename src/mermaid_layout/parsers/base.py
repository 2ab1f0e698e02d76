"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from mermaid_layout.ir.ast import DiagramGraph


class Parser(Protocol):
    """Protocol that all diagram parsers must implement."""

    def parse(self, src: str) -> DiagramGraph:
        """Parse source text into a DiagramGraph. Must not raise on malformed text."""
        ...
