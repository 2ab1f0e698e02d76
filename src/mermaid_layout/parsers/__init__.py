"""Parser registry — detect diagram type and dispatch to the right parser."""

from __future__ import annotations

from mermaid_layout.ir.ast import DiagramGraph
from mermaid_layout.parsers.base import Parser
from mermaid_layout.parsers.flowchart import FlowchartParser


def detect_type(src: str) -> str:
    """Detect the diagram type from source text. Returns 'flowchart' etc."""
    for line in src.strip().splitlines():
        line = line.strip()
        if not line or line.startswith("%%"):
            continue
        lower = line.lower()
        if lower.startswith("flowchart") or lower.startswith("graph"):
            return "flowchart"
        break
    return "flowchart"  # default


_PARSERS: dict[str, type[Parser]] = {
    "flowchart": FlowchartParser,
}


def parse(src: str) -> DiagramGraph:
    """Detect the diagram type and parse to a DiagramGraph."""
    parser_cls = _PARSERS.get(detect_type(src), FlowchartParser)
    return parser_cls().parse(src)


__all__ = ["FlowchartParser", "Parser", "detect_type", "parse"]
