"""Flowchart parser — line-oriented, forgiving scanner.

Parses Mermaid flowchart/graph DSL into the DiagramGraph types from ir.ast.
Every statement is classified on its own; anything unrecognised is skipped, so the
parser never raises on malformed input.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from mermaid_layout.ir.ast import DiagramGraph, Edge, Node, Subgraph
from mermaid_layout.types import Direction, EdgeStyle, NodeShape

logger = logging.getLogger(__name__)

# ─── Tokenizer ───────────────────────────────────────────────────────────────

# Opener, closer, shape. Longer openers first.
_SHAPE_SYNTAX: list[tuple[str, str, NodeShape]] = [
    ("[[", "]]", NodeShape.Subroutine),
    ("[(", ")]", NodeShape.Cylinder),
    ("{{", "}}", NodeShape.Hexagon),
    ("((", "))", NodeShape.Circle),
    ("[", "]", NodeShape.Rectangle),
    ("(", ")", NodeShape.Stadium),
    ("{", "}", NodeShape.Diamond),
    (">", "]", NodeShape.Asymmetric),
]


def _shape_alternation(capture: bool) -> str:
    parts: list[str] = []
    for opener, closer, shape in _SHAPE_SYNTAX:
        body = f"[^{re.escape(closer[0])}]*"
        if capture:
            body = f"(?P<{shape.value}>{body})"
        parts.append(re.escape(opener) + body + re.escape(closer))
    return "|".join(parts)


_ID = r"[A-Za-z0-9_]+"
_ARROW = r"-\.->|-\.-|-->|---|==>|==="
_SHAPE_ANNOTATION = rf"(?:\s*(?:{_shape_alternation(capture=False)}))?"

_HEADER_RE = re.compile(r"^\s*(?:graph|flowchart)\s+(TD|TB|LR|RL|BT)\b", re.IGNORECASE | re.MULTILINE)
_NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_SKIP_RE = re.compile(r"^(?:%%|(?:graph|flowchart)(?:\s|$)|(?:classDef|class|style|linkStyle|click|direction)\s)")
_SUBGRAPH_RE = re.compile(r"^subgraph(?:\s+(?P<title>.*))?$")
_SUBGRAPH_ID_TITLE_RE = re.compile(rf"^{_ID}\s*\[(?P<title>[^\]]*)\]$")
_QUOTED_RE = re.compile(r'^"(?P<title>[^"]*)"')

_NODE_DECL_RE = re.compile(rf"(?P<id>{_ID})\s*(?:{_shape_alternation(capture=True)})")
_PIPE_LABEL_RE = re.compile(rf"((?:{_ARROW})\s*)\|[^|]*\|")

# Edge forms, tried in order; the first match on a statement wins.
_EDGE_PIPE_LABEL_RE = re.compile(
    rf"(?P<src>{_ID}){_SHAPE_ANNOTATION}\s*(?P<arrow>{_ARROW})\s*\|(?P<label>[^|]*)\|\s*(?P<dst>{_ID})"
)
_EDGE_INLINE_LABEL_RE = re.compile(
    rf"(?P<src>{_ID}){_SHAPE_ANNOTATION}\s*(?P<open>--|-\.|==)(?P<label>[^-.=|>][^|]*?)"
    rf"(?P<close>-->|---|\.->|==>)\s*(?P<dst>{_ID})"
)
_EDGE_PLAIN_RE = re.compile(rf"(?P<src>{_ID}){_SHAPE_ANNOTATION}\s*(?P<arrow>{_ARROW})\s*(?P<dst>{_ID})")


def detect_direction(src: str) -> Direction:
    """Return the direction of the first `graph`/`flowchart` header, or TD."""
    m = _HEADER_RE.search(src)
    if m is None:
        return Direction.default()
    return Direction.parse(m.group(1))


def split_statements(line: str) -> list[str]:
    """Split a line on `;` separators outside brackets, double quotes and `|label|` spans."""
    statements: list[str] = []
    buf: list[str] = []
    depth = 0
    in_quotes = False
    in_pipe = False
    prev = ""
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes:
            if ch == "|" and depth == 0:
                in_pipe = not in_pipe
            elif in_pipe:
                pass
            elif ch in "[({" or (ch == ">" and (prev.isalnum() or prev == "_")):
                # `>` only opens a shape right after an id (`A>flag]`), never inside an arrow
                depth += 1
            elif ch in "])}":
                depth = max(depth - 1, 0)
            elif ch == ";" and depth == 0:
                statements.append("".join(buf))
                buf = []
                prev = ""
                continue
        buf.append(ch)
        if not ch.isspace():
            prev = ch
    statements.append("".join(buf))
    return statements


def _clean_text(raw: str) -> str:
    text = raw.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1].strip()
    return text


def _subgraph_title(rest: str) -> str:
    m = _QUOTED_RE.match(rest)
    if m:
        return m.group("title")
    m = _SUBGRAPH_ID_TITLE_RE.match(rest)
    if m:
        return _clean_text(m.group("title"))
    # bare titles run to end of line: `subgraph Data Layer` is "Data Layer", not "Data"
    return rest


def _mask_edge_labels(stmt: str) -> str:
    """Blank out `|label|` and `-- label -->` spans so label text never declares nodes."""
    masked = _PIPE_LABEL_RE.sub(lambda m: m.group(1) + " " * (len(m.group(0)) - len(m.group(1))), stmt)
    for m in _EDGE_INLINE_LABEL_RE.finditer(masked):
        start, end = m.span("label")
        masked = masked[:start] + " " * (end - start) + masked[end:]
    return masked


# ─── Scanner state ───────────────────────────────────────────────────────────


@dataclass
class _ScanState:
    """Per-call parser state: the graph under construction and the open-region slot."""

    graph: DiagramGraph = field(default_factory=DiagramGraph.new)
    current: Subgraph | None = None
    subgraph_counter: int = 0

    def open_region(self, title: str) -> None:
        if self.current is not None:
            logger.debug("subgraph %r opened while %r is still open; replacing it", title, self.current.id)
        sg = Subgraph(id=f"subgraph_{self.subgraph_counter}", title=title)
        self.subgraph_counter += 1
        self.graph.subgraphs.append(sg)
        self.current = sg

    def close_region(self) -> None:
        self.current = None

    def attach(self, node_id: str) -> None:
        if self.current is not None:
            self.current.add_member(node_id)

    def declare_node(self, node_id: str, text: str, shape: NodeShape) -> bool:
        """Create or enrich a node. Returns True when the node was created or updated."""
        existing = self.graph.nodes.get(node_id)
        if existing is None:
            self.graph.nodes[node_id] = Node.new(node_id, text, shape)
        elif text and text != node_id:
            existing.text = text
            existing.shape = shape
        else:
            return False
        self.attach(node_id)
        return True

    def ensure_node(self, node_id: str) -> None:
        if node_id not in self.graph.nodes:
            self.graph.nodes[node_id] = Node.bare(node_id)
            self.attach(node_id)


# ─── Statement handlers ──────────────────────────────────────────────────────


def _scan_nodes(state: _ScanState, stmt: str) -> int:
    count = 0
    for m in _NODE_DECL_RE.finditer(_mask_edge_labels(stmt)):
        shape_name = m.lastgroup
        if shape_name is None:
            continue
        shape = NodeShape(shape_name)
        state.declare_node(m.group("id"), _clean_text(m.group(shape_name)), shape)
        count += 1
    return count


def match_edge(stmt: str) -> Edge | None:
    """Extract the first edge declared in a statement, or None."""
    m = _EDGE_PIPE_LABEL_RE.search(stmt)
    if m:
        return Edge(m.group("src"), m.group("dst"), m.group("label").strip(), EdgeStyle.from_arrow(m.group("arrow")))
    m = _EDGE_INLINE_LABEL_RE.search(stmt)
    if m:
        arrow = m.group("open") + m.group("close")
        return Edge(m.group("src"), m.group("dst"), m.group("label").strip(), EdgeStyle.from_arrow(arrow))
    m = _EDGE_PLAIN_RE.search(stmt)
    if m:
        return Edge(m.group("src"), m.group("dst"), "", EdgeStyle.from_arrow(m.group("arrow")))
    return None


def _scan_edge(state: _ScanState, stmt: str) -> bool:
    edge = match_edge(stmt)
    if edge is None:
        return False
    state.ensure_node(edge.from_id)
    state.ensure_node(edge.to_id)
    state.graph.edges.append(edge)
    return True


def _scan_statement(state: _ScanState, stmt: str, line_no: int) -> None:
    if not stmt or _SKIP_RE.match(stmt):
        return

    m = _SUBGRAPH_RE.match(stmt)
    if m:
        title = _subgraph_title((m.group("title") or "").strip())
        if title:
            state.open_region(title)
        else:
            logger.debug("line %d: subgraph without a title skipped", line_no)
        return

    if stmt == "end":
        if state.current is None:
            logger.debug("line %d: 'end' without an open subgraph", line_no)
        state.close_region()
        return

    declared = _scan_nodes(state, stmt)
    linked = _scan_edge(state, stmt)
    if not declared and not linked:
        logger.debug("line %d: no graph elements in %r", line_no, stmt)


class FlowchartParser:
    """Flowchart/graph diagram parser."""

    def parse(self, src: str) -> DiagramGraph:
        state = _ScanState()
        state.graph.direction = detect_direction(src)
        for line_no, line in enumerate(_NEWLINE_RE.split(src), 1):
            for stmt in split_statements(line):
                _scan_statement(state, stmt.strip(), line_no)
        logger.debug(
            "parsed %d nodes, %d edges, %d subgraphs (%s)",
            len(state.graph.nodes),
            len(state.graph.edges),
            len(state.graph.subgraphs),
            state.graph.direction.value,
        )
        return state.graph
