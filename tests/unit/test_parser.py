"""Tests for mermaid_layout.parsers — flowchart scanning, shapes, edges, subgraphs."""

from mermaid_layout.parsers import detect_type, parse
from mermaid_layout.parsers.flowchart import detect_direction, match_edge, split_statements
from mermaid_layout.types import Direction, EdgeStyle, NodeShape


def test_parse_single_line_with_separators():
    graph = parse("graph TD; A-->B;")
    assert graph.direction == Direction.TD
    assert list(graph.nodes) == ["A", "B"]
    assert graph.nodes["A"].shape == NodeShape.Rectangle
    assert graph.nodes["B"].shape == NodeShape.Rectangle
    assert len(graph.edges) == 1
    assert graph.edges[0].from_id == "A"
    assert graph.edges[0].to_id == "B"
    assert graph.edges[0].style == EdgeStyle.Solid
    assert graph.edges[0].label == ""


def test_parse_node_with_label():
    graph = parse("graph TD\n    A[Start] --> B[End]\n")
    assert graph.nodes["A"].text == "Start"
    assert graph.nodes["A"].shape == NodeShape.Rectangle
    assert graph.nodes["B"].text == "End"


def test_parse_all_shapes():
    src = "\n".join(
        [
            "flowchart TD",
            "    A[Rect]",
            "    B(Round)",
            "    C{Diamond}",
            "    D((Circle))",
            "    E[[Sub]]",
            "    F[(Store)]",
            "    G{{Hex}}",
            "    H>Flag]",
        ]
    )
    graph = parse(src)
    shapes = {node_id: node.shape for node_id, node in graph.nodes.items()}
    assert shapes == {
        "A": NodeShape.Rectangle,
        "B": NodeShape.Stadium,
        "C": NodeShape.Diamond,
        "D": NodeShape.Circle,
        "E": NodeShape.Subroutine,
        "F": NodeShape.Cylinder,
        "G": NodeShape.Hexagon,
        "H": NodeShape.Asymmetric,
    }
    assert graph.nodes["F"].text == "Store"
    assert graph.nodes["H"].text == "Flag"
    assert graph.edges == []


def test_shaped_endpoints_on_one_line():
    graph = parse("X[[Sub]]-->Y((Circ))")
    assert graph.nodes["X"].shape == NodeShape.Subroutine
    assert graph.nodes["X"].text == "Sub"
    assert graph.nodes["Y"].shape == NodeShape.Circle
    assert graph.nodes["Y"].text == "Circ"
    assert len(graph.edges) == 1
    edge = graph.edges[0]
    assert (edge.from_id, edge.to_id, edge.style) == ("X", "Y", EdgeStyle.Solid)


def test_multiple_declarations_on_one_line():
    graph = parse("A[One] --> B{Two}")
    assert graph.nodes["A"].text == "One"
    assert graph.nodes["B"].shape == NodeShape.Diamond


def test_only_first_edge_per_line():
    graph = parse("graph TD\n    A --> B --> C\n")
    assert len(graph.edges) == 1
    assert (graph.edges[0].from_id, graph.edges[0].to_id) == ("A", "B")
    assert "C" not in graph.nodes


def test_parse_edge_styles():
    graph = parse("graph TD\n    A --> B\n    C --- D\n    E -.-> F\n    G ==> H\n")
    assert [e.style for e in graph.edges] == [
        EdgeStyle.Solid,
        EdgeStyle.Solid,
        EdgeStyle.Dotted,
        EdgeStyle.Thick,
    ]


def test_parse_pipe_label():
    graph = parse("graph TD\n    A -->|yes| B\n")
    assert graph.edges[0].label == "yes"


def test_pipe_label_is_trimmed():
    graph = parse("A -.->|  maybe later  | B")
    assert graph.edges[0].label == "maybe later"
    assert graph.edges[0].style == EdgeStyle.Dotted


def test_parse_inline_label():
    graph = parse("A -- no --> B")
    assert len(graph.edges) == 1
    assert graph.edges[0].label == "no"
    assert graph.edges[0].style == EdgeStyle.Solid
    assert list(graph.nodes) == ["A", "B"]


def test_inline_label_styles():
    dotted = match_edge("A -. wait .-> B")
    thick = match_edge("A == go ==> B")
    assert dotted is not None and dotted.label == "wait" and dotted.style == EdgeStyle.Dotted
    assert thick is not None and thick.label == "go" and thick.style == EdgeStyle.Thick


def test_pipe_label_text_never_declares_nodes():
    graph = parse("A -->|go (now)| B")
    assert list(graph.nodes) == ["A", "B"]
    assert graph.edges[0].label == "go (now)"


def test_inline_label_text_never_declares_nodes():
    graph = parse("A -- go (now) --> B")
    assert list(graph.nodes) == ["A", "B"]
    assert graph.edges[0].label == "go (now)"


def test_inline_label_masking_keeps_endpoint_shapes():
    graph = parse("A(Start) -. wait {a bit} .-> B{Done?}")
    assert list(graph.nodes) == ["A", "B"]
    assert graph.nodes["A"].shape == NodeShape.Stadium
    assert graph.nodes["B"].shape == NodeShape.Diamond
    assert graph.edges[0].label == "wait {a bit}"


def test_semicolon_inside_pipe_label_is_text():
    graph = parse("A -->|retry; later| B")
    assert list(graph.nodes) == ["A", "B"]
    assert len(graph.edges) == 1
    assert graph.edges[0].label == "retry; later"


def test_semicolon_inside_asymmetric_node_is_text():
    graph = parse("A>x; y] --> B")
    assert graph.nodes["A"].shape == NodeShape.Asymmetric
    assert graph.nodes["A"].text == "x; y"
    assert len(graph.edges) == 1


def test_edge_endpoints_auto_created():
    graph = parse("flowchart LR\n    start --> finish\n")
    assert graph.nodes["start"].text == "start"
    assert graph.nodes["start"].shape == NodeShape.Rectangle
    assert graph.nodes["finish"].text == "finish"


def test_identifiers_are_case_sensitive():
    graph = parse("a --> A")
    assert list(graph.nodes) == ["a", "A"]


def test_later_declaration_with_text_overwrites():
    graph = parse("A[Hello] --> B\nA{World}\n")
    assert graph.nodes["A"].text == "World"
    assert graph.nodes["A"].shape == NodeShape.Diamond
    assert list(graph.nodes) == ["A", "B"]


def test_blank_redeclaration_never_overwrites():
    graph = parse("A[Hello]\nA[]\nA(A)\nA --> B\n")
    assert graph.nodes["A"].text == "Hello"
    assert graph.nodes["A"].shape == NodeShape.Rectangle


def test_blank_text_defaults_to_id():
    graph = parse("A[ ]")
    assert graph.nodes["A"].text == "A"


def test_parse_quoted_label():
    graph = parse('graph TD\n    A["Hello World"] --> B\n')
    assert graph.nodes["A"].text == "Hello World"


def test_semicolon_inside_brackets_is_text():
    graph = parse("A[x; y] --> B")
    assert graph.nodes["A"].text == "x; y"
    assert len(graph.edges) == 1


def test_parse_flowchart_keyword():
    graph = parse("flowchart LR\n    A --> B\n")
    assert graph.direction == Direction.LR


def test_direction_is_case_insensitive():
    assert parse("flowchart rl\nA-->B").direction == Direction.RL
    assert parse("GRAPH bt\nA-->B").direction == Direction.BT


def test_tb_is_kept_distinct():
    assert parse("graph TB\nA-->B").direction == Direction.TB


def test_parse_no_header():
    graph = parse("A --> B\n")
    assert graph.direction == Direction.TD
    assert len(graph.nodes) == 2


def test_detect_direction_first_header_wins():
    assert detect_direction("%% intro\ngraph LR\nflowchart BT\n") == Direction.LR
    assert detect_direction("graph LRX\n") == Direction.TD


def test_parse_comments_and_blank_lines():
    graph = parse("graph TD\n\n    %% This is a comment --> X\n    A --> B\n")
    assert list(graph.nodes) == ["A", "B"]


def test_styling_directives_skipped():
    src = "graph TD\n    A --> B\n    style A fill:#f9f,stroke:#333\n    classDef hot fill:#f00\n    class A hot\n"
    graph = parse(src)
    assert list(graph.nodes) == ["A", "B"]
    assert len(graph.edges) == 1


def test_link_style_click_and_direction_skipped():
    src = (
        "flowchart TD\n"
        "    subgraph G\n"
        "        direction LR\n"
        "        A --> B\n"
        "    end\n"
        "    linkStyle 0 stroke:#ff3,stroke-width:4px\n"
        '    click A callback "Tooltip (more)"\n'
    )
    graph = parse(src)
    assert list(graph.nodes) == ["A", "B"]
    assert len(graph.edges) == 1
    assert graph.direction == Direction.TD
    assert graph.subgraphs[0].nodes == ["A", "B"]


def test_crlf_line_endings():
    graph = parse("graph LR\r\n    A[Start] --> B\r\n    B --> C\r\n")
    assert graph.direction == Direction.LR
    assert list(graph.nodes) == ["A", "B", "C"]
    assert graph.nodes["A"].text == "Start"
    assert [(e.from_id, e.to_id) for e in graph.edges] == [("A", "B"), ("B", "C")]


def test_bare_cr_line_endings():
    graph = parse("graph TD\r    subgraph G\r        A --> B\r    end\r    C --> A\r")
    assert len(graph.edges) == 2
    assert graph.subgraphs[0].nodes == ["A", "B"]
    assert "C" not in graph.subgraphs[0].nodes


def test_empty_input():
    graph = parse("")
    assert graph.direction == Direction.TD
    assert graph.nodes == {}
    assert graph.edges == []
    assert graph.subgraphs == []


def test_malformed_input_does_not_raise():
    graph = parse("this is ]]][[ not {{ mermaid\n-->\n|||\nA -->\n((()))\nend\n")
    for edge in graph.edges:
        assert edge.from_id in graph.nodes
        assert edge.to_id in graph.nodes


class TestSubgraphs:
    def test_members_are_collected(self):
        src = (
            "flowchart TD\n"
            '    subgraph "Backend Services"\n'
            "        API[API Server] --> DB[(Database)]\n"
            "    end\n"
            "    Client --> API\n"
        )
        graph = parse(src)
        assert len(graph.subgraphs) == 1
        sg = graph.subgraphs[0]
        assert sg.id == "subgraph_0"
        assert sg.title == "Backend Services"
        assert sg.nodes == ["API", "DB"]
        assert "Client" in graph.nodes

    def test_bare_title_is_rest_of_line(self):
        graph = parse("subgraph Data Layer\n  A[a]\nend\n")
        assert graph.subgraphs[0].title == "Data Layer"

    def test_id_with_bracket_title(self):
        graph = parse("subgraph api [API Layer]\n  A[a]\nend\n")
        assert graph.subgraphs[0].title == "API Layer"

    def test_auto_created_endpoints_join_region(self):
        graph = parse("subgraph G\n  A --> B\nend\n")
        assert graph.subgraphs[0].nodes == ["A", "B"]

    def test_existing_node_reference_does_not_join(self):
        graph = parse("A[Alpha]\nsubgraph G\n  A --> B\nend\n")
        assert graph.subgraphs[0].nodes == ["B"]

    def test_informative_redeclaration_joins(self):
        graph = parse("A --> B\nsubgraph G\n  A[Alpha]\n  B[B]\nend\n")
        assert graph.subgraphs[0].nodes == ["A"]

    def test_members_unique(self):
        graph = parse("subgraph G\n  A[one]\n  A[two]\nend\n")
        assert graph.subgraphs[0].nodes == ["A"]

    def test_end_closes_region(self):
        graph = parse("subgraph G\n  A[a]\nend\nB[b]\n")
        assert graph.subgraphs[0].nodes == ["A"]

    def test_second_open_replaces_current(self):
        src = "subgraph one\n  A[a]\n  subgraph two\n    B[b]\n  end\n  C[c]\nend\n"
        graph = parse(src)
        assert [sg.id for sg in graph.subgraphs] == ["subgraph_0", "subgraph_1"]
        assert graph.subgraphs[0].nodes == ["A"]
        assert graph.subgraphs[1].nodes == ["B"]
        assert "C" in graph.nodes

    def test_empty_region(self):
        graph = parse("subgraph Empty\nend\nA --> B\n")
        assert graph.subgraphs[0].nodes == []

    def test_subgraph_without_title_is_skipped(self):
        graph = parse("subgraph\nA[a]\nend\n")
        assert graph.subgraphs == []
        assert "A" in graph.nodes

    def test_subgraph_ids_do_not_collide_with_nodes(self):
        graph = parse("subgraph_0[Named like a region]\nsubgraph Real\n  A[a]\nend\n")
        assert graph.subgraphs[0].id == "subgraph_0"
        assert graph.nodes["subgraph_0"].text == "Named like a region"
        assert graph.subgraphs[0].nodes == ["A"]


def test_split_statements():
    assert split_statements("graph TD; A-->B;") == ["graph TD", " A-->B", ""]
    assert split_statements('A["a;b"]; B') == ['A["a;b"]', " B"]
    assert split_statements("A -->|a;b| B; C") == ["A -->|a;b| B", " C"]
    assert split_statements("A>a;b]; A==>B") == ["A>a;b]", " A==>B"]


def test_detect_type_defaults_to_flowchart():
    assert detect_type("graph TD\nA-->B") == "flowchart"
    assert detect_type("") == "flowchart"
