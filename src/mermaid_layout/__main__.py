"""CLI entry point for mermaid-layout."""

import json
import logging
import sys

import click

from mermaid_layout.layout.engine import layout
from mermaid_layout.parsers import parse
from mermaid_layout.types import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = [d.value for d in Direction]


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--direction",
    "-d",
    "direction",
    type=click.Choice(_DIRECTIONS, case_sensitive=False),
    default=None,
    help="Override direction (TD, TB, LR, RL, BT)",
)
@click.option("--indent", "-i", "indent", type=int, default=2, help="JSON indentation (0 for compact output)")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log parser and layout decisions to stderr")
def main(input: str | None, direction: str | None, indent: int, output: str | None, verbose: bool) -> None:
    """Mermaid flowchart to laid-out graph record (JSON)."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    graph = parse(text)
    if direction is not None:
        graph.direction = Direction.parse(direction)
    layout(graph)
    logger.debug("laid out %d nodes from %s", len(graph.nodes), input or "<stdin>")

    rendered = json.dumps(graph.to_dict(), indent=indent or None) + "\n"

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
