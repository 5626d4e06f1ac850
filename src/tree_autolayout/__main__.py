"""CLI entry point for tree-autolayout."""

import json
import logging
import sys

import click

from tree_autolayout import layout_document
from tree_autolayout.config import LayoutConfig

_ORIENTATIONS = click.Choice(["vertical", "horizontal"], case_sensitive=False)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--orientation", "-r", "orientation", type=_ORIENTATIONS, default="vertical", help="Growth direction")
@click.option(
    "--previous-orientation",
    "previous_orientation",
    type=_ORIENTATIONS,
    default=None,
    help="Orientation the input coordinates were laid out with (keeps sibling order across a flip)",
)
@click.option("--collapse", "-c", "collapse", multiple=True, help="Collapse this node id before layout (repeatable)")
@click.option("--spacing", "-s", "spacing", type=float, default=None, help="Spacing between nodes on both axes")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log layout decisions to stderr")
def main(
    input: str | None,
    orientation: str,
    previous_orientation: str | None,
    collapse: tuple[str, ...],
    spacing: float | None,
    output: str | None,
    verbose: bool,
) -> None:
    """Tidy tree layout: read a JSON tree, write it back with node positions."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        click.echo(f"error: invalid JSON: {e}", err=True)
        sys.exit(1)

    config = LayoutConfig(vertical_spacing=spacing, horizontal_spacing=spacing) if spacing is not None else None

    try:
        result = layout_document(doc, orientation, previous_orientation, collapse, config)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    rendered = json.dumps(result, indent=2) + "\n"
    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
