"""CLI entry point for tree-layout."""

import json
import logging
import sys

import click

from tree_layout import resolve_style
from tree_layout.config import StyleStore
from tree_layout.layout.engine import layout_document
from tree_layout.parsers import parse
from tree_layout.renderers.svg import SvgRenderer
from tree_layout.types import EdgeStyle, LayoutAlgorithmType

_ALGORITHMS = [t.value for t in LayoutAlgorithmType]
_EDGE_STYLES = [s.value for s in EdgeStyle]


def _write(output: str | None, text: str) -> None:
    if output:
        try:
            with open(output, "w") as f:
                f.write(text)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(text, nl=not text.endswith("\n"))


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--algorithm", "-a", type=click.Choice(_ALGORITHMS), default=None, help="Layout algorithm")
@click.option("--edge-style", "-e", type=click.Choice(_EDGE_STYLES), default=None, help="Edge routing style")
@click.option("--h-gap", type=float, default=None, help="Horizontal gap between siblings")
@click.option("--v-gap", type=float, default=None, help="Vertical gap between levels")
@click.option("--reduce-leaf-gaps", is_flag=True, help="Halve the gap between adjacent leaf siblings")
@click.option("--style", "style_path", type=click.Path(exists=True), default=None, help="Style preset JSON file")
@click.option("--format", "-f", "fmt", type=click.Choice(["json", "svg"]), default="json", help="Output format")
@click.option("--contours", is_flag=True, help="Draw subtree contours in SVG output")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log layout progress to stderr")
def main(
    input: str | None,
    algorithm: str | None,
    edge_style: str | None,
    h_gap: float | None,
    v_gap: float | None,
    reduce_leaf_gaps: bool,
    style_path: str | None,
    fmt: str,
    contours: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Lay out a YAML or JSON tree and print node positions or an SVG drawing."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

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
        document = parse(text, source=input or "<stdin>")
        style = resolve_style(document)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    if style_path:
        store = StyleStore(style)
        try:
            with open(style_path) as f:
                preset = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{style_path}': {e}", err=True)
            sys.exit(1)
        if not store.import_style(preset):
            click.echo(f"error: '{style_path}' is not a valid style preset", err=True)
            sys.exit(1)
        style = store.style

    if algorithm is not None:
        style.layout.algorithm = LayoutAlgorithmType(algorithm)
    if edge_style is not None:
        style.edge.style = EdgeStyle(edge_style)
    if h_gap is not None:
        style.layout.horizontal_gap = h_gap
    if v_gap is not None:
        style.layout.vertical_gap = v_gap
    if reduce_leaf_gaps:
        style.layout.reduce_leaf_sibling_gaps = True

    try:
        root = layout_document(document, style)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    if fmt == "svg":
        rendered = SvgRenderer(style, show_contours=contours).render(root)
    else:
        rendered = json.dumps(root.to_dict(), indent=2)
    _write(output, rendered)


if __name__ == "__main__":
    main()
