"""tree-layout: compact, symmetric drawings of n-ary trees."""

from __future__ import annotations

from tree_layout.config import StyleStore, TreeStyle
from tree_layout.ir.tree import TreeDocument, TreeNode
from tree_layout.layout import layout_document, layout_tree
from tree_layout.layout.types import LayoutNode
from tree_layout.parsers import parse
from tree_layout.renderers.svg import SvgRenderer
from tree_layout.types import EdgeStyle, LayoutAlgorithmType


def resolve_style(
    document: TreeDocument,
    algorithm: str | None = None,
    edge_style: str | None = None,
) -> TreeStyle:
    """Defaults plus the document's style overrides plus explicit choices.

    Raises:
        ValueError: If the document style or a named choice is invalid.
    """
    store = StyleStore()
    store.apply_example_style(document.style)
    style = store.style
    if algorithm is not None:
        style.layout.algorithm = LayoutAlgorithmType(algorithm)
    if edge_style is not None:
        style.edge.style = EdgeStyle(edge_style)
    return style


def layout_source(src: str, algorithm: str | None = None, edge_style: str | None = None) -> LayoutNode:
    """Parse a YAML/JSON tree document and return the positioned root.

    Args:
        src: Document source text.
        algorithm: Algorithm identifier ('tidy', 'lr-squeeze', ...); None keeps the document's.
        edge_style: Edge style identifier; None keeps the document's.

    Raises:
        ValueError: If the input cannot be parsed or a name is unknown.
    """
    document = parse(src)
    return layout_document(document, resolve_style(document, algorithm, edge_style))


def render_source(
    src: str,
    algorithm: str | None = None,
    edge_style: str | None = None,
    show_contours: bool = False,
) -> str:
    """Parse a tree document, lay it out and render it to SVG.

    Raises:
        ValueError: If the input cannot be parsed or a name is unknown.
    """
    document = parse(src)
    style = resolve_style(document, algorithm, edge_style)
    root = layout_document(document, style)
    return SvgRenderer(style, show_contours=show_contours).render(root)


__all__ = [
    "LayoutNode",
    "StyleStore",
    "TreeDocument",
    "TreeNode",
    "TreeStyle",
    "layout_document",
    "layout_source",
    "layout_tree",
    "parse",
    "render_source",
    "resolve_style",
]
