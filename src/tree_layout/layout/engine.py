"""Layout driver: post-order composition of a whole tree."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field

from tree_layout.config import TreeStyle
from tree_layout.ir.tree import TreeDocument, TreeNode
from tree_layout.layout.algorithms import get_algorithm
from tree_layout.layout.measure import MonospaceTextMeasurer
from tree_layout.layout.types import (
    LaidOutChild,
    LayoutAlgorithm,
    LayoutContext,
    LayoutNode,
    LayoutResult,
    TextMeasurer,
)

logger = logging.getLogger(__name__)


def build_context(tree: TreeDocument, style: TreeStyle, text_measurer: TextMeasurer) -> LayoutContext:
    """Build the read-only context for one layout run.

    Raises:
        ValueError: If a gap or the node padding is negative or not finite.
    """
    checks = {
        "horizontal gap": style.layout.horizontal_gap,
        "vertical gap": style.layout.vertical_gap,
        "node padding": style.node.padding,
    }
    for name, value in checks.items():
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"The {name} must be finite and non-negative, got {value!r}")
    return LayoutContext(
        measure_text=text_measurer,
        tree=tree,
        layout=style.layout,
        padding=style.node.padding,
        edge_style=style.edge.style,
    )


@dataclass
class _Frame:
    node: TreeNode
    next_child: int = 0
    laid_out: list[LaidOutChild] = field(default_factory=list)


def layout_subtree(
    node: TreeNode,
    context: LayoutContext,
    get_algorithm_for: Callable[[TreeNode], LayoutAlgorithm],
) -> LayoutResult:
    """Lay out ``node`` and its descendants, children before parents.

    Uses an explicit stack, so tree depth is not limited by the interpreter's
    recursion limit. ``get_algorithm_for`` is asked once per node.
    """
    frames = [_Frame(node)]
    while True:
        frame = frames[-1]
        if frame.next_child < len(frame.node.children):
            child = frame.node.children[frame.next_child]
            frame.next_child += 1
            frames.append(_Frame(child))
            continue

        frames.pop()
        algorithm = get_algorithm_for(frame.node)
        result = algorithm(frame.node, frame.laid_out, context)
        if not frames:
            return result
        frames[-1].laid_out.append(LaidOutChild(node=frame.node, layout=result))


def layout_tree(
    root: TreeNode,
    tree_meta: TreeDocument,
    style: TreeStyle,
    text_measurer: TextMeasurer | None = None,
) -> LayoutNode:
    """Position every node of ``root`` with the style's algorithm.

    Returns the positioned root, centred at (0, 0).
    """
    measurer = text_measurer if text_measurer is not None else MonospaceTextMeasurer()
    context = build_context(tree_meta, style, measurer)
    algorithm = get_algorithm(style.layout.algorithm)
    logger.debug(
        "laying out tree '%s' with %s (edge style %s)",
        tree_meta.id,
        style.layout.algorithm.value,
        style.edge.style.value,
    )
    return layout_subtree(root, context, lambda _node: algorithm).root


def layout_document(
    document: TreeDocument,
    style: TreeStyle | None = None,
    text_measurer: TextMeasurer | None = None,
) -> LayoutNode:
    """Lay out a document's tree; ``style`` defaults to ``TreeStyle()``."""
    return layout_tree(document.root, document, style if style is not None else TreeStyle(), text_measurer)
