"""Geometry and sizing utilities for the layout algorithms."""

from __future__ import annotations

import math

from tree_layout.ir.tree import TreeNode
from tree_layout.layout.types import LayoutContext, LayoutNode, SubtreeBounds
from tree_layout.types import SizingMode


def _check_size(width: float, height: float, where: str) -> tuple[float, float]:
    for value in (width, height):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"{where} must be finite and non-negative, got {width!r} x {height!r}")
    return width, height


def calculate_node_size(node: TreeNode, context: LayoutContext) -> tuple[float, float]:
    """Resolve a node's (width, height).

    Priority: the node's own width and height, then the document's fixed
    sizing mode, then the measured label.
    """
    if node.has_explicit_size():
        return _check_size(node.width, node.height, f"Size of node '{node.id}'")

    tree = context.tree
    if tree.sizing_mode == SizingMode.Fixed and tree.node_width and tree.node_height:
        return _check_size(tree.node_width, tree.node_height, "Fixed node size")

    measurement = context.measure_text.measure(node.label, context.padding)
    return measurement.width, measurement.height


def node_bounds(width: float, height: float) -> SubtreeBounds:
    """Bounds of a single node centred at the origin."""
    return SubtreeBounds(left=-width / 2, right=width / 2, top=-height / 2, bottom=height / 2)


def merge_bounds(bounds_list: list[SubtreeBounds]) -> SubtreeBounds:
    if not bounds_list:
        return SubtreeBounds(left=0, right=0, top=0, bottom=0)
    return SubtreeBounds(
        left=min(b.left for b in bounds_list),
        right=max(b.right for b in bounds_list),
        top=min(b.top for b in bounds_list),
        bottom=max(b.bottom for b in bounds_list),
    )


def translate_bounds(bounds: SubtreeBounds, dx: float, dy: float) -> SubtreeBounds:
    return SubtreeBounds(
        left=bounds.left + dx,
        right=bounds.right + dx,
        top=bounds.top + dy,
        bottom=bounds.bottom + dy,
    )


def translate_node(node: LayoutNode, dx: float, dy: float) -> None:
    """Shift a layout node and all of its descendants in place."""
    for n in node.iter_nodes():
        n.x += dx
        n.y += dy


def calculate_children_total_width(child_widths: list[float], horizontal_gap: float) -> float:
    if not child_widths:
        return 0
    return sum(child_widths) + (len(child_widths) - 1) * horizontal_gap
