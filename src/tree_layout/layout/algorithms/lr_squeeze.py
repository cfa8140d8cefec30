"""LR squeeze layout.

Children are placed left to right, each pushed as far left as the contours of
the siblings already placed allow while keeping ``horizontal_gap``. Subtrees of
different shapes interlock, giving narrower drawings than bounding-box
packing. Sibling tops are aligned.
"""

from __future__ import annotations

from tree_layout.ir.tree import TreeNode
from tree_layout.layout.algorithms.common import (
    center_on_children,
    compose,
    leaf_result,
    new_layout_node,
    sibling_gaps,
    squeeze_left_to_right,
    top_aligned_offsets,
)
from tree_layout.layout.types import LaidOutChild, LayoutContext, LayoutResult


def lr_squeeze_layout(node: TreeNode, children: list[LaidOutChild], context: LayoutContext) -> LayoutResult:
    layout_node = new_layout_node(node, context)
    if not children:
        return leaf_result(layout_node)

    ys = top_aligned_offsets(children, layout_node.height, context)
    gaps = sibling_gaps(children, context, reduce_leaves=False)
    xs = center_on_children(squeeze_left_to_right(children, ys, gaps), children)
    return compose(layout_node, children, xs, ys)
