"""Centered ("maxwidth") layout.

Bounding boxes are packed with a fixed gap like top-align, but sibling nodes
share a vertical centre line: the tallest child's top sits ``vertical_gap``
below the parent and shorter siblings hang lower.
"""

from __future__ import annotations

from tree_layout.ir.tree import TreeNode
from tree_layout.layout.algorithms.common import (
    center_on_children,
    compose,
    leaf_result,
    new_layout_node,
    packed_offsets,
    sibling_gaps,
)
from tree_layout.layout.types import LaidOutChild, LayoutContext, LayoutResult


def maxwidth_layout(node: TreeNode, children: list[LaidOutChild], context: LayoutContext) -> LayoutResult:
    layout_node = new_layout_node(node, context)
    if not children:
        return leaf_result(layout_node)

    gaps = sibling_gaps(children, context, reduce_leaves=False)
    xs = center_on_children(packed_offsets(children, gaps), children)

    tallest = max(child.layout.root.height for child in children)
    center_y = layout_node.height / 2 + context.layout.vertical_gap + tallest / 2
    ys = [center_y] * len(children)
    return compose(layout_node, children, xs, ys)
