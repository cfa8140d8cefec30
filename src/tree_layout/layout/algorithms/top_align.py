"""Top-align layout: bounding boxes packed with a fixed gap, sibling tops level."""

from __future__ import annotations

from tree_layout.ir.tree import TreeNode
from tree_layout.layout.algorithms.common import (
    center_on_children,
    compose,
    leaf_result,
    new_layout_node,
    packed_offsets,
    sibling_gaps,
    top_aligned_offsets,
)
from tree_layout.layout.types import LaidOutChild, LayoutContext, LayoutResult


def top_align_layout(node: TreeNode, children: list[LaidOutChild], context: LayoutContext) -> LayoutResult:
    layout_node = new_layout_node(node, context)
    if not children:
        return leaf_result(layout_node)

    gaps = sibling_gaps(children, context, reduce_leaves=False)
    xs = center_on_children(packed_offsets(children, gaps), children)
    ys = top_aligned_offsets(children, layout_node.height, context)
    return compose(layout_node, children, xs, ys)
