"""Bounding-box layout.

Subtrees are spaced by their bounding boxes, exactly ``horizontal_gap`` apart
(half that between two consecutive leaves when leaf-gap reduction is on), with
sibling tops aligned one ``vertical_gap`` below the parent. No interlocking of
subtree shapes: simple trees come out identical to tidy, deep uneven ones wider.
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
    top_aligned_offsets,
)
from tree_layout.layout.types import LaidOutChild, LayoutContext, LayoutResult


def bounding_box_layout(node: TreeNode, children: list[LaidOutChild], context: LayoutContext) -> LayoutResult:
    layout_node = new_layout_node(node, context)
    if not children:
        return leaf_result(layout_node)

    gaps = sibling_gaps(children, context, reduce_leaves=True)
    xs = center_on_children(packed_offsets(children, gaps), children)
    ys = top_aligned_offsets(children, layout_node.height, context)
    return compose(layout_node, children, xs, ys)
