"""Building blocks shared by the layout algorithms.

Every algorithm follows the same outline: size the node, return early for a
leaf, compute one (x, y) offset per child, centre the children under the
parent, then ``compose`` the result.
"""

from __future__ import annotations

from tree_layout.ir.tree import TreeNode
from tree_layout.layout.contour import (
    ChildContourInfo,
    build_envelope_contour,
    calculate_placement_offset,
    create_node_contour,
    translate_contour,
    union_contours,
)
from tree_layout.layout.geometry import (
    calculate_node_size,
    merge_bounds,
    node_bounds,
    translate_bounds,
    translate_node,
)
from tree_layout.layout.types import Contour, LaidOutChild, LayoutContext, LayoutNode, LayoutResult


def new_layout_node(node: TreeNode, context: LayoutContext) -> LayoutNode:
    """A LayoutNode for ``node`` at the local origin."""
    width, height = calculate_node_size(node, context)
    return LayoutNode(id=node.id, label=node.label, x=0, y=0, width=width, height=height)


def leaf_result(layout_node: LayoutNode) -> LayoutResult:
    layout_node.contour = create_node_contour(layout_node.width, layout_node.height)
    return LayoutResult(
        root=layout_node,
        bounds=node_bounds(layout_node.width, layout_node.height),
        contour=layout_node.contour,
    )


def is_leaf(child: LaidOutChild) -> bool:
    return not child.node.children


def sibling_gaps(children: list[LaidOutChild], context: LayoutContext, reduce_leaves: bool) -> list[float]:
    """Gap between each adjacent pair; ``gaps[i]`` separates child i and i + 1.

    With ``reduce_leaves`` and the style flag set, two consecutive childless
    siblings get half the horizontal gap.
    """
    gap = context.layout.horizontal_gap
    halve = reduce_leaves and context.layout.reduce_leaf_sibling_gaps
    return [
        gap / 2 if halve and is_leaf(left) and is_leaf(right) else gap
        for left, right in zip(children, children[1:])
    ]


def top_aligned_offsets(children: list[LaidOutChild], parent_height: float, context: LayoutContext) -> list[float]:
    """Vertical offsets that put every child's top ``vertical_gap`` below the parent."""
    children_top = parent_height / 2 + context.layout.vertical_gap
    return [children_top + child.layout.root.height / 2 for child in children]


def packed_offsets(children: list[LaidOutChild], gaps: list[float]) -> list[float]:
    """Horizontal offsets packing subtree bounding boxes left to right."""
    offsets: list[float] = []
    cursor = 0.0
    for i, child in enumerate(children):
        bounds = child.layout.bounds
        offsets.append(cursor - bounds.left)
        cursor += bounds.width + (gaps[i] if i < len(gaps) else 0)
    return offsets


def squeeze_left_to_right(children: list[LaidOutChild], ys: list[float], gaps: list[float]) -> list[float]:
    """Place each child as far left as its gap allows against all earlier siblings.

    The first child sits at x=0.
    """
    xs: list[float] = []
    forest: Contour | None = None
    for i, child in enumerate(children):
        shape = translate_contour(child.layout.contour, 0, ys[i])
        x = 0.0 if forest is None else calculate_placement_offset(forest, shape, gaps[i - 1])
        placed = translate_contour(shape, x, 0)
        forest = placed if forest is None else union_contours([forest, placed])
        xs.append(x)
    return xs


def squeeze_right_to_left(children: list[LaidOutChild], ys: list[float], gaps: list[float]) -> list[float]:
    """Mirror of ``squeeze_left_to_right``: the last child sits at x=0."""
    xs = [0.0] * len(children)
    forest: Contour | None = None
    for i in range(len(children) - 1, -1, -1):
        shape = translate_contour(children[i].layout.contour, 0, ys[i])
        x = 0.0 if forest is None else -calculate_placement_offset(shape, forest, gaps[i])
        placed = translate_contour(shape, x, 0)
        forest = placed if forest is None else union_contours([placed, forest])
        xs[i] = x
    return xs


def center_on_children(xs: list[float], children: list[LaidOutChild]) -> list[float]:
    """Shift offsets so the span of the direct children's nodes is centred on x=0."""
    first = children[0].layout.root
    last = children[-1].layout.root
    span_left = xs[0] - first.width / 2
    span_right = xs[-1] + last.width / 2
    shift = -(span_left + span_right) / 2
    return [x + shift for x in xs]


def compose(
    layout_node: LayoutNode,
    children: list[LaidOutChild],
    xs: list[float],
    ys: list[float],
) -> LayoutResult:
    """Translate each child subtree by its offset and build bounds and the contour.

    The child LayoutNodes are moved in place: they belong to results produced
    for this call only. The placement envelope is attached to the node as well
    as returned.
    """
    bounds = [node_bounds(layout_node.width, layout_node.height)]
    infos: list[ChildContourInfo] = []

    for child, x, y in zip(children, xs, ys):
        root = child.layout.root
        translate_node(root, x, y)
        layout_node.children.append(root)
        bounds.append(translate_bounds(child.layout.bounds, x, y))
        infos.append(ChildContourInfo(child.layout.contour, x, y, root.width, root.height))

    envelope = build_envelope_contour(layout_node.width, layout_node.height, infos)
    layout_node.contour = envelope
    return LayoutResult(root=layout_node, bounds=merge_bounds(bounds), contour=envelope)
