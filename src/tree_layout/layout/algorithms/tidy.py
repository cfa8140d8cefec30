"""Tidy (Buchheim-style) layout.

Phases:
  1. Top-aligned vertical offsets
  2. LR contour squeeze
  3. RL contour squeeze
  4. Average of LR and RL, so a tree and its mirror image get mirrored layouts
  5. Apportionment: adjacent contour gaps made equal to their mean
  6. Collision guard against non-adjacent siblings, swept from both sides
  7. Centre the children under the parent
"""

from __future__ import annotations

from dataclasses import replace

from tree_layout.ir.tree import TreeNode
from tree_layout.layout.algorithms.common import (
    center_on_children,
    compose,
    is_leaf,
    leaf_result,
    new_layout_node,
    sibling_gaps,
    squeeze_left_to_right,
    squeeze_right_to_left,
    top_aligned_offsets,
)
from tree_layout.layout.contour import find_min_gap, translate_contour, union_contours
from tree_layout.layout.types import Contour, LaidOutChild, LayoutContext, LayoutResult, Point

_EPS: float = 1e-6


def _placed_contours(children: list[LaidOutChild], xs: list[float], ys: list[float]) -> list[Contour]:
    return [translate_contour(child.layout.contour, x, y) for child, x, y in zip(children, xs, ys)]


def apportion_gaps(
    xs: list[float],
    children: list[LaidOutChild],
    ys: list[float],
    gaps: list[float],
    leaf_pairs: list[bool],
) -> list[float]:
    """Redistribute slack so every adjacent contour gap equals its group mean.

    Leaf-sibling pairs and other pairs are averaged separately; a target never
    drops below the pair's own minimum gap. The first child stays put and each
    later child moves by the running sum of adjustments.
    """
    if len(children) <= 1:
        return list(xs)

    placed = _placed_contours(children, xs, ys)
    measured: list[float] = []
    for i in range(len(children) - 1):
        gap = find_min_gap(placed[i], placed[i + 1])
        measured.append(gaps[i] if gap is None else gap)

    overall = sum(measured) / len(measured)
    leaf_gaps = [g for g, leaf in zip(measured, leaf_pairs) if leaf]
    other_gaps = [g for g, leaf in zip(measured, leaf_pairs) if not leaf]
    leaf_mean = sum(leaf_gaps) / len(leaf_gaps) if leaf_gaps else overall
    other_mean = sum(other_gaps) / len(other_gaps) if other_gaps else overall

    result = [xs[0]]
    shift = 0.0
    for i in range(1, len(children)):
        target = max(leaf_mean if leaf_pairs[i - 1] else other_mean, gaps[i - 1])
        shift += target - measured[i - 1]
        result.append(xs[i] + shift)
    return result


def _push_apart(
    xs: list[float],
    children: list[LaidOutChild],
    ys: list[float],
    gaps: list[float],
) -> list[float]:
    """Left-to-right sweep pushing each child (and those after it) clear of all earlier siblings."""
    result = list(xs)
    forest: Contour | None = None
    for i, child in enumerate(children):
        placed = translate_contour(child.layout.contour, result[i], ys[i])
        if forest is not None:
            gap = find_min_gap(forest, placed)
            if gap is not None and gap < gaps[i - 1] - _EPS:
                push = gaps[i - 1] - gap
                for j in range(i, len(result)):
                    result[j] += push
                placed = translate_contour(placed, push, 0)
        forest = placed if forest is None else union_contours([forest, placed])
    return result


def _mirror_child(child: LaidOutChild) -> LaidOutChild:
    contour = child.layout.contour
    flipped = Contour(
        left=[Point(-p.x, p.y) for p in contour.right],
        right=[Point(-p.x, p.y) for p in contour.left],
    )
    return replace(child, layout=replace(child.layout, contour=flipped))


def resolve_collisions(
    xs: list[float],
    children: list[LaidOutChild],
    ys: list[float],
    gaps: list[float],
) -> list[float]:
    """Separate non-adjacent siblings that come closer than their gap.

    Apportionment only looks at adjacent pairs; a shallow middle child can let
    two deeper neighbours meet below it. The sweep runs once from each side
    and the two placements are averaged, so a tree and its mirror image are
    corrected the same way. Sibling gaps depend only on relative offsets, so
    the average keeps every adjacent gap.
    """
    if len(children) <= 2:
        return list(xs)
    forward = _push_apart(xs, children, ys, gaps)
    flipped = _push_apart(
        [-x for x in reversed(xs)],
        [_mirror_child(c) for c in reversed(children)],
        list(reversed(ys)),
        list(reversed(gaps)),
    )
    backward = [-x for x in reversed(flipped)]
    return [(a + b) / 2 for a, b in zip(forward, backward)]


def tidy_layout(node: TreeNode, children: list[LaidOutChild], context: LayoutContext) -> LayoutResult:
    layout_node = new_layout_node(node, context)
    if not children:
        return leaf_result(layout_node)

    ys = top_aligned_offsets(children, layout_node.height, context)
    gaps = sibling_gaps(children, context, reduce_leaves=True)
    leaf_pairs = [
        context.layout.reduce_leaf_sibling_gaps and is_leaf(left) and is_leaf(right)
        for left, right in zip(children, children[1:])
    ]

    lr = squeeze_left_to_right(children, ys, gaps)
    rl = squeeze_right_to_left(children, ys, gaps)
    averaged = [(a + b) / 2 for a, b in zip(lr, rl)]
    apportioned = apportion_gaps(averaged, children, ys, gaps, leaf_pairs)
    xs = center_on_children(resolve_collisions(apportioned, children, ys, gaps), children)
    return compose(layout_node, children, xs, ys)
