"""Tests for layout/contour.py — construction, union, subtree contours and gaps."""

from __future__ import annotations

import pytest

from tree_layout.layout.contour import (
    ChainUnion,
    ChildContourInfo,
    Side,
    build_envelope_contour,
    build_subtree_contour,
    calculate_placement_offset,
    create_node_contour,
    find_min_gap,
    get_contour_bounds,
    interpolate_x,
    translate_contour,
    union_chains,
    union_contours,
)
from tree_layout.layout.types import Contour, Point, SubtreeBounds
from tree_layout.types import EdgeStyle

# ─── Helpers ──────────────────────────────────────────────────────────────────


def rect(width: float, height: float, dx: float = 0, dy: float = 0) -> Contour:
    return translate_contour(create_node_contour(width, height), dx, dy)


def assert_monotone(contour: Contour) -> None:
    for chain in (contour.left, contour.right):
        assert all(a.y <= b.y for a, b in zip(chain, chain[1:]))


def outer_x(contours: list[Contour], y: float, side: Side) -> float:
    xs = [interpolate_x(c.left if side is Side.Left else c.right, y, side) for c in contours]
    xs = [x for x in xs if x is not None]
    return min(xs) if side is Side.Left else max(xs)


def deep_middle() -> Contour:
    """Narrow node with a wide, deep skirt below it."""
    return Contour(
        left=[Point(-10, -10), Point(-10, 10), Point(-30, 10), Point(-30, 100)],
        right=[Point(10, -10), Point(10, 10), Point(30, 10), Point(30, 100)],
    )


# ─── Construction ─────────────────────────────────────────────────────────────


class TestConstruction:
    def test_node_contour(self):
        c = create_node_contour(40, 20)
        assert c.left == [Point(-20, -10), Point(-20, 10)]
        assert c.right == [Point(20, -10), Point(20, 10)]

    def test_translate_and_bounds(self):
        c = rect(40, 20, dx=5, dy=-3)
        assert get_contour_bounds(c) == SubtreeBounds(-15, 25, -13, 7)

    def test_empty_bounds(self):
        assert get_contour_bounds(Contour()) == SubtreeBounds(0, 0, 0, 0)


class TestInterpolate:
    def test_sloped_segment(self):
        assert interpolate_x([Point(0, 0), Point(10, 10)], 5, Side.Right) == 5

    def test_out_of_range(self):
        chain = [Point(0, 0), Point(0, 10)]
        assert interpolate_x(chain, -1, Side.Left) is None
        assert interpolate_x(chain, 11, Side.Left) is None
        assert interpolate_x([], 0, Side.Left) is None

    def test_horizontal_run_takes_outermost(self):
        chain = [Point(0, 0), Point(0, 5), Point(8, 5), Point(8, 10)]
        assert interpolate_x(chain, 5, Side.Right) == 8
        assert interpolate_x(chain, 5, Side.Left) == 0


# ─── Union ────────────────────────────────────────────────────────────────────


class TestUnion:
    def test_overlapping_rectangles(self):
        a = rect(20, 20)
        b = rect(20, 20, dx=5, dy=5)
        u = union_contours([a, b])
        assert_monotone(u)
        assert get_contour_bounds(u) == SubtreeBounds(-10, 15, -10, 15)
        for y in (-9.5, -7, -5, 0.3, 10, 12.1):
            assert interpolate_x(u.right, y, Side.Right) == outer_x([a, b], y, Side.Right)
            assert interpolate_x(u.left, y, Side.Left) == outer_x([a, b], y, Side.Left)

    def test_crossing_chains_split(self):
        x = [Point(0, 0), Point(10, 10)]
        y = [Point(10, 0), Point(0, 10)]
        assert union_chains([x, y], Side.Right) == [Point(10, 0), Point(5, 5), Point(10, 10)]
        assert union_chains([x, y], Side.Left) == [Point(0, 0), Point(5, 5), Point(0, 10)]

    def test_keeps_dominant_vertices(self):
        bump = [Point(0, 0), Point(0, 4), Point(7, 5), Point(0, 6), Point(0, 10)]
        flat = [Point(2, 0), Point(2, 10)]
        u = union_chains([flat, bump], Side.Right)
        assert Point(7, 5) in u
        assert interpolate_x(u, 1, Side.Right) == 2

    def test_vertically_disjoint_inputs(self):
        top = rect(10, 10, dy=5)
        bottom = rect(100, 10, dy=25)
        u = union_contours([top, bottom])
        assert u.left == [Point(-5, 0), Point(-5, 10), Point(-50, 20), Point(-50, 30)]
        assert u.right == [Point(5, 0), Point(5, 10), Point(50, 20), Point(50, 30)]
        assert interpolate_x(u.left, 5, Side.Left) == -5
        assert interpolate_x(u.right, 25, Side.Right) == 50

    def test_single_and_empty(self):
        a = rect(10, 10)
        assert union_contours([a]) == a
        assert union_contours([a]) is not a
        assert union_contours([]) == Contour()

    def test_union_bounds_contain_inputs(self):
        parts = [rect(10, 30, -20, 0), rect(40, 10, 0, 25), deep_middle()]
        u = union_contours(parts)
        assert_monotone(u)
        b = get_contour_bounds(u)
        for part in parts:
            pb = get_contour_bounds(part)
            assert b.left <= pb.left and b.right >= pb.right
            assert b.top <= pb.top and b.bottom >= pb.bottom


class TestChainUnion:
    def test_transition_emits_both_sides(self):
        a = [Point(0, 0), Point(0, 10)]
        b = [Point(5, 0), Point(5, 10)]
        union = ChainUnion([a, b], Side.Right)
        union.enter(0, 0)
        union.copy(0, 5)
        union.enter(1, 5)
        union.close(10)
        assert union.points == [Point(0, 0), Point(0, 5), Point(5, 5), Point(5, 10)]

    def test_close_without_chain_is_noop(self):
        union = ChainUnion([[Point(0, 0)]], Side.Left)
        union.copy(0, 1)
        union.close(1)
        assert union.points == []


# ─── Subtree contours ─────────────────────────────────────────────────────────


def three_children(middle: Contour) -> list[ChildContourInfo]:
    return [
        ChildContourInfo(rect(20, 20), -40, 40, 20, 20),
        ChildContourInfo(middle, 0, 40, 20, 20),
        ChildContourInfo(rect(20, 20), 40, 40, 20, 20),
    ]


class TestSubtreeContour:
    def test_leaf_is_node_rectangle(self):
        assert build_subtree_contour(30, 10, [], EdgeStyle.Curve) == create_node_contour(30, 10)

    @pytest.mark.parametrize("style", list(EdgeStyle))
    def test_deep_middle_child_kept(self, style):
        c = build_subtree_contour(20, 20, three_children(deep_middle()), style)
        assert_monotone(c)
        bounds = get_contour_bounds(c)
        assert bounds.top == -10
        assert bounds.bottom == 140
        assert interpolate_x(c.left, 120, Side.Left) == -30
        assert interpolate_x(c.right, 120, Side.Right) == 30
        assert interpolate_x(c.left, 40, Side.Left) == -50

    def test_org_chart_bar_between_levels(self):
        c = build_subtree_contour(20, 20, three_children(rect(20, 20)), EdgeStyle.OrgChart)
        # bar halfway between the parent bottom (10) and child tops (30)
        assert Point(-40, 20) in c.left
        assert Point(40, 20) in c.right

    def test_envelope_contains_every_style(self):
        children = three_children(deep_middle())
        envelope = build_envelope_contour(20, 20, children)
        assert_monotone(envelope)
        styled = [build_subtree_contour(20, 20, children, s) for s in EdgeStyle]
        for y in (-5, 12, 25, 31, 45, 90):
            assert interpolate_x(envelope.left, y, Side.Left) <= outer_x(styled, y, Side.Left) + 1e-9
            assert interpolate_x(envelope.right, y, Side.Right) >= outer_x(styled, y, Side.Right) - 1e-9


# ─── Gaps ─────────────────────────────────────────────────────────────────────


class TestGaps:
    def test_min_gap(self):
        assert find_min_gap(rect(20, 20), rect(20, 20, dx=30)) == 10

    def test_negative_when_overlapping(self):
        assert find_min_gap(rect(20, 20), rect(20, 20, dx=15)) == -5

    def test_no_vertical_overlap(self):
        assert find_min_gap(rect(20, 20), rect(20, 20, dx=30, dy=100)) is None

    def test_only_shared_range_counts(self):
        wide_low = Contour(
            left=[Point(12, 0), Point(12, 20), Point(-100, 20), Point(-100, 300)],
            right=[Point(30, 0), Point(30, 300)],
        )
        # the bulge starts below the first contour's bottom edge
        assert find_min_gap(rect(20, 20), wide_low) == 2

    def test_bump_on_horizontal_run(self):
        bumpy = Contour(
            left=[Point(-10, 0), Point(-10, 10)],
            right=[Point(0, 0), Point(0, 5), Point(10, 5), Point(10, 6), Point(0, 6), Point(0, 10)],
        )
        assert find_min_gap(bumpy, rect(2, 10, dx=13, dy=5)) == 2

    def test_placement_offset_round_trip(self):
        left = union_contours([rect(20, 20), deep_middle()])
        right = rect(30, 40, dy=20)
        offset = calculate_placement_offset(left, right, 7)
        assert find_min_gap(left, translate_contour(right, offset, 0)) == pytest.approx(7)

    def test_placement_offset_disjoint_ranges(self):
        offset = calculate_placement_offset(rect(20, 20), rect(10, 10, dy=100), 5)
        assert offset == 10 - (-5) + 5
