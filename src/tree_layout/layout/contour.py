"""Y-monotone polygon contours.

A contour is the silhouette of a laid-out subtree, including the geometry of
the edges that join a parent to its children. It is stored as two boundary
chains running top to bottom, so any horizontal line meets each chain at most
once. Trees only grow downward, which is what keeps every subtree outline
Y-monotone.

Operations:
  1. Construction (node rectangles, parent + children with an edge style)
  2. Translation and bounds
  3. Union of several contours, keeping the vertices of whichever input
     dominates each y-range
  4. Minimum horizontal gap and placement offset between two contours
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tree_layout.layout.types import Contour, Point, SubtreeBounds
from tree_layout.types import EdgeStyle

_EPS: float = 1e-9


class Side(Enum):
    Left = "left"
    Right = "right"


def _more_extreme(side: Side, a: float, b: float) -> bool:
    """True if ``a`` lies further outward than ``b`` on ``side``."""
    return a < b if side is Side.Left else a > b


def _append(chain: list[Point], point: Point) -> None:
    """Append ``point`` unless it repeats the last vertex or only extends the last segment."""
    if chain and chain[-1] == point:
        return
    if len(chain) >= 2:
        a, b = chain[-2], chain[-1]
        cross = (b.x - a.x) * (point.y - b.y) - (b.y - a.y) * (point.x - b.x)
        dot = (b.x - a.x) * (point.x - b.x) + (b.y - a.y) * (point.y - b.y)
        if cross == 0 and dot > 0:
            chain[-1] = point
            return
    chain.append(point)


# ─── Construction and transformation ────────────────────────────────────────


def create_node_contour(width: float, height: float) -> Contour:
    """Rectangle contour of a node centred at the origin."""
    half_w = width / 2
    half_h = height / 2
    return Contour(
        left=[Point(-half_w, -half_h), Point(-half_w, half_h)],
        right=[Point(half_w, -half_h), Point(half_w, half_h)],
    )


def translate_contour(contour: Contour, dx: float, dy: float) -> Contour:
    return Contour(
        left=[Point(p.x + dx, p.y + dy) for p in contour.left],
        right=[Point(p.x + dx, p.y + dy) for p in contour.right],
    )


def clone_contour(contour: Contour) -> Contour:
    return Contour(left=list(contour.left), right=list(contour.right))


def get_contour_bounds(contour: Contour) -> SubtreeBounds:
    points = contour.left + contour.right
    if not points:
        return SubtreeBounds(left=0, right=0, top=0, bottom=0)
    return SubtreeBounds(
        left=min(p.x for p in points),
        right=max(p.x for p in points),
        top=min(p.y for p in points),
        bottom=max(p.y for p in points),
    )


# ─── Interpolation ──────────────────────────────────────────────────────────


def _extremal_x(chain: list[Point], first: int, y: float, side: Side) -> float | None:
    best: float | None = None
    for i in range(first, len(chain) - 1):
        p1, p2 = chain[i], chain[i + 1]
        if p1.y > y:
            break
        if p2.y < y:
            continue
        if p2.y == p1.y:
            x = min(p1.x, p2.x) if side is Side.Left else max(p1.x, p2.x)
        else:
            t = (y - p1.y) / (p2.y - p1.y)
            x = p1.x + t * (p2.x - p1.x)
        if best is None or _more_extreme(side, x, best):
            best = x

    last = chain[-1]
    if y == last.y and (best is None or _more_extreme(side, last.x, best)):
        best = last.x
    return best


def interpolate_x(chain: list[Point], y: float, side: Side) -> float | None:
    """X of a boundary chain at height ``y``, or None outside its y-range.

    Where several segments touch ``y`` (a horizontal run or a vertex) the
    outermost x for ``side`` wins, so short bumps are never missed.
    """
    if not chain or y < chain[0].y or y > chain[-1].y:
        return None
    return _extremal_x(chain, 0, y, side)


class _Cursor:
    """Forward-only reader over one chain.

    Queries must come in non-decreasing y; each chain is then walked once
    however many heights are asked for.
    """

    def __init__(self, chain: list[Point]) -> None:
        self.chain = chain
        self.segment = 0
        self.vertex = 0

    def x_at(self, y: float, side: Side) -> float | None:
        chain = self.chain
        if not chain or y < chain[0].y or y > chain[-1].y:
            return None
        while self.segment + 1 < len(chain) and chain[self.segment + 1].y < y:
            self.segment += 1
        return _extremal_x(chain, self.segment, y, side)

    def _skip_below(self, y: float) -> None:
        while self.vertex < len(self.chain) and self.chain[self.vertex].y < y:
            self.vertex += 1

    def at_height(self, y: float) -> list[Point]:
        """Vertices lying exactly at ``y``."""
        self._skip_below(y)
        found = []
        index = self.vertex
        while index < len(self.chain) and self.chain[index].y == y:
            found.append(self.chain[index])
            index += 1
        return found

    def take(self, start: float, end: float) -> list[Point]:
        """Vertices with ``start <= y < end``."""
        self._skip_below(start)
        found = []
        while self.vertex < len(self.chain) and self.chain[self.vertex].y < end:
            found.append(self.chain[self.vertex])
            self.vertex += 1
        return found


# ─── Union ──────────────────────────────────────────────────────────────────


def _dominant(cursors: list[_Cursor], y: float, side: Side) -> int | None:
    """Index of the chain lying furthest outward at ``y`` (first one wins ties)."""
    best_index: int | None = None
    best_x = 0.0
    for index, cursor in enumerate(cursors):
        x = cursor.x_at(y, side)
        if x is not None and (best_index is None or _more_extreme(side, x, best_x)):
            best_index, best_x = index, x
    return best_index


def _crossings(cursors: list[_Cursor], start: float, end: float) -> list[float]:
    """Heights strictly inside (start, end) where two chains cross.

    No chain has a vertex inside the interval, so each one is a straight line
    there and every pair crosses at most once.
    """
    q1 = start + (end - start) / 4
    q3 = start + 3 * (end - start) / 4
    lines: list[tuple[float, float]] = []
    for cursor in cursors:
        x1 = cursor.x_at(q1, Side.Left)
        x3 = cursor.x_at(q3, Side.Left)
        if x1 is not None and x3 is not None:
            lines.append((x1, x3))

    found: list[float] = []
    for i, (a1, a3) in enumerate(lines):
        for b1, b3 in lines[i + 1 :]:
            d1, d3 = a1 - b1, a3 - b3
            if d1 == d3:
                continue
            y = q1 - d1 * (q3 - q1) / (d3 - d1)
            if start + _EPS < y < end - _EPS:
                found.append(y)
    return found


def _breakpoints(chains: list[list[Point]]) -> list[float]:
    ys = sorted({p.y for chain in chains for p in chain})
    cursors = [_Cursor(chain) for chain in chains]
    extra: list[float] = []
    for start, end in zip(ys, ys[1:]):
        extra.extend(_crossings(cursors, start, end))
    return sorted(set(ys).union(extra))


class ChainUnion:
    """State machine that builds one side of a union contour.

    Breakpoints are visited top to bottom. For each interval the caller
    reports the dominant chain via ``enter``; when dominance moves to another
    chain a transition point is emitted on the outgoing chain. ``copy`` then
    appends the dominant chain's own vertices inside the interval, and
    ``close`` finishes the boundary at the last breakpoint.
    """

    def __init__(self, chains: list[list[Point]], side: Side) -> None:
        self.cursors = [_Cursor(chain) for chain in chains]
        self.side = side
        self.points: list[Point] = []
        self.current: int | None = None

    def enter(self, index: int, y: float) -> None:
        cursor = self.cursors[index]
        if self.current is not None and index != self.current:
            old_x = self.cursors[self.current].x_at(y, self.side)
            if old_x is not None:
                _append(self.points, Point(old_x, y))
        if not cursor.at_height(y):
            x = cursor.x_at(y, self.side)
            if x is not None:
                _append(self.points, Point(x, y))
        self.current = index

    def copy(self, start: float, end: float) -> None:
        if self.current is None:
            return
        for p in self.cursors[self.current].take(start, end):
            _append(self.points, p)

    def close(self, y: float) -> None:
        if self.current is None:
            return
        cursor = self.cursors[self.current]
        explicit = cursor.at_height(y)
        if explicit:
            for p in explicit:
                _append(self.points, p)
            return
        x = cursor.x_at(y, self.side)
        if x is not None:
            _append(self.points, Point(x, y))


def union_chains(chains: list[list[Point]], side: Side) -> list[Point]:
    """Outer boundary of several chains on one side, preserving dominant vertices."""
    ys = _breakpoints(chains)
    if not ys:
        return []

    union = ChainUnion(chains, side)
    probes = [_Cursor(chain) for chain in chains]
    if len(ys) == 1:
        union.current = _dominant(probes, ys[0], side)
        union.close(ys[0])
        return union.points

    for start, end in zip(ys, ys[1:]):
        index = _dominant(probes, (start + end) / 2, side)
        if index is None:
            union.close(start)
            union.current = None
            continue
        union.enter(index, start)
        union.copy(start, end)
    union.close(ys[-1])
    return union.points


def union_contours(contours: list[Contour]) -> Contour:
    """Union of contours already placed in a common coordinate system.

    At every height the left chain is the leftmost input and the right chain
    the rightmost, and the vertices of the dominant input are kept rather than
    resampled.
    """
    if not contours:
        return Contour()
    if len(contours) == 1:
        return clone_contour(contours[0])
    return Contour(
        left=union_chains([c.left for c in contours], Side.Left),
        right=union_chains([c.right for c in contours], Side.Right),
    )


# ─── Subtree contours ───────────────────────────────────────────────────────


@dataclass
class ChildContourInfo:
    """A child subtree placed relative to its parent (parent at the origin)."""

    contour: Contour  # in the child's own coordinates
    offset_x: float
    offset_y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.offset_y - self.height / 2


def _joint(
    edge_style: EdgeStyle,
    side: Side,
    parent_half_w: float,
    parent_half_h: float,
    child: ChildContourInfo,
    bar_y: float,
) -> list[Point]:
    """Parent rectangle side plus the edge geometry down to an extreme child."""
    sign = -1 if side is Side.Left else 1
    corner_x = sign * parent_half_w
    child_top = max(child.top, parent_half_h)
    child_edge_x = child.offset_x + sign * child.width / 2

    points = [Point(corner_x, -parent_half_h), Point(corner_x, parent_half_h)]
    if edge_style is EdgeStyle.Curve:
        points.append(Point(child_edge_x, child_top))
    elif edge_style is EdgeStyle.StraightArrow:
        points += [
            Point(0, parent_half_h),
            Point(child.offset_x, child_top),
            Point(child_edge_x, child_top),
        ]
    else:
        points += [
            Point(0, parent_half_h),
            Point(0, bar_y),
            Point(child.offset_x, bar_y),
            Point(child.offset_x, child_top),
            Point(child_edge_x, child_top),
        ]

    chain: list[Point] = []
    for p in points:
        _append(chain, p)
    return chain


def _attach(
    parent_width: float,
    parent_height: float,
    ordered: list[ChildContourInfo],
    children_union: Contour,
    edge_style: EdgeStyle,
) -> Contour:
    half_w = parent_width / 2
    half_h = parent_height / 2
    topmost = min(c.top for c in ordered)
    bar_y = max((half_h + topmost) / 2, half_h)

    sides = (
        (Side.Left, ordered[0], children_union.left),
        (Side.Right, ordered[-1], children_union.right),
    )
    chains: dict[Side, list[Point]] = {}
    for side, child, below in sides:
        chain = _joint(edge_style, side, half_w, half_h, child, bar_y)
        cutoff = chain[-1].y
        for p in below:
            if p.y > cutoff + _EPS:
                _append(chain, p)
        chains[side] = chain
    return Contour(left=chains[Side.Left], right=chains[Side.Right])


def _placed_union(children: list[ChildContourInfo]) -> tuple[list[ChildContourInfo], Contour]:
    ordered = sorted(children, key=lambda c: c.offset_x)
    placed = [translate_contour(c.contour, c.offset_x, c.offset_y) for c in ordered]
    return ordered, union_contours(placed)


def build_subtree_contour(
    parent_width: float,
    parent_height: float,
    children: list[ChildContourInfo],
    edge_style: EdgeStyle,
) -> Contour:
    """Contour of a parent node joined to its children with ``edge_style``.

    The children's contours are unioned first, so a deep excursion of a
    middle child is kept even when the outermost children are shallow. Edge
    geometry is prepended on each side down to the leftmost/rightmost child's
    top, followed by the union's vertices below that height.
    """
    if not children:
        return create_node_contour(parent_width, parent_height)
    ordered, children_union = _placed_union(children)
    return _attach(parent_width, parent_height, ordered, children_union, edge_style)


def build_envelope_contour(
    parent_width: float,
    parent_height: float,
    children: list[ChildContourInfo],
) -> Contour:
    """Union of the subtree contours for every edge style.

    Sibling spacing uses this envelope, so the chosen edge style only changes
    how edges are drawn, never where subtrees end up.
    """
    if not children:
        return create_node_contour(parent_width, parent_height)
    ordered, children_union = _placed_union(children)
    return union_contours(
        [_attach(parent_width, parent_height, ordered, children_union, style) for style in EdgeStyle]
    )


# ─── Gaps and placement ─────────────────────────────────────────────────────


def find_min_gap(left_contour: Contour, right_contour: Contour) -> float | None:
    """Smallest horizontal distance from ``left_contour`` to ``right_contour``.

    Only the y-range where both contours exist is compared; geometry outside
    it never affects the result. Returns None when the ranges do not overlap.
    A negative result means the contours intersect.
    """
    left_bounds = get_contour_bounds(left_contour)
    right_bounds = get_contour_bounds(right_contour)
    top = max(left_bounds.top, right_bounds.top)
    bottom = min(left_bounds.bottom, right_bounds.bottom)
    if top >= bottom:
        return None

    ys = {top, bottom}
    ys.update(p.y for p in left_contour.right if top <= p.y <= bottom)
    ys.update(p.y for p in right_contour.left if top <= p.y <= bottom)

    facing_left = _Cursor(left_contour.right)
    facing_right = _Cursor(right_contour.left)
    min_gap: float | None = None
    for y in sorted(ys):
        left_x = facing_left.x_at(y, Side.Right)
        right_x = facing_right.x_at(y, Side.Left)
        if left_x is None or right_x is None:
            continue
        gap = right_x - left_x
        if min_gap is None or gap < min_gap:
            min_gap = gap
    return min_gap


get_min_gap = find_min_gap


def calculate_placement_offset(left_contour: Contour, right_contour: Contour, desired_gap: float) -> float:
    """Horizontal shift for ``right_contour`` so it sits ``desired_gap`` right of ``left_contour``."""
    current_gap = find_min_gap(left_contour, right_contour)
    if current_gap is None:
        left_bounds = get_contour_bounds(left_contour)
        right_bounds = get_contour_bounds(right_contour)
        return left_bounds.right - right_bounds.left + desired_gap
    return desired_gap - current_gap
