"""Tree layout engine public API."""

from __future__ import annotations

from tree_layout.layout.algorithms import ALGORITHM_LABELS, ALGORITHMS, get_algorithm
from tree_layout.layout.contour import (
    ChildContourInfo,
    build_envelope_contour,
    build_subtree_contour,
    calculate_placement_offset,
    create_node_contour,
    find_min_gap,
    get_contour_bounds,
    get_min_gap,
    translate_contour,
    union_contours,
)
from tree_layout.layout.engine import build_context, layout_document, layout_subtree, layout_tree
from tree_layout.layout.geometry import (
    calculate_children_total_width,
    calculate_node_size,
    merge_bounds,
    node_bounds,
    translate_bounds,
    translate_node,
)
from tree_layout.layout.measure import MonospaceTextMeasurer
from tree_layout.layout.types import (
    Contour,
    LaidOutChild,
    LayoutAlgorithm,
    LayoutContext,
    LayoutNode,
    LayoutResult,
    Point,
    SubtreeBounds,
    TextMeasurement,
    TextMeasurer,
)

__all__ = [
    "ALGORITHMS",
    "ALGORITHM_LABELS",
    "ChildContourInfo",
    "Contour",
    "LaidOutChild",
    "LayoutAlgorithm",
    "LayoutContext",
    "LayoutNode",
    "LayoutResult",
    "MonospaceTextMeasurer",
    "Point",
    "SubtreeBounds",
    "TextMeasurement",
    "TextMeasurer",
    "build_context",
    "build_envelope_contour",
    "build_subtree_contour",
    "calculate_children_total_width",
    "calculate_node_size",
    "calculate_placement_offset",
    "create_node_contour",
    "find_min_gap",
    "get_algorithm",
    "get_contour_bounds",
    "get_min_gap",
    "layout_document",
    "layout_subtree",
    "layout_tree",
    "merge_bounds",
    "node_bounds",
    "translate_bounds",
    "translate_contour",
    "translate_node",
    "union_contours",
]
