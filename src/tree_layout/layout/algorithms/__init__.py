"""Layout algorithm registry.

Every algorithm has the signature ``(node, laid_out_children, context) ->
LayoutResult`` so the driver can pick one per node.
"""

from __future__ import annotations

from tree_layout.layout.algorithms.bounding_box import bounding_box_layout
from tree_layout.layout.algorithms.lr_squeeze import lr_squeeze_layout
from tree_layout.layout.algorithms.maxwidth import maxwidth_layout
from tree_layout.layout.algorithms.rl_squeeze import rl_squeeze_layout
from tree_layout.layout.algorithms.tidy import tidy_layout
from tree_layout.layout.algorithms.top_align import top_align_layout
from tree_layout.layout.types import LayoutAlgorithm
from tree_layout.types import LayoutAlgorithmType

ALGORITHMS: dict[LayoutAlgorithmType, LayoutAlgorithm] = {
    LayoutAlgorithmType.BoundingBox: bounding_box_layout,
    LayoutAlgorithmType.MaxWidth: maxwidth_layout,
    LayoutAlgorithmType.TopAlign: top_align_layout,
    LayoutAlgorithmType.LRSqueeze: lr_squeeze_layout,
    LayoutAlgorithmType.RLSqueeze: rl_squeeze_layout,
    LayoutAlgorithmType.Tidy: tidy_layout,
}

# Human-readable names for menus and CLI help.
ALGORITHM_LABELS: dict[LayoutAlgorithmType, str] = {
    LayoutAlgorithmType.BoundingBox: "Bounding Box",
    LayoutAlgorithmType.MaxWidth: "Centered",
    LayoutAlgorithmType.TopAlign: "Top Align",
    LayoutAlgorithmType.LRSqueeze: "LR Squeeze",
    LayoutAlgorithmType.RLSqueeze: "RL Squeeze",
    LayoutAlgorithmType.Tidy: "Tidy",
}


def get_algorithm(name: LayoutAlgorithmType | str) -> LayoutAlgorithm:
    """Look up an algorithm by enum member or identifier such as ``"tidy"``."""
    try:
        key = name if isinstance(name, LayoutAlgorithmType) else LayoutAlgorithmType(name)
    except ValueError:
        choices = ", ".join(t.value for t in LayoutAlgorithmType)
        raise ValueError(f"Unknown layout algorithm '{name}'; use one of: {choices}") from None
    return ALGORITHMS[key]


__all__ = [
    "ALGORITHMS",
    "ALGORITHM_LABELS",
    "bounding_box_layout",
    "get_algorithm",
    "lr_squeeze_layout",
    "maxwidth_layout",
    "rl_squeeze_layout",
    "tidy_layout",
    "top_align_layout",
]
