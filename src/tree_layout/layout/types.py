"""Layout types shared across the contour module, algorithms, and renderers."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from tree_layout.config import LayoutConfig
from tree_layout.ir.tree import TreeDocument, TreeNode
from tree_layout.types import EdgeStyle


@dataclass(frozen=True)
class Point:
    """A 2D point in layout coordinates (y grows downward)."""

    x: float
    y: float


@dataclass
class Contour:
    """A Y-monotone polygon given by its two boundary chains.

    Both chains run top to bottom (y non-decreasing). The closed outline is
    left[0] .. left[-1], right[-1] .. right[0].
    """

    left: list[Point] = field(default_factory=list)
    right: list[Point] = field(default_factory=list)


@dataclass(frozen=True)
class SubtreeBounds:
    """Axis-aligned rectangle relative to a subtree root."""

    left: float
    right: float
    top: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass
class LayoutNode:
    """A positioned node; ``x``/``y`` are the node centre."""

    id: str
    label: str
    x: float
    y: float
    width: float
    height: float
    children: list[LayoutNode] = field(default_factory=list)
    # Placement envelope of the subtree, relative to this node's centre.
    contour: Contour | None = None

    def iter_nodes(self) -> Iterator[LayoutNode]:
        """Yield this node and every descendant in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        """Serialise the positioned tree (contours omitted)."""
        out: dict[str, Any] = {}
        stack: list[tuple[LayoutNode, dict[str, Any]]] = [(self, out)]
        while stack:
            node, target = stack.pop()
            target.update(
                id=node.id,
                label=node.label,
                x=node.x,
                y=node.y,
                width=node.width,
                height=node.height,
                children=[],
            )
            for child in node.children:
                child_dict: dict[str, Any] = {}
                target["children"].append(child_dict)
                stack.append((child, child_dict))
        return out


@dataclass
class LayoutResult:
    """Output of one algorithm call, consumed by the parent's composition step."""

    root: LayoutNode
    bounds: SubtreeBounds
    # Placement envelope used to space this subtree against its siblings.
    contour: Contour


@dataclass
class LaidOutChild:
    node: TreeNode
    layout: LayoutResult


@dataclass(frozen=True)
class TextMeasurement:
    width: float
    height: float
    lines: tuple[str, ...]


class TextMeasurer(Protocol):
    """Measures label dimensions; decouples layout from any drawing surface."""

    def measure(self, label: str, padding: float) -> TextMeasurement:
        """Return the padded size of a (possibly multi-line) label."""
        ...


@dataclass(frozen=True)
class LayoutContext:
    """Read-only configuration threaded through one layout run."""

    measure_text: TextMeasurer
    tree: TreeDocument
    layout: LayoutConfig
    padding: float
    edge_style: EdgeStyle


LayoutAlgorithm = Callable[[TreeNode, list[LaidOutChild], LayoutContext], LayoutResult]
