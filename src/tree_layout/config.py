"""Centralized style configuration for tree-layout.

``TreeStyle`` groups node, edge and layout settings. Its dict form uses the
camelCase keys of the style preset JSON so presets exported elsewhere can be
imported unchanged.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from tree_layout.types import EdgeStyle, LayoutAlgorithmType, NodeShape

logger = logging.getLogger(__name__)


@dataclass
class NodeStyle:
    shape: NodeShape = NodeShape.RoundedRectangle
    fill_color: str = "#ffffff"
    stroke_color: str = "#111111"
    stroke_width: float = 2
    padding: float = 10


@dataclass
class EdgeStyleConfig:
    style: EdgeStyle = EdgeStyle.OrgChart
    color: str = "#000000"
    width: float = 2
    arrow_size: float = 8


@dataclass
class LayoutConfig:
    algorithm: LayoutAlgorithmType = LayoutAlgorithmType.MaxWidth
    horizontal_gap: float = 10
    vertical_gap: float = 40
    reduce_leaf_sibling_gaps: bool = False


@dataclass
class TreeStyle:
    """Configuration for layout and rendering."""

    node: NodeStyle = field(default_factory=NodeStyle)
    edge: EdgeStyleConfig = field(default_factory=EdgeStyleConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": {
                "shape": self.node.shape.value,
                "fillColor": self.node.fill_color,
                "strokeColor": self.node.stroke_color,
                "strokeWidth": self.node.stroke_width,
                "padding": self.node.padding,
            },
            "edge": {
                "style": self.edge.style.value,
                "color": self.edge.color,
                "width": self.edge.width,
                "arrowSize": self.edge.arrow_size,
            },
            "layout": {
                "algorithm": self.layout.algorithm.value,
                "horizontalGap": self.layout.horizontal_gap,
                "verticalGap": self.layout.vertical_gap,
                "reduceLeafSiblingGaps": self.layout.reduce_leaf_sibling_gaps,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeStyle:
        """Build a style from its dict form; missing keys fall back to defaults.

        Raises:
            ValueError: If a section is not a mapping or an enum value is unknown.
        """
        node = _section(data, "node")
        edge = _section(data, "edge")
        layout = _section(data, "layout")
        defaults = cls()
        return cls(
            node=NodeStyle(
                shape=_enum(NodeShape, node.get("shape", defaults.node.shape.value), "node.shape"),
                fill_color=str(node.get("fillColor", defaults.node.fill_color)),
                stroke_color=str(node.get("strokeColor", defaults.node.stroke_color)),
                stroke_width=_number(node.get("strokeWidth", defaults.node.stroke_width), "node.strokeWidth"),
                padding=_number(node.get("padding", defaults.node.padding), "node.padding"),
            ),
            edge=EdgeStyleConfig(
                style=_enum(EdgeStyle, edge.get("style", defaults.edge.style.value), "edge.style"),
                color=str(edge.get("color", defaults.edge.color)),
                width=_number(edge.get("width", defaults.edge.width), "edge.width"),
                arrow_size=_number(edge.get("arrowSize", defaults.edge.arrow_size), "edge.arrowSize"),
            ),
            layout=LayoutConfig(
                algorithm=_enum(
                    LayoutAlgorithmType, layout.get("algorithm", defaults.layout.algorithm.value), "layout.algorithm"
                ),
                horizontal_gap=_number(
                    layout.get("horizontalGap", defaults.layout.horizontal_gap), "layout.horizontalGap"
                ),
                vertical_gap=_number(layout.get("verticalGap", defaults.layout.vertical_gap), "layout.verticalGap"),
                reduce_leaf_sibling_gaps=bool(
                    layout.get("reduceLeafSiblingGaps", defaults.layout.reduce_leaf_sibling_gaps)
                ),
            ),
        )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ValueError(f"Style section '{name}' must be a mapping")
    return value


def _enum(enum_cls, value: Any, where: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Unknown {where} '{value}'; use one of: {choices}") from None


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where} must be a number, got {value!r}")
    return value


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_overrides(style: TreeStyle, overrides: dict[str, Any] | None) -> TreeStyle:
    """Return a new style with a partial override dict deep-merged over ``style``."""
    if not overrides:
        return copy.deepcopy(style)
    return TreeStyle.from_dict(_deep_merge(style.to_dict(), overrides))


# ─── Style store ─────────────────────────────────────────────────────────────


class StyleStore:
    """Holds the current style and handles preset import/export."""

    def __init__(self, style: TreeStyle | None = None) -> None:
        self.style = style if style is not None else TreeStyle()

    def reset_style(self) -> None:
        self.style = TreeStyle()

    def apply_example_style(self, overrides: dict[str, Any] | None = None) -> None:
        """Replace the current style with defaults plus a document's overrides."""
        self.style = apply_overrides(TreeStyle(), overrides)

    def export_style(self, name: str = "Exported Style") -> str:
        preset = {
            "name": name,
            "style": self.style.to_dict(),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        return json.dumps(preset, indent=2)

    def import_style(self, text: str) -> bool:
        """Load a preset (or a bare style object) from JSON.

        Returns False, leaving the current style untouched, when the JSON is
        invalid or the node/edge/layout sections are missing.
        """
        try:
            parsed = json.loads(text)
        except ValueError as e:
            logger.debug("rejected style import: %s", e)
            return False

        candidate = parsed.get("style", parsed) if isinstance(parsed, dict) else None
        if not isinstance(candidate, dict) or not all(k in candidate for k in ("node", "edge", "layout")):
            logger.debug("rejected style import: missing node/edge/layout sections")
            return False

        try:
            self.style = TreeStyle.from_dict(candidate)
        except ValueError as e:
            logger.debug("rejected style import: %s", e)
            return False
        return True
