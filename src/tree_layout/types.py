"""Shared type definitions for tree-layout.

Enums used across the tree IR, style configuration, layout, and renderers.
Values match the identifiers used in tree documents and style presets.
"""

from __future__ import annotations

from enum import Enum


class NodeShape(Enum):
    Rectangle = "rectangle"
    RoundedRectangle = "rounded-rectangle"
    Circle = "circle"
    Ellipse = "ellipse"

    @classmethod
    def default(cls) -> NodeShape:
        return cls.RoundedRectangle


class EdgeStyle(Enum):
    Curve = "curve"  # parent bottom corners to child top corners
    StraightArrow = "straight-arrow"  # parent bottom-centre to child top-centre
    OrgChart = "org-chart"  # drop, horizontal bar, drop

    @classmethod
    def default(cls) -> EdgeStyle:
        return cls.OrgChart


class LayoutAlgorithmType(Enum):
    BoundingBox = "bounding-box"
    MaxWidth = "maxwidth"
    TopAlign = "top-align"
    LRSqueeze = "lr-squeeze"
    RLSqueeze = "rl-squeeze"
    Tidy = "tidy"

    @classmethod
    def default(cls) -> LayoutAlgorithmType:
        return cls.MaxWidth


class SizingMode(Enum):
    FitContent = "fit-content"
    Fixed = "fixed"

    @classmethod
    def default(cls) -> SizingMode:
        return cls.FitContent
