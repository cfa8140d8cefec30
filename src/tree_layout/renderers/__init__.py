"""Renderers for positioned trees."""

from tree_layout.renderers.base import Renderer
from tree_layout.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
