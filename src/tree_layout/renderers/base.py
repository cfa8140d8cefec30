"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from tree_layout.layout.types import LayoutNode


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, root: LayoutNode) -> str:
        """Render a positioned tree to an output string."""
        ...
