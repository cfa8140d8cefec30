"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from tree_layout.ir.tree import TreeDocument


class Parser(Protocol):
    """Protocol that all tree document parsers must implement."""

    def parse(self, src: str) -> TreeDocument:
        """Parse source text into a TreeDocument."""
        ...
