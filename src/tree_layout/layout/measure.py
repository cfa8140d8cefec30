"""Deterministic text measurement."""

from __future__ import annotations

from tree_layout.layout.types import TextMeasurement

DEFAULT_CHAR_WIDTH: float = 8.0
DEFAULT_LINE_HEIGHT: float = 18.0


class MonospaceTextMeasurer:
    """Measures labels as if drawn in a fixed-pitch font.

    Width is the longest line times ``char_width``; height is the line count
    times ``line_height``. Both include ``padding`` on every side.
    """

    def __init__(self, char_width: float = DEFAULT_CHAR_WIDTH, line_height: float = DEFAULT_LINE_HEIGHT) -> None:
        self.char_width = char_width
        self.line_height = line_height

    def measure(self, label: str, padding: float) -> TextMeasurement:
        lines = tuple(label.split("\n"))
        widest = max(len(line) for line in lines) * self.char_width
        return TextMeasurement(
            width=widest + padding * 2,
            height=len(lines) * self.line_height + padding * 2,
            lines=lines,
        )
