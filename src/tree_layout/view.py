"""View helpers: keep the root on screen when the layout algorithm changes."""

from __future__ import annotations

from dataclasses import dataclass

MIN_PAN_ADJUST: float = 0.5


@dataclass
class RootPositionOptions:
    horizontal_gap: float
    pan_x: float
    pan_y: float
    layout_root_x: float
    layout_root_y: float
    offset_x: float
    offset_y: float
    zoom: float
    previous_root_screen_x: float | None
    previous_root_screen_y: float | None
    has_user_interacted: bool
    is_interacting: bool
    algorithm_changed: bool
    min_pan_adjust: float = MIN_PAN_ADJUST


@dataclass
class RootPositionResult:
    pan_x: float
    pan_y: float
    root_screen_x: float
    root_screen_y: float
    did_adjust: bool


def _screen(gap: float, pan: float, layout: float, offset: float, zoom: float) -> float:
    return gap + pan + (layout + offset) * zoom


def preserve_root_position(options: RootPositionOptions) -> RootPositionResult:
    """Adjust the pan so the root stays where it was before a re-layout.

    Only applies after the user has moved the view, while no drag is in
    progress, right after an algorithm change, and when the previous root
    screen position is known. Movements within ``min_pan_adjust`` on both axes
    are ignored; otherwise both axes are corrected together.
    """
    o = options
    new_x = _screen(o.horizontal_gap, o.pan_x, o.layout_root_x, o.offset_x, o.zoom)
    new_y = _screen(o.horizontal_gap, o.pan_y, o.layout_root_y, o.offset_y, o.zoom)

    pan_x, pan_y = o.pan_x, o.pan_y
    did_adjust = False
    should_adjust = (
        o.has_user_interacted
        and not o.is_interacting
        and o.algorithm_changed
        and o.previous_root_screen_x is not None
        and o.previous_root_screen_y is not None
    )
    if should_adjust:
        dx = o.previous_root_screen_x - new_x
        dy = o.previous_root_screen_y - new_y
        if abs(dx) > o.min_pan_adjust or abs(dy) > o.min_pan_adjust:
            pan_x += dx
            pan_y += dy
            did_adjust = True

    return RootPositionResult(
        pan_x=pan_x,
        pan_y=pan_y,
        root_screen_x=_screen(o.horizontal_gap, pan_x, o.layout_root_x, o.offset_x, o.zoom),
        root_screen_y=_screen(o.horizontal_gap, pan_y, o.layout_root_y, o.offset_y, o.zoom),
        did_adjust=did_adjust,
    )
