"""Placement of the floating message panel inside the editing viewport.

Pure geometry in character cells: callers pass the viewport size and the
anchor cell of the message and receive the panel rectangle to apply. Nothing
here talks to the host.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from gutter_client.text_wrap import WrappedBlock, wrap

_LOGGER = logging.getLogger("GutterMessage.Client")


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int


@dataclass(frozen=True)
class ScreenPoint:
    x: int
    y: int


@dataclass(frozen=True)
class PanelGeometry:
    x: int
    y: int
    width: int
    height: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class PlacementSettings:
    min_width_divisor: int = 3
    max_width_margin: int = 4
    flip_above_ratio: float = 1.5
    title_row: bool = True


@dataclass(frozen=True)
class WidthChoice:
    width: int
    shift_x: int


@dataclass(frozen=True)
class PanelLayout:
    block: WrappedBlock
    geometry: PanelGeometry


DEFAULT_SETTINGS = PlacementSettings()


def width_bounds(viewport: Viewport, settings: PlacementSettings = DEFAULT_SETTINGS) -> Tuple[int, int]:
    """Return ``(min_width, max_width)`` for ``viewport``; both are at least 1."""
    divisor = max(1, settings.min_width_divisor)
    min_width = max(1, viewport.width // divisor)
    max_width = max(1, viewport.width - settings.max_width_margin)
    return min_width, max_width


def choose_width(
    viewport: Viewport,
    anchor: ScreenPoint,
    settings: PlacementSettings = DEFAULT_SETTINGS,
) -> WidthChoice:
    min_width, max_width = width_bounds(viewport, settings)
    space_right = viewport.width - anchor.x
    if space_right < min_width:
        # Right edge of the panel lines up with the anchor column.
        _LOGGER.debug("space_right=%d below min_width=%d; shifting panel left", space_right, min_width)
        return WidthChoice(width=min_width, shift_x=-(min_width - 1))
    if space_right > max_width:
        _LOGGER.debug("space_right=%d above max_width=%d; capping", space_right, max_width)
        return WidthChoice(width=max_width, shift_x=0)
    _LOGGER.debug("space_right=%d fits", space_right)
    return WidthChoice(width=space_right, shift_x=0)


def place_vertically(
    viewport: Viewport,
    anchor: ScreenPoint,
    height: int,
    settings: PlacementSettings = DEFAULT_SETTINGS,
) -> Tuple[int, int]:
    """Return ``(shift_y, height)``; the height is clamped when neither side fits."""
    space_above = anchor.y
    space_below = viewport.height - anchor.y
    if height <= space_below:
        _LOGGER.debug("panel height=%d fits below (space_below=%d)", height, space_below)
        return 1, height
    if height <= space_above:
        _LOGGER.debug("panel height=%d fits above (space_above=%d)", height, space_above)
        return -height, height
    if space_above > settings.flip_above_ratio * space_below:
        _LOGGER.debug(
            "panel height=%d fits nowhere; clamping above to %d (space_below=%d)",
            height,
            space_above,
            space_below,
        )
        return -space_above, space_above
    _LOGGER.debug(
        "panel height=%d fits nowhere; clamping below to %d (space_above=%d)",
        height,
        space_below,
        space_above,
    )
    return 1, max(0, space_below)


def place_panel(
    viewport: Viewport,
    anchor: ScreenPoint,
    block_width: int,
    block_height: int,
    *,
    shift_x: int = 0,
    settings: PlacementSettings = DEFAULT_SETTINGS,
) -> PanelGeometry:
    panel_width = block_width + 1
    panel_height = block_height + (1 if settings.title_row else 0)
    shift_y, panel_height = place_vertically(viewport, anchor, panel_height, settings)
    return PanelGeometry(
        x=anchor.x + shift_x,
        y=anchor.y + shift_y,
        width=panel_width,
        height=panel_height,
    )


def layout_panel(
    viewport: Viewport,
    anchor: ScreenPoint,
    text: str,
    settings: PlacementSettings = DEFAULT_SETTINGS,
) -> PanelLayout:
    """Pick a width for ``anchor``, wrap ``text`` to it and place the result."""
    choice = choose_width(viewport, anchor, settings)
    block = wrap(text, choice.width)
    shift_x = choice.shift_x
    if shift_x:
        # Right edge of the wrapped panel lines up with the anchor column.
        shift_x = -block.width
    geometry = place_panel(
        viewport,
        anchor,
        block.width,
        block.height,
        shift_x=shift_x,
        settings=settings,
    )
    _LOGGER.debug("Panel layout: block=%dx%d geometry=%s", block.width, block.height, geometry.as_tuple())
    return PanelLayout(block=block, geometry=geometry)
