"""Helpers for translating buffer locations into viewport cells."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from gutter_client.messages import Location
from gutter_client.panel_placer import ScreenPoint, Viewport
from gutter_client.text_wrap import visual_width


@dataclass(frozen=True)
class BufferView:
    """Where a buffer pane sits on screen and which part of the buffer it shows.

    ``start_row`` is the number of soft-wrapped rows of ``start_line`` that are
    scrolled out of view at the top.
    """

    x: int
    y: int
    width: int
    start_line: int = 0
    start_row: int = 0
    start_column: int = 0


def viewport_from_screen(screen_width: int, info_bar_y: int, tab_count: int) -> Viewport:
    """Size of the area panes live in, excluding the status line and, with several tabs, the tab bar."""
    tab_bar_rows = 0 if tab_count <= 1 else 1
    return Viewport(width=screen_width, height=max(0, info_bar_y - tab_bar_rows - 1))


def wrapped_rows(text: str, width: int) -> int:
    """Rows ``text`` occupies when soft-wrapped at ``width`` cells (always at least 1)."""
    if width <= 0:
        return 1
    cells = visual_width(text)
    if cells == 0:
        return 1
    return (cells + width - 1) // width


def screen_point_from_location(
    view: BufferView,
    location: Location,
    lines: Sequence[str],
    *,
    softwrap: bool = False,
) -> ScreenPoint:
    """Map ``location`` to the viewport cell it is drawn in.

    ``lines`` are the buffer's lines; only those between the first visible line
    and ``location.line`` (inclusive) are read.
    """
    line_text = lines[location.line] if location.line < len(lines) else ""
    visual_x = visual_width(line_text[: location.column])
    if not softwrap or view.width <= 0:
        return ScreenPoint(
            x=view.x - view.start_column + visual_x,
            y=view.y + location.line - view.start_line,
        )

    extra_rows = -view.start_row
    for number in range(view.start_line, location.line):
        text = lines[number] if number < len(lines) else ""
        extra_rows += wrapped_rows(text, view.width) - 1
    row, column = divmod(visual_x, view.width)
    return ScreenPoint(
        x=view.x + column,
        y=view.y + location.line - view.start_line + extra_rows + row,
    )
