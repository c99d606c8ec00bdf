from __future__ import annotations

from gutter_client.messages import Location
from gutter_client.panel_placer import ScreenPoint, Viewport
from gutter_client.screen_mapping import (
    BufferView,
    screen_point_from_location,
    viewport_from_screen,
    wrapped_rows,
)


def test_viewport_excludes_status_line() -> None:
    assert viewport_from_screen(120, 40, 1) == Viewport(width=120, height=39)


def test_viewport_excludes_tab_bar_with_several_tabs() -> None:
    assert viewport_from_screen(120, 40, 3) == Viewport(width=120, height=38)


def test_wrapped_rows() -> None:
    assert wrapped_rows("", 10) == 1
    assert wrapped_rows("x" * 10, 10) == 1
    assert wrapped_rows("x" * 11, 10) == 2
    assert wrapped_rows("x" * 25, 10) == 3


def test_maps_without_softwrap_using_scroll_offsets() -> None:
    view = BufferView(x=4, y=1, width=40, start_line=10, start_column=3)
    lines = [""] * 12 + ["    value = 1"]

    point = screen_point_from_location(view, Location(12, 8), lines)

    assert point == ScreenPoint(x=4 - 3 + 8, y=1 + 2)


def test_wide_characters_shift_the_column() -> None:
    view = BufferView(x=0, y=0, width=40)
    lines = ["日本x"]

    assert screen_point_from_location(view, Location(0, 2), lines) == ScreenPoint(4, 0)


def test_softwrap_counts_rows_of_wrapped_lines_above() -> None:
    view = BufferView(x=0, y=0, width=10)
    lines = ["x" * 25, "short", "y" * 5]

    point = screen_point_from_location(view, Location(2, 3), lines, softwrap=True)

    assert point == ScreenPoint(x=3, y=2 + 2)


def test_softwrap_includes_row_within_target_line_and_hidden_rows() -> None:
    view = BufferView(x=0, y=0, width=10, start_line=0, start_row=1)
    lines = ["x" * 25, "z" * 30]

    point = screen_point_from_location(view, Location(1, 23), lines, softwrap=True)

    # line 0 adds 2 extra rows, one of which is scrolled away; column 23 is on row 2.
    assert point == ScreenPoint(x=3, y=1 + 2 - 1 + 2)
