"""Host notifications the plugin controller reacts to.

Hosts translate their own hooks into one of these variants and pass it to
:meth:`gutter_plugin.controller.PluginController.handle`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Tuple, Union


class SplitOrientation(Enum):
    HORIZONTAL = "hsplit"
    VERTICAL = "vsplit"


class PaneChange(Enum):
    NEXT_SPLIT = "next_split"
    PREVIOUS_SPLIT = "previous_split"
    UNSPLIT = "unsplit"
    NEXT_TAB = "next_tab"
    PREVIOUS_TAB = "previous_tab"


class Mode(Enum):
    COMMAND = "command"
    SHELL = "shell"


@dataclass(frozen=True)
class CommandInvoked:
    view: Any
    args: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Save:
    view: Any


@dataclass(frozen=True)
class BufferOpened:
    name: str


@dataclass(frozen=True)
class SplitRequested:
    view: Any
    orientation: SplitOrientation = SplitOrientation.VERTICAL


@dataclass(frozen=True)
class PaneChanged:
    view: Any
    change: PaneChange


@dataclass(frozen=True)
class TabAdded:
    view: Any = None


@dataclass(frozen=True)
class Scroll:
    view: Any = None


@dataclass(frozen=True)
class ModeChange:
    mode: Mode


@dataclass(frozen=True)
class Escape:
    view: Any = None


@dataclass(frozen=True)
class PreAction:
    """Any editor action is about to run (micro's ``pre`` hook)."""

    view: Any = None


@dataclass(frozen=True)
class MousePress:
    """A mouse click is about to be handled.

    Hosts also send this for multi-cursor clicks (micro's ``preMouseMultiCursor``),
    with ``multi_cursor`` set; both close an open panel and cancel the click.
    """

    view: Any = None
    multi_cursor: bool = False


@dataclass(frozen=True)
class PreQuit:
    view: Any


@dataclass(frozen=True)
class ViewportResized:
    view: Any = None


Event = Union[
    CommandInvoked,
    Save,
    BufferOpened,
    SplitRequested,
    PaneChanged,
    TabAdded,
    Scroll,
    ModeChange,
    Escape,
    PreAction,
    MousePress,
    PreQuit,
    ViewportResized,
]
