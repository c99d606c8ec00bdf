"""Plugin controller: ties message loading, navigation, layout and the tooltip together."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from gutter_client import messages as message_store
from gutter_client.errors import InvariantViolation, NoMessageOnLineError, NoMessagesError, UserError
from gutter_client.messages import MergedEntry, OrderedIndex
from gutter_client.navigator import Direction, step
from gutter_client.panel_placer import PanelLayout, layout_panel
from gutter_client.tooltip_session import TooltipSession
from gutter_plugin.commands import COMMAND_NAME, Action, complete, parse_args
from gutter_plugin.events import (
    BufferOpened,
    CommandInvoked,
    Escape,
    Event,
    ModeChange,
    MousePress,
    PaneChanged,
    PreAction,
    PreQuit,
    Save,
    Scroll,
    SplitRequested,
    TabAdded,
    ViewportResized,
)
from gutter_plugin.host import EditorHost
from gutter_plugin.preferences import PluginPreferences

_LOGGER = logging.getLogger("GutterMessage")

UNNAMED_BUFFER = "No name"


class PluginController:
    """Holds the plugin state for one editor session.

    The hosting process constructs one controller and feeds every editor
    notification through :meth:`handle`. Events are handled synchronously and
    each handler leaves at most one panel open.
    """

    def __init__(
        self,
        host: EditorHost,
        preferences: Optional[PluginPreferences] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._host = host
        self._prefs = preferences or PluginPreferences()
        self._settings = self._prefs.placement_settings()
        self._logger = logger or _LOGGER
        self._session = TooltipSession(host, self._prefs.panel_name)
        self._index: Optional[OrderedIndex] = None
        self._current_index: Optional[int] = None
        self._handlers: Dict[type, Callable[[Any], bool]] = {
            CommandInvoked: self._on_command,
            Save: self._on_save,
            BufferOpened: self._on_buffer_opened,
            SplitRequested: self._on_split_requested,
            PaneChanged: self._on_pane_changed,
            TabAdded: self._close_and_proceed,
            Scroll: self._close_and_proceed,
            ModeChange: self._close_and_proceed,
            Escape: self._close_and_proceed,
            PreAction: self._close_and_proceed,
            MousePress: self._on_mouse_press,
            PreQuit: self._on_pre_quit,
            ViewportResized: self._on_viewport_resized,
        }

    # Public API ---------------------------------------------------------

    @property
    def session(self) -> TooltipSession:
        return self._session

    @property
    def ordered_index(self) -> Optional[OrderedIndex]:
        return self._index

    @property
    def current_index(self) -> Optional[int]:
        return self._current_index

    @property
    def preferences(self) -> PluginPreferences:
        return self._prefs

    def handle(self, event: Event) -> bool:
        """Dispatch ``event``; the result tells the host whether to carry on with its own action."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {event!r}")
        return handler(event)

    def complete(self, line: str, partial: str) -> Optional[Tuple[List[str], List[str]]]:
        return complete(line, partial)

    def reset(self, reason: str) -> None:
        """Close the panel and forget the loaded messages and selection."""
        self._logger.debug("Plugin reset (%s)", reason)
        self._close_panel(reason)
        self._index = None
        self._current_index = None

    def next_message(self, view: Any) -> int:
        return self._go(view, Direction.NEXT)

    def prev_message(self, view: Any) -> int:
        return self._go(view, Direction.PREV)

    def display(self, view: Any, *, chained: bool = False) -> None:
        """Open the panel for the selected entry.

        Unless ``chained`` to a successful next/prev, the selection is replaced
        by the first entry on the cursor line.
        """
        if not chained or self._current_index is None or not self._index:
            self._select_current_line(view)
        if self._index is None or self._current_index is None:
            raise InvariantViolation("display reached without a selected message")
        entry = self._index[self._current_index]
        layout = self._layout(view, entry)
        self._session.open(layout.block.text, layout.geometry, view, self._prefs.panel_options)

    # Event handlers -----------------------------------------------------

    def _on_command(self, event: CommandInvoked) -> bool:
        view = event.view
        if view is None:
            return True
        if self._session.is_open:
            if self._session.is_self(view):
                # Commands typed inside the panel act on the pane that opened it.
                view = self._session.origin
                if view is None:
                    raise InvariantViolation("open tooltip has no origin view")
            self._session.close()
        try:
            action = parse_args(event.args)
            self._run(action, view)
        except UserError as exc:
            self._report(exc)
        return True

    def _on_save(self, event: Save) -> bool:
        if self._session.is_self(event.view):
            return True
        self.reset("save")
        return True

    def _on_buffer_opened(self, event: BufferOpened) -> bool:
        if event.name not in {self._prefs.panel_name, UNNAMED_BUFFER}:
            self.reset("buffer opened")
        return True

    def _on_split_requested(self, event: SplitRequested) -> bool:
        if self._session.is_open and self._session.is_self(event.view):
            # Splitting the panel itself would nest the new pane inside it.
            self._close_panel(event.orientation.value)
            return False
        return True

    def _on_pane_changed(self, event: PaneChanged) -> bool:
        self.reset(event.change.value)
        return True

    def _close_and_proceed(self, event: Event) -> bool:
        self._close_panel(type(event).__name__)
        return True

    def _on_mouse_press(self, event: MousePress) -> bool:
        if self._session.is_open:
            self._close_panel("multi-cursor click" if event.multi_cursor else "mouse press")
            return False
        return True

    def _on_pre_quit(self, event: PreQuit) -> bool:
        if not self._session.is_open:
            return True
        if self._session.is_self(event.view):
            self._close_panel("quit")
            return False
        return True

    def _on_viewport_resized(self, event: ViewportResized) -> bool:
        if not self._session.is_open or self._current_index is None or not self._index:
            return True
        entry = self._index[self._current_index]
        layout = self._layout(self._session.origin, entry)
        geometry = layout.geometry
        self._session.reposition(geometry.x, geometry.y)
        self._session.resize(geometry.width, geometry.height)
        self._session.replace_content(layout.block.text)
        return True

    # Implementation details --------------------------------------------

    def _run(self, action: Action, view: Any) -> None:
        if action is Action.NEXT:
            self.next_message(view)
        elif action is Action.PREV:
            self.prev_message(view)
        elif action is Action.DISPLAY:
            self.display(view)
        elif action is Action.DISPLAY_NEXT:
            self.next_message(view)
            self.display(view, chained=True)
        elif action is Action.DISPLAY_PREV:
            self.prev_message(view)
            self.display(view, chained=True)

    def _load(self, view: Any) -> OrderedIndex:
        self._index = message_store.load(self._host.get_messages(view), bullet=self._prefs.bullet)
        return self._index

    def _go(self, view: Any, direction: Direction) -> int:
        index = self._load(view)
        if not index:
            self.reset("no messages")
            raise NoMessagesError(self._host.document_name(view))
        cursor = self._host.get_cursor_location(view)
        position = step(index, cursor, direction)
        location = index[position].location
        self._host.set_cursor_location(view, location)
        self._host.center_viewport_on(view, location)
        self._current_index = position
        self._logger.debug("Moved %s to message %d at %s", direction.name.lower(), position, location)
        return position

    def _select_current_line(self, view: Any) -> None:
        index = self._index if self._index else self._load(view)
        if not index:
            self._current_index = None
            raise NoMessagesError(self._host.document_name(view))
        line = self._host.get_cursor_location(view).line
        position = message_store.find_at_line(index, line)
        self._current_index = position
        if position is None:
            raise NoMessageOnLineError()

    def _layout(self, view: Any, entry: MergedEntry) -> PanelLayout:
        viewport = self._host.get_viewport_metrics()
        anchor = self._host.map_location_to_screen_point(view, entry.location)
        return layout_panel(viewport, anchor, entry.rendered_text, self._settings)

    def _close_panel(self, reason: str) -> None:
        if self._session.is_open:
            self._logger.debug("Closing tooltip (%s)", reason)
            self._session.close()

    def _report(self, exc: UserError) -> None:
        message = f"{COMMAND_NAME}: {exc.message}"
        self._logger.info(message)
        self._host.show_status_error(message)
