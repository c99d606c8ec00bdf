"""Interface the editor host provides to the plugin controller."""
from __future__ import annotations

from typing import Any, Protocol, Sequence

from gutter_client.messages import Location, RawMessage
from gutter_client.panel_placer import ScreenPoint, Viewport
from gutter_client.tooltip_session import PanelSurface


class EditorHost(PanelSurface, Protocol):
    """Everything the controller reads from, or asks of, the editor.

    ``view`` arguments are opaque pane handles; the controller only compares
    them with the panel handle returned by ``create_floating_panel``.
    """

    def get_messages(self, view: Any) -> Sequence[RawMessage]: ...
    def document_name(self, view: Any) -> str: ...
    def get_cursor_location(self, view: Any) -> Location: ...
    def set_cursor_location(self, view: Any, location: Location) -> None: ...
    def center_viewport_on(self, view: Any, location: Location) -> None: ...
    def get_viewport_metrics(self) -> Viewport: ...
    def map_location_to_screen_point(self, view: Any, location: Location) -> ScreenPoint: ...
    def show_status_error(self, message: str) -> None: ...
