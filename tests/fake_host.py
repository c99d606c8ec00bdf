"""In-memory editor host used by the controller tests."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from gutter_client.messages import Location, RawMessage, Severity
from gutter_client.panel_placer import PanelGeometry, ScreenPoint, Viewport


class FakeView:
    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"FakeView({self.name!r})"


class FakePanel:
    def __init__(self, name: str, content: str, geometry: PanelGeometry, options: Mapping[str, Any]) -> None:
        self.name = name
        self.content = content
        self.geometry = geometry
        self.options = dict(options)
        self.destroyed = False


def message(
    text: str,
    line: int,
    column: int = 0,
    severity: Severity = Severity.ERROR,
    owner: str = "lint",
) -> RawMessage:
    start = Location(line, column)
    return RawMessage(text=text, start=start, end=Location(line, column + 1), severity=severity, owner=owner)


class FakeHost:
    def __init__(
        self,
        messages: Sequence[RawMessage] = (),
        *,
        viewport: Viewport = Viewport(width=80, height=24),
        cursor: Location = Location(0, 0),
        document: str = "main.py",
    ) -> None:
        self.messages: List[RawMessage] = list(messages)
        self.viewport = viewport
        self.cursor = cursor
        self.document = document
        self.anchor_fn: Optional[Callable[[Location], ScreenPoint]] = None
        self.panels: List[FakePanel] = []
        self.destroyed: List[FakePanel] = []
        self.status: List[str] = []
        self.centered: List[Location] = []
        self.focused: List[Any] = []
        self.geometry_updates: List[PanelGeometry] = []
        self.content_updates: List[str] = []
        self.on_destroy: Optional[Callable[[FakePanel], None]] = None
        self.message_requests: Dict[str, int] = {}

    @property
    def open_panels(self) -> List[FakePanel]:
        return [panel for panel in self.panels if not panel.destroyed]

    def get_messages(self, view: Any) -> Sequence[RawMessage]:
        key = getattr(view, "name", repr(view))
        self.message_requests[key] = self.message_requests.get(key, 0) + 1
        return list(self.messages)

    def document_name(self, view: Any) -> str:
        return self.document

    def get_cursor_location(self, view: Any) -> Location:
        return self.cursor

    def set_cursor_location(self, view: Any, location: Location) -> None:
        self.cursor = location

    def center_viewport_on(self, view: Any, location: Location) -> None:
        self.centered.append(location)

    def get_viewport_metrics(self) -> Viewport:
        return self.viewport

    def map_location_to_screen_point(self, view: Any, location: Location) -> ScreenPoint:
        if self.anchor_fn is not None:
            return self.anchor_fn(location)
        return ScreenPoint(x=location.column, y=location.line)

    def create_floating_panel(
        self,
        name: str,
        content: str,
        geometry: PanelGeometry,
        options: Mapping[str, Any],
    ) -> FakePanel:
        panel = FakePanel(name, content, geometry, options)
        self.panels.append(panel)
        return panel

    def destroy_floating_panel(self, panel: FakePanel) -> None:
        panel.destroyed = True
        self.destroyed.append(panel)
        if self.on_destroy is not None:
            self.on_destroy(panel)

    def update_panel_content(self, panel: FakePanel, content: str) -> None:
        panel.content = content
        self.content_updates.append(content)

    def update_panel_geometry(self, panel: FakePanel, geometry: PanelGeometry) -> None:
        panel.geometry = geometry
        self.geometry_updates.append(geometry)

    def focus_view(self, view: Any) -> None:
        self.focused.append(view)

    def show_status_error(self, message: str) -> None:
        self.status.append(message)
