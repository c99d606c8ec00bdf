"""Lifecycle of the single floating message panel."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Optional, Protocol

from gutter_client.errors import InvariantViolation
from gutter_client.panel_placer import PanelGeometry

_LOGGER = logging.getLogger("GutterMessage.Client")


class PanelSurface(Protocol):
    """The part of the editor host a session needs to draw a floating panel."""

    def create_floating_panel(
        self,
        name: str,
        content: str,
        geometry: PanelGeometry,
        options: Mapping[str, Any],
    ) -> Any: ...
    def destroy_floating_panel(self, panel: Any) -> None: ...
    def update_panel_content(self, panel: Any, content: str) -> None: ...
    def update_panel_geometry(self, panel: Any, geometry: PanelGeometry) -> None: ...
    def focus_view(self, view: Any) -> None: ...


class SessionState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    CLOSING = "closing"


class TooltipSession:
    """Owns at most one floating panel and remembers the view that opened it.

    Closing is idempotent: hosts frequently call back into the plugin while a
    panel is being torn down (quit hooks, focus changes), and those re-entrant
    calls see ``is_closing`` and return without touching the panel again.
    """

    def __init__(self, surface: PanelSurface, name: str) -> None:
        self._surface = surface
        self._name = name
        self._state = SessionState.CLOSED
        self._panel: Any = None
        self._origin: Any = None
        self._geometry: Optional[PanelGeometry] = None
        self._content: str = ""

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is SessionState.OPEN

    @property
    def is_closing(self) -> bool:
        return self._state is SessionState.CLOSING

    @property
    def origin(self) -> Any:
        return self._origin

    @property
    def panel(self) -> Any:
        return self._panel

    @property
    def geometry(self) -> Optional[PanelGeometry]:
        return self._geometry

    @property
    def content(self) -> str:
        return self._content

    def open(
        self,
        content: str,
        geometry: PanelGeometry,
        origin: Any,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if self._state is not SessionState.CLOSED:
            raise InvariantViolation(f"tooltip session already {self._state.value}; close it before reopening")
        if origin is None:
            raise InvariantViolation("tooltip session requires an origin view")
        panel = self._surface.create_floating_panel(self._name, content, geometry, dict(options or {}))
        self._panel = panel
        self._origin = origin
        self._geometry = geometry
        self._content = content
        self._state = SessionState.OPEN
        _LOGGER.debug("Tooltip opened at %s", geometry.as_tuple())

    def replace_content(self, content: str) -> None:
        self._require_open("replace_content")
        self._surface.update_panel_content(self._panel, content)
        self._content = content

    def reposition(self, x: int, y: int) -> None:
        geometry = self._require_open("reposition")
        self._apply_geometry(PanelGeometry(x=x, y=y, width=geometry.width, height=geometry.height))

    def resize(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        geometry = self._require_open("resize")
        self._apply_geometry(
            PanelGeometry(
                x=geometry.x,
                y=geometry.y,
                width=geometry.width if width is None else width,
                height=geometry.height if height is None else height,
            )
        )

    def close(self) -> None:
        if self._state is not SessionState.OPEN:
            return
        self._state = SessionState.CLOSING
        origin = self._origin
        try:
            self._surface.destroy_floating_panel(self._panel)
            self._surface.focus_view(origin)
        finally:
            self._panel = None
            self._origin = None
            self._geometry = None
            self._content = ""
            self._state = SessionState.CLOSED
        _LOGGER.debug("Tooltip closed")

    def is_origin(self, view: Any) -> bool:
        return view is not None and self._origin is not None and view == self._origin

    def is_self(self, view: Any) -> bool:
        return view is not None and self._panel is not None and view == self._panel

    def _require_open(self, operation: str) -> PanelGeometry:
        if self._state is not SessionState.OPEN or self._geometry is None:
            raise InvariantViolation(f"{operation} called on a {self._state.value} tooltip session")
        return self._geometry

    def _apply_geometry(self, geometry: PanelGeometry) -> None:
        self._surface.update_panel_geometry(self._panel, geometry)
        self._geometry = geometry
