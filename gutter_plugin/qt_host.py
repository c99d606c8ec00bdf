"""PyQt6 editor host: a QPlainTextEdit with a floating QLabel for the message panel.

Geometry handed to this host is in character cells; it is converted to pixels
with the editor font's metrics.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtGui import QFontDatabase, QFontMetrics, QTextCursor
from PyQt6.QtWidgets import QFrame, QLabel, QPlainTextEdit

from gutter_client.messages import Location, RawMessage
from gutter_client.panel_placer import PanelGeometry, ScreenPoint, Viewport
from gutter_client.screen_mapping import BufferView, screen_point_from_location
from gutter_plugin import events

_LOGGER = logging.getLogger("GutterMessage.Client")

UNNAMED_DOCUMENT = "No name"
PANEL_STYLE = "QLabel { background-color: #2b2b2b; color: #e0e0e0; border: 1px solid #5a5a5a; }"


class QtEditorHost:
    """Implements the editor host interface on top of one ``QPlainTextEdit``."""

    def __init__(
        self,
        editor: QPlainTextEdit,
        *,
        status_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._editor = editor
        self._status = status_fn or (lambda message: _LOGGER.warning("%s", message))
        self._messages: List[RawMessage] = []
        self._bridge: Optional[_EventBridge] = None
        editor.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))

    @property
    def editor(self) -> QPlainTextEdit:
        return self._editor

    def set_messages(self, messages: Sequence[RawMessage]) -> None:
        self._messages = list(messages)

    def attach(self, handle_fn: Callable[[Any], bool]) -> None:
        """Forward editor input (escape, mouse, wheel, resize) to ``handle_fn``."""
        if self._bridge is not None:
            return
        self._bridge = _EventBridge(self._editor, handle_fn)
        self._editor.installEventFilter(self._bridge)
        self._editor.viewport().installEventFilter(self._bridge)

    # Host interface -----------------------------------------------------

    def get_messages(self, view: Any) -> Sequence[RawMessage]:
        return tuple(self._messages)

    def document_name(self, view: Any) -> str:
        return self._editor.documentTitle() or UNNAMED_DOCUMENT

    def get_cursor_location(self, view: Any) -> Location:
        cursor = self._editor.textCursor()
        return Location(line=cursor.blockNumber(), column=cursor.positionInBlock())

    def set_cursor_location(self, view: Any, location: Location) -> None:
        block = self._editor.document().findBlockByNumber(location.line)
        if not block.isValid():
            return
        cursor = QTextCursor(block)
        column = min(location.column, max(0, block.length() - 1))
        cursor.movePosition(QTextCursor.MoveOperation.Right, QTextCursor.MoveMode.MoveAnchor, column)
        self._editor.setTextCursor(cursor)

    def center_viewport_on(self, view: Any, location: Location) -> None:
        self._editor.centerCursor()

    def get_viewport_metrics(self) -> Viewport:
        cell_width, cell_height = self._cell_size()
        viewport = self._editor.viewport()
        return Viewport(width=viewport.width() // cell_width, height=viewport.height() // cell_height)

    def map_location_to_screen_point(self, view: Any, location: Location) -> ScreenPoint:
        cell_width, _ = self._cell_size()
        buffer_view = BufferView(
            x=0,
            y=0,
            width=self.get_viewport_metrics().width,
            start_line=self._editor.firstVisibleBlock().blockNumber(),
            start_column=self._editor.horizontalScrollBar().value() // cell_width,
        )
        lines = self._editor.toPlainText().split("\n")
        softwrap = self._editor.lineWrapMode() != QPlainTextEdit.LineWrapMode.NoWrap
        return screen_point_from_location(buffer_view, location, lines, softwrap=softwrap)

    def create_floating_panel(
        self,
        name: str,
        content: str,
        geometry: PanelGeometry,
        options: Mapping[str, Any],
    ) -> QLabel:
        panel = QLabel(self._editor.viewport())
        panel.setObjectName(name)
        panel.setToolTip(name)
        panel.setFont(self._editor.font())
        panel.setTextFormat(Qt.TextFormat.PlainText)
        panel.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        panel.setFrameShape(QFrame.Shape.Box)
        panel.setStyleSheet(PANEL_STYLE)
        if options.get("readonly", True):
            panel.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        panel.setText(content)
        self._apply_geometry(panel, geometry)
        panel.show()
        panel.raise_()
        return panel

    def destroy_floating_panel(self, panel: Any) -> None:
        panel.hide()
        panel.deleteLater()

    def update_panel_content(self, panel: Any, content: str) -> None:
        panel.setText(content)

    def update_panel_geometry(self, panel: Any, geometry: PanelGeometry) -> None:
        self._apply_geometry(panel, geometry)

    def focus_view(self, view: Any) -> None:
        self._editor.setFocus()

    def show_status_error(self, message: str) -> None:
        self._status(message)

    # Implementation details --------------------------------------------

    def _cell_size(self) -> Tuple[int, int]:
        metrics = QFontMetrics(self._editor.font())
        return max(1, metrics.horizontalAdvance("M")), max(1, metrics.lineSpacing())

    def _apply_geometry(self, panel: QLabel, geometry: PanelGeometry) -> None:
        cell_width, cell_height = self._cell_size()
        panel.setGeometry(
            geometry.x * cell_width,
            geometry.y * cell_height,
            max(1, geometry.width * cell_width),
            max(1, geometry.height * cell_height),
        )


class _EventBridge(QObject):
    """Event filter translating Qt input events into controller events."""

    def __init__(self, editor: QPlainTextEdit, handle_fn: Callable[[Any], bool]) -> None:
        super().__init__(editor)
        self._editor = editor
        self._handle = handle_fn

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        kind = event.type()
        if kind == QEvent.Type.KeyPress and event.key() == Qt.Key.Key_Escape:
            self._handle(events.Escape(self._editor))
        elif kind == QEvent.Type.MouseButtonPress:
            multi_cursor = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
            return not self._handle(events.MousePress(self._editor, multi_cursor=multi_cursor))
        elif kind == QEvent.Type.Wheel:
            self._handle(events.Scroll(self._editor))
        elif kind == QEvent.Type.Resize and watched is self._editor:
            self._handle(events.ViewportResized(self._editor))
        return False
