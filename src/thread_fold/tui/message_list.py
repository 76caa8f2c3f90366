"""Message list widget — the host side of thread folding.

Owns the rows, the cursor, and the EventHub. Every change to the rows goes
through a method here that raises the matching list event:

    set_rows()      -> LIST_FOUND
    update_row()    -> INDEX_UPDATED   (mark_read() is a shorthand)
    enter_mode()    -> MODE_ENTERED

Redrawing never raises events.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from textual.widgets import Static

from thread_fold.app.events import EventHub, ListEvent
from thread_fold.app.settings_store import FoldSettings
from thread_fold.core.engine import FoldingEngine
from thread_fold.core.rows import Row, RowList
from thread_fold.core.scanner import find_thread_root
from thread_fold.tui.rendering import render_text
from thread_fold.tui.styles import build_styles


class MessageList(Static):
    DEFAULT_CSS = """
    MessageList {
        height: 1fr;
        padding: 0 1;
        overflow-y: auto;
    }
    """

    def __init__(self, rows: Iterable[Row], settings: FoldSettings, **kwargs):
        super().__init__("", **kwargs)
        self.rows = RowList(rows)
        self.list_events = EventHub()
        self.engine = FoldingEngine(self.rows, settings.default_view)
        self._styles = build_styles(settings)
        self._cursor = 0

    @property
    def cursor(self) -> int | None:
        return self._cursor if len(self.rows) else None

    def on_mount(self) -> None:
        self.redraw()

    # ─── Row mutation (raises list events) ────────────────────────────

    def set_rows(self, rows: Iterable[Row]) -> None:
        self.rows.replace(rows)
        self._cursor = min(self._cursor, max(len(self.rows) - 1, 0))
        self.list_events.emit(ListEvent.LIST_FOUND)
        self.redraw()

    def update_row(self, position: int, row: Row) -> None:
        self.rows.update(position, row)
        self.list_events.emit(ListEvent.INDEX_UPDATED)
        self.redraw()

    def mark_read(self, position: int | None = None) -> None:
        position = self._cursor if position is None else position
        if not 0 <= position < len(self.rows):
            return
        row = self.rows.row_at(position)
        if row.unread:
            self.update_row(position, replace(row, unread=False))

    def enter_mode(self) -> None:
        self.list_events.emit(ListEvent.MODE_ENTERED)
        self.redraw()

    # ─── Cursor ───────────────────────────────────────────────────────

    def move_cursor(self, delta: int) -> None:
        visible = self.engine.visible_positions()
        if not visible:
            return
        self._settle_cursor(visible)
        idx = visible.index(self._cursor)
        idx = max(0, min(len(visible) - 1, idx + delta))
        self._cursor = visible[idx]
        self.redraw()

    def _settle_cursor(self, visible: list[int]) -> None:
        """Move the cursor off a hidden row, onto its thread root."""
        if self._cursor in visible:
            return
        root = find_thread_root(self.rows, self._cursor)
        if root is not None and root in visible:
            self._cursor = root
        else:
            self._cursor = min(visible, key=lambda p: abs(p - self._cursor))

    # ─── Drawing ──────────────────────────────────────────────────────

    def redraw(self) -> None:
        visible = self.engine.visible_positions()
        if visible:
            self._settle_cursor(visible)
        self.update(render_text(self.engine, self._styles, self.cursor))
