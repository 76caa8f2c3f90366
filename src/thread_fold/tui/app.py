"""Textual application hosting a foldable message list.

The app is the FoldHost: it answers fold_point()/in_list_mode() and
surfaces messages through App.notify. Pressing "v" switches to a message
view where folding commands are refused; returning to the list re-enters
list mode and re-activates folding.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from textual.app import App, ComposeResult
from textual.widgets import Static

from thread_fold.app.commands import FoldCommands
from thread_fold.app.lifecycle import LifecycleController
from thread_fold.app.settings_store import FoldSettings
from thread_fold.core.rows import Row
from thread_fold.tui.keymap import build_keymap
from thread_fold.tui.message_list import MessageList

logger = logging.getLogger(__name__)


class ThreadFoldApp(App):
    TITLE = "thread-fold"

    CSS = """
    #message-view {
        height: 1fr;
        padding: 1 2;
        display: none;
    }
    #status {
        dock: bottom;
        height: 1;
        background: $panel;
    }
    """

    def __init__(self, rows: Iterable[Row], settings: FoldSettings | None = None):
        super().__init__()
        self._fold_settings = settings or FoldSettings()
        self._keymap = build_keymap(self._fold_settings)
        self._list_mode = True
        self.message_list = MessageList(rows, self._fold_settings, id="message-list")
        self.lifecycle = LifecycleController(self.message_list.engine, self.message_list.list_events)
        self.fold_commands = FoldCommands(self, self.lifecycle)

    def compose(self) -> ComposeResult:
        yield self.message_list
        yield Static("", id="message-view")
        yield Static("", id="status")

    def on_mount(self) -> None:
        self.fold_commands.dispatch("activate")
        self._after_command()

    # ─── FoldHost ─────────────────────────────────────────────────────

    def fold_point(self) -> int | None:
        return self.message_list.cursor

    def in_list_mode(self) -> bool:
        return self._list_mode

    # ─── Key dispatch ─────────────────────────────────────────────────

    async def on_key(self, event) -> None:
        """// [LAW:single-enforcer] on_key is the sole key dispatcher."""
        action_name = self._keymap.get(event.key)
        if action_name:
            event.prevent_default()
            event.stop()
            await self.run_action(action_name)

    # ─── Actions ──────────────────────────────────────────────────────

    def action_fold_command(self, name: str) -> None:
        self.fold_commands.dispatch(name)
        self._after_command()

    def action_cursor_down(self) -> None:
        self.message_list.move_cursor(1)
        self._after_command()

    def action_cursor_up(self) -> None:
        self.message_list.move_cursor(-1)
        self._after_command()

    def action_mark_read(self) -> None:
        self.message_list.mark_read()
        self._after_command()

    def action_refresh_list(self) -> None:
        self.message_list.set_rows(list(self.message_list.rows))
        self._after_command()

    def action_toggle_message_view(self) -> None:
        self._list_mode = not self._list_mode
        logger.debug("list mode: %s", self._list_mode)
        self.message_list.display = self._list_mode
        viewer = self.query_one("#message-view", Static)
        viewer.display = not self._list_mode
        if self._list_mode:
            if not self.lifecycle.active:
                self.fold_commands.dispatch("activate")
            self.message_list.enter_mode()
        else:
            position = self.message_list.cursor
            subject = self.message_list.rows.row_at(position).subject if position is not None else ""
            viewer.update(subject)
        self._after_command()

    # ─── Status ───────────────────────────────────────────────────────

    def _after_command(self) -> None:
        self.message_list.redraw()
        engine = self.message_list.engine
        mode = "list" if self._list_mode else "message"
        folding = engine.view.value if self.lifecycle.active else "off"
        self.query_one("#status", Static).update(
            f" {mode} | folding: {folding} | threads: {len(engine.regions)}"
        )
