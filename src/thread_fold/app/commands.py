"""Command surface exposed to the host's renderer and keymap.

// [LAW:one-source-of-truth] COMMANDS lists every command a host may bind.
// [LAW:single-enforcer] dispatch() is the single place WrongContextError is handled.

Commands resolve "at point" through the host's cursor. Folding commands
are inert while folding is deactivated.
"""

from __future__ import annotations

import logging
from typing import Protocol

from thread_fold.app.lifecycle import LifecycleController
from thread_fold.core.errors import WrongContextError
from thread_fold.core.regions import ThreadState

logger = logging.getLogger(__name__)

COMMANDS: tuple[str, ...] = (
    "fold_at_point",
    "unfold_at_point",
    "toggle_at_point",
    "fold_all",
    "unfold_all",
    "toggle_all",
    "activate",
    "deactivate",
)

WRONG_CONTEXT_MESSAGE = "Thread folding is only available in the message list"


class FoldHost(Protocol):
    """What commands need from the host besides rows and events."""

    def fold_point(self) -> int | None:
        ...

    def in_list_mode(self) -> bool:
        ...

    def notify(self, message: str, *, severity: str = "information") -> None:
        ...


class FoldCommands:
    def __init__(self, host: FoldHost, lifecycle: LifecycleController):
        self._host = host
        self._lifecycle = lifecycle

    @property
    def lifecycle(self) -> LifecycleController:
        return self._lifecycle

    def dispatch(self, name: str) -> bool:
        """Run a command by name. Returns False when it was refused."""
        if name not in COMMANDS:
            raise KeyError(f"unknown folding command: {name}")
        try:
            getattr(self, name)()
        except WrongContextError as exc:
            logger.warning("%s refused: %s", name, exc)
            self._host.notify(str(exc), severity="warning")
            self._lifecycle.deactivate()
            return False
        return True

    def _require_list_mode(self) -> None:
        if not self._host.in_list_mode():
            raise WrongContextError(WRONG_CONTEXT_MESSAGE)

    def _point(self) -> int | None:
        self._require_list_mode()
        if not self._lifecycle.active:
            return None
        return self._host.fold_point()

    # ─── At point ─────────────────────────────────────────────────────

    def fold_at_point(self) -> ThreadState | None:
        position = self._point()
        if position is None:
            return None
        return self._lifecycle.engine.fold_thread(position)

    def unfold_at_point(self) -> ThreadState | None:
        position = self._point()
        if position is None:
            return None
        return self._lifecycle.engine.unfold_thread(position)

    def toggle_at_point(self) -> ThreadState | None:
        position = self._point()
        if position is None:
            return None
        return self._lifecycle.engine.toggle_thread(position)

    # ─── Whole view ───────────────────────────────────────────────────

    def fold_all(self) -> None:
        self._require_list_mode()
        if self._lifecycle.active:
            self._lifecycle.engine.fold_all()

    def unfold_all(self) -> None:
        self._require_list_mode()
        if self._lifecycle.active:
            self._lifecycle.engine.unfold_all()

    def toggle_all(self) -> None:
        self._require_list_mode()
        if self._lifecycle.active:
            self._lifecycle.engine.toggle_all()

    # ─── Lifecycle ────────────────────────────────────────────────────

    def activate(self) -> None:
        self._require_list_mode()
        self._lifecycle.activate()

    def deactivate(self) -> None:
        self._lifecycle.deactivate()
