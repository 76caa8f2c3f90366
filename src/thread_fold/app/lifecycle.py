"""Lifecycle controller — keeps regions in step with host list regeneration.

// [LAW:single-enforcer] Only this module subscribes the engine to host events.
// [LAW:one-way-deps] Depends on core.engine and app.events.

Every list event discards all regions, rescans, and re-applies the current
global fold view. activate() installs the listeners and performs the
initial apply; deactivate() removes them and restores plain visibility.
"""

from __future__ import annotations

import logging

from thread_fold.app.events import HostEvents, ListEvent
from thread_fold.core.engine import FoldingEngine
from thread_fold.core.regions import FoldView

logger = logging.getLogger(__name__)


class LifecycleController:
    def __init__(self, engine: FoldingEngine, events: HostEvents):
        self._engine = engine
        self._events = events
        self._active = False
        self._applying = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def engine(self) -> FoldingEngine:
        return self._engine

    def activate(self) -> None:
        if self._active:
            return
        for event in ListEvent:
            self._events.subscribe(event, self.on_list_changed)
        self._active = True
        logger.debug("folding activated (view=%s)", self._engine.view.value)
        self.apply_from_lifecycle(self._engine.view)

    def deactivate(self) -> None:
        if not self._active:
            return
        for event in ListEvent:
            self._events.unsubscribe(event, self.on_list_changed)
        self._active = False
        self._engine.reset()
        logger.debug("folding deactivated")

    def on_list_changed(self, event: ListEvent) -> None:
        if self._applying:
            logger.debug("ignoring %s raised during apply", event.value)
            return
        logger.debug("list changed: %s", event.value)
        self.apply_from_lifecycle(self._engine.view)

    def apply_from_lifecycle(self, view: FoldView) -> None:
        """Discard regions, rescan, and apply view to every thread."""
        self._applying = True
        try:
            self._engine.reset()
            self._engine.apply_view(view)
        finally:
            self._applying = False
