"""Host list notifications — the three "list changed" events and a hub for them.

// [LAW:one-way-deps] No project imports.

HostEvents is the subscription contract a host exposes. EventHub is a
plain implementation of it; hosts that already have a notification system
can satisfy the protocol directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class ListEvent(Enum):
    INDEX_UPDATED = "index-updated"
    LIST_FOUND = "list-found"
    MODE_ENTERED = "mode-entered"


Listener = Callable[[ListEvent], None]


class HostEvents(Protocol):
    def subscribe(self, event: ListEvent, listener: Listener) -> None:
        ...

    def unsubscribe(self, event: ListEvent, listener: Listener) -> None:
        ...


class EventHub:
    """Per-event listener lists. Listeners fire in subscription order."""

    def __init__(self):
        self._listeners: dict[ListEvent, list[Listener]] = {event: [] for event in ListEvent}

    def subscribe(self, event: ListEvent, listener: Listener) -> None:
        listeners = self._listeners[event]
        if listener not in listeners:
            listeners.append(listener)

    def unsubscribe(self, event: ListEvent, listener: Listener) -> None:
        listeners = self._listeners[event]
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event: ListEvent) -> int:
        return len(self._listeners[event])

    def emit(self, event: ListEvent) -> None:
        # Snapshot: a listener may unsubscribe while we iterate.
        listeners = list(self._listeners[event])
        logger.debug("emit %s to %d listeners", event.value, len(listeners))
        for listener in listeners:
            listener(event)
