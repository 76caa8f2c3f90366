"""Tests for LifecycleController and EventHub."""

import pytest

from thread_fold.app.events import EventHub, ListEvent
from thread_fold.app.lifecycle import LifecycleController
from thread_fold.core.engine import FoldingEngine
from thread_fold.core.regions import FoldView


@pytest.fixture
def wired(view):
    def _make(pattern, default_view=FoldView.UNFOLDED):
        index = view(pattern)
        engine = FoldingEngine(index, default_view)
        hub = EventHub()
        return index, engine, hub, LifecycleController(engine, hub)
    return _make


def test_hub_delivers_in_subscription_order():
    hub = EventHub()
    seen = []
    hub.subscribe(ListEvent.LIST_FOUND, lambda e: seen.append(("a", e)))
    hub.subscribe(ListEvent.LIST_FOUND, lambda e: seen.append(("b", e)))
    hub.emit(ListEvent.LIST_FOUND)
    hub.emit(ListEvent.INDEX_UPDATED)
    assert seen == [("a", ListEvent.LIST_FOUND), ("b", ListEvent.LIST_FOUND)]


def test_hub_subscribe_is_idempotent_and_unsubscribe_tolerates_unknown():
    hub = EventHub()
    listener = lambda e: None  # noqa: E731
    hub.subscribe(ListEvent.MODE_ENTERED, listener)
    hub.subscribe(ListEvent.MODE_ENTERED, listener)
    assert hub.listener_count(ListEvent.MODE_ENTERED) == 1
    hub.unsubscribe(ListEvent.MODE_ENTERED, listener)
    hub.unsubscribe(ListEvent.MODE_ENTERED, listener)
    assert hub.listener_count(ListEvent.MODE_ENTERED) == 0


def test_hub_listener_may_unsubscribe_during_emit():
    hub = EventHub()
    calls = []

    def once(event):
        calls.append(event)
        hub.unsubscribe(event, once)

    hub.subscribe(ListEvent.LIST_FOUND, once)
    hub.emit(ListEvent.LIST_FOUND)
    hub.emit(ListEvent.LIST_FOUND)
    assert calls == [ListEvent.LIST_FOUND]


def test_activate_subscribes_and_applies_default_view(wired):
    _, engine, hub, lifecycle = wired("Rcc Rcu", FoldView.FOLDED)
    lifecycle.activate()
    assert lifecycle.active
    for event in ListEvent:
        assert hub.listener_count(event) == 1
    assert engine.hidden_positions() == {1, 2, 4}


def test_activate_with_unfolded_default_builds_regions(wired):
    _, engine, _, lifecycle = wired("Rcc r")
    lifecycle.activate()
    assert len(engine.regions) == 1
    assert engine.hidden_positions() == set()


def test_activate_twice_subscribes_once(wired):
    _, _, hub, lifecycle = wired("Rc")
    lifecycle.activate()
    lifecycle.activate()
    assert hub.listener_count(ListEvent.LIST_FOUND) == 1


def test_deactivate_unsubscribes_and_restores_visibility(wired):
    _, engine, hub, lifecycle = wired("Rcc", FoldView.FOLDED)
    lifecycle.activate()
    lifecycle.deactivate()
    assert not lifecycle.active
    for event in ListEvent:
        assert hub.listener_count(event) == 0
    assert len(engine.regions) == 0
    assert engine.hidden_positions() == set()
    # Further events are ignored.
    hub.emit(ListEvent.LIST_FOUND)
    assert len(engine.regions) == 0


@pytest.mark.parametrize("event", list(ListEvent))
def test_every_list_event_rescans_and_reapplies(wired, rows, event):
    index, engine, hub, lifecycle = wired("Rcc", FoldView.FOLDED)
    lifecycle.activate()
    index.replace(rows("r Rcc Rc"))
    hub.emit(event)
    assert sorted(r.root_position for r in engine.regions) == [1, 4]
    assert engine.hidden_positions() == {2, 3, 5}


def test_reapply_uses_last_global_view(wired, rows):
    index, engine, hub, lifecycle = wired("Rcc")
    lifecycle.activate()
    engine.fold_all()
    index.replace(rows("Rc Rc"))
    hub.emit(ListEvent.LIST_FOUND)
    assert engine.hidden_positions() == {1, 3}
    engine.unfold_all()
    hub.emit(ListEvent.LIST_FOUND)
    assert engine.hidden_positions() == set()


def test_index_update_makes_previously_unread_child_foldable(wired, rows):
    index, engine, hub, lifecycle = wired("Rccu")
    lifecycle.activate()
    engine.fold_thread(0)
    assert engine.hidden_positions() == {1, 2}

    index.update(3, rows("c")[0])
    hub.emit(ListEvent.INDEX_UPDATED)
    engine.fold_thread(0)
    assert engine.hidden_positions() == {1, 2, 3}


def test_notification_during_apply_is_ignored(view):
    index = view("Rcc")
    engine = FoldingEngine(index, FoldView.FOLDED)
    hub = EventHub()
    lifecycle = LifecycleController(engine, hub)
    applied = []
    original = engine.apply_view

    def noisy_apply(view_state):
        applied.append(view_state)
        # A host that raises a list event from inside a visibility update.
        hub.emit(ListEvent.INDEX_UPDATED)
        original(view_state)

    engine.apply_view = noisy_apply
    lifecycle.activate()
    assert applied == [FoldView.FOLDED]
    hub.emit(ListEvent.LIST_FOUND)
    assert applied == [FoldView.FOLDED, FoldView.FOLDED]


def test_apply_from_lifecycle_takes_explicit_view(wired):
    _, engine, _, lifecycle = wired("Rcc")
    lifecycle.apply_from_lifecycle(FoldView.FOLDED)
    assert engine.view is FoldView.FOLDED
    assert engine.hidden_positions() == {1, 2}
