"""Tests for LineRange, Region, and RegionStore."""

import pytest

from thread_fold.core.regions import (
    FoldStyle,
    FoldView,
    LineRange,
    Region,
    RegionStore,
    ThreadState,
)


def _region(root=0, children=(1, 4), read=(1, 3)):
    return Region(
        root=LineRange(root, root + 1),
        children=LineRange(*children),
        read_prefix=LineRange(*read),
    )


def test_line_range_basics():
    r = LineRange(2, 5)
    assert len(r) == 3
    assert list(r) == [2, 3, 4]
    assert 2 in r and 4 in r and 5 not in r
    assert not r.empty
    assert LineRange(3, 3).empty


def test_line_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        LineRange(4, 3)


def test_empty_range_at_edge_is_subset():
    assert LineRange(1, 1).issubset(LineRange(1, 4))
    assert LineRange(4, 4).issubset(LineRange(1, 4))
    assert not LineRange(5, 5).issubset(LineRange(1, 4))


def test_region_rejects_read_prefix_outside_children():
    with pytest.raises(ValueError):
        _region(children=(1, 3), read=(1, 4))


def test_fold_with_unread_children_is_partially_unfolded():
    region = _region()
    region.fold()
    assert region.hidden
    assert region.state is ThreadState.PARTIALLY_UNFOLDED
    assert region.root_style is FoldStyle.ROOT_UNFOLDED
    assert region.child_style is FoldStyle.CHILD_FOLDED


def test_fold_fully_read_is_folded():
    region = _region(read=(1, 4))
    region.fold()
    assert region.state is ThreadState.FOLDED
    assert region.root_style is FoldStyle.ROOT_FOLDED


def test_unfold_clears_hidden_and_restores_styles():
    region = _region(read=(1, 4))
    region.fold()
    region.unfold()
    assert not region.hidden
    assert region.state is ThreadState.UNFOLDED
    assert region.root_style is FoldStyle.ROOT_UNFOLDED
    assert region.child_style is FoldStyle.CHILD_UNFOLDED


def test_all_unread_children_fold_marks_hidden_but_partial():
    region = _region(children=(1, 3), read=(1, 1))
    region.fold()
    assert region.hidden
    assert not region.fully_read
    assert region.state is ThreadState.PARTIALLY_UNFOLDED


def test_store_iterates_top_to_bottom():
    store = RegionStore()
    store.put(_region(root=10, children=(11, 12), read=(11, 12)))
    store.put(_region(root=0))
    assert [r.root_position for r in store] == [0, 10]
    assert len(store) == 2
    assert 10 in store


def test_store_region_containing():
    store = RegionStore()
    store.put(_region())
    assert store.region_containing(0).root_position == 0
    assert store.region_containing(3).root_position == 0
    assert store.region_containing(4) is None


def test_store_discard_and_clear():
    store = RegionStore()
    store.put(_region())
    assert store.discard(0) is not None
    assert store.discard(0) is None
    store.put(_region())
    store.clear()
    assert len(store) == 0


@pytest.mark.parametrize("raw, expected", [
    ("folded", FoldView.FOLDED),
    (" Unfolded ", FoldView.UNFOLDED),
])
def test_fold_view_parse(raw, expected):
    assert FoldView.parse(raw) is expected


def test_fold_view_parse_rejects_unknown():
    with pytest.raises(ValueError):
        FoldView.parse("collapsed")
