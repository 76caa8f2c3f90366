"""Folding engine — fold/unfold/toggle per thread and for the whole view.

// [LAW:single-enforcer] All fold state mutation goes through FoldingEngine.
// [LAW:one-way-deps] Depends on rows, scanner, regions. No host imports.

Thread references are row positions. Any row of a thread (root or child)
resolves to that thread; positions that resolve to nothing, and threads
without children, make every operation a no-op returning None.

The engine never raises list events. Changing visibility is invisible to
the host's notification hooks, so applying a fold cannot re-trigger a scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from thread_fold.core.regions import (
    FoldStyle,
    FoldView,
    LineRange,
    Region,
    RegionStore,
    ThreadState,
)
from thread_fold.core.rows import LineIndex
from thread_fold.core.scanner import (
    ThreadSpan,
    find_thread_root,
    fingerprint,
    scan_thread,
    scan_threads,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisualDirective:
    """One styled, possibly hidden, range for the renderer."""

    range: LineRange
    hidden: bool = False
    style: FoldStyle | None = None


class FoldingEngine:
    """Owns the RegionStore for one LineIndex plus the global fold view."""

    def __init__(self, index: LineIndex, default_view: FoldView = FoldView.UNFOLDED):
        self._index = index
        self._regions = RegionStore()
        self.default_view = default_view
        self.view = default_view

    @property
    def index(self) -> LineIndex:
        return self._index

    @property
    def regions(self) -> RegionStore:
        return self._regions

    # ─── Region lookup ────────────────────────────────────────────────

    def _build(self, span: ThreadSpan) -> Region:
        region = Region(
            root=span.root_range,
            children=span.children,
            read_prefix=span.read_prefix,
            fingerprint=fingerprint(self._index, span),
        )
        self._regions.put(region)
        return region

    def _rebuild(self, root: int) -> Region | None:
        self._regions.discard(root)
        span = scan_thread(self._index, root)
        if span is None:
            return None
        return self._build(span)

    def region_for(self, ref: int) -> Region | None:
        """Resolve ref to its thread's Region, building it lazily.

        A cached region whose fingerprint no longer matches the view is a
        cache miss: it is rebuilt, keeping its fold flag.
        """
        root = find_thread_root(self._index, ref)
        if root is None:
            return None
        region = self._regions.get(root)
        if region is None:
            return self._rebuild(root)
        return self._refresh(region)

    def _refresh(self, region: Region) -> Region | None:
        root = region.root_position
        span = scan_thread(self._index, root)
        if span is None:
            logger.debug("dropping region at %d: root is no longer foldable", root)
            self._regions.discard(root)
            return None
        if fingerprint(self._index, span) == region.fingerprint:
            return region

        logger.debug("stale region at %d, rebuilding", root)
        was_hidden = region.hidden
        region = self._build(span)
        if was_hidden:
            region.fold()
        return region

    # ─── Per-thread operations ────────────────────────────────────────

    def fold_thread(self, ref: int) -> ThreadState | None:
        """Hide the read-children prefix. Unread children stay visible."""
        region = self.region_for(ref)
        if region is None:
            return None
        region.fold()
        return region.state

    def unfold_thread(self, ref: int) -> ThreadState | None:
        """Show every child. Always recomputes the region first, since
        children may have been read since it was built."""
        root = find_thread_root(self._index, ref)
        if root is None:
            return None
        region = self._rebuild(root)
        if region is None:
            return None
        region.unfold()
        return region.state

    def toggle_thread(self, ref: int) -> ThreadState | None:
        if self.is_folded(ref):
            return self.unfold_thread(ref)
        return self.fold_thread(ref)

    def is_folded(self, ref: int) -> bool:
        root = find_thread_root(self._index, ref)
        if root is None:
            return False
        region = self._regions.get(root)
        if region is None:
            return False
        region = self.region_for(root)
        return region is not None and region.hidden

    def thread_state(self, ref: int) -> ThreadState | None:
        region = self.region_for(ref)
        return region.state if region is not None else None

    # ─── Whole-view operations ────────────────────────────────────────

    def rescan(self) -> list[Region]:
        """Discard every region and rebuild from a fresh scan (all unfolded)."""
        self._regions.clear()
        return [self._build(span) for span in scan_threads(self._index)]

    def fold_all(self) -> None:
        regions = self.rescan()
        for region in regions:
            region.fold()
        self.view = FoldView.FOLDED
        logger.debug("folded %d threads", len(regions))

    def unfold_all(self) -> None:
        # rescan() discards every region, so read/unread is recomputed for all.
        regions = self.rescan()
        for region in regions:
            region.unfold()
        self.view = FoldView.UNFOLDED
        logger.debug("unfolded %d threads", len(regions))

    def toggle_all(self) -> None:
        if self.view is FoldView.FOLDED:
            self.unfold_all()
        else:
            self.fold_all()

    def apply_view(self, view: FoldView) -> None:
        """Re-apply a global fold view after the host list was regenerated."""
        if view is FoldView.FOLDED:
            self.fold_all()
        else:
            self.unfold_all()

    def reset(self) -> None:
        """Drop every region; the host view returns to unmodified visibility."""
        self._regions.clear()

    # ─── Visibility directives ────────────────────────────────────────

    def _current_regions(self) -> list[Region]:
        """Stored regions, each checked against the view first.

        The host may change rows without raising a list event, so every
        read of visibility revalidates fingerprints the way lookups do.
        """
        current = []
        for region in list(self._regions):
            region = self._refresh(region)
            if region is not None:
                current.append(region)
        return current

    def directives(self) -> list[VisualDirective]:
        out: list[VisualDirective] = []
        for region in self._current_regions():
            out.append(VisualDirective(region.root, style=region.root_style))
            out.append(VisualDirective(region.children, style=region.child_style))
            out.append(VisualDirective(region.read_prefix, hidden=region.hidden))
        return out

    def hidden_positions(self) -> set[int]:
        hidden: set[int] = set()
        for region in self._current_regions():
            if region.hidden:
                hidden.update(region.read_prefix)
        return hidden

    def visible_positions(self) -> list[int]:
        hidden = self.hidden_positions()
        return [p for p in range(len(self._index)) if p not in hidden]

    def style_at(self, position: int) -> FoldStyle | None:
        root = find_thread_root(self._index, position)
        region = self._regions.get(root) if root is not None else None
        if region is not None:
            region = self._refresh(region)
        if region is None or position not in region.root and position not in region.children:
            return None
        if position in region.root:
            return region.root_style
        return region.child_style

    def hidden_count(self, ref: int) -> int:
        """Number of rows currently hidden in ref's thread."""
        root = find_thread_root(self._index, ref)
        region = self._regions.get(root) if root is not None else None
        if region is not None:
            region = self._refresh(region)
        if region is None or not region.hidden:
            return 0
        return len(region.read_prefix)
