"""Thread scanner — finds thread boundaries in a LineIndex.

// [LAW:one-way-deps] Depends on rows and regions (LineRange) only.
// [LAW:single-enforcer] Thread boundary rules live here and nowhere else.

A thread starts at a root or orphan row that has children and runs over the
contiguous child rows that follow it. Roots without children, and roots
whose next row is not a child, are not foldable and produce no span.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from thread_fold.core.regions import LineRange
from thread_fold.core.rows import LineIndex, Row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThreadSpan:
    """Boundaries of one foldable thread. Ends are exclusive."""

    root: int
    child_start: int
    child_end: int
    read_end: int

    @property
    def children(self) -> LineRange:
        return LineRange(self.child_start, self.child_end)

    @property
    def read_prefix(self) -> LineRange:
        return LineRange(self.child_start, self.read_end)

    @property
    def root_range(self) -> LineRange:
        return LineRange(self.root, self.root + 1)


def is_root_start(row: Row) -> bool:
    return row.is_root and row.has_children


def scan_thread(index: LineIndex, root: int) -> ThreadSpan | None:
    """Scan the child block below root. Returns None when root is not foldable."""
    if not 0 <= root < len(index):
        return None
    if not is_root_start(index.row_at(root)):
        return None

    child_start = root + 1
    position = child_start
    first_unread: int | None = None
    total = len(index)
    while position < total:
        row = index.row_at(position)
        if not row.is_child:
            break
        if row.unread and first_unread is None:
            first_unread = position
        position += 1

    if position == child_start:
        # Root claims children but the next row starts another thread.
        return None

    read_end = position if first_unread is None else first_unread
    return ThreadSpan(root=root, child_start=child_start, child_end=position, read_end=read_end)


def scan_threads(index: LineIndex) -> list[ThreadSpan]:
    """Walk the whole view once, top to bottom."""
    spans: list[ThreadSpan] = []
    position = 0
    total = len(index)
    while position < total:
        span = scan_thread(index, position)
        if span is None:
            position += 1
            continue
        spans.append(span)
        position = span.child_end
    logger.debug("scanned %d rows, %d foldable threads", total, len(spans))
    return spans


def find_thread_root(index: LineIndex, position: int) -> int | None:
    """Walk backward from position to the nearest root or orphan row.

    A root row resolves to itself. Returns None when position is out of
    range, is a row outside any thread, or no root precedes it.
    """
    if not 0 <= position < len(index):
        return None
    row = index.row_at(position)
    if row.is_root:
        return position
    if not row.is_child:
        return None
    while position > 0:
        position -= 1
        row = index.row_at(position)
        if row.is_root:
            return position
        if not row.is_child:
            return None
    return None


def fingerprint(index: LineIndex, span: ThreadSpan) -> tuple:
    """Rows a span was computed from, reduced to what affects folding.

    Includes the row after the child block so a new child appended below
    the thread also invalidates it.
    """
    end = min(span.child_end + 1, len(index))
    return tuple(
        (row.role.value, row.has_children, row.unread)
        for row in (index.row_at(p) for p in range(span.root, end))
    )
