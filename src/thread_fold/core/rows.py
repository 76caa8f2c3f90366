"""Line index — read-only view over the rows of the current message list.

// [LAW:one-way-deps] Leaf module. No project imports.
// [LAW:one-source-of-truth] Rows are owned by the host; the core only reads them.

The host exposes its rows through the LineIndex protocol (structural typing,
no inheritance required). RowList is the plain list-backed implementation
used by the Textual host and by tests.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ThreadRole(Enum):
    """Thread membership of a single displayed row."""

    ROOT = "root"
    CHILD = "child"
    ORPHAN = "orphan"
    NONE = "none"


@dataclass(frozen=True)
class Row:
    """One displayed message line.

    has_children is only meaningful for root/orphan rows.
    """

    role: ThreadRole = ThreadRole.NONE
    has_children: bool = False
    unread: bool = False
    subject: str = ""

    @property
    def is_root(self) -> bool:
        """Root or orphan root: the rows that start a thread."""
        return self.role in (ThreadRole.ROOT, ThreadRole.ORPHAN)

    @property
    def is_child(self) -> bool:
        return self.role is ThreadRole.CHILD


class LineIndex(Protocol):
    """Contract the host satisfies so the core can read its rows."""

    def __len__(self) -> int:
        ...

    def row_at(self, position: int) -> Row:
        """Return the row at position. Raises IndexError when out of range."""
        ...


class RowList:
    """List-backed LineIndex. Replacing or updating rows never notifies anyone;
    the owner raises the matching list event itself."""

    def __init__(self, rows: Iterable[Row] = ()):
        self._rows: list[Row] = list(rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def row_at(self, position: int) -> Row:
        if position < 0:
            raise IndexError(position)
        return self._rows[position]

    def replace(self, rows: Iterable[Row]) -> None:
        self._rows = list(rows)

    def update(self, position: int, row: Row) -> None:
        self._rows[position] = row
