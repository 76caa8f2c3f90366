"""Region model — per-thread foldable ranges, keyed by root position.

// [LAW:one-source-of-truth] RegionStore is the only holder of fold state.
// [LAW:one-way-deps] Depends on nothing in the project.

Regions are derived data. They are rebuilt on every scan and must never be
trusted across a regeneration of the host list; the fingerprint records the
rows a region was computed from so a stale entry can be detected on lookup.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class FoldView(Enum):
    """Global fold state, set by whole-view operations only."""

    FOLDED = "folded"
    UNFOLDED = "unfolded"

    @classmethod
    def parse(cls, raw: object) -> FoldView:
        """Parse a configured value. Raises ValueError on anything unknown."""
        return cls(str(raw).strip().lower())


class ThreadState(Enum):
    UNFOLDED = "unfolded"
    PARTIALLY_UNFOLDED = "partially-unfolded"
    FOLDED = "folded"


class FoldStyle(Enum):
    """Named visual styles handed to the renderer. Values double as config slot names."""

    ROOT_FOLDED = "root-folded"
    ROOT_UNFOLDED = "root-unfolded"
    CHILD_FOLDED = "child-folded"
    CHILD_UNFOLDED = "child-unfolded"


@dataclass(frozen=True)
class LineRange:
    """Half-open range of row positions [start, end)."""

    start: int
    end: int

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, position: object) -> bool:
        return isinstance(position, int) and self.start <= position < self.end

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    @property
    def empty(self) -> bool:
        return self.end == self.start

    def issubset(self, other: LineRange) -> bool:
        # The empty range is a subset of anything it sits inside or at the edge of.
        return other.start <= self.start and self.end <= other.end


@dataclass
class Region:
    """Fold state of one thread.

    read_prefix ⊆ children always holds; the constructor enforces it.
    """

    root: LineRange
    children: LineRange
    read_prefix: LineRange
    fingerprint: tuple = ()
    hidden: bool = False
    state: ThreadState = ThreadState.UNFOLDED

    def __post_init__(self):
        if not self.read_prefix.issubset(self.children):
            raise ValueError(
                f"read prefix {self.read_prefix} outside children {self.children}"
            )

    @property
    def root_position(self) -> int:
        return self.root.start

    @property
    def fully_read(self) -> bool:
        """True when no child is unread, i.e. folding hides every child."""
        return self.read_prefix == self.children

    @property
    def root_style(self) -> FoldStyle:
        if self.state is ThreadState.FOLDED:
            return FoldStyle.ROOT_FOLDED
        return FoldStyle.ROOT_UNFOLDED

    @property
    def child_style(self) -> FoldStyle:
        if self.state is ThreadState.UNFOLDED:
            return FoldStyle.CHILD_UNFOLDED
        return FoldStyle.CHILD_FOLDED

    def fold(self) -> None:
        self.hidden = True
        self.state = ThreadState.FOLDED if self.fully_read else ThreadState.PARTIALLY_UNFOLDED

    def unfold(self) -> None:
        self.hidden = False
        self.state = ThreadState.UNFOLDED


@dataclass
class RegionStore:
    """Regions indexed by root position. Iteration is top-to-bottom."""

    _regions: dict[int, Region] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        for position in sorted(self._regions):
            yield self._regions[position]

    def __contains__(self, root_position: object) -> bool:
        return root_position in self._regions

    def get(self, root_position: int) -> Region | None:
        return self._regions.get(root_position)

    def put(self, region: Region) -> None:
        self._regions[region.root_position] = region

    def discard(self, root_position: int) -> Region | None:
        return self._regions.pop(root_position, None)

    def clear(self) -> None:
        self._regions.clear()

    def region_containing(self, position: int) -> Region | None:
        """Region whose root or child range covers position."""
        for region in self._regions.values():
            if position in region.root or position in region.children:
                return region
        return None
