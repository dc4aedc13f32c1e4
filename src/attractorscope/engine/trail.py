"""
Bounded trail history of trajectory points.

A fixed-size ring buffer of positions with one colour per ordered slot. Once
full, each append evicts the oldest point, so the contents are always the most
recent ``capacity`` points in chronological order. Colours belong to slots,
not to points: slot 0 (the oldest) keeps its colour while the positions
behind it shift. Renderers read flat float32 arrays of length
``3 * capacity`` in which only the first ``3 * live_count`` entries are
meaningful.
"""

from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

import numpy as np

DEFAULT_CAPACITY = 10000


def check_capacity(capacity) -> int:
    """Return ``capacity`` as an int; ValueError unless it is a positive integer."""
    if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)):
        raise ValueError(f"Trail capacity must be an integer, got {capacity!r}")
    if capacity <= 0:
        raise ValueError(f"Trail capacity must be positive, got {capacity}")
    return int(capacity)


class TrailPoint(NamedTuple):
    position: Tuple[float, float, float]
    color: Tuple[float, float, float]


class TrailBuffer:
    """
    Fixed-capacity FIFO store of trail points.

    Positions live in a ring: ``_head`` indexes the oldest point and advances on
    eviction, so appends are O(1). Colours are stored by ordered slot and never
    rotate. Ordered views are materialized lazily and cached until the next
    mutation.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self.capacity = check_capacity(capacity)
        self._positions = np.zeros((self.capacity, 3), dtype=np.float64)
        self._colors = np.zeros((self.capacity, 3), dtype=np.float32)
        self._head = 0
        self._count = 0

        # Flat render views, rebuilt when _dirty
        self._points_flat = np.zeros(self.capacity * 3, dtype=np.float32)
        self._colors_flat = np.zeros(self.capacity * 3, dtype=np.float32)
        self._dirty = False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @property
    def next_slot(self) -> int:
        """Ordered slot the next appended point will occupy."""
        return min(self._count, self.capacity - 1)

    def append(self, position: Sequence[float], color: Sequence[float]) -> None:
        """Add a point as the newest entry, evicting the oldest when full.

        ``color`` is written to the slot the point lands in (``next_slot``).
        """
        slot = self.next_slot
        if self._count < self.capacity:
            idx = (self._head + self._count) % self.capacity
            self._count += 1
        else:
            idx = self._head
            self._head = (self._head + 1) % self.capacity
        self._positions[idx] = position
        self._colors[slot] = color
        self._dirty = True

    def reset(self) -> None:
        """Drop every point and zero the backing storage."""
        self._positions.fill(0.0)
        self._colors.fill(0.0)
        self._points_flat.fill(0.0)
        self._colors_flat.fill(0.0)
        self._head = 0
        self._count = 0
        self._dirty = False

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def live_count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self.capacity

    def __len__(self) -> int:
        return self._count

    def _ordered(self, arr: np.ndarray) -> np.ndarray:
        """Rows of ``arr`` oldest-first, trimmed to the live count."""
        if self._head == 0:
            return arr[: self._count]
        return np.concatenate((arr[self._head:], arr[: self._head]))[: self._count]

    def points(self) -> np.ndarray:
        """(live_count, 3) float64 positions, oldest first."""
        return self._ordered(self._positions).copy()

    def colors(self) -> np.ndarray:
        """(live_count, 3) float32 colours, oldest first."""
        return self._colors[: self._count].copy()

    def _refresh(self) -> None:
        if not self._dirty:
            return
        n = self._count * 3
        self._points_flat[:n] = self._ordered(self._positions).ravel()
        self._colors_flat[:n] = self._colors[: self._count].ravel()
        self._dirty = False

    def points_view(self) -> np.ndarray:
        """Flat float32 positions, length ``3 * capacity``; read-only."""
        self._refresh()
        view = self._points_flat.view()
        view.flags.writeable = False
        return view

    def colors_view(self) -> np.ndarray:
        """Flat float32 colours, length ``3 * capacity``; read-only."""
        self._refresh()
        view = self._colors_flat.view()
        view.flags.writeable = False
        return view

    def latest(self) -> Optional[TrailPoint]:
        """The most recently appended point, or None when empty."""
        if self._count == 0:
            return None
        return self._point_at(self._count - 1)

    def _point_at(self, slot: int) -> TrailPoint:
        px, py, pz = self._positions[(self._head + slot) % self.capacity]
        r, g, b = self._colors[slot]
        return TrailPoint((float(px), float(py), float(pz)), (float(r), float(g), float(b)))

    def __getitem__(self, slot: int) -> TrailPoint:
        """Point at ordered ``slot`` (0 is the oldest; negatives count back)."""
        if slot < 0:
            slot += self._count
        if not 0 <= slot < self._count:
            raise IndexError(f"Trail slot {slot} out of range (live={self._count})")
        return self._point_at(slot)

    def __iter__(self) -> Iterator[TrailPoint]:
        for slot in range(self._count):
            yield self._point_at(slot)
