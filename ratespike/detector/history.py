"""
Fixed-capacity history of recent event timestamps.

The buffer is a plain ring: one slot per event, overwritten in arrival order.
Slots that were never written hold the buffer origin, so before the buffer
is full the "oldest" timestamp it reports is the origin itself. Rate
estimates during warm-up are therefore measured from the origin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

Timestamp = Union[int, float]


@dataclass
class HistoryBuffer:
    """
    Ring buffer of the most recent timestamps.

    record() does not validate ordering; callers enforce monotonicity.
    """

    capacity: int = 256
    origin: Timestamp = 0
    _slots: List[Timestamp] = field(default_factory=list, init=False, repr=False)
    _write_index: int = field(default=0, init=False, repr=False)
    _count: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._slots = [self.origin] * self.capacity

    def record(self, timestamp: Timestamp) -> Tuple[Timestamp, Timestamp]:
        """
        Store a timestamp and return (oldest, previous).

        oldest is the value in the slot about to be overwritten, previous is
        the timestamp recorded just before this one. Both are the origin when
        there is no such event yet.
        """
        index = self._write_index
        oldest = self._slots[index]
        # index - 1 is -1 for the first slot, which wraps to the last one
        previous = self._slots[index - 1]

        self._slots[index] = timestamp
        self._write_index = (index + 1) % self.capacity
        if self._count < self.capacity:
            self._count += 1

        return oldest, previous

    @property
    def count(self) -> int:
        """Number of timestamps held, capped at capacity."""
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count >= self.capacity

    @property
    def latest(self) -> Timestamp:
        """Most recently recorded timestamp, or the origin when empty."""
        return self._slots[self._write_index - 1]

    def window(self) -> List[Timestamp]:
        """Timestamps currently held, oldest first."""
        if not self.is_full:
            return self._slots[: self._count]
        return self._slots[self._write_index :] + self._slots[: self._write_index]

    def __len__(self) -> int:
        return self._count
