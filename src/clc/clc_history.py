"""Bounded buffer of previous CLC results."""

from collections import deque
from typing import Deque, Iterable, Iterator, List

from clc.clc_value import CLCValue


DEFAULT_HISTORY_SIZE = 10


class CLCHistory:
    """
    A fixed-capacity history of results.

    Index 0 is the most recent result (`$0` in an expression). Appending to a
    full history discards the oldest entry.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE, values: Iterable[CLCValue] = ()) -> None:
        """
        Initialize the history.

        Args:
            capacity: Maximum number of results kept; must be at least 1
            values: Initial results, oldest first
        """
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")

        self.capacity = capacity
        self._values: Deque[CLCValue] = deque(values, maxlen=capacity)

    def append(self, value: CLCValue) -> None:
        """Record a new most recent result."""
        self._values.append(value)

    def get(self, index: int) -> CLCValue | None:
        """Return the result `index` steps back (0 = most recent), or None if there is none."""
        if index < 0 or index >= len(self._values):
            return None

        return self._values[-1 - index]

    def values(self) -> List[CLCValue]:
        """All results, oldest first."""
        return list(self._values)

    def clear(self) -> None:
        """Forget every result."""
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[CLCValue]:
        """Iterate most recent first, in $0, $1, ... order."""
        return reversed(self._values)

    def __repr__(self) -> str:
        return f"CLCHistory(capacity={self.capacity}, size={len(self._values)})"
