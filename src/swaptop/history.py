"""Sliding window of swap usage for the history chart."""

from collections import deque

from swaptop.models import HistoryPoint

DEFAULT_CAPACITY = 60


class HistoryWindow:
    """
    Fixed-capacity, time-ordered buffer of swap usage points.

    Each accepted point is stamped with the right edge of the time window,
    after which both window edges advance by one. The oldest point is
    evicted once the buffer holds ``capacity`` points.

    The chart's vertical axis is scaled to ``ceiling`` (total swap), not to
    the largest observed value.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self._points: deque[HistoryPoint] = deque(maxlen=capacity)
        self._left = 0.0
        self._right = float(capacity)
        self._ceiling = 0.0

    def __len__(self) -> int:
        return len(self._points)

    @property
    def capacity(self) -> int:
        return self._points.maxlen or 0

    @property
    def points(self) -> list[HistoryPoint]:
        """Points oldest first (returns a copy)."""
        return list(self._points)

    @property
    def bounds(self) -> tuple[float, float]:
        """Current ``(left, right)`` edges of the time axis."""
        return (self._left, self._right)

    @property
    def ceiling(self) -> float:
        """Upper bound of the vertical axis, in kilobytes."""
        return self._ceiling

    @ceiling.setter
    def ceiling(self, value: float) -> None:
        self._ceiling = max(0.0, float(value))

    def push(self, used: float) -> None:
        """Append a usage value at the right edge and slide the window."""
        # deque(maxlen=...) drops exactly one point from the left when full
        self._points.append(HistoryPoint(timestamp=self._right, used=float(used)))
        self._left += 1.0
        self._right += 1.0
