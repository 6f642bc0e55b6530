"""Refresh timing for swap sampling."""

MIN_INTERVAL_MS = 1
MAX_INTERVAL_MS = 10_000
INTERVAL_STEP_MS = 100
DEFAULT_INTERVAL_MS = 1_000


def due(last_refresh: float | None, interval: float, now: float) -> bool:
    """Return True once ``interval`` seconds have passed since ``last_refresh``."""
    if last_refresh is None:
        return True
    return now - last_refresh >= interval


def clamp_interval(interval_ms: int) -> int:
    """Clamp a refresh interval to the supported millisecond range."""
    return max(MIN_INTERVAL_MS, min(MAX_INTERVAL_MS, int(interval_ms)))


class RefreshScheduler:
    """
    Single timer deciding when a new reading is due.

    Times are monotonic seconds (``time.monotonic()``); the interval is kept
    in milliseconds and never reaches zero.
    """

    def __init__(self, interval_ms: int = DEFAULT_INTERVAL_MS) -> None:
        """
        Initialize the RefreshScheduler.

        Args:
            interval_ms: Refresh interval, clamped to [1, 10000] ms.
        """
        self._interval_ms = clamp_interval(interval_ms)
        self._last_refresh: float | None = None

    @property
    def interval_ms(self) -> int:
        """Get the current refresh interval in milliseconds."""
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: int) -> None:
        """Set the refresh interval."""
        self._interval_ms = clamp_interval(value)

    @property
    def last_refresh(self) -> float | None:
        return self._last_refresh

    def is_due(self, now: float) -> bool:
        return due(self._last_refresh, self._interval_ms / 1000, now)

    def mark(self, now: float) -> None:
        """Record that a refresh was attempted at ``now``."""
        self._last_refresh = now

    def decrease(self) -> int:
        """Shorten the interval by one step and return it."""
        self.interval_ms = self._interval_ms - INTERVAL_STEP_MS
        return self._interval_ms

    def increase(self) -> int:
        """Lengthen the interval by one step and return it."""
        self.interval_ms = self._interval_ms + INTERVAL_STEP_MS
        return self._interval_ms
