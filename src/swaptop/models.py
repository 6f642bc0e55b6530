"""Data models for swaptop."""

from dataclasses import dataclass
from enum import Enum


class Unit(Enum):
    """Display unit for swap sizes."""

    KB = "KB"
    MB = "MB"
    GB = "GB"


@dataclass(slots=True, frozen=True)
class RawSample:
    """Swap usage of one process as reported by a data source."""

    pid: int
    name: str
    swap_kb: int


@dataclass(slots=True, frozen=True)
class SwapTotals:
    """System-wide swap totals in kilobytes."""

    total_kb: int
    used_kb: int

    @property
    def percent(self) -> float:
        if self.total_kb <= 0:
            return 0.0
        return self.used_kb / self.total_kb * 100.0


@dataclass(slots=True, frozen=True)
class SwapDevice:
    """One swap device or file, as listed in /proc/swaps."""

    name: str
    kind: str  # 'partition', 'file', ...
    size_kb: int
    used_kb: int
    priority: int


@dataclass(slots=True, frozen=True)
class Individual:
    """Identity of a sample that belongs to a single process."""

    pid: int


@dataclass(slots=True, frozen=True)
class Aggregated:
    """Identity of a sample that sums every process sharing a name."""

    count: int


@dataclass(slots=True, frozen=True)
class DisplaySample:
    """Swap usage converted to a display unit."""

    ident: Individual | Aggregated
    name: str
    value: float
    unit: Unit


@dataclass(slots=True, frozen=True)
class HistoryPoint:
    """Used swap (kilobytes) at a position on the chart's time axis."""

    timestamp: float
    used: float
