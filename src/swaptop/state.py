"""Application state for swaptop: refresh pipeline and view model."""

import logging
from dataclasses import dataclass

from swaptop.aggregate import aggregate, sort_samples
from swaptop.config import SwaptopConfig
from swaptop.errors import AcquisitionError
from swaptop.history import HistoryWindow
from swaptop.models import DisplaySample, HistoryPoint, RawSample, SwapDevice, SwapTotals, Unit
from swaptop.monitor import SwapSource
from swaptop.scheduler import RefreshScheduler
from swaptop.themes import ThemeType
from swaptop.units import convert, format_value, to_display
from swaptop.view import ProcessListView, ViewState

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ViewModel:
    """Everything the UI needs to draw one frame. Read-only."""

    rows: tuple[str, ...]
    visible_rows: tuple[str, ...]
    scroll_offset: int
    content_height: int
    viewport_height: int
    history: tuple[HistoryPoint, ...]
    history_bounds: tuple[float, float]
    history_ceiling: float
    unit: Unit
    aggregated: bool
    theme: ThemeType
    refresh_interval_ms: int
    usage_percent: int
    totals_label: str
    devices: tuple[str, ...] | None


def build_samples(raw: list[RawSample], unit: Unit, aggregated: bool) -> list[DisplaySample]:
    """Convert raw samples to ``unit``, sorted by usage, optionally aggregated."""
    samples = sort_samples([to_display(sample, unit) for sample in raw])
    if aggregated:
        samples = aggregate(samples)
    return samples


def totals_label(totals: SwapTotals | None, unit: Unit) -> str:
    if totals is None:
        return "waiting for swap totals..."
    total = convert(totals.total_kb, unit)
    used = convert(totals.used_kb, unit)
    if unit is Unit.MB:
        return f"total available: {total:.0f} | used: {used:.2f}"
    return f"total available: {format_value(total, unit)} | used: {format_value(used, unit)}"


def format_device_rows(devices: list[SwapDevice], unit: Unit) -> list[str]:
    rows = [f"{'NAME':30} | {'TYPE':10} | {'SIZE':>10} | {'USED':>10} | {'PRIO':>5}"]
    for device in devices:
        size = format_value(convert(device.size_kb, unit), unit)
        used = format_value(convert(device.used_kb, unit), unit)
        rows.append(f"{device.name:30} | {device.kind:10} | {size:>10} | {used:>10} | {device.priority:>5}")
    return rows


class SwapState:
    """
    Owns the refresh pipeline and all UI state.

    A single caller drives it: user actions and ``tick()`` are invoked from
    the same loop, so no locking is needed. A refresh collects everything
    from the source before touching state; a failed refresh leaves the
    previous reading on display.
    """

    def __init__(self, source: SwapSource, config: SwaptopConfig | None = None) -> None:
        """
        Initialize the SwapState.

        Args:
            source: Where swap readings come from.
            config: Initial settings. Defaults to ``SwaptopConfig()``.
        """
        config = config or SwaptopConfig()
        self._source = source
        self.scheduler = RefreshScheduler(config.refresh_interval_ms)
        self.view = ViewState(
            aggregated=config.aggregated,
            unit=config.unit,
            theme=config.theme,
            refresh_interval_ms=self.scheduler.interval_ms,
        )
        self.history = HistoryWindow(config.history_capacity)
        self.process_view = ProcessListView(self.view)
        self._raw: list[RawSample] = []
        self._samples: list[DisplaySample] = []
        self._totals: SwapTotals | None = None
        self._devices: list[SwapDevice] | None = None
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def samples(self) -> list[DisplaySample]:
        """Current process list as displayed (returns a copy)."""
        return list(self._samples)

    @property
    def totals(self) -> SwapTotals | None:
        return self._totals

    @property
    def devices(self) -> list[SwapDevice] | None:
        return None if self._devices is None else list(self._devices)

    def tick(self, now: float) -> bool:
        """Refresh if running and the interval has elapsed. Returns True on a new reading."""
        if not self._running or not self.scheduler.is_due(now):
            return False
        return self.refresh(now)

    def refresh(self, now: float) -> bool:
        """Pull a new reading from the source and apply it."""
        try:
            raw = self._source.fetch_process_samples()
            samples = build_samples(raw, self.view.unit, self.view.aggregated)
            totals = self._source.fetch_system_totals()
        except AcquisitionError as exc:
            logger.warning("Swap refresh failed, keeping previous reading: %s", exc)
            self.scheduler.mark(now)
            return False

        devices = self._fetch_devices()

        self._raw = raw
        self._set_samples(samples)
        self._totals = totals
        self._devices = devices
        self.history.ceiling = totals.total_kb
        self.history.push(totals.used_kb)
        self.scheduler.mark(now)
        logger.debug("Refreshed: %d processes, %d kB used", len(raw), totals.used_kb)
        return True

    def _fetch_devices(self) -> list[SwapDevice] | None:
        try:
            return self._source.fetch_swap_devices()
        except AcquisitionError as exc:
            logger.warning("Swap device listing failed: %s", exc)
            return self._devices

    def _set_samples(self, samples: list[DisplaySample]) -> None:
        self._samples = samples
        self.process_view.set_samples(samples)

    def _rebuild(self) -> None:
        self._set_samples(build_samples(self._raw, self.view.unit, self.view.aggregated))

    # User actions

    def quit(self) -> None:
        self._running = False

    def set_unit(self, unit: Unit) -> None:
        if unit is self.view.unit:
            return
        self.view.unit = unit
        self._rebuild()
        logger.debug("Unit set to %s", unit.value)

    def toggle_aggregation(self) -> bool:
        self.view.aggregated = not self.view.aggregated
        self._rebuild()
        logger.debug("Aggregation %s", "on" if self.view.aggregated else "off")
        return self.view.aggregated

    def cycle_theme(self) -> ThemeType:
        self.view.theme = self.view.theme.next()
        return self.view.theme

    def decrease_interval(self) -> int:
        self.view.refresh_interval_ms = self.scheduler.decrease()
        return self.view.refresh_interval_ms

    def increase_interval(self) -> int:
        self.view.refresh_interval_ms = self.scheduler.increase()
        return self.view.refresh_interval_ms

    def resize(self, viewport_height: int) -> None:
        self.process_view.resize(viewport_height)

    def view_model(self) -> ViewModel:
        """Snapshot the state for rendering, re-clamping the scroll offset first."""
        view = self.view
        self.process_view.reconcile()
        unit = view.unit
        history = tuple(
            HistoryPoint(timestamp=point.timestamp, used=convert(int(point.used), unit))
            for point in self.history.points
        )
        devices = None
        if self._devices is not None:
            devices = tuple(format_device_rows(self._devices, unit))
        percent = round(self._totals.percent) if self._totals is not None else 0

        return ViewModel(
            rows=tuple(self.process_view.rows),
            visible_rows=tuple(self.process_view.visible_rows()),
            scroll_offset=view.scroll_offset,
            content_height=view.content_height,
            viewport_height=view.viewport_height,
            history=history,
            history_bounds=self.history.bounds,
            history_ceiling=convert(int(self.history.ceiling), unit),
            unit=unit,
            aggregated=view.aggregated,
            theme=view.theme,
            refresh_interval_ms=view.refresh_interval_ms,
            usage_percent=percent,
            totals_label=totals_label(self._totals, unit),
            devices=devices,
        )
