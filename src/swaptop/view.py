"""Process table rows and scroll state."""

from dataclasses import dataclass

from swaptop.models import Aggregated, DisplaySample, Unit
from swaptop.scheduler import DEFAULT_INTERVAL_MS
from swaptop.themes import ThemeType
from swaptop.units import format_value

# Header row plus one trailing footer row counted into the content height.
CONTENT_ALLOWANCE = 2
# Fixed viewport chrome allowance (border and header rows) subtracted from a page.
VIEWPORT_CHROME = 4


@dataclass(slots=True)
class ViewState:
    """User-facing UI state owned by the orchestrator."""

    scroll_offset: int = 0
    content_height: int = CONTENT_ALLOWANCE
    viewport_height: int = 0
    aggregated: bool = False
    unit: Unit = Unit.KB
    theme: ThemeType = ThemeType.DRACULA
    refresh_interval_ms: int = DEFAULT_INTERVAL_MS


def format_row(first: str, name: str, used: str) -> str:
    return f"{first:12} | {name:30} | {used:10}"


def build_rows(samples: list[DisplaySample], aggregated: bool, unit: Unit) -> list[str]:
    """
    Build the process table text, header first.

    Samples are emitted in the order given; the caller sorts them.
    """
    rows = [format_row("COUNT" if aggregated else "PID", "PROCESS", "USED")]
    for sample in samples:
        if isinstance(sample.ident, Aggregated):
            first = str(sample.ident.count)
        else:
            first = str(sample.ident.pid)
        rows.append(format_row(first, sample.name, format_value(sample.value, unit)))
    return rows


def content_height_for(samples: list[DisplaySample]) -> int:
    return len(samples) + CONTENT_ALLOWANCE


def reconcile_scroll(current_offset: int, content_height: int, viewport_height: int) -> int:
    """Clamp a scroll offset to ``[0, max(0, content_height - viewport_height)]``."""
    limit = max(0, content_height - viewport_height)
    return max(0, min(current_offset, limit))


class ProcessListView:
    """
    Formatted process rows plus scroll arithmetic.

    Operates on a ``ViewState`` it does not own; every mutation re-clamps
    the scroll offset against the current content and viewport heights.
    """

    def __init__(self, state: ViewState) -> None:
        self._state = state
        self._rows: list[str] = build_rows([], state.aggregated, state.unit)

    @property
    def rows(self) -> list[str]:
        return list(self._rows)

    @property
    def page_step(self) -> int:
        return max(1, self._state.viewport_height - VIEWPORT_CHROME)

    def set_samples(self, samples: list[DisplaySample]) -> None:
        """Replace the displayed samples and re-clamp the scroll offset."""
        self._rows = build_rows(samples, self._state.aggregated, self._state.unit)
        self._state.content_height = content_height_for(samples)
        self.reconcile()

    def resize(self, viewport_height: int) -> None:
        self._state.viewport_height = max(0, viewport_height)
        self.reconcile()

    def reconcile(self) -> int:
        state = self._state
        state.scroll_offset = reconcile_scroll(
            state.scroll_offset, state.content_height, state.viewport_height
        )
        return state.scroll_offset

    def _scroll_to(self, offset: int) -> int:
        self._state.scroll_offset = max(0, offset)
        return self.reconcile()

    def line_down(self) -> int:
        return self._scroll_to(self._state.scroll_offset + 1)

    def line_up(self) -> int:
        return self._scroll_to(self._state.scroll_offset - 1)

    def page_down(self) -> int:
        return self._scroll_to(self._state.scroll_offset + self.page_step)

    def page_up(self) -> int:
        return self._scroll_to(self._state.scroll_offset - self.page_step)

    def home(self) -> int:
        return self._scroll_to(0)

    def end(self) -> int:
        return self._scroll_to(self._state.content_height)

    def visible_rows(self) -> list[str]:
        """Header row followed by the data rows that fit below it."""
        height = max(0, self._state.viewport_height - 1)
        start = 1 + self._state.scroll_offset
        return self._rows[:1] + self._rows[start : start + height]
