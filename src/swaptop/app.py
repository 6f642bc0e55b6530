"""swaptop - Main Textual application."""

import logging
import time

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static

from swaptop.config import SwaptopConfig, setup_logging
from swaptop.errors import ConfigError
from swaptop.models import Unit
from swaptop.monitor import SwapSource, default_source
from swaptop.state import SwapState, ViewModel
from swaptop.themes import THEMES

logger = logging.getLogger(__name__)

BLOCKS = " ▁▂▃▄▅▆▇█"

UNIT_SELECTORS = {
    Unit.KB: "▶KB◀─MB─GB",
    Unit.MB: "KB─▶MB◀─GB",
    Unit.GB: "KB─MB─▶GB◀",
}


def render_chart(values: list[float], ceiling: float, width: int, height: int) -> str:
    """
    Draw values as right-aligned block columns scaled to ``ceiling``.

    The newest value is the rightmost column; values beyond ``width`` are
    dropped from the left. A zero ceiling draws an empty chart.
    """
    if width <= 0 or height <= 0:
        return ""
    values = values[-width:]
    pad = width - len(values)

    levels = []
    for value in values:
        ratio = min(max(value / ceiling, 0.0), 1.0) if ceiling > 0 else 0.0
        levels.append(round(ratio * height * 8))

    lines = []
    for row in range(height - 1, -1, -1):
        base = row * 8
        cells = (BLOCKS[max(0, min(8, level - base))] for level in levels)
        lines.append(" " * pad + "".join(cells))
    return "\n".join(lines)


class SwapHeader(Static):
    """Title line with the active theme and refresh interval."""

    DEFAULT_CSS = """
    SwapHeader {
        dock: top;
        height: 1;
        background: $panel;
        color: $text;
        text-style: bold;
    }
    """

    def update_view(self, model: ViewModel) -> None:
        """Show the theme and refresh interval from the view model."""
        self.update(
            f" swaptop | theme (t to change): {model.theme.value}"
            f" | refresh (◀/▶): {model.refresh_interval_ms} ms"
        )


class HistoryChart(Static):
    """Swap usage over the history window, scaled to total swap."""

    DEFAULT_CSS = """
    HistoryChart {
        height: 35%;
        border: round $panel;
        border-title-color: $text;
        border-subtitle-color: $primary;
        color: $primary;
    }
    """

    def update_view(self, model: ViewModel) -> None:
        """Redraw the chart and its totals titles."""
        self.border_title = model.totals_label
        self.border_subtitle = f"swap usage {model.usage_percent}%"
        values = [point.used for point in model.history]
        self.update(render_chart(values, model.history_ceiling, self.size.width, self.size.height))


class ProcessPanel(Static):
    """Process table, header row pinned, scrolled by the app state."""

    DEFAULT_CSS = """
    ProcessPanel {
        height: 1fr;
        border: round $panel;
        border-title-color: $secondary;
        border-title-style: bold;
        border-subtitle-color: $text;
        content-align-horizontal: center;
    }
    """

    def update_view(self, model: ViewModel) -> None:
        """Show the visible rows and the unit selector."""
        self.border_title = f"unit (k/m/g to change): {UNIT_SELECTORS[model.unit]}"
        self.border_subtitle = (
            f"(a to aggregate) (u/d or ▲/▼ to scroll) "
            f"{model.scroll_offset}/{max(0, model.content_height - model.viewport_height)}"
        )
        self.update("\n".join(model.visible_rows))


class DevicePanel(Static):
    """Swap devices, hidden where the platform has none."""

    DEFAULT_CSS = """
    DevicePanel {
        height: auto;
        max-height: 8;
        border: round $panel;
    }
    """

    def update_view(self, model: ViewModel) -> None:
        """Show device rows, or hide the panel when devices are unsupported."""
        if model.devices is None:
            self.display = False
            return
        self.display = True
        self.border_title = "swap devices"
        self.update("\n".join(model.devices))


class SwaptopApp(App):
    """Main swaptop application."""

    TITLE = "swaptop"
    SUB_TITLE = "Swap Usage Monitor"

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("u,up", "line_up", "Up", show=False, priority=True),
        Binding("d,down", "line_down", "Down", show=False, priority=True),
        Binding("pageup", "page_up", "Page up", show=False, priority=True),
        Binding("pagedown", "page_down", "Page down", show=False, priority=True),
        Binding("home", "first_row", "Top", show=False, priority=True),
        Binding("end", "last_row", "Bottom", show=False, priority=True),
        Binding("k", "unit('KB')", "KB"),
        Binding("m", "unit('MB')", "MB"),
        Binding("g", "unit('GB')", "GB"),
        Binding("a", "aggregate", "Aggregate"),
        Binding("t", "cycle_theme", "Theme"),
        Binding("left", "faster", "Faster", priority=True),
        Binding("right", "slower", "Slower", priority=True),
    ]

    def __init__(self, source: SwapSource | None = None, config: SwaptopConfig | None = None) -> None:
        """Initialize the SwaptopApp."""
        super().__init__()
        self._settings = config or SwaptopConfig()
        self._swap_source = source or default_source()
        self.swap_state = SwapState(self._swap_source, self._settings)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield SwapHeader(id="swap-header")
        yield HistoryChart(id="history-chart", markup=False)
        yield ProcessPanel(id="process-list", markup=False)
        yield DevicePanel(id="swap-devices", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        """Register themes, take the first reading and start the refresh timer."""
        for theme in THEMES.values():
            self.register_theme(theme)
        self.theme = self.swap_state.view.theme.textual_name
        self._tick()
        self.set_interval(self._settings.poll_timeout, self._tick)
        self.call_after_refresh(self._render_frame)

    def _tick(self) -> None:
        """Refresh when due, then redraw."""
        if not self.swap_state.running:
            self.exit()
            return
        try:
            self.swap_state.tick(time.monotonic())
        except Exception:
            # The dashboard must survive anything a data source throws
            logger.exception("Unexpected error during refresh")
        self._render_frame()

    def _render_frame(self) -> None:
        """Re-clamp scrolling to the panel size and redraw every widget."""
        panel = self.query_one("#process-list", ProcessPanel)
        self.swap_state.resize(panel.size.height)
        model = self.swap_state.view_model()
        self.query_one("#swap-header", SwapHeader).update_view(model)
        self.query_one("#history-chart", HistoryChart).update_view(model)
        panel.update_view(model)
        self.query_one("#swap-devices", DevicePanel).update_view(model)

    def action_line_up(self) -> None:
        """Scroll up one line."""
        self.swap_state.process_view.line_up()
        self._render_frame()

    def action_line_down(self) -> None:
        """Scroll down one line."""
        self.swap_state.process_view.line_down()
        self._render_frame()

    def action_page_up(self) -> None:
        """Scroll up one page."""
        self.swap_state.process_view.page_up()
        self._render_frame()

    def action_page_down(self) -> None:
        """Scroll down one page."""
        self.swap_state.process_view.page_down()
        self._render_frame()

    def action_first_row(self) -> None:
        """Jump to the first row."""
        self.swap_state.process_view.home()
        self._render_frame()

    def action_last_row(self) -> None:
        """Jump to the last row."""
        self.swap_state.process_view.end()
        self._render_frame()

    def action_unit(self, unit: str) -> None:
        """Switch the display unit."""
        self.swap_state.set_unit(Unit(unit))
        self._render_frame()

    def action_aggregate(self) -> None:
        """Toggle aggregation by process name."""
        self.swap_state.toggle_aggregation()
        self._render_frame()

    def action_cycle_theme(self) -> None:
        """Switch to the next color theme."""
        theme = self.swap_state.cycle_theme()
        self.theme = theme.textual_name
        self._render_frame()

    def action_faster(self) -> None:
        """Shorten the refresh interval by 100ms."""
        self.swap_state.decrease_interval()
        self._render_frame()

    def action_slower(self) -> None:
        """Lengthen the refresh interval by 100ms."""
        self.swap_state.increase_interval()
        self._render_frame()

    async def action_quit(self) -> None:
        """Handle quit action."""
        self.swap_state.quit()
        self.exit()


def main() -> None:
    """Entry point for swaptop application."""
    try:
        config = SwaptopConfig.from_env()
    except ConfigError as exc:
        raise SystemExit(f"swaptop: {exc}") from None
    setup_logging(config)
    app = SwaptopApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
