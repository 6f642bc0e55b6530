"""Tests for the SwapState refresh pipeline and view model."""

import logging

from swaptop.config import SwaptopConfig
from swaptop.models import Aggregated, Individual, RawSample, SwapDevice, SwapTotals, Unit
from swaptop.state import SwapState, build_samples, totals_label
from swaptop.themes import ThemeType


def test_build_samples_sorted(scenario_samples):
    result = build_samples(scenario_samples, Unit.KB, aggregated=False)
    assert [(s.ident, s.value) for s in result] == [
        (Individual(pid=1), 100.0),
        (Individual(pid=2), 50.0),
        (Individual(pid=3), 30.0),
    ]


def test_build_samples_aggregated(scenario_samples):
    result = build_samples(scenario_samples, Unit.KB, aggregated=True)
    assert [(s.ident, s.name, s.value) for s in result] == [
        (Aggregated(count=2), "a", 150.0),
        (Aggregated(count=1), "b", 30.0),
    ]


class TestRefresh:
    """Tests for SwapState.refresh and tick."""

    def test_refresh_applies_reading(self, source, scenario_samples):
        source.samples = scenario_samples
        state = SwapState(source)

        assert state.refresh(0.0)

        assert len(state.samples) == 3
        assert state.totals == source.totals
        assert [p.used for p in state.history.points] == [float(source.totals.used_kb)]
        assert state.history.ceiling == float(source.totals.total_kb)
        assert state.scheduler.last_refresh == 0.0
        assert state.view.content_height == 5

    def test_tick_respects_interval(self, source):
        state = SwapState(source, SwaptopConfig(refresh_interval_ms=1000))

        assert state.tick(10.0)
        assert not state.tick(10.5)
        assert state.tick(11.0)
        assert source.calls == 2
        assert len(state.history) == 2

    def test_failed_tick_keeps_previous_reading(self, source, scenario_samples, caplog):
        """A failure after a good tick leaves list and history untouched."""
        source.samples = scenario_samples
        state = SwapState(source)
        state.tick(0.0)
        samples_before = state.samples
        history_before = state.history.points
        bounds_before = state.history.bounds
        model_before = state.view_model()

        source.samples = [RawSample(pid=9, name="z", swap_kb=1)]
        source.fail_processes = True
        with caplog.at_level(logging.WARNING, logger="swaptop.state"):
            assert not state.tick(1.0)

        assert state.samples == samples_before
        assert state.history.points == history_before
        assert state.history.bounds == bounds_before
        assert state.view_model().rows == model_before.rows
        assert "keeping previous reading" in caplog.text

    def test_totals_failure_keeps_process_list(self, source, scenario_samples):
        source.samples = scenario_samples
        state = SwapState(source)
        state.tick(0.0)
        samples_before = state.samples

        source.samples = []
        source.fail_totals = True

        assert not state.tick(1.0)
        assert state.samples == samples_before
        assert len(state.history) == 1

    def test_failed_attempt_waits_a_full_interval(self, source):
        source.fail_processes = True
        state = SwapState(source, SwaptopConfig(refresh_interval_ms=1000))

        state.tick(0.0)
        state.tick(0.1)
        state.tick(0.2)

        assert source.calls == 1

    def test_recovers_after_failure(self, source, scenario_samples):
        source.fail_processes = True
        state = SwapState(source)
        state.tick(0.0)

        source.fail_processes = False
        source.samples = scenario_samples

        assert state.tick(1.0)
        assert len(state.samples) == 3

    def test_device_failure_keeps_previous_devices(self, source):
        device = SwapDevice(name="/swapfile", kind="file", size_kb=2048, used_kb=512, priority=-2)
        source.devices = [device]
        state = SwapState(source)
        state.tick(0.0)

        source.fail_devices = True

        assert state.tick(1.0)
        assert state.devices == [device]
        assert len(state.history) == 2

    def test_quit_stops_refreshing(self, source):
        state = SwapState(source)
        state.quit()

        assert not state.running
        assert not state.tick(0.0)
        assert source.calls == 0


class TestActions:
    """Tests for user actions on SwapState."""

    def test_toggle_aggregation_rebuilds_list(self, source, scenario_samples):
        source.samples = scenario_samples
        state = SwapState(source)
        state.refresh(0.0)

        assert state.toggle_aggregation()

        assert [(s.ident, s.name, s.value) for s in state.samples] == [
            (Aggregated(count=2), "a", 150.0),
            (Aggregated(count=1), "b", 30.0),
        ]
        assert state.view_model().rows[0].startswith("COUNT")

    def test_unit_change_rebuilds_list(self, source):
        source.samples = [RawSample(pid=1, name="a", swap_kb=2048)]
        state = SwapState(source)
        state.refresh(0.0)

        state.set_unit(Unit.MB)

        assert state.samples[0].value == 2.0
        assert state.view_model().rows[1].split("|")[2].strip() == "2.00"

    def test_unit_change_rescales_history(self, source):
        source.totals = SwapTotals(total_kb=2 * 1048576, used_kb=1048576)
        state = SwapState(source)
        state.refresh(0.0)

        state.set_unit(Unit.GB)
        model = state.view_model()

        assert [p.used for p in model.history] == [1.0]
        assert model.history_ceiling == 2.0

    def test_cycle_theme(self, source):
        state = SwapState(source)
        assert state.view.theme is ThemeType.DRACULA
        assert state.cycle_theme() is ThemeType.NORD
        assert state.cycle_theme() is ThemeType.DEFAULT
        assert state.cycle_theme() is ThemeType.SOLARIZED

    def test_out_of_range_config_interval_is_clamped(self, source):
        """View and scheduler agree on an interval clamped into [1, 10000]."""
        low = SwapState(source, SwaptopConfig(refresh_interval_ms=0))
        high = SwapState(source, SwaptopConfig(refresh_interval_ms=50_000))

        assert low.view.refresh_interval_ms == low.scheduler.interval_ms == 1
        assert low.view_model().refresh_interval_ms == 1
        assert high.view.refresh_interval_ms == high.scheduler.interval_ms == 10_000

    def test_interval_clamps(self, source):
        state = SwapState(source, SwaptopConfig(refresh_interval_ms=1))
        for _ in range(20):
            state.decrease_interval()
        assert state.view.refresh_interval_ms == 1
        for _ in range(200):
            state.increase_interval()
        assert state.view.refresh_interval_ms == 10_000
        assert state.scheduler.interval_ms == 10_000

    def test_empty_list_view(self, source):
        """Every unit/aggregation combination of an empty list shows only the header."""
        state = SwapState(source)
        state.resize(20)
        state.view.scroll_offset = 5
        state.refresh(0.0)
        for unit in Unit:
            for _ in range(2):
                state.set_unit(unit)
                state.toggle_aggregation()
                model = state.view_model()
                assert len(model.rows) == 1
                assert model.content_height == 2
                assert model.scroll_offset == 0


class TestViewModel:
    """Tests for the read-only view model."""

    def test_initial_model(self, source):
        model = SwapState(source).view_model()

        assert model.rows[0].startswith("PID")
        assert model.history == ()
        assert model.usage_percent == 0
        assert model.devices is None
        assert model.totals_label == "waiting for swap totals..."

    def test_usage_percent(self, source):
        source.totals = SwapTotals(total_kb=3000, used_kb=1000)
        state = SwapState(source)
        state.refresh(0.0)

        assert state.view_model().usage_percent == 33

    def test_device_rows(self, source):
        source.devices = [SwapDevice(name="/dev/sda2", kind="partition", size_kb=4096, used_kb=1024, priority=-2)]
        state = SwapState(source, SwaptopConfig(unit=Unit.MB))
        state.refresh(0.0)

        devices = state.view_model().devices

        assert devices[0].startswith("NAME")
        assert "/dev/sda2" in devices[1]
        assert "4.00" in devices[1]
        assert "1.00" in devices[1]

    def test_model_is_frozen(self, source):
        model = SwapState(source).view_model()
        try:
            model.scroll_offset = 3
            raise AssertionError("Should have raised FrozenInstanceError")
        except AttributeError:
            pass


class TestTotalsLabel:
    """Tests for totals_label."""

    def test_kb(self):
        assert totals_label(SwapTotals(2048, 512), Unit.KB) == "total available: 2048 | used: 512"

    def test_mb_rounds_total(self):
        assert totals_label(SwapTotals(2048 + 700, 512), Unit.MB) == "total available: 3 | used: 0.50"

    def test_gb(self):
        assert totals_label(SwapTotals(1048576, 524288), Unit.GB) == "total available: 1.00 | used: 0.50"
