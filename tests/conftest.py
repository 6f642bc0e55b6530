"""Shared fixtures for swaptop tests."""

import pytest

from swaptop.errors import AcquisitionError
from swaptop.models import RawSample, SwapDevice, SwapTotals
from swaptop.monitor import SwapSource


class FakeSource(SwapSource):
    """In-memory swap source whose readings and failures are set by the test."""

    def __init__(self) -> None:
        self.samples: list[RawSample] = []
        self.totals = SwapTotals(total_kb=4 * 1024 * 1024, used_kb=1024 * 1024)
        self.devices: list[SwapDevice] | None = None
        self.fail_processes = False
        self.fail_totals = False
        self.fail_devices = False
        self.calls = 0

    def fetch_process_samples(self) -> list[RawSample]:
        self.calls += 1
        if self.fail_processes:
            raise AcquisitionError("process list unavailable")
        return list(self.samples)

    def fetch_system_totals(self) -> SwapTotals:
        if self.fail_totals:
            raise AcquisitionError("meminfo unavailable")
        return self.totals

    def fetch_swap_devices(self) -> list[SwapDevice] | None:
        if self.fail_devices:
            raise AcquisitionError("swaps unavailable")
        return None if self.devices is None else list(self.devices)


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def scenario_samples() -> list[RawSample]:
    return [
        RawSample(pid=1, name="a", swap_kb=100),
        RawSample(pid=2, name="a", swap_kb=50),
        RawSample(pid=3, name="b", swap_kb=30),
    ]
