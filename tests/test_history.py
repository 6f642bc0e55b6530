"""Tests for the history window."""

import pytest

from swaptop.history import DEFAULT_CAPACITY, HistoryWindow


def test_default_capacity():
    window = HistoryWindow()
    assert window.capacity == DEFAULT_CAPACITY == 60
    assert len(window) == 0
    assert window.bounds == (0.0, 60.0)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        HistoryWindow(0)


def test_push_stamps_right_edge_and_slides():
    window = HistoryWindow(capacity=5)

    window.push(10.0)

    assert [(p.timestamp, p.used) for p in window.points] == [(5.0, 10.0)]
    assert window.bounds == (1.0, 6.0)


def test_bounds_advance_by_one_per_push():
    window = HistoryWindow(capacity=3)
    for i in range(10):
        left, right = window.bounds
        window.push(float(i))
        assert window.bounds == (left + 1.0, right + 1.0)


def test_overflow_evicts_oldest():
    """Pushing N+1 values keeps values 1..N in order."""
    capacity = 60
    window = HistoryWindow(capacity=capacity)
    pushed = [float(i * 10) for i in range(capacity + 1)]

    for value in pushed:
        window.push(value)

    assert len(window) == capacity
    assert [p.used for p in window.points] == pushed[1:]


def test_points_are_time_ordered():
    window = HistoryWindow(capacity=4)
    for value in range(9):
        window.push(float(value))

    timestamps = [p.timestamp for p in window.points]
    assert timestamps == sorted(timestamps)
    assert all(window.bounds[0] <= t < window.bounds[1] for t in timestamps)


def test_points_returns_copy():
    window = HistoryWindow(capacity=4)
    window.push(1.0)

    window.points.clear()

    assert len(window) == 1


class TestCeiling:
    """Tests for the vertical axis ceiling."""

    def test_independent_of_history(self):
        window = HistoryWindow(capacity=4)
        window.ceiling = 8192
        window.push(100.0)
        window.push(9000.0)

        assert window.ceiling == 8192.0

    def test_never_negative(self):
        window = HistoryWindow()
        window.ceiling = -5
        assert window.ceiling == 0.0
