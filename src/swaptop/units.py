"""Kilobyte to display-unit conversion."""

from swaptop.models import RawSample, DisplaySample, Individual, Unit

_DIVISORS = {
    Unit.KB: 1,
    Unit.MB: 1024,
    Unit.GB: 1024 * 1024,
}


def convert(kb: int, unit: Unit) -> float:
    """Convert a kilobyte count to ``unit``. Exact for KB."""
    if unit is Unit.KB:
        return float(kb)
    return kb / _DIVISORS[unit]


def format_value(value: float, unit: Unit) -> str:
    """Format a converted value: whole numbers for KB, two decimals otherwise."""
    if unit is Unit.KB:
        return f"{value:.0f}"
    return f"{value:.2f}"


def to_display(sample: RawSample, unit: Unit) -> DisplaySample:
    """Convert a raw per-process sample into an individual display sample."""
    return DisplaySample(
        ident=Individual(pid=sample.pid),
        name=sample.name,
        value=convert(max(sample.swap_kb, 0), unit),
        unit=unit,
    )
