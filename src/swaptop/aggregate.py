"""Grouping and ordering of per-process samples."""

from swaptop.models import Aggregated, DisplaySample, Individual


def _sort_key(sample: DisplaySample) -> tuple:
    # Descending value, then a stable secondary key per identity kind.
    if isinstance(sample.ident, Individual):
        return (-sample.value, sample.ident.pid, sample.name)
    return (-sample.value, sample.name)


def sort_samples(samples: list[DisplaySample]) -> list[DisplaySample]:
    """Return samples sorted by descending value.

    Ties are broken by pid for individual samples and by name for
    aggregated ones.
    """
    return sorted(samples, key=_sort_key)


def aggregate(samples: list[DisplaySample]) -> list[DisplaySample]:
    """
    Collapse individual samples into one record per process name.

    Names are matched exactly. Each output record carries the summed value
    and the number of member processes. The input list is not modified.

    Args:
        samples: Individual display samples, all in the same unit.

    Returns:
        Aggregated samples sorted by descending value, ties by name.
    """
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    units = {}

    for sample in samples:
        totals[sample.name] = totals.get(sample.name, 0.0) + sample.value
        counts[sample.name] = counts.get(sample.name, 0) + 1
        units.setdefault(sample.name, sample.unit)

    grouped = [
        DisplaySample(
            ident=Aggregated(count=counts[name]),
            name=name,
            value=total,
            unit=units[name],
        )
        for name, total in totals.items()
    ]
    return sort_samples(grouped)
