"""Swap data sources for swaptop."""

import logging
import os
import re
import sys
from abc import ABC, abstractmethod
from pathlib import Path

import psutil

from swaptop.errors import AcquisitionError
from swaptop.models import RawSample, SwapDevice, SwapTotals

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "unknown"

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class SwapSource(ABC):
    """Capability interface over the operating system's swap accounting."""

    @abstractmethod
    def fetch_process_samples(self) -> list[RawSample]:
        """
        Return one sample per process currently holding swapped memory.

        Processes that exit or deny access mid-scan are skipped. Ordering
        is unspecified.

        Raises:
            AcquisitionError: The process list itself could not be read.
        """

    @abstractmethod
    def fetch_system_totals(self) -> SwapTotals:
        """
        Return system-wide swap totals in kilobytes.

        Raises:
            AcquisitionError: The totals could not be read.
        """

    def fetch_swap_devices(self) -> list[SwapDevice] | None:
        """Return swap devices, or None where the platform has no such concept."""
        return None


class PsutilSwapSource(SwapSource):
    """
    Portable source built on psutil.

    Per-process swap comes from ``memory_full_info()``: the ``swap`` field
    where the platform reports one, ``pagefile`` on Windows.
    """

    def fetch_process_samples(self) -> list[RawSample]:
        samples: list[RawSample] = []

        try:
            processes = psutil.process_iter(attrs=["pid", "name", "memory_full_info"])
            for proc in processes:
                try:
                    info = proc.info
                    swap_kb = self._swap_kb(info.get("memory_full_info"))
                    if swap_kb <= 0:
                        continue
                    samples.append(
                        RawSample(
                            pid=info.get("pid", proc.pid),
                            name=info.get("name") or UNKNOWN_NAME,
                            swap_kb=swap_kb,
                        )
                    )
                except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                    logger.debug("Skipping process %s", proc.pid)
                    continue
        except (psutil.Error, OSError) as exc:
            raise AcquisitionError(f"Cannot list processes: {exc}") from exc

        return samples

    @staticmethod
    def _swap_kb(mem_info) -> int:
        if mem_info is None:
            return 0
        swap = getattr(mem_info, "swap", None)
        if swap is None:
            swap = getattr(mem_info, "pagefile", 0)
        return int(swap) // 1024

    def fetch_system_totals(self) -> SwapTotals:
        try:
            swap = psutil.swap_memory()
        except (psutil.Error, OSError, RuntimeError) as exc:
            raise AcquisitionError(f"Cannot read swap totals: {exc}") from exc
        return SwapTotals(total_kb=swap.total // 1024, used_kb=swap.used // 1024)


def _read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def _kb_field(value: str) -> int:
    """Parse a '1234 kB' style field."""
    parts = value.split()
    return int(parts[0]) if parts else 0


class ProcfsSwapSource(SwapSource):
    """
    Linux source reading the /proc pseudo-filesystem directly.

    Reads ``Name`` and ``VmSwap`` from ``/proc/<pid>/status``, totals from
    ``/proc/meminfo`` and devices from ``/proc/swaps``.
    """

    def __init__(self, proc_root: Path | str = "/proc") -> None:
        self._root = Path(proc_root)

    def fetch_process_samples(self) -> list[RawSample]:
        try:
            entries = os.listdir(self._root)
        except OSError as exc:
            raise AcquisitionError(f"Cannot list {self._root}: {exc}") from exc

        samples: list[RawSample] = []
        for entry in entries:
            if not entry.isdigit():
                continue
            try:
                sample = self._read_status(int(entry))
            except (OSError, ValueError):
                # Process exited between listing and reading, or access denied
                logger.debug("Skipping process %s", entry)
                continue
            if sample is not None:
                samples.append(sample)
        return samples

    def _read_status(self, pid: int) -> RawSample | None:
        name = UNKNOWN_NAME
        swap_kb = 0
        for line in _read_text(self._root / str(pid) / "status").splitlines():
            key, sep, value = line.partition(":")
            if not sep:
                continue
            if key == "Name":
                name = value.strip() or UNKNOWN_NAME
            elif key == "VmSwap":
                swap_kb = _kb_field(value)
        # Kernel threads have no VmSwap line at all
        if swap_kb <= 0:
            return None
        return RawSample(pid=pid, name=name, swap_kb=swap_kb)

    def fetch_system_totals(self) -> SwapTotals:
        try:
            text = _read_text(self._root / "meminfo")
        except OSError as exc:
            raise AcquisitionError(f"Cannot read meminfo: {exc}") from exc

        fields: dict[str, int] = {}
        for line in text.splitlines():
            key, sep, value = line.partition(":")
            if sep and key in ("SwapTotal", "SwapFree"):
                try:
                    fields[key] = _kb_field(value)
                except ValueError as exc:
                    raise AcquisitionError(f"Malformed meminfo line: {line!r}") from exc

        if "SwapTotal" not in fields or "SwapFree" not in fields:
            raise AcquisitionError("meminfo has no swap fields")

        total = fields["SwapTotal"]
        return SwapTotals(total_kb=total, used_kb=max(0, total - fields["SwapFree"]))

    def fetch_swap_devices(self) -> list[SwapDevice] | None:
        try:
            text = _read_text(self._root / "swaps")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise AcquisitionError(f"Cannot read swaps: {exc}") from exc

        devices: list[SwapDevice] = []
        # First line is the column header
        for line in text.splitlines()[1:]:
            parts = line.split()
            if len(parts) < 5:
                continue
            try:
                devices.append(
                    SwapDevice(
                        name=_OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), parts[0]),
                        kind=parts[1],
                        size_kb=int(parts[2]),
                        used_kb=int(parts[3]),
                        priority=int(parts[4]),
                    )
                )
            except ValueError as exc:
                raise AcquisitionError(f"Malformed swaps line: {line!r}") from exc
        return devices


def default_source() -> SwapSource:
    """Pick the swap source for the running platform."""
    if sys.platform.startswith("linux") and Path("/proc/meminfo").exists():
        return ProcfsSwapSource()
    return PsutilSwapSource()
