"""Memory and swap usage read from /proc/meminfo."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["MemInfo", "MemStats", "parse_meminfo", "read_meminfo", "mem_stats"]

PROC_MEMINFO = "/proc/meminfo"
UPDATE_INTERVAL = 3.0
_ULONG = 1 << 64

# Memory types to scan for, in the order they are tried on each line.
_FIELDS = (
    ("MemTotal", "mem_total"),
    ("MemFree", "mem_free"),
    ("MemShared", "mem_shared"),
    ("Slab", "slab"),
    ("Buffers", "buffers"),
    ("Cached", "cached"),
    ("SwapTotal", "swap_total"),
    ("SwapFree", "swap_free"),
)

_NUMBER = re.compile(r"[ \t\n\r\v\f]*(\d+)")


@dataclass(frozen=True)
class MemInfo:
    """The /proc/meminfo entries the monitors use, in kB."""

    mem_total: int = 0
    mem_free: int = 0
    mem_shared: int = 0
    slab: int = 0
    buffers: int = 0
    cached: int = 0
    swap_total: int = 0
    swap_free: int = 0


def parse_meminfo(text: str) -> MemInfo:
    """Parse /proc/meminfo text; the first line for each entry wins."""
    values: dict[str, int] = {}
    for line in text.splitlines():
        for key, attr in _FIELDS:
            if attr in values or not line.startswith(key):
                continue
            match = _NUMBER.match(line, len(key) + 1)
            if match is not None:
                values[attr] = int(match.group(1))
                break
    return MemInfo(**values)


def read_meminfo(path=PROC_MEMINFO) -> MemInfo:
    with open(path, encoding="ascii", errors="replace") as fp:
        return parse_meminfo(fp.read())


@dataclass(frozen=True)
class MemStats:
    """Total and used memory and swap, in kB."""

    mem_total: int = 0
    mem_used: int = 0
    swap_total: int = 0
    swap_used: int = 0

    def fractions(self) -> tuple[float, float]:
        """Used fraction of memory and of swap; 0 where the total is 0."""
        mu = self.mem_used / self.mem_total if self.mem_total else 0.0
        su = self.swap_used / self.swap_total if self.swap_total else 0.0
        return mu, su

    def tooltip(self) -> str:
        mu, su = self.fractions()
        return (
            f"<b>Mem:</b> {int(mu * 100)}%, {self.mem_used >> 10} MB of "
            f"{self.mem_total >> 10} MB\n"
            f"<b>Swap:</b> {int(su * 100)}%, {self.swap_used >> 10} MB of "
            f"{self.swap_total >> 10} MB"
        )


def mem_stats(info: MemInfo) -> MemStats:
    """Compute usage; buffers, page cache and slab count as free memory."""
    reclaimable = info.mem_free + info.buffers + info.cached + info.slab
    return MemStats(
        mem_total=info.mem_total,
        mem_used=(info.mem_total - reclaimable) % _ULONG,
        swap_total=info.swap_total,
        swap_used=(info.swap_total - info.swap_free) % _ULONG,
    )