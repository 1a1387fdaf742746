"""CPU usage monitor feeding a chart."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .chart import Chart

__all__ = ["CpuStat", "CpuMonitor", "parse_cpu_stat", "read_cpu_stat"]

PROC_STAT = "/proc/stat"
UPDATE_INTERVAL = 1.0
DEFAULT_COLOR = "green"

_NUMBER = re.compile(r"\s*(\d+)")


@dataclass(frozen=True)
class CpuStat:
    """Cumulative CPU times: user, nice, system, idle and I/O wait."""

    u: int = 0
    n: int = 0
    s: int = 0
    i: int = 0
    w: int = 0


def parse_cpu_stat(text: str) -> CpuStat:
    """Read the leading ``cpu`` line of /proc/stat; missing fields are 0."""
    if not text.startswith("cpu"):
        return CpuStat()
    values = []
    pos = 3
    while len(values) < 5:
        match = _NUMBER.match(text, pos)
        if match is None:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return CpuStat(*values)


def read_cpu_stat(path=PROC_STAT) -> CpuStat:
    with open(path, encoding="ascii", errors="replace") as fp:
        return parse_cpu_stat(fp.read())


class CpuMonitor:
    """Samples CPU times and turns the change into a load fraction."""

    def __init__(self, chart: Optional[Chart] = None, color: str = DEFAULT_COLOR,
                 xc=None, stat_path=PROC_STAT):
        if xc is not None:
            color = xc.get_str("Color", color)
        self.chart = chart if chart is not None else Chart()
        self.color = color
        self.stat_path = stat_path
        self.prev = CpuStat()
        self.tooltip_markup = "<b>Cpu</b>"
        self.chart.set_rows(1, [color])

    def sample(self, stat: CpuStat) -> float:
        """Return the busy fraction since the previous sample."""
        prev, self.prev = self.prev, stat
        busy = (stat.u - prev.u) + (stat.n - prev.n) + (stat.s - prev.s)
        total = busy + (stat.i - prev.i) + (stat.w - prev.w)
        return busy / total if total else 1.0

    def update(self) -> bool:
        """Take a sample and add it to the chart; True to keep polling."""
        try:
            load = self.sample(read_cpu_stat(self.stat_path))
        except OSError:
            load = 0.0
        self.tooltip_markup = self.tooltip(load)
        self.chart.add_tick([load])
        return True

    def tooltip(self, load: float) -> str:
        return f"<b>Cpu:</b> {int(load * 100)}%"