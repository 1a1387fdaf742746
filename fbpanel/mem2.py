"""Memory usage monitor feeding a chart."""

from __future__ import annotations

from typing import Optional

from .chart import Chart
from .mem import PROC_MEMINFO, MemInfo, mem_stats, read_meminfo

__all__ = ["Mem2Monitor"]

CHECK_PERIOD = 2  # seconds


def _ratio(used: int, total: int) -> float:
    if total:
        return used / total
    return float("inf") if used else float("nan")


class Mem2Monitor:
    """Charts used memory and, if a swap colour is set, used swap."""

    def __init__(self, chart: Optional[Chart] = None, mem_color: str = "red",
                 swap_color: Optional[str] = None, xc=None, path=PROC_MEMINFO):
        if xc is not None:
            mem_color = xc.get_str("MemColor", mem_color)
            swap_color = xc.get_str("SwapColor", swap_color)
        self.chart = chart if chart is not None else Chart()
        self.mem_color = mem_color
        self.swap_color = swap_color
        self.path = path
        self.tooltip_markup = "<b>Memory</b>"
        if swap_color is None:
            self.chart.set_rows(1, [mem_color])
        else:
            self.chart.set_rows(2, [mem_color, swap_color])

    def sample(self, info: MemInfo) -> list[float]:
        """Chart the used fractions of memory and swap and return them."""
        stats = mem_stats(info)
        ratios = [
            _ratio(stats.mem_used, stats.mem_total),
            _ratio(stats.swap_used, stats.swap_total),
        ]
        self.tooltip_markup = stats.tooltip()
        self.chart.add_tick(ratios)
        return ratios

    def update(self) -> bool:
        """Read memory usage; False (stop polling) if it can't be read."""
        try:
            info = read_meminfo(self.path)
        except OSError:
            return False
        self.sample(info)
        return True