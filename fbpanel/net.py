"""Network traffic monitor feeding a chart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .chart import Chart

__all__ = ["NetStat", "NetMonitor", "parse_net_dev", "read_net_stat"]

PROC_NET_DEV = "/proc/net/dev"
CHECK_PERIOD = 2  # seconds
_ULONG = 1 << 64


@dataclass(frozen=True)
class NetStat:
    """Cumulative transmitted and received bytes."""

    tx: int = 0
    rx: int = 0


def parse_net_dev(text: str, iface: str) -> NetStat:
    """Find *iface* in /proc/net/dev text and return its byte counters.

    Raises ValueError if the interface or its counters cannot be found.
    """
    found = None
    for line in text.splitlines()[2:]:
        at = line.rfind(iface)
        if at >= 0:
            found = line[at:]
            break
    if found is None:
        raise ValueError(f"interface {iface} not found")
    colon = found.rfind(":")
    if colon < 0:
        raise ValueError(f"can't read {iface} statistics")
    fields = found[colon + 1:].split()[:9]
    try:
        numbers = [int(f) for f in fields]
    except ValueError:
        raise ValueError(f"can't read {iface} statistics") from None
    if len(numbers) < 9 or numbers[0] < 0 or numbers[8] < 0:
        raise ValueError(f"can't read {iface} statistics")
    return NetStat(tx=numbers[8], rx=numbers[0])


def read_net_stat(path, iface: str) -> NetStat:
    with open(path, encoding="ascii", errors="replace") as fp:
        return parse_net_dev(fp.read(), iface)


def _fraction(value: int, limit: int) -> float:
    if limit:
        return value / limit
    return 1.0 if value else 0.0


class NetMonitor:
    """Samples interface counters and charts the rates against a limit."""

    def __init__(self, chart: Optional[Chart] = None, iface: str = "eth0",
                 max_rx: int = 120, max_tx: int = 12,
                 tx_color: str = "violet", rx_color: str = "blue",
                 xc=None, path=PROC_NET_DEV):
        if xc is not None:
            iface = xc.get_str("interface", iface)
            max_rx = xc.get_int("RxLimit", max_rx)
            max_tx = xc.get_int("TxLimit", max_tx)
            tx_color = xc.get_str("TxColor", tx_color)
            rx_color = xc.get_str("RxColor", rx_color)
        self.chart = chart if chart is not None else Chart()
        self.iface = iface
        self.max_rx = max_rx
        self.max_tx = max_tx
        self.max = max_rx + max_tx
        self.path = path
        self.prev = NetStat()
        self.tooltip_markup = "<b>Net</b>"
        self.chart.set_rows(2, [tx_color, rx_color])

    def sample(self, stat: NetStat) -> tuple[int, int]:
        """Return ``(tx, rx)`` in KB/s since the previous sample."""
        prev, self.prev = self.prev, stat
        tx = (((stat.tx - prev.tx) % _ULONG) >> 10) // CHECK_PERIOD
        rx = (((stat.rx - prev.rx) % _ULONG) >> 10) // CHECK_PERIOD
        return tx, rx

    def update(self) -> bool:
        """Take a sample and add it to the chart; True to keep polling."""
        try:
            tx, rx = self.sample(read_net_stat(self.path, self.iface))
        except (OSError, ValueError):
            tx = rx = 0
            totals = [0.0, 0.0]
        else:
            totals = [_fraction(tx, self.max), _fraction(rx, self.max)]
        self.chart.add_tick(totals)
        self.tooltip_markup = self.tooltip(rx, tx)
        return True

    def tooltip(self, rx: int, tx: int) -> str:
        return f"<b>{self.iface}:</b>\nD {rx} Kbs, U {tx} Kbs"