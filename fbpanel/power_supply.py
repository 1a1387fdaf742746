"""Power supplies (AC adapters and batteries) as reported by sysfs."""

from __future__ import annotations

import argparse
import logging
import math
import os
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

__all__ = [
    "AcSupply",
    "Battery",
    "PowerSupply",
    "parse_uevent",
    "read_uevent",
    "main",
]

log = logging.getLogger(__name__)

SYS_POWER_SUPPLY = "/sys/class/power_supply/"
TYPE_FILE = "type"
TYPE_AC = "Mains\n"
TYPE_BATTERY = "Battery\n"
UEVENT_FILE = "uevent"

NAME_KEY = "POWER_SUPPLY_NAME"
AC_ONLINE_KEY = "POWER_SUPPLY_ONLINE"
AC_ONLINE_VALUE = "1"
BAT_STATUS_KEY = "POWER_SUPPLY_STATUS"
BAT_CAPACITY_KEY = "POWER_SUPPLY_CAPACITY"
# Older kernels only report these; capacity is NOW / FULL.
BAT_ENERGY_FULL_KEY = "POWER_SUPPLY_ENERGY_FULL"
BAT_ENERGY_NOW_KEY = "POWER_SUPPLY_ENERGY_NOW"
BAT_CHARGE_FULL_KEY = "POWER_SUPPLY_CHARGE_FULL"
BAT_CHARGE_NOW_KEY = "POWER_SUPPLY_CHARGE_NOW"

_FLOAT = re.compile(
    r"[ \t\n\r\v\f]*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)


def _strtod(text: str) -> float:
    """Parse the leading floating point number of *text*, or 0.0."""
    match = _FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def _ratio_percent(now: float, full: float) -> float:
    if full == 0.0:
        return math.inf
    return now / full * 100.0


def parse_uevent(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines of a uevent file.

    Only the first ``=`` of an entry separates key from value, and an
    entry is stored only once it is terminated by a newline.
    """
    result: dict[str, str] = {}
    key: list[str] = []
    value: list[str] = []
    in_value = False
    for ch in text:
        if ch == "=" and not in_value:
            in_value = True
        elif ch == "\n" and in_value:
            in_value = False
            result["".join(key)] = "".join(value)
            key.clear()
            value.clear()
        elif in_value:
            value.append(ch)
        else:
            key.append(ch)
    return result


def read_uevent(path) -> Optional[dict[str, str]]:
    """Read and parse the uevent file at *path*; None if it is unreadable."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            return parse_uevent(fp.read())
    except OSError:
        return None


@dataclass
class AcSupply:
    """An AC adapter."""

    path: Optional[str]
    name: Optional[str] = None
    online: bool = False

    @classmethod
    def from_uevent(cls, path) -> "AcSupply":
        ac = cls(path)
        info = read_uevent(path) if path is not None else None
        if info is not None:
            if NAME_KEY in info:
                ac.name = info[NAME_KEY]
            if AC_ONLINE_KEY in info:
                ac.online = info[AC_ONLINE_KEY] == AC_ONLINE_VALUE
        return ac


@dataclass
class Battery:
    """A battery; capacity is in percent, or -1.0 when unknown."""

    path: Optional[str]
    name: Optional[str] = None
    status: Optional[str] = None
    capacity: float = -1.0

    @classmethod
    def from_uevent(cls, path) -> "Battery":
        bat = cls(path)
        info = read_uevent(path) if path is not None else None
        if info is None:
            return bat
        if NAME_KEY in info:
            bat.name = info[NAME_KEY]
        if BAT_STATUS_KEY in info:
            bat.status = info[BAT_STATUS_KEY]
        if BAT_CAPACITY_KEY in info:
            bat.capacity = _strtod(info[BAT_CAPACITY_KEY])
        elif BAT_ENERGY_NOW_KEY in info:
            now = _strtod(info[BAT_ENERGY_NOW_KEY])
            if BAT_ENERGY_FULL_KEY in info and now > 0.0:
                bat.capacity = _ratio_percent(now, _strtod(info[BAT_ENERGY_FULL_KEY]))
        elif BAT_CHARGE_NOW_KEY in info:
            now = _strtod(info[BAT_CHARGE_NOW_KEY])
            if BAT_CHARGE_FULL_KEY in info and now > 0.0:
                bat.capacity = _ratio_percent(now, _strtod(info[BAT_CHARGE_FULL_KEY]))
        return bat


@dataclass
class PowerSupply:
    """All power supplies found on the system."""

    ac_list: list[AcSupply] = field(default_factory=list)
    bat_list: list[Battery] = field(default_factory=list)

    def parse(self, root=SYS_POWER_SUPPLY) -> "PowerSupply":
        """Scan *root* for supplies and add them to the lists."""
        if not os.path.isdir(root):
            return self
        try:
            entries = sorted(os.listdir(root))
        except OSError:
            return self
        for entry in entries:
            directory = os.path.join(root, entry)
            type_path = os.path.join(directory, TYPE_FILE)
            if not os.path.isfile(type_path):
                continue
            try:
                with open(type_path, encoding="utf-8", errors="replace") as fp:
                    contents = fp.read()
            except OSError:
                continue
            uevent = os.path.join(directory, UEVENT_FILE)
            if contents == TYPE_AC:
                self.ac_list.append(AcSupply.from_uevent(uevent))
            elif contents == TYPE_BATTERY:
                self.bat_list.append(Battery.from_uevent(uevent))
            else:
                log.warning("unsupported power supply type %s", contents)
        return self

    def is_ac_online(self) -> bool:
        """True if at least one AC adapter is online."""
        return any(ac.online for ac in self.ac_list)

    def bat_capacity(self) -> float:
        """Average capacity of all batteries; NaN if there are none."""
        if not self.bat_list:
            return math.nan
        total = sum(b.capacity for b in self.bat_list if b.capacity > 0.0)
        return total / len(self.bat_list)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show AC and battery state.")
    parser.add_argument("root", nargs="?", default=SYS_POWER_SUPPLY)
    args = parser.parse_args(argv)
    ps = PowerSupply().parse(args.root)
    print(f"ac_online: {int(ps.is_ac_online())}\nbat_capacity: {ps.bat_capacity():f}")
    return 0