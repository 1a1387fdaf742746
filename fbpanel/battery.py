"""Battery indicator: picks icons and tooltip from the battery state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .meter import Meter

__all__ = ["BatteryState", "BatteryView", "battery_icons", "battery_tooltip"]

log = logging.getLogger(__name__)

UPDATE_INTERVAL = 2.0

BATT_WORKING = tuple(f"battery_{i}" for i in range(9))
BATT_CHARGING = tuple(f"battery_charging_{i}" for i in range(9))
BATT_NA = ("battery_na",)


@dataclass
class BatteryState:
    """Battery level in per cent, whether it charges and whether it exists."""

    level: float = 0.0
    charging: bool = False
    exist: bool = False


def battery_icons(state: BatteryState) -> tuple[str, ...]:
    if not state.exist:
        return BATT_NA
    return BATT_CHARGING if state.charging else BATT_WORKING


def battery_tooltip(state: BatteryState) -> str:
    if not state.exist:
        return "Runing on AC\nNo battery found"
    suffix = "\nCharging" if state.charging else ""
    return f"<b>Battery:</b> {int(state.level)}%{suffix}"


class BatteryView:
    """Keeps a meter and tooltip in step with the battery state."""

    def __init__(self, meter: Optional[Meter] = None):
        self.meter = meter if meter is not None else Meter()
        self.tooltip = ""

    def update(self, state: BatteryState) -> bool:
        """Refresh icons and tooltip; always True so a timer keeps running."""
        self.tooltip = battery_tooltip(state)
        self.meter.set_icons(battery_icons(state))
        try:
            self.meter.set_level(int(state.level))
        except ValueError as exc:
            log.error("%s", exc)
        return True