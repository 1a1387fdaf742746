from fbpanel.battery import (
    BATT_CHARGING,
    BATT_NA,
    BATT_WORKING,
    BatteryState,
    BatteryView,
    battery_icons,
    battery_tooltip,
)
from fbpanel.meter import Meter


def test_icons_selection():
    assert battery_icons(BatteryState(exist=False)) == BATT_NA
    assert battery_icons(BatteryState(50, False, True)) == BATT_WORKING
    assert battery_icons(BatteryState(50, True, True)) == BATT_CHARGING


def test_icon_names_from_source():
    assert battery_icons(BatteryState(0, False, True))[0] == "battery_0"
    assert battery_icons(BatteryState(0, True, True))[-1] == "battery_charging_8"
    assert list(battery_icons(BatteryState(exist=False))) == ["battery_na"]


def test_tooltip_no_battery():
    assert battery_tooltip(BatteryState()) == "Runing on AC\nNo battery found"


def test_tooltip_working():
    assert battery_tooltip(BatteryState(57.9, False, True)) == "<b>Battery:</b> 57%"


def test_tooltip_charging():
    text = battery_tooltip(BatteryState(40, True, True))
    assert text == "<b>Battery:</b> 40%\nCharging"


def test_update_sets_meter_and_tooltip():
    view = BatteryView(Meter(16))
    assert view.update(BatteryState(100, False, True)) is True
    assert view.meter.image == BATT_WORKING[-1]
    assert view.tooltip == battery_tooltip(BatteryState(100, False, True))


def test_update_without_battery():
    view = BatteryView()
    view.update(BatteryState(0, False, False))
    assert view.meter.icons == BATT_NA
    assert view.meter.image == BATT_NA[0]


def test_update_out_of_range_level_keeps_running():
    view = BatteryView()
    assert view.update(BatteryState(150, False, True)) is True
    assert view.meter.image is None
    assert view.meter.icons == BATT_WORKING