import math

import pytest

from fbpanel.power_supply import (
    AcSupply,
    Battery,
    PowerSupply,
    main,
    parse_uevent,
    read_uevent,
)


def _supply(root, name, kind, uevent):
    d = root / name
    d.mkdir()
    (d / "type").write_text(kind)
    (d / "uevent").write_text(uevent)


def test_parse_uevent_pairs():
    text = "POWER_SUPPLY_NAME=BAT0\nPOWER_SUPPLY_STATUS=Discharging\n"
    assert parse_uevent(text) == {
        "POWER_SUPPLY_NAME": "BAT0",
        "POWER_SUPPLY_STATUS": "Discharging",
    }


def test_parse_uevent_unterminated_entry_dropped():
    assert parse_uevent("A=1\nB=2") == {"A": "1"}


def test_parse_uevent_only_first_equals_splits():
    assert parse_uevent("A=b=c\n") == {"A": "b=c"}


def test_read_uevent_missing(tmp_path):
    assert read_uevent(tmp_path / "nope") is None
    assert read_uevent(tmp_path) is None


def test_ac_from_uevent(tmp_path):
    p = tmp_path / "uevent"
    p.write_text("POWER_SUPPLY_NAME=AC\nPOWER_SUPPLY_ONLINE=1\n")
    ac = AcSupply.from_uevent(str(p))
    assert ac.name == "AC"
    assert ac.online is True


def test_ac_offline(tmp_path):
    p = tmp_path / "uevent"
    p.write_text("POWER_SUPPLY_ONLINE=0\n")
    ac = AcSupply.from_uevent(str(p))
    assert ac.online is False
    assert ac.name is None


def test_battery_capacity_key(tmp_path):
    p = tmp_path / "uevent"
    p.write_text("POWER_SUPPLY_STATUS=Charging\nPOWER_SUPPLY_CAPACITY=42\n")
    bat = Battery.from_uevent(str(p))
    assert bat.capacity == 42.0
    assert bat.status == "Charging"


def test_battery_energy_ratio(tmp_path):
    p = tmp_path / "uevent"
    p.write_text("POWER_SUPPLY_ENERGY_NOW=5000\nPOWER_SUPPLY_ENERGY_FULL=5000\n")
    assert Battery.from_uevent(str(p)).capacity == 100.0


def test_battery_charge_ratio(tmp_path):
    p = tmp_path / "uevent"
    p.write_text("POWER_SUPPLY_CHARGE_NOW=300\nPOWER_SUPPLY_CHARGE_FULL=300\n")
    assert Battery.from_uevent(str(p)).capacity == 100.0


def test_battery_unknown_capacity(tmp_path):
    p = tmp_path / "uevent"
    p.write_text("POWER_SUPPLY_ENERGY_NOW=0\nPOWER_SUPPLY_ENERGY_FULL=10\n")
    assert Battery.from_uevent(str(p)).capacity == -1.0


def test_power_supply_parse(tmp_path):
    _supply(tmp_path, "AC", "Mains\n", "POWER_SUPPLY_ONLINE=1\n")
    _supply(tmp_path, "BAT0", "Battery\n", "POWER_SUPPLY_CAPACITY=40\n")
    _supply(tmp_path, "BAT1", "Battery\n", "POWER_SUPPLY_CAPACITY=60\n")
    _supply(tmp_path, "USB", "USB\n", "")
    ps = PowerSupply().parse(str(tmp_path))
    assert len(ps.ac_list) == 1
    assert [b.capacity for b in ps.bat_list] == [40.0, 60.0]
    assert ps.is_ac_online() is True
    assert ps.bat_capacity() == 50.0


def test_negative_capacity_counts_but_adds_nothing():
    ps = PowerSupply(bat_list=[Battery(None, capacity=80.0), Battery(None)])
    assert ps.bat_capacity() == 40.0


def test_no_batteries_is_nan(tmp_path):
    ps = PowerSupply().parse(str(tmp_path / "missing"))
    assert ps.is_ac_online() is False
    assert math.isnan(ps.bat_capacity())


def test_main_output(tmp_path, capsys):
    _supply(tmp_path, "BAT0", "Battery\n", "POWER_SUPPLY_CAPACITY=40\n")
    assert main([str(tmp_path)]) == 0
    assert capsys.readouterr().out == "ac_online: 0\nbat_capacity: 40.000000\n"


@pytest.mark.parametrize("value", ["1", "0"])
def test_ac_list_online_any(value):
    ps = PowerSupply(ac_list=[AcSupply(None), AcSupply(None, online=value == "1")])
    assert ps.is_ac_online() is (value == "1")