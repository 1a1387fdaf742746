import pytest

from fbpanel.meter import Meter

ICONS = [f"icon_{i}" for i in range(9)]


def _meter():
    calls = []
    meter = Meter(24, lambda name, size: calls.append((name, size)) or name)
    return meter, calls


def test_set_icons_resets_state():
    meter, _ = _meter()
    meter.set_icons(ICONS)
    assert meter.num == len(ICONS)
    assert meter.level == -1
    assert meter.cur_icon == -1


def test_full_level_uses_last_icon():
    meter, calls = _meter()
    meter.set_icons(ICONS)
    meter.set_level(100)
    assert meter.cur_icon == len(ICONS) - 1
    assert calls == [(ICONS[-1], 24)]
    assert meter.image == ICONS[-1]


def test_zero_level_uses_first_icon():
    meter, _ = _meter()
    meter.set_icons(ICONS)
    meter.set_level(0)
    assert meter.image == ICONS[0]


def test_same_icon_not_reloaded():
    meter, calls = _meter()
    meter.set_icons(ICONS)
    meter.set_level(100)
    meter.set_level(99)
    assert len(calls) == 1
    assert meter.level == 99


def test_same_level_ignored():
    meter, calls = _meter()
    meter.set_icons(ICONS)
    meter.set_level(50)
    meter.set_level(50)
    assert len(calls) == 1


def test_no_icons_is_noop():
    meter, calls = _meter()
    meter.set_level(50)
    assert calls == []
    assert meter.image is None


def test_same_icons_keep_level():
    meter, _ = _meter()
    meter.set_icons(ICONS)
    meter.set_level(30)
    meter.set_icons(list(ICONS))
    assert meter.level == 30


def test_update_view_resets_current_icon():
    meter, _ = _meter()
    meter.set_icons(ICONS)
    meter.set_level(100)
    meter.update_view()
    assert meter.cur_icon == -1