import shlex
import sys

from fbpanel.menu import (
    MENU_DEFAULT_ICON_SIZE,
    MenuItem,
    MenuModel,
    build_menu,
    expand_config,
)
from fbpanel.xconf import XConf, parse


def fake_system_menu():
    root = XConf("systemmenu")
    menu = XConf("menu")
    menu.append(XConf("name", "Graphics"))
    item = XConf("item")
    item.append(XConf("name", "GIMP"))
    item.append(XConf("action", "gimp"))
    menu.append(item)
    root.append(menu)
    return root


def config(text):
    return parse(text.splitlines(keepends=True), "plugin")


def test_expand_config_system_menu():
    xc = config("image = ~/m.png\nsystemmenu {\n}\nseparator {\n}\n")
    expanded, has_sys = expand_config(xc, fake_system_menu)
    assert has_sys is True
    assert [s.name for s in expanded.sons] == ["image", "menu", "separator"]
    assert expanded.sons[1].parent is expanded
    assert [s.name for s in xc.sons] == ["image", "systemmenu", "separator"]


def test_expand_config_include(tmp_path):
    inc = tmp_path / "inc"
    inc.write_text("item {\n    name = Inc\n    action = inc\n}\n")
    xc = config(f"include = {inc}\nitem {{\n    name = Own\n}}\n")
    expanded, has_sys = expand_config(xc, fake_system_menu)
    assert has_sys is False
    assert [s.get_str("name") for s in expanded.sons] == ["Inc", "Own"]


def test_expand_config_missing_include_and_none(tmp_path):
    xc = config(f"include = {tmp_path / 'missing'}\n")
    expanded, _ = expand_config(xc, fake_system_menu)
    assert expanded.sons == []
    assert expand_config(None, fake_system_menu) == (None, False)


def test_build_menu(monkeypatch):
    monkeypatch.setenv("HOME", "/home/someone")
    xc = config(
        "item {\n    name = Term\n    action = ~/bin/term\n    icon = term\n}\n"
        "separator {\n}\n"
        "menu {\n    name = Sub\n    item {\n        action = x\n    }\n}\n"
        "bogus = 1\n"
    )
    menu = build_menu(xc, 16)
    assert menu.icon_size == 16
    assert len(menu.items) == 3
    term, sep, sub = menu.items
    assert term == MenuItem(name="Term", icon="term", action="/home/someone/bin/term")
    assert sep.separator is True
    assert sub.name == "Sub" and sub.action is None
    assert sub.submenu.items == [MenuItem(name="", action="x")]
    assert build_menu(None) is None


def test_model_from_config():
    xc = config("icon = start\nsystemmenu {\n}\n")
    model = MenuModel.from_config(xc, fake_system_menu)
    assert model.icon_size == MENU_DEFAULT_ICON_SIZE
    assert model.button_icon == "start"
    assert model.has_system_menu is True
    assert model.menu.items[0].submenu.items[0].action == "gimp"
    xc2 = config("iconsize = 32\n")
    assert MenuModel.from_config(xc2, fake_system_menu).menu.icon_size == 32


def test_needs_rebuild():
    with_sys = MenuModel.from_config(config("systemmenu {\n}\n"), fake_system_menu)
    seen = []

    def changed(btime):
        seen.append(btime)
        return True

    assert with_sys.needs_rebuild(changed) is True
    assert seen == [with_sys.btime]
    without = MenuModel.from_config(config("item {\n}\n"), fake_system_menu)
    assert without.needs_rebuild(changed) is False
    assert with_sys.needs_rebuild(lambda b: False) is False


def test_activate():
    model = MenuModel.from_config(config("item {\n}\n"), fake_system_menu)
    assert model.activate(MenuItem(name="none")) is None
    cmd = f"{shlex.quote(sys.executable)} -c pass"
    proc = model.activate(MenuItem(name="py", action=cmd))
    assert proc.wait(timeout=30) == 0