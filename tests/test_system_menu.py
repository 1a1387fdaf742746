import os

import pytest

from fbpanel.system_menu import (
    MAIN_CATS,
    build_system_menu,
    dir_changed,
    read_desktop_entry,
    systemmenu_changed,
)


@pytest.fixture(autouse=True)
def plain_locale(monkeypatch):
    for var in ("LANGUAGE", "LC_ALL", "LC_MESSAGES"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LANG", "C")


def write_app(directory, filename, body):
    apps = directory / "applications"
    apps.mkdir(parents=True, exist_ok=True)
    path = apps / filename
    path.write_text("[Desktop Entry]\n" + body, encoding="utf-8")
    return path


GIMP = "Name=GIMP\nExec=gimp %U\nIcon=gimp.png\nCategories=Graphics;2DGraphics;\n"


def test_read_desktop_entry(tmp_path):
    path = write_app(tmp_path, "gimp.desktop", GIMP)
    entry = read_desktop_entry(path)
    assert entry["name"] == "GIMP"
    assert entry["icon"] == "gimp"
    assert entry["categories"] == ["Graphics", "2DGraphics"]
    assert "%" not in entry["action"]
    assert entry["action"].strip() == "gimp"


@pytest.mark.parametrize("body", [
    GIMP + "NoDisplay=true\n",
    GIMP + "OnlyShowIn=XFCE;\n",
    "Name=GIMP\nCategories=Graphics;\n",
    "Name=GIMP\nExec=gimp\n",
    "Exec=gimp\nCategories=Graphics;\n",
])
def test_read_desktop_entry_skips(tmp_path, body):
    path = write_app(tmp_path, "x.desktop", body)
    assert read_desktop_entry(path) is None


def test_read_desktop_entry_missing_file(tmp_path):
    assert read_desktop_entry(tmp_path / "nope.desktop") is None


def test_absolute_icon_keeps_extension(tmp_path):
    path = write_app(tmp_path, "a.desktop",
                     "Name=A\nExec=a\nIcon=/opt/a/a.png\nCategories=Game;\n")
    assert read_desktop_entry(path)["icon"] == "/opt/a/a.png"


def test_localized_name(tmp_path, monkeypatch):
    monkeypatch.setenv("LANGUAGE", "de")
    path = write_app(tmp_path, "a.desktop",
                     "Name=Editor\nName[de]=Bearbeiter\nExec=a\nCategories=Utility;\n")
    assert read_desktop_entry(path)["name"] == "Bearbeiter"


def test_build_system_menu_groups_and_sorts(tmp_path):
    system = tmp_path / "sys"
    write_app(system, "z.desktop", "Name=Zed\nExec=zed\nCategories=Graphics;\n")
    write_app(system, "a.desktop",
              "Name=Alpha\nExec=alpha\nIcon=/i/alpha.png\nCategories=Graphics;\n")
    write_app(system, "u.desktop", "Name=Unknown\nExec=u\nCategories=Nothing;\n")
    root = build_system_menu([str(system)], str(tmp_path / "user"))
    assert root.name == "systemmenu"
    assert [m.get_str("name") for m in root.sons] == ["Graphics"]
    menu = root.sons[0]
    assert menu.get_str("icon") == "applications-graphics"
    items = list(menu.find_all("item"))
    assert [i.get_str("name") for i in items] == ["Alpha", "Zed"]
    assert items[0].get_str("image") == "/i/alpha.png"
    assert items[1].get_str("action") == "zed"
    assert all(s.parent is menu for s in menu.sons)


def test_build_system_menu_user_dir_and_duplicates(tmp_path):
    system = tmp_path / "sys"
    user = tmp_path / "user"
    write_app(system, "a.desktop", "Name=A\nExec=a\nCategories=Game;\n")
    write_app(user / "sub", "b.desktop", "Name=B\nExec=b\nCategories=Game;\n")
    root = build_system_menu([str(system), str(system)], str(user / "sub"))
    names = [i.get_str("name") for i in root.sons[0].find_all("item")]
    assert names == ["A", "B"]


def test_build_system_menu_empty(tmp_path):
    root = build_system_menu([str(tmp_path / "none")], str(tmp_path / "none2"))
    assert root.sons == []
    assert len(MAIN_CATS) == len({c.name for c in MAIN_CATS})


def test_dir_changed(tmp_path):
    apps = tmp_path / "applications"
    apps.mkdir()
    desktop = apps / "a.desktop"
    desktop.write_text("x")
    os.utime(desktop, (1000, 1000))
    os.utime(apps, (1000, 1000))
    assert dir_changed(str(apps), 2000) is False
    os.utime(desktop, (3000, 3000))
    assert dir_changed(str(apps), 2000) is True
    assert dir_changed(str(tmp_path / "missing"), 0) is False


def test_dir_changed_ignores_other_files(tmp_path):
    apps = tmp_path / "applications"
    apps.mkdir()
    other = apps / "readme.txt"
    other.write_text("x")
    os.utime(other, (3000, 3000))
    os.utime(apps, (1000, 1000))
    assert dir_changed(str(apps), 2000) is False


def test_systemmenu_changed(tmp_path):
    system = tmp_path / "sys"
    user = tmp_path / "user"
    path = write_app(system, "a.desktop", "Name=A\nExec=a\nCategories=Game;\n")
    os.utime(path, (1000, 1000))
    os.utime(system / "applications", (1000, 1000))
    assert systemmenu_changed(2000, [str(system)], str(user)) is False
    user_path = write_app(user, "b.desktop", "Name=B\n")
    os.utime(user_path, (3000, 3000))
    assert systemmenu_changed(2000, [str(system)], str(user)) is True