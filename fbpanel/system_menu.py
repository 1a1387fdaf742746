"""Application menu generated from installed ``.desktop`` files."""

from __future__ import annotations

import gettext
import os
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .xconf import XConf

__all__ = [
    "Category",
    "MAIN_CATS",
    "read_desktop_entry",
    "build_system_menu",
    "dir_changed",
    "systemmenu_changed",
]

DESKTOP_ENTRY = "Desktop Entry"
APP_DIR_NAME = "applications"
DESKTOP_SUFFIX = ".desktop"

_ARGUMENT = re.compile(r"%.", re.DOTALL)


@dataclass(frozen=True)
class Category:
    """A main menu category: desktop-file name, icon and shown title."""

    name: str
    icon: str
    local_name: str


MAIN_CATS = (
    Category("AudioVideo", "applications-multimedia", "Audio & Video"),
    Category("Education", "applications-other", "Education"),
    Category("Game", "applications-games", "Game"),
    Category("Graphics", "applications-graphics", "Graphics"),
    Category("Network", "applications-internet", "Network"),
    Category("Office", "applications-office", "Office"),
    Category("Settings", "preferences-system", "Settings"),
    Category("System", "applications-system", "System"),
    Category("Utility", "applications-utilities", "Utilities"),
    Category("Development", "applications-development", "Development"),
)

_ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}


def _unescape(text: str, list_sep: bool = False) -> str:
    out = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
        elif list_sep and nxt == ";":
            out.append(";")
        else:
            out.append("\\" + nxt)
    return "".join(out)


def _split_list(text: str) -> list[str]:
    pieces: list[str] = []
    current: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            current.append(ch + next(chars, ""))
        elif ch == ";":
            pieces.append("".join(current))
            current = []
        else:
            current.append(ch)
    if current:
        pieces.append("".join(current))
    return [_unescape(p, list_sep=True) for p in pieces]


def _parse_key_file(text: str) -> dict[str, dict[str, str]]:
    groups: dict[str, dict[str, str]] = {}
    current: Optional[dict[str, str]] = None
    for raw in text.splitlines():
        line = raw.lstrip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("["):
            end = line.find("]")
            name = line[1:end] if end > 0 else line[1:]
            current = groups.setdefault(name, {})
            continue
        if current is None or "=" not in line:
            continue
        key, value = line.split("=", 1)
        current[key.rstrip()] = value.lstrip()
    return groups


def _language_names() -> list[str]:
    for var in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            names = [v for v in value.split(":") if v] if var == "LANGUAGE" else [value]
            break
    else:
        return []
    variants: list[str] = []
    for name in names:
        if name in ("C", "POSIX"):
            continue
        modifier = ""
        if "@" in name:
            name, modifier = name.split("@", 1)
            modifier = "@" + modifier
        name = name.split(".", 1)[0]
        lang = name.split("_", 1)[0]
        for candidate in (name + modifier, name, lang + modifier, lang):
            if candidate and candidate not in variants:
                variants.append(candidate)
    return variants


def _locale_string(group: dict[str, str], key: str) -> Optional[str]:
    for lang in _language_names():
        value = group.get(f"{key}[{lang}]")
        if value is not None:
            return _unescape(value)
    value = group.get(key)
    return None if value is None else _unescape(value)


def read_desktop_entry(path) -> Optional[dict]:
    """Read a ``.desktop`` file for the menu.

    Returns a dict with ``name``, ``icon``, ``action`` and ``categories``,
    or None if the file is unreadable or should not be shown.
    """
    try:
        with open(path, encoding="utf-8") as fp:
            groups = _parse_key_file(fp.read())
    except (OSError, UnicodeDecodeError):
        return None
    group = groups.get(DESKTOP_ENTRY)
    if group is None:
        return None
    if group.get("NoDisplay", "").strip() in ("true", "1"):
        return None
    if "OnlyShowIn" in group:
        return None
    if "Exec" not in group or "Categories" not in group:
        return None
    name = _locale_string(group, "Name")
    if name is None:
        return None
    # Program arguments such as %U are dropped.
    action = _ARGUMENT.sub("  ", _unescape(group["Exec"]))
    icon = group.get("Icon")
    if icon is not None:
        icon = _unescape(icon)
        if not icon.startswith("/"):
            stem, dot, ext = icon.rpartition(".")
            if dot and ext.lower() in ("png", "svg"):
                icon = stem
    return {
        "name": name,
        "icon": icon,
        "action": action,
        "categories": _split_list(group["Categories"]),
    }


def _system_data_dirs() -> list[str]:
    value = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share/:/usr/share/"
    return [d for d in value.split(":") if d]


def _user_data_dir() -> str:
    return os.environ.get("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share")


def _add_entry(categories: dict[str, XConf], entry: dict) -> None:
    target = next((categories[c] for c in entry["categories"] if c in categories), None)
    if target is None:
        return
    item = XConf("item")
    target.append(item)
    icon = entry["icon"]
    if icon:
        item.append(XConf("image" if icon.startswith("/") else "icon", icon))
    item.append(XConf("name", entry["name"]))
    item.append(XConf("action", entry["action"]))


def _scan_apps(categories: dict[str, XConf], path: str) -> None:
    try:
        names = sorted(os.listdir(path))
    except OSError:
        return
    for name in names:
        full = os.path.join(path, name)
        if os.path.isdir(full):
            _scan_apps(categories, full)
        elif name.endswith(DESKTOP_SUFFIX):
            entry = read_desktop_entry(full)
            if entry is not None:
                _add_entry(categories, entry)


def _name_key(node: XConf) -> tuple[bool, str]:
    name = node.get_str("name")
    return (name is not None, name or "")


def build_system_menu(data_dirs: Optional[Iterable[str]] = None,
                      user_data_dir: Optional[str] = None) -> XConf:
    """Build a ``systemmenu`` node with one sorted menu per non-empty category."""
    if data_dirs is None:
        data_dirs = _system_data_dirs()
    if user_data_dir is None:
        user_data_dir = _user_data_dir()
    root = XConf("systemmenu")
    categories: dict[str, XConf] = {}
    for cat in MAIN_CATS:
        menu = XConf("menu")
        root.append(menu)
        menu.append(XConf("name", gettext.gettext(cat.local_name)))
        menu.append(XConf("icon", cat.icon))
        categories[cat.name] = menu

    visited: set[str] = set()
    for directory in [*data_dirs, user_data_dir]:
        if directory in visited:
            continue
        visited.add(directory)
        _scan_apps(categories, os.path.join(directory, APP_DIR_NAME))

    for menu in list(root.sons):
        if menu.find("item") is None:
            menu.unlink()
    root.sons.sort(key=_name_key)
    for menu in root.sons:
        menu.sons.sort(key=_name_key)
    return root


def dir_changed(path, btime: float) -> bool:
    """True if *path* or any ``.desktop`` file below it is newer than *btime*."""
    try:
        if os.stat(path).st_mtime > btime:
            return True
        names = sorted(os.listdir(path))
    except OSError:
        return False
    for name in names:
        full = os.path.join(path, name)
        if os.path.isdir(full):
            if dir_changed(full, btime):
                return True
        elif name.endswith(DESKTOP_SUFFIX):
            try:
                if os.stat(full).st_mtime > btime:
                    return True
            except OSError:
                continue
    return False


def systemmenu_changed(btime: float, data_dirs: Optional[Iterable[str]] = None,
                       user_data_dir: Optional[str] = None) -> bool:
    """True if any application directory changed after *btime*."""
    if data_dirs is None:
        data_dirs = _system_data_dirs()
    if user_data_dir is None:
        user_data_dir = _user_data_dir()
    return any(dir_changed(os.path.join(d, APP_DIR_NAME), btime)
               for d in [*data_dirs, user_data_dir])