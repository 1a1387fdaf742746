"""The panel menu: configuration expansion and the resulting menu tree."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from . import xconf
from .run import run_app
from .xconf import XConf

__all__ = [
    "MENU_DEFAULT_ICON_SIZE",
    "MenuItem",
    "Menu",
    "MenuModel",
    "expand_config",
    "build_menu",
]

log = logging.getLogger(__name__)

MENU_DEFAULT_ICON_SIZE = 22
CHECK_INTERVAL = 30.0
REBUILD_DELAY = 2.0


def _expand_tilde(path: Optional[str]) -> Optional[str]:
    if path is None or not path.startswith("~"):
        return path
    return os.path.expanduser("~") + path[1:]


def _default_system_menu() -> XConf:
    from .system_menu import build_system_menu
    return build_system_menu()


@dataclass
class MenuItem:
    """One entry: a separator, a command to run or a sub-menu."""

    name: str = ""
    image: Optional[str] = None
    icon: Optional[str] = None
    action: Optional[str] = None
    submenu: Optional["Menu"] = None
    separator: bool = False


@dataclass
class Menu:
    """An ordered list of menu items with a common icon size."""

    items: list[MenuItem] = field(default_factory=list)
    icon_size: int = MENU_DEFAULT_ICON_SIZE


def expand_config(xc: Optional[XConf],
                  system_menu: Optional[Callable[[], XConf]] = None
                  ) -> tuple[Optional[XConf], bool]:
    """Copy *xc*, replacing ``systemmenu`` and ``include`` entries.

    Returns the copy and whether a system menu was inserted.
    """
    if xc is None:
        return None, False
    if system_menu is None:
        system_menu = _default_system_menu
    has_system_menu = False

    def expand(node: XConf) -> XConf:
        nonlocal has_system_menu
        copy = XConf(node.name, node.value)
        for son in node.sons:
            if son.name == "systemmenu":
                copy.append_sons(system_menu())
                has_system_menu = True
            elif son.name == "include":
                copy.append_sons(xconf.load(son.value, "include") if son.value else None)
            else:
                copy.append(expand(son))
        return copy

    return expand(xc), has_system_menu


def _make_item(xc: XConf, submenu: Optional[Menu]) -> MenuItem:
    item = MenuItem(
        name=xc.get_str("name") or "",
        image=_expand_tilde(xc.get_str("image")),
        icon=xc.get_str("icon"),
    )
    if submenu is not None:
        item.submenu = submenu
    else:
        item.action = _expand_tilde(xc.get_str("action"))
    return item


def build_menu(xc: Optional[XConf], icon_size: int = MENU_DEFAULT_ICON_SIZE) -> Optional[Menu]:
    """Build the menu tree from ``separator``, ``item`` and ``menu`` nodes."""
    if xc is None:
        return None
    menu = Menu(icon_size=icon_size)
    for son in xc.sons:
        if son.name == "separator":
            menu.items.append(MenuItem(separator=True))
        elif son.name == "item":
            menu.items.append(_make_item(son, None))
        elif son.name == "menu":
            menu.items.append(_make_item(son, build_menu(son, icon_size)))
    return menu


@dataclass
class MenuModel:
    """The menu plugin's state: button, expanded configuration and menu."""

    xc: XConf
    expanded: Optional[XConf]
    menu: Optional[Menu]
    has_system_menu: bool = False
    icon_size: int = MENU_DEFAULT_ICON_SIZE
    btime: float = 0.0
    button_image: Optional[str] = None
    button_icon: Optional[str] = None

    @staticmethod
    def from_config(xc: XConf,
                    system_menu: Optional[Callable[[], XConf]] = None) -> "MenuModel":
        icon_size = xc.get_int("iconsize", MENU_DEFAULT_ICON_SIZE)
        expanded, has_system_menu = expand_config(xc, system_menu)
        return MenuModel(
            xc=xc,
            expanded=expanded,
            menu=build_menu(expanded, icon_size),
            has_system_menu=has_system_menu,
            icon_size=icon_size,
            btime=time.time(),
            button_image=_expand_tilde(xc.get_str("image")),
            button_icon=xc.get_str("icon"),
        )

    def activate(self, item: MenuItem):
        """Run the item's action; returns the started process or None."""
        if item.action is None:
            return None
        return run_app(item.action)

    def needs_rebuild(self, changed: Optional[Callable[[float], bool]] = None) -> bool:
        """True if the menu holds a system menu that changed since it was built."""
        if not self.has_system_menu:
            return False
        if changed is None:
            from .system_menu import systemmenu_changed
            changed = systemmenu_changed
        return bool(changed(self.btime))