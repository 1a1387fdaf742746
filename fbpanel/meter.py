"""A meter that shows a level as one icon out of a series."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Sequence

__all__ = ["Meter"]


class Meter:
    """Chooses an icon from an ordered series according to a 0..100 level.

    *load_icon*, if given, is called with an icon name and the size whenever
    the shown icon changes and its result is kept in :attr:`image`; without
    it the icon name itself is kept.
    """

    def __init__(self, size: int = 0,
                 load_icon: Optional[Callable[[str, int], Any]] = None):
        self.size = size
        self.load_icon = load_icon
        self.icons: tuple[str, ...] = ()
        self.level: float = 0
        self.cur_icon = -1
        self.image: Optional[Any] = None

    @property
    def num(self) -> int:
        return len(self.icons)

    def set_icons(self, icons: Sequence[str]) -> None:
        """Use a new icon series; the level must be set again afterwards."""
        icons = tuple(icons)
        if icons == self.icons:
            return
        self.icons = icons
        self.cur_icon = -1
        self.level = -1

    def set_level(self, level: int) -> None:
        """Show the icon for a per cent *level* between 0 and 100."""
        if self.level == level or not self.num:
            return
        if level < 0 or level > 100:
            raise ValueError(f"meter: illegal level {level}")
        index = math.floor(level / 100 * (self.num - 1) + 0.5)
        if index != self.cur_icon:
            self.cur_icon = index
            name = self.icons[index]
            if self.load_icon is None:
                self.image = name
            else:
                self.image = self.load_icon(name, self.size)
        self.level = level

    def update_view(self) -> None:
        """Forget the shown icon so that the next level change reloads it."""
        self.cur_icon = -1
        self.set_level(self.level)