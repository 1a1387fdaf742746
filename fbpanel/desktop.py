"""Desktop number indicator and switcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

__all__ = ["DesktopSwitcher", "wrap_desktop", "desktop_labels"]


def wrap_desktop(current: int, delta: int, count: int) -> int:
    """Desktop reached from *current* by *delta*, wrapping at both ends."""
    new = current + delta
    if new < 0:
        return count - 1
    if new >= count:
        return 0
    return new


def desktop_labels(count: int, names: Sequence[str] = ()) -> list[str]:
    """Labels for *count* desktops: given names first, then numbers."""
    labels = list(names[:count])
    labels.extend(str(i + 1) for i in range(len(labels), count))
    return labels


@dataclass
class DesktopSwitcher:
    """Current desktop, number of desktops and their names.

    *request* is called with the desktop number to switch to.
    """

    current: int = 0
    count: int = 1
    names: Sequence[str] = ()
    request: Optional[Callable[[int], None]] = field(default=None, repr=False)

    def change(self, delta: int) -> int:
        """Ask to move *delta* desktops; return the desktop asked for."""
        target = wrap_desktop(self.current, delta, self.count)
        if self.request is not None:
            self.request(target)
        return target

    def label(self) -> str:
        return desktop_labels(self.count, self.names)[self.current]

    def markup(self) -> str:
        return f"<b>{self.current + 1}</b>"