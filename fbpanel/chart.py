"""A scrolling stacked chart of recent values, one row per series."""

from __future__ import annotations

import enum
import math
from typing import Callable, Iterator, Optional, Sequence

__all__ = ["Orientation", "Chart"]

MAX_ROWS = 9


class Orientation(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _clamp(value: float) -> float:
    if math.isnan(value) or value < 0:
        return 0.0
    if value > 1:
        return 1.0
    return float(value)


class Chart:
    """Keeps a ring of the last ``width`` ticks for each row.

    Each tick value is a fraction between 0 and 1 that is stored scaled
    to the chart height.  *queue_draw*, if given, is called whenever the
    chart needs to be redrawn.
    """

    def __init__(self, queue_draw: Optional[Callable[[], None]] = None):
        self.queue_draw = queue_draw
        self.rows = 0
        self.colors: tuple[str, ...] = ()
        self.ticks: Optional[list[list[int]]] = None
        self.pos = 0
        self.w = 0
        self.h = 0
        self.area = (0, 0, 0, 0)
        self.frame = (0, 0, 0, 0)

    def _redraw(self) -> None:
        if self.queue_draw is not None:
            self.queue_draw()

    def _alloc_ticks(self) -> None:
        if not self.w or not self.rows:
            return
        self.ticks = [[0] * self.w for _ in range(self.rows)]
        self.pos = 0

    def set_rows(self, num: int, colors: Sequence[str]) -> None:
        """Use *num* rows drawn in the given colours; clears the history."""
        if not 0 < num <= MAX_ROWS:
            raise ValueError(f"chart: number of rows must be 1..{MAX_ROWS}, got {num}")
        colors = tuple(colors[:num])
        if len(colors) < num:
            raise ValueError(f"chart: {num} rows need {num} colors")
        self.ticks = None
        self.rows = num
        self.colors = colors
        self._alloc_ticks()

    def resize(self, width: int, height: int, transparent: bool = False,
               orientation: Orientation = Orientation.HORIZONTAL) -> None:
        """Adapt to a new widget size; the history is cleared if it changed."""
        if self.w != width or self.h != height:
            self.ticks = None
            self.w = width
            self.h = height
            self._alloc_ticks()
            self.area = (0, 0, width, height)
            if transparent:
                self.frame = (0, 0, width, height)
            elif orientation is Orientation.HORIZONTAL:
                self.frame = (0, 1, width, height - 2)
            else:
                self.frame = (1, 0, width - 2, height)
        self._redraw()

    def add_tick(self, values: Sequence[float]) -> list[float]:
        """Append one tick, a fraction per row; return the clamped fractions."""
        if self.ticks is None:
            return []
        clamped = [_clamp(v) for v in values[:self.rows]]
        for row, value in zip(self.ticks, clamped):
            row[self.pos] = int(value * self.h)
        self.pos = (self.pos + 1) % self.w
        self._redraw()
        return clamped

    def lines(self) -> Iterator[tuple[int, int, int, int]]:
        """Yield the vertical lines to draw as ``(row, x, y_from, y_to)``.

        Rows are stacked bottom to top, oldest tick on the left.
        """
        if self.ticks is None:
            return
        for x in range(1, self.w - 1):
            y = self.h - 2
            for row, ticks in enumerate(self.ticks):
                val = ticks[(x + self.pos) % self.w]
                if val:
                    yield row, x, y, y - val
                y -= val