"""Digital clock drawn from a strip of digit glyphs."""

from __future__ import annotations

import enum
import logging
from datetime import datetime
from typing import NamedTuple, Optional

from .chart import Orientation
from .xconf import XConfEnum

__all__ = ["HoursView", "DClock", "Glyph", "recolor_glyphs", "parse_color"]

log = logging.getLogger(__name__)

TOOLTIP_FMT = "%A %x"
CLOCK_24H_FMT = "%R"
CLOCK_24H_SEC_FMT = "%T"
CLOCK_12H_FMT = "%I:%M"
CLOCK_12H_SEC_FMT = "%I:%M:%S"

COLON_WIDTH = 7
COLON_HEIGHT = 5
VCOLON_WIDTH = 10
VCOLON_HEIGHT = 6
DIGIT_WIDTH = 11
DIGIT_HEIGHT = 15
SHADOW = 2
GLYPH_STRIDE = 20
COLON_GLYPH = 10


class HoursView(enum.IntEnum):
    H24 = 0
    H12 = 1


HOURS_VIEW_ENUM = (XConfEnum("24", HoursView.H24), XConfEnum("12", HoursView.H12))
_BOOL_ENUM = (XConfEnum("false", 0), XConfEnum("true", 1))

_NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
    "gray": 0xBEBEBE,
    "grey": 0xBEBEBE,
    "orange": 0xFFA500,
    "violet": 0xEE82EE,
    "darkblue": 0x00008B,
}


def _hex_component(digits: str) -> int:
    bits = 4 * len(digits)
    value = int(digits, 16) << (16 - bits)
    while bits < 16:
        value |= value >> bits
        bits *= 2
    return (value & 0xFFFF) >> 8


def parse_color(text: str) -> Optional[int]:
    """Parse ``#rgb``-style or a basic colour name to 0xRRGGBB; None if invalid."""
    text = text.strip()
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) not in (3, 6, 9, 12):
            return None
        try:
            int(digits, 16)
        except ValueError:
            return None
        n = len(digits) // 3
        r, g, b = (_hex_component(digits[i * n:(i + 1) * n]) for i in range(3))
        return r << 16 | g << 8 | b
    return _NAMED_COLORS.get(text.replace(" ", "").lower())


def recolor_glyphs(pixels: bytearray, width: int, height: int,
                   rowstride: int, color: int) -> bytearray:
    """Paint every visible, non-black RGBA pixel in *color*, in place."""
    r = (color >> 16) & 0xFF
    g = (color >> 8) & 0xFF
    b = color & 0xFF
    for row in range(height):
        start = row * rowstride
        for p in range(start, start + 4 * width, 4):
            if pixels[p + 3] == 0 or not (pixels[p] or pixels[p + 1] or pixels[p + 2]):
                continue
            pixels[p:p + 3] = bytes((r, g, b))
    return pixels


class Glyph(NamedTuple):
    """Copy ``width`` x ``height`` from ``src_x`` of the strip to ``(x, y)``."""

    char: str
    src_x: int
    width: int
    height: int
    x: int
    y: int


class DClock:
    """Clock settings plus the layout of its glyphs."""

    def __init__(self, show_seconds: bool = False,
                 hours_view: HoursView = HoursView.H24,
                 tooltip_fmt: str = TOOLTIP_FMT, action: Optional[str] = None,
                 color: Optional[int] = None,
                 orientation: Orientation = Orientation.HORIZONTAL,
                 panel_width: int = 0):
        self.show_seconds = show_seconds
        self.hours_view = HoursView(hours_view)
        self.tooltip_fmt = tooltip_fmt
        self.action = action
        self.color = color
        self.orientation = orientation
        self.calendar_open = False
        # A vertical panel wide enough for the horizontal clock uses that.
        if orientation is Orientation.VERTICAL and self._horizontal_size()[0] < panel_width:
            self.orientation = Orientation.HORIZONTAL

    @staticmethod
    def from_config(xc, orientation: Orientation = Orientation.HORIZONTAL,
                    panel_width: int = 0) -> "DClock":
        if xc.find("ClockFmt") is not None:
            log.error(
                "dclock: ClockFmt option is deprecated. Please use\n"
                "following options instead\n"
                "  ShowSeconds = false | true\n"
                "  HoursView = 12 | 24\n"
            )
            xc.find("ClockFmt").unlink()
        color = None
        color_str = xc.get_str("Color")
        if color_str is not None:
            color = parse_color(color_str)
        return DClock(
            show_seconds=bool(xc.get_enum("ShowSeconds", _BOOL_ENUM, 0)),
            hours_view=HoursView(xc.get_enum("HoursView", HOURS_VIEW_ENUM, HoursView.H24)),
            tooltip_fmt=xc.get_str("TooltipFmt", TOOLTIP_FMT),
            action=xc.get_str("Action"),
            color=color,
            orientation=orientation,
            panel_width=panel_width,
        )

    @property
    def clock_fmt(self) -> str:
        if self.hours_view is HoursView.H24:
            return CLOCK_24H_SEC_FMT if self.show_seconds else CLOCK_24H_FMT
        return CLOCK_12H_SEC_FMT if self.show_seconds else CLOCK_12H_FMT

    def _horizontal_size(self) -> tuple[int, int]:
        width = SHADOW + COLON_WIDTH + 4 * DIGIT_WIDTH
        height = SHADOW + DIGIT_HEIGHT
        if self.show_seconds:
            width += COLON_WIDTH + 2 * DIGIT_WIDTH
        return width, height

    def canvas_size(self) -> tuple[int, int]:
        """Width and height of the image the clock is drawn into."""
        if self.orientation is Orientation.HORIZONTAL:
            return self._horizontal_size()
        width = SHADOW + 2 * DIGIT_WIDTH
        height = SHADOW + 2 * DIGIT_HEIGHT + VCOLON_HEIGHT
        if self.show_seconds:
            height += VCOLON_HEIGHT + DIGIT_HEIGHT
        return width, height

    def layout(self, text: str) -> list[Glyph]:
        """Place the glyphs for *text*; characters other than digits and ':' are skipped."""
        glyphs: list[Glyph] = []
        x = y = SHADOW
        for ch in text:
            if ch.isascii() and ch.isdigit():
                glyphs.append(Glyph(ch, int(ch) * GLYPH_STRIDE, DIGIT_WIDTH,
                                    DIGIT_HEIGHT, x, y))
                x += DIGIT_WIDTH
            elif ch == ":":
                src = COLON_GLYPH * GLYPH_STRIDE
                if self.orientation is Orientation.HORIZONTAL:
                    glyphs.append(Glyph(ch, src, COLON_WIDTH, DIGIT_HEIGHT - 2, x, y + 2))
                    x += COLON_WIDTH
                else:
                    x = SHADOW
                    y += DIGIT_HEIGHT
                    glyphs.append(Glyph(ch, src, VCOLON_WIDTH, VCOLON_HEIGHT,
                                        x + DIGIT_WIDTH // 2, y))
                    y += VCOLON_HEIGHT
            else:
                log.error("dclock: got %s while expecting for digit or ':'", ch)
        return glyphs

    def render_text(self, when: Optional[datetime] = None) -> str:
        """The clock text for *when* (default: now)."""
        when = when if when is not None else datetime.now()
        return when.strftime(self.clock_fmt) or "  :  "

    def tooltip(self, when: Optional[datetime] = None) -> Optional[str]:
        """The tooltip text, or None while the calendar is shown."""
        if self.calendar_open:
            return None
        when = when if when is not None else datetime.now()
        return when.strftime(self.tooltip_fmt) or None