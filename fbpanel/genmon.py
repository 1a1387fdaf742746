"""Generic monitor: shows the first output line of a shell command."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Optional

__all__ = ["GenMon"]

log = logging.getLogger(__name__)

_MAX_LINE = 255


def _escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("'", "&#39;")
        .replace('"', "&quot;")
    )


@dataclass
class GenMon:
    """Settings of a generic monitor and the label it currently shows."""

    command: str = "date +%R"
    time: int = 1
    textsize: str = "medium"
    textcolor: str = "darkblue"
    max_text_len: int = 30
    label: Optional[str] = field(default=None, init=False)

    @staticmethod
    def from_config(xc) -> "GenMon":
        gm = GenMon()
        gm.command = xc.get_str("Command", gm.command)
        gm.textsize = xc.get_str("TextSize", gm.textsize)
        gm.textcolor = xc.get_str("TextColor", gm.textcolor)
        gm.time = xc.get_int("PollingTime", gm.time)
        gm.max_text_len = xc.get_int("MaxTextLength", gm.max_text_len)
        return gm

    @property
    def interval(self) -> float:
        """Polling interval in seconds."""
        return float(self.time)

    def markup(self, text: str) -> str:
        return (
            f"<span size='{_escape(self.textsize)}' "
            f"foreground='{_escape(self.textcolor)}'>{_escape(text)}</span>"
        )

    def update(self) -> bool:
        """Run the command and show its first line; True to keep polling."""
        try:
            result = subprocess.run(self.command, shell=True,
                                    stdout=subprocess.PIPE, check=False)
        except OSError as exc:
            log.error("genmon: can't run %s: %s", self.command, exc)
            return True
        line = result.stdout.decode(errors="replace")[:_MAX_LINE]
        newline = line.find("\n")
        if newline >= 0:
            line = line[:newline + 1]
        if not line:
            return True
        if line.endswith("\n"):
            line = line[:-1]
        self.label = self.markup(line)
        return True