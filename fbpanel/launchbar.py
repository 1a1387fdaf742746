"""Launchbar: a bar of buttons that start applications."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import unquote, urlsplit

from .xconf import XConf

__all__ = [
    "MAXBUTTONS",
    "LaunchButton",
    "Launchbar",
    "uri_list_command",
    "moz_url_command",
]

log = logging.getLogger(__name__)

MAXBUTTONS = 20
_URI_SEPARATORS = "\n \t\r"


def _expand_tilde(path: Optional[str]) -> Optional[str]:
    if path is None or not path.startswith("~"):
        return path
    return os.path.expanduser("~") + path[1:]


def _filename_from_uri(uri: str) -> Optional[str]:
    """Return the local file name of a ``file:`` URI, or None."""
    try:
        parts = urlsplit(uri)
    except ValueError:
        return None
    if parts.scheme.lower() != "file" or parts.query or parts.fragment:
        return None
    path = unquote(parts.path)
    if not path.startswith("/"):
        return None
    return path


@dataclass
class LaunchButton:
    """One launcher: what it shows and the command it runs."""

    action: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None
    tooltip: Optional[str] = None


@dataclass
class Launchbar:
    """An ordered collection of at most :data:`MAXBUTTONS` launchers."""

    icon_size: int
    buttons: list[LaunchButton] = field(default_factory=list)

    @staticmethod
    def from_config(xc: XConf, icon_size: int) -> "Launchbar":
        """Build a launchbar from the ``button`` blocks of *xc*."""
        bar = Launchbar(icon_size)
        for node in xc.find_all("button"):
            bar.add_button(node)
        return bar

    def add_button(self, xc: XConf) -> bool:
        """Add a launcher described by *xc*; False once the bar is full."""
        if len(self.buttons) >= MAXBUTTONS:
            log.error("launchbar: max number of buttons (%d) was reached."
                      "skipping the rest", len(self.buttons))
            return False
        self.buttons.append(LaunchButton(
            action=_expand_tilde(xc.get_str("action")),
            image=_expand_tilde(xc.get_str("image")),
            icon=xc.get_str("icon"),
            tooltip=xc.get_str("tooltip"),
        ))
        return True

    def dimension(self, width: int, height: int, horizontal: bool) -> int:
        """Number of icon rows (or columns) that fit in the allocation."""
        if self.icon_size <= 0:
            raise ValueError(f"launchbar: bad icon size {self.icon_size}")
        return (height if horizontal else width) // self.icon_size


def uri_list_command(action: Optional[str], data: str) -> Optional[str]:
    """Command line for a dropped ``text/uri-list``; None if *data* is empty.

    Each URI is appended quoted; ``file:`` URIs are replaced by file names.
    """
    if not data:
        return None
    command = str(action)
    tokens = data
    for sep in _URI_SEPARATORS[1:]:
        tokens = tokens.replace(sep, _URI_SEPARATORS[0])
    for token in tokens.split(_URI_SEPARATORS[0]):
        if not token:
            continue
        name = _filename_from_uri(token)
        command = f"{command} '{name if name is not None else token}'"
    return command


def moz_url_command(action: Optional[str], data: bytes) -> Optional[str]:
    """Command line for a dropped ``text/x-moz-url`` (UTF-16 URL and title).

    Returns None if *data* is empty; raises ValueError if it is not valid.
    """
    if not data:
        return None
    data = data[:len(data) - len(data) % 2]
    try:
        text = data.decode("utf-16-le")
    except UnicodeDecodeError:
        text = None
    if text is not None:
        text = text.split("\x00", 1)[0]
    if text is None or "\n" not in text:
        raise ValueError("Invalid UTF16 from text/x-moz-url target")
    return f"{action} {text.split(chr(10), 1)[0]}"