"""Tree-structured configuration used by the panel and its plugins.

The text format is a sequence of ``name = value`` lines and
``name {`` ... ``}`` blocks.  Lines starting with ``#`` are comments.
Names are compared case-insensitively.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, Optional, Sequence

__all__ = [
    "XConf",
    "XConfEnum",
    "XConfSyntaxError",
    "parse",
    "load",
    "save",
    "differs",
]

_SPACE = " \t\n\r\v\f"
# Lines are read in chunks of this many characters, newline included.
_LINE_LENGTH = 255
_INDENT = "    "


class XConfSyntaxError(ValueError):
    """Raised when a configuration line cannot be understood."""

    def __init__(self, lineno: int, token: str):
        super().__init__(f"parser: line {lineno}: unknown token: {token!r}")
        self.lineno = lineno
        self.token = token


@dataclass(frozen=True)
class XConfEnum:
    """One symbolic value of an enumerated option."""

    text: str
    num: int
    desc: str = ""


def _strtol(text: str) -> int:
    """Parse the leading integer of *text* with automatic base detection."""
    s = text.lstrip(_SPACE)
    sign = 1
    if s.startswith(("+", "-")):
        if s[0] == "-":
            sign = -1
        s = s[1:]
    if s[:2].lower() == "0x" and s[2:3] and s[2] in string.hexdigits:
        base, allowed, s = 16, string.hexdigits, s[2:]
    elif s.startswith("0"):
        base, allowed = 8, string.octdigits
    else:
        base, allowed = 10, string.digits
    digits = []
    for ch in s:
        if ch not in allowed:
            break
        digits.append(ch)
    return sign * int("".join(digits), base) if digits else 0


class XConf:
    """A configuration node: a name with either a value or child nodes."""

    def __init__(self, name: str, value: Optional[str] = None):
        self.name = name
        self.value = value
        self.sons: list[XConf] = []
        self.parent: Optional[XConf] = None

    def __repr__(self) -> str:
        return f"XConf({self.name!r}, {self.value!r}, sons={len(self.sons)})"

    def __iter__(self) -> Iterator["XConf"]:
        return iter(self.sons)

    def append(self, son: Optional["XConf"]) -> None:
        """Add *son* as the last child of this node."""
        if son is None:
            return
        son.parent = self
        self.sons.append(son)

    def append_sons(self, src: Optional["XConf"]) -> None:
        """Move all children of *src* to the end of this node's children."""
        if src is None:
            return
        for son in src.sons:
            son.parent = self
        self.sons.extend(src.sons)
        src.sons = []

    def unlink(self) -> None:
        """Detach this node from its parent, if any."""
        if self.parent is not None:
            self.parent.sons.remove(self)
            self.parent = None

    def clear(self) -> None:
        """Delete all children of this node."""
        for son in self.sons:
            son.parent = None
            son.clear()
        self.sons = []

    def set_value(self, value: Optional[str]) -> None:
        """Make this a value node holding *value*."""
        self.clear()
        self.value = value

    def set_int(self, value: int) -> None:
        self.set_value(str(int(value)))

    def get(self, name: str) -> "XConf":
        """Return the first child called *name*, creating it if missing."""
        found = self.find(name)
        if found is not None:
            return found
        node = XConf(name)
        self.append(node)
        return node

    def find(self, name: str, no: int = 0) -> Optional["XConf"]:
        """Return the *no*-th child called *name*, or None."""
        for index, son in enumerate(self.find_all(name)):
            if index == no:
                return son
        return None

    def find_all(self, name: str) -> Iterator["XConf"]:
        """Yield all children called *name*, in order."""
        wanted = name.casefold()
        for son in self.sons:
            if son.name.casefold() == wanted:
                yield son

    def get_str(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of child *name*, or *default* if it has none."""
        node = self.find(name)
        if node is None or node.value is None:
            return default
        return node.value

    def get_int(self, name: str, default: int = 0) -> int:
        """Return the value of child *name* as an integer."""
        text = self.get_str(name)
        return default if text is None else _strtol(text)

    def get_enum(self, name: str, choices: Iterable[XConfEnum], default=None):
        """Return the number of the choice matching child *name*'s value."""
        text = self.get_str(name)
        if text is None:
            return default
        wanted = text.casefold()
        for choice in choices:
            if choice.text.casefold() == wanted:
                return choice.num
        return default

    def set_enum(self, name: str, value: int, choices: Iterable[XConfEnum]) -> None:
        """Store the text of the choice numbered *value* in child *name*."""
        node = self.get(name)
        for choice in choices:
            if choice.num == value:
                node.set_value(choice.text)
                return

    def copy(self) -> "XConf":
        """Return a deep copy of this node and its sub-tree."""
        dup = XConf(self.name, self.value)
        for son in self.sons:
            dup.append(son.copy())
        return dup

    def _lines(self, indent: int, sons_only: bool) -> Iterator[str]:
        if not sons_only:
            prefix = _INDENT * indent
            if self.value is not None:
                yield f"{prefix}{self.name} = {self.value}\n"
            else:
                yield f"{prefix}{self.name} {{\n"
            indent += 1
        for son in self.sons:
            yield from son._lines(indent, False)
        if not sons_only and self.value is None:
            yield f"{_INDENT * (indent - 1)}}}\n"

    def format(self, indent: int = 0, sons_only: bool = False) -> str:
        """Render this node in the configuration text format."""
        return "".join(self._lines(indent, sons_only))

    def write(self, fp: IO[str], indent: int = 0, sons_only: bool = False) -> None:
        fp.writelines(self._lines(indent, sons_only))


_BLOCK_START = "start"
_BLOCK_END = "end"
_VAR = "var"


def _chunks(fp: Iterable[str]) -> Iterator[str]:
    for raw in fp:
        while raw:
            yield raw[:_LINE_LENGTH]
            raw = raw[_LINE_LENGTH:]


def _tokens(fp: Iterable[str]) -> Iterator[tuple[str, str, Optional[str]]]:
    for lineno, chunk in enumerate(_chunks(fp), 1):
        line = chunk.strip(_SPACE)
        if not line or line.startswith("#"):
            continue
        if line == "}":
            yield _BLOCK_END, "", None
            continue
        end = 0
        while end < len(line) and line[end].isascii() and line[end].isalnum():
            end += 1
        name = line[:end]
        rest = line[end:].lstrip(_SPACE)
        if rest.startswith("="):
            yield _VAR, name, rest[1:].lstrip(_SPACE)
        elif rest.startswith("{"):
            yield _BLOCK_START, name, None
        else:
            raise XConfSyntaxError(lineno, rest[:1])


def _read_block(tokens: Iterator[tuple[str, str, Optional[str]]], name: str) -> XConf:
    block = XConf(name)
    for kind, key, value in tokens:
        if kind == _BLOCK_START:
            block.append(_read_block(tokens, key))
        elif kind == _BLOCK_END:
            break
        else:
            block.append(XConf(key, value))
    return block


def parse(fp: Iterable[str], name: str) -> XConf:
    """Parse configuration text from *fp* into a node called *name*."""
    return _read_block(_tokens(fp), name)


def load(fname, name: str) -> Optional[XConf]:
    """Read a configuration file; return None if it cannot be opened."""
    try:
        with open(fname, encoding="utf-8") as fp:
            return parse(fp, name)
    except OSError:
        return None


def save(fname, xc: XConf) -> None:
    """Write the children of *xc* to *fname*."""
    with open(fname, "w", encoding="utf-8") as fp:
        xc.write(fp, 0, True)


def differs(a: Optional[XConf], b: Optional[XConf]) -> bool:
    """Return True if the two trees are not equivalent."""
    if a is None and b is None:
        return False
    if a is None or b is None:
        return True
    if a.name.casefold() != b.name.casefold():
        return True
    if a.value != b.value:
        return True
    if len(a.sons) != len(b.sons):
        return True
    return any(differs(x, y) for x, y in zip(a.sons, b.sons))


def _enum_table(pairs: Sequence[tuple[str, int]]) -> tuple[XConfEnum, ...]:
    return tuple(XConfEnum(text, num) for text, num in pairs)