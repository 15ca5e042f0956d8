"""Finding and parsing the ``{{#...}}`` helpers inside chapter text."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"

_LINK_RE = re.compile(
    r"""
    \\\{\{\#.*\}\}          # escaped link
    |                       # or
    \{\{\s*                 # opening braces and whitespace
    \#([a-zA-Z0-9_]+)       # link type
    \s+                     # separating whitespace
    ([^}]+)                 # target path and space separated properties
    \}\}                    # closing braces
    """,
    re.VERBOSE,
)

_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class LineRange:
    """A half-open range of zero-based line numbers; None means unbounded."""

    start: int | None = None
    end: int | None = None

    def as_slice(self) -> slice:
        """The range as a slice over a list of lines."""
        return slice(self.start, self.end)


@dataclass(frozen=True)
class Anchor:
    """A named anchor marking the lines to include."""

    name: str


class LinkKind(Enum):
    """The kind of helper a link stands for."""

    ESCAPED = "escaped"
    INCLUDE = "include"
    PLAYGROUND = "playground"
    RUSTDOC_INCLUDE = "rustdoc_include"
    TITLE = "title"


@dataclass(frozen=True)
class Link:
    """A helper found in a chapter, with its position in the text."""

    start_index: int
    end_index: int
    kind: LinkKind
    text: str
    path: str | None = None
    target: LineRange | Anchor | None = None
    properties: tuple[str, ...] = ()
    title: str | None = None


def _parse_unsigned(value: str) -> int | None:
    if _UNSIGNED.fullmatch(value) is None:
        return None
    return int(value)


def parse_range_or_anchor(parts: str | None) -> LineRange | Anchor:
    """Parse the ``start:end`` or ``anchor`` part after an included path.

    Line numbers are one-based in the text and zero-based in the result.
    """
    pieces = (parts or "").split(":", 2)
    first = pieces[0]
    second = pieces[1] if len(pieces) > 1 else None

    start_value = _parse_unsigned(first)
    if start_value is not None:
        start: int | None = max(start_value - 1, 0)
    elif first == "":
        start = None
    else:
        return Anchor(first)

    end = None if second is None else _parse_unsigned(second)

    if start is not None:
        if second is None:
            return LineRange(start, start + 1)
        return LineRange(start, end)
    if end is not None:
        return LineRange(None, end)
    return LineRange()


def _split_path(path: str) -> tuple[str, LineRange | Anchor]:
    name, sep, rest = path.partition(":")
    return name, parse_range_or_anchor(rest if sep else None)


def parse_include_path(path: str) -> tuple[str, LineRange | Anchor]:
    """Split an ``include`` argument into the file path and its line selection."""
    return _split_path(path)


def parse_rustdoc_include_path(path: str) -> tuple[str, LineRange | Anchor]:
    """Split a ``rustdoc_include`` argument into the file path and its line selection."""
    return _split_path(path)


def _from_match(match: re.Match[str]) -> Link | None:
    typ, rest = match.group(1), match.group(2)
    base = {"start_index": match.start(), "end_index": match.end(), "text": match.group(0)}

    if typ is not None and rest is not None:
        if typ == "title":
            return Link(kind=LinkKind.TITLE, title=rest, **base)
        words = rest.split()
        if not words:
            return None
        file_arg, props = words[0], tuple(words[1:])
        if typ == "include":
            path, target = parse_include_path(file_arg)
            return Link(kind=LinkKind.INCLUDE, path=path, target=target, **base)
        if typ == "rustdoc_include":
            path, target = parse_rustdoc_include_path(file_arg)
            return Link(kind=LinkKind.RUSTDOC_INCLUDE, path=path, target=target, **base)
        if typ in ("playground", "playpen"):
            if typ == "playpen":
                log.warning(
                    "the {{#playpen}} expression has been renamed to {{#playground}}, "
                    "please update your book to use the new name"
                )
            return Link(kind=LinkKind.PLAYGROUND, path=file_arg, properties=props, **base)
        return None

    if match.group(0).startswith(ESCAPE_CHAR):
        return Link(kind=LinkKind.ESCAPED, **base)
    return None


def find_links(contents: str) -> Iterator[Link]:
    """Yield every recognised helper in ``contents``, in order."""
    for match in _LINK_RE.finditer(contents):
        link = _from_match(match)
        if link is not None:
            yield link