"""Reader for the Java ``.properties`` text format used by ``repo.properties``."""

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Join physical lines ending in an odd number of backslashes."""
    pending: str | None = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if pending is None:
            stripped = line.lstrip(_WHITESPACE)
            if not stripped or stripped[0] in "#!":
                continue
            line = stripped
        else:
            line = pending + line.lstrip(_WHITESPACE)

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue
        pending = None
        yield line

    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    result: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 >= len(text):
            result.append(char)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                result.append(chr(int(text[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        result.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(result)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into an insertion-ordered mapping.

    Later duplicate keys override earlier ones but keep their first position.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(_LINE_BREAK.split(text)):
        key, value = _split_entry(line)
        properties[key] = value
    return properties


def read_properties(path: Path) -> dict[str, str]:
    """Read a properties file (ISO-8859-1, as the format prescribes)."""
    return parse_properties(path.read_text(encoding="iso-8859-1"))
