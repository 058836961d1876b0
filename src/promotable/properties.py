"""Properties-file parser and serializer.

Output follows the classic ``key=value`` store format: ISO-8859-1 text with
every character outside printable ASCII written as a ``\\uXXXX`` escape.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from pathlib import Path

from promotable.errors import PersistenceError, PropertiesFormatError

ENCODING = "latin-1"

_SPECIAL = {"=": "\\=", ":": "\\:", "#": "\\#", "!": "\\!"}
_CONTROL = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_UNESCAPE = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def serialize_properties(
    properties: Mapping[str, str],
    comments: str | None = None,
    *,
    timestamp: datetime | None = None,
) -> str:
    lines: list[str] = []
    if comments is not None:
        lines.extend("#" + _escape_unicode(line) for line in _LINE_BREAK.split(comments))
    stamp = timestamp if timestamp is not None else datetime.now().astimezone()
    lines.append("#" + _format_timestamp(stamp))
    for key, value in properties.items():
        lines.append(f"{_escape(key, escape_space=True)}={_escape(value, escape_space=False)}")
    return "\n".join(lines) + "\n"


def parse_properties(raw: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for line in _logical_lines(_LINE_BREAK.split(raw)):
        key, value = _split_entry(line)
        parsed[_unescape(key)] = _unescape(value)
    return parsed


def read_properties(path: str | Path) -> dict[str, str]:
    properties_path = Path(path)
    try:
        raw = properties_path.read_text(encoding=ENCODING)
    except OSError as exc:
        raise PersistenceError(
            "Error reading artifacts from file.",
            context={"path": str(properties_path), "cause": str(exc)},
        ) from exc
    return parse_properties(raw)


def write_properties(
    properties: Mapping[str, str],
    path: str | Path,
    comments: str | None = None,
    *,
    timestamp: datetime | None = None,
) -> Path:
    properties_path = Path(path)
    encoded = serialize_properties(properties, comments, timestamp=timestamp)
    try:
        properties_path.write_text(encoded, encoding=ENCODING)
    except OSError as exc:
        raise PersistenceError(
            "Error writing artifacts to file.",
            context={"path": str(properties_path), "cause": str(exc)},
        ) from exc
    return properties_path


def _format_timestamp(stamp: datetime) -> str:
    if stamp.tzname() is None:
        return stamp.strftime("%a %b %d %H:%M:%S %Y")
    return stamp.strftime("%a %b %d %H:%M:%S %Z %Y")


def _escape(text: str, *, escape_space: bool) -> str:
    out: list[str] = []
    for index, char in enumerate(text):
        if char == " ":
            out.append("\\ " if index == 0 or escape_space else " ")
        elif char in _CONTROL:
            out.append(_CONTROL[char])
        elif char in _SPECIAL:
            out.append(_SPECIAL[char])
        else:
            out.append(_escape_unicode(char))
    return "".join(out)


def _escape_unicode(text: str) -> str:
    out: list[str] = []
    for char in text:
        if 0x20 <= ord(char) <= 0x7E:
            out.append(char)
            continue
        # astral characters become a surrogate pair, lone surrogates pass through
        units = char.encode("utf-16-be", "surrogatepass").hex().upper()
        out.extend(f"\\u{units[i : i + 4]}" for i in range(0, len(units), 4))
    return "".join(out)


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    pending: list[str] = []
    for physical in lines:
        stripped = physical.lstrip(_WHITESPACE)
        if not pending and (not stripped or stripped[0] in "#!"):
            continue
        if _continues(stripped):
            pending.append(stripped[:-1])
            continue
        pending.append(stripped)
        yield "".join(pending)
        pending = []
    if pending:
        yield "".join(pending)


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    out: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        index += 1
        if char != "\\" or index >= length:
            out.append(char)
            continue
        escaped = text[index]
        index += 1
        if escaped == "u":
            digits = text[index : index + 4]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise PropertiesFormatError(
                    "Malformed \\uxxxx encoding.",
                    context={"value": text},
                )
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_UNESCAPE.get(escaped, escaped))
    # rejoin surrogate pairs produced by astral escapes
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


__all__ = [
    "ENCODING",
    "parse_properties",
    "read_properties",
    "serialize_properties",
    "write_properties",
]
