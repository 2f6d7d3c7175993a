"""Line classification for Dolphin-style INI files.

Every physical line falls into one of three buckets:
- a section header (`[name]`),
- a key/value pair (`key = value`),
- a raw passthrough line (blank, `#` comment, or a `$` / `+` / `*` directive).

These helpers are stateless; `IniFile.load` drives them.
"""

from __future__ import annotations

import re

# Decoded UTF-8 byte-order mark, and the same three bytes read as latin-1.
BOM = "\ufeff"
BOM_MISDECODED = "\xef\xbb\xbf"

# Lines starting with one of these are code-block directives (Gecko / Action
# Replay) and are never decomposed into key/value pairs.
RAW_PREFIXES = ("$", "+", "*")

_WHITESPACE_RE = re.compile(r"\s+")
_QUOTES_RE = re.compile(r"['\"]+")


def parse_line(line: str) -> tuple[str, str] | tuple[None, None]:
    """Split `line` into a normalized `(key, value)` pair.

    Returns `(None, None)` for blank lines and `#` comments. A line without
    `=` yields the degenerate pair `("", "")`, which callers still treat as a
    pair.
    """

    if line == "" or line[0] == "#":
        return None, None

    key = ""
    value = ""
    first_equals = line.find("=")
    if first_equals != -1:
        key = _WHITESPACE_RE.sub("", line[:first_equals])
        value = _QUOTES_RE.sub("", _WHITESPACE_RE.sub("", line[first_equals + 1 :]))
    return key, value


def parse_section_header(line: str) -> str | None:
    """Return the section name for a `[name]` line, else None.

    The name is everything between the leading `[` and the first `]`. Trailing
    text after the bracket is ignored; a header with no `]` is not a header.
    """

    if not line.startswith("["):
        return None
    end = line.find("]")
    if end == -1:
        return None
    return line[1:end]


def is_raw_directive(line: str) -> bool:
    return line != "" and line[0] in RAW_PREFIXES


def strip_bom(line: str) -> str:
    if line.startswith(BOM):
        return line[len(BOM) :]
    if line.startswith(BOM_MISDECODED):
        return line[len(BOM_MISDECODED) :]
    return line


def strip_newline(line: str) -> str:
    return line.rstrip("\r\n")
