"""Gecko code blocks as stored in the raw lines of an INI section.

    [Gecko]
    $Name [Creator]
    *note
    04001234 60000000

A `+$Name` header is the legacy spelling of an enabled code. Blank lines and
`#` comments inside the block are ignored.
"""

from __future__ import annotations

import re
from typing import Iterable

from dolphin_ini.core.errors import GeckoCodeError

from .model import GeckoCode, GeckoCodeLine


_HEX_WORD_RE = re.compile(r"^[0-9A-Fa-f]{8}$")


def parse_code_line(line: str, *, strict: bool = False) -> GeckoCodeLine:
    parts = line.split()
    if len(parts) == 2 and all(_HEX_WORD_RE.match(p) for p in parts):
        return GeckoCodeLine(text=line, address=parts[0].upper(), data=parts[1].upper())
    if strict:
        raise GeckoCodeError("expected two 8-digit hex words", line=line)
    return GeckoCodeLine(text=line)


def parse_header(line: str) -> GeckoCode:
    """Build an empty code from a `$Name [Creator]` or `+$Name` header."""

    enabled = line.startswith("+")
    body = line[2:] if enabled else line[1:]
    name, bracket, rest = body.partition("[")
    creator = rest.split("]", 1)[0].strip() if bracket else None
    return GeckoCode(name=name.strip(), creator=creator or None, enabled=enabled, default_enabled=enabled)


def parse_gecko_lines(lines: Iterable[str], *, strict: bool = False) -> list[GeckoCode]:
    codes: list[GeckoCode] = []
    current: GeckoCode | None = None

    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("$") or line.startswith("+$"):
            current = parse_header(line)
            codes.append(current)
        elif current is None:
            # Body lines before the first header belong to no code.
            continue
        elif line.startswith("*"):
            current.notes.append(line[1:])
        else:
            current.code_lines.append(parse_code_line(line, strict=strict))

    return codes


def parse_name_list(lines: Iterable[str]) -> list[str]:
    """Names from a `[Gecko_Enabled]` / `[Gecko_Disabled]` section."""

    names: list[str] = []
    for raw in lines:
        line = raw.strip()
        if line.startswith("$"):
            names.append(line[1:].strip())
    return names


def code_to_lines(code: GeckoCode) -> list[str]:
    header = f"${code.name}"
    if code.creator:
        header += f" [{code.creator}]"
    out = [header]
    out.extend(f"*{note}" for note in code.notes)
    out.extend(line.text for line in code.code_lines)
    return out
