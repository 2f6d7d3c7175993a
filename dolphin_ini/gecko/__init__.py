"""Gecko cheat codes stored in Dolphin game INIs."""

from __future__ import annotations

from dolphin_ini.gecko.codec import code_to_lines, parse_gecko_lines
from dolphin_ini.gecko.model import GeckoCode, GeckoCodeLine
from dolphin_ini.gecko.store import load_codes, save_codes

__all__ = [
    "GeckoCode",
    "GeckoCodeLine",
    "code_to_lines",
    "load_codes",
    "parse_gecko_lines",
    "save_codes",
]
