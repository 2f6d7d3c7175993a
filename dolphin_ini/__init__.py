"""Dolphin INI codec, Gecko code helpers and a request/response layer over them."""

from __future__ import annotations

from dolphin_ini.ini import IniFile, Section, parse_line

__all__ = [
    "IniFile",
    "Section",
    "__version__",
    "parse_line",
]

__version__ = "0.1.0"
