"""Dolphin-style INI codec.

- `IniFile` owns ordered sections and handles load/save.
- `Section` owns ordered key/value pairs plus raw passthrough lines.
"""

from __future__ import annotations

from dolphin_ini.ini.document import IniFile
from dolphin_ini.ini.parsing import parse_line
from dolphin_ini.ini.section import Section

__all__ = ["IniFile", "Section", "parse_line"]
