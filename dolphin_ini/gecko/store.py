from __future__ import annotations

from typing import Any, Iterable

from dolphin_ini.ini.document import IniFile, IniSource, read_raw_sections

from .codec import code_to_lines, parse_gecko_lines, parse_name_list
from .model import GeckoCode


GECKO = "Gecko"
GECKO_ENABLED = "Gecko_Enabled"
GECKO_DISABLED = "Gecko_Disabled"

_GECKO_SECTIONS = (GECKO, GECKO_ENABLED, GECKO_DISABLED)


def load_codes(
    global_source: IniSource | None = None,
    local_source: IniSource | None = None,
    *,
    strict: bool = False,
    log: Any = None,
) -> list[GeckoCode]:
    """Load Gecko codes for one game.

    Args:
        global_source: The shipped game INI (Sys/GameSettings). Its codes are
            not user-defined, and its `[Gecko_Enabled]` list sets
            `default_enabled`.
        local_source: The user's game INI (User/GameSettings). Its codes are
            user-defined; a code with the same name as a global one replaces
            it. Its `[Gecko_Enabled]` / `[Gecko_Disabled]` lists decide the
            final `enabled` state.
        strict: Raise `GeckoCodeError` on malformed code lines.
    """

    codes: dict[str, GeckoCode] = {}

    if global_source is not None:
        sections = read_raw_sections(global_source, _GECKO_SECTIONS, log=log)
        default_on = set(parse_name_list(sections.get(GECKO_ENABLED, [])))
        for code in parse_gecko_lines(sections.get(GECKO, []), strict=strict):
            if code.name in default_on:
                code.default_enabled = True
                code.enabled = True
            codes[code.name] = code

    if local_source is not None:
        sections = read_raw_sections(local_source, _GECKO_SECTIONS, log=log)
        for code in parse_gecko_lines(sections.get(GECKO, []), strict=strict):
            code.user_defined = True
            shipped = codes.get(code.name)
            if shipped is not None and shipped.default_enabled:
                code.default_enabled = True
                code.enabled = True
            codes[code.name] = code
        for name in parse_name_list(sections.get(GECKO_ENABLED, [])):
            if name in codes:
                codes[name].enabled = True
        for name in parse_name_list(sections.get(GECKO_DISABLED, [])):
            if name in codes:
                codes[name].enabled = False

    return list(codes.values())


def _replace_lines(ini: IniFile, name: str, lines: Iterable[str]) -> None:
    section = ini.get_or_create_section(name)
    # A section with any key is saved as key=value only, so drop stray keys
    # (e.g. the empty pair produced by a code line) before writing raw lines.
    for key in section.keys():
        section.delete(key)
    section.set_lines(lines)


def save_codes(ini: IniFile, codes: Iterable[GeckoCode]) -> None:
    """Write `codes` into the user's game INI model.

    Only user-defined code bodies are written to `[Gecko]`; shipped codes stay
    in the global INI. Enabled codes go to `[Gecko_Enabled]`, and shipped
    codes that are on by default but switched off go to `[Gecko_Disabled]`.
    """

    code_list = list(codes)
    _replace_lines(ini, GECKO, [line for code in code_list if code.user_defined for line in code_to_lines(code)])
    _replace_lines(ini, GECKO_ENABLED, [f"${code.name}" for code in code_list if code.enabled])
    _replace_lines(
        ini,
        GECKO_DISABLED,
        [f"${code.name}" for code in code_list if code.default_enabled and not code.enabled],
    )
