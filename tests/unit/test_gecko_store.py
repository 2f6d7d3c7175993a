from __future__ import annotations

from pathlib import Path

from dolphin_ini.gecko.store import load_codes, save_codes
from dolphin_ini.ini import IniFile


GLOBAL_INI = """\
[Core]
CPUThread = True
[Gecko]
$Netplay Fix [Fizzi]
*Required
C206D4E0 00000004
$Stage Hazards Off
04001234 60000000
[Gecko_Enabled]
$Netplay Fix
"""

LOCAL_INI = """\
[Gecko]
$My Code [me]
04005678 00000001
[Gecko_Enabled]
$Stage Hazards Off
$My Code
[Gecko_Disabled]
$Netplay Fix
"""


def _by_name(codes):  # noqa: ANN001
    return {c.name: c for c in codes}


def test_global_codes_only() -> None:
    codes = _by_name(load_codes(GLOBAL_INI.splitlines()))

    assert set(codes) == {"Netplay Fix", "Stage Hazards Off"}
    assert codes["Netplay Fix"].default_enabled is True
    assert codes["Netplay Fix"].enabled is True
    assert codes["Netplay Fix"].user_defined is False
    assert codes["Stage Hazards Off"].enabled is False
    # Code bodies survive even though IniFile.load would fold them into a key.
    assert codes["Stage Hazards Off"].code_lines[0].address == "04001234"


def test_local_overrides_enabled_state_and_adds_user_codes() -> None:
    codes = _by_name(load_codes(GLOBAL_INI.splitlines(), LOCAL_INI.splitlines()))

    assert list(codes) == ["Netplay Fix", "Stage Hazards Off", "My Code"]
    assert codes["Netplay Fix"].enabled is False
    assert codes["Netplay Fix"].default_enabled is True
    assert codes["Stage Hazards Off"].enabled is True
    assert codes["My Code"].enabled is True
    assert codes["My Code"].user_defined is True
    assert codes["My Code"].creator == "me"


def test_local_redefinition_replaces_shipped_code() -> None:
    local = ["[Gecko]", "$Netplay Fix [edited]", "C206D4E0 00000008"]
    codes = _by_name(load_codes(GLOBAL_INI.splitlines(), local))

    fix = codes["Netplay Fix"]
    assert fix.user_defined is True
    assert fix.creator == "edited"
    assert fix.default_enabled is True
    assert fix.enabled is True


def test_save_then_load_preserves_user_codes_and_flags(tmp_path: Path) -> None:
    codes = load_codes(GLOBAL_INI.splitlines(), LOCAL_INI.splitlines())

    local_path = tmp_path / "GALE01.ini"
    local_path.write_text("[Core]\nGFXBackend = Vulkan\n[Gecko]\n04001234 60000000\n", encoding="utf-8")

    ini = IniFile()
    ini.load(local_path)
    save_codes(ini, codes)
    ini.save(local_path)

    text = local_path.read_text(encoding="utf-8")
    assert "[Gecko]\n$My Code [me]\n04005678 00000001\n\n" in text
    assert "[Gecko_Enabled]\n$Stage Hazards Off\n$My Code\n\n" in text
    assert "[Gecko_Disabled]\n$Netplay Fix\n\n" in text
    assert "GFXBackend=Vulkan" in text

    reloaded = _by_name(load_codes(GLOBAL_INI.splitlines(), local_path))
    assert reloaded["Netplay Fix"].enabled is False
    assert reloaded["Stage Hazards Off"].enabled is True
    assert reloaded["My Code"].user_defined is True
    assert reloaded["My Code"].code_lines[0].data == "00000001"


def test_save_codes_writes_empty_sections() -> None:
    ini = IniFile()
    save_codes(ini, [])

    assert ini.dumps() == "[Gecko]\n\n[Gecko_Enabled]\n\n[Gecko_Disabled]\n\n"


def test_missing_sources_yield_no_codes(tmp_path: Path) -> None:
    assert load_codes() == []
    assert load_codes(tmp_path / "missing.ini") == []
