from __future__ import annotations

import io
from pathlib import Path

from dolphin_ini.ini import IniFile


SAMPLE = "[Core]\n# comment\nCPUThread = True\n[Gecko_Enabled]\n$SomeCode\n"


def test_load_sample_file_classifies_lines() -> None:
    ini = IniFile()
    assert ini.loads(SAMPLE) is True

    assert ini.get_keys("Core") == ["CPUThread"]
    assert ini.get("Core", "CPUThread", "") == "True"
    assert "# comment" in ini.get_section("Core").lines

    assert ini.get_keys("Gecko_Enabled") == []
    assert "$SomeCode" in ini.get_lines("Gecko_Enabled")


def test_save_sample_drops_raw_lines_of_mixed_section() -> None:
    # Known lossy case: a section with keys is written as key=value only,
    # so the "# comment" line does not survive a save.
    ini = IniFile()
    ini.loads(SAMPLE)

    out = io.StringIO()
    assert ini.save(out) is True

    text = out.getvalue()
    assert text == "[Core]\nCPUThread=True\n\n[Gecko_Enabled]\n$SomeCode\n\n"
    assert "# comment" not in text


def test_key_value_round_trip_preserves_order(tmp_path: Path) -> None:
    ini = IniFile()
    for key, value in [("Zeta", "1"), ("Alpha", "2"), ("Mid", "three")]:
        ini.set("Display", key, value)
    ini.set("Audio", "Volume", "80")

    path = tmp_path / "Dolphin.ini"
    assert ini.save(path) is True

    reloaded = IniFile()
    assert reloaded.load(path) is True
    assert reloaded.section_names() == ["Display", "Audio"]
    assert reloaded.get_keys("Display") == ["Zeta", "Alpha", "Mid"]
    assert reloaded.get("Display", "Mid") == "three"
    assert reloaded.get("Audio", "Volume") == "80"


def test_values_are_normalized() -> None:
    ini = IniFile()
    ini.loads("[Core]\n  Gfx Backend =  \"Vulkan\"  \nPath = 'C:/My Games'\n")

    assert ini.get_keys("Core") == ["GfxBackend", "Path"]
    assert ini.get("Core", "GfxBackend") == "Vulkan"
    assert ini.get("Core", "Path") == "C:/MyGames"


def test_directive_lines_kept_verbatim_in_order() -> None:
    ini = IniFile()
    ini.loads("[Gecko]\n$Code A = 1\n*note = x\n+$Code B\n")

    assert ini.get_keys("Gecko") == []
    assert ini.get_section("Gecko").lines == ("$Code A = 1", "*note = x", "+$Code B")


def test_line_without_equals_is_an_empty_pair() -> None:
    ini = IniFile()
    ini.loads("[Gecko]\n04001234 60000000\n")

    assert ini.get_keys("Gecko") == [""]
    assert ini.get("Gecko", "", "missing") == ""
    assert ini.dumps() == "[Gecko]\n=\n\n"


def test_lines_before_first_header_and_unclosed_headers_are_ignored() -> None:
    ini = IniFile()
    ini.loads("orphan=1\n[Core]\nA=1\n[Broken\nB=2\n")

    assert ini.section_names() == ["Core"]
    assert ini.get_keys("Core") == ["A", "B"]


def test_header_name_stops_at_first_bracket() -> None:
    ini = IniFile()
    ini.loads("[Core] trailing text\nA=1\n")

    assert ini.exists("Core")


def test_repeated_header_reuses_section() -> None:
    ini = IniFile()
    ini.loads("[Core]\nA=1\n[Video]\nB=2\n[Core]\nA=3\nC=4\n")

    assert ini.section_names() == ["Core", "Video"]
    assert ini.get_keys("Core") == ["A", "C"]
    assert ini.get("Core", "A") == "3"


def test_load_merges_by_default() -> None:
    ini = IniFile()
    ini.loads("[Core]\nA=1\nB=2\n[Video]\nX=1\n")
    ini.loads("[Core]\nB=20\nC=30\n")

    assert ini.section_names() == ["Core", "Video"]
    assert ini.get_keys("Core") == ["A", "B", "C"]
    assert ini.get("Core", "B") == "20"
    assert ini.get("Video", "X") == "1"


def test_load_without_keeping_data_clears_first() -> None:
    ini = IniFile()
    ini.loads("[Core]\nA=1\n[Video]\nX=1\n")
    ini.loads("[Core]\nB=2\n", keep_current_data=False)

    assert ini.section_names() == ["Core"]
    assert ini.get_keys("Core") == ["B"]
    assert not ini.exists("Video")


def test_get_or_create_section_returns_same_instance() -> None:
    ini = IniFile()
    first = ini.get_or_create_section("Core")
    second = ini.get_or_create_section("Core")

    assert first is second
    assert len(ini) == 1


def test_get_section_has_no_side_effects() -> None:
    ini = IniFile()
    assert ini.get_section("Core") is None
    assert not ini.exists("Core")
    assert ini.get_keys("Core") == []
    assert ini.get_lines("Core") == []


def test_delete_section() -> None:
    ini = IniFile()
    ini.set("Core", "A", "1")

    assert ini.delete_section("Missing") is False
    assert ini.section_names() == ["Core"]

    assert ini.delete_section("Core") is True
    assert ini.exists("Core") is False


def test_delete_key_on_missing_section_is_false() -> None:
    ini = IniFile()
    assert ini.delete_key("Core", "A") is False
    assert not ini.exists("Core")

    ini.set("Core", "A", "1")
    assert ini.delete_key("Core", "A") is True
    assert ini.get_keys("Core") == []


def test_set_lines_creates_section_and_keeps_keys() -> None:
    ini = IniFile()
    ini.set("Core", "A", "1")
    ini.set_lines("Core", ["# replaced"])
    ini.set_lines("Gecko", ["$Code", "", "\n"])

    assert ini.get_keys("Core") == ["A"]
    assert ini.get_section("Core").lines == ("# replaced",)
    assert ini.get_lines("Gecko") == ["$Code"]


def test_empty_sections_still_get_a_header() -> None:
    ini = IniFile()
    ini.get_or_create_section("Gecko")
    ini.set("Core", "A", "1")

    assert ini.dumps() == "[Gecko]\n\n[Core]\nA=1\n\n"


def test_raw_only_section_round_trips_through_file(tmp_path: Path) -> None:
    path = tmp_path / "GALE01.ini"
    path.write_text("[Gecko_Enabled]\n$Code A\n# keep me\n\n$Code B\n", encoding="utf-8")

    ini = IniFile()
    ini.load(path)
    ini.save(path)

    assert path.read_text(encoding="utf-8") == "[Gecko_Enabled]\n$Code A\n# keep me\n\n$Code B\n\n"


def test_bom_is_stripped_from_first_line_only(tmp_path: Path) -> None:
    path = tmp_path / "bom.ini"
    path.write_bytes(b"\xef\xbb\xbf[Core]\r\nA = 1\r\n")

    ini = IniFile()
    ini.load(path)

    assert ini.section_names() == ["Core"]
    assert ini.get("Core", "A") == "1"


def test_misdecoded_bom_is_stripped() -> None:
    ini = IniFile()
    ini.load(["\xef\xbb\xbf[Core]\n", "A=1\n"])

    assert ini.section_names() == ["Core"]


def test_bom_on_later_line_is_not_a_header() -> None:
    ini = IniFile()
    ini.load(["[Core]\n", "\ufeff[Video]\n"])

    assert ini.section_names() == ["Core"]


def test_iteration_and_membership() -> None:
    ini = IniFile()
    ini.loads("[A]\n[B]\n")

    assert [s.name for s in ini] == ["A", "B"]
    assert "A" in ini
    assert "C" not in ini
