from __future__ import annotations

import pytest

from dolphin_ini.core.errors import GeckoCodeError
from dolphin_ini.gecko.codec import code_to_lines, parse_code_line, parse_gecko_lines, parse_name_list
from dolphin_ini.gecko.model import GeckoCode, GeckoCodeLine


def test_parse_codes_with_creator_notes_and_body() -> None:
    codes = parse_gecko_lines(
        [
            "$Faster Melee Netplay [Fizzi]",
            "*Required for netplay",
            "*Do not disable",
            "C206D4E0 00000004",
            "60000000 00000000",
            "",
            "$No Creator",
            "04001234 60000000",
        ]
    )

    assert [c.name for c in codes] == ["Faster Melee Netplay", "No Creator"]

    first = codes[0]
    assert first.creator == "Fizzi"
    assert first.notes == ["Required for netplay", "Do not disable"]
    assert [(l.address, l.data) for l in first.code_lines] == [
        ("C206D4E0", "00000004"),
        ("60000000", "00000000"),
    ]
    assert first.enabled is False

    assert codes[1].creator is None


def test_legacy_plus_header_marks_enabled() -> None:
    (code,) = parse_gecko_lines(["+$Widescreen [Dan]"])

    assert code.name == "Widescreen"
    assert code.creator == "Dan"
    assert code.enabled is True
    assert code.default_enabled is True


def test_comments_and_orphan_body_lines_are_skipped() -> None:
    codes = parse_gecko_lines(["04001234 60000000", "# header comment", "$Code", "*note"])

    assert len(codes) == 1
    assert codes[0].code_lines == []
    assert codes[0].notes == ["note"]


def test_malformed_code_line_kept_unless_strict() -> None:
    (code,) = parse_gecko_lines(["$Code", "not hex"])
    assert code.code_lines == [GeckoCodeLine(text="not hex")]
    assert not code.code_lines[0].is_valid

    with pytest.raises(GeckoCodeError):
        parse_gecko_lines(["$Code", "not hex"], strict=True)


def test_code_line_is_upper_cased() -> None:
    line = parse_code_line("c206d4e0 0000000a")
    assert line.address == "C206D4E0"
    assert line.data == "0000000A"
    assert line.text == "c206d4e0 0000000a"


def test_name_list_ignores_non_code_lines() -> None:
    assert parse_name_list(["$A", "  $B  ", "# note", "C", ""]) == ["A", "B"]


def test_code_to_lines_rebuilds_block() -> None:
    code = GeckoCode(
        name="Widescreen",
        creator="Dan",
        notes=["16:9"],
        code_lines=[parse_code_line("04001234 60000000")],
    )

    assert code_to_lines(code) == ["$Widescreen [Dan]", "*16:9", "04001234 60000000"]
    assert parse_gecko_lines(code_to_lines(code))[0].model_dump() == code.model_dump()
