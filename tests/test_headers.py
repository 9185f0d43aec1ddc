"""Tests for header line recognition."""

from __future__ import annotations

from whatsapp_reader.headers import GRAMMARS, HeaderMatch, match_header


def test_grammar_order() -> None:
    assert [grammar.name for grammar in GRAMMARS] == ["bracketed", "dashed"]


def test_bracketed_header() -> None:
    assert match_header("[1/2/24, 9:00] Anna: Ciao") == HeaderMatch("1/2/24", "9:00", "Anna: Ciao")


def test_bracketed_header_without_comma_and_with_seconds() -> None:
    found = match_header("[12/10/2023 21:04:59] Luca: ok")
    assert found == HeaderMatch("12/10/2023", "21:04:59", "Luca: ok")


def test_bracketed_header_without_space_before_body() -> None:
    assert match_header("[1/2/24, 9:00]Anna: hi").body == "Anna: hi"


def test_dashed_header() -> None:
    found = match_header("1/2/24, 9:00 PM - Anna joined")
    assert found == HeaderMatch("1/2/24", "9:00 PM", "Anna joined")


def test_time_whitespace_is_collapsed() -> None:
    assert match_header("[1/2/24, 9:00:01   pm] Anna: hi").time == "9:00:01 pm"


def test_export_artifacts_are_removed() -> None:
    found = match_header("\u200e[1/2/24, 9:00\u202fPM] Anna: \u200eimage omitted")
    assert found is not None
    assert found.time == "9:00 PM"
    assert found.body == "Anna: image omitted"


def test_body_is_trimmed() -> None:
    assert match_header("1/2/24, 9:00 - Anna: hi   ").body == "Anna: hi"


def test_non_header_lines() -> None:
    for line in ["", "come va?", "1/2/24 9:00 - Anna: hi", "[1/2/24, 9] Anna", "Messages are end-to-end encrypted"]:
        assert match_header(line) is None


def test_non_ascii_digits_are_not_a_header() -> None:
    assert match_header("[١/٢/٢٤, ٩:٠٠] Anna: x") is None
