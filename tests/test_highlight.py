import pytest

from triage_engine.buffer import TextRange
from triage_engine.highlight import (
    DEFAULT_TRIAGE_KEYWORDS,
    KeywordScanner,
    MarkedRangeSet,
    Palette,
    ThemeState,
    count_occurrences,
    find_occurrences,
    keyword_ranges,
    normalize_color,
)


def test_toggle_twice_restores_the_set() -> None:
    marks = MarkedRangeSet()
    marks.toggle(TextRange(0, 4))

    assert marks.toggle(TextRange(6, 3)) is True
    assert marks.toggle(TextRange(6, 3)) is False

    assert list(marks.all()) == [TextRange(0, 4)]


def test_toggle_never_duplicates() -> None:
    marks = MarkedRangeSet()
    marks.toggle(TextRange(0, 4))
    marks.toggle(TextRange(5, 4))
    marks.toggle(TextRange(0, 4))
    marks.toggle(TextRange(0, 4))

    assert list(marks) == [TextRange(5, 4), TextRange(0, 4)]
    assert len(marks) == 2


def test_all_iterates_a_copy() -> None:
    marks = MarkedRangeSet()
    marks.toggle(TextRange(0, 1))
    marks.toggle(TextRange(1, 1))

    for item in marks.all():
        marks.toggle(item)

    assert len(marks) == 0


def test_clear_empties_marks() -> None:
    marks = MarkedRangeSet()
    marks.toggle(TextRange(0, 1))

    marks.clear()

    assert TextRange(0, 1) not in marks


def test_scanner_flags_keyword_lines() -> None:
    scanner = KeywordScanner()

    lines = scanner.scan_text("line1 FAIL here\nline2 ok\nline3 DENIED")

    assert lines == frozenset({0, 2})


def test_scanner_is_case_insensitive_substring_match() -> None:
    scanner = KeywordScanner()

    assert scanner.scan(["security_errors seen", "nrc 0x7f", "all good"]) == {0, 1}


def test_scanner_is_idempotent() -> None:
    scanner = KeywordScanner()
    text = "ERROR a\nb\nAccess denied"

    assert scanner.scan_text(text) == scanner.scan_text(text)


def test_scanner_without_keywords_matches_nothing() -> None:
    assert KeywordScanner(()).scan_text("FAIL") == frozenset()


def test_scanner_rejects_empty_keyword() -> None:
    with pytest.raises(ValueError):
        KeywordScanner(("FAIL", ""))


def test_keyword_ranges_follow_keyword_order() -> None:
    hits = list(keyword_ranges("fail then error", ("ERROR", "FAIL")))

    assert hits == [TextRange(10, 5), TextRange(0, 4)]


def test_find_occurrences_does_not_overlap() -> None:
    assert list(find_occurrences("aaaa", "aa")) == [TextRange(0, 2), TextRange(2, 2)]
    assert count_occurrences("aaaa", "AA") == 2
    assert count_occurrences("abc", "") == 0


def test_default_keywords() -> None:
    assert DEFAULT_TRIAGE_KEYWORDS == ("FAIL", "ERROR", "DENIED", "0x27", "0x7F", "NRC")


def test_palette_normalizes_and_validates() -> None:
    palette = Palette(search_color="#ffa500")

    assert palette.search_color == "#FFA500"
    assert palette.default_background(True) == "#1E1E1E"
    with pytest.raises(ValueError):
        normalize_color("yellow")


def test_theme_toggle_switches_default_background() -> None:
    theme = ThemeState(Palette())

    assert theme.default_background == "#FFFFFF"
    assert theme.toggle() is True
    assert theme.default_background == "#1E1E1E"
