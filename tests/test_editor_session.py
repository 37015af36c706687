from typing import List

import pytest

from triage_engine.buffer import InMemoryTextBuffer, Selection, TextRange
from triage_engine.config import EngineConfig
from triage_engine.highlight import Palette
from triage_engine.session import (
    MAX_ZOOM_PERCENT,
    MIN_ZOOM_PERCENT,
    LineOutOfRangeError,
    TriageEditor,
    window_title,
)
from triage_engine.tools import get_template

PALETTE = Palette()
LOG = "line1 FAIL here\nline2 ok\nline3 DENIED"


def make_editor(text: str = LOG) -> TriageEditor:
    return TriageEditor(InMemoryTextBuffer(text))


def record(editor: TriageEditor, event: str) -> List[object]:
    seen: List[object] = []
    editor.bus.subscribe(event, seen.append)
    return seen


def test_toggle_triage_mode_scans_and_clears() -> None:
    editor = make_editor()

    assert editor.toggle_triage_mode() is True
    assert editor.state.triage_lines == frozenset({0, 2})

    assert editor.toggle_triage_mode() is False
    assert editor.state.triage_lines == frozenset()


def test_toggle_mark_at_offset_marks_whole_line() -> None:
    editor = make_editor()
    changes = record(editor, "marks.changed")

    assert editor.toggle_mark_at(18) is True

    assert list(editor.marks) == [TextRange(16, 9)]
    backgrounds = editor.buffer.backgrounds()
    assert backgrounds[16:25] == (PALETTE.marked_color,) * 9
    assert changes == [1]

    assert editor.toggle_mark_at(20) is False
    assert len(editor.marks) == 0


def test_last_line_range_runs_to_end_of_text() -> None:
    editor = make_editor()

    assert editor.line_range(2) == TextRange(25, 12)


def test_caret_marking_keeps_selection() -> None:
    editor = make_editor()
    editor.buffer.set_selection(3, 0)

    editor.toggle_mark_at_cursor()

    assert editor.buffer.get_selection() == Selection(3, 0)


def test_clear_all_marks_repaints_default() -> None:
    editor = make_editor()
    editor.toggle_mark_at(0)

    editor.clear_all_marks()

    assert PALETTE.marked_color not in editor.buffer.backgrounds()


def test_status_events_are_suppressed_during_repaint() -> None:
    editor = make_editor()
    editor.buffer.set_selection(5, 0)
    statuses = record(editor, "status.changed")

    editor.toggle_triage_mode()
    editor.highlight_search("ok")

    assert statuses == []


def test_caret_moves_emit_status() -> None:
    editor = make_editor()
    statuses = record(editor, "status.changed")

    editor.buffer.set_selection(17, 0)

    assert len(statuses) == 1
    assert statuses[0].line == 2
    assert statuses[0].column == 2


def test_toggle_dark_mode_repaints_default_background() -> None:
    editor = make_editor("abc")

    assert editor.toggle_dark_mode() is True

    assert set(editor.buffer.backgrounds()) == {PALETTE.default_dark_bg}
    assert editor.state.dark_mode


def test_load_document_resets_session() -> None:
    editor = make_editor()
    editor.toggle_mark_at(0)
    editor.insert_template("x")
    editor.set_zoom(250)

    editor.load_document("fresh ERROR\nok")

    assert len(editor.marks) == 0
    assert editor.state.triage_lines == frozenset()
    assert editor.state.zoom_percent == 100
    assert editor.undo_last_template_insertion() is False
    assert editor.buffer.get_text() == "fresh ERROR\nok"


def test_load_document_rescans_when_triage_is_on() -> None:
    editor = make_editor()
    editor.toggle_triage_mode()

    editor.load_document("ok\nNRC 0x31")

    assert editor.state.triage_lines == frozenset({1})
    assert editor.buffer.backgrounds()[3:6] == (PALETTE.triage_color,) * 3


def test_text_edits_rescan_triage_lines() -> None:
    editor = make_editor()
    editor.toggle_triage_mode()
    changed = record(editor, "document.changed")

    editor.buffer.set_text("fine\nall good\naccess DENIED\nERROR")

    assert editor.state.triage_lines == frozenset({2, 3})
    assert changed == [None]


def test_replace_all_counts_and_rewrites() -> None:
    editor = make_editor("a ok\nb ok\nc")

    count = editor.run_replace("ok", "OK", replace_all=True)

    text = editor.buffer.get_text()
    assert count == 2
    assert text == "a OK\nb OK\nc"
    assert editor.count_occurrences("ok") == 2
    assert "ok" not in text
    assert editor.state.search.last_query == "ok"
    assert editor.buffer.backgrounds()[2:4] == (PALETTE.search_color,) * 2


def test_replace_one_uses_first_hit_after_caret() -> None:
    editor = make_editor("ok one\nok two")
    editor.buffer.set_selection(3, 0)

    assert editor.run_replace("OK", "fine") == 1

    assert editor.buffer.get_text() == "ok one\nfine two"
    assert editor.buffer.get_selection() == Selection(11, 0)


def test_replace_ignores_blank_find() -> None:
    editor = make_editor()

    assert editor.run_replace("  ", "x", replace_all=True) == 0
    assert editor.buffer.get_text() == LOG


def test_find_selects_match_and_wraps() -> None:
    editor = make_editor("error a\nerror b")
    editor.buffer.set_selection(0, 0)

    assert editor.run_find("ERROR") is True
    assert editor.buffer.get_selection() == Selection(0, 5)

    assert editor.run_find("ERROR") is True
    assert editor.buffer.get_selection() == Selection(8, 5)

    assert editor.run_find("ERROR") is True
    assert editor.buffer.get_selection() == Selection(0, 5)
    assert editor.buffer.backgrounds()[8:13] == (PALETTE.search_color,) * 5


def test_find_missing_term() -> None:
    editor = make_editor()

    assert editor.run_find("timeout") is False
    assert editor.run_find("   ") is False


def test_live_search_paints_and_clears() -> None:
    editor = make_editor()

    editor.run_live_search("line")
    assert editor.state.search.is_live
    assert editor.buffer.backgrounds()[0:4] == (PALETTE.search_color,) * 4

    editor.run_live_search("")
    editor.end_live_search()
    assert not editor.state.search.is_live
    assert PALETTE.search_color not in editor.buffer.backgrounds()


def test_template_insert_and_undo() -> None:
    editor = make_editor("log")

    editor.insert_template_named("Error Log Template")

    body = get_template("Error Log Template")
    assert editor.buffer.get_text() == "log" + body
    assert editor.buffer.get_selection() == Selection(len("log" + body), 0)

    assert editor.undo_last_template_insertion() is True
    assert editor.buffer.get_text() == "log"
    assert editor.undo_last_template_insertion() is False


def test_undo_without_template_is_a_noop() -> None:
    editor = make_editor()

    assert editor.undo_last_template_insertion() is False
    assert editor.buffer.get_text() == LOG


def test_unknown_template_raises() -> None:
    editor = make_editor()

    with pytest.raises(KeyError):
        editor.insert_template_named("Nope")


def test_go_to_line() -> None:
    editor = make_editor()

    assert editor.go_to_line(2) == 16
    assert editor.buffer.get_selection() == Selection(16, 0)

    with pytest.raises(LineOutOfRangeError) as info:
        editor.go_to_line(4)
    assert str(info.value) == "Line number must be between 1 and 3."


def test_zoom_is_clamped() -> None:
    editor = make_editor()

    assert editor.zoom_in() == 110
    assert editor.set_zoom(10_000) == MAX_ZOOM_PERCENT
    assert editor.set_zoom(-5) == MIN_ZOOM_PERCENT
    assert editor.zoom_out() == MIN_ZOOM_PERCENT
    assert editor.reset_zoom() == 100


def test_status_format() -> None:
    editor = make_editor()
    editor.buffer.set_selection(16, 5)
    editor.toggle_word_wrap()

    assert editor.status().format() == (
        "Line 2, Col 1 | Lines: 3 | Chars: 37 | Selection: 5 "
        "| Word Wrap: OFF | Zoom: 100%"
    )


def test_gutter_rows_flag_triage_and_current_lines() -> None:
    editor = make_editor()
    editor.buffer.set_selection(17, 0)

    assert all(row.background is None for row in editor.gutter_rows())

    editor.toggle_triage_mode()
    rows = editor.gutter_rows()

    assert [row.number for row in rows] == [1, 2, 3]
    assert [row.is_triage for row in rows] == [True, False, True]
    assert [row.is_current for row in rows] == [False, True, False]
    assert editor.gutter_rows(1, 1)[0].number == 2


def test_window_title() -> None:
    editor = make_editor()

    assert window_title(editor.state) == "Triage Log Editor - [Untitled]"
    editor.toggle_triage_mode()
    assert (
        window_title(editor.state, display_name="can.log", dirty=True)
        == "Triage Log Editor - can.log * [TRIAGE: ON]"
    )


def test_custom_keywords_from_config() -> None:
    editor = TriageEditor(
        InMemoryTextBuffer("timeout\nfine"),
        config=EngineConfig(triage_keywords=("TIMEOUT",)),
    )

    editor.toggle_triage_mode()

    assert editor.state.triage_lines == frozenset({0})
