from triage_engine.actions import (
    ascii_to_hex,
    count_selection,
    decode_uds,
    find,
    goto_line,
    hex_to_ascii,
    insert_template,
    replace,
    toggle_mark,
    toggle_triage,
    undo_template,
    zoom_in,
)
from triage_engine.buffer import InMemoryTextBuffer, Selection
from triage_engine.session import TriageEditor


def make_editor(text: str = "ok one\nOK two\nDENIED 0x27") -> TriageEditor:
    return TriageEditor(InMemoryTextBuffer(text))


def test_simple_verbs_report_messages() -> None:
    editor = make_editor()

    assert toggle_triage(editor).message == "Triage mode ON"
    assert toggle_mark(editor).message == "Line marked."
    assert toggle_mark(editor).message == "Line unmarked."
    assert zoom_in(editor).message == "Zoom: 110%"


def test_find_prompts_then_runs() -> None:
    editor = make_editor()

    outcome = find(editor)
    assert outcome.needs_input
    assert outcome.prompt.action_id == "search.find"

    assert find(editor, "two").ok
    assert editor.buffer.get_selection() == Selection(10, 3)

    missing = find(editor, "absent")
    assert missing.status == "not_found"
    assert missing.message == "'absent' not found."


def test_replace_collects_three_answers() -> None:
    editor = make_editor()

    first = replace(editor)
    second = replace(editor, *first.prompt.args, "ok")
    third = replace(editor, *second.prompt.args, "fine")

    assert first.prompt.label == "Find:"
    assert second.prompt.label == "Replace with:"
    assert third.prompt.args == ("ok", "fine")

    done = replace(editor, *third.prompt.args, "y")
    assert done.message == "Replaced 2 occurrence(s)."
    assert editor.buffer.get_text() == "fine one\nfine two\nDENIED 0x27"


def test_goto_line_reports_errors() -> None:
    editor = make_editor()

    assert goto_line(editor, "abc").message == "Please enter a valid line number."
    assert goto_line(editor, "9").message == "Line number must be between 1 and 3."
    assert goto_line(editor, "3").ok
    assert editor.buffer.get_selection() == Selection(14, 0)


def test_template_actions() -> None:
    editor = make_editor("")

    prompt = insert_template(editor)
    assert prompt.prompt.default == "UDS Diagnostic Session"
    assert insert_template(editor, "bogus").status == "error"

    assert insert_template(editor, "CAN Frame Template").ok
    assert undo_template(editor).message == "Template insertion undone."
    assert editor.buffer.get_text() == ""
    assert undo_template(editor).message == "No template insertion to undo."


def test_tools_require_selection() -> None:
    editor = make_editor()

    assert decode_uds(editor).status == "no_selection"
    assert hex_to_ascii(editor).status == "no_selection"
    assert ascii_to_hex(editor).status == "no_selection"
    assert count_selection(editor).message == "Please select text to count occurrences."


def test_decode_and_count_selection() -> None:
    editor = make_editor()
    editor.buffer.set_selection(21, 4)

    assert decode_uds(editor).message == "UDS Service 0x27: SecurityAccess"

    editor.buffer.set_selection(0, 2)
    assert count_selection(editor).message == "Found 2 occurrence(s) of 'ok'."


def test_hex_to_ascii_confirms_before_applying() -> None:
    editor = make_editor("data 48 69 end")
    editor.buffer.set_selection(5, 5)

    preview = hex_to_ascii(editor)
    assert preview.needs_input
    assert "Hi" in preview.prompt.label

    assert hex_to_ascii(editor, "n").status == "cancelled"
    assert editor.buffer.get_text() == "data 48 69 end"

    assert hex_to_ascii(editor, "y").ok
    assert editor.buffer.get_text() == "data Hi end"


def test_hex_to_ascii_reports_bad_input() -> None:
    editor = make_editor("zz zz")
    editor.buffer.set_selection(0, 5)

    outcome = hex_to_ascii(editor)

    assert outcome.status == "error"
    assert outcome.message == "Could not find any recognizable hex bytes."


def test_ascii_to_hex_applies() -> None:
    editor = make_editor("say Hi")
    editor.buffer.set_selection(4, 2)

    assert ascii_to_hex(editor, "yes").ok
    assert editor.buffer.get_text() == "say 48 69"
