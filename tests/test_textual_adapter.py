from __future__ import annotations

from pathlib import Path
from typing import List

from triage_engine.actions import PromptRequest
from triage_engine.adapters.textual import TextualTriageAdapter, TextualUIHooks
from triage_engine.buffer import InMemoryTextBuffer, Selection
from triage_engine.session import DocumentFile, TriageEditor

LOG = "ok one\nERROR two\nend"


def make_editor(text: str = LOG) -> TriageEditor:
    return TriageEditor(InMemoryTextBuffer(text))


def make_adapter(
    editor: TriageEditor | None = None,
) -> tuple[TextualTriageAdapter, dict[str, List[object]]]:
    captured: dict[str, List[object]] = {
        "views": [],
        "statuses": [],
        "titles": [],
        "messages": [],
        "prompts": [],
        "events": [],
        "logs": [],
    }
    hooks = TextualUIHooks(
        update_view=captured["views"].append,
        update_status=captured["statuses"].append,
        update_title=captured["titles"].append,
        show_message=captured["messages"].append,
        request_input=captured["prompts"].append,
        handle_event=lambda name, payload: captured["events"].append(name),
        log=captured["logs"].append,
    )
    adapter = TextualTriageAdapter(editor or make_editor(), hooks)
    return adapter, captured


def test_adapter_renders_on_start() -> None:
    adapter, captured = make_adapter()

    assert captured["views"] == [adapter.editor]
    assert captured["statuses"][-1].startswith("Line 1, Col 1 | Lines: 3")
    assert captured["titles"][-1] == "Triage Log Editor - [Untitled]"


def test_bound_key_runs_action_and_updates_title() -> None:
    adapter, captured = make_adapter()

    outcome = adapter.handle_textual_key("t", modifiers=("ctrl",))

    assert outcome is not None and outcome.message == "Triage mode ON"
    assert "triage.toggled" in captured["events"]
    assert captured["titles"][-1].endswith("[TRIAGE: ON]")
    assert "Triage mode ON" in captured["messages"]
    assert any(line.startswith("key ->") for line in captured["logs"])


def test_unbound_key_returns_none() -> None:
    adapter, _ = make_adapter()

    assert adapter.handle_textual_key("f12") is None


def test_prompt_flow_for_find() -> None:
    adapter, captured = make_adapter()

    outcome = adapter.handle_textual_key("f", modifiers=("ctrl",))

    assert outcome is not None and outcome.needs_input
    prompt = captured["prompts"][-1]
    assert isinstance(prompt, PromptRequest)
    assert adapter.context_flags()["prompt_active"]

    result = adapter.submit_prompt("error")

    assert result is not None and result.ok
    assert adapter.prompt is None
    assert captured["prompts"][-1] is None
    assert adapter.editor.buffer.get_selection() == Selection(7, 5)


def test_submit_without_prompt_is_ignored() -> None:
    adapter, _ = make_adapter()

    assert adapter.submit_prompt("x") is None


def test_live_search_updates_and_cancels() -> None:
    adapter, _ = make_adapter()
    editor = adapter.editor
    search_color = editor.config.palette.search_color

    adapter.handle_textual_key("l", modifiers=("ctrl",))
    adapter.update_live_query("one")
    assert editor.buffer.backgrounds()[3:6] == (search_color,) * 3

    adapter.update_live_query("")
    adapter.cancel_prompt()

    assert not editor.state.search.is_live
    assert search_color not in editor.buffer.backgrounds()


def test_selection_gated_tool_binding() -> None:
    adapter, _ = make_adapter()

    assert adapter.handle_textual_key("c", modifiers=("alt",)) is None
    adapter.editor.buffer.set_selection(0, 2)
    outcome = adapter.handle_textual_key("c", modifiers=("alt",))

    assert outcome is not None
    assert outcome.message == "Found 1 occurrence(s) of 'ok'."


def test_caret_keys_move_and_extend_selection() -> None:
    adapter, _ = make_adapter()
    buffer = adapter.editor.buffer

    adapter.handle_textual_key("down")
    assert buffer.get_selection() == Selection(7, 0)
    adapter.handle_textual_key("end")
    assert buffer.get_selection() == Selection(16, 0)
    adapter.handle_textual_key("left", modifiers=("shift",))
    adapter.handle_textual_key("left", modifiers=("shift",))
    assert buffer.get_selection() == Selection(14, 2)
    adapter.handle_textual_key("home")
    assert buffer.get_selection() == Selection(7, 0)
    adapter.handle_textual_key("up")
    assert buffer.get_selection() == Selection(0, 0)


def test_typing_replaces_selection() -> None:
    adapter, captured = make_adapter(make_editor("ab"))
    buffer = adapter.editor.buffer
    buffer.set_selection(1, 0)

    adapter.handle_textual_key("x", text="x")
    adapter.handle_textual_key("backspace")
    adapter.handle_textual_key("backspace")

    assert buffer.get_text() == "b"
    assert "document.changed" in captured["events"]


def test_document_title_tracks_dirty_flag(tmp_path: Path) -> None:
    editor = make_editor()
    document = DocumentFile(editor)
    path = tmp_path / "bus.log"
    path.write_text("ok\n", encoding="utf-8")
    document.open(path)
    titles: List[str] = []
    hooks = TextualUIHooks(update_view=lambda _: None, update_title=titles.append)
    adapter = TextualTriageAdapter(editor, hooks, document=document)

    adapter.handle_textual_key("x", text="x")

    assert titles[0] == "Triage Log Editor - bus.log"
    assert titles[-1] == "Triage Log Editor - bus.log *"


def test_context_flags_reflect_state() -> None:
    adapter, _ = make_adapter()
    adapter.editor.toggle_dark_mode()
    adapter.editor.buffer.set_selection(0, 1)

    flags = adapter.context_flags()

    assert flags["dark_mode"] is True
    assert flags["has_selection"] is True
    assert flags["triage_mode"] is False
    assert flags["prompt_active"] is False


def test_submitting_live_search_leaves_live_mode() -> None:
    adapter, _ = make_adapter()
    editor = adapter.editor
    search_color = editor.config.palette.search_color

    adapter.handle_textual_key("l", modifiers=("ctrl",))
    adapter.update_live_query("one")
    outcome = adapter.submit_prompt("one")

    assert outcome is not None and outcome.message == "1 match(es)"
    assert editor.state.search.is_live is False
    assert adapter.context_flags()["live_search"] is False
    assert editor.buffer.backgrounds()[3:6] == (search_color,) * 3


def make_document_adapter(
    path: Path | None = None,
) -> tuple[TextualTriageAdapter, DocumentFile, List[bool]]:
    editor = make_editor()
    document = DocumentFile(editor)
    if path is not None:
        document.open(path)
    exits: List[bool] = []
    hooks = TextualUIHooks(
        update_view=lambda _: None, exit_app=lambda: exits.append(True)
    )
    adapter = TextualTriageAdapter(editor, hooks, document=document)
    return adapter, document, exits


def write_log(tmp_path: Path, name: str = "bus.log", text: str = "ok\n") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_backspace_at_start_leaves_document_clean(tmp_path: Path) -> None:
    adapter, document, _ = make_document_adapter(write_log(tmp_path))
    adapter.editor.buffer.set_selection(0, 0)

    assert adapter.handle_textual_key("backspace") is not None

    assert adapter.editor.buffer.get_text() == "ok\n"
    assert document.dirty is False


def test_quit_exits_when_clean(tmp_path: Path) -> None:
    adapter, _, exits = make_document_adapter(write_log(tmp_path))

    outcome = adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert outcome is not None and outcome.status == "quit"
    assert exits == [True]


def test_quit_with_unsaved_edits_asks_first(tmp_path: Path) -> None:
    path = write_log(tmp_path)
    adapter, document, exits = make_document_adapter(path)
    adapter.handle_textual_key("x", text="x")

    outcome = adapter.handle_textual_key("q", modifiers=("ctrl",))
    assert outcome is not None and outcome.needs_input
    assert outcome.prompt.label == "Save changes to bus.log? (y/n/c):"

    cancelled = adapter.submit_prompt("c")
    assert cancelled is not None and cancelled.status == "cancelled"
    assert exits == []

    adapter.handle_textual_key("q", modifiers=("ctrl",))
    adapter.submit_prompt("y")

    assert exits == [True]
    assert path.read_text(encoding="utf-8") == "xok\n"
    assert document.dirty is False


def test_quit_can_discard_unsaved_edits(tmp_path: Path) -> None:
    path = write_log(tmp_path)
    adapter, _, exits = make_document_adapter(path)
    adapter.handle_textual_key("x", text="x")

    adapter.handle_textual_key("q", modifiers=("ctrl",))
    adapter.submit_prompt("n")

    assert exits == [True]
    assert path.read_text(encoding="utf-8") == "ok\n"


def test_new_document_saves_untitled_edits_first(tmp_path: Path) -> None:
    adapter, document, _ = make_document_adapter()
    adapter.handle_textual_key("x", text="x")
    target = tmp_path / "draft.log"

    first = adapter.handle_textual_key("n", modifiers=("ctrl",))
    assert first is not None
    assert first.prompt.label == "Save changes to [Untitled]? (y/n/c):"
    second = adapter.submit_prompt("y")
    assert second is not None and second.prompt.label == "Save as:"
    adapter.submit_prompt(str(target))

    assert target.read_text(encoding="utf-8") == "x" + LOG
    assert adapter.editor.buffer.get_text() == ""
    assert document.path is None
    assert document.dirty is False


def test_open_prompts_for_path_and_loads(tmp_path: Path) -> None:
    path = write_log(tmp_path, "ecu.log", "ERROR 0x7F\n")
    adapter, document, _ = make_document_adapter()

    outcome = adapter.handle_textual_key("o", modifiers=("ctrl",))
    assert outcome is not None and outcome.prompt.label == "Open file:"
    opened = adapter.submit_prompt(str(path))

    assert opened is not None and opened.message == "Opened ecu.log"
    assert adapter.editor.buffer.get_text() == "ERROR 0x7F\n"
    assert document.path == path
    assert adapter.title() == "Triage Log Editor - ecu.log"


def test_open_missing_file_reports_error(tmp_path: Path) -> None:
    adapter, _, _ = make_document_adapter()

    outcome = adapter.run_action("file.open", str(tmp_path / "missing.log"))

    assert outcome.status == "error"
    assert outcome.message is not None
    assert outcome.message.startswith("Error opening file:")
    assert adapter.editor.buffer.get_text() == LOG


def test_save_without_path_asks_for_one(tmp_path: Path) -> None:
    adapter, document, _ = make_document_adapter()
    target = tmp_path / "out.log"

    outcome = adapter.handle_textual_key("s", modifiers=("ctrl",))
    assert outcome is not None and outcome.prompt.label == "Save as:"
    saved = adapter.submit_prompt(str(target))

    assert saved is not None and saved.message == f"Saved {target}"
    assert target.read_text(encoding="utf-8") == LOG
    assert document.path == target


def test_close_stops_bus_updates() -> None:
    adapter, captured = make_adapter()
    adapter.close()

    adapter.editor.toggle_triage_mode()

    assert captured["events"] == []
