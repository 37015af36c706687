"""Action result types and the single-shot editor verbs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from triage_engine.session import TriageEditor


@dataclass(frozen=True, slots=True)
class PromptRequest:
    """Asks the host for one more line of input before an action can finish.

    ``args`` carries the values collected so far; the host re-invokes the
    action with ``args + (answer,)``.
    """

    action_id: str
    label: str
    default: str = ""
    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """Result returned by every action handler."""

    status: str = "ok"
    message: Optional[str] = None
    prompt: Optional[PromptRequest] = None

    @property
    def needs_input(self) -> bool:
        return self.prompt is not None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def ask(action_id: str, label: str, *args: str, default: str = "") -> ActionOutcome:
    return ActionOutcome(
        status="prompt",
        prompt=PromptRequest(action_id, label, default=default, args=tuple(args)),
    )


def toggle_mark(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    marked = editor.toggle_mark_at_cursor()
    return ActionOutcome(message="Line marked." if marked else "Line unmarked.")


def clear_marks(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    editor.clear_all_marks()
    return ActionOutcome(message="All marks cleared.")


def toggle_triage(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    enabled = editor.toggle_triage_mode()
    return ActionOutcome(message=f"Triage mode {'ON' if enabled else 'OFF'}")


def toggle_dark(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    is_dark = editor.toggle_dark_mode()
    return ActionOutcome(message=f"Dark mode {'ON' if is_dark else 'OFF'}")


def toggle_wrap(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    wrap = editor.toggle_word_wrap()
    return ActionOutcome(message=f"Word Wrap: {'ON' if wrap else 'OFF'}")


def zoom_in(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    return ActionOutcome(message=f"Zoom: {editor.zoom_in()}%")


def zoom_out(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    return ActionOutcome(message=f"Zoom: {editor.zoom_out()}%")


def reset_zoom(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    return ActionOutcome(message=f"Zoom: {editor.reset_zoom()}%")


def undo_template(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    if editor.undo_last_template_insertion():
        return ActionOutcome(message="Template insertion undone.")
    return ActionOutcome(status="noop", message="No template insertion to undo.")


__all__ = [
    "ActionOutcome",
    "PromptRequest",
    "ask",
    "toggle_mark",
    "clear_marks",
    "toggle_triage",
    "toggle_dark",
    "toggle_wrap",
    "zoom_in",
    "zoom_out",
    "reset_zoom",
    "undo_template",
]
