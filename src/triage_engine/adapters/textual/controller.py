"""Textual-agnostic adapter that wires TriageEditor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from triage_engine.actions import ActionOutcome, PromptRequest
from triage_engine.keymaps import (
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
    load_document_keymaps,
)
from triage_engine.session import DocumentFile, TriageEditor, window_title


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[TriageEditor], None]
    update_status: Callable[[str], None] = _noop
    update_title: Callable[[str], None] = _noop
    show_message: Callable[[str], None] = _noop
    request_input: Callable[[Optional[PromptRequest]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    exit_app: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


_VIEW_EVENTS = (
    "document.changed",
    "document.loaded",
    "highlight.repainted",
    "triage.toggled",
    "theme.changed",
    "view.changed",
    "marks.changed",
)

_TITLE_EVENTS = {"document.changed", "document.loaded", "triage.toggled"}


class TextualTriageAdapter:
    """Bridges key presses, prompts, and editor bus events to a UI surface."""

    def __init__(
        self,
        editor: TriageEditor,
        hooks: TextualUIHooks,
        *,
        registry: Optional[KeymapRegistry] = None,
        document: Optional[DocumentFile] = None,
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.document = document
        if registry is None:
            registry = KeymapRegistry(logger_name="triage_engine.keymaps")
            load_default_keymaps(registry)
            if document is not None:
                load_document_keymaps(registry, document)
        self.registry = registry
        self.prompt: Optional[PromptRequest] = None
        self._anchor: Optional[int] = None
        self._subscriptions: List[Tuple[str, Callable[[object | None], None]]] = []
        self._subscribe_events()
        self.refresh()

    def context_flags(self) -> Dict[str, bool]:
        state = self.editor.state
        return {
            "has_selection": self.editor.buffer.get_selection().length > 0,
            "triage_mode": state.triage_mode,
            "dark_mode": state.dark_mode,
            "prompt_active": self.prompt is not None,
            "live_search": state.search.is_live,
        }

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[ActionOutcome]:
        """Run the bound action for ``key`` or apply caret/editing keys.

        Returns the action outcome, or ``None`` when nothing was bound.
        """

        stroke = KeyStroke(key, tuple(modifiers))
        self._log_state("key ->", key=stroke.token, text=text)
        match = self.registry.resolve(stroke, self.context_flags())
        if match is not None:
            return self.run_action(match.action.id)
        if self._apply_edit_key(stroke, text):
            return ActionOutcome(status="edited")
        return None

    def run_action(self, action_id: str, *args: str) -> ActionOutcome:
        action = self.registry.get_action(action_id)
        outcome = action(self.editor, *args)
        if not isinstance(outcome, ActionOutcome):
            outcome = ActionOutcome()
        self._after_outcome(outcome)
        self._log_state(
            "result <-",
            action=action_id,
            status=outcome.status,
            message=outcome.message,
        )
        return outcome

    def submit_prompt(self, value: str) -> Optional[ActionOutcome]:
        """Feed the answer to the pending prompt back into its action."""

        prompt = self.prompt
        if prompt is None:
            return None
        self.prompt = None
        return self.run_action(prompt.action_id, *prompt.args, value)

    def update_live_query(self, value: str) -> None:
        """Re-highlight while the live-search prompt is being edited."""

        if self.prompt is None or self.prompt.action_id != "search.live":
            return
        self.editor.run_live_search(value)

    def cancel_prompt(self) -> None:
        prompt = self.prompt
        self.prompt = None
        self.hooks.request_input(None)
        if prompt is not None and prompt.action_id == "search.live":
            self.editor.end_live_search()

    def title(self) -> str:
        if self.document is not None:
            return self.document.title()
        return window_title(self.editor.state)

    def refresh(self) -> None:
        self.hooks.update_view(self.editor)
        self.hooks.update_status(self.editor.status().format())
        self.hooks.update_title(self.title())

    def close(self) -> None:
        """Stop listening to the editor bus."""

        for event, callback in self._subscriptions:
            self.editor.bus.unsubscribe(event, callback)
        self._subscriptions.clear()

    def _after_outcome(self, outcome: ActionOutcome) -> None:
        if outcome.prompt is not None:
            self.prompt = outcome.prompt
            self.hooks.request_input(outcome.prompt)
        elif self.prompt is None:
            self.hooks.request_input(None)
        if outcome.message:
            self.hooks.show_message(outcome.message)
        if outcome.status == "quit":
            self.hooks.exit_app()
            return
        self.refresh()

    def _apply_edit_key(self, stroke: KeyStroke, text: Optional[str]) -> bool:
        buffer = self.editor.buffer
        selection = buffer.get_selection()
        extend = "shift" in stroke.modifiers
        anchor = selection.start
        caret = selection.start
        if extend:
            if self._anchor == selection.end and selection.length:
                anchor, caret = selection.end, selection.start
            else:
                caret = selection.end
        target: Optional[int] = None
        if stroke.key == "left":
            target = caret - 1 if (extend or not selection.length) else selection.start
        elif stroke.key == "right":
            target = caret + 1 if (extend or not selection.length) else selection.end
        elif stroke.key in {"up", "down"}:
            target = self._vertical_target(caret, -1 if stroke.key == "up" else 1)
        elif stroke.key == "home":
            line = buffer.line_index_of(caret)
            target = buffer.first_char_offset_of(line)
        elif stroke.key == "end":
            target = self._line_end(buffer.line_index_of(caret))
        elif stroke.key == "enter":
            self.editor.replace_selection("\n")
            return True
        elif stroke.key == "backspace":
            if not selection.length:
                if selection.start == 0:
                    return True
                buffer.set_selection(selection.start - 1, 1)
            self.editor.replace_selection("")
            return True
        elif text and text.isprintable() and "ctrl" not in stroke.modifiers:
            self.editor.replace_selection(text)
            return True
        if target is None:
            return False
        target = max(0, min(target, buffer.get_text_length()))
        if extend:
            self._anchor = anchor
            buffer.set_selection(min(anchor, target), abs(target - anchor))
        else:
            self._anchor = None
            buffer.set_selection(target, 0)
        return True

    def _vertical_target(self, caret: int, delta: int) -> int:
        buffer = self.editor.buffer
        line = buffer.line_index_of(caret)
        column = caret - buffer.first_char_offset_of(line)
        destination = line + delta
        if destination < 0:
            return 0
        if destination >= buffer.get_line_count():
            return buffer.get_text_length()
        start = buffer.first_char_offset_of(destination)
        return min(start + column, self._line_end(destination))

    def _line_end(self, line: int) -> int:
        span = self.editor.line_range(line)
        if span.length and self.editor.buffer.get_text()[span.end - 1] == "\n":
            return span.end - 1
        return span.end

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in (*_VIEW_EVENTS, "status.changed"):
            callback = partial(self._handle_event, event)
            bus.subscribe(event, callback)
            self._subscriptions.append((event, callback))

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "status.changed":
            self.hooks.update_status(self.editor.status().format())
            self.hooks.update_view(self.editor)
            return
        self.hooks.update_view(self.editor)
        if name in _TITLE_EVENTS:
            self.hooks.update_title(self.title())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        selection = self.editor.buffer.get_selection()
        state = self.editor.state
        return {
            "selection": (selection.start, selection.length),
            "triage": state.triage_mode,
            "dark": state.dark_mode,
            "marks": len(self.editor.marks),
            "phase": self.editor.compositor.phase.value,
            "prompt": self.prompt.action_id if self.prompt else None,
        }


__all__ = ["TextualTriageAdapter", "TextualUIHooks"]
