"""Executable Textual app that hosts the triage editor."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, VerticalScroll
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use triage_engine.adapters.textual.app"
    ) from exc

from triage_engine.actions import PromptRequest
from triage_engine.buffer import InMemoryTextBuffer
from triage_engine.config import EngineConfig
from triage_engine.runtime import telemetry
from triage_engine.session import DocumentFile, TriageEditor

from .controller import TextualTriageAdapter, TextualUIHooks
from .render import render_document, render_gutter

LOGGER_NAME = "triage_engine.textual"
_APP_KEYS = {"ctrl+c", "ctrl+q", "ctrl+s"}


def create_default_editor(
    config: Optional[EngineConfig] = None,
) -> Tuple[TriageEditor, DocumentFile]:
    """Build an editor over an in-memory buffer plus its file collaborator."""

    editor = TriageEditor(InMemoryTextBuffer(), config=config or EngineConfig.from_env())
    return editor, DocumentFile(editor)


@dataclass
class UIState:
    status_text: str = ""
    message_text: str = ""
    title_text: str = ""


class TriageEditorApp(App[None]):
    """Terminal log editor with marking, triage and search highlighting."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-area {
		height: 1fr;
		border: round $accent;
	}

	#gutter {
		width: auto;
		padding: 0 1 0 0;
	}

	#document-view {
		width: 1fr;
	}

	#prompt-line {
		display: none;
	}

	#prompt-line.active {
		display: block;
	}

	#message-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "save", "Save"),
    ]

    def __init__(self, *, path: Optional[Path] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self.editor: TriageEditor | None = None
        self.document: DocumentFile | None = None
        self.adapter: TextualTriageAdapter | None = None
        self._gutter_widget: Static | None = None
        self._document_widget: Static | None = None
        self._prompt_widget: Input | None = None
        self._message_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="document-area"):
            with Horizontal():
                self._gutter_widget = Static("", id="gutter")
                self._document_widget = Static("", id="document-view")
                yield self._gutter_widget
                yield self._document_widget
        self._prompt_widget = Input(id="prompt-line")
        self._message_widget = Static("", id="message-line")
        self._status_widget = Static("", id="status-line")
        yield self._prompt_widget
        yield self._message_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.editor, self.document = create_default_editor()
        if self._path is not None:
            if self._path.exists():
                self.document.open(self._path)
            else:
                self.document.path = self._path
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            update_title=self._update_title,
            show_message=self._show_message,
            request_input=self._request_input,
            exit_app=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualTriageAdapter(
            self.editor, hooks, document=self.document
        )

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if self.adapter.prompt is not None:
            if event.key == "escape":
                self.adapter.cancel_prompt()
                event.stop()
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        if self.adapter.handle_textual_key(key, text=text, modifiers=modifiers):
            event.stop()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter:
            self.adapter.submit_prompt(event.value)

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.adapter:
            self.adapter.update_live_query(event.value)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()

    def action_save(self) -> None:
        if self.adapter:
            self.adapter.run_action("file.save")

    async def action_quit(self) -> None:
        """Quit through ``app.quit`` so unsaved edits are offered a save."""

        if self.adapter is None:
            self.exit()
            return
        self.adapter.run_action("app.quit")

    def _update_view(self, editor: TriageEditor) -> None:
        theme = editor.state.theme
        if self._document_widget:
            self._document_widget.update(render_document(editor.buffer, theme))
        if self._gutter_widget:
            self._gutter_widget.update(render_gutter(editor.gutter_rows(), theme))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_title(self, title: str) -> None:
        self._state.title_text = title
        self.title = title

    def _show_message(self, message: str) -> None:
        self._state.message_text = message
        if self._message_widget:
            self._message_widget.update(message)

    def _request_input(self, prompt: Optional[PromptRequest]) -> None:
        widget = self._prompt_widget
        if widget is None:
            return
        if prompt is None:
            widget.remove_class("active")
            widget.value = ""
            self.set_focus(None)
            return
        widget.placeholder = prompt.label
        widget.value = prompt.default
        widget.add_class("active")
        widget.focus()
        self._show_message(prompt.label)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "textual.trace", level="debug", data={"line": line}, logger_name=LOGGER_NAME
        )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key in _APP_KEYS:
            return None
        parts = event.key.split("+")
        key = parts[-1]
        modifiers = tuple(parts[:-1])
        text = event.character if event.is_printable else None
        return (key, text, modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the triage log editor.")
    parser.add_argument("path", nargs="?", help="Log file to open")
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("TRIAGE_ENGINE_LOG_PRESET", "production"),
        choices=telemetry.PRESETS,
        help="telelog preset (default: production, which logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = TriageEditorApp(path=Path(args.path) if args.path else None)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()


__all__ = ["TriageEditorApp", "create_default_editor", "main"]
