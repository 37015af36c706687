"""File-backed document identity (path + dirty flag) kept outside the core."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from triage_engine.runtime import telemetry

from .editor import TriageEditor
from .views import window_title


class DocumentFile:
    """Opens and saves plain-text logs for a :class:`TriageEditor`.

    The editor never reads this object; the dirty flag follows the editor's
    ``document.changed`` events.
    """

    def __init__(self, editor: TriageEditor, *, encoding: str = "utf-8") -> None:
        self.editor = editor
        self.encoding = encoding
        self.path: Optional[Path] = None
        self.dirty = False
        editor.bus.subscribe("document.changed", self._mark_dirty)

    @property
    def display_name(self) -> Optional[str]:
        return self.path.name if self.path else None

    def title(self) -> str:
        return window_title(
            self.editor.state, display_name=self.display_name, dirty=self.dirty
        )

    def new(self) -> None:
        self.editor.load_document("")
        self.path = None
        self.dirty = False

    def open(self, path: str | Path) -> None:
        target = Path(path)
        with telemetry.file_io("open", target):
            text = target.read_text(encoding=self.encoding)
            self.editor.load_document(text)
        self.path = target
        self.dirty = False

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No file path set; provide one to save")
        with telemetry.file_io("save", target):
            target.write_text(self.editor.buffer.get_text(), encoding=self.encoding)
        self.path = target
        self.dirty = False
        return target

    def _mark_dirty(self, payload: object | None) -> None:
        del payload
        self.dirty = True


__all__ = ["DocumentFile"]
