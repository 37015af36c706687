"""Single-slot snapshot backing "undo template insertion"."""

from __future__ import annotations

from typing import Optional


class TemplateSnapshot:
    """Holds at most one full-text copy taken before a template is appended.

    Not an undo stack: taking a new snapshot replaces the old one and a
    successful restore empties the slot.
    """

    def __init__(self) -> None:
        self._text: Optional[str] = None

    def take(self, text: str) -> None:
        self._text = text

    def consume(self) -> Optional[str]:
        text, self._text = self._text, None
        return text

    def clear(self) -> None:
        self._text = None


__all__ = ["TemplateSnapshot"]
