"""Read-only view models for the status bar, title, and line-number gutter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from triage_engine.buffer import TextBufferAdapter

from .state import SessionState

APP_TITLE = "Triage Log Editor"
UNTITLED = "[Untitled]"

GUTTER_TRIAGE_COLOR = "#FFE6C8"
GUTTER_CURRENT_LINE_COLOR = "#C8DCFF"


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    line: int
    column: int
    line_count: int
    char_count: int
    selection_length: int
    word_wrap: bool
    zoom_percent: int

    def format(self) -> str:
        wrap = "ON" if self.word_wrap else "OFF"
        return " | ".join(
            (
                f"Line {self.line}, Col {self.column}",
                f"Lines: {self.line_count}",
                f"Chars: {self.char_count}",
                f"Selection: {self.selection_length}",
                f"Word Wrap: {wrap}",
                f"Zoom: {self.zoom_percent}%",
            )
        )


@dataclass(frozen=True, slots=True)
class GutterRow:
    number: int
    is_triage: bool = False
    is_current: bool = False

    @property
    def background(self) -> Optional[str]:
        if self.is_triage:
            return GUTTER_TRIAGE_COLOR
        if self.is_current:
            return GUTTER_CURRENT_LINE_COLOR
        return None


def build_status(buffer: TextBufferAdapter, state: SessionState) -> StatusSnapshot:
    selection = buffer.get_selection()
    line = buffer.line_index_of(selection.start)
    line_start = max(0, buffer.first_char_offset_of(line))
    return StatusSnapshot(
        line=line + 1,
        column=selection.start - line_start + 1,
        line_count=buffer.get_line_count(),
        char_count=buffer.get_text_length(),
        selection_length=selection.length,
        word_wrap=state.word_wrap,
        zoom_percent=state.zoom_percent,
    )


def build_gutter(
    buffer: TextBufferAdapter,
    state: SessionState,
    first_line: int = 0,
    count: Optional[int] = None,
) -> List[GutterRow]:
    """Rows for ``count`` lines from ``first_line`` (zero-based).

    With triage on, keyword lines are flagged as whole lines, and the caret
    line is flagged as current when it is not itself a triage line.
    """

    total = buffer.get_line_count()
    first_line = min(max(0, first_line), total)
    last = total if count is None else min(total, first_line + max(0, count))
    current = buffer.line_index_of(buffer.get_selection().start)
    rows: List[GutterRow] = []
    for index in range(first_line, last):
        is_triage = state.triage_mode and index in state.triage_lines
        rows.append(
            GutterRow(
                number=index + 1,
                is_triage=is_triage,
                is_current=state.triage_mode and not is_triage and index == current,
            )
        )
    return rows


def window_title(
    state: SessionState, *, display_name: Optional[str] = None, dirty: bool = False
) -> str:
    title = f"{APP_TITLE} - {display_name or UNTITLED}"
    if dirty:
        title += " *"
    if state.triage_mode:
        title += " [TRIAGE: ON]"
    return title


__all__ = [
    "APP_TITLE",
    "UNTITLED",
    "GUTTER_TRIAGE_COLOR",
    "GUTTER_CURRENT_LINE_COLOR",
    "StatusSnapshot",
    "GutterRow",
    "build_status",
    "build_gutter",
    "window_title",
]
