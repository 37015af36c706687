"""In-memory text buffer implementing :class:`TextBufferAdapter`."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .document import LineIndex
from .state import Selection, TextRange
from .sync import (
    SELECTION_CHANGED,
    TEXT_CHANGED,
    EventBus,
    Color,
)
from .validation import clamp_range, clamp_selection


class InMemoryTextBuffer:
    """Plain-text surface with a per-character background attribute.

    Backgrounds are painted through the selection, the way rich-text widgets
    apply ``SelectionBackColor``: every ``set_background``/``select_all`` call
    moves the selection and fires ``selection_changed`` synchronously. A
    background of ``None`` means "the widget's own default".
    """

    def __init__(self, text: str = "", *, name: str = "default") -> None:
        self.name = name
        self.events = EventBus()
        self._index = LineIndex.from_text(text)
        self._backgrounds: List[Optional[Color]] = [None] * len(text)
        self._selection = Selection()
        self._batch_depth = 0
        self.redraw_count = 0

    @property
    def batch_depth(self) -> int:
        return self._batch_depth

    def get_text(self) -> str:
        return self._index.text

    def set_text(self, text: str) -> None:
        self._index = LineIndex.from_text(text)
        self._backgrounds = [None] * len(text)
        self.events.emit(TEXT_CHANGED, None)
        self._move_selection(0, 0)

    def get_line_count(self) -> int:
        return self._index.line_count

    def get_text_length(self) -> int:
        return self._index.text_length

    def line_index_of(self, offset: int) -> int:
        return self._index.line_index_of(offset)

    def first_char_offset_of(self, line: int) -> int:
        return self._index.first_char_offset_of(line)

    def line_range(self, line: int) -> TextRange:
        return self._index.line_range(line)

    def set_background(self, text_range: TextRange, color: Color) -> None:
        target = clamp_range(text_range, self._index.text_length)
        if target is None:
            return
        self._move_selection(target.start, target.length)
        self._backgrounds[target.start : target.end] = [color] * target.length

    def select_all(self) -> None:
        self._move_selection(0, self._index.text_length)

    def get_selection(self) -> Selection:
        return self._selection

    def set_selection(self, start: int, length: int) -> None:
        self._move_selection(start, length)

    def selected_text(self) -> str:
        selection = self._selection
        return self._index.text[selection.start : selection.end]

    def begin_batch_update(self) -> None:
        self._batch_depth += 1

    def end_batch_update(self) -> None:
        if self._batch_depth == 0:
            raise RuntimeError("end_batch_update called without begin_batch_update")
        self._batch_depth -= 1
        if self._batch_depth == 0:
            self.redraw_count += 1

    def background_at(self, offset: int) -> Optional[Color]:
        return self._backgrounds[offset]

    def backgrounds(self) -> Tuple[Optional[Color], ...]:
        return tuple(self._backgrounds)

    def _move_selection(self, start: int, length: int) -> None:
        updated = clamp_selection(Selection(start, length), self._index.text_length)
        if updated == self._selection:
            return
        self._selection = updated
        self.events.emit(SELECTION_CHANGED, updated)


__all__ = ["InMemoryTextBuffer"]
