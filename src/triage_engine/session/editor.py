"""Editor facade wiring session state, marks, triage, search, and repainting.

UI code talks to :class:`TriageEditor` only. The editor subscribes to the
buffer's notifications and republishes higher-level events on
:attr:`TriageEditor.bus`:

``status.changed``      caret/selection moved outside a compositor pass
``document.changed``    buffer text replaced (file collaborators set dirty)
``document.loaded``     a new document replaced the session contents
``highlight.repainted`` a repaint or search-highlight pass finished
``triage.toggled``      triage mode flipped (payload: new flag)
``theme.changed``       dark mode flipped (payload: new flag)
``view.changed``        word wrap or zoom changed
``marks.changed``       marked-line set changed (payload: mark count)
"""

from __future__ import annotations

from typing import List, Optional

from triage_engine.buffer import (
    SELECTION_CHANGED,
    TEXT_CHANGED,
    EventBus,
    InMemoryTextBuffer,
    TextBufferAdapter,
    TextRange,
)
from triage_engine.config import EngineConfig
from triage_engine.highlight import (
    HighlightCompositor,
    KeywordScanner,
    MarkedRangeSet,
    ThemeState,
    count_occurrences,
    is_blank_term,
)
from triage_engine.runtime import telemetry
from triage_engine.tools import get_template

from .search import find_from, find_wrapping, replace_all_insensitive
from .state import DEFAULT_ZOOM_PERCENT, ZOOM_STEP_PERCENT, SessionState
from .views import GutterRow, StatusSnapshot, build_gutter, build_status

LOGGER_NAME = "triage_engine.session"


class LineOutOfRangeError(ValueError):
    """Raised by :meth:`TriageEditor.go_to_line` for lines outside the text."""

    def __init__(self, line: int, line_count: int) -> None:
        super().__init__(f"Line number must be between 1 and {line_count}.")
        self.line = line
        self.line_count = line_count


class TriageEditor:
    """Core entry points for marking, triage, theming, search, and templates."""

    def __init__(
        self,
        buffer: Optional[TextBufferAdapter] = None,
        *,
        config: Optional[EngineConfig] = None,
        state: Optional[SessionState] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.buffer: TextBufferAdapter = buffer or InMemoryTextBuffer()
        self.state = state or SessionState(theme=ThemeState(self.config.palette))
        self.marks = MarkedRangeSet()
        self.scanner = KeywordScanner(self.config.triage_keywords)
        self.compositor = HighlightCompositor(
            self.buffer, self.marks, self.scanner, self.state
        )
        self.bus = EventBus()
        self.buffer.events.subscribe(SELECTION_CHANGED, self.on_selection_changed)
        self.buffer.events.subscribe(TEXT_CHANGED, self.on_text_changed)

    def on_selection_changed(self, payload: object | None = None) -> bool:
        del payload
        if self.compositor.is_suppressing:
            return False
        self.bus.emit("status.changed", self.status())
        return True

    def on_text_changed(self, payload: object | None = None) -> bool:
        del payload
        if self.compositor.is_suppressing:
            return False
        if self.state.triage_mode:
            self.recompute_triage_lines()
        self.bus.emit("document.changed", None)
        return True

    def repaint(self) -> bool:
        painted = self.compositor.repaint()
        if painted:
            self.bus.emit("highlight.repainted", "base")
        return painted

    def highlight_search(self, term: str) -> bool:
        painted = self.compositor.highlight_search(term)
        if painted:
            self.bus.emit("highlight.repainted", "search")
        return painted

    def line_range(self, line: int) -> TextRange:
        """Line span from its first character to the next line's first character."""

        start = max(0, self.buffer.first_char_offset_of(line))
        if line + 1 < self.buffer.get_line_count():
            next_start = self.buffer.first_char_offset_of(line + 1)
        else:
            next_start = self.buffer.get_text_length()
        return TextRange(start, max(0, next_start - start))

    def toggle_mark_at(self, offset: int) -> bool:
        line = self.buffer.line_index_of(offset)
        marked = self.marks.toggle(self.line_range(line))
        telemetry.record_event(
            "marks.toggled",
            data={"line": line, "marked": marked},
            logger_name=LOGGER_NAME,
        )
        self.repaint()
        self.bus.emit("marks.changed", len(self.marks))
        return marked

    def toggle_mark_at_cursor(self) -> bool:
        return self.toggle_mark_at(self.buffer.get_selection().start)

    def clear_all_marks(self) -> None:
        self.marks.clear()
        telemetry.record_event("marks.cleared", logger_name=LOGGER_NAME)
        self.repaint()
        self.bus.emit("marks.changed", 0)

    def recompute_triage_lines(self) -> None:
        self.state.triage_lines = self.scanner.scan_text(self.buffer.get_text())

    def toggle_triage_mode(self) -> bool:
        self.state.triage_mode = not self.state.triage_mode
        if self.state.triage_mode:
            self.recompute_triage_lines()
        else:
            self.state.triage_lines = frozenset()
        telemetry.record_event(
            "triage.toggled",
            data={
                "enabled": self.state.triage_mode,
                "lines": len(self.state.triage_lines),
            },
            logger_name=LOGGER_NAME,
        )
        self.repaint()
        self.bus.emit("triage.toggled", self.state.triage_mode)
        return self.state.triage_mode

    def toggle_dark_mode(self) -> bool:
        is_dark = self.state.theme.toggle()
        telemetry.record_event(
            "theme.toggled", data={"dark": is_dark}, logger_name=LOGGER_NAME
        )
        self.repaint()
        self.bus.emit("theme.changed", is_dark)
        return is_dark

    def toggle_word_wrap(self) -> bool:
        self.state.word_wrap = not self.state.word_wrap
        self.bus.emit("view.changed", None)
        return self.state.word_wrap

    def set_zoom(self, percent: int) -> int:
        zoom = self.state.set_zoom(percent)
        self.bus.emit("view.changed", None)
        return zoom

    def zoom_in(self) -> int:
        return self.set_zoom(self.state.zoom_percent + ZOOM_STEP_PERCENT)

    def zoom_out(self) -> int:
        return self.set_zoom(self.state.zoom_percent - ZOOM_STEP_PERCENT)

    def reset_zoom(self) -> int:
        return self.set_zoom(DEFAULT_ZOOM_PERCENT)

    def load_document(self, text: str) -> None:
        """Swap in a new document; offsets from the old one are dropped."""

        self.marks.clear()
        self.state.triage_lines = frozenset()
        self.state.template_snapshot.clear()
        self.state.set_zoom(DEFAULT_ZOOM_PERCENT)
        self.buffer.set_text(text)
        if self.state.triage_mode:
            self.recompute_triage_lines()
            self.repaint()
        telemetry.record_event(
            "document.loaded",
            data={"chars": len(text), "lines": self.buffer.get_line_count()},
            logger_name=LOGGER_NAME,
        )
        self.bus.emit("document.loaded", None)

    def replace_selection(self, text: str) -> None:
        selection = self.buffer.get_selection()
        current = self.buffer.get_text()
        self.buffer.set_text(current[: selection.start] + text + current[selection.end :])
        self.buffer.set_selection(selection.start + len(text), 0)
        self.repaint()

    def selected_text(self) -> str:
        selection = self.buffer.get_selection()
        return self.buffer.get_text()[selection.start : selection.end]

    def go_to_line(self, number: int) -> int:
        """Move the caret to the start of 1-based line ``number``."""

        line_count = self.buffer.get_line_count()
        if number < 1 or number > line_count:
            raise LineOutOfRangeError(number, line_count)
        offset = self.buffer.first_char_offset_of(number - 1)
        self.buffer.set_selection(offset, 0)
        return offset

    def count_occurrences(self, text: str) -> int:
        return count_occurrences(self.buffer.get_text(), text)

    def run_find(self, query: str) -> bool:
        if is_blank_term(query):
            return False
        self.state.search.last_query = query
        self.state.search.is_live = False
        selection = self.buffer.get_selection()
        hit = find_wrapping(self.buffer.get_text(), query, selection.end)
        telemetry.record_event(
            "search.find",
            data={"found": hit is not None, "start": selection.end},
            logger_name=LOGGER_NAME,
        )
        if hit is None:
            return False
        self.buffer.set_selection(hit.start, hit.length)
        self.highlight_search(query)
        return True

    def run_live_search(self, query: str) -> None:
        self.state.search.last_query = query
        self.state.search.is_live = True
        self.highlight_search(query)

    def end_live_search(self) -> None:
        self.state.search.is_live = False
        if is_blank_term(self.state.search.last_query):
            self.repaint()

    def run_replace(
        self, find: str, replace_with: str, replace_all: bool = False
    ) -> int:
        if is_blank_term(find):
            return 0
        self.state.search.last_query = find
        self.state.search.is_live = False
        text = self.buffer.get_text()
        if replace_all:
            updated, count = replace_all_insensitive(text, find, replace_with)
            if count:
                self.buffer.set_text(updated)
                self.highlight_search(find)
        else:
            selection = self.buffer.get_selection()
            hit = find_from(text, find, selection.start)
            count = 0
            if hit is not None:
                self.buffer.set_text(text[: hit.start] + replace_with + text[hit.end :])
                self.buffer.set_selection(hit.start + len(replace_with), 0)
                self.repaint()
                count = 1
        telemetry.record_event(
            "search.replace",
            data={"all": replace_all, "count": count},
            logger_name=LOGGER_NAME,
        )
        return count

    def insert_template(self, text: str) -> None:
        current = self.buffer.get_text()
        self.state.template_snapshot.take(current)
        self.buffer.set_text(current + text)
        self.buffer.set_selection(self.buffer.get_text_length(), 0)
        self.repaint()
        telemetry.record_event(
            "template.inserted", data={"chars": len(text)}, logger_name=LOGGER_NAME
        )

    def insert_template_named(self, name: str) -> None:
        self.insert_template(get_template(name))

    def undo_last_template_insertion(self) -> bool:
        previous = self.state.template_snapshot.consume()
        if previous is None:
            return False
        self.buffer.set_text(previous)
        self.repaint()
        telemetry.record_event("template.undone", logger_name=LOGGER_NAME)
        return True

    def status(self) -> StatusSnapshot:
        return build_status(self.buffer, self.state)

    def gutter_rows(
        self, first_line: int = 0, count: Optional[int] = None
    ) -> List[GutterRow]:
        return build_gutter(self.buffer, self.state, first_line, count)


__all__ = ["TriageEditor", "LineOutOfRangeError", "LOGGER_NAME"]
