"""Adapter boundary types for syncing the engine with host text widgets."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Protocol, Tuple

from .state import Selection, TextRange

Color = str  # "#RRGGBB"

SELECTION_CHANGED = "selection_changed"
TEXT_CHANGED = "text_changed"


class EventBus:
    """Synchronous publish/subscribe hub used for buffer and editor notifications."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object | None], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object | None], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(
        self, event: str, callback: Callable[[object | None], None]
    ) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class TextBufferAdapter(Protocol):
    """Editable text surface the highlight engine paints through.

    Implementations fire ``selection_changed`` and ``text_changed`` on
    ``events`` synchronously, from inside the mutating call.
    """

    events: EventBus

    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...

    def get_line_count(self) -> int: ...

    def get_text_length(self) -> int: ...

    def line_index_of(self, offset: int) -> int: ...

    def first_char_offset_of(self, line: int) -> int: ...

    def set_background(self, text_range: TextRange, color: Color) -> None: ...

    def backgrounds(self) -> Tuple[Optional[Color], ...]: ...

    def select_all(self) -> None: ...

    def get_selection(self) -> Selection: ...

    def set_selection(self, start: int, length: int) -> None: ...

    def begin_batch_update(self) -> None: ...

    def end_batch_update(self) -> None: ...


__all__ = [
    "Color",
    "EventBus",
    "TextBufferAdapter",
    "SELECTION_CHANGED",
    "TEXT_CHANGED",
]
