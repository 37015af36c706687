"""Text buffer adapter contract and the in-memory reference surface."""

from .document import LineIndex
from .memory import InMemoryTextBuffer
from .state import Selection, TextRange
from .sync import (
    SELECTION_CHANGED,
    TEXT_CHANGED,
    EventBus,
    Color,
    TextBufferAdapter,
)
from .undo import TemplateSnapshot
from .validation import clamp_range, clamp_selection

__all__ = [
    "LineIndex",
    "InMemoryTextBuffer",
    "Selection",
    "TextRange",
    "EventBus",
    "Color",
    "TextBufferAdapter",
    "SELECTION_CHANGED",
    "TEXT_CHANGED",
    "TemplateSnapshot",
    "clamp_range",
    "clamp_selection",
]
