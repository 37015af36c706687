"""Bounds helpers shared across buffer services."""

from __future__ import annotations

from typing import Optional

from .state import Selection, TextRange


def clamp_range(text_range: TextRange, text_length: int) -> Optional[TextRange]:
    """Fit ``text_range`` into a buffer of ``text_length`` characters.

    Returns ``None`` when nothing of the range survives: it starts at or past
    the end of the text, or it is empty.
    """

    if text_range.length <= 0 or text_range.start >= text_length:
        return None
    length = min(text_range.length, text_length - text_range.start)
    if length == text_range.length:
        return text_range
    return TextRange(text_range.start, length)


def clamp_selection(selection: Selection, text_length: int) -> Selection:
    start = min(max(0, selection.start), text_length)
    length = min(max(0, selection.length), text_length - start)
    return Selection(start, length)


__all__ = ["clamp_range", "clamp_selection"]
