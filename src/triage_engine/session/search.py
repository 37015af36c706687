"""Case-insensitive find/replace primitives over plain text."""

from __future__ import annotations

from typing import List, Optional, Tuple

from triage_engine.buffer import TextRange
from triage_engine.highlight import find_occurrences


def find_from(text: str, needle: str, start: int) -> Optional[TextRange]:
    """First case-insensitive match of ``needle`` starting at or after ``start``."""

    if not needle:
        return None
    start = min(max(0, start), len(text))
    hit = next(find_occurrences(text[start:], needle), None)
    if hit is None:
        return None
    return TextRange(hit.start + start, hit.length)


def find_wrapping(text: str, needle: str, start: int) -> Optional[TextRange]:
    """Search forward from ``start``, then once more from the top."""

    hit = find_from(text, needle, start)
    if hit is None and start > 0:
        hit = find_from(text, needle, 0)
    return hit


def replace_all_insensitive(text: str, find: str, replacement: str) -> Tuple[str, int]:
    if not find:
        return text, 0
    parts: List[str] = []
    position = 0
    count = 0
    for hit in find_occurrences(text, find):
        parts.append(text[position : hit.start])
        parts.append(replacement)
        position = hit.end
        count += 1
    parts.append(text[position:])
    return "".join(parts), count


__all__ = ["find_from", "find_wrapping", "replace_all_insensitive"]
