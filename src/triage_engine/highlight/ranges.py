"""Insertion-ordered set of user-marked character ranges."""

from __future__ import annotations

from typing import Iterator, List

from triage_engine.buffer import TextRange


class MarkedRangeSet:
    """Ordered, duplicate-free collection of :class:`TextRange` values.

    Membership is by ``(start, length)`` value. Linear lookup is fine for the
    tens to low hundreds of marks a triage session accumulates.
    """

    def __init__(self) -> None:
        self._ranges: List[TextRange] = []

    def __len__(self) -> int:
        return len(self._ranges)

    def __contains__(self, text_range: object) -> bool:
        return text_range in self._ranges

    def __iter__(self) -> Iterator[TextRange]:
        return self.all()

    def toggle(self, text_range: TextRange) -> bool:
        """Add ``text_range`` or remove its equal; return ``True`` if now marked."""

        if text_range in self._ranges:
            self._ranges.remove(text_range)
            return False
        self._ranges.append(text_range)
        return True

    def clear(self) -> None:
        self._ranges.clear()

    def all(self) -> Iterator[TextRange]:
        return iter(tuple(self._ranges))


__all__ = ["MarkedRangeSet"]
