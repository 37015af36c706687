"""Character-range and selection value types shared by the buffer layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextRange:
    """Contiguous ``[start, start + length)`` span in character coordinates.

    Equality is by value, which is how "is this line already marked" is
    answered.
    """

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start cannot be negative")
        if self.length < 0:
            raise ValueError("length cannot be negative")

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class Selection:
    """Caret position plus selection length, as reported by a text widget."""

    start: int = 0
    length: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length


__all__ = ["TextRange", "Selection"]
