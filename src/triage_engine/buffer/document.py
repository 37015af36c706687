"""Line/offset bookkeeping for plain-text buffers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List

from .state import TextRange


@dataclass(slots=True)
class LineIndex:
    """Offsets of the first character of every line in a text.

    Lines are separated by ``"\\n"``; a trailing newline opens an empty last
    line, so ``"a\\n"`` has two lines.
    """

    text: str = ""
    _starts: List[int] = field(default_factory=lambda: [0])

    @classmethod
    def from_text(cls, text: str) -> "LineIndex":
        starts = [0]
        position = text.find("\n")
        while position != -1:
            starts.append(position + 1)
            position = text.find("\n", position + 1)
        return cls(text=text, _starts=starts)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    @property
    def text_length(self) -> int:
        return len(self.text)

    def line_index_of(self, offset: int) -> int:
        """Return the zero-based line holding ``offset`` (clamped to the text)."""

        offset = min(max(0, offset), len(self.text))
        return bisect_right(self._starts, offset) - 1

    def first_char_offset_of(self, line: int) -> int:
        """Return the offset of ``line``'s first character, or -1 if absent."""

        if line < 0 or line >= len(self._starts):
            return -1
        return self._starts[line]

    def line_range(self, line: int) -> TextRange:
        """Span of ``line`` including its trailing newline, if any."""

        start = self.first_char_offset_of(line)
        if start < 0:
            return TextRange(len(self.text), 0)
        if line + 1 < len(self._starts):
            next_start = self._starts[line + 1]
        else:
            next_start = len(self.text)
        return TextRange(start, max(0, next_start - start))


__all__ = ["LineIndex"]
