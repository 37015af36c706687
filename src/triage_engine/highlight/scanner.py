"""Case-insensitive keyword scanning over log text."""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable, Iterator, Optional, Sequence

from triage_engine.buffer import TextRange

DEFAULT_TRIAGE_KEYWORDS: tuple[str, ...] = (
    "FAIL",
    "ERROR",
    "DENIED",
    "0x27",
    "0x7F",
    "NRC",
)


def find_occurrences(text: str, needle: str) -> Iterator[TextRange]:
    """Yield every case-insensitive match of ``needle`` left to right.

    Matches never overlap: scanning resumes right after each hit, so ``"aa"``
    occurs twice in ``"aaaa"``, not three times.
    """

    if not needle:
        return
    for match in re.finditer(re.escape(needle), text, re.IGNORECASE):
        yield TextRange(match.start(), match.end() - match.start())


def count_occurrences(text: str, needle: str) -> int:
    return sum(1 for _ in find_occurrences(text, needle))


def keyword_ranges(text: str, keywords: Iterable[str]) -> Iterator[TextRange]:
    """Yield keyword hits in keyword order, each keyword left to right."""

    for keyword in keywords:
        yield from find_occurrences(text, keyword)


class KeywordScanner:
    """Maps a document to the set of line indices containing any keyword.

    Matching is a case-insensitive substring test, so ``ERROR`` also hits
    ``SECURITY_ERRORS``. Every call rescans the whole text.
    """

    def __init__(self, keywords: Iterable[str] = DEFAULT_TRIAGE_KEYWORDS) -> None:
        self.keywords: tuple[str, ...] = tuple(keywords)
        if any(not keyword for keyword in self.keywords):
            raise ValueError("triage keywords cannot be empty strings")
        self._pattern: Optional[re.Pattern[str]] = None
        if self.keywords:
            self._pattern = re.compile(
                "|".join(re.escape(keyword) for keyword in self.keywords),
                re.IGNORECASE,
            )

    def line_matches(self, line: str) -> bool:
        return self._pattern is not None and self._pattern.search(line) is not None

    def scan(self, lines: Sequence[str]) -> FrozenSet[int]:
        if self._pattern is None:
            return frozenset()
        return frozenset(
            index for index, line in enumerate(lines) if self.line_matches(line)
        )

    def scan_text(self, text: str) -> FrozenSet[int]:
        return self.scan(text.split("\n"))


__all__ = [
    "DEFAULT_TRIAGE_KEYWORDS",
    "KeywordScanner",
    "count_occurrences",
    "find_occurrences",
    "keyword_ranges",
]
