"""Mode/session state read by the compositor and mutated by editor actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from triage_engine.buffer import TemplateSnapshot
from triage_engine.highlight import Palette, ThemeState

DEFAULT_ZOOM_PERCENT = 100
MIN_ZOOM_PERCENT = 10
MAX_ZOOM_PERCENT = 500
ZOOM_STEP_PERCENT = 10


@dataclass(slots=True)
class SearchState:
    last_query: str = ""
    is_live: bool = False


@dataclass(slots=True)
class SessionState:
    """Toggles and derived sets owned by one editing session.

    ``triage_lines`` is derived data: it is replaced wholesale on every scan
    and is empty whenever ``triage_mode`` is off.
    """

    theme: ThemeState = field(default_factory=lambda: ThemeState(Palette()))
    triage_mode: bool = False
    triage_lines: FrozenSet[int] = frozenset()
    word_wrap: bool = True
    zoom_percent: int = DEFAULT_ZOOM_PERCENT
    search: SearchState = field(default_factory=SearchState)
    template_snapshot: TemplateSnapshot = field(default_factory=TemplateSnapshot)

    @property
    def dark_mode(self) -> bool:
        return self.theme.is_dark

    def set_zoom(self, percent: int) -> int:
        self.zoom_percent = min(max(percent, MIN_ZOOM_PERCENT), MAX_ZOOM_PERCENT)
        return self.zoom_percent


__all__ = [
    "SearchState",
    "SessionState",
    "DEFAULT_ZOOM_PERCENT",
    "MIN_ZOOM_PERCENT",
    "MAX_ZOOM_PERCENT",
    "ZOOM_STEP_PERCENT",
]
