"""Background palette and theme state for the highlight layers."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

from triage_engine.buffer import Color

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def normalize_color(value: str) -> Color:
    cleaned = value.strip()
    if not _HEX_COLOR.match(cleaned):
        raise ValueError(f"Expected a #RRGGBB color, got '{value}'")
    return cleaned.upper()


@dataclass(frozen=True, slots=True)
class Palette:
    default_light_bg: Color = "#FFFFFF"
    default_dark_bg: Color = "#1E1E1E"
    marked_color: Color = "#ADD8E6"
    triage_color: Color = "#FFC864"
    search_color: Color = "#FFFF00"

    def __post_init__(self) -> None:
        for item in fields(self):
            object.__setattr__(
                self, item.name, normalize_color(getattr(self, item.name))
            )

    def default_background(self, is_dark: bool) -> Color:
        return self.default_dark_bg if is_dark else self.default_light_bg


@dataclass(slots=True)
class ThemeState:
    """Session-mutable half of the theme; the palette itself is constant."""

    palette: Palette
    is_dark: bool = False

    @property
    def default_background(self) -> Color:
        return self.palette.default_background(self.is_dark)

    def toggle(self) -> bool:
        self.is_dark = not self.is_dark
        return self.is_dark


__all__ = ["Palette", "ThemeState", "normalize_color"]
