"""Turn composited buffer backgrounds and gutter rows into rich ``Text``."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple

from rich.text import Text

from triage_engine.buffer import Color, Selection, TextBufferAdapter
from triage_engine.highlight import ThemeState
from triage_engine.session import GutterRow

LIGHT_FOREGROUND = "#000000"
DARK_FOREGROUND = "#E6E6E6"
LIGHT_GUTTER = ("#646464", "#F0F0F0")
DARK_GUTTER = ("#A9A9A9", "#252525")


def foreground_for(theme: ThemeState) -> Color:
    return DARK_FOREGROUND if theme.is_dark else LIGHT_FOREGROUND


def background_runs(
    backgrounds: Sequence[Optional[Color]], default: Color
) -> Iterator[Tuple[int, int, Color]]:
    """Yield ``(start, end, color)`` runs; unpainted cells use ``default``."""

    start = 0
    current: Optional[Color] = None
    for index, color in enumerate(backgrounds):
        resolved = color or default
        if current is None:
            current = resolved
            continue
        if resolved != current:
            yield start, index, current
            start, current = index, resolved
    if current is not None:
        yield start, len(backgrounds), current


def render_document(
    buffer: TextBufferAdapter,
    theme: ThemeState,
    *,
    show_selection: bool = True,
) -> Text:
    text = buffer.get_text()
    foreground = foreground_for(theme)
    rendered = Text(text, style=f"{foreground} on {theme.default_background}")
    for start, end, color in background_runs(
        buffer.backgrounds(), theme.default_background
    ):
        rendered.stylize(f"on {color}", start, end)
    if show_selection:
        _stylize_selection(rendered, buffer.get_selection())
    return rendered


def _stylize_selection(rendered: Text, selection: Selection) -> None:
    if selection.length:
        rendered.stylize("reverse", selection.start, selection.end)
        return
    caret = selection.start
    if caret >= len(rendered.plain):
        rendered.append(" ")
    elif rendered.plain[caret] == "\n":
        # caret at a line end: draw it on a padding cell
        _insert_cell(rendered, caret)
    rendered.stylize("reverse", caret, caret + 1)


def _insert_cell(rendered: Text, offset: int) -> None:
    tail = rendered[offset:]
    rendered.right_crop(len(rendered.plain) - offset)
    rendered.append(" ")
    rendered.append_text(tail)


def render_gutter(rows: Iterable[GutterRow], theme: ThemeState) -> Text:
    foreground, background = DARK_GUTTER if theme.is_dark else LIGHT_GUTTER
    rows = list(rows)
    width = len(str(rows[-1].number)) if rows else 1
    gutter = Text(style=f"{foreground} on {background}")
    for index, row in enumerate(rows):
        if index:
            gutter.append("\n")
        style = f"{LIGHT_FOREGROUND} on {row.background}" if row.background else None
        gutter.append(str(row.number).rjust(width), style=style)
    return gutter


__all__ = [
    "background_runs",
    "foreground_for",
    "render_document",
    "render_gutter",
    "LIGHT_FOREGROUND",
    "DARK_FOREGROUND",
]
