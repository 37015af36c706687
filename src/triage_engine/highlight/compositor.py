"""Layered background compositor for marks, triage keywords, and search hits.

Layers are painted strictly in this order, later ones on top::

    default background < marked lines < triage keywords < search matches

Painting goes through the buffer adapter, whose attribute calls fire
selection notifications synchronously. While a pass is running the
compositor sits in a non-idle :class:`CompositorPhase`; notification
handlers consult :attr:`HighlightCompositor.is_suppressing` and bail out.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Protocol, Sequence

from triage_engine.buffer import Color, TextBufferAdapter, TextRange, clamp_range
from triage_engine.runtime import telemetry

from .palette import Palette, ThemeState
from .ranges import MarkedRangeSet
from .scanner import KeywordScanner, find_occurrences, keyword_ranges


class CompositorPhase(str, Enum):
    IDLE = "idle"
    REPAINTING = "repainting"
    SEARCH_HIGHLIGHTING = "search_highlighting"


class LayerSource(Protocol):
    """Session state the compositor reads on every pass."""

    triage_mode: bool
    theme: ThemeState


@dataclass(frozen=True, slots=True)
class PaintOp:
    layer: str
    range: TextRange
    color: Color


@dataclass(frozen=True, slots=True)
class LayerInputs:
    """Everything that determines the final offset -> color mapping."""

    text: str
    palette: Palette
    is_dark: bool = False
    marks: Sequence[TextRange] = ()
    triage_keywords: Sequence[str] = ()
    search_term: str = ""


def is_blank_term(term: Optional[str]) -> bool:
    return not term or term.isspace()


def compose_base_layers(inputs: LayerInputs) -> List[PaintOp]:
    text_length = len(inputs.text)
    ops: List[PaintOp] = []
    if text_length:
        ops.append(
            PaintOp(
                "default",
                TextRange(0, text_length),
                inputs.palette.default_background(inputs.is_dark),
            )
        )
    for mark in inputs.marks:
        target = clamp_range(mark, text_length)
        if target is not None:
            ops.append(PaintOp("marked", target, inputs.palette.marked_color))
    for hit in keyword_ranges(inputs.text, inputs.triage_keywords):
        ops.append(PaintOp("triage", hit, inputs.palette.triage_color))
    return ops


def compose_layers(inputs: LayerInputs) -> List[PaintOp]:
    """Return the ordered paint operations for base layers plus search hits."""

    ops = compose_base_layers(inputs)
    if not is_blank_term(inputs.search_term):
        for hit in find_occurrences(inputs.text, inputs.search_term):
            ops.append(PaintOp("search", hit, inputs.palette.search_color))
    return ops


def render_colors(inputs: LayerInputs) -> List[Color]:
    """Fold :func:`compose_layers` into one background color per offset."""

    colors = [inputs.palette.default_background(inputs.is_dark)] * len(inputs.text)
    for op in compose_layers(inputs):
        colors[op.range.start : op.range.end] = [op.color] * op.range.length
    return colors


class HighlightCompositor:
    """Applies the composited layers to a buffer without moving the caret."""

    def __init__(
        self,
        buffer: TextBufferAdapter,
        marks: MarkedRangeSet,
        scanner: KeywordScanner,
        source: LayerSource,
        *,
        logger_name: str = "triage_engine.compositor",
    ) -> None:
        self.buffer = buffer
        self.marks = marks
        self.scanner = scanner
        self.source = source
        self._logger_name = logger_name
        self._phase = CompositorPhase.IDLE

    @property
    def phase(self) -> CompositorPhase:
        return self._phase

    @property
    def is_suppressing(self) -> bool:
        return self._phase is not CompositorPhase.IDLE

    def layer_inputs(self, search_term: str = "") -> LayerInputs:
        theme = self.source.theme
        keywords = self.scanner.keywords if self.source.triage_mode else ()
        return LayerInputs(
            text=self.buffer.get_text(),
            palette=theme.palette,
            is_dark=theme.is_dark,
            marks=tuple(self.marks.all()),
            triage_keywords=keywords,
            search_term=search_term,
        )

    def repaint(self) -> bool:
        """Repaint the base layers; ``False`` if a pass was already running."""

        with self._pass(CompositorPhase.REPAINTING) as entered:
            if not entered:
                return False
            with telemetry.paint_pass(
                "repaint",
                logger_name=self._logger_name,
                triage=self.source.triage_mode,
                marks=len(self.marks),
            ) as handle:
                ops = compose_base_layers(self.layer_inputs())
                self._apply(ops)
                handle.add_metadata("ops", len(ops))
        return True

    def highlight_search(self, term: str) -> bool:
        """Repaint from a clean base, then paint every match of ``term`` on top."""

        with self._pass(CompositorPhase.SEARCH_HIGHLIGHTING) as entered:
            if not entered:
                return False
            with telemetry.paint_pass(
                "search",
                logger_name=self._logger_name,
                term_length=len(term or ""),
            ) as handle:
                ops = compose_layers(self.layer_inputs(term or ""))
                self._apply(ops)
                handle.add_metadata("ops", len(ops))
        return True

    @contextmanager
    def _pass(self, phase: CompositorPhase) -> Iterator[bool]:
        if self._phase is not CompositorPhase.IDLE:
            telemetry.record_event(
                "compositor.reentry_skipped",
                level="debug",
                data={"active": self._phase.value, "requested": phase.value},
                logger_name=self._logger_name,
            )
            yield False
            return

        saved = self.buffer.get_selection()
        self._phase = phase
        try:
            self.buffer.begin_batch_update()
            try:
                yield True
            finally:
                self.buffer.set_selection(saved.start, saved.length)
                self.buffer.end_batch_update()
        finally:
            self._phase = CompositorPhase.IDLE

    def _apply(self, ops: Sequence[PaintOp]) -> None:
        for op in ops:
            if op.layer == "default":
                self.buffer.select_all()
            self.buffer.set_background(op.range, op.color)


__all__ = [
    "CompositorPhase",
    "HighlightCompositor",
    "LayerInputs",
    "LayerSource",
    "PaintOp",
    "compose_base_layers",
    "compose_layers",
    "is_blank_term",
    "render_colors",
]
