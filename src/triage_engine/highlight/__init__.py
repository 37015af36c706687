"""Highlight layering: marks, triage keywords, search hits, and the compositor."""

from .compositor import (
    CompositorPhase,
    HighlightCompositor,
    LayerInputs,
    LayerSource,
    PaintOp,
    compose_base_layers,
    compose_layers,
    is_blank_term,
    render_colors,
)
from .palette import Palette, ThemeState, normalize_color
from .ranges import MarkedRangeSet
from .scanner import (
    DEFAULT_TRIAGE_KEYWORDS,
    KeywordScanner,
    count_occurrences,
    find_occurrences,
    keyword_ranges,
)

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
    "Palette",
    "ThemeState",
    "normalize_color",
    "MarkedRangeSet",
    "DEFAULT_TRIAGE_KEYWORDS",
    "KeywordScanner",
    "count_occurrences",
    "find_occurrences",
    "keyword_ranges",
]
