"""Textual host for the triage editor.

The controller and renderer import without Textual's app machinery; only
``app`` requires the ``textual`` package at import time.
"""

from .controller import TextualTriageAdapter, TextualUIHooks
from .render import background_runs, render_document, render_gutter

__all__ = [
    "TextualTriageAdapter",
    "TextualUIHooks",
    "background_runs",
    "render_document",
    "render_gutter",
]
