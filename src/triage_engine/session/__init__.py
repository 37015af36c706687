"""Session state, the editor facade, and its view models."""

from .document import DocumentFile
from .editor import LineOutOfRangeError, TriageEditor
from .search import find_from, find_wrapping, replace_all_insensitive
from .state import (
    DEFAULT_ZOOM_PERCENT,
    MAX_ZOOM_PERCENT,
    MIN_ZOOM_PERCENT,
    ZOOM_STEP_PERCENT,
    SearchState,
    SessionState,
)
from .views import GutterRow, StatusSnapshot, window_title

__all__ = [
    "DocumentFile",
    "LineOutOfRangeError",
    "TriageEditor",
    "find_from",
    "find_wrapping",
    "replace_all_insensitive",
    "DEFAULT_ZOOM_PERCENT",
    "MAX_ZOOM_PERCENT",
    "MIN_ZOOM_PERCENT",
    "ZOOM_STEP_PERCENT",
    "SearchState",
    "SessionState",
    "GutterRow",
    "StatusSnapshot",
    "window_title",
]
