"""Editor verbs invoked through key bindings."""

from .core import (
    ActionOutcome,
    PromptRequest,
    clear_marks,
    reset_zoom,
    toggle_dark,
    toggle_mark,
    toggle_triage,
    toggle_wrap,
    undo_template,
    zoom_in,
    zoom_out,
)
from .files import new_document, open_document, quit_editor, save_document
from .search import end_live_search, find, goto_line, insert_template, live_search, replace
from .tools import ascii_to_hex, count_selection, decode_uds, hex_to_ascii

__all__ = [
    "ActionOutcome",
    "PromptRequest",
    "clear_marks",
    "reset_zoom",
    "toggle_dark",
    "toggle_mark",
    "toggle_triage",
    "toggle_wrap",
    "undo_template",
    "zoom_in",
    "zoom_out",
    "new_document",
    "open_document",
    "quit_editor",
    "save_document",
    "end_live_search",
    "find",
    "goto_line",
    "insert_template",
    "live_search",
    "replace",
    "ascii_to_hex",
    "count_selection",
    "decode_uds",
    "hex_to_ascii",
]
