"""Built-in actions and single-stroke bindings for the triage editor."""

from __future__ import annotations

from typing import Iterable, Sequence

from triage_engine.actions import core as core_actions
from triage_engine.actions import files as file_actions
from triage_engine.actions import search as search_actions
from triage_engine.actions import tools as tool_actions
from triage_engine.session import DocumentFile

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("marks.toggle", core_actions.toggle_mark, "Mark or unmark the caret line"),
    ActionRef("marks.clear", core_actions.clear_marks, "Clear all marked lines"),
    ActionRef("triage.toggle", core_actions.toggle_triage, "Toggle triage mode"),
    ActionRef("theme.toggle_dark", core_actions.toggle_dark, "Toggle dark mode"),
    ActionRef("view.toggle_wrap", core_actions.toggle_wrap, "Toggle word wrap"),
    ActionRef("view.zoom_in", core_actions.zoom_in, "Zoom in"),
    ActionRef("view.zoom_out", core_actions.zoom_out, "Zoom out"),
    ActionRef("view.zoom_reset", core_actions.reset_zoom, "Reset zoom"),
    ActionRef(
        "search.find",
        search_actions.find,
        "Find next occurrence",
        metadata={"prompt": True},
    ),
    ActionRef(
        "search.live",
        search_actions.live_search,
        "Highlight matches while typing",
        metadata={"prompt": True, "live": True},
    ),
    ActionRef("search.end_live", search_actions.end_live_search, "Close live search"),
    ActionRef(
        "search.replace",
        search_actions.replace,
        "Replace text",
        metadata={"prompt": True},
    ),
    ActionRef(
        "navigate.goto_line",
        search_actions.goto_line,
        "Go to line",
        metadata={"prompt": True},
    ),
    ActionRef(
        "template.insert",
        search_actions.insert_template,
        "Insert a log template",
        metadata={"prompt": True},
    ),
    ActionRef("template.undo", core_actions.undo_template, "Undo template insertion"),
    ActionRef("tools.decode_uds", tool_actions.decode_uds, "Decode UDS service"),
    ActionRef(
        "tools.hex_to_ascii",
        tool_actions.hex_to_ascii,
        "Convert selected hex to ASCII",
        metadata={"prompt": True},
    ),
    ActionRef(
        "tools.ascii_to_hex",
        tool_actions.ascii_to_hex,
        "Convert selected text to hex",
        metadata={"prompt": True},
    ),
    ActionRef(
        "tools.count_selection",
        tool_actions.count_selection,
        "Count occurrences of the selection",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding("key.mark", "ctrl+b", "marks.toggle", "Mark line"),
    Binding("key.clear_marks", "f4", "marks.clear", "Clear marks"),
    Binding("key.triage", "ctrl+t", "triage.toggle", "Triage mode"),
    Binding("key.dark", "ctrl+d", "theme.toggle_dark", "Dark mode"),
    Binding("key.wrap", "f5", "view.toggle_wrap", "Word wrap"),
    Binding("key.zoom_in", "f6", "view.zoom_in", "Zoom in"),
    Binding("key.zoom_out", "f7", "view.zoom_out", "Zoom out"),
    Binding("key.zoom_reset", "f8", "view.zoom_reset", "Reset zoom"),
    Binding("key.find", "ctrl+f", "search.find", "Find"),
    Binding("key.live", "ctrl+l", "search.live", "Live search"),
    Binding("key.replace", "ctrl+r", "search.replace", "Replace"),
    Binding("key.goto", "ctrl+g", "navigate.goto_line", "Go to line"),
    Binding("key.template", "f9", "template.insert", "Insert template"),
    Binding("key.template_undo", "ctrl+u", "template.undo", "Undo template"),
    Binding(
        "key.decode_uds",
        "alt+u",
        "tools.decode_uds",
        "Decode UDS",
        when=("has_selection",),
        tags=("tools",),
    ),
    Binding(
        "key.hex_to_ascii",
        "alt+h",
        "tools.hex_to_ascii",
        "Hex to ASCII",
        when=("has_selection",),
        tags=("tools",),
    ),
    Binding(
        "key.ascii_to_hex",
        "alt+a",
        "tools.ascii_to_hex",
        "ASCII to hex",
        when=("has_selection",),
        tags=("tools",),
    ),
    Binding(
        "key.count_selection",
        "alt+c",
        "tools.count_selection",
        "Count occurrences",
        when=("has_selection",),
        tags=("tools",),
    ),
)

DOCUMENT_ACTIONS: tuple[tuple[str, str], ...] = (
    ("file.new", "New document"),
    ("file.open", "Open a log file"),
    ("file.save", "Save the document"),
    ("app.quit", "Quit, offering to save unsaved edits"),
)

DOCUMENT_BINDINGS: tuple[Binding, ...] = (
    Binding("key.new", "ctrl+n", "file.new", "New", tags=("file",)),
    Binding("key.open", "ctrl+o", "file.open", "Open", tags=("file",)),
    Binding("key.save", "ctrl+s", "file.save", "Save", tags=("file",)),
    Binding("key.quit", "ctrl+q", "app.quit", "Quit", tags=("file",)),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register built-in actions and bindings."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def load_document_keymaps(
    registry: KeymapRegistry, document: DocumentFile, *, replace: bool = False
) -> None:
    """Register new/open/save/quit for ``document`` and their bindings."""

    handlers = file_actions.bind_document(document)
    for action_id, description in DOCUMENT_ACTIONS:
        registry.register_action(
            ActionRef(
                action_id,
                handlers[action_id],
                description,
                metadata={"prompt": True, "document": True},
            ),
            replace=replace,
        )
    for binding in DOCUMENT_BINDINGS:
        registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = [
    "load_default_keymaps",
    "load_document_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "DOCUMENT_ACTIONS",
    "DOCUMENT_BINDINGS",
]
