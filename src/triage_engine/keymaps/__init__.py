"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats, ResolutionMatch
from .defaults import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    DOCUMENT_ACTIONS,
    DOCUMENT_BINDINGS,
    load_default_keymaps,
    load_document_keymaps,
)

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "DOCUMENT_ACTIONS",
    "DOCUMENT_BINDINGS",
    "load_default_keymaps",
    "load_document_keymaps",
]
