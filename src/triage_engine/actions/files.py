"""Document actions bound to a :class:`DocumentFile`: new, open, save and quit.

Every action that would drop the current text first asks whether to save
unsaved edits. ``y`` saves (asking for a path when the document has none),
``n`` discards, anything else cancels.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from triage_engine.session import DocumentFile, TriageEditor

from .core import ActionOutcome, ask

_YES = {"y", "yes"}
_NO = {"n", "no"}


def _save(document: DocumentFile, target: Optional[str] = None) -> ActionOutcome:
    try:
        saved = document.save(target)
    except OSError as exc:
        return ActionOutcome(status="error", message=f"Error saving file: {exc}")
    return ActionOutcome(message=f"Saved {saved}")


def settle_unsaved(
    document: DocumentFile,
    action_id: str,
    collected: tuple[str, ...],
    answers: tuple[str, ...],
) -> Optional[ActionOutcome]:
    """Return an outcome that stops ``action_id``, or ``None`` to let it proceed.

    ``collected`` are the action's own inputs and are carried through the
    prompts; ``answers`` are the replies to the save question so far.
    """

    if not document.dirty:
        return None
    if not answers:
        name = document.display_name or "[Untitled]"
        return ask(
            action_id, f"Save changes to {name}? (y/n/c):", *collected, default="y"
        )
    choice = answers[0].strip().lower()
    if choice in _NO:
        return None
    if choice not in _YES:
        return ActionOutcome(status="cancelled", message="Cancelled.")
    if document.path is None and len(answers) < 2:
        return ask(action_id, "Save as:", *collected, answers[0])
    target = answers[1].strip() if len(answers) > 1 else None
    if target == "":
        return ActionOutcome(status="cancelled", message="Cancelled.")
    saved = _save(document, target)
    return saved if not saved.ok else None


def new_document(
    document: DocumentFile, editor: TriageEditor, *args: str
) -> ActionOutcome:
    del editor
    blocked = settle_unsaved(document, "file.new", (), args)
    if blocked is not None:
        return blocked
    document.new()
    return ActionOutcome(message="New document.")


def open_document(
    document: DocumentFile, editor: TriageEditor, *args: str
) -> ActionOutcome:
    del editor
    if not args:
        return ask("file.open", "Open file:")
    path = args[0].strip()
    if not path:
        return ActionOutcome(status="noop")
    blocked = settle_unsaved(document, "file.open", args[:1], args[1:])
    if blocked is not None:
        return blocked
    try:
        document.open(path)
    except (OSError, UnicodeDecodeError) as exc:
        return ActionOutcome(status="error", message=f"Error opening file: {exc}")
    return ActionOutcome(message=f"Opened {document.display_name}")


def save_document(
    document: DocumentFile, editor: TriageEditor, *args: str
) -> ActionOutcome:
    del editor
    if document.path is None and not args:
        return ask("file.save", "Save as:")
    target = args[0].strip() if args else None
    if target == "":
        return ActionOutcome(status="noop")
    return _save(document, target)


def quit_editor(
    document: DocumentFile, editor: TriageEditor, *args: str
) -> ActionOutcome:
    del editor
    blocked = settle_unsaved(document, "app.quit", (), args)
    if blocked is not None:
        return blocked
    return ActionOutcome(status="quit")


def bind_document(
    document: DocumentFile,
) -> dict[str, Callable[..., ActionOutcome]]:
    """Handlers keyed by action id, each closed over ``document``."""

    return {
        "file.new": partial(new_document, document),
        "file.open": partial(open_document, document),
        "file.save": partial(save_document, document),
        "app.quit": partial(quit_editor, document),
    }


__all__ = [
    "bind_document",
    "new_document",
    "open_document",
    "quit_editor",
    "save_document",
    "settle_unsaved",
]
