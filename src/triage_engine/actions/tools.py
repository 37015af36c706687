"""Selection-based diagnostic actions (UDS decode, hex conversion, counting)."""

from __future__ import annotations

from typing import Callable

from triage_engine.session import TriageEditor
from triage_engine.tools import (
    HexDecodeError,
    ascii_to_hex as _ascii_to_hex,
    describe_uds_selection,
    hex_to_ascii as _hex_to_ascii,
)

from .core import ActionOutcome, ask

_YES = {"y", "yes"}


def _no_selection(what: str) -> ActionOutcome:
    return ActionOutcome(status="no_selection", message=f"Please select {what}.")


def decode_uds(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    selected = editor.selected_text()
    if not selected.strip():
        return _no_selection("UDS service text to decode")
    return ActionOutcome(message=describe_uds_selection(selected))


def count_selection(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    selected = editor.selected_text()
    if not selected:
        return _no_selection("text to count occurrences")
    count = editor.count_occurrences(selected)
    return ActionOutcome(message=f"Found {count} occurrence(s) of '{selected}'.")


def _convert_selection(
    editor: TriageEditor,
    action_id: str,
    convert: Callable[[str], str],
    args: tuple[str, ...],
) -> ActionOutcome:
    result = convert(editor.selected_text())
    if not args:
        return ask(
            action_id,
            f"Converted Result: {result} | Apply this change? (y/n):",
            default="y",
        )
    if args[0].strip().lower() not in _YES:
        return ActionOutcome(status="cancelled", message=result)
    editor.replace_selection(result)
    return ActionOutcome(message="Conversion applied.")


def hex_to_ascii(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not editor.selected_text().strip():
        return _no_selection("hex text to convert")
    try:
        return _convert_selection(editor, "tools.hex_to_ascii", _hex_to_ascii, args)
    except HexDecodeError as exc:
        return ActionOutcome(status="error", message=str(exc))


def ascii_to_hex(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not editor.selected_text():
        return _no_selection("text to convert to hex")
    return _convert_selection(editor, "tools.ascii_to_hex", _ascii_to_hex, args)


__all__ = ["decode_uds", "count_selection", "hex_to_ascii", "ascii_to_hex"]
