"""Actions that collect input through prompts: find, replace, go-to, templates."""

from __future__ import annotations

from triage_engine.session import LineOutOfRangeError, TriageEditor
from triage_engine.tools import template_names

from .core import ActionOutcome, ask

_YES = {"y", "yes"}


def find(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not args:
        return ask("search.find", "Find:", default=editor.state.search.last_query)
    query = args[0]
    if not query.strip():
        return ActionOutcome(status="noop")
    if editor.run_find(query):
        return ActionOutcome()
    return ActionOutcome(status="not_found", message=f"'{query}' not found.")


def live_search(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not args:
        return ask(
            "search.live", "Live search:", default=editor.state.search.last_query
        )
    editor.run_live_search(args[0])
    editor.end_live_search()
    count = editor.count_occurrences(args[0])
    return ActionOutcome(message=f"{count} match(es)")


def end_live_search(editor: TriageEditor, *args: str) -> ActionOutcome:
    del args
    editor.end_live_search()
    return ActionOutcome()


def replace(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not args:
        return ask("search.replace", "Find:", default=editor.state.search.last_query)
    if not args[0].strip():
        return ActionOutcome(status="noop")
    if len(args) == 1:
        return ask("search.replace", "Replace with:", *args)
    if len(args) == 2:
        return ask("search.replace", "Replace all? (y/n):", *args, default="n")
    find_text, replacement, answer = args[:3]
    replace_all = answer.strip().lower() in _YES
    count = editor.run_replace(find_text, replacement, replace_all=replace_all)
    if count == 0:
        return ActionOutcome(status="not_found", message=f"'{find_text}' not found.")
    return ActionOutcome(message=f"Replaced {count} occurrence(s).")


def goto_line(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not args:
        return ask("navigate.goto_line", "Line number:")
    try:
        number = int(args[0].strip())
    except ValueError:
        return ActionOutcome(status="error", message="Please enter a valid line number.")
    try:
        editor.go_to_line(number)
    except LineOutOfRangeError as exc:
        return ActionOutcome(status="error", message=str(exc))
    return ActionOutcome(message=f"Line {number}")


def insert_template(editor: TriageEditor, *args: str) -> ActionOutcome:
    if not args:
        names = template_names()
        return ask(
            "template.insert",
            f"Template ({', '.join(names)}):",
            default=names[0] if names else "",
        )
    name = args[0].strip()
    try:
        editor.insert_template_named(name)
    except KeyError:
        return ActionOutcome(status="error", message=f"Unknown template: {name}")
    return ActionOutcome(message=f"Inserted template: {name}")


__all__ = [
    "find",
    "live_search",
    "end_live_search",
    "replace",
    "goto_line",
    "insert_template",
]
