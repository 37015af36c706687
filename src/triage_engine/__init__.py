"""UI-agnostic highlight layering and line annotation for log triage."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "highlight",
    "keymaps",
    "runtime",
    "session",
    "tools",
]

__version__ = "0.1.0"
