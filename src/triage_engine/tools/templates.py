"""Built-in text templates for automotive diagnostic logs."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

TEMPLATES: Mapping[str, str] = MappingProxyType(
    {
        "UDS Diagnostic Session": (
            "=== UDS Diagnostic Session ===\n"
            "Service: 0x10\n"
            "SubFunction: 0x01\n"
            "Session Type: Default\n\n"
        ),
        "CAN Frame Template": (
            "CAN ID: 0x000\nDLC: 8\nData: [00 00 00 00 00 00 00 00]\n\n"
        ),
        "Error Log Template": (
            "=== Error Log ===\n"
            "Timestamp: \n"
            "Error Code: \n"
            "Description: \n"
            "Severity: \n\n"
        ),
        "Automotive Report": (
            "=== Automotive Diagnostics Report ===\n"
            "Vehicle: \n"
            "Date: \n"
            "Mileage: \n"
            "Issues Found: \n\n"
        ),
    }
)


def template_names() -> Tuple[str, ...]:
    return tuple(TEMPLATES)


def get_template(name: str) -> str:
    try:
        return TEMPLATES[name]
    except KeyError as exc:
        raise KeyError(f"Template '{name}' is not defined") from exc


__all__ = ["TEMPLATES", "get_template", "template_names"]
