"""Unified Diagnostic Services (ISO 14229) service-id lookup."""

from __future__ import annotations

from typing import Mapping

from .hexconv import extract_first_hex_byte

UNKNOWN_SERVICE = "Unknown Service"

UDS_SERVICES: Mapping[str, str] = {
    "10": "DiagnosticSessionControl",
    "11": "ECUReset",
    "14": "ClearDiagnosticInformation",
    "19": "ReadDTCInformation",
    "22": "ReadDataByIdentifier",
    "27": "SecurityAccess",
    "3E": "TesterPresent",
}


def decode_uds_service(text: str) -> str:
    """Name the service whose id is the first hex byte found in ``text``."""

    byte = extract_first_hex_byte(text)
    if byte is None:
        return UNKNOWN_SERVICE
    return UDS_SERVICES.get(byte, UNKNOWN_SERVICE)


def describe_uds_selection(text: str) -> str:
    code = text.strip()
    return f"UDS Service {code}: {decode_uds_service(code)}"


__all__ = [
    "UDS_SERVICES",
    "UNKNOWN_SERVICE",
    "decode_uds_service",
    "describe_uds_selection",
]
