"""Diagnostic helpers used by editor actions: UDS, hex, templates."""

from .hexconv import (
    HexDecodeError,
    ascii_to_hex,
    extract_first_hex_byte,
    extract_hex_bytes,
    hex_to_ascii,
)
from .templates import TEMPLATES, get_template, template_names
from .uds import UDS_SERVICES, UNKNOWN_SERVICE, decode_uds_service, describe_uds_selection

__all__ = [
    "HexDecodeError",
    "ascii_to_hex",
    "extract_first_hex_byte",
    "extract_hex_bytes",
    "hex_to_ascii",
    "TEMPLATES",
    "get_template",
    "template_names",
    "UDS_SERVICES",
    "UNKNOWN_SERVICE",
    "decode_uds_service",
    "describe_uds_selection",
]
