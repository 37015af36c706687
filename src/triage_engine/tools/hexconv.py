"""Hex byte extraction and hex <-> ASCII conversion for log snippets."""

from __future__ import annotations

from typing import List, Optional

HEX_DIGITS = frozenset("0123456789ABCDEF")


class HexDecodeError(ValueError):
    """Raised when a selection holds no recognizable hex bytes."""

    def __init__(self, message: str, *, source: str = "") -> None:
        super().__init__(message)
        self.source = source


def _prefixed_pair(upper: str, start: int) -> str:
    """Collect up to two hex digits following a ``0X`` prefix at ``start``."""

    digits: List[str] = []
    for char in upper[start + 2 :]:
        if len(digits) == 2:
            break
        if char in HEX_DIGITS:
            digits.append(char)
        elif digits:
            break
    return "".join(digits)


def extract_hex_bytes(text: str) -> List[int]:
    """Parse ``0xFF``, ``FF`` and space-separated forms into byte values."""

    upper = text.strip().upper()
    values: List[int] = []
    index = 0
    while index < len(upper):
        if upper.startswith("0X", index):
            pair = _prefixed_pair(upper, index)
            if len(pair) == 2:
                values.append(int(pair, 16))
            index = min(index + 2 + len(pair), len(upper))
            continue
        if (
            upper[index] in HEX_DIGITS
            and index + 1 < len(upper)
            and upper[index + 1] in HEX_DIGITS
        ):
            values.append(int(upper[index : index + 2], 16))
            index += 2
            continue
        index += 1
    return values


def extract_first_hex_byte(text: str) -> Optional[str]:
    """Return the first byte as two upper-case digits, preferring ``0x`` form."""

    upper = text.strip().upper()
    if not upper:
        return None

    prefix = upper.find("0X")
    if prefix >= 0:
        pair = _prefixed_pair(upper, prefix)
        if len(pair) == 2:
            return pair

    run = ""
    for char in upper:
        if char in HEX_DIGITS:
            run += char
            if len(run) == 2:
                return run
        else:
            run = ""
    return None


def hex_to_ascii(text: str) -> str:
    values = extract_hex_bytes(text)
    if not values:
        raise HexDecodeError("Could not find any recognizable hex bytes.", source=text)
    return "".join(chr(value) if 0x20 <= value <= 0x7E else "." for value in values)


def ascii_to_hex(text: str) -> str:
    return " ".join(f"{ord(char):02X}" for char in text)


__all__ = [
    "HexDecodeError",
    "ascii_to_hex",
    "extract_first_hex_byte",
    "extract_hex_bytes",
    "hex_to_ascii",
]
