"""Byte-form text codec.

The index is read as the big-endian magnitude of the UTF-8 bytes of a
string. Zero serializes as a single NUL byte; leading NULs carry no value, so
only text without leading NULs (or exactly "\\x00") round-trips.
"""

from __future__ import annotations

from canon_core.errors import InvalidText, NonTextualValue
from canon_core.host import _require_index

TEXT_ENCODING = "utf-8"
BYTE_ORDER = "big"


def minimal_bytes(value: int) -> bytes:
    value = _require_index(value, context="minimal_bytes")
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), BYTE_ORDER)


def to_text(value: int) -> str:
    raw = minimal_bytes(value)
    try:
        return raw.decode(TEXT_ENCODING)
    except UnicodeDecodeError as exc:
        raise NonTextualValue(offset=exc.start, reason=exc.reason) from None


def is_textual(value: int) -> bool:
    try:
        to_text(value)
    except NonTextualValue:
        return False
    return True


def from_text(text: str) -> int:
    if not isinstance(text, str):
        raise InvalidText(reason=f"expected str, got {type(text).__name__}")
    try:
        raw = text.encode(TEXT_ENCODING)
    except UnicodeEncodeError as exc:
        raise InvalidText(
            reason=f"position {exc.start}: {exc.reason}"
        ) from None
    return int.from_bytes(raw, BYTE_ORDER)


__all__ = [
    "TEXT_ENCODING",
    "BYTE_ORDER",
    "minimal_bytes",
    "to_text",
    "is_textual",
    "from_text",
]
