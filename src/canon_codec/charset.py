"""Radix text codec over a fixed programmer character set.

The set is sorted by code point and de-duplicated; a character's position is
its digit value, and text is written most significant character first. The
lowest character ("\\t") is the zero digit, so leading tabs do not survive a
round trip.
"""

from __future__ import annotations

from canon_core.errors import CharacterNotInSet, InvalidText
from canon_core.host import _require_index

_PROGRAMMER_CHARS = (
    " \n\t\r"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"
    "←↑→↓↔∑√≈≠≤≥÷±∞€₹₽£¥₩"
    "¡¢£¤¥¦§¨©ª«¬®¯°±²³´µ¶·¸¹º»¼½¾¿"
    "ÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏÐÑÒÓÔÕÖ×ØÙÚÛÜÝÞß"
    "àáâãäåæçèéêëìíîïðñòóôõö÷øùúûüýþÿ"
)

CHARSET: tuple[str, ...] = tuple(sorted(set(_PROGRAMMER_CHARS)))
CHARSET_BASE = len(CHARSET)
_CHAR_VALUES = {ch: i for i, ch in enumerate(CHARSET)}


def to_charset_text(value: int) -> str:
    value = _require_index(value, context="to_charset_text")
    chars = []
    while value:
        value, digit = divmod(value, CHARSET_BASE)
        chars.append(CHARSET[digit])
    return "".join(reversed(chars))


def from_charset_text(text: str) -> int:
    if not isinstance(text, str):
        raise InvalidText(reason=f"expected str, got {type(text).__name__}")
    value = 0
    for position, ch in enumerate(text):
        digit = _CHAR_VALUES.get(ch)
        if digit is None:
            raise CharacterNotInSet(position=position, character=ch)
        value = value * CHARSET_BASE + digit
    return value


__all__ = [
    "CHARSET",
    "CHARSET_BASE",
    "to_charset_text",
    "from_charset_text",
]
