from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import jax.numpy as jnp
import numpy as np

from canon_core.bits import (
    DIGIT_DTYPE,
    bits_to_digits,
    bits_to_int,
    digits_to_bits,
    int_to_bits,
)
from canon_core.config import DEFAULT_SEQUENCE_CONFIG, SequenceConfig
from canon_core.errors import (
    DigitOutOfRange,
    InsufficientLength,
    InvalidLength,
    UnsupportedBitDepth,
)
from canon_core.host import _host_uint_list, _is_host_int, _require_index


@dataclass(frozen=True, slots=True)
class DigitSequence:
    """Base-2^bit_depth digits of an index, least significant digit first."""

    digits: tuple[int, ...]
    bit_depth: int

    def __len__(self) -> int:
        return len(self.digits)

    def __iter__(self) -> Iterator[int]:
        return iter(self.digits)

    def __getitem__(self, i):
        return self.digits[i]

    def to_list(self) -> list[int]:
        return list(self.digits)


def require_bit_depth(bit_depth, *, cfg: SequenceConfig = DEFAULT_SEQUENCE_CONFIG) -> int:
    if isinstance(bit_depth, np.integer):
        bit_depth = int(bit_depth)
    if not _is_host_int(bit_depth) or not (
        cfg.min_bit_depth <= bit_depth <= cfg.max_bit_depth
    ):
        raise UnsupportedBitDepth(
            bit_depth=bit_depth,
            minimum=cfg.min_bit_depth,
            maximum=cfg.max_bit_depth,
        )
    return bit_depth


def min_sequence_length(
    value: int, bit_depth, *, cfg: SequenceConfig = DEFAULT_SEQUENCE_CONFIG
) -> int:
    """Fewest digits that hold ``value`` losslessly; never less than one."""
    bit_depth = require_bit_depth(bit_depth, cfg=cfg)
    value = _require_index(value, context="min_sequence_length")
    return max(1, -(-value.bit_length() // bit_depth))


def to_sequence(
    value: int,
    target_length,
    bit_depth,
    *,
    cfg: SequenceConfig = DEFAULT_SEQUENCE_CONFIG,
) -> DigitSequence:
    bit_depth = require_bit_depth(bit_depth, cfg=cfg)
    if isinstance(target_length, np.integer):
        target_length = int(target_length)
    if not _is_host_int(target_length) or target_length <= 0:
        raise InvalidLength(length=target_length)
    required = min_sequence_length(value, bit_depth, cfg=cfg)
    if target_length < required:
        raise InsufficientLength(
            length=target_length, required=required, bit_depth=bit_depth
        )
    bits = int_to_bits(value, target_length * bit_depth)
    digits = bits_to_digits(bits, bit_depth)
    return DigitSequence(digits=tuple(_host_uint_list(digits)), bit_depth=bit_depth)


def _require_digits(digits: Iterable, bit_depth: int) -> list[int]:
    limit = (1 << bit_depth) - 1
    checked = []
    for position, digit in enumerate(digits):
        if isinstance(digit, np.integer):
            digit = int(digit)
        if not _is_host_int(digit) or digit < 0 or digit > limit:
            raise DigitOutOfRange(position=position, digit=digit, bit_depth=bit_depth)
        checked.append(digit)
    return checked


def from_sequence(
    digits: Iterable, bit_depth, *, cfg: SequenceConfig = DEFAULT_SEQUENCE_CONFIG
) -> int:
    """Reassemble ``sum(d_i * 2**(bit_depth * i))`` from LSB-first digits."""
    bit_depth = require_bit_depth(bit_depth, cfg=cfg)
    if isinstance(digits, DigitSequence):
        digits = digits.digits
    checked = _require_digits(digits, bit_depth)
    if not checked:
        return 0
    arr = jnp.asarray(np.asarray(checked, dtype=np.uint32), dtype=DIGIT_DTYPE)
    return bits_to_int(digits_to_bits(arr, bit_depth))


__all__ = [
    "DigitSequence",
    "require_bit_depth",
    "min_sequence_length",
    "to_sequence",
    "from_sequence",
]
