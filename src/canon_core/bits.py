"""Bit-plane helpers bridging Python ints and fixed-width JAX digit arrays.

Bit planes are little-endian throughout: element 0 of a plane is the least
significant bit of the integer. Digits are uint32 so every bit depth up to 32
fits without enabling x64.
"""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np

from canon_core.host import _host_bytes

DIGIT_DTYPE = jnp.uint32


def int_to_bits(value: int, nbits: int) -> jnp.ndarray:
    """Little-endian bit plane of ``value``, zero-padded to ``nbits``.

    ``value.bit_length()`` must not exceed ``nbits``.
    """
    nbytes = max(1, (nbits + 7) // 8)
    raw = np.frombuffer(value.to_bytes(nbytes, "little"), dtype=np.uint8)
    bits = jnp.unpackbits(jnp.asarray(raw), bitorder="little")
    return bits[:nbits]


def bits_to_int(bits: jnp.ndarray) -> int:
    pad = (-bits.shape[0]) % 8
    if pad:
        bits = jnp.concatenate([bits, jnp.zeros((pad,), dtype=jnp.uint8)])
    packed = jnp.packbits(bits.astype(jnp.uint8), bitorder="little")
    return int.from_bytes(_host_bytes(packed), "little")


def bits_to_digits(bits: jnp.ndarray, bit_depth: int) -> jnp.ndarray:
    """Fold a bit plane of length ``n * bit_depth`` into ``n`` digits."""
    planes = bits.reshape((-1, bit_depth)).astype(DIGIT_DTYPE)
    weights = jnp.left_shift(DIGIT_DTYPE(1), jnp.arange(bit_depth, dtype=DIGIT_DTYPE))
    # Each weight is a distinct power of two, so the sum never carries.
    return jnp.sum(planes * weights[None, :], axis=1, dtype=DIGIT_DTYPE)


def digits_to_bits(digits: jnp.ndarray, bit_depth: int) -> jnp.ndarray:
    shifts = jnp.arange(bit_depth, dtype=DIGIT_DTYPE)
    planes = jnp.right_shift(digits[:, None], shifts[None, :]) & DIGIT_DTYPE(1)
    return planes.astype(jnp.uint8).reshape((-1,))


__all__ = [
    "DIGIT_DTYPE",
    "int_to_bits",
    "bits_to_int",
    "bits_to_digits",
    "digits_to_bits",
]
