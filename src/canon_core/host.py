from __future__ import annotations

import jax
import numpy as np

from canon_core.errors import NegativeValue, NonIntegerValue


def _is_host_int(value) -> bool:
    # bool is an int subclass but never a valid index.
    return isinstance(value, int) and not isinstance(value, bool)


def _require_index(value, context: str | None = None) -> int:
    """Validate a candidate canonical index and return it as a plain int."""
    if isinstance(value, np.integer):
        value = int(value)
    if not _is_host_int(value):
        raise NonIntegerValue(value=value, context=context)
    if value < 0:
        raise NegativeValue(value=value, context=context)
    return int(value)


def _host_uint_list(values) -> list[int]:
    """Pull a device array of unsigned digits back to Python ints."""
    return [int(v) for v in np.asarray(jax.device_get(values)).tolist()]


def _host_bytes(values) -> bytes:
    return np.asarray(jax.device_get(values), dtype=np.uint8).tobytes()


__all__ = [
    "_is_host_int",
    "_require_index",
    "_host_uint_list",
    "_host_bytes",
]
