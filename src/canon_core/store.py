from __future__ import annotations

from canon_core.host import _require_index


class CanonicalStore:
    """Sole owner of the canonical index.

    Python ints are immutable, so handing the value out never exposes a
    mutable alias; replacement is a single rebinding.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        self._value = _require_index(value, context="CanonicalStore.__init__")

    def get(self) -> int:
        return self._value

    def set(self, value) -> None:
        self._value = _require_index(value, context="CanonicalStore.set")

    def __repr__(self) -> str:
        return f"CanonicalStore(bit_length={self._value.bit_length()})"


__all__ = ["CanonicalStore"]
