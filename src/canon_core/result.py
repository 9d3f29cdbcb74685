"""Explicit success/failure values returned by every engine entry point.

Inner layers raise ``CanonError``; the engine handle converts each call into
``Ok(value)`` or ``Err(error)`` so callers never need exception plumbing:

    result = engine.to_sequence(4, 4)
    match result:
        case Ok(value=digits): ...
        case Err(error=err): print(err.kind, err)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, TypeVar, Union

from canon_core.errors import CanonError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"called unwrap_err on Ok({self.value!r})")

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))


@dataclass(frozen=True, slots=True)
class Err:
    error: CanonError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self):
        return self.error.kind

    def unwrap(self) -> NoReturn:
        raise self.error

    def unwrap_err(self) -> CanonError:
        return self.error

    def map(self, fn) -> "Err":
        return self


Result = Union[Ok[T], Err]


def capture(fn: Callable[..., T], *args, **kwargs) -> Result[T]:
    """Run ``fn`` and fold a raised CanonError into ``Err``.

    Only engine errors are captured; anything else is a bug and propagates.
    """
    try:
        return Ok(fn(*args, **kwargs))
    except CanonError as err:
        return Err(err)


__all__ = ["Ok", "Err", "Result", "capture"]
