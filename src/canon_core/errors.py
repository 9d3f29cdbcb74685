from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    NEGATIVE_VALUE = "NegativeValue"
    NON_INTEGER_VALUE = "NonIntegerValue"
    UNSUPPORTED_BIT_DEPTH = "UnsupportedBitDepth"
    INVALID_LENGTH = "InvalidLength"
    INSUFFICIENT_LENGTH = "InsufficientLength"
    DIGIT_OUT_OF_RANGE = "DigitOutOfRange"
    NON_TEXTUAL_VALUE = "NonTextualValue"
    INVALID_TEXT = "InvalidText"
    CHARACTER_NOT_IN_SET = "CharacterNotInSet"
    MALFORMED_INSTRUCTIONS = "MalformedInstructions"
    UNKNOWN_OPERATION = "UnknownOperation"
    UNDERFLOW = "Underflow"
    DIVISION_BY_ZERO = "DivisionByZero"
    RESULT_TOO_LARGE = "ResultTooLarge"
    UNKNOWN_STRATEGY = "UnknownStrategy"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    EXECUTION = "execution"
    REPRESENTATION = "representation"


# Decimal conversion of huge ints is capped by sys.get_int_max_str_digits().
_INLINE_INT_BITS = 256
_HEAD_HEX_DIGITS = 16


def _format_int(value) -> str:
    """Decimal for small ints, leading hex digits plus bit count for big ones."""
    if not isinstance(value, int) or isinstance(value, bool):
        return repr(value)
    bits = value.bit_length()
    if bits <= _INLINE_INT_BITS:
        return str(value)
    sign = "-" if value < 0 else ""
    shift = ((bits + 3) // 4 - _HEAD_HEX_DIGITS) * 4
    head = format(abs(value) >> shift, "x")
    return f"{sign}0x{head}...<{bits} bits>"


class CanonError(Exception):
    """Base for every failure the engine reports to its caller."""

    kind: ClassVar[ErrorKind]
    category: ClassVar[ErrorCategory]


# --- Input validation ---


@dataclass(frozen=True)
class NegativeValue(CanonError, ValueError):
    value: int
    context: str | None = None

    kind: ClassVar[ErrorKind] = ErrorKind.NEGATIVE_VALUE
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return f"canonical index must be non-negative, got {_format_int(self.value)}"


@dataclass(frozen=True)
class NonIntegerValue(CanonError, ValueError):
    value: object
    context: str | None = None

    kind: ClassVar[ErrorKind] = ErrorKind.NON_INTEGER_VALUE
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return (
            f"canonical index must be an int, got "
            f"{type(self.value).__name__} {_format_int(self.value)}"
        )


@dataclass(frozen=True)
class UnsupportedBitDepth(CanonError, ValueError):
    bit_depth: object
    minimum: int = 1
    maximum: int = 32

    kind: ClassVar[ErrorKind] = ErrorKind.UNSUPPORTED_BIT_DEPTH
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return (
            f"unsupported bit_depth={_format_int(self.bit_depth)} "
            f"(expected {self.minimum}..{self.maximum})"
        )


@dataclass(frozen=True)
class InvalidLength(CanonError, ValueError):
    length: object

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_LENGTH
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return f"target_length must be a positive int, got {_format_int(self.length)}"


@dataclass(frozen=True)
class InsufficientLength(CanonError, ValueError):
    length: int
    required: int
    bit_depth: int

    kind: ClassVar[ErrorKind] = ErrorKind.INSUFFICIENT_LENGTH
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return (
            f"target_length={_format_int(self.length)} cannot hold the index at "
            f"bit_depth={self.bit_depth} (needs {_format_int(self.required)})"
        )


@dataclass(frozen=True)
class DigitOutOfRange(CanonError, ValueError):
    position: int
    digit: object
    bit_depth: int

    kind: ClassVar[ErrorKind] = ErrorKind.DIGIT_OUT_OF_RANGE
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        limit = (1 << self.bit_depth) - 1
        return (
            f"digit {_format_int(self.digit)} at position {self.position} is outside "
            f"0..{limit} for bit_depth={self.bit_depth}"
        )


@dataclass(frozen=True)
class InvalidText(CanonError, ValueError):
    reason: str

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_TEXT
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return f"invalid text: {self.reason}"


@dataclass(frozen=True)
class CharacterNotInSet(CanonError, ValueError):
    position: int
    character: str

    kind: ClassVar[ErrorKind] = ErrorKind.CHARACTER_NOT_IN_SET
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        return (
            f"character {self.character!r} (U+{ord(self.character):04X}) "
            f"at position {self.position} is not in the character set"
        )


@dataclass(frozen=True)
class UnknownStrategy(CanonError, ValueError):
    strategy: object
    allowed: tuple[str, ...] = ()

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_STRATEGY
    category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION

    def __str__(self) -> str:
        allowed = ", ".join(self.allowed)
        return f"unknown strategy={self.strategy!r} (allowed: {allowed})"


# --- Instruction execution ---


@dataclass(frozen=True)
class MalformedInstructions(CanonError, ValueError):
    reason: str
    index: int | None = None

    kind: ClassVar[ErrorKind] = ErrorKind.MALFORMED_INSTRUCTIONS
    category: ClassVar[ErrorCategory] = ErrorCategory.EXECUTION

    def __str__(self) -> str:
        if self.index is None:
            return f"malformed instructions: {self.reason}"
        return f"malformed instruction {self.index}: {self.reason}"


@dataclass(frozen=True)
class UnknownOperation(CanonError, ValueError):
    index: int
    op: str
    allowed: tuple[str, ...] = ()

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_OPERATION
    category: ClassVar[ErrorCategory] = ErrorCategory.EXECUTION

    def __str__(self) -> str:
        return f"instruction {self.index}: unknown operation {self.op!r}"


@dataclass(frozen=True)
class Underflow(CanonError, ArithmeticError):
    index: int
    working: int
    operand: int

    kind: ClassVar[ErrorKind] = ErrorKind.UNDERFLOW
    category: ClassVar[ErrorCategory] = ErrorCategory.EXECUTION

    def __str__(self) -> str:
        return (
            f"instruction {self.index}: subtract {_format_int(self.operand)} from "
            f"{_format_int(self.working)} would go negative"
        )


@dataclass(frozen=True)
class DivisionByZero(CanonError, ZeroDivisionError):
    index: int
    op: str

    kind: ClassVar[ErrorKind] = ErrorKind.DIVISION_BY_ZERO
    category: ClassVar[ErrorCategory] = ErrorCategory.EXECUTION

    def __str__(self) -> str:
        return f"instruction {self.index}: {self.op} by zero"


@dataclass(frozen=True)
class ResultTooLarge(CanonError, OverflowError):
    index: int
    op: str
    bits: int
    limit: int

    kind: ClassVar[ErrorKind] = ErrorKind.RESULT_TOO_LARGE
    category: ClassVar[ErrorCategory] = ErrorCategory.EXECUTION

    def __str__(self) -> str:
        return (
            f"instruction {self.index}: {self.op} result needs {_format_int(self.bits)} "
            f"bits (limit {_format_int(self.limit)})"
        )


# --- Representation ---


@dataclass(frozen=True)
class NonTextualValue(CanonError, ValueError):
    offset: int
    reason: str

    kind: ClassVar[ErrorKind] = ErrorKind.NON_TEXTUAL_VALUE
    category: ClassVar[ErrorCategory] = ErrorCategory.REPRESENTATION

    def __str__(self) -> str:
        return (
            f"index has no text form: byte {self.offset} is not valid "
            f"UTF-8 ({self.reason})"
        )


__all__ = [
    "ErrorKind",
    "ErrorCategory",
    "CanonError",
    "NegativeValue",
    "NonIntegerValue",
    "UnsupportedBitDepth",
    "InvalidLength",
    "InsufficientLength",
    "DigitOutOfRange",
    "InvalidText",
    "CharacterNotInSet",
    "UnknownStrategy",
    "MalformedInstructions",
    "UnknownOperation",
    "Underflow",
    "DivisionByZero",
    "ResultTooLarge",
    "NonTextualValue",
]
