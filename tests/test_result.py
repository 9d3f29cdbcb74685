import pytest

from canon_core.errors import (
    CanonError,
    DigitOutOfRange,
    ErrorCategory,
    ErrorKind,
    InsufficientLength,
    InvalidLength,
    NegativeValue,
    NonTextualValue,
    ResultTooLarge,
    Underflow,
)
from canon_core.result import Err, Ok, capture


def test_ok_unwraps():
    result = Ok(5)
    assert result.ok
    assert result.unwrap() == 5
    assert result.map(lambda v: v * 2) == Ok(10)
    with pytest.raises(ValueError):
        result.unwrap_err()


def test_err_carries_error():
    err = NegativeValue(value=-2)
    result = Err(err)
    assert not result.ok
    assert result.kind == ErrorKind.NEGATIVE_VALUE
    assert result.unwrap_err() is err
    assert result.map(lambda v: v * 2) is result
    with pytest.raises(NegativeValue):
        result.unwrap()


def test_capture_folds_engine_errors_only():
    def fail():
        raise Underflow(index=0, working=1, operand=2)

    assert isinstance(capture(fail), Err)
    assert capture(lambda: 3) == Ok(3)
    with pytest.raises(KeyError):
        capture(lambda: {}["missing"])


def test_pattern_matching():
    match Err(NonTextualValue(offset=0, reason="invalid start byte")):
        case Ok(value=v):
            pytest.fail(f"unexpected {v}")
        case Err(error=e):
            assert e.category == ErrorCategory.REPRESENTATION


def test_errors_are_readable_and_typed():
    err = InsufficientLength(length=1, required=3, bit_depth=8)
    assert isinstance(err, CanonError)
    assert isinstance(err, ValueError)
    assert "needs 3" in str(err)
    assert isinstance(Underflow(index=0, working=0, operand=1), ArithmeticError)


@pytest.mark.parametrize(
    "err",
    [
        NegativeValue(value=-(1 << 20000)),
        InsufficientLength(length=1, required=(1 << 20000), bit_depth=8),
        Underflow(index=0, working=1 << 20000, operand=1 << 20001),
        ResultTooLarge(index=2, op="shiftLeft", bits=1 << 20000, limit=64),
        DigitOutOfRange(position=0, digit=1 << 20000, bit_depth=8),
        InvalidLength(length=-(1 << 20000)),
    ],
)
def test_messages_for_huge_values_stay_short(err):
    message = str(err)
    assert "bits>" in message
    assert len(message) < 200


def test_small_values_print_in_decimal():
    assert "got -12" in str(NegativeValue(value=-12))
    assert "0x" not in str(Underflow(index=0, working=3, operand=7))
