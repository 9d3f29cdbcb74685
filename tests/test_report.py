import json

import pytest

from canon_core.config import ReportConfig, SequenceConfig
from canon_core.errors import UnknownStrategy
from canon_core.modes import ReportStrategy
from canon_report.report import generate_report


def test_basic_report_on_255():
    report = generate_report(255, "basic")
    assert report.strategy == ReportStrategy.BASIC
    assert report["bit_length"] == 8
    assert report["decimal_digits"] == 3
    assert set(report.to_dict()) == {"strategy", "bit_length", "decimal_digits"}


def test_basic_report_on_zero():
    report = generate_report(0, "basic")
    assert report["bit_length"] == 0
    assert report["decimal_digits"] == 1


@pytest.mark.parametrize(
    "value", [9, 10, 99, 100, 10**17 - 1, 10**17, 2**64, 10**400 - 1, 10**400]
)
def test_decimal_digits_at_power_boundaries(value):
    assert generate_report(value, "basic")["decimal_digits"] == len(str(value))


def test_decimal_digits_beyond_str_conversion_limit():
    report = generate_report(10**6000, "basic")
    assert report["decimal_digits"] == 6001


def test_extended_report_fields():
    report = generate_report(0x1_00_05, "extended")
    assert report["byte_length"] == 3
    assert report["parity"] == "odd"
    assert report["popcount"] == 3
    assert report["bit_length"] == 17


def test_extended_report_zero_has_one_byte():
    report = generate_report(0, "extended")
    assert report["byte_length"] == 1
    assert report["parity"] == "even"
    assert report["popcount"] == 0


def test_full_report_fields():
    report = generate_report(0x4869, "full")
    assert report["trailing_zeros"] == 0
    assert report["is_power_of_two"] is False
    assert report["decimal_digit_sum"] == sum(int(d) for d in str(0x4869))
    assert report["hex"] == "4869"
    assert report["text_representable"] is True
    assert report["min_sequence_lengths"] == {
        "1": 15,
        "8": 2,
        "16": 1,
        "24": 1,
        "32": 1,
    }


def test_full_report_power_of_two():
    report = generate_report(2**71, "full")
    assert report["trailing_zeros"] == 71
    assert report["is_power_of_two"] is True
    assert report["text_representable"] is False


def test_full_report_zero():
    report = generate_report(0, "full")
    assert report["trailing_zeros"] == 0
    assert report["is_power_of_two"] is False
    assert report["hex"] == "0"
    assert report["min_sequence_lengths"]["8"] == 1


def test_report_json_is_structured():
    payload = json.loads(generate_report(255, "extended").to_json())
    assert payload == {
        "strategy": "extended",
        "bit_length": 8,
        "decimal_digits": 3,
        "byte_length": 1,
        "parity": "odd",
        "popcount": 8,
    }


def test_default_strategy_comes_from_config():
    cfg = ReportConfig(default_strategy="full")
    assert generate_report(1, cfg=cfg).strategy == ReportStrategy.FULL
    assert generate_report(1).strategy == ReportStrategy.BASIC


@pytest.mark.parametrize("name", ["BASIC", "verbose", "", 3])
def test_unknown_strategy(name):
    with pytest.raises(UnknownStrategy) as excinfo:
        generate_report(1, name)
    assert excinfo.value.allowed == ("basic", "extended", "full")


def test_unknown_default_strategy_in_config():
    with pytest.raises(UnknownStrategy):
        ReportConfig(default_strategy="nope")


def test_full_report_on_value_past_str_conversion_limit():
    value = 10**6000 - 1
    report = generate_report(value, "full")
    assert report["bit_length"] == value.bit_length()
    assert report["decimal_digits"] == 6000
    assert report["decimal_digit_sum"] == 9 * 6000
    assert report["hex"] == format(value, "x")
    assert json.loads(report.to_json())["decimal_digits"] == 6000


def test_full_report_on_large_power_of_two():
    report = generate_report(1 << 20000, "full")
    assert report["decimal_digits"] == 6021
    assert report["decimal_digit_sum"] > 0
    assert report["trailing_zeros"] == 20000
    assert report["min_sequence_lengths"]["8"] == 2501


def test_min_sequence_lengths_follow_sequence_config():
    seq_cfg = SequenceConfig(min_bit_depth=8, max_bit_depth=16)
    report = generate_report(0x4869, "full", seq_cfg=seq_cfg)
    assert report["min_sequence_lengths"] == {"8": 2, "16": 1}


@pytest.mark.parametrize("depths", [(8, 33), (0,), (True,), ("8",)])
def test_report_config_rejects_bad_depths(depths):
    with pytest.raises(ValueError):
        ReportConfig(sequence_depths=depths)


def test_report_config_depths_become_tuple():
    assert ReportConfig(sequence_depths=[4, 12]).sequence_depths == (4, 12)
