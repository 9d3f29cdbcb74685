from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from canon_codec.sequence import min_sequence_length
from canon_codec.text import is_textual, minimal_bytes
from canon_core.config import (
    DEFAULT_REPORT_CONFIG,
    DEFAULT_SEQUENCE_CONFIG,
    ReportConfig,
    SequenceConfig,
)
from canon_core.host import _require_index
from canon_core.modes import ReportStrategy, coerce_report_strategy


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    strategy: ReportStrategy
    fields: Mapping[str, object]

    def __getitem__(self, name: str):
        return self.fields[name]

    def to_dict(self) -> dict:
        return {"strategy": self.strategy.value, **self.fields}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


_LOG10_2 = 0.30102999566398120
_DECIMAL_CHUNK = 10**18


def _decimal_digits(value: int) -> int:
    # Avoids str(value), which is capped by sys.get_int_max_str_digits().
    if value == 0:
        return 1
    digits = int((value.bit_length() - 1) * _LOG10_2) + 1
    while 10**digits <= value:
        digits += 1
    while digits > 1 and 10 ** (digits - 1) > value:
        digits -= 1
    return digits


def _decimal_digit_sum(value: int) -> int:
    total = 0
    while value:
        value, chunk = divmod(value, _DECIMAL_CHUNK)
        total += sum(int(d) for d in str(chunk))
    return total


def _basic_fields(value: int, cfg: ReportConfig, seq_cfg: SequenceConfig) -> dict:
    return {
        "bit_length": value.bit_length(),
        "decimal_digits": _decimal_digits(value),
    }


def _extended_fields(value: int, cfg: ReportConfig, seq_cfg: SequenceConfig) -> dict:
    return {
        "byte_length": len(minimal_bytes(value)),
        "parity": "odd" if value & 1 else "even",
        "popcount": value.bit_count(),
    }


def _full_fields(value: int, cfg: ReportConfig, seq_cfg: SequenceConfig) -> dict:
    # Depths outside the codec's configured range are left out.
    depths = [
        depth
        for depth in cfg.sequence_depths
        if seq_cfg.min_bit_depth <= depth <= seq_cfg.max_bit_depth
    ]
    return {
        "trailing_zeros": (value & -value).bit_length() - 1 if value else 0,
        "is_power_of_two": value != 0 and value & (value - 1) == 0,
        "decimal_digit_sum": _decimal_digit_sum(value),
        "hex": format(value, "x"),
        "text_representable": is_textual(value),
        "min_sequence_lengths": {
            str(depth): min_sequence_length(value, depth, cfg=seq_cfg)
            for depth in depths
        },
    }


FieldFn = Callable[[int, ReportConfig, SequenceConfig], dict]

# Each strategy extends the one before it.
STRATEGY_FIELDS: dict[ReportStrategy, tuple[FieldFn, ...]] = {
    ReportStrategy.BASIC: (_basic_fields,),
    ReportStrategy.EXTENDED: (_basic_fields, _extended_fields),
    ReportStrategy.FULL: (_basic_fields, _extended_fields, _full_fields),
}


def generate_report(
    value: int,
    strategy: ReportStrategy | str | None = None,
    *,
    cfg: ReportConfig = DEFAULT_REPORT_CONFIG,
    seq_cfg: SequenceConfig = DEFAULT_SEQUENCE_CONFIG,
) -> AnalysisReport:
    strategy = cfg.default_strategy if strategy is None else coerce_report_strategy(strategy)
    value = _require_index(value, context="generate_report")
    fields: dict = {}
    for fn in STRATEGY_FIELDS[strategy]:
        fields.update(fn(value, cfg, seq_cfg))
    return AnalysisReport(strategy=strategy, fields=MappingProxyType(fields))


__all__ = [
    "AnalysisReport",
    "STRATEGY_FIELDS",
    "generate_report",
]
