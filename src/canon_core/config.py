from __future__ import annotations

import os
from dataclasses import dataclass, field

from canon_core.modes import ReportStrategy, coerce_report_strategy

MIN_BIT_DEPTH = 1
MAX_BIT_DEPTH = 32

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def _env_optional_int(name: str) -> int | None:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    if not value.isdigit():
        raise ValueError(f"{name} must be a non-negative integer")
    return int(value)


@dataclass(frozen=True, slots=True)
class SequenceConfig:
    """Bit-depth bounds for the digit sequence codec."""

    min_bit_depth: int = MIN_BIT_DEPTH
    max_bit_depth: int = MAX_BIT_DEPTH

    def __post_init__(self):
        if not (MIN_BIT_DEPTH <= self.min_bit_depth <= self.max_bit_depth <= MAX_BIT_DEPTH):
            raise ValueError(
                f"bit depth bounds must satisfy "
                f"{MIN_BIT_DEPTH} <= min <= max <= {MAX_BIT_DEPTH}, "
                f"got {self.min_bit_depth}..{self.max_bit_depth}"
            )


@dataclass(frozen=True, slots=True)
class InterpreterConfig:
    """Resource bound for instruction batches.

    max_result_bits=None leaves working values unbounded.
    """

    max_result_bits: int | None = None

    def __post_init__(self):
        if self.max_result_bits is not None and self.max_result_bits < 0:
            raise ValueError("max_result_bits must be non-negative")


@dataclass(frozen=True, slots=True)
class ReportConfig:
    default_strategy: ReportStrategy | str = ReportStrategy.BASIC
    sequence_depths: tuple[int, ...] = (1, 8, 16, 24, 32)

    def __post_init__(self):
        object.__setattr__(
            self, "default_strategy", coerce_report_strategy(self.default_strategy)
        )
        depths = tuple(self.sequence_depths)
        for depth in depths:
            if (
                not isinstance(depth, int)
                or isinstance(depth, bool)
                or not MIN_BIT_DEPTH <= depth <= MAX_BIT_DEPTH
            ):
                raise ValueError(
                    f"sequence_depths entries must be ints in "
                    f"{MIN_BIT_DEPTH}..{MAX_BIT_DEPTH}, got {depth!r}"
                )
        object.__setattr__(self, "sequence_depths", depths)


DEFAULT_SEQUENCE_CONFIG = SequenceConfig()
DEFAULT_INTERPRETER_CONFIG = InterpreterConfig()
DEFAULT_REPORT_CONFIG = ReportConfig()


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Engine-level bundle: codec + interpreter + report configs."""

    sequence: SequenceConfig = field(default_factory=SequenceConfig)
    interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    trace: bool = False


DEFAULT_ENGINE_CONFIG = EngineConfig()


def engine_config_from_env(base: EngineConfig = DEFAULT_ENGINE_CONFIG) -> EngineConfig:
    """Overlay CANON_* environment settings onto ``base``."""
    max_bits = _env_optional_int("CANON_MAX_RESULT_BITS")
    interpreter = base.interpreter
    if max_bits is not None:
        interpreter = InterpreterConfig(max_result_bits=max_bits)
    return EngineConfig(
        sequence=base.sequence,
        interpreter=interpreter,
        report=base.report,
        trace=base.trace or _env_flag("CANON_TRACE"),
    )


__all__ = [
    "MIN_BIT_DEPTH",
    "MAX_BIT_DEPTH",
    "SequenceConfig",
    "InterpreterConfig",
    "ReportConfig",
    "EngineConfig",
    "DEFAULT_SEQUENCE_CONFIG",
    "DEFAULT_INTERPRETER_CONFIG",
    "DEFAULT_REPORT_CONFIG",
    "DEFAULT_ENGINE_CONFIG",
    "engine_config_from_env",
    "_env_flag",
]
