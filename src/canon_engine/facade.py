"""Stateful handle over the canonical index.

Every public method returns ``Ok(value)`` or ``Err(error)``; a failed call
never changes the stored index and leaves the handle usable.
"""

from __future__ import annotations

from typing import Callable, Iterable

from canon_codec import charset as _charset
from canon_codec import sequence as _sequence
from canon_codec import text as _text
from canon_codec.sequence import DigitSequence
from canon_core.config import (
    DEFAULT_ENGINE_CONFIG,
    EngineConfig,
    engine_config_from_env,
)
from canon_core.result import Err, Ok, Result, capture
from canon_core.store import CanonicalStore
from canon_interp.instructions import parse_batch
from canon_interp.interpreter import InstructionInterpreter, apply_batch
from canon_metrics.metrics import _engine_metrics_update
from canon_report.report import AnalysisReport, generate_report


class CanonEngine:
    def __init__(self, cfg: EngineConfig = DEFAULT_ENGINE_CONFIG):
        self.cfg = cfg
        self._store = CanonicalStore()
        self._trace("⚡ Canon: index initialized to 0")

    def _trace(self, line: str) -> None:
        if self.cfg.trace:
            print(line)

    def _call(self, label: str, fn: Callable, *args, commit: bool = False) -> Result:
        result = capture(fn, *args)
        if isinstance(result, Err):
            _engine_metrics_update(failure=result.kind)
            self._trace(f"   ERROR [{label}]: {result.error}")
        else:
            _engine_metrics_update(committed=commit)
            if commit:
                self._trace(
                    f"   ├─ {label}: bit_length={self._store.get().bit_length()}"
                )
        return result

    def _commit(self, value: int) -> int:
        self._store.set(value)
        return value

    # --- Canonical store ---

    def get_index(self) -> Ok[int]:
        _engine_metrics_update()
        return Ok(self._store.get())

    def set_index(self, value) -> Result[None]:
        return self._call("set_index", self._store.set, value, commit=True)

    # --- Digit sequences ---

    def min_sequence_length(self, bit_depth) -> Result[int]:
        return self._call(
            "min_sequence_length",
            lambda: _sequence.min_sequence_length(
                self._store.get(), bit_depth, cfg=self.cfg.sequence
            ),
        )

    def to_sequence(self, target_length, bit_depth) -> Result[DigitSequence]:
        return self._call(
            "to_sequence",
            lambda: _sequence.to_sequence(
                self._store.get(), target_length, bit_depth, cfg=self.cfg.sequence
            ),
        )

    def import_sequence(self, digits: Iterable, bit_depth) -> Result[int]:
        return self._call(
            "import_sequence",
            lambda: self._commit(
                _sequence.from_sequence(digits, bit_depth, cfg=self.cfg.sequence)
            ),
            commit=True,
        )

    # --- Text ---

    def to_text(self) -> Result[str]:
        return self._call("to_text", lambda: _text.to_text(self._store.get()))

    def from_text(self, text: str) -> Result[int]:
        return self._call(
            "from_text",
            lambda: self._commit(_text.from_text(text)),
            commit=True,
        )

    def to_charset_text(self) -> Result[str]:
        return self._call(
            "to_charset_text", lambda: _charset.to_charset_text(self._store.get())
        )

    def from_charset_text(self, text: str) -> Result[int]:
        return self._call(
            "from_charset_text",
            lambda: self._commit(_charset.from_charset_text(text)),
            commit=True,
        )

    # --- Instructions ---

    def execute_instructions(self, source) -> Result[int]:
        interpreter = InstructionInterpreter(
            self._store,
            cfg=self.cfg.interpreter,
            trace=self._trace if self.cfg.trace else None,
        )
        return self._call("execute_instructions", interpreter.run, source, commit=True)

    def preview_instructions(self, source) -> Result[int]:
        """Evaluate a batch against the current index without committing."""
        return self._call(
            "preview_instructions",
            lambda: apply_batch(
                self._store.get(), parse_batch(source), cfg=self.cfg.interpreter
            ),
        )

    # --- Reports ---

    def analyze(self, strategy=None) -> Result[AnalysisReport]:
        return self._call(
            "analyze",
            lambda: generate_report(
                self._store.get(),
                strategy,
                cfg=self.cfg.report,
                seq_cfg=self.cfg.sequence,
            ),
        )

    def generate_report(self, strategy=None) -> Result[str]:
        return self.analyze(strategy).map(AnalysisReport.to_json)

    def __repr__(self) -> str:
        return f"CanonEngine(bit_length={self._store.get().bit_length()})"


def create_engine(cfg: EngineConfig | None = None) -> CanonEngine:
    """Build an engine, reading CANON_* settings when no config is given."""
    if cfg is None:
        cfg = engine_config_from_env()
    return CanonEngine(cfg)


__all__ = ["CanonEngine", "create_engine"]
