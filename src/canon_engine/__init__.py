"""Canonical index engine: the host-facing handle and its result types."""

from canon_codec.sequence import DigitSequence
from canon_core.errors import CanonError, ErrorCategory, ErrorKind
from canon_core.result import Err, Ok, Result
from canon_engine.facade import CanonEngine, create_engine
from canon_report.report import AnalysisReport

__all__ = [
    "CanonEngine",
    "create_engine",
    "DigitSequence",
    "AnalysisReport",
    "CanonError",
    "ErrorCategory",
    "ErrorKind",
    "Ok",
    "Err",
    "Result",
]
