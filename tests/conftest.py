import os
import sys

import pytest

# Keep tests quiet and deterministic unless explicitly overridden.
os.environ.setdefault("CANON_TRACE", "0")
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")

import jax

# Ensure src/ is importable when pytest runs without an editable install.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from canon_engine import CanonEngine
from canon_metrics.metrics import engine_metrics_reset


@pytest.fixture(autouse=True)
def _set_default_device():
    with jax.default_device(jax.devices("cpu")[0]):
        yield


@pytest.fixture(autouse=True)
def _reset_engine_metrics():
    engine_metrics_reset()
    yield
    engine_metrics_reset()


@pytest.fixture
def engine():
    return CanonEngine()
