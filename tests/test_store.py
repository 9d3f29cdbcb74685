import numpy as np
import pytest

from canon_core.errors import ErrorCategory, NegativeValue, NonIntegerValue
from canon_core.store import CanonicalStore


def test_store_starts_at_zero():
    assert CanonicalStore().get() == 0


def test_store_set_replaces_value():
    store = CanonicalStore()
    store.set(2**200 + 7)
    assert store.get() == 2**200 + 7


def test_store_rejects_negative_without_mutation():
    store = CanonicalStore(41)
    with pytest.raises(NegativeValue) as excinfo:
        store.set(-1)
    assert store.get() == 41
    assert excinfo.value.value == -1
    assert excinfo.value.category == ErrorCategory.VALIDATION


@pytest.mark.parametrize("bad", [True, 1.5, "7", None])
def test_store_rejects_non_integers(bad):
    store = CanonicalStore(3)
    with pytest.raises(NonIntegerValue):
        store.set(bad)
    assert store.get() == 3


def test_store_accepts_numpy_integers():
    store = CanonicalStore()
    store.set(np.uint32(9))
    assert store.get() == 9
    assert type(store.get()) is int
