# tests/conftest.py
from __future__ import annotations

import numpy as np
import pytest

from mixfft.core import ComplexArray


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def random_array(rng):
    """Factory for random complex arrays of a given length."""
    def _make(n: int, dtype=np.float64) -> ComplexArray:
        z = rng.random(n) + 1j * rng.random(n)
        return ComplexArray.from_complex(z, dtype=dtype)

    return _make
