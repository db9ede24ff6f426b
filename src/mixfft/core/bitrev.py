# src/mixfft/core/bitrev.py
"""Bit-reversal index helpers and the in-place bit-reversal permutation."""
from __future__ import annotations

import numpy as np

from mixfft.core.complex_array import ComplexArray
from mixfft.core.errors import InvalidLengthError

__all__ = [
    "is_power_of_two",
    "bit_reverse_index",
    "bit_reverse_indices",
    "bit_reverse_permute",
]


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


def _require_power_of_two(n: int) -> None:
    if not is_power_of_two(n):
        raise InvalidLengthError(f"Length must be a power of two, got {n}")


def bit_reverse_index(index: int, n: int) -> int:
    """
    Reverse the lowest log2(n) bits of `index`.

    For n == 1 nothing is reversed and the only valid index, 0, is returned.
    """
    _require_power_of_two(n)
    reversed_index = 0
    while n > 1:
        reversed_index = (reversed_index << 1) | (index & 1)
        index >>= 1
        n >>= 1
    return reversed_index


def bit_reverse_indices(n: int) -> np.ndarray:
    """
    Vectorised bit-reversal table: ``out[i] == bit_reverse_index(i, n)``.

    Parameters
    ----------
    n : int
        Power-of-two length.

    Returns
    -------
    ndarray of intp, shape (n,)
    """
    _require_power_of_two(n)
    bits = n.bit_length() - 1
    src = np.arange(n, dtype=np.intp)
    rev = np.zeros(n, dtype=np.intp)
    for _ in range(bits):
        rev = (rev << 1) | (src & 1)
        src >>= 1
    return rev


def bit_reverse_permute(array: ComplexArray) -> ComplexArray:
    """
    Reorder `array` into bit-reversed index order, in place.

    Every unordered pair (i, r(i)) with i != r(i) is swapped exactly once,
    so applying the permutation twice restores the original order.
    Returns the same container.
    """
    n = array.length
    if n == 0:
        return array
    rev = bit_reverse_indices(n)
    idx = np.arange(n, dtype=np.intp)
    # each pair is visited only from its smaller index
    lo = idx[rev > idx]
    hi = rev[lo]
    for component in (array.real, array.imag):
        component[lo], component[hi] = component[hi], component[lo]
    return array
