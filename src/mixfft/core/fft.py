# src/mixfft/core/fft.py
"""
Orthonormal FFT for arbitrary lengths and frequency-domain filtering.

Conventions
-----------
forward : X[k] = N^(-1/2) * sum_n x[n] * exp(+2j*pi*n*k/N)
inverse : x[n] = N^(-1/2) * sum_k X[k] * exp(-2j*pi*n*k/N)

Both directions share the 1/sqrt(N) scale, so ``ifft(fft(x)) == x`` and a
constant input ``c`` maps to a single spike ``c*sqrt(N)`` at bin 0.
"""
from __future__ import annotations

from typing import Union

import numpy as np

from mixfft.core.bitrev import bit_reverse_permute, is_power_of_two
from mixfft.core.complex_array import ComplexArray, Visitor
from mixfft.core.errors import InvalidLengthError, TypeMismatchError

ArrayInput = Union[ComplexArray, np.ndarray, list, tuple]

SQRT1_2 = np.sqrt(0.5)

__all__ = [
    "ensure_complex_array",
    "smallest_odd_factor",
    "radix2_transform",
    "mixed_radix_transform",
    "fft",
    "ifft",
    "frequency_map",
    "magnitude",
    "dft",
]


# ---------------------------------------------------------------------------
# Input handling
# ---------------------------------------------------------------------------

def ensure_complex_array(x: ArrayInput, strict: bool = False) -> ComplexArray:
    """
    Return `x` itself if it is a ComplexArray, else wrap it as real values.

    With ``strict=True`` only ComplexArray instances are accepted.
    """
    if isinstance(x, ComplexArray):
        return x
    if strict:
        raise TypeMismatchError(
            f"Expected a ComplexArray, got {type(x).__name__}"
        )
    return ComplexArray(x)


def _sign(inverse: bool) -> float:
    return -1.0 if inverse else 1.0


# ---------------------------------------------------------------------------
# Radix-2 (power-of-two lengths)
# ---------------------------------------------------------------------------

def radix2_transform(array: ComplexArray, inverse: bool = False) -> ComplexArray:
    """
    Iterative Cooley-Tukey butterfly network for power-of-two lengths.

    The input is copied, bit-reverse permuted, then combined stage by stage
    with width = 1, 2, 4, ... . Every stage scales by 1/sqrt(2), which adds
    up to the orthonormal 1/sqrt(N).

    Parameters
    ----------
    array : ComplexArray
        Input, length must be a power of two. Not modified.
    inverse : bool
        Use the negative exponent.

    Returns
    -------
    ComplexArray
        New container of the same dtype.
    """
    n = array.length
    if n <= 1:
        return array
    if not is_power_of_two(n):
        raise InvalidLengthError(f"Radix-2 transform needs a power-of-two length, got {n}")

    output = bit_reverse_permute(ComplexArray(array))
    z = output.to_complex()
    sign = _sign(inverse)

    width = 1
    while width < n:
        f = np.exp(sign * 1j * np.pi * np.arange(width) / width)
        # (pairs of blocks, left/right, position within block)
        blocks = z.reshape(n // (2 * width), 2, width)
        left = blocks[:, 0, :].copy()
        right = blocks[:, 1, :] * f
        blocks[:, 0, :] = SQRT1_2 * (left + right)
        blocks[:, 1, :] = SQRT1_2 * (left - right)
        width <<= 1

    output._store(z)
    return output


# ---------------------------------------------------------------------------
# Mixed radix (any length)
# ---------------------------------------------------------------------------

def smallest_odd_factor(n: int) -> int:
    """
    Smallest odd divisor of `n` in [3, sqrt(n)], or `n` itself if none.

    Even divisors are never tested.
    """
    p = 3
    while p * p <= n:
        if n % p == 0:
            return p
        p += 2
    return n


def mixed_radix_transform(array: ComplexArray, inverse: bool = False) -> ComplexArray:
    """
    Recursive Cooley-Tukey decomposition by the smallest odd factor.

    With p = smallest_odd_factor(N) and m = N / p, each decimated
    sub-sequence ``x[j::p]`` (j in [0, p)) is transformed through the
    dispatcher and folded into the output with phase factors
    ``exp(±2j*pi*j*k/N)``; the sum is scaled by 1/sqrt(p).

    The result is written back into `array`, which is returned.
    """
    n = array.length
    if n <= 1:
        return array

    p = smallest_odd_factor(n)
    m = n // p
    sign = _sign(inverse)
    z = array.to_complex()
    k = np.arange(n)
    output = np.zeros(n, dtype=np.complex128)

    for j in range(p):
        sub = _transform(ComplexArray.from_complex(z[j::p], dtype=array.dtype), inverse)
        # reduce j*k mod n first so the angle stays in [0, 2*pi)
        phase = np.exp(sign * 2j * np.pi * ((j * k) % n) / n)
        output += phase * np.tile(sub.to_complex(), p)

    output /= np.sqrt(p)
    array._store(output)
    return array


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def _transform(array: ComplexArray, inverse: bool) -> ComplexArray:
    n = array.length
    if n <= 1:
        return array
    if is_power_of_two(n):
        return radix2_transform(array, inverse)
    return mixed_radix_transform(array, inverse)


def fft(x: ArrayInput, strict: bool = False) -> ComplexArray:
    """
    Forward orthonormal transform of any length.

    Lengths 0 and 1 are returned unchanged. Power-of-two lengths produce a
    new container; other lengths are transformed in place and `x` itself
    is returned. Copy first (``ComplexArray(x)``) to keep the original.

    Parameters
    ----------
    x : ComplexArray | sequence of float
        Input values. Plain sequences are wrapped as real values.
    strict : bool
        Reject anything that is not a ComplexArray.

    Returns
    -------
    ComplexArray
    """
    return _transform(ensure_complex_array(x, strict), inverse=False)


def ifft(x: ArrayInput, strict: bool = False) -> ComplexArray:
    """Inverse orthonormal transform; same storage rules as :func:`fft`."""
    return _transform(ensure_complex_array(x, strict), inverse=True)


def frequency_map(x: ArrayInput, filterer: Visitor, strict: bool = False) -> ComplexArray:
    """
    Filter `x` in frequency space and return the real-space result.

    Pipeline: fft -> ``filterer(value, k, n)`` on every bin -> ifft.
    `filterer` edits ``value.real`` / ``value.imag`` in place.
    """
    spectrum = fft(x, strict=strict)
    return ifft(spectrum.map(filterer))


def magnitude(x: ArrayInput) -> np.ndarray:
    return ensure_complex_array(x).magnitude()


# ---------------------------------------------------------------------------
# Reference
# ---------------------------------------------------------------------------

def dft(x: ArrayInput, inverse: bool = False) -> ComplexArray:
    """
    Direct O(N^2) transform with the same sign and scale as :func:`fft`.

    Always returns a new container; `x` is not modified.
    """
    src = ensure_complex_array(x)
    n = src.length
    out = ComplexArray(src)
    if n == 0:
        return out
    k = np.arange(n)
    kernel = np.exp(_sign(inverse) * 2j * np.pi * (np.outer(k, k) % n) / n)
    out._store(kernel @ src.to_complex() / np.sqrt(n))
    return out
