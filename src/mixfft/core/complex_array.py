# src/mixfft/core/complex_array.py
"""Paired real/imaginary array container used by every transform."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Tuple, Union

import numpy as np

from mixfft.core.errors import InvalidLengthError, TypeMismatchError

DTypeLike = Union[np.dtype, type, str]
Visitor = Callable[["ComplexValue", int, int], None]

__all__ = [
    "ComplexValue",
    "ComplexArray",
]


@dataclass
class ComplexValue:
    """
    Transient (real, imag) pair handed to visitors.

    It is a plain value: mutating it changes nothing until the traversal
    that produced it writes it back into the owning array.
    """
    real: float = 0.0
    imag: float = 0.0

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)


def _check_dtype(dtype: DTypeLike) -> np.dtype:
    dt = np.dtype(dtype)
    if dt.kind not in "fiu":
        raise TypeMismatchError(
            f"Storage dtype must be a real float or integer type, got {dt}"
        )
    return dt


def _as_real_values(values, dtype: np.dtype) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except ValueError as exc:
        raise TypeMismatchError(f"Cannot build a real sequence from {values!r}") from exc

    if arr.ndim != 1:
        raise TypeMismatchError(f"Expected a 1D sequence of reals, got shape {arr.shape}")
    if arr.size and (arr.dtype.kind not in "biuf"):
        raise TypeMismatchError(
            f"Expected real numeric values, got dtype {arr.dtype}"
        )
    return np.array(arr, dtype=dtype, copy=True)


class ComplexArray:
    """
    N complex numbers stored as two same-length real arrays.

    Parameters
    ----------
    other : int | sequence of float | ComplexArray, default=0
        - int: number of zero-initialised elements.
        - sequence: real parts; imaginary parts are zero.
        - ComplexArray: deep copy (the source dtype wins over `dtype`).
    dtype : numpy dtype, default=np.float64
        Storage precision of both component arrays.

    Notes
    -----
    The length is fixed at construction. `real` and `imag` may be
    reassigned, but only with data of the same length; the values are
    copied into the existing buffers.
    """

    __slots__ = ("_real", "_imag", "_dtype")

    def __init__(self, other=0, dtype: DTypeLike = np.float64):
        if isinstance(other, ComplexArray):
            self._dtype = other.dtype
            self._real = np.array(other.real, dtype=self._dtype, copy=True)
            self._imag = np.array(other.imag, dtype=self._dtype, copy=True)
            return

        self._dtype = _check_dtype(dtype)

        if isinstance(other, (bool, np.bool_)):
            raise TypeMismatchError("A boolean is neither a count nor a sequence")

        if isinstance(other, (int, np.integer)):
            n = int(other)
            if n < 0:
                raise InvalidLengthError(f"Length must be >= 0, got {n}")
            self._real = np.zeros(n, dtype=self._dtype)
        elif isinstance(other, (str, bytes)):
            raise TypeMismatchError(f"Cannot build a ComplexArray from {type(other).__name__}")
        else:
            self._real = _as_real_values(other, self._dtype)

        self._imag = np.zeros(self._real.shape[0], dtype=self._dtype)

    @classmethod
    def from_complex(cls, values, dtype: DTypeLike = np.float64) -> "ComplexArray":
        """Build from a sequence of Python/NumPy complex numbers."""
        z = np.asarray(values)
        if z.ndim != 1 or (z.size and z.dtype.kind not in "biufc"):
            raise TypeMismatchError(
                f"Expected a 1D sequence of numbers, got shape {z.shape}, dtype {z.dtype}"
            )
        out = cls(z.shape[0], dtype=dtype)
        out._real[:] = np.real(z)
        out._imag[:] = np.imag(z)
        return out

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def length(self) -> int:
        return int(self._real.shape[0])

    def __len__(self) -> int:
        return self.length

    @property
    def real(self) -> np.ndarray:
        return self._real

    @real.setter
    def real(self, values) -> None:
        self._assign(self._real, values)

    @property
    def imag(self) -> np.ndarray:
        return self._imag

    @imag.setter
    def imag(self, values) -> None:
        self._assign(self._imag, values)

    def _assign(self, target: np.ndarray, values) -> None:
        arr = np.asarray(values)
        if arr.shape != target.shape:
            raise InvalidLengthError(
                f"Cannot assign shape {arr.shape} to a component of length {self.length}"
            )
        target[:] = arr

    def to_complex(self) -> np.ndarray:
        """Return the values as a new complex128 ndarray."""
        return self._real.astype(np.float64) + 1j * self._imag.astype(np.float64)

    def _store(self, z: np.ndarray) -> None:
        """Write a complex ndarray of matching length into the component buffers."""
        self._real[:] = np.real(z)
        self._imag[:] = np.imag(z)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def items(self) -> Iterator[Tuple[ComplexValue, int, int]]:
        """
        Lazily yield ``(value, index, length)`` in ascending index order.

        Each `value` is a fresh :class:`ComplexValue`. The (possibly mutated)
        value is written back to position `index` when the consumer resumes
        the generator, and also when it stops early (break, close, or the
        generator being dropped).
        """
        n = self.length
        for i in range(n):
            value = ComplexValue(float(self._real[i]), float(self._imag[i]))
            try:
                yield value, i, n
            finally:
                self._real[i] = value.real
                self._imag[i] = value.imag

    def for_each(self, visitor: Visitor) -> None:
        """Call ``visitor(value, index, length)`` for every element."""
        for value, i, n in self.items():
            visitor(value, i, n)

    def map(self, mutator: Visitor) -> "ComplexArray":
        """In-place mapper: mutate each element through `mutator`, return self."""
        self.for_each(mutator)
        return self

    def __iter__(self) -> Iterator[complex]:
        for re, im in zip(self._real, self._imag):
            yield complex(re, im)

    # ------------------------------------------------------------------
    # Pure operations
    # ------------------------------------------------------------------

    def magnitude(self) -> np.ndarray:
        """Element-wise modulus, as a new array of the storage dtype."""
        mags = np.hypot(self._real.astype(np.float64), self._imag.astype(np.float64))
        return mags.astype(self._dtype)

    def conjugate(self) -> "ComplexArray":
        """Return a conjugated copy; the receiver is left untouched."""
        def _negate_imag(value: ComplexValue, i: int, n: int) -> None:
            value.imag *= -1

        return ComplexArray(self).map(_negate_imag)

    def copy(self) -> "ComplexArray":
        return ComplexArray(self)

    # ------------------------------------------------------------------
    # Transform shortcuts
    # ------------------------------------------------------------------

    def fft(self) -> "ComplexArray":
        from mixfft.core.fft import fft

        return fft(self)

    def ifft(self) -> "ComplexArray":
        from mixfft.core.fft import ifft

        return ifft(self)

    def frequency_map(self, filterer: Visitor) -> "ComplexArray":
        from mixfft.core.fft import frequency_map

        return frequency_map(self, filterer)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        components = [f"({float(re):.2f}, {float(im):.2f})" for re, im in zip(self._real, self._imag)]
        return f"[{', '.join(components)}]"

    def __repr__(self) -> str:
        return f"ComplexArray(length={self.length}, dtype={self._dtype}, values={self})"
