# src/mixfft/core/errors.py
"""Exception types raised at the API boundary of :mod:`mixfft`."""
from __future__ import annotations

__all__ = [
    "MixFFTError",
    "InvalidLengthError",
    "TypeMismatchError",
]


class MixFFTError(Exception):
    """Base class for all mixfft errors."""


class InvalidLengthError(MixFFTError, ValueError):
    """A length or size argument is not acceptable for the operation."""


class TypeMismatchError(MixFFTError, TypeError):
    """An input cannot be interpreted as a complex array or real sequence."""
