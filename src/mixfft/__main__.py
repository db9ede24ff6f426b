"""
Command-line entry for the mixfft package.

Usage
-----
$ python -m mixfft
"""

import numpy as np

from .core import ComplexArray, bit_reverse_permute, fft, ifft, frequency_map
from .cli.mixfft_cli import diagnostics
from . import __version__


def _diagnostics():
    print(f"mixfft orthonormal mixed-radix FFT v{__version__}\n")

    for n in (8, 12, 13, 900):
        errors = diagnostics(n=n)
        report = ", ".join(f"{k}={v:.2e}" for k, v in errors.items())
        print(f"  N={n:<4} {report}")

    print("\nBit reversal:")
    x = ComplexArray(np.arange(16, dtype=float))
    twice = bit_reverse_permute(bit_reverse_permute(ComplexArray(x)))
    print(f"  involution holds: {bool(np.array_equal(twice.real, x.real))}")

    print("\nKnown pairs (N=4):")
    print(f"  fft([1, 1, 1, 1]) = {fft([1, 1, 1, 1])}")
    print(f"  fft([1, 0, 0, 0]) = {fft([1, 0, 0, 0])}")
    print(f"  ifft([0, 0, 2, 0]) = {ifft([0, 0, 2, 0])}")

    def _halve(value, i, n):
        value.real /= 2
        value.imag /= 2

    print(f"  halved [1, 2, 3, 4] = {frequency_map([1, 2, 3, 4], _halve)}")


if __name__ == "__main__":
    _diagnostics()
