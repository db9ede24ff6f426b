"""
mixfft.core
===========

Transform engine: complex container, bit reversal and the orthonormal FFT.

Submodules
----------
- :mod:`mixfft.core.complex_array` : ComplexArray container and ComplexValue.
- :mod:`mixfft.core.bitrev`        : Bit-reversal indices and permutation.
- :mod:`mixfft.core.fft`           : Radix-2 / mixed-radix FFT, dispatch, filtering.
- :mod:`mixfft.core.errors`        : Exception types.
"""

from .errors import (
    MixFFTError,
    InvalidLengthError,
    TypeMismatchError,
)
from .complex_array import (
    ComplexValue,
    ComplexArray,
)
from .bitrev import (
    is_power_of_two,
    bit_reverse_index,
    bit_reverse_indices,
    bit_reverse_permute,
)
from .fft import (
    ensure_complex_array,
    smallest_odd_factor,
    radix2_transform,
    mixed_radix_transform,
    fft,
    ifft,
    frequency_map,
    magnitude,
    dft,
)

__all__ = [
    # errors
    "MixFFTError",
    "InvalidLengthError",
    "TypeMismatchError",
    # container
    "ComplexValue",
    "ComplexArray",
    # bit reversal
    "is_power_of_two",
    "bit_reverse_index",
    "bit_reverse_indices",
    "bit_reverse_permute",
    # transforms
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
