"""
mixfft.image
============

2D transforms over image data.

Submodules
----------
- :mod:`mixfft.image.fft_image` : RGBA channel split/merge and row/column 2D FFT.
"""

from .fft_image import (
    split_rgb,
    merge_rgb,
    fft2d,
    fft_image_rgba,
    image_spectrum,
)

__all__ = [
    "split_rgb",
    "merge_rgb",
    "fft2d",
    "fft_image_rgba",
    "image_spectrum",
]
