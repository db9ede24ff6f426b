"""
mixfft.io
=========

File helpers for images and plain-text signals.

Submodules:
- mixfft.io.image
- mixfft.io.signal
"""

from .image import (
    read_image,
    write_image,
    as_uint8,
    to_rgba_bytes,
    rescale_unit,
)
from .signal import (
    read_signal,
    write_signal,
)

__all__ = [
    # image
    "read_image",
    "write_image",
    "as_uint8",
    "to_rgba_bytes",
    "rescale_unit",
    # signal
    "read_signal",
    "write_signal",
]
