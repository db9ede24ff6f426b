"""
mixfft
Orthonormal FFT for arbitrary lengths, with frequency-domain filtering.
"""

try:
    from importlib import metadata as _metadata
except Exception:
    _metadata = None  # type: ignore

try:
    __version__ = _metadata.version("mixfft") if _metadata else "0.0.0.dev0"
except Exception:
    # Not installed (dev mode) or no metadata available
    __version__ = "0.0.0.dev0"

# Re-export core for convenience
from . import core, io, image  # noqa: E402
from .core import ComplexArray, fft, ifft, frequency_map  # noqa: E402

__all__ = ["core", "io", "image", "ComplexArray", "fft", "ifft", "frequency_map", "__version__"]
