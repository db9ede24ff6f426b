# mixfft/image/fft_image.py
"""2D transforms of RGBA pixel data, built from 1D row and column passes."""
from __future__ import annotations

from typing import Tuple

import numpy as np
from tqdm import tqdm

from mixfft.core.complex_array import ComplexArray, DTypeLike
from mixfft.core.errors import InvalidLengthError
from mixfft.core.fft import fft, ifft

__all__ = [
    "split_rgb",
    "merge_rgb",
    "fft2d",
    "fft_image_rgba",
    "image_spectrum",
]


def split_rgb(data: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Split interleaved RGBA bytes into three channel arrays (alpha dropped).

    Parameters
    ----------
    data : ndarray, shape (4*n,)
        Interleaved ``r, g, b, a, r, g, b, a, ...`` values.

    Returns
    -------
    r, g, b : ndarray, shape (n,), float64
    """
    arr = np.asarray(data).reshape(-1)
    if arr.size % 4:
        raise InvalidLengthError(f"RGBA data length must be a multiple of 4, got {arr.size}")
    px = arr.reshape(-1, 4).astype(np.float64)
    return px[:, 0].copy(), px[:, 1].copy(), px[:, 2].copy()


def merge_rgb(r: ComplexArray, g: ComplexArray, b: ComplexArray) -> ComplexArray:
    """
    Interleave three channel containers into one RGBA-ordered container.

    The alpha slot of every pixel is left at zero.
    """
    n = r.length
    if g.length != n or b.length != n:
        raise InvalidLengthError(
            f"Channel lengths differ: r={n}, g={g.length}, b={b.length}"
        )
    output = ComplexArray(4 * n, dtype=r.dtype)
    for offset, channel in enumerate((r, g, b)):
        output.real[offset::4] = channel.real
        output.imag[offset::4] = channel.imag
    return output


def fft2d(array: ComplexArray, nx: int, ny: int, inverse: bool = False) -> ComplexArray:
    """
    2D orthonormal transform of an ``nx`` by ``ny`` grid stored row-major.

    Rows (``index = x + y*nx``) are transformed first, then columns.
    `array` is not modified; a new container is returned.
    """
    if nx < 0 or ny < 0 or nx * ny != array.length:
        raise InvalidLengthError(
            f"Grid {nx}x{ny} does not match array length {array.length}"
        )
    transform = ifft if inverse else fft
    output = ComplexArray(array)
    if output.length == 0:
        return output

    grid_r = output.real.reshape(ny, nx)
    grid_i = output.imag.reshape(ny, nx)

    for y in range(ny):
        row = ComplexArray(grid_r[y], dtype=array.dtype)
        row.imag = grid_i[y]
        row = transform(row)
        grid_r[y] = row.real
        grid_i[y] = row.imag

    for x in range(nx):
        col = ComplexArray(grid_r[:, x], dtype=array.dtype)
        col.imag = grid_i[:, x]
        col = transform(col)
        grid_r[:, x] = col.real
        grid_i[:, x] = col.imag

    return output


def fft_image_rgba(
    data: np.ndarray,
    nx: int,
    ny: int,
    inverse: bool = False,
    dtype: DTypeLike = np.float32,
    progress: bool = False,
) -> ComplexArray:
    """
    Transform the RGB channels of interleaved RGBA pixel data in 2D.

    Parameters
    ----------
    data : ndarray, shape (4*nx*ny,)
        Interleaved RGBA values, row-major.
    nx, ny : int
        Image width and height.
    inverse : bool
        Run the inverse transform.
    dtype : numpy dtype, default=np.float32
        Storage dtype of the channel containers.
    progress : bool
        Show a tqdm progress bar over the channels.

    Returns
    -------
    ComplexArray, length 4*nx*ny
        RGBA-interleaved spectrum; alpha slots are zero.
    """
    arr = np.asarray(data).reshape(-1)
    if arr.size != 4 * nx * ny:
        raise InvalidLengthError(
            f"Expected {4 * nx * ny} RGBA values for a {nx}x{ny} image, got {arr.size}"
        )
    channels = split_rgb(arr)
    it = tqdm(channels, desc="fft2d", unit="channel", disable=not progress)
    r, g, b = (fft2d(ComplexArray(c, dtype=dtype), nx, ny, inverse=inverse) for c in it)
    return merge_rgb(r, g, b)


def image_spectrum(img: np.ndarray, progress: bool = False) -> np.ndarray:
    """
    Per-channel 2D magnitude spectrum of an (H, W) or (H, W, C) image.

    Returns
    -------
    ndarray, float64, same shape as `img`
        Unshifted magnitudes (bin (0, 0) is the DC term).
    """
    arr = np.asarray(img, dtype=np.float64)
    if arr.ndim == 2:
        planes = arr[..., None]
    elif arr.ndim == 3:
        planes = arr
    else:
        raise ValueError(f"Expected 2D or 3D image, got {arr.shape}")

    h, w, c = planes.shape
    out = np.empty((h, w, c), dtype=np.float64)
    for ch in tqdm(range(c), desc="spectrum", unit="channel", disable=not progress):
        spec = fft2d(ComplexArray(planes[..., ch].reshape(-1)), w, h)
        out[..., ch] = spec.magnitude().reshape(h, w)

    return out[..., 0] if arr.ndim == 2 else out
