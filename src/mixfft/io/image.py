# mixfft/io/image.py
"""
Image I/O utilities using Pillow."""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Union, Optional

import numpy as np
from PIL import Image

ArrayLike = np.ndarray
PathLike = Union[str, Path]
ImageMode = Literal["L", "RGB", "RGBA", "keep"]

__all__ = [
    "read_image",
    "write_image",
    "as_uint8",
    "to_rgba_bytes",
    "rescale_unit",
]


def _pathify(path: PathLike) -> str:
    return str(Path(path))


def read_image(
    path: PathLike,
    *,
    mode: ImageMode = "RGBA",
) -> np.ndarray:
    """
    Read an image via Pillow as uint8.

    Parameters
    ----------
    path : str or Path
        Input image path.
    mode : {"L", "RGB", "RGBA", "keep"}, default="RGBA"
        - "keep": use the file's native mode.
        - otherwise: convert via Pillow's .convert(mode).

    Returns
    -------
    img : ndarray, uint8
        (H, W) for "L", (H, W, C) for color.
    """
    with Image.open(_pathify(path)) as im:
        if mode != "keep":
            im = im.convert(mode)
        arr = np.asarray(im)
    return arr.astype(np.uint8, copy=False)


def to_rgba_bytes(img: ArrayLike) -> np.ndarray:
    """
    Flatten an (H, W), (H, W, 3) or (H, W, 4) uint8 image to interleaved
    RGBA bytes of length 4*H*W (row-major, ``index = x + y*W``).
    """
    arr = np.asarray(img)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected 2D or 3D image with 3/4 channels, got {arr.shape}")
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=arr.dtype)
        arr = np.concatenate([arr, alpha], axis=-1)
    return np.ascontiguousarray(arr, dtype=np.uint8).reshape(-1)


def rescale_unit(x: ArrayLike) -> np.ndarray:
    """
    Linearly map `x` to [0, 1] (float64). Flat or non-finite input maps to zeros.
    """
    y = np.nan_to_num(np.asarray(x, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    if y.size == 0:
        return y
    ymin = float(np.min(y))
    ymax = float(np.max(y))
    eps = np.finfo(np.float64).eps
    if ymax <= ymin + eps:
        return np.zeros_like(y)
    return (y - ymin) / (ymax - ymin)


def as_uint8(x: ArrayLike) -> np.ndarray:
    """
    Convert an array to uint8 for deterministic image saving.

    Rules
    -----
    - float: if min>=0 and max<=1 → scale by 255; else clip to [0, 255]
    - uint8: unchanged
    - other ints: clipped to [0, 255]
    """
    arr = np.asarray(x)

    if np.issubdtype(arr.dtype, np.floating):
        arr_f = arr.astype(np.float64)
        if arr_f.size == 0:
            return arr_f.astype(np.uint8)
        vmin = float(np.nanmin(arr_f))
        vmax = float(np.nanmax(arr_f))

        if np.isfinite(vmin) and np.isfinite(vmax) and 0.0 <= vmin and vmax <= 1.0 + 1e-8:
            arr_f = arr_f * 255.0
        arr_f = np.clip(np.nan_to_num(arr_f, nan=0.0), 0.0, 255.0)
        return np.round(arr_f).astype(np.uint8)

    if arr.dtype == np.uint8:
        return arr

    return np.clip(arr.astype(np.float64), 0.0, 255.0).astype(np.uint8)


def write_image(
    path: PathLike,
    data: ArrayLike,
    *,
    mode: Optional[str] = None,
) -> None:
    """
    Save an image via Pillow with deterministic uint8 conversion.

    Parameters
    ----------
    path : str or Path
        Output file path (extension decides format).
    data : ndarray
        Image data, 2D or 3D.
    mode : str or None
        Pillow image mode. If None, deduced from data shape:
        - 2D → "L"
        - 3D, C=1 → "L"
        - 3D, C=3 → "RGB"
        - 3D, C=4 → "RGBA"
    """
    arr = np.asarray(data)

    if arr.ndim == 2:
        img_mode = "L"
    elif arr.ndim == 3:
        c = arr.shape[2]
        if c == 1:
            img_mode = "L"
            arr = arr[..., 0]
        elif c == 3:
            img_mode = "RGB"
        elif c == 4:
            img_mode = "RGBA"
        else:
            raise ValueError(f"Unsupported channel count {c}")
    else:
        raise ValueError(f"Expected 2D or 3D array, got {arr.shape}")

    if mode is not None:
        img_mode = mode

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(as_uint8(arr)).convert(img_mode)
    img.save(_pathify(out))
