# mixfft/plot.py
"""Render ComplexArray signals as simple line plots with Pillow."""
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from mixfft.core.complex_array import ComplexArray

__all__ = [
    "low_pass",
    "render_signal",
    "render_panels",
]

Color = Tuple[int, int, int]


def low_pass(value, i: int, n: int) -> None:
    """Frequency filter zeroing every bin with n/5 < i < 4n/5."""
    if n / 5 < i < 4 * n / 5:
        value.real = 0.0
        value.imag = 0.0


def render_signal(
    array: ComplexArray,
    width: int = 512,
    height: int = 128,
    color: Color = (0, 0, 255),
    background: Color = (255, 255, 255),
) -> Image.Image:
    """
    Draw the real part of `array` as a polyline.

    Sample i is placed at ``x = i*width/n`` and ``y = height/2 * (1.5 - real)``,
    so values in [0, 1] sit in the lower half of the panel.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    img = Image.new("RGB", (width, height), background)
    n = array.length
    if n == 0:
        return img

    xs = np.arange(n, dtype=np.float64) * width / n
    ys = height / 2.0 * (1.5 - array.real.astype(np.float64))
    ys = np.nan_to_num(ys, nan=height / 2.0, posinf=0.0, neginf=float(height))
    points = list(zip(xs.tolist(), ys.tolist()))
    if n == 1:
        ImageDraw.Draw(img).point(points, fill=color)
    else:
        ImageDraw.Draw(img).line(points, fill=color, width=1)
    return img


def render_panels(
    panels: Sequence[Tuple[str, ComplexArray]],
    width: int = 512,
    height: int = 128,
) -> Image.Image:
    """Stack labelled signal panels vertically into one image."""
    label_h = 14
    sheet = Image.new("RGB", (width, max(1, len(panels)) * (height + label_h)), (255, 255, 255))
    draw = ImageDraw.Draw(sheet)
    for k, (title, array) in enumerate(panels):
        top = k * (height + label_h)
        draw.text((4, top), title, fill=(0, 0, 0))
        sheet.paste(render_signal(array, width, height), (0, top + label_h))
    return sheet
