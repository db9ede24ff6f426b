# mixfft/io/signal.py
"""Plain-text signal files: one sample per line, ``re`` or ``re,im``."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Union

import numpy as np

from mixfft.core.complex_array import ComplexArray, DTypeLike

PathLike = Union[str, Path]

__all__ = [
    "read_signal",
    "write_signal",
]


def read_signal(path: PathLike, dtype: DTypeLike = np.float64) -> ComplexArray:
    """
    Read a signal file into a ComplexArray.

    Blank lines and lines starting with ``#`` are skipped. A missing
    second column means a zero imaginary part.
    """
    p = Path(path)
    real: list[float] = []
    imag: list[float] = []
    with p.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        for lineno, row in enumerate(reader, start=1):
            cells = [c.strip() for c in row if c.strip()]
            if not cells or cells[0].startswith("#"):
                continue
            if len(cells) > 2:
                raise ValueError(f"{p}:{lineno}: expected 're' or 're,im', got {row!r}")
            try:
                real.append(float(cells[0]))
                imag.append(float(cells[1]) if len(cells) == 2 else 0.0)
            except ValueError as exc:
                raise ValueError(f"{p}:{lineno}: not a number: {row!r}") from exc

    out = ComplexArray(real, dtype=dtype)
    out.imag = imag
    return out


def write_signal(path: PathLike, array: ComplexArray) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        for re, im in zip(array.real, array.imag):
            writer.writerow([repr(float(re)), repr(float(im))])
