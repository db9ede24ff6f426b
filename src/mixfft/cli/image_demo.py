"""Command-line demo: image spectrum and low-pass reconstruction.
Usage:
    python -m mixfft.cli.image_demo INPUT_PATH OUTPUT_DIR [--keep FRACTION]
Saves OUTPUT_DIR/<name>_spectrum.png and OUTPUT_DIR/<name>_lowpass.png.
"""
import os
import click
import numpy as np
import imageio.v3 as iio

from mixfft.core import ComplexArray
from mixfft.image import fft2d, image_spectrum
from mixfft.io import read_image, as_uint8, rescale_unit


def lowpass_channel(plane: np.ndarray, keep: float) -> np.ndarray:
    """
    Zero every 2D frequency outside the central `keep` fraction per axis
    and transform back. Returns the real part, shape of `plane`.
    """
    h, w = plane.shape
    spec = fft2d(ComplexArray(plane.reshape(-1)), w, h)

    # |frequency| per axis for unshifted bins
    fy = np.abs(np.fft.fftfreq(h))[:, None]
    fx = np.abs(np.fft.fftfreq(w))[None, :]
    mask = ((fy <= keep / 2) & (fx <= keep / 2)).reshape(-1)
    spec.real[~mask] = 0.0
    spec.imag[~mask] = 0.0

    back = fft2d(spec, w, h, inverse=True)
    return back.real.reshape(h, w)


@click.command()
@click.argument("input_path")
@click.argument("output_dir")
@click.option("--keep", default=0.25, type=click.FloatRange(0.0, 1.0), show_default=True,
              help="Fraction of frequencies kept per axis by the low-pass filter.")
@click.option("--gray", is_flag=True, default=False, help="Process a grayscale version.")
def main(input_path, output_dir, keep, gray):

    img = read_image(input_path, mode="L" if gray else "RGB").astype(np.float64)
    os.makedirs(output_dir, exist_ok=True)
    base = os.path.splitext(os.path.basename(input_path))[0]

    # =============== SPECTRUM ===============
    spec = np.fft.fftshift(np.log1p(image_spectrum(img, progress=True)), axes=(0, 1))
    spec_path = os.path.join(output_dir, f"{base}_spectrum.png")
    iio.imwrite(spec_path, as_uint8(rescale_unit(spec)))
    click.echo(f"Saved spectrum → {spec_path}")

    # =============== LOW-PASS ===============
    planes = img[..., None] if img.ndim == 2 else img
    out = np.stack([lowpass_channel(planes[..., c], keep) for c in range(planes.shape[2])], axis=-1)
    if img.ndim == 2:
        out = out[..., 0]
    lp_path = os.path.join(output_dir, f"{base}_lowpass.png")
    iio.imwrite(lp_path, np.clip(np.round(out), 0.0, 255.0).astype(np.uint8))
    click.echo(f"Saved low-pass → {lp_path}")


if __name__ == "__main__":
    main()
