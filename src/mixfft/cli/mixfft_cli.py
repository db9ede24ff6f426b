from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from mixfft import __version__
from mixfft.cli.settings import (
    add_settings_args,
    split_settings_args,
    detect_command,
    load_settings,
    apply_settings_to_parser,
    serialize_args,
    save_settings,
    find_subparser,
)
from mixfft.core import ComplexArray, dft, fft, ifft, frequency_map
from mixfft.image import fft_image_rgba, image_spectrum
from mixfft.io import read_image, write_image, read_signal, write_signal, rescale_unit, to_rgba_bytes
from mixfft.plot import low_pass, render_panels


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _path(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


def diagnostics(n: int = 12, seed: int = 0) -> dict[str, float]:
    """
    Sanity checks on a random signal of length `n`.

    Returns the max abs errors of the round trip, of fft against the direct
    DFT, and of fft against numpy's orthonormal inverse FFT.
    """
    rng = np.random.default_rng(seed)
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    x = ComplexArray.from_complex(z)

    X = fft(ComplexArray(x))
    rt = ifft(ComplexArray(X))
    ref = dft(x)
    # numpy rejects empty transforms
    np_ref = np.fft.ifft(z, norm="ortho") if n > 0 else z

    return {
        "roundtrip": float(np.max(np.abs(rt.to_complex() - z), initial=0.0)),
        "dft": float(np.max(np.abs(X.to_complex() - ref.to_complex()), initial=0.0)),
        "numpy": float(np.max(np.abs(X.to_complex() - np_ref), initial=0.0)),
    }


def demo_panels(n: int = 128) -> list[tuple[str, ComplexArray]]:
    """Box signal, its spectrum, low-passed spectrum and both reconstructions."""
    def _box(value, i, length):
        value.real = 1.0 if length / 3 < i < 2 * length / 3 else 0.0

    data = ComplexArray(n).map(_box)
    panels = [("original", ComplexArray(data))]

    spectrum = fft(ComplexArray(data))
    panels.append(("fft", ComplexArray(spectrum)))
    spectrum.map(low_pass)
    panels.append(("fft filtered", ComplexArray(spectrum)))
    panels.append(("original filtered", ifft(spectrum)))
    panels.append(("all in one", frequency_map(ComplexArray(data), low_pass)))
    return panels


# ---------------------------------------------------------------------------
# Subcommand implementations
# ---------------------------------------------------------------------------

def _cmd_diag(args: argparse.Namespace) -> int:
    if args.n < 0:
        raise SystemExit("--n must be >= 0")
    print(f"mixfft v{__version__}")
    errors = diagnostics(n=args.n, seed=args.seed)
    for name, err in errors.items():
        print(f"  {name:<10} max error: {err:.2e}")
    ok = all(err < args.tol for err in errors.values())
    print("OK" if ok else "FAILED")
    return 0 if ok else 1


def _cmd_transform(args: argparse.Namespace) -> int:
    in_path = _path(args.in_path)
    out_path = _path(args.out_path)

    signal = read_signal(in_path, dtype=args.dtype)
    result = ifft(signal) if args.inverse else fft(signal)
    write_signal(out_path, result)
    print(f"Saved {'inverse' if args.inverse else 'forward'} transform ({result.length} values) → {out_path}")
    return 0


def _cmd_image(args: argparse.Namespace) -> int:
    in_path = _path(args.in_path)
    out_path = _path(args.out_path)

    img = read_image(in_path, mode="L" if args.gray else "RGB")
    if args.gray:
        spec = image_spectrum(img, progress=args.progress)
    else:
        h, w = img.shape[:2]
        rgba = fft_image_rgba(to_rgba_bytes(img), w, h, progress=args.progress)
        spec = rgba.magnitude().astype(np.float64).reshape(h, w, 4)[..., :3]
    if args.log:
        spec = np.log1p(spec)
    if args.shift:
        spec = np.fft.fftshift(spec, axes=(0, 1))

    write_image(out_path, rescale_unit(spec))
    print(f"Saved spectrum → {out_path}")
    return 0


def _cmd_demo(args: argparse.Namespace) -> int:
    out_path = _path(args.out_path)
    if args.n < 0:
        raise SystemExit("--n must be >= 0")

    sheet = render_panels(demo_panels(args.n), width=args.width, height=args.height)
    write_image(out_path, np.asarray(sheet))
    print(f"Saved demo panels → {out_path}")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mixfft",
        description="Orthonormal mixed-radix FFT tools.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- diag ----
    p_diag = subparsers.add_parser("diag", help="Run numeric sanity checks.")
    add_settings_args(p_diag)
    p_diag.add_argument("--n", type=int, default=12, help="Signal length.")
    p_diag.add_argument("--seed", type=int, default=0, help="Random seed.")
    p_diag.add_argument("--tol", type=float, default=1e-9, help="Max accepted error.")
    p_diag.set_defaults(func=_cmd_diag)

    # ---- transform ----
    p_tr = subparsers.add_parser(
        "transform",
        help="Transform a text signal file (one 're' or 're,im' per line).",
    )
    add_settings_args(p_tr)
    p_tr.add_argument("in_path", help="Input signal file.")
    p_tr.add_argument("out_path", help="Output signal file (re,im per line).")
    p_tr.add_argument("--inverse", action="store_true", help="Run the inverse transform.")
    p_tr.add_argument(
        "--dtype",
        choices=["float32", "float64"],
        default="float64",
        help="Storage precision.",
    )
    p_tr.set_defaults(func=_cmd_transform)

    # ---- image ----
    p_img = subparsers.add_parser("image", help="Write the 2D magnitude spectrum of an image.")
    add_settings_args(p_img)
    p_img.add_argument("in_path", help="Input image (PNG/JPEG...).")
    p_img.add_argument("out_path", help="Output image path.")
    p_img.add_argument("--gray", action="store_true", help="Convert to grayscale first.")
    p_img.add_argument(
        "--no-log",
        dest="log",
        action="store_false",
        help="Disable log1p scaling of magnitudes.",
    )
    p_img.add_argument(
        "--no-shift",
        dest="shift",
        action="store_false",
        help="Keep DC in the corner instead of the center.",
    )
    p_img.add_argument("--progress", action="store_true", help="Show a progress bar.")
    p_img.set_defaults(func=_cmd_image)

    # ---- demo ----
    p_demo = subparsers.add_parser("demo", help="Render the low-pass filter demonstration.")
    add_settings_args(p_demo)
    p_demo.add_argument("out_path", help="Output PNG path.")
    p_demo.add_argument("--n", type=int, default=128, help="Signal length.")
    p_demo.add_argument("--width", type=int, default=512, help="Panel width in pixels.")
    p_demo.add_argument("--height", type=int, default=128, help="Panel height in pixels.")
    p_demo.set_defaults(func=_cmd_demo)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    cleaned_argv, settings_path, save_path = split_settings_args(raw_argv)
    command = detect_command(cleaned_argv)
    target = find_subparser(parser, command) or parser

    if settings_path:
        apply_settings_to_parser(target, load_settings(Path(settings_path), command))

    args = parser.parse_args(cleaned_argv)

    if save_path:
        exclude = {"settings_path", "save_settings_path", "command", "func"}
        save_settings(Path(save_path), serialize_args(args, target, exclude=exclude), command=command)

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
