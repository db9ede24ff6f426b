# tests/test_plot_cli.py
import json
from pathlib import Path

import numpy as np
import pytest
from click.testing import CliRunner
from PIL import Image

from mixfft.cli import image_demo
from mixfft.cli.mixfft_cli import demo_panels, diagnostics, main
from mixfft.cli.settings import load_settings, split_settings_args
from mixfft.core import ComplexArray, ComplexValue
from mixfft.io import read_signal, write_image
from mixfft.plot import low_pass, render_panels, render_signal


def test_low_pass_zeroes_middle_bins():
    kept = []
    for i in range(10):
        v = ComplexValue(1.0, 1.0)
        low_pass(v, i, 10)
        kept.append(v.real != 0.0)
    assert kept == [True, True, True, False, False, False, False, False, True, True]


def test_render_signal_and_panels():
    img = render_signal(ComplexArray([0.0, 1.0, 0.5]), width=40, height=20)
    assert img.size == (40, 20)
    assert img.getpixel((0, 0)) == (255, 255, 255)
    assert render_signal(ComplexArray(0), 10, 10).size == (10, 10)

    sheet = render_panels([("a", ComplexArray(4)), ("b", ComplexArray(4))], width=30, height=10)
    assert sheet.size == (30, 2 * (10 + 14))


def test_demo_panels_filtered_versions_agree():
    panels = dict(demo_panels(64))
    assert list(panels) == ["original", "fft", "fft filtered", "original filtered", "all in one"]
    np.testing.assert_allclose(
        panels["original filtered"].to_complex(), panels["all in one"].to_complex(), atol=1e-12
    )


def test_diagnostics_small_errors():
    for n in (0, 1, 8, 12, 13):
        errors = diagnostics(n=n)
        assert all(err < 1e-9 for err in errors.values()), errors


def test_cli_diag(capsys):
    assert main(["diag", "--n", "30"]) == 0
    assert "OK" in capsys.readouterr().out


def test_cli_transform(tmp_path: Path):
    src = tmp_path / "in.csv"
    src.write_text("1\n1\n1\n1\n", encoding="utf-8")
    out = tmp_path / "out.csv"

    assert main(["transform", str(src), str(out)]) == 0
    np.testing.assert_allclose(read_signal(out).to_complex(), [2, 0, 0, 0], atol=1e-12)

    back = tmp_path / "back.csv"
    assert main(["transform", str(out), str(back), "--inverse"]) == 0
    np.testing.assert_allclose(read_signal(back).real, [1, 1, 1, 1], atol=1e-12)


def test_cli_image_and_demo(tmp_path: Path):
    src = tmp_path / "img.png"
    write_image(src, np.random.default_rng(0).random((6, 10, 3)))

    spec = tmp_path / "spec.png"
    assert main(["image", str(src), str(spec)]) == 0
    with Image.open(spec) as im:
        assert im.size == (10, 6)

    gray = tmp_path / "gray.png"
    assert main(["image", str(src), str(gray), "--gray", "--no-shift"]) == 0
    with Image.open(gray) as im:
        assert im.size == (10, 6)
        assert im.mode == "L"

    demo = tmp_path / "demo.png"
    assert main(["demo", str(demo), "--n", "30", "--width", "60", "--height", "20"]) == 0
    assert demo.exists()


def test_cli_settings_save_and_load(tmp_path: Path, capsys):
    settings = tmp_path / "settings.json"
    demo = tmp_path / "demo.png"
    assert main(["demo", str(demo), "--n", "48", "--save-settings", str(settings)]) == 0

    saved = json.loads(settings.read_text(encoding="utf-8"))
    assert saved["demo"]["n"] == 48
    assert load_settings(settings, "demo")["n"] == 48

    settings.write_text(json.dumps({"diag": {"n": 7, "tol": 1e-6}}), encoding="utf-8")
    assert main(["diag", f"--settings={settings}"]) == 0

    csv_path = tmp_path / "settings.csv"
    assert main(["diag", "--n", "5", "--save-settings", str(csv_path)]) == 0
    assert load_settings(csv_path)["n"] == 5


def test_split_settings_args():
    cleaned, load, save = split_settings_args(["demo", "--settings", "a.json", "x.png", "--save-settings=b.csv"])
    assert cleaned == ["demo", "x.png"]
    assert (load, save) == ("a.json", "b.csv")


def test_image_demo_click(tmp_path: Path):
    src = tmp_path / "pic.png"
    write_image(src, np.random.default_rng(1).random((8, 6, 3)))
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(image_demo.main, [str(src), str(out_dir), "--keep", "0.5"])

    assert result.exit_code == 0, result.output
    assert (out_dir / "pic_spectrum.png").exists()
    assert (out_dir / "pic_lowpass.png").exists()


def test_lowpass_channel_keep_all_is_identity():
    plane = np.random.default_rng(2).random((5, 6)) * 255
    np.testing.assert_allclose(image_demo.lowpass_channel(plane, 1.0), plane, atol=1e-9)


def test_diagnostics_empty_signal():
    assert diagnostics(n=0) == {"roundtrip": 0.0, "dft": 0.0, "numpy": 0.0}


def test_cli_diag_lengths(capsys):
    assert main(["diag", "--n", "0"]) == 0
    assert "OK" in capsys.readouterr().out
    with pytest.raises(SystemExit):
        main(["diag", "--n", "-1"])


def test_cli_outputs_go_through_write_image(tmp_path: Path, monkeypatch):
    from mixfft.cli import mixfft_cli

    written = []
    real_write = mixfft_cli.write_image

    def record(path, data, **kwargs):
        written.append(Path(path).name)
        real_write(path, data, **kwargs)

    monkeypatch.setattr(mixfft_cli, "write_image", record)

    src = tmp_path / "img.png"
    write_image(src, np.random.default_rng(3).random((4, 5, 3)))
    assert main(["image", str(src), str(tmp_path / "spec.png")]) == 0
    assert main(["demo", str(tmp_path / "demo.png"), "--n", "16", "--width", "32", "--height", "8"]) == 0

    assert written == ["spec.png", "demo.png"]
    with Image.open(tmp_path / "demo.png") as im:
        assert im.size == (32, 5 * (8 + 14))
