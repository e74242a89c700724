from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from propdraft.core.runtime_config import runtime_config, set_config_path
from propdraft.core.surface import DrawingSurface
from propdraft.export import image


# `propdraft.export.image`（SVG→PNG / resvg）をテストする。

@pytest.fixture(autouse=True)
def _reset_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def test_default_output_path_uses_data_dir():
    path = image.default_output_path("ring_stand")
    assert path == Path("data") / "output" / "blueprint" / "ring_stand.svg"
    assert image.default_output_path("x", suffix=".png").suffix == ".png"


def test_png_output_size_scales_canvas_by_png_scale():
    assert runtime_config().png_scale == 2.0
    assert image.png_output_size((300, 300)) == (600, 600)
    with pytest.raises(ValueError):
        image.png_output_size((0, 300))


def test_export_image_writes_svg_directly(tmp_path):
    surface = DrawingSurface((120, 80))
    surface.draw_placeholder()

    out = image.export_image(surface, tmp_path / "out.svg")

    assert out == tmp_path / "out.svg"
    assert 'viewBox="0 0 120 80"' in out.read_text(encoding="utf-8")


def test_export_image_png_rasterizes_written_svg(tmp_path, monkeypatch: pytest.MonkeyPatch):
    surface = DrawingSurface((100, 50))
    seen: list[list[str]] = []

    def fake_run(cmd, *, capture_output: bool, text: bool, check: bool):
        assert capture_output is True
        assert text is True
        assert check is False
        seen.append(cmd)
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr(image.subprocess, "run", fake_run)

    out = image.export_image(surface, tmp_path / "out.png")

    assert out == tmp_path / "out.png"
    assert (tmp_path / "out.svg").exists()
    (cmd,) = seen
    assert cmd[0] == "resvg"
    assert cmd[cmd.index("--width") + 1] == "200"
    assert cmd[cmd.index("--height") + 1] == "100"
    assert cmd[cmd.index("--background") + 1] == "#FFFFFF"
    assert Path(cmd[-2]) == tmp_path / "out.svg"
    assert Path(cmd[-1]) == tmp_path / "out.png"


def test_rasterize_svg_to_png_raises_when_resvg_is_missing(tmp_path, monkeypatch: pytest.MonkeyPatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError

    monkeypatch.setattr(image.subprocess, "run", missing)

    with pytest.raises(RuntimeError, match="resvg が見つかりません"):
        image.rasterize_svg_to_png(tmp_path / "in.svg", tmp_path / "out.png", output_size=(10, 10))


def test_rasterize_svg_to_png_reports_resvg_failure(tmp_path, monkeypatch: pytest.MonkeyPatch):
    def failing(cmd, **kwargs):
        return subprocess.CompletedProcess(args=cmd, returncode=1, stdout="", stderr="bad svg")

    monkeypatch.setattr(image.subprocess, "run", failing)

    with pytest.raises(RuntimeError, match="bad svg"):
        image.rasterize_svg_to_png(tmp_path / "in.svg", tmp_path / "out.png", output_size=(10, 10))


def test_export_image_rejects_unknown_suffix(tmp_path):
    with pytest.raises(ValueError):
        image.export_image(DrawingSurface((10, 10)), tmp_path / "out.bmp")
