"""
どこで: `src/propdraft/export/image.py`。
何を: 図面を SVG/PNG として保存する。PNG は外部ラスタライザ（resvg）で SVG から変換する。
なぜ: SVG を正（ソース）として保存し、PNG は任意解像度で再生成できる導線を用意するため。
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from propdraft.core.runtime_config import output_root_dir, runtime_config
from propdraft.core.surface import DrawCall, DrawingSurface
from propdraft.export.svg import export_svg


def export_image(
    calls: DrawingSurface | Sequence[DrawCall],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: str = "#FFFFFF",
) -> Path:
    """図面を拡張子に応じた形式で保存する。

    Notes
    -----
    `.svg` はそのまま保存し、`.png` は同名の `.svg` を書いてから resvg でラスタライズする。
    """
    _path = Path(path)
    suffix = _path.suffix.lower()
    if isinstance(calls, DrawingSurface) and canvas_size is None:
        canvas_size = calls.size

    if suffix == ".svg":
        return export_svg(calls, _path, canvas_size=canvas_size)

    if suffix == ".png":
        if canvas_size is None:
            raise ValueError("canvas_size=None は DrawingSurface 以外では未対応")
        svg_path = _path.with_suffix(".svg")
        export_svg(calls, svg_path, canvas_size=canvas_size)
        return rasterize_svg_to_png(
            svg_path,
            _path,
            output_size=png_output_size(canvas_size),
            background_color=background_color,
        )

    raise ValueError(f"未対応の画像フォーマット: {suffix!r}")


def default_output_path(name: str, *, suffix: str = ".svg") -> Path:
    """`{output_root}/blueprint/{name}{suffix}` を返す。"""

    return output_root_dir() / "blueprint" / f"{name}{suffix}"


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """canvas_size を基準に PNG 出力ピクセルサイズを返す。"""

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    scale = float(runtime_config().png_scale)
    return int(int(canvas_w) * scale), int(int(canvas_h) * scale)


def _resvg_command(
    *,
    input_svg: Path,
    output_png: Path,
    output_size: tuple[int, int],
    background_color: str,
) -> list[str]:
    out_w, out_h = output_size
    if int(out_w) <= 0 or int(out_h) <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    return [
        "resvg",
        "--width",
        str(int(out_w)),
        "--height",
        str(int(out_h)),
        "--background",
        background_color,
        str(input_svg),
        str(output_png),
    ]


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background_color: str = "#FFFFFF",
) -> Path:
    """SVG を PNG として保存する。

    Raises
    ------
    RuntimeError
        resvg が見つからない、またはラスタライズに失敗した場合。
    """

    _svg_path = Path(svg_path)
    _png_path = Path(png_path)
    _png_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = _resvg_command(
        input_svg=_svg_path,
        output_png=_png_path,
        output_size=output_size,
        background_color=background_color,
    )
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    return _png_path


__all__ = ["default_output_path", "export_image", "png_output_size", "rasterize_svg_to_png"]
