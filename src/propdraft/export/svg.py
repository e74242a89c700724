"""
どこで: `src/propdraft/export/svg.py`。
何を: DrawingSurface の描画呼び出し列を SVG として保存する関数を提供する。
なぜ: キャンバス実装に依存しない headless 出力（SVG）を用意し、図面を決定的に再現できるようにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

from propdraft.core.surface import DrawCall, DrawingSurface, PathCall, TextCall

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3
_TEXT_ANCHORS = {"left": "start", "center": "middle", "right": "end"}


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _path_to_d(call: PathCall) -> str:
    """PathCall を SVG path の d 属性へ変換して返す。"""
    (x0, y0), *rest = call.points
    parts = [f"M {_fmt(x0)} {_fmt(y0)}"]
    for x, y in rest:
        parts.append(f"L {_fmt(x)} {_fmt(y)}")
    if call.closed:
        parts.append("Z")
    return " ".join(parts)


def _path_element(call: PathCall) -> str:
    fill = call.fill if call.fill is not None else "none"
    attrs = [
        f'd="{_path_to_d(call)}"',
        f"fill={quoteattr(fill)}",
        f"stroke={quoteattr(call.stroke.color)}",
        f'stroke-width="{_fmt(call.stroke.width)}"',
    ]
    if call.stroke.dash:
        dash = " ".join(_fmt(v) for v in call.stroke.dash)
        attrs.append(f'stroke-dasharray="{dash}"')
    attrs.append('stroke-linejoin="miter"')
    return f"  <path {' '.join(attrs)} />"


def _text_element(call: TextCall) -> str:
    x, y = call.point
    attrs = [
        f'x="{_fmt(x)}"',
        f'y="{_fmt(y)}"',
        f"fill={quoteattr(call.style.color)}",
        f'font-size="{_fmt(call.style.font_size)}"',
        f"font-family={quoteattr(call.style.font_family)}",
        f'text-anchor="{_TEXT_ANCHORS[call.justification]}"',
    ]
    if call.rotation:
        attrs.append(f'transform="rotate({_fmt(call.rotation)} {_fmt(x)} {_fmt(y)})"')
    return f"  <text {' '.join(attrs)}>{escape(call.content)}</text>"


def export_svg(
    calls: DrawingSurface | Sequence[DrawCall],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: str | None = None,
) -> Path:
    """描画呼び出し列を SVG として保存する。

    Parameters
    ----------
    calls : DrawingSurface or Sequence[DrawCall]
        描画済みの surface、または描画呼び出し列。
    path : str or Path
        出力先パス。
    canvas_size : tuple[int, int] or None, optional
        キャンバス寸法。calls が DrawingSurface なら省略時にその寸法を使う。
    background_color : str or None, optional
        背景色（例: "#ffffff"）。None なら背景矩形を出さない。

    Returns
    -------
    Path
        保存先パス（正規化済み）。

    Raises
    ------
    ValueError
        canvas_size が決まらない、または正でない場合。
    """
    _path = Path(path)
    if isinstance(calls, DrawingSurface):
        if canvas_size is None:
            canvas_size = calls.size
        items: Sequence[DrawCall] = calls.calls
    else:
        items = calls
    if canvas_size is None:
        raise ValueError("canvas_size=None は DrawingSurface 以外では未対応")

    canvas_w, canvas_h = canvas_size
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )
    if background_color is not None:
        lines.append(
            f'  <rect x="0" y="0" width="{int(canvas_w)}" height="{int(canvas_h)}" '
            f"fill={quoteattr(background_color)} />"
        )

    for call in items:
        if isinstance(call, PathCall):
            if len(call.points) < 2:
                continue
            lines.append(_path_element(call))
        elif isinstance(call, TextCall):
            lines.append(_text_element(call))
        else:
            raise TypeError(f"未対応の描画呼び出し: {type(call)!r}")

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    return _path


__all__ = ["export_svg"]
