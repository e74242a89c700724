"""
どこで: `src/propdraft/core/surface.py`。
何を: 描画呼び出し（パス/テキスト）を絶対座標で記録する DrawingSurface を提供する。
なぜ: 共有キャンバスのシングルトンではなく、所有が明確な描画コンテキストを pipeline に渡すため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from propdraft.core.primitives import (
    LABEL_STYLE,
    LabelStyle,
    Point,
    Primitive,
    StrokeStyle,
    TextLabel,
)

PLACEHOLDER_TEXT = "Awaiting technical scan..."


@dataclass(frozen=True, slots=True)
class PathCall:
    """折れ線（closed なら多角形）1 本の描画呼び出し。"""

    points: tuple[Point, ...]
    closed: bool
    stroke: StrokeStyle
    fill: str | None = None


@dataclass(frozen=True, slots=True)
class TextCall:
    """テキスト 1 つの描画呼び出し。"""

    point: Point
    content: str
    justification: str
    rotation: float
    style: LabelStyle


DrawCall: TypeAlias = PathCall | TextCall


class DrawingSurface:
    """描画呼び出しを記録するキャンバス。

    Notes
    -----
    再構築のたびに `clear()` で全消去してから描き直す前提とし、差分更新はしない。
    `close()` 後の描画は RuntimeError になる。
    """

    def __init__(self, size: tuple[int, int]) -> None:
        self._size = self._checked_size(size)
        self._calls: list[DrawCall] = []
        self._closed = False

    @staticmethod
    def _checked_size(size: tuple[int, int]) -> tuple[int, int]:
        w, h = size
        if int(w) <= 0 or int(h) <= 0:
            raise ValueError(f"surface size は正の (width, height) である必要がある: {size!r}")
        return int(w), int(h)

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def center(self) -> Point:
        w, h = self._size
        return w / 2.0, h / 2.0

    @property
    def calls(self) -> tuple[DrawCall, ...]:
        return tuple(self._calls)

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("DrawingSurface は既に close されている")

    def resize(self, size: tuple[int, int]) -> None:
        self._ensure_open()
        self._size = self._checked_size(size)

    def clear(self) -> None:
        self._ensure_open()
        self._calls.clear()

    def draw_primitive(self, primitive: Primitive) -> None:
        self._ensure_open()
        points = tuple((float(x), float(y)) for x, y in primitive.vertices().tolist())
        self._calls.append(
            PathCall(
                points=points,
                closed=bool(primitive.closed),
                stroke=primitive.stroke,
                fill=primitive.fill,
            )
        )

    def draw_label(self, label: TextLabel) -> None:
        self._ensure_open()
        self._calls.append(
            TextCall(
                point=label.point,
                content=label.content,
                justification=label.justification,
                rotation=label.rotation,
                style=label.style,
            )
        )

    def draw_placeholder(self, text: str = PLACEHOLDER_TEXT) -> None:
        """キャンバス中央にプレースホルダ文字列を描く。"""

        self.draw_label(
            TextLabel(point=self.center, content=text, justification="center", style=LABEL_STYLE)
        )

    def close(self) -> None:
        self._calls.clear()
        self._closed = True

    def __enter__(self) -> "DrawingSurface":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["DrawCall", "DrawingSurface", "PLACEHOLDER_TEXT", "PathCall", "TextCall"]
