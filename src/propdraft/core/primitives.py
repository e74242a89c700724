"""
どこで: `src/propdraft/core/primitives.py`。
何を: 2D 図面プリミティブ（矩形/ポリライン/線分/テキスト）とグループ・外接矩形を定義する。
なぜ: テンプレート生成・注記・ビューポート合わせ・描画/出力で同じ不変な幾何表現を共有するため。

座標系はキャンバスと同じ y 下向き（top は y の小さい側）。
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace
from typing import TypeAlias

import numpy as np

Point: TypeAlias = tuple[float, float]


def _as_point(value: Sequence[float]) -> Point:
    try:
        x, y = value
    except Exception as exc:
        raise ValueError(f"point は長さ 2 のシーケンスである必要がある: {value!r}") from exc
    return float(x), float(y)


def _scale_coords(coords: np.ndarray, factor: float, pivot: Point) -> np.ndarray:
    """pivot を中心に coords（shape (N,2)）を等方スケールして返す。"""

    center = np.asarray(pivot, dtype=np.float64)
    shifted = coords.astype(np.float64, copy=False) - center
    return shifted * float(factor) + center


def _to_points(coords: np.ndarray) -> tuple[Point, ...]:
    return tuple((float(x), float(y)) for x, y in coords.tolist())


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """線のスタイル。dash が None なら実線。"""

    color: str
    width: float
    dash: tuple[float, ...] | None = None


@dataclass(frozen=True, slots=True)
class LabelStyle:
    """注記テキストのスタイル。"""

    color: str = "#475569"
    font_size: float = 10.0
    font_family: str = "monospace"


MAIN_STROKE = StrokeStyle(color="#1a1a1a", width=1.5)
"""小道具本体の輪郭線（実線・濃色・1.5）。"""

DETAIL_STROKE = replace(MAIN_STROKE, width=1.0)
"""内枠や接続線などの補助輪郭線。"""

GUIDE_STROKE = StrokeStyle(color="#cbd5e1", width=1.0, dash=(4.0, 4.0))
"""寸法ガイド線（薄灰・破線 4-4）。"""

LABEL_STYLE = LabelStyle()


@dataclass(frozen=True, slots=True)
class Bounds:
    """軸平行外接矩形。幾何から都度導出し、単独で保持しない。"""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return (self.left + self.right) / 2.0, (self.top + self.bottom) / 2.0

    @classmethod
    def from_coords(cls, coords: np.ndarray) -> "Bounds":
        """頂点配列（shape (N,2)）から外接矩形を返す。

        Raises
        ------
        ValueError
            頂点が 1 つも無い場合。
        """

        xy = np.asarray(coords, dtype=np.float64)
        if xy.ndim != 2 or xy.shape[0] == 0:
            raise ValueError("空のジオメトリには外接矩形が無い")
        lo = xy.min(axis=0)
        hi = xy.max(axis=0)
        return cls(left=float(lo[0]), top=float(lo[1]), right=float(hi[0]), bottom=float(hi[1]))


@dataclass(frozen=True, slots=True)
class Rectangle:
    """origin（左上）と size で表す矩形。"""

    origin: Point
    size: tuple[float, float]
    stroke: StrokeStyle = MAIN_STROKE
    fill: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _as_point(self.origin))
        object.__setattr__(self, "size", _as_point(self.size))

    @property
    def closed(self) -> bool:
        return True

    def vertices(self) -> np.ndarray:
        """左上から時計回りの 4 頂点を返す。"""

        x, y = self.origin
        w, h = self.size
        return np.array([[x, y], [x + w, y], [x + w, y + h], [x, y + h]], dtype=np.float64)

    def scaled(self, factor: float, pivot: Point) -> "Rectangle":
        (origin,) = _to_points(_scale_coords(np.array([self.origin]), factor, pivot))
        w, h = self.size
        return replace(self, origin=origin, size=(w * factor, h * factor))


@dataclass(frozen=True, slots=True)
class Polyline:
    """頂点列。closed=True なら終点から始点へ閉じる。"""

    points: tuple[Point, ...]
    closed: bool = False
    stroke: StrokeStyle = MAIN_STROKE
    fill: str | None = None

    def __post_init__(self) -> None:
        pts = tuple(_as_point(p) for p in self.points)
        if len(pts) < 2:
            raise ValueError("polyline は 2 点以上必要")
        object.__setattr__(self, "points", pts)

    def vertices(self) -> np.ndarray:
        return np.asarray(self.points, dtype=np.float64)

    def scaled(self, factor: float, pivot: Point) -> "Polyline":
        return replace(self, points=_to_points(_scale_coords(self.vertices(), factor, pivot)))


@dataclass(frozen=True, slots=True)
class LineSegment:
    """start から end への線分。"""

    start: Point
    end: Point
    stroke: StrokeStyle = MAIN_STROKE
    fill: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_point(self.start))
        object.__setattr__(self, "end", _as_point(self.end))

    @property
    def closed(self) -> bool:
        return False

    def vertices(self) -> np.ndarray:
        return np.array([self.start, self.end], dtype=np.float64)

    def scaled(self, factor: float, pivot: Point) -> "LineSegment":
        start, end = _to_points(_scale_coords(self.vertices(), factor, pivot))
        return replace(self, start=start, end=end)


@dataclass(frozen=True, slots=True)
class TextLabel:
    """注記テキスト。rotation は度（時計回り）。"""

    point: Point
    content: str
    justification: str = "left"  # "left" | "center" | "right"
    rotation: float = 0.0
    style: LabelStyle = LABEL_STYLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", _as_point(self.point))
        if self.justification not in {"left", "center", "right"}:
            raise ValueError(f"未対応の justification: {self.justification!r}")

    def scaled(self, factor: float, pivot: Point) -> "TextLabel":
        # フォントサイズは固定とし、アンカー位置だけを動かす。
        (point,) = _to_points(_scale_coords(np.array([self.point]), factor, pivot))
        return replace(self, point=point)


Primitive: TypeAlias = Rectangle | Polyline | LineSegment


@dataclass(frozen=True, slots=True)
class PrimitiveGroup:
    """描画順を保ったプリミティブの不変グループ。"""

    items: tuple[Primitive, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Primitive:
        return self.items[index]

    def appended(self, *items: Primitive) -> "PrimitiveGroup":
        """末尾に items を足した新しいグループを返す。"""

        return PrimitiveGroup(items=self.items + tuple(items))

    def coords(self) -> np.ndarray:
        """全プリミティブの頂点を連結した shape (N,2) 配列を返す。"""

        if not self.items:
            return np.zeros((0, 2), dtype=np.float64)
        return np.concatenate([p.vertices() for p in self.items], axis=0)

    @property
    def bounds(self) -> Bounds:
        """外接矩形（線幅は含めない）。呼び出しごとに再計算する。"""

        return Bounds.from_coords(self.coords())

    def scaled(self, factor: float, pivot: Point) -> "PrimitiveGroup":
        """pivot を中心に等方スケールした新しいグループを返す。"""

        return PrimitiveGroup(items=tuple(p.scaled(factor, pivot) for p in self.items))


__all__ = [
    "Bounds",
    "DETAIL_STROKE",
    "GUIDE_STROKE",
    "LABEL_STYLE",
    "LabelStyle",
    "LineSegment",
    "MAIN_STROKE",
    "Point",
    "Polyline",
    "Primitive",
    "PrimitiveGroup",
    "Rectangle",
    "StrokeStyle",
    "TextLabel",
]
