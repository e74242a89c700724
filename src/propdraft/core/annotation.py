"""
どこで: `src/propdraft/core/annotation.py`。
何を: 小道具グループの外接矩形から幅/高さの寸法ガイド線とラベルを生成する。
なぜ: 図面に寸法を自動で書き込み、スライダー変更のたびに正しい値を表示するため。
"""

from __future__ import annotations

from dataclasses import dataclass

from propdraft.core.primitives import (
    GUIDE_STROKE,
    LABEL_STYLE,
    LineSegment,
    Point,
    PrimitiveGroup,
    TextLabel,
)

DEFAULT_MARGIN = 30.0
LABEL_GAP = 10.0


@dataclass(frozen=True, slots=True)
class Annotations:
    """寸法注記 4 要素（ガイド線 2 本とラベル 2 つ）。"""

    width_guide: LineSegment
    width_label: TextLabel
    height_guide: LineSegment
    height_label: TextLabel

    def guides(self) -> PrimitiveGroup:
        return PrimitiveGroup(items=(self.width_guide, self.height_guide))

    def labels(self) -> tuple[TextLabel, ...]:
        return (self.width_label, self.height_label)

    def scaled(self, factor: float, pivot: Point) -> "Annotations":
        return Annotations(
            width_guide=self.width_guide.scaled(factor, pivot),
            width_label=self.width_label.scaled(factor, pivot),
            height_guide=self.height_guide.scaled(factor, pivot),
            height_label=self.height_label.scaled(factor, pivot),
        )


def format_dimension(prefix: str, value: float) -> str:
    """寸法ラベル文字列（小数 1 桁 + mm）を返す。"""

    return f"{prefix}: {value:.1f}mm"


def annotate(
    group: PrimitiveGroup,
    *,
    margin: float = DEFAULT_MARGIN,
    center: Point | None = None,
) -> Annotations:
    """group の外接矩形に対する寸法注記を返す。

    Parameters
    ----------
    group : PrimitiveGroup
        注記前の小道具グループ。変更しない。
    margin : float, optional
        外接矩形からガイド線までの距離。
    center : Point or None, optional
        ラベルを揃える作図中心。幅ラベルは x、高さラベルは y をこれに合わせる。
        None なら外接矩形の中心を使う。

    Returns
    -------
    Annotations
        幅ガイドは上辺の外側、高さガイドは右辺の外側に置く。
    """

    b = group.bounds
    m = float(margin)
    cx, cy = b.center if center is None else center

    width_y = b.top - m
    height_x = b.right + m
    return Annotations(
        width_guide=LineSegment(start=(b.left, width_y), end=(b.right, width_y), stroke=GUIDE_STROKE),
        width_label=TextLabel(
            point=(cx, width_y - LABEL_GAP),
            content=format_dimension("W", b.width),
            justification="center",
            style=LABEL_STYLE,
        ),
        height_guide=LineSegment(start=(height_x, b.top), end=(height_x, b.bottom), stroke=GUIDE_STROKE),
        height_label=TextLabel(
            point=(height_x + LABEL_GAP, cy),
            content=format_dimension("H", b.height),
            rotation=90.0,
            style=LABEL_STYLE,
        ),
    )


__all__ = ["Annotations", "DEFAULT_MARGIN", "annotate", "format_dimension"]
