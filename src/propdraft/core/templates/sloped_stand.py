"""
どこで: `src/propdraft/core/templates/sloped_stand.py`。斜面スタンドの側面図。
何を: 底辺・総高・傾斜オフセットから 4 点の閉じた楔形を構築する。
なぜ: リングスタンドやネックレス台の傾斜面を 1 枚の四角形で近似して見せるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from propdraft.core.classifier import TemplateId
from propdraft.core.parameters.resolver import ResolverFn
from propdraft.core.primitives import MAIN_STROKE, Point, Polyline, PrimitiveGroup
from propdraft.core.template_registry import TemplateParam, template

sloped_stand_params = (
    TemplateParam("base", 120.0),
    TemplateParam("height", 100.0),
    TemplateParam("angle", 30.0),
)


@dataclass(frozen=True, slots=True)
class SlopedStandParams:
    base: float
    height: float
    angle: float


def resolve_sloped_stand(resolve: ResolverFn) -> SlopedStandParams:
    base_p, height_p, angle_p = sloped_stand_params
    return SlopedStandParams(
        base=resolve(base_p.key, base_p.default),
        height=resolve(height_p.key, height_p.default),
        angle=resolve(angle_p.key, angle_p.default),
    )


@template(
    TemplateId.SLOPED_STAND,
    params=sloped_stand_params,
    resolve_params=resolve_sloped_stand,
)
def sloped_stand(resolve: ResolverFn, origin: Point) -> PrimitiveGroup:
    """左下・右下・右上・左上の順の閉ポリラインを返す。

    Notes
    -----
    angle は角度ではなく、右上頂点を公称上端から y 方向へずらす描画単位の量として使う。
    三角関数による投影はしない。
    """

    p = resolve_sloped_stand(resolve)
    cx, cy = origin
    half_b = p.base / 2.0
    half_h = p.height / 2.0
    profile = Polyline(
        points=(
            (cx - half_b, cy + half_h),
            (cx + half_b, cy + half_h),
            (cx + half_b, cy - half_h + p.angle),
            (cx - half_b, cy - half_h),
        ),
        closed=True,
        stroke=MAIN_STROKE,
        fill="#ffffff",
    )
    return PrimitiveGroup(items=(profile,))
