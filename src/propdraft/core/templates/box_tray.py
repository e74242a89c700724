"""
どこで: `src/propdraft/core/templates/box_tray.py`。箱型トレイの平面図（既定テンプレート）。
何を: 外枠・内枠と 4 隅の接続線で、壁厚（深さ）を持つトレイを構築する。
なぜ: どの規則にも当たらない説明文でも、汎用の陳列トレイとして必ず図面を出すため。
"""

from __future__ import annotations

from dataclasses import dataclass

from propdraft.core.classifier import TemplateId
from propdraft.core.parameters.resolver import ResolverFn
from propdraft.core.primitives import (
    DETAIL_STROKE,
    MAIN_STROKE,
    LineSegment,
    Point,
    PrimitiveGroup,
    Rectangle,
)
from propdraft.core.template_registry import TemplateParam, template

box_tray_params = (
    TemplateParam("width", 180.0),
    TemplateParam("height", 120.0),
    TemplateParam("depth", 20.0),
)


@dataclass(frozen=True, slots=True)
class BoxTrayParams:
    width: float
    height: float
    depth: float


def resolve_box_tray(resolve: ResolverFn) -> BoxTrayParams:
    width_p, height_p, depth_p = box_tray_params
    return BoxTrayParams(
        width=resolve(width_p.key, width_p.default),
        height=resolve(height_p.key, height_p.default),
        depth=resolve(depth_p.key, depth_p.default),
    )


@template(TemplateId.BOX_TRAY, params=box_tray_params, resolve_params=resolve_box_tray)
def box_tray(resolve: ResolverFn, origin: Point) -> PrimitiveGroup:
    """接続線 4 本、外枠、内枠の順でグループを返す。"""

    p = resolve_box_tray(resolve)
    cx, cy = origin
    w, h, d = p.width, p.height, p.depth
    left, top = cx - w / 2.0, cy - h / 2.0
    right, bottom = cx + w / 2.0, cy + h / 2.0

    outer = Rectangle(origin=(left, top), size=(w, h), stroke=MAIN_STROKE)
    inner = Rectangle(
        origin=(left + d, top + d),
        size=(w - 2.0 * d, h - 2.0 * d),
        stroke=DETAIL_STROKE,
    )
    # 外枠の角 -> 内枠の対応する角（左上, 右上, 左下, 右下）。
    corners = (
        ((left, top), (left + d, top + d)),
        ((right, top), (right - d, top + d)),
        ((left, bottom), (left + d, bottom - d)),
        ((right, bottom), (right - d, bottom - d)),
    )
    connectors = tuple(
        LineSegment(start=a, end=b, stroke=DETAIL_STROKE) for a, b in corners
    )
    return PrimitiveGroup(items=connectors + (outer, inner))
