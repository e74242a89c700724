"""
どこで: `src/propdraft/core/templates/stepped_tiers.py`。階段状ディスプレイ台の立面図。
何を: 段ごとに幅が狭まりながら積み上がる矩形列を構築する。
なぜ: ひな壇型トレイの正面シルエットを平面の立面図で表すため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from propdraft.core.classifier import TemplateId
from propdraft.core.parameters.resolver import ResolverFn
from propdraft.core.primitives import MAIN_STROKE, Point, PrimitiveGroup, Rectangle
from propdraft.core.template_registry import TemplateParam, template

_logger = logging.getLogger(__name__)

TIER_INSET = 15.0
"""1 段上がるごとに左右それぞれ狭まる量。"""

TIER_FILLS = ("#ffffff", "#fcfcfc")

MAX_TIERS = 12
"""段数の上限（プリミティブ数を段数で際限なく増やさない）。"""

stepped_tiers_params = (
    TemplateParam("width", 150.0),
    TemplateParam("height", 40.0),
    TemplateParam("tier", 3.0),
)


@dataclass(frozen=True, slots=True)
class SteppedTiersParams:
    width: float
    height: float
    tiers: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def resolve_stepped_tiers(resolve: ResolverFn) -> SteppedTiersParams:
    """幅・段高・段数を解決する。

    段数は四捨五入する。1 未満は既定値、`MAX_TIERS` 超は上限に置き換える。
    """

    width_p, height_p, tier_p = stepped_tiers_params
    tiers = _round_half_up(resolve(tier_p.key, tier_p.default))
    if tiers < 1:
        tiers = int(tier_p.default)
    elif tiers > MAX_TIERS:
        _logger.info("段数を上限へ丸める: tiers=%d -> %d", tiers, MAX_TIERS)
        tiers = MAX_TIERS
    return SteppedTiersParams(
        width=resolve(width_p.key, width_p.default),
        height=resolve(height_p.key, height_p.default),
        tiers=tiers,
    )


@template(
    TemplateId.STEPPED_TIERS,
    params=stepped_tiers_params,
    resolve_params=resolve_stepped_tiers,
)
def stepped_tiers(resolve: ResolverFn, origin: Point) -> PrimitiveGroup:
    """段数分の矩形を縦に並べたグループを返す。

    段 i（0 始まり）は幅 `width - 2*15*i`、x を `15*i` 右へずらし、
    全体の高さ中心が origin に来るよう `tiers*height/2` だけ持ち上げる。
    """

    p = resolve_stepped_tiers(resolve)
    cx, cy = origin
    rects = []
    for i in range(p.tiers):
        rects.append(
            Rectangle(
                origin=(
                    cx - p.width / 2.0 + i * TIER_INSET,
                    cy + i * p.height - p.tiers * p.height / 2.0,
                ),
                size=(p.width - i * 2.0 * TIER_INSET, p.height),
                stroke=MAIN_STROKE,
                fill=TIER_FILLS[i % 2],
            )
        )
    return PrimitiveGroup(items=tuple(rects))
