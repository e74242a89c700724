"""
どこで: `src/propdraft/core/viewport.py`。
何を: 注記済み図面をキャンバス中心基準で等方スケールし、表示領域に収める。
なぜ: 小道具の実寸に関わらず、キャンバス高さの一定割合で見せるため。
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite

from propdraft.core.annotation import Annotations
from propdraft.core.primitives import Point, PrimitiveGroup

DEFAULT_TARGET_FRACTION = 0.6
DEFAULT_MAX_SCALE = 1.2


class DegenerateGeometryError(ValueError):
    """高さ 0（または非有限）の外接矩形でスケールを決められない。"""


@dataclass(frozen=True, slots=True)
class FitResult:
    """ビューポート合わせの結果。"""

    prop: PrimitiveGroup
    annotations: Annotations
    scale: float


def compute_scale(
    group: PrimitiveGroup,
    viewport_size: tuple[float, float],
    *,
    target_fraction: float = DEFAULT_TARGET_FRACTION,
    max_scale: float = DEFAULT_MAX_SCALE,
) -> float:
    """`min(viewport_h * target_fraction / bounds.height, max_scale)` を返す。

    Raises
    ------
    DegenerateGeometryError
        外接矩形の高さが正の有限値でない場合。
    """

    _vw, vh = viewport_size
    height = group.bounds.height
    if not isfinite(height) or height <= 0.0:
        raise DegenerateGeometryError(f"外接矩形の高さが不正: height={height!r}")
    scale = float(vh) * float(target_fraction) / height
    return min(scale, float(max_scale))


def fit(
    group: PrimitiveGroup,
    annotations: Annotations,
    viewport_size: tuple[float, float],
    *,
    center: Point,
    target_fraction: float = DEFAULT_TARGET_FRACTION,
    max_scale: float = DEFAULT_MAX_SCALE,
) -> FitResult:
    """group と注記を center 基準で同じ倍率にスケールして返す。

    倍率は注記を含まない group の外接矩形だけから決める。
    ラベル文字列（mm 値）はスケール前の寸法のまま残す。
    """

    scale = compute_scale(
        group,
        viewport_size,
        target_fraction=target_fraction,
        max_scale=max_scale,
    )
    return FitResult(
        prop=group.scaled(scale, center),
        annotations=annotations.scaled(scale, center),
        scale=scale,
    )


__all__ = [
    "DEFAULT_MAX_SCALE",
    "DEFAULT_TARGET_FRACTION",
    "DegenerateGeometryError",
    "FitResult",
    "compute_scale",
    "fit",
]
