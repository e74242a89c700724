"""
どこで: `src/propdraft/core/pipeline.py`。
何を: classify → resolve → build → annotate → fit を 1 回で実行し、Blueprint を返す。描画ステップも提供する。
なぜ: セッション（状態機械）とヘッドレス出力で同じ純粋パイプラインを共有するため。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from propdraft.core.annotation import DEFAULT_MARGIN, Annotations, annotate
from propdraft.core.classifier import TemplateId, classify
from propdraft.core.parameters.param import BlueprintParameter
from propdraft.core.parameters.resolver import CachedResolver, ParamResolver, SemanticIndex
from propdraft.core.primitives import PrimitiveGroup
from propdraft.core.surface import DrawingSurface
from propdraft.core.template_registry import template_registry
from propdraft.core.viewport import DEFAULT_MAX_SCALE, DEFAULT_TARGET_FRACTION, fit

# 組み込みテンプレートの登録（import 副作用）。
from propdraft.core.templates import box_tray as _box_tray  # noqa: F401
from propdraft.core.templates import sloped_stand as _sloped_stand  # noqa: F401
from propdraft.core.templates import stepped_tiers as _stepped_tiers  # noqa: F401


@dataclass(frozen=True, slots=True)
class Blueprint:
    """1 回のパイプライン実行結果（キャンバス座標で確定済み）。"""

    template: TemplateId
    params: Any
    prop: PrimitiveGroup
    annotations: Annotations
    scale: float
    viewport_size: tuple[int, int]


def build_blueprint(
    params: Sequence[BlueprintParameter],
    description: str | None,
    viewport_size: tuple[int, int],
    *,
    index: SemanticIndex | None = None,
    margin: float = DEFAULT_MARGIN,
    target_fraction: float = DEFAULT_TARGET_FRACTION,
    max_scale: float = DEFAULT_MAX_SCALE,
) -> Blueprint:
    """パラメータ列と説明文から Blueprint を生成する。

    Parameters
    ----------
    params : Sequence[BlueprintParameter]
        順序付きパラメータ列（ParamStore も可）。
    description : str or None
        構造説明文。テンプレート分類にだけ使う。
    viewport_size : tuple[int, int]
        キャンバス寸法 (width, height)。中心を作図原点にする。
    index : SemanticIndex or None, optional
        取り込み時に構築した意味キー索引。None なら名前を直接走査する。

    Returns
    -------
    Blueprint
        同じ入力に対して常に同じ座標・ラベル文字列を返す。

    Raises
    ------
    DegenerateGeometryError
        生成された図形の高さが 0 の場合。
    """

    vw, vh = int(viewport_size[0]), int(viewport_size[1])
    center = (vw / 2.0, vh / 2.0)

    template_id = classify(description)
    entry = template_registry.get_entry(template_id)
    # 記録用の解決とビルダー内の解決で同じキーを 2 度引かない。
    resolve = CachedResolver(ParamResolver(params, index))

    resolved = entry.resolve_params(resolve)
    prop = entry.build(resolve, center)
    # 注記は注記前の外接矩形からだけ計算する。ラベルはキャンバス中心に揃える。
    annotations = annotate(prop, margin=margin, center=center)
    fitted = fit(
        prop,
        annotations,
        (vw, vh),
        center=center,
        target_fraction=target_fraction,
        max_scale=max_scale,
    )
    return Blueprint(
        template=template_id,
        params=resolved,
        prop=fitted.prop,
        annotations=fitted.annotations,
        scale=fitted.scale,
        viewport_size=(vw, vh),
    )


def draw_blueprint(blueprint: Blueprint, surface: DrawingSurface) -> None:
    """surface を全消去してから Blueprint を描く（小道具 → ガイド線 → ラベルの順）。"""

    surface.clear()
    for primitive in blueprint.prop:
        surface.draw_primitive(primitive)
    for guide in blueprint.annotations.guides():
        surface.draw_primitive(guide)
    for label in blueprint.annotations.labels():
        surface.draw_label(label)


__all__ = ["Blueprint", "build_blueprint", "draw_blueprint"]
