# どこで: `src/propdraft/core/template_registry.py`。
# 何を: TemplateId から幾何ビルダー関数と必要パラメータを引くレジストリを提供する。
# なぜ: テンプレート追加を「分類規則 1 つ + ビルダー 1 つ」に閉じ、他の層を変えずに済ませるため。

from __future__ import annotations

from collections.abc import Callable, ItemsView
from dataclasses import dataclass
from typing import Any

from propdraft.core.classifier import TemplateId
from propdraft.core.parameters.resolver import ResolverFn
from propdraft.core.primitives import Point, PrimitiveGroup

TemplateBuilder = Callable[[ResolverFn, Point], PrimitiveGroup]
ParamsResolver = Callable[[ResolverFn], Any]


@dataclass(frozen=True, slots=True)
class TemplateParam:
    """テンプレートが要求する意味キーと既定値。"""

    key: str
    default: float


@dataclass(frozen=True, slots=True)
class TemplateEntry:
    """登録済みテンプレート 1 件。"""

    build: TemplateBuilder
    params: tuple[TemplateParam, ...]
    resolve_params: ParamsResolver


class TemplateRegistry:
    """TemplateId と幾何ビルダーを対応付けるレジストリ。

    Notes
    -----
    登録された関数のシグネチャは
    ``build(resolve: ResolverFn, origin: Point) -> PrimitiveGroup`` を想定する。
    resolve_params はビルダーが使う値を dataclass に確定させる関数で、
    解決結果の記録（Blueprint.params）に使う。
    """

    def __init__(self) -> None:
        self._items: dict[TemplateId, TemplateEntry] = {}

    def _register(
        self,
        template_id: TemplateId,
        entry: TemplateEntry,
        *,
        overwrite: bool = True,
    ) -> None:
        """テンプレートを登録する（`@template` デコレータからのみ呼ぶ）。"""

        if not overwrite and template_id in self._items:
            raise ValueError(f"template '{template_id.value}' は既に登録されている")
        self._items[template_id] = entry

    def get(self, template_id: TemplateId) -> TemplateBuilder:
        """TemplateId に対応するビルダーを取得する。

        Raises
        ------
        KeyError
            未登録の TemplateId が指定された場合。
        """

        return self._items[template_id].build

    def get_entry(self, template_id: TemplateId) -> TemplateEntry:
        return self._items[template_id]

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._items

    def __getitem__(self, template_id: TemplateId) -> TemplateBuilder:
        return self.get(template_id)

    def items(self) -> ItemsView[TemplateId, TemplateEntry]:
        return self._items.items()

    def get_params(self, template_id: TemplateId) -> tuple[TemplateParam, ...]:
        """TemplateId が要求する (key, default) の列を返す。"""

        entry = self._items.get(template_id)
        return () if entry is None else entry.params

    def semantic_keys(self) -> tuple[str, ...]:
        """登録済みテンプレートが使う意味キーの和集合を登録順で返す。"""

        keys: list[str] = []
        for entry in self._items.values():
            for p in entry.params:
                if p.key not in keys:
                    keys.append(p.key)
        return tuple(keys)


template_registry = TemplateRegistry()
"""グローバルなテンプレートレジストリインスタンス。"""


def template(
    template_id: TemplateId,
    *,
    params: tuple[TemplateParam, ...],
    resolve_params: ParamsResolver,
    overwrite: bool = True,
) -> Callable[[TemplateBuilder], TemplateBuilder]:
    """グローバルテンプレートレジストリ用デコレータ。

    Examples
    --------
    @template(TemplateId.BOX_TRAY, params=box_tray_params, resolve_params=resolve_box_tray)
    def box_tray(resolve, origin):
        ...
    """

    def decorator(f: TemplateBuilder) -> TemplateBuilder:
        entry = TemplateEntry(build=f, params=tuple(params), resolve_params=resolve_params)
        template_registry._register(template_id, entry, overwrite=overwrite)
        return f

    return decorator


__all__ = [
    "ParamsResolver",
    "TemplateBuilder",
    "TemplateEntry",
    "TemplateParam",
    "TemplateRegistry",
    "template",
    "template_registry",
]
