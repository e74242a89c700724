"""
どこで: `src/propdraft/session.py`。
何を: ParamStore・説明文・DrawingSurface を所有し、変更のたびに図面を全消去→再構築する状態機械。
なぜ: 解析結果の取り込み、スライダー編集、リサイズを 1 本の同期パイプラインへ集約するため。

状態遷移: EMPTY → BUILT → REBUILT（以後ループ）→ DISPOSED。
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from propdraft.analysis.models import PropAnalysis
from propdraft.analysis.provider import AnalysisProvider, analyze_drawing
from propdraft.core.parameters.param import BlueprintParameter
from propdraft.core.parameters.resolver import KeyNormalizer, SemanticIndex, normalize_key
from propdraft.core.parameters.store import ParamStore
from propdraft.core.pipeline import Blueprint, build_blueprint, draw_blueprint
from propdraft.core.runtime_config import runtime_config
from propdraft.core.surface import DrawingSurface
from propdraft.core.template_registry import template_registry

_logger = logging.getLogger(__name__)

BlueprintListener = Callable[[Blueprint], None]


class SessionState(str, Enum):
    EMPTY = "empty"
    BUILT = "built"
    REBUILT = "rebuilt"
    DISPOSED = "disposed"


class SessionDisposedError(RuntimeError):
    """dispose 済みのセッションを操作した。"""


class BlueprintSession:
    """図面 1 枚分の編集セッション。

    Notes
    -----
    - すべての変更は呼び出し元に戻る前に同期的に再構築を終える（並行再構築は起きない）。
    - 再構築の前に必ず surface を全消去する。
    - 意味キー索引はパラメータ列の取り込み時（load/set_parameters/ingest）にだけ作り直す。
    """

    def __init__(
        self,
        surface: DrawingSurface | None = None,
        *,
        normalize: KeyNormalizer = normalize_key,
    ) -> None:
        cfg = runtime_config()
        self._surface = surface if surface is not None else DrawingSurface(cfg.canvas_size)
        self._margin = cfg.annotation_margin
        self._target_fraction = cfg.target_fraction
        self._max_scale = cfg.max_scale
        self._normalize = normalize

        self._store = ParamStore()
        self._index: SemanticIndex | None = None
        self._description: str | None = None
        self._blueprint: Blueprint | None = None
        self._listeners: list[BlueprintListener] = []
        self._state = SessionState.EMPTY

        self._surface.clear()
        self._surface.draw_placeholder()

    # --- 読み取り ---
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def store(self) -> ParamStore:
        return self._store

    @property
    def parameters(self) -> tuple[BlueprintParameter, ...]:
        return self._store.snapshot()

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def blueprint(self) -> Blueprint | None:
        return self._blueprint

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    # --- 購読 ---
    def subscribe(self, listener: BlueprintListener) -> Callable[[], None]:
        """再構築完了の通知先を登録し、解除関数を返す。"""

        self._ensure_alive()
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # --- 入力 ---
    def load(
        self,
        parameters: Iterable[BlueprintParameter],
        description: str | None,
    ) -> Blueprint:
        """パラメータ列と説明文をまとめて差し替えて再構築する。"""

        self._ensure_alive()
        self._populate(parameters)
        self._description = description
        return self._rebuild()

    def ingest(self, analysis: PropAnalysis) -> Blueprint:
        """解析結果からパラメータ列と説明文を取り込む。"""

        return self.load(analysis.parameters, analysis.optimized_prompt)

    def scan(
        self,
        provider: AnalysisProvider,
        image: bytes,
        *,
        mime_type: str = "image/png",
    ) -> Blueprint:
        """provider で画像を解析し、その結果を取り込む。

        解析に失敗した場合は AnalysisError を送出し、セッションの状態は変えない。
        """

        self._ensure_alive()
        analysis = analyze_drawing(provider, image, mime_type=mime_type)
        return self.ingest(analysis)

    def set_parameters(self, parameters: Iterable[BlueprintParameter]) -> Blueprint:
        self._ensure_alive()
        self._populate(parameters)
        return self._rebuild()

    def set_description(self, description: str | None) -> Blueprint:
        self._ensure_alive()
        self._description = description
        return self._rebuild()

    def update_parameter(self, index: int, new_value: float) -> Blueprint:
        """index のパラメータ値を置き換えて再構築する。

        Raises
        ------
        IndexError
            index が範囲外の場合。
        """

        self._ensure_alive()
        self._store.update_parameter(index, new_value)
        return self._rebuild()

    def resize(self, size: tuple[int, int]) -> Blueprint | None:
        """キャンバス寸法を変えて描き直す。EMPTY ならプレースホルダだけを描き直す。"""

        self._ensure_alive()
        self._surface.resize(size)
        if self._state is SessionState.EMPTY:
            self._surface.clear()
            self._surface.draw_placeholder()
            return None
        return self._rebuild()

    def dispose(self) -> None:
        """surface を破棄し、通知先をすべて外す。2 回目以降は何もしない。"""

        if self._state is SessionState.DISPOSED:
            return
        self._listeners.clear()
        self._surface.close()
        self._blueprint = None
        self._state = SessionState.DISPOSED
        _logger.info("session disposed")

    def __enter__(self) -> "BlueprintSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    # --- 内部 ---
    def _ensure_alive(self) -> None:
        if self._state is SessionState.DISPOSED:
            raise SessionDisposedError("BlueprintSession は dispose 済み")

    def _populate(self, parameters: Iterable[BlueprintParameter]) -> None:
        self._store.populate(parameters)
        self._index = SemanticIndex.build(
            self._store.snapshot(),
            template_registry.semantic_keys(),
            normalize=self._normalize,
        )

    def _rebuild(self) -> Blueprint:
        self._surface.clear()
        blueprint = build_blueprint(
            self._store,
            self._description,
            self._surface.size,
            index=self._index,
            margin=self._margin,
            target_fraction=self._target_fraction,
            max_scale=self._max_scale,
        )
        draw_blueprint(blueprint, self._surface)
        self._blueprint = blueprint

        previous = self._state
        self._state = SessionState.BUILT if previous is SessionState.EMPTY else SessionState.REBUILT
        _logger.info(
            "%s -> %s: template=%s scale=%.3f",
            previous.value,
            self._state.value,
            blueprint.template.value,
            blueprint.scale,
        )
        for listener in tuple(self._listeners):
            listener(blueprint)
        return blueprint


__all__ = ["BlueprintListener", "BlueprintSession", "SessionDisposedError", "SessionState"]
