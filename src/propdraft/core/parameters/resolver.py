# どこで: `src/propdraft/core/parameters/resolver.py`。
# 何を: 意味キー（"width" など）から ParamStore の値を引く解決ロジックを提供する。
# なぜ: 人が書いたパラメータ名の揺れを吸収し、欠損時はテンプレート既定値へ確実に落とすため。

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from math import isfinite
from typing import Protocol

from .param import BlueprintParameter

_logger = logging.getLogger(__name__)

KeyNormalizer = Callable[[str], str]


class ResolverFn(Protocol):
    """テンプレートビルダーが受け取る解決関数の型。"""

    def __call__(self, key: str, fallback: float) -> float: ...


def normalize_key(key: str) -> str:
    """意味キーを照合用に正規化する（`_` → 空白、小文字化）。"""

    return str(key).replace("_", " ").lower()


def normalize_name(name: str) -> str:
    """パラメータ名を照合用に正規化する（小文字化のみ）。"""

    return str(name).lower()


def _usable_value(param: BlueprintParameter) -> float | None:
    """幾何に使える有限 float を返す。使えない値なら None。"""

    try:
        v = float(param.value)
    except (TypeError, ValueError):
        return None
    if not isfinite(v):
        return None
    return v


def _finalize(value: float | None, *, key: str, fallback: float) -> float:
    """欠損と 0 を fallback に畳み込んで最終値を返す。"""

    if value is None:
        _logger.debug("パラメータ未検出のため既定値を使用: key=%r fallback=%r", key, fallback)
        return float(fallback)
    if value == 0.0:
        # 0 は幾何寸法として扱わない（未設定と同じく既定値へ落とす）。
        _logger.info("値 0 を未設定として既定値へ置換: key=%r fallback=%r", key, fallback)
        return float(fallback)
    return value


def _first_usable(
    params: Sequence[BlueprintParameter], positions: Iterable[int]
) -> float | None:
    for i in positions:
        v = _usable_value(params[i])
        if v is not None:
            return v
    return None


def _matching_positions(
    params: Sequence[BlueprintParameter],
    needle: str,
    *,
    normalize: KeyNormalizer = normalize_name,
) -> tuple[int, ...]:
    return tuple(i for i, p in enumerate(params) if needle in normalize(p.name))


def resolve_value(
    params: Sequence[BlueprintParameter],
    key: str,
    fallback: float,
    *,
    normalize: KeyNormalizer = normalize_key,
) -> float:
    """意味キーに部分一致する最初のパラメータ値を返す。

    Parameters
    ----------
    params : Sequence[BlueprintParameter]
        順序付きパラメータ列。先頭から走査し、最初の一致を採用する。
    key : str
        意味キー（例: "width", "tier"）。
    fallback : float
        一致が無い場合、または一致した値が 0 の場合に返す既定値。
    normalize : KeyNormalizer, optional
        キーの正規化関数。

    Returns
    -------
    float
        常に有限の float。

    Notes
    -----
    NaN/inf など数値として使えない値は「一致しない」とみなし、走査を続ける。
    """

    needle = normalize(key)
    positions = _matching_positions(params, needle)
    return _finalize(_first_usable(params, positions), key=needle, fallback=fallback)


@dataclass(frozen=True, slots=True)
class SemanticIndex:
    """意味キー -> パラメータ位置列 の対応表。

    Notes
    -----
    取り込み時に 1 度だけ構築し、幾何生成のたびに名前を走査し直さない。
    値の編集は要素の位置を変えないため、populate されるまで有効。
    """

    positions: Mapping[str, tuple[int, ...]]
    normalize: KeyNormalizer = normalize_key

    @classmethod
    def build(
        cls,
        params: Sequence[BlueprintParameter],
        keys: Iterable[str],
        *,
        normalize: KeyNormalizer = normalize_key,
        normalize_param_name: KeyNormalizer = normalize_name,
    ) -> "SemanticIndex":
        """params と意味キー集合から対応表を構築する。"""

        table: dict[str, tuple[int, ...]] = {}
        for key in keys:
            needle = normalize(key)
            table[needle] = _matching_positions(
                params, needle, normalize=normalize_param_name
            )
        return cls(positions=table, normalize=normalize)

    def lookup(self, key: str) -> tuple[int, ...] | None:
        """キーに対応する位置列を返す。索引外のキーなら None。"""

        return self.positions.get(self.normalize(key))


class ParamResolver:
    """ParamStore（または任意のパラメータ列）に束縛された ResolverFn。

    index があればその位置列を使い、索引外のキーは直接走査にフォールバックする。
    """

    def __init__(
        self,
        params: Sequence[BlueprintParameter],
        index: SemanticIndex | None = None,
    ) -> None:
        self._params = params
        self._index = index

    def __call__(self, key: str, fallback: float) -> float:
        if self._index is not None:
            positions = self._index.lookup(key)
            if positions is not None:
                params = self._params
                value = _first_usable(params, (i for i in positions if i < len(params)))
                return _finalize(value, key=self._index.normalize(key), fallback=fallback)
        return resolve_value(self._params, key, fallback)


class CachedResolver:
    """ResolverFn を包み、(key, fallback) ごとに 1 度だけ解決する。

    1 回のパイプライン実行の間だけ使う。既定値への置換ログも 1 キーにつき 1 回になる。
    """

    def __init__(self, resolve: ResolverFn) -> None:
        self._resolve = resolve
        self._cache: dict[tuple[str, float], float] = {}

    def __call__(self, key: str, fallback: float) -> float:
        k = (key, float(fallback))
        if k not in self._cache:
            self._cache[k] = self._resolve(key, fallback)
        return self._cache[k]


__all__ = [
    "CachedResolver",
    "KeyNormalizer",
    "ParamResolver",
    "ResolverFn",
    "SemanticIndex",
    "normalize_key",
    "normalize_name",
    "resolve_value",
]
