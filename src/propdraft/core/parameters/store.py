# どこで: `src/propdraft/core/parameters/store.py`。
# 何を: ParamStore（順序付きパラメータ列 = 唯一の可変入力状態）を定義する。
# なぜ: 解析結果による一括置換とスライダーによる個別編集を 1 箇所に閉じ込めるため。

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .param import BlueprintParameter


class ParamStore:
    """BlueprintParameter の順序付きストア。

    Notes
    -----
    - `populate()` は列全体を置き換える（部分的な無効化はしない）。
    - `update_parameter()` は index の要素だけを差し替え、順序は決して変えない。
    - 変更のたびに `revision` を 1 進める。
    """

    def __init__(self, params: Iterable[BlueprintParameter] | None = None) -> None:
        self._params: list[BlueprintParameter] = []
        self._revision = 0
        if params is not None:
            self.populate(params)

    @property
    def revision(self) -> int:
        """変更回数（populate/update ごとに +1）。"""

        return self._revision

    def populate(self, params: Iterable[BlueprintParameter]) -> None:
        """パラメータ列を丸ごと置き換える。"""

        items = list(params)
        for p in items:
            if not isinstance(p, BlueprintParameter):
                raise TypeError(f"BlueprintParameter 以外は格納できない: {type(p)!r}")
        self._params = items
        self._revision += 1

    def update_parameter(self, index: int, new_value: float) -> BlueprintParameter:
        """index の要素の value を置き換え、更新後の要素を返す。

        Raises
        ------
        IndexError
            index が現在の範囲外の場合（負の index も受け付けない）。
        """

        i = int(index)
        if i < 0 or i >= len(self._params):
            raise IndexError(
                f"parameter index が範囲外: index={i}, size={len(self._params)}"
            )
        updated = self._params[i].with_value(new_value)
        self._params[i] = updated
        self._revision += 1
        return updated

    def snapshot(self) -> tuple[BlueprintParameter, ...]:
        """現在のパラメータ列のコピーを返す。"""

        return tuple(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[BlueprintParameter]:
        return iter(tuple(self._params))

    def __getitem__(self, index: int) -> BlueprintParameter:
        return self._params[index]

    def __bool__(self) -> bool:
        return bool(self._params)


__all__ = ["ParamStore"]
