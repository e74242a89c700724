# どこで: `src/propdraft/core/parameters/param.py`。
# 何を: BlueprintParameter（名前付き数値パラメータ 1 件）を定義する。
# なぜ: 解析結果・スライダー編集・テンプレート解決の全経路で同じ値表現を共有するため。

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class BlueprintParameter:
    """名前付きの寸法パラメータ。

    Notes
    -----
    min/max はエディタ向けのレンジ情報であり、エンジン側では value をクランプしない。
    name は人が書いた自由文字列で、テンプレート側からは部分一致で引かれる。
    """

    name: str
    value: float
    min: float
    max: float
    unit: str = "mm"
    description: str = ""

    def with_value(self, value: float) -> "BlueprintParameter":
        """value だけを差し替えた新しいパラメータを返す。"""

        return replace(self, value=float(value))


def clamp_to_bounds(param: BlueprintParameter, value: float) -> float:
    """value を param の [min, max] に収めて返す。

    min > max の壊れたレンジでは min を優先する。
    """

    lo = float(param.min)
    hi = float(param.max)
    v = float(value)
    if v > hi:
        v = hi
    if v < lo:
        v = lo
    return v


__all__ = ["BlueprintParameter", "clamp_to_bounds"]
