# どこで: `src/propdraft/analysis/models.py`。
# 何を: 画像解析プロバイダが返す解析レコード（PropAnalysis）と JSON decode を定義する。
# なぜ: 外部プロバイダの出力を取り込み境界で検証し、コアにはパラメータ列と説明文だけを渡すため。

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from propdraft.core.parameters.codec import decode_parameters
from propdraft.core.parameters.param import BlueprintParameter


class AnalysisFormatError(ValueError):
    """解析レコードの JSON 形状が想定と異なる。"""


@dataclass(frozen=True, slots=True)
class BasicInfo:
    material: str
    color: str
    style_tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class StructuralLogic:
    parameters: tuple[BlueprintParameter, ...]
    components: tuple[str, ...] = ()
    layering: str = ""


@dataclass(frozen=True, slots=True)
class VisualCues:
    lighting: str
    focal_point: str
    props: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PropAnalysis:
    """図面 1 枚分の解析結果。

    コアが使うのは `structural_logic.parameters`（ParamStore の初期値）と
    `optimized_prompt`（テンプレート分類用の説明文）だけ。
    """

    basic_info: BasicInfo
    structural_logic: StructuralLogic
    visual_cues: VisualCues
    optimized_prompt: str

    @property
    def parameters(self) -> tuple[BlueprintParameter, ...]:
        return self.structural_logic.parameters

    @property
    def description(self) -> str:
        return self.optimized_prompt


def _section(obj: dict[str, Any], key: str) -> dict[str, Any]:
    value = obj.get(key)
    if not isinstance(value, dict):
        raise AnalysisFormatError(f"{key} は object である必要がある: got={value!r}")
    return value


def _required_str(obj: dict[str, Any], key: str, *, where: str) -> str:
    if key not in obj:
        raise AnalysisFormatError(f"{where}.{key} が無い")
    return str(obj[key])


def _str_list(obj: dict[str, Any], key: str, *, where: str) -> tuple[str, ...]:
    value = obj.get(key)
    if value is None:
        raise AnalysisFormatError(f"{where}.{key} が無い")
    if not isinstance(value, list):
        raise AnalysisFormatError(f"{where}.{key} は配列である必要がある: got={value!r}")
    return tuple(str(v) for v in value)


def decode_analysis(obj: object) -> PropAnalysis:
    """JSON 由来の dict から PropAnalysis を復元して返す。

    Raises
    ------
    AnalysisFormatError
        必須セクション/キーの欠落、またはパラメータが不正な場合。
    """

    if not isinstance(obj, dict):
        raise AnalysisFormatError(f"analysis payload は object である必要がある: got={type(obj)!r}")

    basic = _section(obj, "basic_info")
    structural = _section(obj, "structural_logic")
    cues = _section(obj, "visual_cues")

    try:
        parameters = decode_parameters(structural.get("parameters"))
    except (TypeError, ValueError) as exc:
        raise AnalysisFormatError(f"structural_logic.parameters が不正: {exc}") from exc

    return PropAnalysis(
        basic_info=BasicInfo(
            material=_required_str(basic, "material", where="basic_info"),
            color=_required_str(basic, "color", where="basic_info"),
            style_tags=_str_list(basic, "style_tags", where="basic_info"),
        ),
        structural_logic=StructuralLogic(
            parameters=tuple(parameters),
            components=_str_list(structural, "components", where="structural_logic"),
            layering=_required_str(structural, "layering", where="structural_logic"),
        ),
        visual_cues=VisualCues(
            lighting=_required_str(cues, "lighting", where="visual_cues"),
            focal_point=_required_str(cues, "focal_point", where="visual_cues"),
            props=_str_list(cues, "props", where="visual_cues"),
        ),
        optimized_prompt=_required_str(obj, "optimized_prompt", where="analysis"),
    )


def loads_analysis(text: str) -> PropAnalysis:
    """JSON 文字列から PropAnalysis を復元して返す。"""

    try:
        obj = json.loads(text or "{}")
    except json.JSONDecodeError as exc:
        raise AnalysisFormatError("analysis payload が JSON として読めない") from exc
    return decode_analysis(obj)


__all__ = [
    "AnalysisFormatError",
    "BasicInfo",
    "PropAnalysis",
    "StructuralLogic",
    "VisualCues",
    "decode_analysis",
    "loads_analysis",
]
