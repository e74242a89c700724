# どこで: `src/propdraft/core/parameters/codec.py`。
# 何を: BlueprintParameter の JSON encode/decode を提供する。
# なぜ: 解析結果（JSON）の取り込み仕様を ParamStore 本体から分離するため。

from __future__ import annotations

import json
from math import isfinite
from typing import Any

from .param import BlueprintParameter

_REQUIRED_KEYS = ("name", "value", "min", "max", "unit")


def _as_float(obj: dict[str, Any], key: str) -> float:
    try:
        v = float(obj[key])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"parameter.{key} は数値である必要がある: got={obj[key]!r}") from exc
    if not isfinite(v):
        raise ValueError(f"parameter.{key} は有限値である必要がある: got={v!r}")
    return v


def decode_parameter(obj: object) -> BlueprintParameter:
    """JSON 由来の dict から BlueprintParameter を復元して返す。

    Raises
    ------
    TypeError
        obj が dict でない場合。
    ValueError
        必須キーの欠落、または数値に変換できない値を含む場合。
    """

    if not isinstance(obj, dict):
        raise TypeError(f"parameter payload は dict である必要がある: got={type(obj)!r}")
    missing = [k for k in _REQUIRED_KEYS if k not in obj]
    if missing:
        raise ValueError(f"parameter に必須キーが無い: {missing}")

    description = obj.get("description")
    return BlueprintParameter(
        name=str(obj["name"]),
        value=_as_float(obj, "value"),
        min=_as_float(obj, "min"),
        max=_as_float(obj, "max"),
        unit=str(obj["unit"]),
        description="" if description is None else str(description),
    )


def decode_parameters(obj: object) -> list[BlueprintParameter]:
    """JSON 配列から BlueprintParameter のリストを復元して返す（順序維持）。"""

    if not isinstance(obj, list):
        raise TypeError(f"parameters payload は list である必要がある: got={type(obj)!r}")
    return [decode_parameter(item) for item in obj]


def encode_parameter(param: BlueprintParameter) -> dict[str, Any]:
    """BlueprintParameter を JSON 化可能な dict に変換して返す。"""

    return {
        "name": param.name,
        "value": param.value,
        "min": param.min,
        "max": param.max,
        "unit": param.unit,
        "description": param.description,
    }


def dumps_parameters(params: list[BlueprintParameter] | tuple[BlueprintParameter, ...]) -> str:
    """パラメータ列を JSON 文字列へ変換して返す。"""

    return json.dumps([encode_parameter(p) for p in params], ensure_ascii=False)


def loads_parameters(text: str) -> list[BlueprintParameter]:
    """JSON 文字列からパラメータ列を復元して返す。"""

    return decode_parameters(json.loads(text))


__all__ = [
    "decode_parameter",
    "decode_parameters",
    "dumps_parameters",
    "encode_parameter",
    "loads_parameters",
]
