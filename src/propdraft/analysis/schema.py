# どこで: `src/propdraft/analysis/schema.py`。
# 何を: 画像解析プロバイダへ渡す指示文と、返すべき JSON の形（JSON Schema）を定義する。
# なぜ: プロバイダ実装が違っても、decode_analysis が受け付ける形を 1 箇所で共有するため。

from __future__ import annotations

from typing import Any

ANALYSIS_PROMPT = """\
You are a jewelry display specialist and prop engineer. Analyse the uploaded 2D
prop drawing (display case, tray, riser, backdrop, ...).

1. Identify the geometric type of the prop (L-shaped riser, stepped tray, sloped
   ring stand, curved backdrop, ...).
2. Extract the 3-5 engineering parameters that define its function and look
   (total height, base width, slope angle, tier spacing, ...), in millimetres.
3. Describe it as a programmable 2D vector structure.

`optimized_prompt` must describe the 2D outline logic, for example
"A three-tier stepped jewelry display tray with total height H and step depth D".
"""

_STRING: dict[str, Any] = {"type": "string"}
_STRING_LIST: dict[str, Any] = {"type": "array", "items": _STRING}

PARAMETER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": _STRING,
        "value": {"type": "number"},
        "min": {"type": "number"},
        "max": {"type": "number"},
        "unit": _STRING,
        "description": _STRING,
    },
    "required": ["name", "value", "min", "max", "unit"],
}

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "basic_info": {
            "type": "object",
            "properties": {
                "material": _STRING,
                "color": _STRING,
                "style_tags": _STRING_LIST,
            },
            "required": ["material", "color", "style_tags"],
        },
        "structural_logic": {
            "type": "object",
            "properties": {
                "parameters": {
                    "type": "array",
                    "items": PARAMETER_SCHEMA,
                    "minItems": 3,
                    "maxItems": 5,
                },
                "components": _STRING_LIST,
                "layering": _STRING,
            },
            "required": ["parameters", "components", "layering"],
        },
        "visual_cues": {
            "type": "object",
            "properties": {
                "lighting": _STRING,
                "focal_point": _STRING,
                "props": _STRING_LIST,
            },
            "required": ["lighting", "focal_point", "props"],
        },
        "optimized_prompt": _STRING,
    },
    "required": ["basic_info", "structural_logic", "visual_cues", "optimized_prompt"],
}

__all__ = ["ANALYSIS_PROMPT", "PARAMETER_SCHEMA", "RESPONSE_SCHEMA"]
