# どこで: `src/propdraft/__init__.py`。
# 何を: ルート `propdraft` パッケージを定義し、よく使う入口を再エクスポートする。
# なぜ: import 起点を `propdraft` に統一するため。

from __future__ import annotations

from propdraft.core.classifier import TemplateId, classify
from propdraft.core.parameters import BlueprintParameter, ParamStore
from propdraft.core.pipeline import Blueprint, build_blueprint, draw_blueprint
from propdraft.core.surface import DrawingSurface
from propdraft.session import BlueprintSession, SessionState

__all__ = [
    "Blueprint",
    "BlueprintParameter",
    "BlueprintSession",
    "DrawingSurface",
    "ParamStore",
    "SessionState",
    "TemplateId",
    "build_blueprint",
    "classify",
    "draw_blueprint",
]
