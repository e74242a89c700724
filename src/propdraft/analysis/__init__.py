# どこで: `src/propdraft/analysis/__init__.py`。
# 何を: 解析レコード・プロバイダ能力・スキーマの公開エイリアスをまとめる。
# なぜ: session や利用側コードから 1 行で import できるようにするため。

from .models import (
    AnalysisFormatError,
    BasicInfo,
    PropAnalysis,
    StructuralLogic,
    VisualCues,
    decode_analysis,
    loads_analysis,
)
from .provider import (
    ANALYSIS_FAILURE_MESSAGE,
    AnalysisError,
    AnalysisProvider,
    StaticAnalysisProvider,
    analyze_drawing,
)
from .schema import ANALYSIS_PROMPT, RESPONSE_SCHEMA

__all__ = [
    "ANALYSIS_FAILURE_MESSAGE",
    "ANALYSIS_PROMPT",
    "AnalysisError",
    "AnalysisFormatError",
    "AnalysisProvider",
    "BasicInfo",
    "PropAnalysis",
    "RESPONSE_SCHEMA",
    "StaticAnalysisProvider",
    "StructuralLogic",
    "VisualCues",
    "analyze_drawing",
    "decode_analysis",
    "loads_analysis",
]
