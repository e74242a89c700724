# どこで: `src/propdraft/analysis/provider.py`。
# 何を: 画像解析プロバイダの能力（Protocol）と、失敗を 1 種類の通知にまとめる呼び出し口を提供する。
# なぜ: 資格情報をプロセス環境から拾うクライアントをコアに持ち込まず、スタブで差し替え可能にするため。

from __future__ import annotations

import logging
from typing import Protocol

from .models import PropAnalysis

_logger = logging.getLogger(__name__)

ANALYSIS_FAILURE_MESSAGE = (
    "Prop drawing analysis failed. Please upload a clear 2D prop engineering drawing."
)


class AnalysisError(RuntimeError):
    """画像解析に失敗した（ユーザー向けには汎用メッセージ 1 種類だけを出す）。"""

    def __init__(self, message: str = ANALYSIS_FAILURE_MESSAGE) -> None:
        super().__init__(message)


class AnalysisProvider(Protocol):
    """画像バイト列 -> PropAnalysis の能力。"""

    def analyze(self, image: bytes, *, mime_type: str = "image/png") -> PropAnalysis: ...


class StaticAnalysisProvider:
    """常に同じ PropAnalysis を返すプロバイダ（テスト/デモ用）。"""

    def __init__(self, analysis: PropAnalysis) -> None:
        self._analysis = analysis
        self.calls: list[tuple[int, str]] = []

    def analyze(self, image: bytes, *, mime_type: str = "image/png") -> PropAnalysis:
        self.calls.append((len(image), mime_type))
        return self._analysis


def analyze_drawing(
    provider: AnalysisProvider,
    image: bytes,
    *,
    mime_type: str = "image/png",
) -> PropAnalysis:
    """provider で図面画像を解析して返す。

    Raises
    ------
    AnalysisError
        provider が例外を送出した、または PropAnalysis 以外を返した場合。
        元の例外は `__cause__` に残す。
    """

    if not image:
        raise AnalysisError()
    try:
        result = provider.analyze(bytes(image), mime_type=mime_type)
    except Exception as exc:
        _logger.exception("Analysis failed: provider=%s", type(provider).__name__)
        raise AnalysisError() from exc
    if not isinstance(result, PropAnalysis):
        _logger.error("Analysis provider returned %r", type(result))
        raise AnalysisError()
    return result


__all__ = [
    "ANALYSIS_FAILURE_MESSAGE",
    "AnalysisError",
    "AnalysisProvider",
    "StaticAnalysisProvider",
    "analyze_drawing",
]
