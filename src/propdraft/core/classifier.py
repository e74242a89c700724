"""
どこで: `src/propdraft/core/classifier.py`。
何を: 構造説明文から TemplateId を選ぶキーワード分類器を提供する。
なぜ: 解析結果の自由文を、閉じたテンプレート集合のどれで描くかへ決定的に落とすため。
"""

from __future__ import annotations

import logging
from enum import Enum

_logger = logging.getLogger(__name__)


class TemplateId(str, Enum):
    """構造テンプレートの識別子（閉じた列挙）。"""

    STEPPED_TIERS = "SteppedTiers"
    SLOPED_STAND = "SlopedStand"
    BOX_TRAY = "BoxTray"


DEFAULT_TEMPLATE = TemplateId.BOX_TRAY

# 上から順に評価し、最初に一致した規則を採用する。
CLASSIFIER_RULES: tuple[tuple[TemplateId, tuple[str, ...]], ...] = (
    (TemplateId.STEPPED_TIERS, ("step", "tier")),
    (TemplateId.SLOPED_STAND, ("slope", "angle", "stand")),
)


def classify(description: str | None) -> TemplateId:
    """説明文から TemplateId を返す。

    Parameters
    ----------
    description : str or None
        構造説明文。None/空文字は既定テンプレートになる。

    Returns
    -------
    TemplateId
        一致した規則のテンプレート。どれにも一致しなければ `BoxTray`。
    """

    text = (description or "").lower()
    for template_id, keywords in CLASSIFIER_RULES:
        for keyword in keywords:
            if keyword in text:
                _logger.debug("template=%s (keyword=%r)", template_id.value, keyword)
                return template_id
    _logger.debug("template=%s (default)", DEFAULT_TEMPLATE.value)
    return DEFAULT_TEMPLATE


__all__ = ["CLASSIFIER_RULES", "DEFAULT_TEMPLATE", "TemplateId", "classify"]
