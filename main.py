"""
どこで: リポジトリ直下 `main.py`。
何を: 解析結果（JSON）から図面を生成し、スライダー操作を 1 回模したうえで SVG として保存する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。

使い方: `python main.py [analysis.json]`（省略時は同梱のサンプル解析結果を使う）。
"""

import logging
import sys
from pathlib import Path

from propdraft.analysis import StaticAnalysisProvider, loads_analysis
from propdraft.export.image import default_output_path, export_image
from propdraft.session import BlueprintSession

SAMPLE_ANALYSIS = """
{
  "basic_info": {"material": "velvet", "color": "charcoal", "style_tags": ["minimal"]},
  "structural_logic": {
    "parameters": [
      {"name": "Base Width", "value": 100, "min": 50, "max": 200, "unit": "mm"},
      {"name": "Total Height", "value": 80, "min": 40, "max": 160, "unit": "mm"},
      {"name": "Slope Angle", "value": 25, "min": 0, "max": 60, "unit": "mm"}
    ],
    "components": ["base", "sloped face"],
    "layering": "single"
  },
  "visual_cues": {"lighting": "soft top light", "focal_point": "ring slot", "props": []},
  "optimized_prompt": "A sloped ring stand with base width B and total height H"
}
"""


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO)

    text = Path(argv[1]).read_text(encoding="utf-8") if len(argv) > 1 else SAMPLE_ANALYSIS
    provider = StaticAnalysisProvider(loads_analysis(text))

    with BlueprintSession() as session:
        session.scan(provider, b"\x89PNG")
        session.update_parameter(0, session.parameters[0].value + 20)
        out = export_image(session.surface, default_output_path("blueprint"))
    print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
