from __future__ import annotations

import re
from pathlib import Path
import unittest


CHARTS_JS_PATH = Path(__file__).resolve().parents[1] / "uniswap_dashboard" / "static" / "js" / "charts.js"


def _function_body(source: str, name: str) -> str:
    match = re.search(rf"function {name}\([^)]*\) \{{\n(.*?)\n  \}}\n", source, re.S)
    assert match, f"{name} not found in charts.js"
    return match.group(1)


class ChartsScriptTests(unittest.TestCase):
    def setUp(self) -> None:
        self.source = CHARTS_JS_PATH.read_text(encoding="utf-8")

    def test_single_resize_listener(self) -> None:
        self.assertEqual(self.source.count('addEventListener("resize"'), 1)
        self.assertNotIn("addEventListener", _function_body(self.source, "renderChart"))

    def test_previous_chart_is_disposed_before_rerender(self) -> None:
        for name in ("renderChart", "renderKpi", "renderTable", "renderError"):
            with self.subTest(function=name):
                self.assertTrue(_function_body(self.source, name).lstrip().startswith("disposeChart(body);"))
        self.assertIn(".dispose()", _function_body(self.source, "disposeChart"))


if __name__ == "__main__":
    unittest.main()
