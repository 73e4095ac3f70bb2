from __future__ import annotations

import unittest
from decimal import Decimal

from uniswap_dashboard.services.formatting import format_compact, format_day_label, format_timestamp, format_usd, iso_timestamp


class FormattingTests(unittest.TestCase):
    def test_usd(self) -> None:
        self.assertEqual(format_usd(Decimal("1234.567")), "$1,234.57")
        self.assertEqual(format_usd(0), "$0.00")

    def test_compact(self) -> None:
        self.assertEqual(format_compact(Decimal("999")), "$999.00")
        self.assertEqual(format_compact(Decimal("1500")), "$1.50K")
        self.assertEqual(format_compact(2_340_000_000), "$2.34B")

    def test_day_label_is_utc(self) -> None:
        self.assertEqual(format_day_label(1_726_272_000), "Sep 14")
        self.assertEqual(format_day_label(1_726_272_000 + 86_399), "Sep 14")

    def test_timestamp(self) -> None:
        self.assertEqual(format_timestamp(1_726_352_725), "Sep 14, 2024, 10:25:25 PM")
        self.assertEqual(iso_timestamp(0), "1970-01-01T00:00:00+00:00")


if __name__ == "__main__":
    unittest.main()
