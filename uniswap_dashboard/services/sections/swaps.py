from __future__ import annotations

from decimal import Decimal
from typing import Any

from uniswap_dashboard.services.aggregation import AggregationPolicy, aggregate_swaps
from uniswap_dashboard.services.formatting import format_compact, format_timestamp, format_usd, iso_timestamp
from uniswap_dashboard.services.pagination import SwapPager
from uniswap_dashboard.services.query_state import QueryResult
from uniswap_dashboard.services.sections.base import BaseSectionService

SWAP_COLOR = "#4bc0c0"


def _pages(params: dict[str, Any]) -> int:
    try:
        return max(1, int(params.get("pages", 1)))
    except (TypeError, ValueError):
        return 1


class SwapsSectionService(BaseSectionService):
    section_id = "swaps"
    title = "Swap Activity"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.policy = AggregationPolicy.from_settings(self.settings)
        self.pager = SwapPager(self.client, self.settings.swap_page_size, self.settings.swap_fetch_limit)
        self._handlers = {
            "kpi-swap-volume": self._kpi_swap_volume,
            "kpi-swap-count": self._kpi_swap_count,
            "swap-volume": self._swap_volume,
            "recent-swaps": self._recent_swaps,
        }

    def _load_key(self, params: dict[str, Any]) -> str:
        return f"pages={min(_pages(params), self.pager.max_pages)}"

    def _fetch(self, params: dict[str, Any]) -> QueryResult:
        return self.pager.load(_pages(params))

    def _kpi_swap_volume(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        total = sum((swap.amount_usd for swap in result.records), Decimal(0))
        return {"kind": "kpi", "primary": format_compact(total), "value": float(total), "label": "Loaded Swap Volume"}

    def _kpi_swap_count(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "kind": "kpi",
            "primary": f"{len(result.records):,}",
            "value": len(result.records),
            "secondary": f"{result.meta.get('pages_loaded', 1)} page(s)",
            "label": "Loaded Swaps",
        }

    def _swap_volume(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        buckets = aggregate_swaps(result.records, self.policy)
        return {
            "kind": "chart",
            "chart": "line",
            "title": self.policy.label,
            "xAxisType": "time",
            "yAxisName": "Volume (USD)",
            "x": [iso_timestamp(bucket.timestamp) for bucket in buckets],
            "series": [
                {
                    "name": f"{self.policy.label} (USD)",
                    "type": "line",
                    "area": True,
                    "color": SWAP_COLOR,
                    "data": [float(bucket.total_usd) for bucket in buckets],
                    "counts": [bucket.count for bucket in buckets],
                },
            ],
            "pages": result.meta.get("pages_loaded", 1),
            "has_more": bool(result.meta.get("has_more", False)),
        }

    def _recent_swaps(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        newest = sorted(result.records, key=lambda swap: swap.timestamp, reverse=True)
        latest = newest[: self.settings.recent_swaps_limit]
        return {
            "kind": "table",
            "columns": [
                {"key": "pair", "label": "Pair"},
                {"key": "amount", "label": "Amount (USD)"},
                {"key": "time", "label": "Time (UTC)"},
            ],
            "rows": [
                {
                    "id": swap.id,
                    "pair": swap.pair,
                    "amount": format_usd(swap.amount_usd),
                    "time": format_timestamp(swap.timestamp),
                }
                for swap in latest
            ],
        }
