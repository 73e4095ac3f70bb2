from __future__ import annotations

from typing import Any

from uniswap_dashboard.services import queries
from uniswap_dashboard.services.formatting import format_compact
from uniswap_dashboard.services.models import Pool
from uniswap_dashboard.services.query_state import QueryResult, run_query
from uniswap_dashboard.services.sections.base import BaseSectionService

POOL_COLOR = "#ff9f40"


class PoolsSectionService(BaseSectionService):
    section_id = "pools"
    title = "Top 5 Pairs by Volume"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._handlers = {
            "kpi-top-pool": self._kpi_top_pool,
            "pool-volume": self._pool_volume,
        }

    def _fetch(self, params: dict[str, Any]) -> QueryResult:
        return run_query(self.client, queries.TOP_PAIRS_QUERY, "pools", Pool.from_dict)

    def _kpi_top_pool(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        if not result.records:
            return {"kind": "kpi", "primary": None, "label": "Top Pair"}
        top = result.records[0]
        return {"kind": "kpi", "primary": top.label, "secondary": format_compact(top.volume_usd), "label": "Top Pair"}

    def _pool_volume(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        pools = result.records
        return {
            "kind": "chart",
            "chart": "bar",
            "title": self.title,
            "xAxisType": "category",
            "yAxisName": "Volume USD",
            "x": [pool.label for pool in pools],
            "series": [
                {"name": "Volume USD", "type": "bar", "color": POOL_COLOR, "data": [float(pool.volume_usd) for pool in pools]},
            ],
        }
