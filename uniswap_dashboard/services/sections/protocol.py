from __future__ import annotations

from typing import Any

from uniswap_dashboard.services import queries
from uniswap_dashboard.services.formatting import format_compact, format_day_label
from uniswap_dashboard.services.models import DayDatum
from uniswap_dashboard.services.query_state import QueryResult, run_query
from uniswap_dashboard.services.sections.base import BaseSectionService

TVL_COLOR = "#4bc0c0"
VOLUME_COLOR = "#9966ff"
FEES_COLOR = "#ff9f40"


class ProtocolSectionService(BaseSectionService):
    section_id = "protocol"
    title = "Protocol Statistics (Last 30 Days)"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._handlers = {
            "kpi-latest-tvl": self._kpi_latest_tvl,
            "protocol-tvl": self._protocol_tvl,
            "protocol-volume": self._protocol_volume,
            "protocol-fees": self._protocol_fees,
        }

    def _fetch(self, params: dict[str, Any]) -> QueryResult:
        return run_query(self.client, queries.PROTOCOL_STATS_QUERY, "uniswapDayDatas", DayDatum.from_dict)

    @staticmethod
    def _ascending(result: QueryResult) -> list[DayDatum]:
        return sorted(result.records, key=lambda day: day.date)

    def _day_series(self, result: QueryResult, name: str, attr: str, color: str) -> dict[str, Any]:
        days = self._ascending(result)
        return {
            "kind": "chart",
            "chart": "line",
            "title": name,
            "xAxisType": "category",
            "xAxisName": "Date",
            "yAxisName": "USD",
            "legend": False,
            "x": [format_day_label(day.date) for day in days],
            "series": [
                {"name": name, "type": "line", "area": True, "color": color, "data": [float(getattr(day, attr)) for day in days]},
            ],
        }

    def _kpi_latest_tvl(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        days = self._ascending(result)
        if not days:
            return {"kind": "kpi", "primary": None, "label": "Latest TVL"}
        latest = days[-1]
        return {
            "kind": "kpi",
            "primary": format_compact(latest.tvl_usd),
            "secondary": format_day_label(latest.date),
            "label": "Latest TVL",
        }

    def _protocol_tvl(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        return self._day_series(result, "Total Value Locked (USD)", "tvl_usd", TVL_COLOR)

    def _protocol_volume(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        return self._day_series(result, "Volume (USD)", "volume_usd", VOLUME_COLOR)

    def _protocol_fees(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        return self._day_series(result, "Fees (USD)", "fees_usd", FEES_COLOR)
