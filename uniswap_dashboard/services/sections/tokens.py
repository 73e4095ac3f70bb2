from __future__ import annotations

from typing import Any

from uniswap_dashboard.services import queries
from uniswap_dashboard.services.formatting import format_compact
from uniswap_dashboard.services.models import Token
from uniswap_dashboard.services.query_state import QueryResult, run_query
from uniswap_dashboard.services.sections.base import BaseSectionService

TOKEN_COLOR = "#9966ff"


class TokensSectionService(BaseSectionService):
    section_id = "tokens"
    title = "Top 5 Tokens by Volume"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._handlers = {
            "kpi-top-token": self._kpi_top_token,
            "token-volume": self._token_volume,
        }

    def _fetch(self, params: dict[str, Any]) -> QueryResult:
        return run_query(self.client, queries.TOKEN_VOLUME_QUERY, "tokens", Token.from_dict)

    def _kpi_top_token(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        if not result.records:
            return {"kind": "kpi", "primary": None, "label": "Top Token"}
        top = result.records[0]
        return {"kind": "kpi", "primary": top.symbol, "secondary": format_compact(top.volume_usd), "label": "Top Token"}

    def _token_volume(self, result: QueryResult, params: dict[str, Any]) -> dict[str, Any]:
        # Server order is already descending volume; no padding when fewer come back.
        tokens = result.records
        return {
            "kind": "chart",
            "chart": "bar",
            "title": self.title,
            "xAxisType": "category",
            "yAxisName": "Volume USD",
            "x": [token.symbol for token in tokens],
            "series": [
                {"name": "Volume USD", "type": "bar", "color": TOKEN_COLOR, "data": [float(token.volume_usd) for token in tokens]},
            ],
        }
