from __future__ import annotations

import threading
from typing import Any

import requests

ROOT_FIELDS = ("swaps", "tokens", "pools", "uniswapDayDatas")


def swap_row(swap_id: str, amount: str, timestamp: int | str, token0: str = "WETH", token1: str = "USDC") -> dict[str, Any]:
    return {
        "id": swap_id,
        "amountUSD": amount,
        "timestamp": str(timestamp),
        "token0": {"symbol": token0},
        "token1": {"symbol": token1},
    }


def token_row(symbol: str, volume: str) -> dict[str, Any]:
    return {"id": f"0x{symbol.lower()}", "symbol": symbol, "volumeUSD": volume}


def pool_row(token0: str, token1: str, volume: str) -> dict[str, Any]:
    return {"id": f"0x{token0.lower()}{token1.lower()}", "token0": {"symbol": token0}, "token1": {"symbol": token1}, "volumeUSD": volume}


def day_row(date: int, tvl: str, volume: str, fees: str) -> dict[str, Any]:
    return {"date": date, "tvlUSD": tvl, "volumeUSD": volume, "feesUSD": fees}


class FakeResponse:
    def __init__(self, body: Any = None, status_code: int = 200, invalid_json: bool = False):
        self._body = body
        self.status_code = status_code
        self._invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeSubgraphSession:
    """Stands in for ``requests.Session``; answers by the query's root field.

    ``failures`` maps a root field to an exception to raise or a GraphQL error message.
    """

    def __init__(
        self,
        swaps: list[dict[str, Any]] | None = None,
        tokens: list[dict[str, Any]] | None = None,
        pools: list[dict[str, Any]] | None = None,
        days: list[dict[str, Any]] | None = None,
        failures: dict[str, Any] | None = None,
    ):
        self.data = {
            "swaps": swaps or [],
            "tokens": tokens or [],
            "pools": pools or [],
            "uniswapDayDatas": days or [],
        }
        self.failures = failures or {}
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self._lock = threading.Lock()

    def calls_for(self, root_field: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if f"{root_field}(" in call["query"]]

    def post(self, url: str, json: dict[str, Any] | None = None, headers: dict[str, str] | None = None, timeout: float | None = None) -> FakeResponse:
        payload = json or {}
        with self._lock:
            self.calls.append(payload)
        query = payload.get("query", "")
        root_field = next(field for field in ROOT_FIELDS if f"{field}(" in query)
        failure = self.failures.get(root_field)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return FakeResponse({"errors": [{"message": failure}]})
        rows = self.data[root_field]
        variables = payload.get("variables") or {}
        if "skip" in variables:
            rows = rows[variables["skip"] : variables["skip"] + variables["first"]]
        return FakeResponse({"data": {root_field: rows}})

    def close(self) -> None:
        self.closed = True
