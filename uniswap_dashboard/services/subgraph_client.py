from __future__ import annotations

import logging
import time
from typing import Any

import requests

from uniswap_dashboard.services.cache_store import QueryCache, cache_key

logger = logging.getLogger(__name__)


class SubgraphError(Exception):
    """Transport or GraphQL failure while querying the subgraph."""


class SubgraphClient:
    """GraphQL client for one subgraph endpoint.

    Responses are cached by query + variables for the lifetime of the client.
    There is no retry: a failed request raises ``SubgraphError`` and nothing is cached.
    """

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: float = 30.0,
        cache: QueryCache | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.cache = cache if cache is not None else QueryCache()
        self._session = session if session is not None else requests.Session()

    def close(self) -> None:
        self._session.close()

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        key = cache_key(query, variables)
        return self.cache.cached(key, lambda: self._post(query, variables))

    def _post(self, query: str, variables: dict[str, Any] | None) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        started = time.perf_counter()
        try:
            response = self._session.post(
                self.endpoint,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.Timeout as exc:
            logger.warning("Subgraph request timed out after %.1fs", self.timeout_seconds)
            raise SubgraphError(f"Request timed out after {self.timeout_seconds:g}s") from exc
        except requests.exceptions.HTTPError as exc:
            logger.warning("Subgraph returned HTTP error: %s", exc)
            raise SubgraphError(f"HTTP error: {exc}") from exc
        except requests.exceptions.JSONDecodeError as exc:
            raise SubgraphError("Response was not valid JSON") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("Subgraph request failed: %s", exc)
            raise SubgraphError(f"Network error: {exc}") from exc
        except ValueError as exc:
            raise SubgraphError("Response was not valid JSON") from exc

        if not isinstance(body, dict):
            raise SubgraphError("Response was not a JSON object")
        if body.get("errors"):
            messages = [str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in body["errors"]]
            logger.warning("Subgraph returned GraphQL errors: %s", "; ".join(messages))
            raise SubgraphError(f"GraphQL error: {'; '.join(messages)}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise SubgraphError("Response has no 'data' field")

        logger.debug(
            "Subgraph query ok in %.2fms variables=%s",
            (time.perf_counter() - started) * 1000.0,
            variables,
        )
        return data
