from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from uniswap_dashboard.config import Settings
from uniswap_dashboard.services.query_state import QueryResult, QueryStatus, SectionQuery
from uniswap_dashboard.services.subgraph_client import SubgraphClient

logger = logging.getLogger(__name__)

StatusListener = Callable[[str, QueryResult], None]


def error_payload(message: str) -> dict[str, Any]:
    return {"kind": "error", "message": f"Error: {message}"}


class BaseSectionService:
    section_id = ""
    title = ""

    def __init__(self, client: SubgraphClient, settings: Settings | None = None):
        self.client = client
        self.settings = settings or Settings()
        self._handlers: dict[str, Callable[[QueryResult, dict[str, Any]], dict[str, Any]]] = {}
        self._queries: dict[str, SectionQuery] = {}
        self._queries_lock = threading.Lock()
        self._listeners: list[StatusListener] = []
        self.last_status = QueryStatus.PENDING

    def add_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def _fetch(self, params: dict[str, Any]) -> QueryResult:
        raise NotImplementedError

    def _load_key(self, params: dict[str, Any]) -> str:
        return "default"

    def _publish(self, result: QueryResult) -> None:
        self.last_status = result.status
        if result.status is QueryStatus.FAILED:
            logger.warning("Section %s failed: %s", self.section_id, result.message)
        else:
            logger.debug("Section %s loaded %s records", self.section_id, len(result.records))
        for listener in self._listeners:
            listener(self.section_id, result)

    def load(self, params: dict[str, Any] | None = None) -> QueryResult:
        """Resolve this section's data; concurrent callers with the same key share one fetch."""
        params = params or {}
        key = self._load_key(params)
        with self._queries_lock:
            section_query = self._queries.get(key)
            if section_query is None:
                section_query = SectionQuery(f"{self.section_id}:{key}", lambda: self._fetch(params))
                section_query.subscribe(self._publish)
                self._queries[key] = section_query
        try:
            return section_query.run()
        finally:
            # Resolved data lives in the client cache; a failed query must not stick.
            with self._queries_lock:
                if self._queries.get(key) is section_query:
                    del self._queries[key]

    def list_widgets(self) -> list[str]:
        return list(self._handlers.keys())

    def get_widget_payload(self, widget_id: str, params: dict[str, Any]) -> dict[str, Any]:
        handler = self._handlers.get(widget_id)
        if handler is None:
            raise KeyError(f"Unsupported widget id '{widget_id}' for section '{self.section_id}'")
        result = self.load(params)
        if not result.ok:
            return error_payload(result.message)
        return handler(result, params)
