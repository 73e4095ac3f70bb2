"""Section boundary for subgraph queries.

Every section sees exactly one of three states: pending, failed with a
displayable message, or succeeded with parsed records. Nothing raised by the
client or by record parsing escapes ``run_query``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

from uniswap_dashboard.services.models import MalformedRecordError
from uniswap_dashboard.services.subgraph_client import SubgraphClient, SubgraphError

logger = logging.getLogger(__name__)


class QueryStatus(str, Enum):
    PENDING = "pending"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class QueryResult:
    status: QueryStatus
    records: tuple[Any, ...] = ()
    message: str = ""
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is QueryStatus.SUCCEEDED

    @classmethod
    def pending(cls) -> "QueryResult":
        return cls(status=QueryStatus.PENDING)

    @classmethod
    def failed(cls, message: str) -> "QueryResult":
        return cls(status=QueryStatus.FAILED, message=message)

    @classmethod
    def succeeded(cls, records: Sequence[Any], **meta: Any) -> "QueryResult":
        return cls(status=QueryStatus.SUCCEEDED, records=tuple(records), meta=meta)


def run_query(
    client: SubgraphClient,
    query: str,
    root_field: str,
    parse: Callable[[dict[str, Any]], Any],
    variables: dict[str, Any] | None = None,
) -> QueryResult:
    try:
        data = client.execute(query, variables)
        rows = data.get(root_field)
        if rows is None:
            raise MalformedRecordError(f"Response is missing '{root_field}'")
        if not isinstance(rows, list):
            raise MalformedRecordError(f"'{root_field}' is not a list")
        return QueryResult.succeeded([parse(row) for row in rows])
    except (SubgraphError, MalformedRecordError) as exc:
        logger.debug("Query for %s failed: %s", root_field, exc)
        return QueryResult.failed(str(exc))


Observer = Callable[[QueryResult], None]


class SectionQuery:
    """One section's fetch lifecycle: pending -> succeeded | failed, published once."""

    def __init__(self, name: str, fetch: Callable[[], QueryResult]) -> None:
        self.name = name
        self._fetch = fetch
        self._result = QueryResult.pending()
        self._observers: list[Observer] = []
        self._lock = threading.Lock()
        self._run_lock = threading.Lock()

    @property
    def result(self) -> QueryResult:
        with self._lock:
            return self._result

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            resolved = self._result.status is not QueryStatus.PENDING
            if not resolved:
                self._observers.append(observer)
                return
            result = self._result
        observer(result)

    def run(self) -> QueryResult:
        with self._run_lock:
            current = self.result
            if current.status is not QueryStatus.PENDING:
                return current
            result = self._fetch()
            if result.status is QueryStatus.PENDING:
                raise RuntimeError(f"Section '{self.name}' fetch returned a pending result")
            with self._lock:
                self._result = result
                observers, self._observers = self._observers, []
        for observer in observers:
            observer(result)
        return result
