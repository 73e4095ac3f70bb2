from __future__ import annotations

import json
import math
from collections import OrderedDict
from datetime import UTC, datetime
from threading import Event, RLock
from typing import Any, Callable


def cache_key(query: str, variables: dict[str, Any] | None = None) -> str:
    compact_query = " ".join(query.split())
    return f"{compact_query}::{json.dumps(variables or {}, sort_keys=True, separators=(',', ':'))}"


class QueryCache:
    """Response cache keyed by query + variables.

    ``ttl_seconds=None`` keeps entries forever and ``max_entries=None`` never evicts,
    which is the default for the dashboard: responses live as long as the process.
    """

    def __init__(self, ttl_seconds: float | None = None, max_entries: int | None = None) -> None:
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._cache: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._inflight: dict[str, Event] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def _expires_at(self, ttl_seconds: float | None) -> float:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl is None:
            return math.inf
        return datetime.now(UTC).timestamp() + max(ttl, 0.0)

    def get(self, key: str) -> Any | None:
        now_ts = datetime.now(UTC).timestamp()
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= now_ts:
                del self._cache[key]
                return None
            self._cache.move_to_end(key)
            return value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> Any:
        expires_at = self._expires_at(ttl_seconds)
        with self._lock:
            self._cache[key] = (expires_at, value)
            self._cache.move_to_end(key)
            if self._max_entries is not None:
                while len(self._cache) > self._max_entries:
                    self._cache.popitem(last=False)
        return value

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def cached(self, key: str, loader: Callable[[], Any], ttl_seconds: float | None = None) -> Any:
        """Return the cached value or run ``loader`` once for all concurrent callers of ``key``.

        Waiters block until the leading call finishes with no timeout; a subgraph request
        is already bounded by the client timeout. If the leader raised, nothing was stored
        and each waiter runs ``loader`` itself, so one failed request never answers for
        the others and the failure is never served from the cache.
        """
        existing = self.get(key)
        if existing is not None:
            return existing

        is_loader = False
        with self._lock:
            wait_event = self._inflight.get(key)
            if wait_event is None:
                wait_event = Event()
                self._inflight[key] = wait_event
                is_loader = True

        if not is_loader:
            wait_event.wait()
            existing_after_wait = self.get(key)
            if existing_after_wait is not None:
                return existing_after_wait
            # The loader failed; failures are not cached, so try once ourselves.
            return self.set(key, loader(), ttl_seconds=ttl_seconds)

        try:
            value = loader()
            return self.set(key, value, ttl_seconds=ttl_seconds)
        finally:
            with self._lock:
                event = self._inflight.pop(key, None)
                if event is not None:
                    event.set()
