from __future__ import annotations

import threading
import time
import unittest

from uniswap_dashboard.services.cache_store import QueryCache, cache_key


class QueryCacheSingleflightTests(unittest.TestCase):
    def test_concurrent_callers_share_one_loader(self) -> None:
        cache = QueryCache()
        calls = 0
        calls_lock = threading.Lock()
        results: list[str] = []

        def loader() -> str:
            nonlocal calls
            with calls_lock:
                calls += 1
            time.sleep(0.15)
            return "ok"

        def worker() -> None:
            results.append(cache.cached("swaps-key", loader))

        t1 = threading.Thread(target=worker)
        t2 = threading.Thread(target=worker)
        t1.start()
        time.sleep(0.01)
        t2.start()
        t1.join()
        t2.join()

        self.assertEqual(calls, 1, "inflight waiter should not trigger duplicate loader")
        self.assertEqual(results, ["ok", "ok"])

    def test_failed_loader_is_not_cached(self) -> None:
        cache = QueryCache()

        def failing() -> str:
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            cache.cached("k", failing)
        self.assertIsNone(cache.get("k"))
        self.assertEqual(cache.cached("k", lambda: "later"), "later")

    def test_waiter_runs_its_own_loader_after_leader_fails(self) -> None:
        cache = QueryCache()
        attempts = 0
        attempts_lock = threading.Lock()
        outcomes: list[str] = []

        def loader() -> str:
            nonlocal attempts
            with attempts_lock:
                attempts += 1
                attempt = attempts
            if attempt == 1:
                time.sleep(0.15)
                raise RuntimeError("boom")
            return "ok"

        def worker() -> None:
            try:
                outcomes.append(cache.cached("k", loader))
            except RuntimeError:
                outcomes.append("failed")

        t1 = threading.Thread(target=worker)
        t2 = threading.Thread(target=worker)
        t1.start()
        time.sleep(0.01)
        t2.start()
        t1.join()
        t2.join()

        self.assertEqual(sorted(outcomes), ["failed", "ok"])
        self.assertEqual(attempts, 2)
        self.assertEqual(cache.get("k"), "ok")


class QueryCacheLifetimeTests(unittest.TestCase):
    def test_default_cache_never_expires_or_evicts(self) -> None:
        cache = QueryCache()
        for idx in range(500):
            cache.set(f"k{idx}", idx)
        self.assertEqual(len(cache), 500)
        self.assertEqual(cache.get("k0"), 0)

    def test_ttl_expires_entries(self) -> None:
        cache = QueryCache(ttl_seconds=0.01)
        cache.set("k", "v")
        time.sleep(0.03)
        self.assertIsNone(cache.get("k"))

    def test_max_entries_evicts_least_recently_used(self) -> None:
        cache = QueryCache(max_entries=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        self.assertEqual(cache.get("a"), 1)
        self.assertIsNone(cache.get("b"))
        self.assertEqual(cache.get("c"), 3)


class CacheKeyTests(unittest.TestCase):
    def test_variable_order_and_whitespace_do_not_change_key(self) -> None:
        a = cache_key("{ swaps { id } }", {"first": 1, "skip": 0})
        b = cache_key("{\n  swaps {\n    id\n  }\n}", {"skip": 0, "first": 1})
        self.assertEqual(a, b)

    def test_different_variables_get_different_keys(self) -> None:
        self.assertNotEqual(cache_key("q", {"skip": 0}), cache_key("q", {"skip": 100}))
        self.assertEqual(cache_key("q"), cache_key("q", {}))


if __name__ == "__main__":
    unittest.main()
