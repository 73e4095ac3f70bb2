from __future__ import annotations

import math

from uniswap_dashboard.services import queries
from uniswap_dashboard.services.models import Swap
from uniswap_dashboard.services.query_state import QueryResult, run_query
from uniswap_dashboard.services.subgraph_client import SubgraphClient


class SwapPager:
    """Loads swap pages newest-first with first/skip, one page after another.

    Pages are cached by the client, so asking for one more page only fetches the new
    page; earlier pages are replayed from the cache and kept in front. The combined
    list never holds more than ``max_records`` swaps.
    """

    def __init__(self, client: SubgraphClient, page_size: int, max_records: int) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if max_records <= 0:
            raise ValueError("max_records must be positive")
        self.client = client
        self.page_size = page_size
        self.max_records = max_records

    @property
    def max_pages(self) -> int:
        return math.ceil(self.max_records / self.page_size)

    def fetch_page(self, page: int) -> QueryResult:
        skip = page * self.page_size
        return run_query(
            self.client,
            queries.SWAPS_QUERY,
            "swaps",
            Swap.from_dict,
            variables={"first": min(self.page_size, self.max_records - skip), "skip": skip},
        )

    def load(self, pages: int = 1) -> QueryResult:
        pages = max(1, min(pages, self.max_pages))
        swaps: list[Swap] = []
        loaded = 0
        last_page_full = False
        for page in range(pages):
            result = self.fetch_page(page)
            if not result.ok:
                return QueryResult.failed(result.message if page == 0 else f"Page {page + 1}: {result.message}")
            swaps.extend(result.records)
            loaded += 1
            last_page_full = len(result.records) == self.page_size
            if not last_page_full:
                break
        del swaps[self.max_records :]
        return QueryResult.succeeded(
            swaps,
            pages_loaded=loaded,
            has_more=last_page_full and len(swaps) < self.max_records,
        )
