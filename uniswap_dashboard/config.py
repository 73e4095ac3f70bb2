from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SUBGRAPH_URL = (
    "https://subgraph.satsuma-prod.com/b727a2fe39b5/rizwan-sobhans-team--799140/"
    "community/uniswap-v3-mainnet/version/0.0.1/api"
)


def _optional_float(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass(frozen=True)
class Settings:
    subgraph_url: str = DEFAULT_SUBGRAPH_URL
    subgraph_timeout_seconds: float = 30.0
    swap_page_size: int = 1000
    swap_fetch_limit: int = 10000
    swap_bucket_mode: str = "time"
    swap_bucket_seconds: int = 600
    swap_bucket_size: int = 100
    recent_swaps_limit: int = 5
    cache_ttl_seconds: float | None = None
    cache_max_entries: int | None = None
    prewarm_enabled: bool = False
    log_slow_widgets: bool = False
    slow_widget_threshold_ms: float = 150.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings once at startup; `.env` never overrides the real environment."""
        load_dotenv(PROJECT_ROOT / ".env", override=False)
        return cls(
            subgraph_url=os.getenv("SUBGRAPH_URL", DEFAULT_SUBGRAPH_URL),
            subgraph_timeout_seconds=float(os.getenv("SUBGRAPH_TIMEOUT_SECONDS", "30")),
            swap_page_size=int(os.getenv("SWAP_PAGE_SIZE", "1000")),
            swap_fetch_limit=int(os.getenv("SWAP_FETCH_LIMIT", "10000")),
            swap_bucket_mode=os.getenv("SWAP_BUCKET_MODE", "time").strip().lower(),
            swap_bucket_seconds=int(os.getenv("SWAP_BUCKET_SECONDS", "600")),
            swap_bucket_size=int(os.getenv("SWAP_BUCKET_SIZE", "100")),
            recent_swaps_limit=int(os.getenv("RECENT_SWAPS_LIMIT", "5")),
            cache_ttl_seconds=_optional_float(os.getenv("API_CACHE_TTL_SECONDS")),
            cache_max_entries=_optional_int(os.getenv("API_CACHE_MAX_ENTRIES")),
            prewarm_enabled=os.getenv("API_PREWARM_ENABLED", "0") == "1",
            log_slow_widgets=os.getenv("API_LOG_SLOW_WIDGETS", "0") == "1",
            slow_widget_threshold_ms=float(os.getenv("API_SLOW_WIDGET_THRESHOLD_MS", "150")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
