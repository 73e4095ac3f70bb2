"""Bucket-and-sum aggregation of swaps.

Two policies, picked by configuration:

- ``time``: each swap goes to the bucket starting at ``ts - ts % bucket_seconds``
  (UTC). One bucket per distinct start, x position is the bucket start.
- ``count``: swaps sorted oldest first are cut into runs of ``bucket_size``; the
  trailing remainder is a bucket too. x position is the run's average timestamp.

Either way the bucket totals add up to the input total and buckets come out in
ascending time order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from uniswap_dashboard.services.models import Swap

TIME_MODE = "time"
COUNT_MODE = "count"


@dataclass(frozen=True)
class Bucket:
    timestamp: float
    total_usd: Decimal
    count: int
    start_timestamp: int
    end_timestamp: int

    @property
    def average_usd(self) -> Decimal:
        return self.total_usd / self.count if self.count else Decimal(0)


@dataclass(frozen=True)
class AggregationPolicy:
    mode: str = TIME_MODE
    bucket_seconds: int = 600
    bucket_size: int = 100

    def __post_init__(self) -> None:
        if self.mode not in (TIME_MODE, COUNT_MODE):
            raise ValueError(f"Unsupported bucket mode '{self.mode}' (expected 'time' or 'count')")
        if self.mode == TIME_MODE and self.bucket_seconds <= 0:
            raise ValueError("bucket_seconds must be positive")
        if self.mode == COUNT_MODE and self.bucket_size <= 0:
            raise ValueError("bucket_size must be positive")

    @classmethod
    def from_settings(cls, settings) -> "AggregationPolicy":
        return cls(
            mode=settings.swap_bucket_mode,
            bucket_seconds=settings.swap_bucket_seconds,
            bucket_size=settings.swap_bucket_size,
        )

    @property
    def label(self) -> str:
        if self.mode == COUNT_MODE:
            return f"Swap Volume per {self.bucket_size} Swaps"
        if self.bucket_seconds % 3600 == 0:
            hours = self.bucket_seconds // 3600
            return f"{hours}-Hour Swap Volume"
        if self.bucket_seconds % 60 == 0:
            return f"{self.bucket_seconds // 60}-Minute Swap Volume"
        return f"{self.bucket_seconds}-Second Swap Volume"


def bucket_by_time(swaps: Iterable[Swap], bucket_seconds: int) -> list[Bucket]:
    if bucket_seconds <= 0:
        raise ValueError("bucket_seconds must be positive")
    totals: dict[int, Decimal] = {}
    counts: dict[int, int] = {}
    for swap in swaps:
        key = swap.timestamp - swap.timestamp % bucket_seconds
        totals[key] = totals.get(key, Decimal(0)) + swap.amount_usd
        counts[key] = counts.get(key, 0) + 1
    return [
        Bucket(
            timestamp=float(key),
            total_usd=totals[key],
            count=counts[key],
            start_timestamp=key,
            end_timestamp=key + bucket_seconds,
        )
        for key in sorted(totals)
    ]


def bucket_by_count(swaps: Sequence[Swap], bucket_size: int) -> list[Bucket]:
    if bucket_size <= 0:
        raise ValueError("bucket_size must be positive")
    ordered = sorted(swaps, key=lambda swap: swap.timestamp)
    buckets: list[Bucket] = []
    for start in range(0, len(ordered), bucket_size):
        chunk = ordered[start : start + bucket_size]
        total = sum((swap.amount_usd for swap in chunk), Decimal(0))
        buckets.append(
            Bucket(
                timestamp=sum(swap.timestamp for swap in chunk) / len(chunk),
                total_usd=total,
                count=len(chunk),
                start_timestamp=chunk[0].timestamp,
                end_timestamp=chunk[-1].timestamp,
            )
        )
    return buckets


def aggregate_swaps(swaps: Sequence[Swap], policy: AggregationPolicy) -> list[Bucket]:
    if policy.mode == COUNT_MODE:
        return bucket_by_count(swaps, policy.bucket_size)
    return bucket_by_time(swaps, policy.bucket_seconds)
