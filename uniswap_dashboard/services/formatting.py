"""Display formatting. Only called while building payloads; no math happens on the output."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal


def format_usd(value: Decimal | float | int) -> str:
    return f"${float(value):,.2f}"


def format_compact(value: Decimal | float | int) -> str:
    amount = float(value)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if abs(amount) >= threshold:
            return f"${amount / threshold:,.2f}{suffix}"
    return f"${amount:,.2f}"


def utc_datetime(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=UTC)


def format_day_label(timestamp: int) -> str:
    """``Sep 14`` style axis label for a day index."""
    moment = utc_datetime(timestamp)
    return f"{moment:%b} {moment.day}"


def format_timestamp(timestamp: float) -> str:
    """``Sep 14, 2024, 10:32:05 PM`` style timestamp for swap lists."""
    moment = utc_datetime(timestamp)
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year}, {hour}:{moment:%M:%S %p}"


def iso_timestamp(timestamp: float) -> str:
    return utc_datetime(timestamp).isoformat()
