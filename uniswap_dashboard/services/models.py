"""Records returned by the subgraph.

Numeric fields arrive as decimal strings. They are parsed once here: USD amounts
into ``Decimal`` so sums stay exact, timestamps and day indexes into ``int``.
A record that cannot be parsed raises ``MalformedRecordError`` rather than being
coerced to zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


class MalformedRecordError(ValueError):
    """A subgraph record is missing a field or carries an unparseable number."""


def _field(data: dict[str, Any], key: str, kind: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as exc:
        raise MalformedRecordError(f"{kind} record is missing '{key}'") from exc


def _symbol(data: dict[str, Any], key: str, kind: str) -> str:
    token = _field(data, key, kind)
    if not isinstance(token, dict) or "symbol" not in token:
        raise MalformedRecordError(f"{kind} record is missing '{key}.symbol'")
    return str(token["symbol"])


def parse_usd(value: Any, field_name: str = "amountUSD") -> Decimal:
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Invalid {field_name} value {value!r}") from exc
    if not parsed.is_finite():
        raise MalformedRecordError(f"Invalid {field_name} value {value!r}")
    return parsed


def parse_unix(value: Any, field_name: str = "timestamp") -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Invalid {field_name} value {value!r}") from exc


@dataclass(frozen=True)
class Swap:
    id: str
    amount_usd: Decimal
    timestamp: int
    token0_symbol: str
    token1_symbol: str

    @property
    def pair(self) -> str:
        return f"{self.token0_symbol}/{self.token1_symbol}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Swap":
        return cls(
            id=str(_field(data, "id", "swap")),
            amount_usd=parse_usd(_field(data, "amountUSD", "swap")),
            timestamp=parse_unix(_field(data, "timestamp", "swap")),
            token0_symbol=_symbol(data, "token0", "swap"),
            token1_symbol=_symbol(data, "token1", "swap"),
        )


@dataclass(frozen=True)
class Token:
    id: str
    symbol: str
    volume_usd: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        return cls(
            id=str(_field(data, "id", "token")),
            symbol=str(_field(data, "symbol", "token")),
            volume_usd=parse_usd(_field(data, "volumeUSD", "token"), "volumeUSD"),
        )


@dataclass(frozen=True)
class Pool:
    id: str
    token0_symbol: str
    token1_symbol: str
    volume_usd: Decimal

    @property
    def label(self) -> str:
        return f"{self.token0_symbol}/{self.token1_symbol}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pool":
        return cls(
            id=str(_field(data, "id", "pool")),
            token0_symbol=_symbol(data, "token0", "pool"),
            token1_symbol=_symbol(data, "token1", "pool"),
            volume_usd=parse_usd(_field(data, "volumeUSD", "pool"), "volumeUSD"),
        )


@dataclass(frozen=True)
class DayDatum:
    """Protocol-wide daily snapshot; ``date`` is the unix time of 00:00 UTC."""

    date: int
    tvl_usd: Decimal
    volume_usd: Decimal
    fees_usd: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DayDatum":
        return cls(
            date=parse_unix(_field(data, "date", "day"), "date"),
            tvl_usd=parse_usd(_field(data, "tvlUSD", "day"), "tvlUSD"),
            volume_usd=parse_usd(_field(data, "volumeUSD", "day"), "volumeUSD"),
            fees_usd=parse_usd(_field(data, "feesUSD", "day"), "feesUSD"),
        )
