"""Data models shared across the cache, provider and conversion modules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

MS_PER_HOUR = 60 * 60 * 1000


def iso_timestamp(epoch_ms: int) -> str:
    """Render ``epoch_ms`` as an ISO-8601 UTC string with millisecond precision."""

    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    """One complete provider response for a base currency.

    ``rates`` maps currency codes to units per one unit of the base currency and
    ``timestamp`` is the fetch time in milliseconds since the epoch.
    """

    rates: dict[str, float]
    timestamp: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp

    def is_fresh(self, now_ms: int, ttl_hours: int) -> bool:
        return self.age_ms(now_ms) < ttl_hours * MS_PER_HOUR

    def to_payload(self) -> dict[str, Any]:
        return {"rates": dict(self.rates), "timestamp": self.timestamp}

    @classmethod
    def from_payload(cls, payload: object) -> "RateSnapshot | None":
        """Build a snapshot from its JSON form, or return None when malformed.

        Rate values that are not finite numbers are dropped, so a damaged entry
        for one currency reads as a miss for that currency only.
        """

        if not isinstance(payload, Mapping):
            return None
        rates = payload.get("rates")
        timestamp = payload.get("timestamp")
        if not isinstance(rates, Mapping) or not _is_finite_number(timestamp) or not timestamp:
            return None
        usable = {str(code): value for code, value in rates.items() if _is_finite_number(value)}
        return cls(rates=usable, timestamp=int(timestamp))


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of a single conversion request."""

    success: bool
    original_amount: float
    from_currency: str
    to_currency: str
    converted_amount: float | None = None
    rate: float | None = None
    cached: bool | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase mapping used by JSON consumers."""

        payload: dict[str, Any] = {
            "success": self.success,
            "originalAmount": self.original_amount,
            "fromCurrency": self.from_currency,
            "toCurrency": self.to_currency,
        }
        if self.success:
            payload["convertedAmount"] = self.converted_amount
            payload["rate"] = self.rate
            payload["cached"] = self.cached
        if self.error is not None:
            payload["error"] = self.error
        return payload


class FetchFailure(str, Enum):
    """Ways a provider request can fail."""

    HTTP = "http"
    TRANSPORT = "transport"
    MALFORMED = "malformed"
    PROVIDER = "provider"


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Either a full rate table or a typed failure with a readable reason."""

    ok: bool
    rates: dict[str, float] = field(default_factory=dict)
    reason: str | None = None
    failure: FetchFailure | None = None

    @classmethod
    def success(cls, rates: Mapping[str, float]) -> "FetchResult":
        return cls(ok=True, rates=dict(rates))

    @classmethod
    def failed(cls, failure: FetchFailure, reason: str) -> "FetchResult":
        return cls(ok=False, reason=reason, failure=failure)


@dataclass(slots=True)
class CacheStatus:
    """Read-only view of the cache entry for a base currency."""

    exists: bool
    expired: bool
    age: int | None
    ttl: int
    timestamp: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "exists": self.exists,
            "expired": self.expired,
            "age": self.age,
            "ttl": self.ttl,
            "timestamp": self.timestamp,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


__all__ = [
    "CacheStatus",
    "ConversionResult",
    "FetchFailure",
    "FetchResult",
    "MS_PER_HOUR",
    "RateSnapshot",
    "iso_timestamp",
]
