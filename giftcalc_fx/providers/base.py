"""Contract for exchange rate providers."""

from __future__ import annotations

from typing import Protocol

from giftcalc_fx.models import FetchResult


class RateProvider(Protocol):
    """Fetches the full rate table for a base currency.

    Implementations issue exactly one request per call, never retry and never
    cache; failures are reported through :class:`FetchResult` rather than raised.
    """

    def fetch_rates(self, base_currency: str) -> FetchResult:
        ...  # pragma: no cover - protocol definition


__all__ = ["RateProvider"]
