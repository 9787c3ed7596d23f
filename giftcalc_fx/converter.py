"""Cache-aware currency conversion."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

from giftcalc_fx.cache.base_store import RateCacheStore, now_ms
from giftcalc_fx.models import (
    CacheStatus,
    ConversionResult,
    FetchFailure,
    FetchResult,
    RateSnapshot,
)
from giftcalc_fx.providers.base import RateProvider
from giftcalc_fx.utils.logger import get_logger
from giftcalc_fx.utils.ttl import current_ttl_hours

LOGGER = get_logger(__name__)

DEFAULT_DECIMALS = 2

# Failures that mean "the provider has no usable rate" rather than "the request broke".
_UNAVAILABLE_FAILURES = {FetchFailure.HTTP, FetchFailure.PROVIDER}


def round_half_up(value: float | Decimal, decimals: int) -> float:
    """Round ``value`` to ``decimals`` places, ties away from zero."""

    quantum = Decimal(1).scaleb(-decimals)
    exact = value if isinstance(value, Decimal) else Decimal(str(value))
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def multiply(amount: float, rate: float, decimals: int) -> float:
    """Return ``amount * rate`` rounded half-up.

    Both operands go through ``str`` so ``100 * 0.8567`` is multiplied as the
    decimal literals they print as instead of their binary approximations.
    """

    return round_half_up(Decimal(str(amount)) * Decimal(str(rate)), decimals)


def unavailable_message(from_currency: str, to_currency: str) -> str:
    return f"Unable to get conversion rate from {from_currency} to {to_currency}"


class CurrencyConverter:
    """Converts amounts using cached snapshots, refetching when stale or incomplete.

    ``ttl_resolver`` is called on every conversion so a long-lived process picks
    up environment and config changes. ``clock`` returns epoch milliseconds.
    """

    def __init__(
        self,
        store: RateCacheStore,
        provider: RateProvider,
        *,
        ttl_resolver: Callable[[], int] = current_ttl_hours,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.provider = provider
        self.ttl_resolver = ttl_resolver
        self.clock = clock

    def convert(
        self,
        amount: float,
        from_currency: str,
        to_currency: str,
        decimals: int | None = DEFAULT_DECIMALS,
    ) -> ConversionResult:
        if from_currency == to_currency:
            return ConversionResult(
                success=True,
                original_amount=amount,
                from_currency=from_currency,
                to_currency=to_currency,
                converted_amount=amount,
                rate=1,
                cached=True,
            )

        ttl_hours = self.ttl_resolver()
        now = self.clock()
        snapshot = self.store.read_snapshot(from_currency)

        if (
            snapshot is not None
            and snapshot.is_fresh(now, ttl_hours)
            and to_currency in snapshot.rates
        ):
            LOGGER.debug("Cache hit for %s -> %s", from_currency, to_currency)
            rate = snapshot.rates[to_currency]
            cached = True
        else:
            LOGGER.debug("Cache miss for %s -> %s", from_currency, to_currency)
            fetched = self._fetch_and_store(from_currency, now)
            if not fetched.ok:
                return self._failure(amount, from_currency, to_currency, fetched)
            if to_currency not in fetched.rates:
                return self._failure(amount, from_currency, to_currency)
            rate = fetched.rates[to_currency]
            cached = False

        # No precision means whole units.
        places = 0 if decimals is None else decimals
        return ConversionResult(
            success=True,
            original_amount=amount,
            from_currency=from_currency,
            to_currency=to_currency,
            converted_amount=multiply(amount, rate, places),
            rate=rate,
            cached=cached,
        )

    def refresh(self, base_currency: str) -> bool:
        """Refetch ``base_currency`` regardless of freshness.

        On failure the previous snapshot stays in place.
        """

        fetched = self._fetch_and_store(base_currency, self.clock())
        if not fetched.ok:
            LOGGER.warning("Refresh of %s rates failed: %s", base_currency, fetched.reason)
        return fetched.ok

    def status(self, base_currency: str) -> CacheStatus:
        return self.store.status(base_currency, self.ttl_resolver(), now=self.clock())

    def clear(self) -> None:
        self.store.clear()

    def _fetch_and_store(self, base_currency: str, now: int) -> FetchResult:
        fetched = self.provider.fetch_rates(base_currency)
        if fetched.ok:
            # A successful fetch replaces the whole snapshot, even when the
            # requested target is missing from it.
            self.store.write_snapshot(base_currency, RateSnapshot(rates=fetched.rates, timestamp=now))
        return fetched

    @staticmethod
    def _failure(
        amount: float,
        from_currency: str,
        to_currency: str,
        fetched: FetchResult | None = None,
    ) -> ConversionResult:
        if fetched is None or fetched.failure in _UNAVAILABLE_FAILURES:
            error = unavailable_message(from_currency, to_currency)
        else:
            error = f"Conversion failed: {fetched.reason}"
        LOGGER.info("Conversion %s -> %s unavailable: %s", from_currency, to_currency, error)
        return ConversionResult(
            success=False,
            original_amount=amount,
            from_currency=from_currency,
            to_currency=to_currency,
            error=error,
        )


__all__ = ["CurrencyConverter", "DEFAULT_DECIMALS", "multiply", "round_half_up", "unavailable_message"]
