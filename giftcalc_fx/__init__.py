"""Public interface for the giftcalc_fx package."""

from __future__ import annotations

from functools import partial
from importlib import metadata as importlib_metadata
from pathlib import Path

from giftcalc_fx.cache import JsonFileRateStore, MemoryRateStore, RateCacheStore
from giftcalc_fx.converter import DEFAULT_DECIMALS, CurrencyConverter
from giftcalc_fx.formatting import format_amount, format_single
from giftcalc_fx.formatting import format_output as _format_output
from giftcalc_fx.models import CacheStatus, ConversionResult, FetchFailure, FetchResult, RateSnapshot
from giftcalc_fx.providers import ExchangeRateApiProvider, RateProvider
from giftcalc_fx.utils.currencies import (
    is_supported,
    is_valid_code,
    list_supported_currencies,
    normalise_code,
)
from giftcalc_fx.utils.ttl import current_ttl_hours, resolve_ttl_hours

__all__ = [
    "__version__",
    "CacheStatus",
    "ConversionResult",
    "CurrencyConverter",
    "CurrencyService",
    "ExchangeRateApiProvider",
    "FetchFailure",
    "FetchResult",
    "JsonFileRateStore",
    "MemoryRateStore",
    "RateCacheStore",
    "RateProvider",
    "RateSnapshot",
    "clear",
    "convert",
    "default_service",
    "format_amount",
    "format_output",
    "format_single",
    "is_supported",
    "is_valid_code",
    "list_supported_currencies",
    "normalise_code",
    "refresh",
    "resolve_ttl_hours",
    "status",
]

try:
    __version__ = importlib_metadata.version("giftcalc-fx")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class CurrencyService:
    """Package facade wiring the rate cache, provider and TTL policy together.

    With no arguments the service uses the JSON cache under
    ``~/.config/gift-calc``, the ExchangeRate-API provider and the TTL from
    ``GIFT_CALC_CACHE_TTL_HOURS`` / ``cacheTTLHours``. Paths are resolved when
    the service is built, so construct a new one after changing ``HOME``.
    """

    __slots__ = ("store", "provider", "converter", "config_path")

    __version__ = __version__

    def __init__(
        self,
        *,
        cache_path: str | Path | None = None,
        config_path: str | Path | None = None,
        store: RateCacheStore | None = None,
        provider: RateProvider | None = None,
    ) -> None:
        if store is not None and cache_path is not None:
            raise ValueError("Pass either store or cache_path, not both")
        self.store = store or JsonFileRateStore(cache_path)
        self.provider = provider or ExchangeRateApiProvider()
        self.config_path = Path(config_path) if config_path is not None else None
        self.converter = CurrencyConverter(
            self.store,
            self.provider,
            ttl_resolver=partial(current_ttl_hours, self.config_path),
        )

    def ttl_hours(self) -> int:
        return current_ttl_hours(self.config_path)

    def convert(
        self,
        amount: float,
        from_currency: str,
        to_currency: str,
        decimals: int | None = DEFAULT_DECIMALS,
    ) -> ConversionResult:
        return self.converter.convert(amount, from_currency, to_currency, decimals)

    def format_output(
        self,
        amount: float,
        base_currency: str,
        display_currency: str | None = None,
        recipient_name: str | None = None,
        decimals: int | None = DEFAULT_DECIMALS,
    ) -> str:
        return _format_output(
            amount,
            base_currency,
            display_currency,
            recipient_name,
            decimals,
            converter=self.converter,
        )

    def refresh(self, base_currency: str) -> bool:
        return self.converter.refresh(base_currency)

    def status(self, base_currency: str) -> CacheStatus:
        return self.converter.status(base_currency)

    def clear(self) -> None:
        self.converter.clear()


def default_service() -> CurrencyService:
    """Return a service bound to the current user's cache and config paths.

    A new instance is built on each call because ``HOME`` may change between
    calls (tests, sandboxed runs).
    """

    return CurrencyService()


def convert(
    amount: float,
    from_currency: str,
    to_currency: str,
    decimals: int | None = DEFAULT_DECIMALS,
) -> ConversionResult:
    return default_service().convert(amount, from_currency, to_currency, decimals)


def format_output(
    amount: float,
    base_currency: str,
    display_currency: str | None = None,
    recipient_name: str | None = None,
    decimals: int | None = DEFAULT_DECIMALS,
) -> str:
    return default_service().format_output(
        amount, base_currency, display_currency, recipient_name, decimals
    )


def refresh(base_currency: str) -> bool:
    return default_service().refresh(base_currency)


def status(base_currency: str) -> CacheStatus:
    return default_service().status(base_currency)


def clear() -> None:
    default_service().clear()
