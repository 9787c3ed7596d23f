"""Exchange rate provider clients."""

from __future__ import annotations

from giftcalc_fx.providers.base import RateProvider
from giftcalc_fx.providers.exchange_rate_api import DEFAULT_BASE_URL, ExchangeRateApiProvider

__all__ = ["DEFAULT_BASE_URL", "ExchangeRateApiProvider", "RateProvider"]
