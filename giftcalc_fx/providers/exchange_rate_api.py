"""Client for the keyless ExchangeRate-API ``latest`` endpoint."""

from __future__ import annotations

from numbers import Real
from typing import Any, Mapping

import requests

from giftcalc_fx.models import FetchFailure, FetchResult
from giftcalc_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_BASE_URL = "https://open.er-api.com/v6/latest"
USER_AGENT = "giftcalc-fx/1.0"


class ExchangeRateApiProvider:
    """One ``GET {base_url}/{BASE}`` per call, returning every rate for ``BASE``.

    ``timeout`` is passed straight to :mod:`requests`; the default of ``None``
    leaves latency bounded only by the transport.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self.timeout = timeout

    def url_for(self, base_currency: str) -> str:
        return f"{self.base_url}/{base_currency}"

    def fetch_rates(self, base_currency: str) -> FetchResult:
        url = self.url_for(base_currency)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.warning("Rate request for %s failed: %s", base_currency, exc)
            return FetchResult.failed(FetchFailure.TRANSPORT, str(exc))

        if not 200 <= response.status_code < 300:
            LOGGER.warning("Rate provider responded with HTTP %s for %s", response.status_code, url)
            return FetchResult.failed(
                FetchFailure.HTTP,
                f"Rate provider responded with HTTP {response.status_code} for {url}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            LOGGER.warning("Rate provider returned invalid JSON for %s: %s", base_currency, exc)
            return FetchResult.failed(
                FetchFailure.MALFORMED, f"Invalid JSON in rate response for {base_currency}: {exc}"
            )
        return self._parse_payload(payload, base_currency)

    @staticmethod
    def _parse_payload(payload: Any, base_currency: str) -> FetchResult:
        # Decodable JSON without a usable rates table means the provider has no
        # answer for this base, same as an explicit error result.
        if not isinstance(payload, Mapping):
            return FetchResult.failed(
                FetchFailure.PROVIDER, f"Unexpected rate response shape for {base_currency}"
            )
        result = payload.get("result")
        if result != "success":
            detail = payload.get("error-type") or result or "unknown error"
            LOGGER.warning("Rate provider reported failure for %s: %s", base_currency, detail)
            return FetchResult.failed(
                FetchFailure.PROVIDER, f"Rate provider reported failure for {base_currency}: {detail}"
            )
        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, Mapping):
            return FetchResult.failed(
                FetchFailure.PROVIDER, f"Rate response for {base_currency} has no rates table"
            )
        rates = {
            str(code): float(value)
            for code, value in raw_rates.items()
            if isinstance(value, Real) and not isinstance(value, bool)
        }
        LOGGER.info("Fetched %s rates for %s", len(rates), base_currency)
        return FetchResult.success(rates)


__all__ = ["DEFAULT_BASE_URL", "ExchangeRateApiProvider"]
