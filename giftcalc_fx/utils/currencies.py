"""Static currency registry and code validation helpers."""

from __future__ import annotations

import re
from typing import Final

SUPPORTED_CURRENCIES: Final[tuple[str, ...]] = (
    "USD", "EUR", "GBP", "JPY", "SEK", "NOK", "DKK", "CHF", "CAD", "AUD",
    "NZD", "CNY", "INR", "KRW", "SGD", "HKD", "PLN", "CZK", "HUF", "RON",
    "BGN", "HRK", "RUB", "TRY", "BRL", "MXN", "ZAR", "ISK", "THB", "MYR",
)

_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


def list_supported_currencies() -> list[str]:
    """Return the advertised currency codes in registry order.

    The provider understands far more codes than this; the list only covers
    the currencies offered to users.
    """

    return list(SUPPORTED_CURRENCIES)


def is_valid_code(value: object) -> bool:
    """Return True when ``value`` looks like a 3-letter currency code.

    This is a format check only: any three ASCII letters pass, whether or not
    they appear in :data:`SUPPORTED_CURRENCIES`.
    """

    if not isinstance(value, str) or not value:
        return False
    return bool(_CODE_PATTERN.fullmatch(value.upper()))


def normalise_code(value: object) -> str:
    """Strip and uppercase ``value`` after validating its format."""

    cleaned = value.strip() if isinstance(value, str) else value
    if not is_valid_code(cleaned):
        raise ValueError(f"Invalid currency code: {value!r}")
    return cleaned.upper()


def is_supported(value: object) -> bool:
    if not is_valid_code(value.strip() if isinstance(value, str) else value):
        return False
    return normalise_code(value) in SUPPORTED_CURRENCIES


__all__ = [
    "SUPPORTED_CURRENCIES",
    "is_supported",
    "is_valid_code",
    "list_supported_currencies",
    "normalise_code",
]
