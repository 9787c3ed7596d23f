"""Human-readable rendering of single and dual currency amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from giftcalc_fx.converter import DEFAULT_DECIMALS

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from giftcalc_fx.converter import CurrencyConverter

CONVERSION_UNAVAILABLE = "conversion unavailable"


def _fixed(amount: float, decimals: int) -> str:
    quantum = Decimal(1).scaleb(-decimals)
    return str(Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_amount(amount: float, decimals: int | None = DEFAULT_DECIMALS) -> str:
    """Render ``amount`` following the gift-calc display rule.

    With the default two decimals a whole amount prints bare (``100``) and
    anything else prints with both digits (``100.50``). Any other ``decimals``
    value always prints that many digits, so ``100`` with three decimals is
    ``100.000``.
    """

    if decimals is None:
        return str(int(amount)) if float(amount).is_integer() else repr(float(amount))
    if decimals == DEFAULT_DECIMALS:
        rendered = _fixed(amount, DEFAULT_DECIMALS)
        if Decimal(rendered) == Decimal(rendered).to_integral_value():
            return str(Decimal(rendered).to_integral_value())
        return rendered
    return _fixed(amount, decimals)


def format_single(amount: float, currency: str, decimals: int | None = DEFAULT_DECIMALS) -> str:
    return f"{format_amount(amount, decimals)} {currency}"


def format_output(
    amount: float,
    base_currency: str,
    display_currency: str | None = None,
    recipient_name: str | None = None,
    decimals: int | None = DEFAULT_DECIMALS,
    *,
    converter: "CurrencyConverter | None" = None,
) -> str:
    """Render ``amount`` in the base currency, plus the display currency if it differs.

    ``converter`` defaults to the package-wide service so CLI callers do not
    need to wire one up.
    """

    output = format_single(amount, base_currency, decimals)
    if display_currency and display_currency != base_currency:
        if converter is None:
            from giftcalc_fx import default_service

            converter = default_service().converter
        conversion = converter.convert(amount, base_currency, display_currency, decimals)
        if conversion.success:
            converted = format_single(conversion.converted_amount, display_currency, decimals)
            output = f"{output} ({converted})"
        else:
            output = f"{output} ({CONVERSION_UNAVAILABLE})"

    if recipient_name:
        output = f"{output} for {recipient_name}"
    return output


__all__ = ["CONVERSION_UNAVAILABLE", "format_amount", "format_output", "format_single"]
