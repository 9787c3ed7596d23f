"""Inspect and maintain the gift-calc currency rate cache."""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from giftcalc_fx import CurrencyService
from giftcalc_fx.converter import DEFAULT_DECIMALS
from giftcalc_fx.utils.currencies import list_supported_currencies, normalise_code
from giftcalc_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def _currency(value: str) -> str:
    try:
        return normalise_code(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--cache", dest="cache_path", help="Rate cache JSON file")
    parser.add_argument("--config", dest="config_path", help="gift-calc config JSON file")
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert an amount between currencies")
    convert.add_argument("amount", type=float)
    convert.add_argument("from_currency", type=_currency)
    convert.add_argument("to_currency", type=_currency)
    convert.add_argument("--decimals", type=int, default=DEFAULT_DECIMALS)

    refresh = commands.add_parser("refresh", help="Refetch rates for a base currency")
    refresh.add_argument("base_currency", type=_currency)

    status = commands.add_parser("status", help="Show cache status for a base currency")
    status.add_argument("base_currency", type=_currency)

    commands.add_parser("clear", help="Delete the rate cache file")
    commands.add_parser("list", help="List supported currency codes")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "list":
        print(" ".join(list_supported_currencies()))
        return 0

    service = CurrencyService(cache_path=args.cache_path, config_path=args.config_path)
    if args.command == "convert":
        result = service.convert(args.amount, args.from_currency, args.to_currency, args.decimals)
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.success else 1
    if args.command == "refresh":
        ok = service.refresh(args.base_currency)
        print(f"Refreshed {args.base_currency} rates" if ok else f"Failed to refresh {args.base_currency} rates")
        return 0 if ok else 1
    if args.command == "status":
        print(json.dumps(service.status(args.base_currency).to_dict(), indent=2))
        return 0
    service.clear()
    print("Currency cache cleared")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
