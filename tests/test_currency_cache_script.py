from __future__ import annotations

import json
from pathlib import Path

import pytest

from giftcalc_fx.models import FetchFailure, FetchResult
from giftcalc_fx.scripts import currency_cache


class _FakeProvider:
    def __init__(self, result: FetchResult) -> None:
        self.result = result

    def fetch_rates(self, base_currency: str) -> FetchResult:
        return self.result


def _use_provider(monkeypatch, result: FetchResult) -> None:
    monkeypatch.setattr(
        "giftcalc_fx.ExchangeRateApiProvider", lambda: _FakeProvider(result)
    )


def test_parse_args_normalises_currencies() -> None:
    args = currency_cache.parse_args(["convert", "12.5", "usd", "eur", "--decimals", "3"])

    assert (args.amount, args.from_currency, args.to_currency, args.decimals) == (12.5, "USD", "EUR", 3)


def test_parse_args_rejects_invalid_currency() -> None:
    with pytest.raises(SystemExit):
        currency_cache.parse_args(["refresh", "dollars"])


def test_list_prints_supported_codes(capsys) -> None:
    assert currency_cache.main(["list"]) == 0

    assert capsys.readouterr().out.split()[:3] == ["USD", "EUR", "GBP"]


def test_convert_prints_json(monkeypatch, tmp_path: Path, capsys) -> None:
    _use_provider(monkeypatch, FetchResult.success({"EUR": 0.85}))
    cache = tmp_path / "cache.json"

    code = currency_cache.main(["--cache", str(cache), "convert", "100", "USD", "EUR"])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["convertedAmount"] == 85
    assert cache.exists()


def test_refresh_failure_exits_non_zero(monkeypatch, tmp_path: Path, capsys) -> None:
    _use_provider(monkeypatch, FetchResult.failed(FetchFailure.HTTP, "HTTP 500"))

    code = currency_cache.main(["--cache", str(tmp_path / "cache.json"), "refresh", "USD"])

    assert code == 1
    assert "Failed to refresh USD" in capsys.readouterr().out


def test_status_and_clear(monkeypatch, tmp_path: Path, capsys) -> None:
    _use_provider(monkeypatch, FetchResult.success({"EUR": 0.85}))
    cache = tmp_path / "cache.json"
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"cacheTTLHours": 6}))
    monkeypatch.delenv("GIFT_CALC_CACHE_TTL_HOURS", raising=False)

    currency_cache.main(["--cache", str(cache), "refresh", "USD"])
    capsys.readouterr()
    currency_cache.main(["--cache", str(cache), "--config", str(config), "status", "USD"])
    status = json.loads(capsys.readouterr().out)
    assert status["exists"] is True
    assert status["ttl"] == 6

    assert currency_cache.main(["--cache", str(cache), "clear"]) == 0
    assert not cache.exists()
