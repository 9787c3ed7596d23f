"""End-to-end tests for the package facade."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import requests

import giftcalc_fx
from giftcalc_fx import CurrencyService, MemoryRateStore, __version__
from giftcalc_fx.config import TTL_ENV_VAR
from giftcalc_fx.providers import ExchangeRateApiProvider


class _FakeResponse:
    def __init__(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        return self._payload


class _FakeSession:
    def __init__(self, *responses: _FakeResponse) -> None:
        self.headers: dict[str, str] = {}
        self.responses = list(responses)
        self.urls: list[str] = []

    def get(self, url: str, timeout: Any = None) -> _FakeResponse:
        self.urls.append(url)
        return self.responses.pop(0)


@pytest.fixture
def home(monkeypatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(TTL_ENV_VAR, raising=False)
    return tmp_path


def _patch_session(monkeypatch, session: _FakeSession) -> None:
    monkeypatch.setattr(
        "giftcalc_fx.providers.exchange_rate_api.requests.Session", lambda: session
    )


def _cache_file(home: Path) -> Path:
    return home / ".config" / "gift-calc" / ".currency-cache.json"


def test_service_exposes_version() -> None:
    assert CurrencyService.__version__ == __version__


def test_service_rejects_store_and_cache_path() -> None:
    with pytest.raises(ValueError):
        CurrencyService(store=MemoryRateStore(), cache_path="cache.json")


def test_end_to_end_conversion_caches_rates(monkeypatch, home: Path) -> None:
    session = _FakeSession(_FakeResponse(200, {"result": "success", "rates": {"EUR": 0.85}}))
    _patch_session(monkeypatch, session)

    first = giftcalc_fx.convert(100, "USD", "EUR", 2)
    second = giftcalc_fx.convert(100, "USD", "EUR", 2)

    assert (first.success, first.converted_amount, first.rate, first.cached) == (True, 85, 0.85, False)
    assert (second.success, second.converted_amount, second.rate, second.cached) == (True, 85, 0.85, True)
    assert session.urls == ["https://open.er-api.com/v6/latest/USD"]
    cached = json.loads(_cache_file(home).read_text())
    assert cached["USD"]["rates"] == {"EUR": 0.85}


def test_end_to_end_http_failure_creates_no_cache(monkeypatch, home: Path) -> None:
    _patch_session(monkeypatch, _FakeSession(_FakeResponse(404)))

    result = giftcalc_fx.convert(100, "USD", "EUR", 2)

    assert result.success is False
    assert "Unable to get conversion rate" in result.error
    assert not _cache_file(home).exists()


def test_end_to_end_success_without_rates_table(monkeypatch, home: Path) -> None:
    _patch_session(monkeypatch, _FakeSession(_FakeResponse(200, {"result": "success"})))

    result = giftcalc_fx.convert(100, "USD", "EUR", 2)

    assert result.error == "Unable to get conversion rate from USD to EUR"
    assert not _cache_file(home).exists()


def test_end_to_end_network_error(monkeypatch, home: Path) -> None:
    class _BrokenSession(_FakeSession):
        def get(self, url: str, timeout: Any = None) -> _FakeResponse:
            raise requests.ConnectionError("Network error")

    _patch_session(monkeypatch, _BrokenSession())

    result = giftcalc_fx.convert(100, "USD", "EUR", 2)

    assert result.error == "Conversion failed: Network error"


def test_config_ttl_is_honoured(monkeypatch, home: Path) -> None:
    config_dir = home / ".config" / "gift-calc"
    config_dir.mkdir(parents=True)
    (config_dir / ".config.json").write_text(json.dumps({"cacheTTLHours": 72}))

    assert CurrencyService(provider=ExchangeRateApiProvider(session=_FakeSession())).ttl_hours() == 72
    monkeypatch.setenv(TTL_ENV_VAR, "200")
    assert giftcalc_fx.status("USD").ttl == 72
    (config_dir / ".config.json").unlink()
    assert giftcalc_fx.status("USD").ttl == 24


def test_expired_cache_file_is_refetched(monkeypatch, home: Path) -> None:
    cache = _cache_file(home)
    cache.parent.mkdir(parents=True)
    cache.write_text(json.dumps({"USD": {"rates": {"EUR": 0.85}, "timestamp": 1}}))
    _patch_session(
        monkeypatch, _FakeSession(_FakeResponse(200, {"result": "success", "rates": {"EUR": 0.90}}))
    )

    result = giftcalc_fx.convert(100, "USD", "EUR", 2)

    assert result.cached is False
    assert result.converted_amount == 90


def test_format_output_module_function(monkeypatch, home: Path) -> None:
    _patch_session(
        monkeypatch, _FakeSession(_FakeResponse(200, {"result": "success", "rates": {"EUR": 0.85}}))
    )

    assert giftcalc_fx.format_output(100, "USD", "EUR", "Bob") == "100 USD (85 EUR) for Bob"


def test_refresh_status_and_clear(monkeypatch, home: Path) -> None:
    _patch_session(
        monkeypatch,
        _FakeSession(
            _FakeResponse(200, {"result": "success", "rates": {"EUR": 0.85}}),
            _FakeResponse(503),
        ),
    )

    assert giftcalc_fx.refresh("USD") is True
    status = giftcalc_fx.status("USD")
    assert status.exists is True
    assert status.expired is False
    assert status.age == 0

    assert giftcalc_fx.refresh("USD") is False
    assert giftcalc_fx.status("USD").exists is True

    giftcalc_fx.clear()
    assert not _cache_file(home).exists()
    assert giftcalc_fx.status("USD").exists is False
    giftcalc_fx.clear()
