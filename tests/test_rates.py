import asyncio
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
import sys

import aiohttp
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.errors import UpstreamUnavailable
from bot_carimport.models import RateSource
from bot_carimport.services import rates

TODAY = date(2025, 3, 10)
YESTERDAY = date(2025, 3, 9)


class Clock:
    def __init__(self, day):
        self.day = day

    def __call__(self):
        return self.day


def make_fetch(result=None, error=None):
    calls = []

    async def fetch():
        calls.append(1)
        if error is not None:
            raise error
        return result

    return fetch, calls


def test_fresh_cache_skips_network(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(json.dumps({"date": TODAY.isoformat(), "rate": "1400.5"}))
    fetch, calls = make_fetch(Decimal("1500"))
    provider = rates.ExchangeRateProvider(fetch, rates.RateCache(path, Clock(TODAY)), Decimal("1445"))

    quote = asyncio.run(provider.current_rate())
    assert quote == rates.ExchangeRateQuote(Decimal("1400.5"), TODAY, RateSource.CACHED)
    assert calls == []


def test_stale_cache_refreshes_and_overwrites(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(json.dumps({"date": YESTERDAY.isoformat(), "rate": "1400"}))
    fetch, calls = make_fetch(Decimal("1450.25"))
    cache = rates.RateCache(path, Clock(TODAY))
    provider = rates.ExchangeRateProvider(fetch, cache, Decimal("1445"))

    quote = asyncio.run(provider.current_rate())
    assert quote.source is RateSource.LIVE
    assert quote.rate == Decimal("1450.25")
    assert json.loads(path.read_text()) == {"date": "2025-03-10", "rate": "1450.25"}

    # second call the same day is served from cache
    again = asyncio.run(provider.current_rate())
    assert again.source is RateSource.CACHED
    assert len(calls) == 1


def test_fetch_failure_uses_old_cache(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(json.dumps({"date": "2024-01-01", "rate": "1300"}))
    fetch, _ = make_fetch(error=UpstreamUnavailable("down"))
    provider = rates.ExchangeRateProvider(fetch, rates.RateCache(path, Clock(TODAY)), Decimal("1445"))

    quote = asyncio.run(provider.current_rate())
    assert quote == rates.ExchangeRateQuote(Decimal("1300"), date(2024, 1, 1), RateSource.FALLBACK)


def test_fetch_failure_without_cache_uses_default(tmp_path):
    fetch, _ = make_fetch(error=UpstreamUnavailable("down"))
    provider = rates.ExchangeRateProvider(
        fetch, rates.RateCache(tmp_path / "missing.json", Clock(TODAY)), Decimal("1445")
    )
    quote = asyncio.run(provider.current_rate())
    assert quote == rates.ExchangeRateQuote(Decimal("1445"), TODAY, RateSource.DEFAULT)


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"date": "2025-03-10"}',
        '{"date": "2025-03-10", "rate": "0"}',
        '{"date": "2025-03-10", "rate": "-1400"}',
        '{"date": "2025-03-10", "rate": "NaN"}',
    ],
)
def test_corrupt_cache_is_ignored(tmp_path, content):
    path = tmp_path / "rate.json"
    path.write_text(content)
    cache = rates.RateCache(path, Clock(TODAY))
    assert cache.get() is None


def test_unusable_cached_rate_falls_back_to_default(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(json.dumps({"date": "2025-04-01", "rate": "0"}))
    fetch, _ = make_fetch(error=UpstreamUnavailable("down"))
    provider = rates.ExchangeRateProvider(fetch, rates.RateCache(path, Clock(TODAY)), Decimal("1445"))

    quote = asyncio.run(provider.current_rate())
    assert quote == rates.ExchangeRateQuote(Decimal("1445"), TODAY, RateSource.DEFAULT)


def test_cache_without_path_is_memory_only():
    cache = rates.RateCache(None, Clock(TODAY))
    assert cache.get() is None
    entry = cache.store(Decimal("1444"))
    assert cache.get() == entry
    assert cache.is_fresh(entry)


class FakeResponse:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, *exc):
        return False

    def raise_for_status(self):
        pass

    async def json(self, content_type=None):
        return self.payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.urls = []

    def get(self, url, **kwargs):
        self.urls.append(url)
        return self.response


def _patch_session(monkeypatch, response):
    session = FakeSession(response)

    async def fake_get_session():
        return session

    monkeypatch.setattr(rates, "_get_session", fake_get_session)
    return session


def test_fetch_usd_rate_reads_currency(monkeypatch):
    session = _patch_session(monkeypatch, FakeResponse({"rates": {"RWF": 1447.3, "EUR": 0.9}}))
    rate = asyncio.run(rates.fetch_usd_rate("https://rates.example/USD", "rwf"))
    assert rate == Decimal("1447.3")
    assert session.urls == ["https://rates.example/USD"]


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({"rates": {"EUR": 0.9}}),
        FakeResponse({"rates": {"RWF": 0}}),
        FakeResponse({"unexpected": True}),
        FakeResponse({"rates": ["RWF"]}),
        FakeResponse({"rates": "RWF=1445"}),
        FakeResponse({"rates": {"RWF": {"value": 1445}}}),
        FakeResponse(["RWF", 1445]),
        FakeResponse(error=aiohttp.ClientError("boom")),
        FakeResponse(error=asyncio.TimeoutError()),
    ],
)
def test_fetch_usd_rate_failures(monkeypatch, response):
    _patch_session(monkeypatch, response)
    with pytest.raises(UpstreamUnavailable):
        asyncio.run(rates.fetch_usd_rate("https://rates.example/USD"))
