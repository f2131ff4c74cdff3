"""USD -> local currency exchange rate with a one-entry daily cache.

Lookup order:

1. a rate cached today is reused as is (``cached``);
2. otherwise the live endpoint is queried and the answer cached (``live``);
3. if that fails, the last cached rate is used whatever its age (``fallback``);
4. with no cache at all, the configured default applies (``default``).
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Awaitable, Callable, Optional

import aiohttp

from bot_carimport.errors import UpstreamUnavailable
from bot_carimport.models.enums import RateSource

logger = logging.getLogger(__name__)

Clock = Callable[[], date]

_session: "aiohttp.ClientSession | None" = None


@dataclass(frozen=True)
class ExchangeRateQuote:
    rate: Decimal
    as_of: date
    source: RateSource


@dataclass(frozen=True)
class CachedRate:
    rate: Decimal
    day: date


async def _get_session() -> aiohttp.ClientSession:
    global _session
    if _session is None or _session.closed:
        _session = aiohttp.ClientSession()
    return _session


async def fetch_usd_rate(url: str, currency: str = "RWF", timeout: float = 10.0) -> Decimal:
    """Fetch the current USD rate for ``currency`` from an exchangerate-api style endpoint."""
    sess = await _get_session()
    try:
        async with sess.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
            resp.raise_for_status()
            data = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
        logger.warning("Exchange rate request failed: %s", exc)
        raise UpstreamUnavailable(f"Exchange rate service unavailable: {exc}") from exc

    rates = data.get("rates") if isinstance(data, dict) else None
    raw = rates.get(currency.upper()) if isinstance(rates, dict) else None
    try:
        rate = Decimal(str(raw)) if raw is not None else None
    except InvalidOperation:
        rate = None
    if rate is None or not rate.is_finite() or rate <= 0:
        logger.warning("Exchange rate response has no usable %s rate", currency)
        raise UpstreamUnavailable(f"{currency} rate not found in response")
    return rate


async def close_rates_session() -> None:
    global _session
    if _session is not None:
        try:
            await _session.close()
        finally:
            _session = None


class RateCache:
    """Single date-keyed rate persisted as JSON; each store overwrites it."""

    def __init__(self, path: Optional[Path] = None, clock: Clock = date.today) -> None:
        self.path = Path(path) if path is not None else None
        self.clock = clock
        self._entry: Optional[CachedRate] = None
        self._loaded = False

    def _load(self) -> Optional[CachedRate]:
        if self.path is None or not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            entry = CachedRate(
                rate=Decimal(str(data["rate"])),
                day=date.fromisoformat(data["date"]),
            )
        except (OSError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.warning("Ignoring unreadable rate cache %s: %s", self.path, exc)
            return None
        if not entry.rate.is_finite() or entry.rate <= 0:
            logger.warning("Ignoring rate cache %s with unusable rate %s", self.path, entry.rate)
            return None
        return entry

    def get(self) -> Optional[CachedRate]:
        if not self._loaded:
            self._entry = self._load()
            self._loaded = True
        return self._entry

    def is_fresh(self, entry: CachedRate) -> bool:
        return entry.day == self.clock()

    def store(self, rate: Decimal) -> CachedRate:
        entry = CachedRate(rate=rate, day=self.clock())
        self._entry = entry
        self._loaded = True
        if self.path is not None:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(
                    json.dumps({"date": entry.day.isoformat(), "rate": str(rate)}),
                    encoding="utf-8",
                )
            except OSError as exc:
                logger.warning("Could not persist rate cache %s: %s", self.path, exc)
        return entry


class ExchangeRateProvider:
    def __init__(
        self,
        fetch: Callable[[], Awaitable[Decimal]],
        cache: RateCache,
        default_rate: Decimal,
    ) -> None:
        self.fetch = fetch
        self.cache = cache
        self.default_rate = Decimal(str(default_rate))

    async def current_rate(self) -> ExchangeRateQuote:
        cached = self.cache.get()
        if cached is not None and self.cache.is_fresh(cached):
            return ExchangeRateQuote(cached.rate, cached.day, RateSource.CACHED)

        try:
            rate = await self.fetch()
        except UpstreamUnavailable:
            if cached is not None:
                logger.info("Using cached exchange rate from %s", cached.day)
                return ExchangeRateQuote(cached.rate, cached.day, RateSource.FALLBACK)
            logger.info("No cached exchange rate, using default %s", self.default_rate)
            return ExchangeRateQuote(self.default_rate, self.cache.clock(), RateSource.DEFAULT)

        entry = self.cache.store(rate)
        logger.info("Fetched live exchange rate %s", rate)
        return ExchangeRateQuote(entry.rate, entry.day, RateSource.LIVE)


__all__ = [
    "ExchangeRateQuote",
    "CachedRate",
    "RateCache",
    "ExchangeRateProvider",
    "fetch_usd_rate",
    "close_rates_session",
]
