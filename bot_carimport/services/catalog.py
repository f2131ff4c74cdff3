"""Client for the vehicle price catalog (maker/year/model/spec -> USD price)."""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import aiohttp

from bot_carimport.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


def _clean_options(values: Any) -> List[str]:
    if not isinstance(values, list):
        raise UpstreamUnavailable("Catalog returned an unexpected payload")
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


def _year_key(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return -1


class CatalogClient:
    """Async catalog client. One ``aiohttp`` session is shared per instance."""

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        sess = await self._get_session()
        url = f"{self.base_url}{path}"
        try:
            async with sess.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as resp:
                resp.raise_for_status()
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.warning("Catalog request %s failed: %s", path, exc)
            raise UpstreamUnavailable(f"Catalog unavailable: {exc}") from exc

    async def list_makers(self) -> List[str]:
        return sorted(_clean_options(await self._get_json("/brands")), key=str.lower)

    async def list_years(self, maker: str) -> List[str]:
        years = _clean_options(await self._get_json("/years", {"brand": maker}))
        return sorted(years, key=_year_key, reverse=True)

    async def list_models(self, maker: str, year: int) -> List[str]:
        models = _clean_options(await self._get_json("/models", {"brand": maker, "year": year}))
        return sorted(models, key=str.lower)

    async def list_specs(self, maker: str, year: int, model: str) -> List[str]:
        specs = _clean_options(
            await self._get_json("/specs", {"brand": maker, "year": year, "model": model})
        )
        return sorted(specs, key=str.lower)

    async def resolve_price(self, maker: str, year: int, model: str, spec: str) -> Optional[Decimal]:
        """Return the as-new USD price, or ``None`` if the catalog has none."""
        data = await self._get_json(
            "/price",
            {"brand": maker, "year": year, "model": model, "spec": spec},
        )
        raw = data.get("price") if isinstance(data, dict) else None
        if raw is None:
            return None
        try:
            price = Decimal(str(raw))
        except InvalidOperation as exc:
            raise UpstreamUnavailable(f"Catalog returned an invalid price: {raw!r}") from exc
        if not price.is_finite() or price < 0:
            raise UpstreamUnavailable(f"Catalog returned an invalid price: {raw!r}")
        return price

    async def close(self) -> None:
        if self._session is not None:
            try:
                await self._session.close()
            finally:
                self._session = None


__all__ = ["CatalogClient"]
