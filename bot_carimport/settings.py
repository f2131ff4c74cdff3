from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bot_carimport.tariff.schedule import DEFAULT_CONFIG_PATH, TariffSchedule, load_schedule


class Settings(BaseSettings):
    """Application settings loaded from .env and the environment."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    BOT_TOKEN: str
    CATALOG_API_URL: str = "https://car-price-api.umugabedr.workers.dev"
    RATE_API_URL: str = "https://api.exchangerate-api.com/v4/latest/USD"
    LOCAL_CURRENCY: str = "RWF"
    DEFAULT_EXCHANGE_RATE: Decimal = Field(default=Decimal("1445"), gt=0)
    RATE_CACHE_PATH: Path = Path(".cache") / "exchange_rate.json"
    HTTP_TIMEOUT: float = Field(default=10.0, gt=0)
    TARIFF_CONFIG_PATH: Path = DEFAULT_CONFIG_PATH

    def tariff_schedule(self) -> TariffSchedule:
        return load_schedule(str(self.TARIFF_CONFIG_PATH))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
