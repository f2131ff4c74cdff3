from decimal import Decimal
from pathlib import Path
import sys

import pytest
from pydantic import ValidationError as SettingsError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.bot import build_dispatcher
from bot_carimport.services import CatalogClient, ExchangeRateProvider
from bot_carimport.settings import Settings
from bot_carimport.tariff import DEFAULT_SCHEDULE


def test_defaults(monkeypatch):
    for name in ("LOCAL_CURRENCY", "DEFAULT_EXCHANGE_RATE", "TARIFF_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None, BOT_TOKEN="123:abc")
    assert settings.LOCAL_CURRENCY == "RWF"
    assert settings.DEFAULT_EXCHANGE_RATE == Decimal("1445")
    assert settings.tariff_schedule() == DEFAULT_SCHEDULE


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("DEFAULT_EXCHANGE_RATE", "1500.5")
    monkeypatch.setenv("HTTP_TIMEOUT", "3")
    settings = Settings(_env_file=None)
    assert settings.DEFAULT_EXCHANGE_RATE == Decimal("1500.5")
    assert settings.HTTP_TIMEOUT == 3.0


def test_default_rate_must_be_positive(monkeypatch):
    monkeypatch.setenv("DEFAULT_EXCHANGE_RATE", "0")
    with pytest.raises(SettingsError):
        Settings(_env_file=None, BOT_TOKEN="123:abc")


def test_dispatcher_carries_services(tmp_path):
    settings = Settings(
        _env_file=None,
        BOT_TOKEN="123:abc",
        LOCAL_CURRENCY="RWF",
        RATE_CACHE_PATH=tmp_path / "rate.json",
    )
    dp = build_dispatcher(settings)
    assert isinstance(dp["catalog"], CatalogClient)
    assert isinstance(dp["rate_provider"], ExchangeRateProvider)
    assert dp["rate_provider"].cache.path == tmp_path / "rate.json"
    assert dp["schedule"] == DEFAULT_SCHEDULE
    assert dp["local_currency"] == "RWF"
