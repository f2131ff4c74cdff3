"""Convenience exports for the service layer."""

from .catalog import CatalogClient
from .rates import (
    ExchangeRateProvider,
    ExchangeRateQuote,
    RateCache,
    close_rates_session,
    fetch_usd_rate,
)

__all__ = [
    "CatalogClient",
    "ExchangeRateProvider",
    "ExchangeRateQuote",
    "RateCache",
    "close_rates_session",
    "fetch_usd_rate",
]
