"""Tariff calculation utilities."""

from .engine import TaxBreakdown, TaxInput, compute_breakdown, validate_tax_input
from .schedule import (
    DEFAULT_SCHEDULE,
    TariffSchedule,
    depreciation_rate,
    fuel_excise_duty_rate,
    hybrid_excise_duty_rate,
    load_schedule,
    registration_fee_local,
)
from .converter import to_local, to_usd

__all__ = [
    "TaxInput",
    "TaxBreakdown",
    "compute_breakdown",
    "validate_tax_input",
    "TariffSchedule",
    "DEFAULT_SCHEDULE",
    "load_schedule",
    "depreciation_rate",
    "fuel_excise_duty_rate",
    "hybrid_excise_duty_rate",
    "registration_fee_local",
    "to_local",
    "to_usd",
]
