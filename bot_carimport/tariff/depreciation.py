from __future__ import annotations

from decimal import Decimal

from .schedule import DEFAULT_SCHEDULE, TariffSchedule, depreciation_rate


def car_age(manufacturing_year: int, current_year: int) -> int:
    """Whole years since manufacture; future or current years give 0."""
    return max(0, current_year - manufacturing_year)


def depreciated_value(
    reference_price: Decimal,
    age_years: int,
    schedule: TariffSchedule = DEFAULT_SCHEDULE,
) -> Decimal:
    return reference_price * (1 - depreciation_rate(age_years, schedule))


__all__ = ["car_age", "depreciated_value"]
