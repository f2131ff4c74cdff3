"""Duty, excise, withholding, VAT and levy lines for one CIF value.

Every line is proportional to the CIF value. Which lines apply depends only
on the fuel type; excise additionally requires a Sedan or SUV body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from bot_carimport.errors import ValidationError
from bot_carimport.models.enums import FuelType, UtilityType
from .schedule import (
    DEFAULT_SCHEDULE,
    TariffSchedule,
    fuel_excise_duty_rate,
    hybrid_excise_duty_rate,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

CUSTOMS_EXEMPT_LABEL = "0% (Exempt)"
EXCISE_NA_LABEL = "0% (N/A)"


def _pct(rate: Decimal) -> str:
    return f"{rate * 100:.0f}%"


@dataclass(frozen=True)
class DutyLines:
    infrastructure_levy: Decimal
    customs_duty: Decimal
    customs_duty_rate_label: str
    excise_duty: Decimal
    excise_duty_rate_label: str
    withholding_tax: Decimal
    vat: Decimal


def infrastructure_levy(cif_value: Decimal, schedule: TariffSchedule = DEFAULT_SCHEDULE) -> Decimal:
    """Levy charged on every import regardless of fuel type."""
    return cif_value * schedule.infrastructure_levy_rate


def calc_duties(
    cif_value: Decimal,
    fuel_type: FuelType,
    utility_type: Optional[UtilityType],
    engine_cc: Optional[int],
    age_years: int,
    schedule: TariffSchedule = DEFAULT_SCHEDULE,
) -> DutyLines:
    levy = infrastructure_levy(cif_value, schedule)
    customs = excise = withholding = vat = ZERO
    customs_label = CUSTOMS_EXEMPT_LABEL
    excise_label = EXCISE_NA_LABEL
    excisable = utility_type in schedule.excise_utility_types

    if fuel_type is FuelType.FUEL:
        customs = cif_value * schedule.customs_duty_rate
        customs_label = _pct(schedule.customs_duty_rate)
        if excisable:
            if engine_cc is None:
                raise ValidationError("Engine capacity is required for fuel vehicles")
            rate = fuel_excise_duty_rate(engine_cc, schedule)
            excise = cif_value * rate
            excise_label = f"{_pct(rate)} (by CC)"
        vat = (cif_value + customs + excise + levy) * schedule.vat_rate
    elif fuel_type is FuelType.HYBRID:
        if excisable:
            rate = hybrid_excise_duty_rate(age_years, schedule)
            excise = cif_value * rate
            excise_label = f"{_pct(rate)} (by Age)"
        withholding = cif_value * schedule.withholding_tax_rate
        vat = (cif_value + customs + excise + levy) * schedule.vat_rate
    elif fuel_type is FuelType.ELECTRIC:
        pass
    else:
        raise ValidationError(f"Unsupported fuel type: {fuel_type!r}")

    logger.debug(
        "duties for %s: customs=%s excise=%s withholding=%s vat=%s levy=%s",
        fuel_type.value, customs, excise, withholding, vat, levy,
    )
    return DutyLines(
        infrastructure_levy=levy,
        customs_duty=customs,
        customs_duty_rate_label=customs_label,
        excise_duty=excise,
        excise_duty_rate_label=excise_label,
        withholding_tax=withholding,
        vat=vat,
    )


__all__ = ["DutyLines", "infrastructure_levy", "calc_duties"]
