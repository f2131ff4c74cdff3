"""Import tax engine for passenger vehicles.

Turns a validated :class:`TaxInput` into a :class:`TaxBreakdown`. The
computation is pure: no I/O, no shared state, and the reference price and
exchange rate are passed in already resolved. Stages run in a fixed order:

    age -> depreciation -> CIF -> levy and duty lines -> registration fee
    -> USD totals -> local-currency totals
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from bot_carimport.errors import ValidationError
from bot_carimport.models.enums import FuelType, UtilityType
from .converter import to_local, to_usd
from .depreciation import car_age, depreciated_value
from .duties import calc_duties
from .schedule import DEFAULT_SCHEDULE, TariffSchedule, depreciation_rate, registration_fee_local

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class TaxInput:
    reference_price: Number
    manufacturing_year: int
    fuel_type: Union[FuelType, str]
    exchange_rate: Number
    utility_type: Union[UtilityType, str, None] = None
    engine_capacity_cc: Optional[int] = None
    freight_cost_usd: Number = Decimal("0")
    insurance_cost_usd: Number = Decimal("0")


@dataclass(frozen=True)
class TaxBreakdown:
    reference_price_usd: Decimal
    fuel_type: FuelType
    utility_type: Optional[UtilityType]
    engine_capacity_cc: Optional[int]
    exchange_rate: Decimal
    car_age: int
    depreciation_rate: Decimal
    depreciated_value_usd: Decimal
    cif_value_usd: Decimal
    infrastructure_levy_usd: Decimal
    customs_duty_usd: Decimal
    customs_duty_rate_label: str
    excise_duty_usd: Decimal
    excise_duty_rate_label: str
    withholding_tax_usd: Decimal
    vat_usd: Decimal
    registration_fee_local: Decimal
    registration_fee_usd: Decimal
    total_tax_usd: Decimal
    total_tax_local: Decimal
    total_landed_cost_usd: Decimal
    total_landed_cost_local: Decimal

    @property
    def cif_value_local(self) -> Decimal:
        return to_local(self.cif_value_usd, self.exchange_rate)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _to_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{name} must be a number")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{name} must be a number") from exc
    if not result.is_finite():
        raise ValidationError(f"{name} must be finite")
    return result


def _to_int(value: Any, name: str) -> int:
    result = _to_decimal(value, name)
    if result != result.to_integral_value():
        raise ValidationError(f"{name} must be a whole number")
    return int(result)


def _non_negative(value: Any, name: str) -> Decimal:
    result = _to_decimal(value, name)
    if result < 0:
        raise ValidationError(f"{name} cannot be negative")
    return result


def validate_tax_input(tax_input: TaxInput) -> TaxInput:
    """Return a normalized copy of ``tax_input`` or raise ``ValidationError``.

    For electric vehicles the utility type and engine capacity are dropped so
    that whatever the caller supplied cannot reach the computation.
    """
    fuel_type = FuelType.from_str(tax_input.fuel_type)
    exchange_rate = _to_decimal(tax_input.exchange_rate, "Exchange rate")
    if exchange_rate <= 0:
        raise ValidationError("Exchange rate must be positive")

    year = _to_int(tax_input.manufacturing_year, "Manufacturing year")

    utility_type: Optional[UtilityType] = None
    engine_cc: Optional[int] = None
    if fuel_type is not FuelType.ELECTRIC:
        if tax_input.utility_type in (None, ""):
            raise ValidationError(f"Utility type is required for {fuel_type.value} vehicles")
        utility_type = UtilityType.from_str(tax_input.utility_type)
        if tax_input.engine_capacity_cc is None or isinstance(tax_input.engine_capacity_cc, bool):
            raise ValidationError(f"Engine capacity is required for {fuel_type.value} vehicles")
        engine_cc = _to_int(tax_input.engine_capacity_cc, "Engine capacity")
        if engine_cc <= 0:
            raise ValidationError("Engine capacity must be positive")

    return replace(
        tax_input,
        reference_price=_non_negative(tax_input.reference_price, "Reference price"),
        manufacturing_year=year,
        fuel_type=fuel_type,
        exchange_rate=exchange_rate,
        utility_type=utility_type,
        engine_capacity_cc=engine_cc,
        freight_cost_usd=_non_negative(tax_input.freight_cost_usd, "Freight cost"),
        insurance_cost_usd=_non_negative(tax_input.insurance_cost_usd, "Insurance cost"),
    )


def compute_breakdown(
    tax_input: TaxInput,
    *,
    current_year: Optional[int] = None,
    schedule: TariffSchedule = DEFAULT_SCHEDULE,
) -> TaxBreakdown:
    """Compute the full tax breakdown for one vehicle.

    Parameters
    ----------
    tax_input:
        Calculation request. It is validated here even though the caller
        checks individual fields, because the duty branches have no safe
        default for an unknown fuel type.
    current_year:
        Year the age is measured against. Defaults to today's year; pass it
        explicitly for reproducible results.
    schedule:
        Tariff schedule, :data:`DEFAULT_SCHEDULE` unless overridden.

    Raises
    ------
    ValidationError
        If the input is malformed or contradictory. No partial result is
        produced.
    """
    inp = validate_tax_input(tax_input)
    if current_year is None:
        current_year = date.today().year

    age = car_age(inp.manufacturing_year, current_year)
    dep_rate = depreciation_rate(age, schedule)
    dep_value = depreciated_value(inp.reference_price, age, schedule)
    cif = dep_value + inp.freight_cost_usd + inp.insurance_cost_usd

    lines = calc_duties(cif, inp.fuel_type, inp.utility_type, inp.engine_capacity_cc, age, schedule)

    reg_fee_local = registration_fee_local(inp.engine_capacity_cc, inp.fuel_type, schedule)
    reg_fee_usd = to_usd(reg_fee_local, inp.exchange_rate)

    total_tax = (
        lines.customs_duty
        + lines.excise_duty
        + lines.vat
        + lines.withholding_tax
        + lines.infrastructure_levy
        + reg_fee_usd
    )
    landed = cif + total_tax

    logger.debug(
        "breakdown: fuel=%s age=%s cif=%s total_tax=%s landed=%s",
        inp.fuel_type.value, age, cif, total_tax, landed,
    )
    return TaxBreakdown(
        reference_price_usd=inp.reference_price,
        fuel_type=inp.fuel_type,
        utility_type=inp.utility_type,
        engine_capacity_cc=inp.engine_capacity_cc,
        exchange_rate=inp.exchange_rate,
        car_age=age,
        depreciation_rate=dep_rate,
        depreciated_value_usd=dep_value,
        cif_value_usd=cif,
        infrastructure_levy_usd=lines.infrastructure_levy,
        customs_duty_usd=lines.customs_duty,
        customs_duty_rate_label=lines.customs_duty_rate_label,
        excise_duty_usd=lines.excise_duty,
        excise_duty_rate_label=lines.excise_duty_rate_label,
        withholding_tax_usd=lines.withholding_tax,
        vat_usd=lines.vat,
        registration_fee_local=reg_fee_local,
        registration_fee_usd=reg_fee_usd,
        total_tax_usd=total_tax,
        total_tax_local=to_local(total_tax, inp.exchange_rate),
        total_landed_cost_usd=landed,
        total_landed_cost_local=to_local(landed, inp.exchange_rate),
    )


__all__ = ["TaxInput", "TaxBreakdown", "validate_tax_input", "compute_breakdown"]
