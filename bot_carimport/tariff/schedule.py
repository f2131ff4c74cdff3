"""Tariff schedule and the step-function rate tables built on it.

Band tables are ordered ``(upper_bound, value)`` pairs. Upper bounds are
inclusive and the last band is open-ended (``None``), so every lookup is a
total function: the first band whose bound is not exceeded wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple

import yaml

from bot_carimport.errors import ValidationError
from bot_carimport.models.enums import FuelType, UtilityType

Band = Tuple[Optional[int], Decimal]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "tariff.yaml"


def _bands(*pairs: Tuple[Optional[int], str]) -> Tuple[Band, ...]:
    return tuple((upper, Decimal(value)) for upper, value in pairs)


@dataclass(frozen=True)
class TariffSchedule:
    depreciation: Tuple[Band, ...]
    fuel_excise: Tuple[Band, ...]
    hybrid_excise: Tuple[Band, ...]
    registration_fee: Tuple[Band, ...]
    electric_registration_fee: Decimal
    customs_duty_rate: Decimal
    withholding_tax_rate: Decimal
    vat_rate: Decimal
    infrastructure_levy_rate: Decimal
    excise_utility_types: FrozenSet[UtilityType] = field(
        default_factory=lambda: frozenset({UtilityType.SEDAN, UtilityType.SUV})
    )


DEFAULT_SCHEDULE = TariffSchedule(
    depreciation=_bands(
        (1, "0.00"),
        (2, "0.20"),
        (3, "0.30"),
        (4, "0.40"),
        (5, "0.50"),
        (6, "0.55"),
        (7, "0.60"),
        (8, "0.65"),
        (9, "0.70"),
        (10, "0.75"),
        (None, "0.80"),
    ),
    fuel_excise=_bands((1500, "0.05"), (2500, "0.10"), (None, "0.15")),
    hybrid_excise=_bands((3, "0.05"), (7, "0.10"), (None, "0.15")),
    registration_fee=_bands(
        (1000, "75000"),
        (1500, "285000"),
        (3000, "445000"),
        (4500, "748000"),
        (None, "997000"),
    ),
    electric_registration_fee=Decimal("285000"),
    customs_duty_rate=Decimal("0.25"),
    withholding_tax_rate=Decimal("0.05"),
    vat_rate=Decimal("0.18"),
    infrastructure_levy_rate=Decimal("0.015"),
)


def _pick_band(value: int, table: Tuple[Band, ...]) -> Decimal:
    for upper, rate in table:
        if upper is None or value <= upper:
            return rate
    return table[-1][1]


def depreciation_rate(age_years: int, schedule: TariffSchedule = DEFAULT_SCHEDULE) -> Decimal:
    """Fraction of the as-new value lost at ``age_years`` (0.00 to 0.80)."""
    return _pick_band(age_years, schedule.depreciation)


def fuel_excise_duty_rate(engine_cc: int, schedule: TariffSchedule = DEFAULT_SCHEDULE) -> Decimal:
    return _pick_band(engine_cc, schedule.fuel_excise)


def hybrid_excise_duty_rate(age_years: int, schedule: TariffSchedule = DEFAULT_SCHEDULE) -> Decimal:
    return _pick_band(age_years, schedule.hybrid_excise)


def registration_fee_local(
    engine_cc: Optional[int],
    fuel_type: FuelType,
    schedule: TariffSchedule = DEFAULT_SCHEDULE,
) -> Decimal:
    """Flat registration fee in local currency.

    Electric vehicles pay a single fee; the engine capacity is not consulted.
    """
    if FuelType.from_str(fuel_type) is FuelType.ELECTRIC:
        return schedule.electric_registration_fee
    if engine_cc is None:
        raise ValidationError("engine_cc is required for non-electric vehicles")
    return _pick_band(engine_cc, schedule.registration_fee)


# ---------------------------------------------------------------------------
# YAML loading


def _parse_bands(raw: Any, name: str) -> Tuple[Band, ...]:
    if not isinstance(raw, list) or not raw:
        raise ValueError(f"Tariff table '{name}' must be a non-empty list")
    bands: list[Band] = []
    previous: Optional[int] = None
    for i, row in enumerate(raw):
        upper = row.get("max")
        if upper is None and i != len(raw) - 1:
            raise ValueError(f"Tariff table '{name}': only the last band may be open-ended")
        if upper is not None:
            upper = int(upper)
            if previous is not None and upper <= previous:
                raise ValueError(f"Tariff table '{name}': bands must ascend")
            previous = upper
        bands.append((upper, Decimal(str(row["value"]))))
    if bands[-1][0] is not None:
        raise ValueError(f"Tariff table '{name}' must end with an open-ended band")
    return tuple(bands)


def schedule_from_dict(cfg: Dict[str, Any]) -> TariffSchedule:
    tables = cfg.get("tables") or {}
    rates = cfg.get("rates") or {}
    try:
        return TariffSchedule(
            depreciation=_parse_bands(tables.get("depreciation"), "depreciation"),
            fuel_excise=_parse_bands(tables.get("fuel_excise"), "fuel_excise"),
            hybrid_excise=_parse_bands(tables.get("hybrid_excise"), "hybrid_excise"),
            registration_fee=_parse_bands(tables.get("registration_fee"), "registration_fee"),
            electric_registration_fee=Decimal(str(cfg["electric_registration_fee"])),
            customs_duty_rate=Decimal(str(rates["customs_duty"])),
            withholding_tax_rate=Decimal(str(rates["withholding_tax"])),
            vat_rate=Decimal(str(rates["vat"])),
            infrastructure_levy_rate=Decimal(str(rates["infrastructure_levy"])),
            excise_utility_types=frozenset(
                UtilityType.from_str(u) for u in cfg.get("excise_utility_types", ["Sedan", "SUV"])
            ),
        )
    except KeyError as exc:
        raise ValueError(f"Missing tariff setting: {exc}") from exc


@lru_cache(maxsize=4)
def load_schedule(path: str = str(DEFAULT_CONFIG_PATH)) -> TariffSchedule:
    """Load a schedule from YAML. The result is cached per path."""
    with open(path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh) or {}
    return schedule_from_dict(cfg)


__all__ = [
    "Band",
    "TariffSchedule",
    "DEFAULT_SCHEDULE",
    "DEFAULT_CONFIG_PATH",
    "depreciation_rate",
    "fuel_excise_duty_rate",
    "hybrid_excise_duty_rate",
    "registration_fee_local",
    "schedule_from_dict",
    "load_schedule",
]
