"""Model helpers and enumerations."""

from .enums import FuelType, UtilityType, RateSource
from .selection import SelectionLevel, SelectionState, VehicleSelection

__all__ = [
    "FuelType",
    "UtilityType",
    "RateSource",
    "SelectionLevel",
    "SelectionState",
    "VehicleSelection",
]
