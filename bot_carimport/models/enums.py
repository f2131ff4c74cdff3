from __future__ import annotations

from enum import Enum

from bot_carimport.errors import ValidationError


class _LabelEnum(str, Enum):
    @classmethod
    def from_str(cls, raw: "str | _LabelEnum"):
        """Parse a member from its value, ignoring case and surrounding space."""
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValidationError(f"Unknown {cls.__name__}: {raw!r}")


class FuelType(_LabelEnum):
    FUEL = "Fuel"
    HYBRID = "Hybrid"
    ELECTRIC = "Electric"


class UtilityType(_LabelEnum):
    SEDAN = "Sedan"
    SUV = "SUV"
    OTHER = "Other"


class RateSource(str, Enum):
    LIVE = "live"
    CACHED = "cached"
    FALLBACK = "fallback"
    DEFAULT = "default"


__all__ = ["FuelType", "UtilityType", "RateSource"]
