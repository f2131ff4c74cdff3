"""Cascading vehicle selection: maker -> year -> model -> spec.

Each level depends on every level above it, so choosing a value always
discards whatever was chosen further down.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import IntEnum
from typing import Any, Dict, Optional

from bot_carimport.errors import ValidationError


class SelectionLevel(IntEnum):
    MAKER = 0
    YEAR = 1
    MODEL = 2
    SPEC = 3


_FIELDS = {
    SelectionLevel.MAKER: "maker",
    SelectionLevel.YEAR: "year",
    SelectionLevel.MODEL: "model",
    SelectionLevel.SPEC: "spec",
}


@dataclass(frozen=True)
class VehicleSelection:
    """A fully resolved, priced catalog entry."""

    maker: str
    year: int
    model: str
    spec: str
    reference_price: Decimal

    @property
    def title(self) -> str:
        return f"{self.maker} {self.model} {self.year} - {self.spec}"


@dataclass(frozen=True)
class SelectionState:
    maker: Optional[str] = None
    year: Optional[int] = None
    model: Optional[str] = None
    spec: Optional[str] = None

    def value(self, level: SelectionLevel) -> Any:
        return getattr(self, _FIELDS[level])

    def clear_from(self, level: SelectionLevel) -> "SelectionState":
        """Drop ``level`` and every level below it."""
        cleared = {_FIELDS[lvl]: None for lvl in SelectionLevel if lvl >= level}
        return replace(self, **cleared)

    def choose(self, level: SelectionLevel, value: Any) -> "SelectionState":
        missing = [lvl for lvl in SelectionLevel if lvl < level and self.value(lvl) is None]
        if missing:
            raise ValidationError(
                f"Cannot choose {_FIELDS[level]} before {_FIELDS[missing[0]]}"
            )
        if level is SelectionLevel.YEAR:
            value = int(value)
        return replace(self.clear_from(level), **{_FIELDS[level]: value})

    def next_level(self) -> Optional[SelectionLevel]:
        for level in SelectionLevel:
            if self.value(level) is None:
                return level
        return None

    @property
    def is_complete(self) -> bool:
        return self.next_level() is None

    def resolve(self, price: Decimal) -> VehicleSelection:
        if not self.is_complete:
            raise ValidationError("Vehicle selection is incomplete")
        price = Decimal(str(price))
        if price < 0:
            raise ValidationError("Reference price cannot be negative")
        return VehicleSelection(
            maker=self.maker,
            year=self.year,
            model=self.model,
            spec=self.spec,
            reference_price=price,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _FIELDS.values()}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SelectionState":
        data = data or {}
        year = data.get("year")
        return cls(
            maker=data.get("maker"),
            year=int(year) if year is not None else None,
            model=data.get("model"),
            spec=data.get("spec"),
        )


__all__ = ["SelectionLevel", "SelectionState", "VehicleSelection"]
