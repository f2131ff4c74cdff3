from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.errors import ValidationError
from bot_carimport.models import FuelType, UtilityType


def test_enum_parsing():
    assert FuelType.from_str("Fuel") is FuelType.FUEL
    assert FuelType.from_str(" hybrid ") is FuelType.HYBRID
    assert FuelType.from_str("ELECTRIC") is FuelType.ELECTRIC
    assert UtilityType.from_str("suv") is UtilityType.SUV
    assert UtilityType.from_str(UtilityType.OTHER) is UtilityType.OTHER


def test_enum_invalid_value():
    with pytest.raises(ValidationError):
        FuelType.from_str("Diesel")
    with pytest.raises(ValidationError):
        UtilityType.from_str("")
    with pytest.raises(ValidationError):
        FuelType.from_str(None)
