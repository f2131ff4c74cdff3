from decimal import Decimal
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.tariff.depreciation import car_age, depreciated_value


def test_car_age_counts_whole_years():
    assert car_age(2020, 2025) == 5


def test_car_age_clamps_current_and_future_years():
    assert car_age(2025, 2025) == 0
    assert car_age(2027, 2025) == 0


def test_depreciated_value():
    assert depreciated_value(Decimal("20000"), 3) == Decimal("14000")
    assert depreciated_value(Decimal("30000"), 2) == Decimal("24000")


def test_new_car_keeps_full_value():
    assert depreciated_value(Decimal("18500"), 0) == Decimal("18500")
    assert depreciated_value(Decimal("18500"), 1) == Decimal("18500")


def test_old_car_keeps_twenty_percent():
    assert depreciated_value(Decimal("10000"), 25) == Decimal("2000")
