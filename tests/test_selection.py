from decimal import Decimal
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.errors import ValidationError
from bot_carimport.models import SelectionLevel, SelectionState


def full_selection():
    return (
        SelectionState()
        .choose(SelectionLevel.MAKER, "Toyota")
        .choose(SelectionLevel.YEAR, "2020")
        .choose(SelectionLevel.MODEL, "RAV4")
        .choose(SelectionLevel.SPEC, "2.5 XLE")
    )


def test_choose_in_order_completes_selection():
    sel = full_selection()
    assert sel.is_complete
    assert sel.year == 2020
    assert sel.next_level() is None


def test_changing_a_level_clears_levels_below():
    sel = full_selection().choose(SelectionLevel.YEAR, 2019)
    assert sel.maker == "Toyota"
    assert sel.year == 2019
    assert sel.model is None
    assert sel.spec is None
    assert sel.next_level() is SelectionLevel.MODEL


def test_changing_maker_clears_everything_else():
    sel = full_selection().choose(SelectionLevel.MAKER, "Honda")
    assert sel.as_dict() == {"maker": "Honda", "year": None, "model": None, "spec": None}


def test_choose_out_of_order_rejected():
    with pytest.raises(ValidationError):
        SelectionState().choose(SelectionLevel.MODEL, "RAV4")


def test_clear_from():
    sel = full_selection().clear_from(SelectionLevel.MODEL)
    assert sel.model is None and sel.spec is None
    assert sel.year == 2020


def test_states_are_immutable():
    sel = full_selection()
    sel.choose(SelectionLevel.MAKER, "Honda")
    assert sel.maker == "Toyota"


def test_resolve():
    vehicle = full_selection().resolve(Decimal("31000"))
    assert vehicle.reference_price == Decimal("31000")
    assert vehicle.title == "Toyota RAV4 2020 - 2.5 XLE"


def test_resolve_incomplete_or_negative():
    with pytest.raises(ValidationError):
        SelectionState(maker="Toyota").resolve(Decimal("1"))
    with pytest.raises(ValidationError):
        full_selection().resolve(Decimal("-1"))


def test_dict_round_trip_keeps_year_integer():
    sel = full_selection()
    assert SelectionState.from_dict(sel.as_dict()) == sel
    assert SelectionState.from_dict(None) == SelectionState()
