import copy
from decimal import Decimal
from pathlib import Path
import sys

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.models import UtilityType
from bot_carimport.tariff.schedule import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_SCHEDULE,
    load_schedule,
    schedule_from_dict,
)


def _bundled_config():
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


def test_bundled_yaml_matches_default_schedule():
    assert load_schedule() == DEFAULT_SCHEDULE


def test_load_schedule_from_custom_path(tmp_path):
    cfg = _bundled_config()
    cfg["rates"]["vat"] = "0.20"
    path = tmp_path / "tariff.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    schedule = load_schedule(str(path))
    assert schedule.vat_rate == Decimal("0.20")
    assert schedule.excise_utility_types == frozenset({UtilityType.SEDAN, UtilityType.SUV})


def test_open_ended_band_must_be_last():
    cfg = copy.deepcopy(_bundled_config())
    cfg["tables"]["fuel_excise"] = [{"value": "0.05"}, {"max": 2500, "value": "0.10"}]
    with pytest.raises(ValueError):
        schedule_from_dict(cfg)


def test_table_must_end_open_ended():
    cfg = copy.deepcopy(_bundled_config())
    cfg["tables"]["hybrid_excise"] = [{"max": 3, "value": "0.05"}, {"max": 7, "value": "0.10"}]
    with pytest.raises(ValueError):
        schedule_from_dict(cfg)


def test_bands_must_ascend():
    cfg = copy.deepcopy(_bundled_config())
    cfg["tables"]["registration_fee"] = [
        {"max": 1500, "value": 285000},
        {"max": 1000, "value": 75000},
        {"value": 997000},
    ]
    with pytest.raises(ValueError):
        schedule_from_dict(cfg)


def test_missing_rate_is_reported():
    cfg = copy.deepcopy(_bundled_config())
    del cfg["rates"]["customs_duty"]
    with pytest.raises(ValueError, match="customs_duty"):
        schedule_from_dict(cfg)
