import datetime
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))
sys.path.append(str(ROOT / "backend"))

from celestial_config import CONFIG_ENV_VAR, reset_config
from celestial_engine.planetary_hours import CHALDEAN_ORDER, day_ruler, planetary_hour

# 18 May 2024 is a Saturday, 19 May a Sunday, 20 May a Monday
SATURDAY = datetime.date(2024, 5, 18)


@pytest.mark.parametrize(
    "moment, is_day, ruler, hour_ruler, hour_number",
    [
        (datetime.datetime(2024, 5, 19, 6, 0), True, "Sun", "Sun", 1),
        (datetime.datetime(2024, 5, 19, 8, 30), True, "Sun", "Mercury", 3),
        (datetime.datetime(2024, 5, 19, 17, 59), True, "Sun", "Saturn", 12),
        (datetime.datetime(2024, 5, 19, 18, 0), False, "Sun", "Sun", 1),
        (datetime.datetime(2024, 5, 19, 23, 10), False, "Sun", "Jupiter", 6),
        (datetime.datetime(2024, 5, 20, 3, 0), False, "Sun", "Mercury", 10),
        (datetime.datetime(2024, 5, 20, 6, 0), True, "Moon", "Moon", 1),
        (datetime.datetime(2024, 5, 18, 12, 0), True, "Saturn", "Sun", 7),
    ],
)
def test_planetary_hour(moment, is_day, ruler, hour_ruler, hour_number):
    hour = planetary_hour(moment)
    assert hour.is_day is is_day
    assert hour.day_ruler == ruler
    assert hour.hour_ruler == hour_ruler
    assert hour.hour_number == hour_number


def test_aware_moments_use_utc():
    moment = datetime.datetime(2024, 5, 19, 10, 30, tzinfo=datetime.timezone(datetime.timedelta(hours=2)))
    hour = planetary_hour(moment)
    assert hour.is_day is True
    assert hour.hour_ruler == "Mercury"


def test_day_rulers_cover_the_week():
    rulers = [day_ruler(SATURDAY + datetime.timedelta(days=i)) for i in range(7)]
    assert rulers == ["Saturn", "Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus"]
    assert sorted(rulers) == sorted(CHALDEAN_ORDER)


def test_every_hour_resolves():
    start = datetime.datetime(2024, 1, 1)
    for step in range(0, 24 * 8):
        hour = planetary_hour(start + datetime.timedelta(hours=step))
        assert hour.hour_ruler in CHALDEAN_ORDER
        assert 1 <= hour.hour_number <= 12


def test_configured_sunrise(tmp_path, monkeypatch):
    override = tmp_path / "hours.yaml"
    override.write_text("planetary_hours:\n  sunrise_hour: 5\n  sunset_hour: 19\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
    reset_config()
    try:
        hour = planetary_hour(datetime.datetime(2024, 5, 19, 5, 30))
        assert hour.is_day is True
        assert hour.hour_number == 1
    finally:
        monkeypatch.delenv(CONFIG_ENV_VAR)
        reset_config()
