import datetime
import sys
from pathlib import Path

import pytest
import swisseph as swe

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))
sys.path.append(str(ROOT / "backend"))

from celestial_config import CelestialError
from celestial_engine import ephemeris
from celestial_engine.angles import julian_day
from celestial_engine.ephemeris import assign_house, calculate_chart
from celestial_engine.serialization import chart_to_dict
from celestial_engine.zodiac import ZodiacSign

EQUAL_CUSPS = [i * 30.0 for i in range(12)]


@pytest.mark.parametrize("degree, house", [(0, 1), (45, 2), (359.9, 12), (360, 1)])
def test_assign_house(degree, house):
    assert assign_house(degree, EQUAL_CUSPS) == house


def test_assign_house_wraps_past_aries():
    cusps = [(350.0 + 30 * i) % 360 for i in range(12)]
    assert assign_house(5, cusps) == 1
    assert assign_house(349, cusps) == 12
    assert assign_house(21, cusps) == 2


@pytest.mark.parametrize(
    "moment, parts",
    [
        (datetime.datetime(2000, 1, 1, 12, 0), (2000, 1, 1, 12.0)),
        (datetime.datetime(1990, 2, 15, 6, 30), (1990, 2, 15, 6.5)),
        (datetime.datetime(2024, 11, 3, 23, 45), (2024, 11, 3, 23.75)),
    ],
)
def test_julian_day_matches_swiss_ephemeris(moment, parts):
    assert julian_day(moment) == pytest.approx(swe.julday(*parts), abs=1e-6)


@pytest.fixture
def fake_swe(monkeypatch):
    def houses(jd, lat, lon, hsys):
        return tuple(EQUAL_CUSPS), (15.0, 285.0, 0, 0, 0, 0, 0, 0)

    def calc_ut(jd, body_id, flags):
        speed = -0.5 if body_id == swe.MERCURY else 1.0
        return (body_id * 30.0 + 1.0, 0.0, 1.0, speed, 0.0, 0.0), flags

    monkeypatch.setattr(ephemeris.swe, "houses", houses)
    monkeypatch.setattr(ephemeris.swe, "calc_ut", calc_ut)


def test_calculate_chart_builds_positions(fake_swe):
    moment = datetime.datetime(2024, 3, 20, 3, 6, tzinfo=datetime.timezone.utc)
    chart = calculate_chart(moment, 51.5, -0.12)

    assert chart.date == "2024-03-20T03:06:00Z"
    assert len(chart.planets) == 11
    assert chart.julian_day == pytest.approx(swe.julday(2024, 3, 20, 3.1))
    assert chart.location == (51.5, -0.12)

    sun = chart.position("Sun")
    assert sun.absolute_degree == pytest.approx(1.0)
    assert sun.house == 1
    assert sun.retrograde is False

    assert chart.position("Mercury").retrograde is True
    node = chart.position("North Node")
    assert node.sign is ZodiacSign.AQUARIUS
    assert node.house == 11

    assert len(chart.houses) == 12
    assert chart.houses[3].sign is ZodiacSign.CANCER
    assert chart.ascendant == 15.0


def test_chart_serializes(fake_swe):
    payload = chart_to_dict(calculate_chart(datetime.date(2024, 1, 1), 0.0, 0.0))
    assert payload["ascendant"]["name"] == "Ascendant"
    assert payload["ascendant"]["sign"] == "Aries"
    assert payload["planets"][1]["name"] == "Moon"
    assert payload["planets"][1]["sign"] == "Taurus"
    assert payload["houses"][0]["house"] == 1


def test_ephemeris_failure_is_wrapped(monkeypatch, caplog):
    def houses(jd, lat, lon, hsys):
        return tuple(EQUAL_CUSPS), (0.0,) * 8

    def calc_ut(jd, body_id, flags):
        raise swe.Error("ephemeris file missing")

    monkeypatch.setattr(ephemeris.swe, "houses", houses)
    monkeypatch.setattr(ephemeris.swe, "calc_ut", calc_ut)

    with pytest.raises(CelestialError):
        calculate_chart(datetime.datetime(2024, 1, 1), 0.0, 0.0)
    assert "Error calculating Sun" in caplog.text


def test_real_sun_position_at_j2000():
    chart = calculate_chart(datetime.datetime(2000, 1, 1, 12, 0), 0.0, 0.0)
    sun = chart.position("Sun")
    assert sun.sign is ZodiacSign.CAPRICORN
    assert sun.absolute_degree == pytest.approx(280.37, abs=0.5)
