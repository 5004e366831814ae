import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))
sys.path.append(str(ROOT / "backend"))

from celestial_config import CONFIG_ENV_VAR, reset_config
from evaluate_transits import build_transit_feed
from models import NatalChart, PlanetPosition


def transit_sky():
    return [
        PlanetPosition("Sun", 0),
        PlanetPosition("Mars", 1.0),
        PlanetPosition("Jupiter", 121.5),
    ]


def natal_chart():
    return [PlanetPosition("Sun", 0.5), PlanetPosition("Moon", 90)]


def test_mundane_only_without_natal():
    feed = build_transit_feed(transit_sky())
    assert feed["personal"] == []
    assert len(feed["mundane"]) == 3
    assert all(a["orb"] <= 2.0 for a in feed["mundane"])
    assert all(not a["isSynastry"] for a in feed["mundane"])
    assert feed["ingresses"] == []


def test_wide_mundane_aspects_are_dropped():
    feed = build_transit_feed([PlanetPosition("Sun", 0), PlanetPosition("Saturn", 95)])
    assert feed["mundane"] == []
    assert feed["active"] == []
    assert feed["headline"] is None


def test_personal_aspects_lead_the_feed():
    feed = build_transit_feed(transit_sky(), natal_chart())
    personal = feed["personal"]
    assert len(personal) == 5
    assert all(a["isSynastry"] and a["orb"] <= 1.5 for a in personal)
    assert [a["orb"] for a in personal] == sorted(a["orb"] for a in personal)

    headline = feed["headline"]
    assert headline["planet1"]["name"] == "Sun"
    assert headline["planet2"]["name"] == "Moon"
    assert headline["type"] == "Square"

    active = feed["active"]
    assert len(active) == 8
    assert [entry["isSynastry"] for entry in active] == [True] * 5 + [False] * 3


def test_active_entries_carry_interpretation():
    feed = build_transit_feed(transit_sky(), natal_chart())
    first = feed["active"][0]
    assert first["type"] == "Square"
    assert first["interpretation"]["title"] == "Sun Square Moon"
    assert "your natal Emotional Flux" in first["interpretation"]["meaning"]


def test_accepts_natal_chart_objects():
    chart = NatalChart(date="2000-01-01T00:00:00Z", planets=natal_chart())
    feed = build_transit_feed(transit_sky(), chart)
    assert len(feed["personal"]) == 5


def test_ingresses_against_previous_snapshot(caplog):
    previous = [
        PlanetPosition("Sun", 359.5),
        PlanetPosition("Mars", 0.5),
        PlanetPosition("Jupiter", 119.8),
    ]
    with caplog.at_level(logging.INFO):
        feed = build_transit_feed(transit_sky(), previous_transit=previous)
    assert feed["ingresses"] == ["Sun Entered Aries", "Jupiter Entered Leo"]
    assert "Transit feed" in caplog.text


def test_active_is_truncated(tmp_path, monkeypatch):
    override = tmp_path / "feed.yaml"
    override.write_text("feed:\n  max_active: 2\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
    reset_config()
    try:
        feed = build_transit_feed(transit_sky(), natal_chart())
        assert len(feed["active"]) == 2
        assert len(feed["personal"]) == 5
    finally:
        monkeypatch.delenv(CONFIG_ENV_VAR)
        reset_config()


def test_all_aspect_lists_share_one_shape():
    feed = build_transit_feed(transit_sky(), natal_chart())
    entries = feed["active"] + feed["personal"] + feed["mundane"] + [feed["headline"]]
    keys = {frozenset(entry) for entry in entries}
    assert len(keys) == 1
    assert "interpretation" in next(iter(keys))
    assert feed["headline"] == feed["active"][0]
