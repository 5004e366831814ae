import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))
sys.path.append(str(ROOT / "backend"))

from celestial_engine.ingress import detect_ingresses, format_ingress
from models import PlanetPosition


def test_sign_change_is_reported():
    previous = [PlanetPosition("Mars", 29.5)]
    current = [PlanetPosition("Mars", 30.2)]
    assert detect_ingresses(previous, current) == ["Mars Entered Taurus"]


def test_no_change_no_ingress():
    previous = [PlanetPosition("Sun", 10), PlanetPosition("Moon", 100)]
    current = [PlanetPosition("Sun", 11), PlanetPosition("Moon", 112)]
    assert detect_ingresses(previous, current) == []


def test_wrap_into_aries():
    assert detect_ingresses([PlanetPosition("Moon", 359)], [PlanetPosition("Moon", 1)]) == [
        "Moon Entered Aries"
    ]


def test_output_follows_current_order_and_skips_unknown_bodies():
    previous = [PlanetPosition("Venus", 59), PlanetPosition("Mercury", 89)]
    current = [
        PlanetPosition("Mercury", 91),
        PlanetPosition("Pluto", 300),
        PlanetPosition("Venus", 61),
    ]
    assert detect_ingresses(previous, current) == [
        "Mercury Entered Cancer",
        "Venus Entered Gemini",
    ]


def test_first_previous_entry_wins():
    previous = [PlanetPosition("Sun", 10), PlanetPosition("Sun", 40)]
    current = [PlanetPosition("Sun", 41)]
    assert detect_ingresses(previous, current) == ["Sun Entered Taurus"]


def test_format_ingress():
    assert format_ingress(PlanetPosition("Jupiter", 75)) == "Jupiter Entered Gemini"
