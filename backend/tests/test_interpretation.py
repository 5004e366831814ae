import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))
sys.path.append(str(ROOT / "backend"))

from celestial_config import CelestialError
from celestial_engine.zodiac import ZodiacSign
from interpretation import (
    advice,
    aspect_meaning,
    describe_aspect,
    destiny_thread,
    load_pack,
    planet_in_sign,
    planet_keyword,
    sign_archetype,
    sign_ruler,
)
from models import Aspect, AspectType, PlanetPosition


def test_planet_keywords():
    assert planet_keyword("Mars") == "Drive & Action"
    assert planet_keyword("Chiron") == "Chiron"


def test_planet_in_sign():
    assert planet_in_sign("Sun", ZodiacSign.LEO) == (
        "Core Identity is being processed through the lens of Leo."
    )


def test_synastry_meaning_is_personal():
    text = aspect_meaning("Mars", AspectType.SQUARE, "Moon", True)
    assert text.startswith("Current Drive & Action creates dynamic tension")
    assert text.endswith("your natal Emotional Flux, triggering a personal evolution.")


def test_mundane_meaning_is_collective():
    text = aspect_meaning("Jupiter", "Trine", "Saturn", False)
    assert text.startswith("Collective Expansion & Luck allows these forces")
    assert text.endswith("Structure & Discipline, shaping the global atmosphere.")


def test_unknown_aspect_uses_defaults():
    assert aspect_meaning("Sun", "Quincunx", "Moon", False) == (
        "Collective Core Identity interacts with Emotional Flux, shaping the global atmosphere."
    )
    assert advice("Quincunx") == "Observe the subtle shifts in your environment."


def test_advice_by_type():
    assert advice(AspectType.CONJUNCTION) == "Focus your energy on a single objective today."
    assert advice("Sextile") == "Keep an eye out for unexpected invitations."


def test_sign_texts():
    assert sign_ruler(ZodiacSign.SCORPIO) == "Pluto"
    assert sign_archetype("Aries") == "The Pioneer"
    assert destiny_thread(ZodiacSign.PISCES) == "Universal Union"
    assert sign_ruler("Ophiuchus") is None


def test_describe_aspect():
    aspect = Aspect(
        planet1=PlanetPosition("Venus", 10),
        planet2=PlanetPosition("Mars", 190),
        type=AspectType.OPPOSITION,
        angle=180.0,
        orb=0.0,
    )
    card = describe_aspect(aspect)
    assert card["title"] == "Venus Opposition Mars"
    assert card["meaning"].startswith("Collective Relational Value creates a polarity")
    assert card["advice"] == "Look for the middle ground in your interactions."


def test_unknown_pack_raises():
    with pytest.raises(CelestialError):
        load_pack("does_not_exist")
