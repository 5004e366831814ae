"""Interpretation texts loaded from a YAML pack."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from celestial_config import CelestialError, cfg
from celestial_engine.utils import token_to_string
from models import Aspect


# Default pack selection
INTERPRETATION_PACK = "default"

PACK_DIR = Path(__file__).resolve().parent / "celestial_engine"


def load_pack(pack: Optional[str] = None) -> Dict[str, Any]:
    """Load an interpretation pack from ``interpretations_<pack>.yaml``."""
    pack = pack or cfg().get("interpretation.pack", INTERPRETATION_PACK)
    path = PACK_DIR / f"interpretations_{pack}.yaml"
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as exc:
        raise CelestialError(f"Unknown interpretation pack '{pack}'") from exc
    return data


# Loaded pack used throughout the module
PACK = load_pack()


def planet_keyword(planet: str) -> str:
    return PACK.get("planets", {}).get(planet, planet)


def planet_in_sign(planet: str, sign: Any) -> str:
    """Brief reading for a planet in a sign."""
    return f"{planet_keyword(planet)} is being processed through the lens of {token_to_string(sign)}."


def _aspect_entry(aspect_type: Any) -> Dict[str, str]:
    return PACK.get("aspects", {}).get(token_to_string(aspect_type), {})


def aspect_meaning(planet1: str, aspect_type: Any, planet2: str, is_synastry: bool) -> str:
    """Synthesis sentence for an aspect between two bodies.

    Synastry (transit-to-natal) aspects are framed personally; aspects inside
    a single chart are framed as collective weather.
    """
    noun1 = planet_keyword(planet1)
    noun2 = planet_keyword(planet2)
    bridge = _aspect_entry(aspect_type).get("bridge") or PACK.get("defaults", {}).get("bridge", "interacts with")

    if is_synastry:
        return f"Current {noun1} {bridge} your natal {noun2}, triggering a personal evolution."
    return f"Collective {noun1} {bridge} {noun2}, shaping the global atmosphere."


def advice(aspect_type: Any) -> str:
    return _aspect_entry(aspect_type).get("advice") or PACK.get("defaults", {}).get(
        "advice", "Observe the subtle shifts in your environment."
    )


def _sign_entry(sign: Any) -> Dict[str, str]:
    return PACK.get("signs", {}).get(token_to_string(sign), {})


def sign_archetype(sign: Any) -> Optional[str]:
    return _sign_entry(sign).get("archetype")


def destiny_thread(sign: Any) -> Optional[str]:
    return _sign_entry(sign).get("destiny_thread")


def sign_ruler(sign: Any) -> Optional[str]:
    return _sign_entry(sign).get("ruler")


def describe_aspect(aspect: Aspect) -> Dict[str, str]:
    """Title, meaning and advice for one computed aspect."""
    return {
        "title": f"{aspect.planet1.name} {aspect.type.display_name} {aspect.planet2.name}",
        "meaning": aspect_meaning(
            aspect.planet1.name, aspect.type, aspect.planet2.name, aspect.is_synastry
        ),
        "advice": advice(aspect.type),
    }
