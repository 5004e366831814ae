"""Resonance tagging shared by compatibility scoring and its rationale."""
from __future__ import annotations

from enum import Enum
from typing import Any

from celestial_config import cfg


class Resonance(Enum):
    """Narrative tag for how well two numbers or profiles fit together."""

    RESONANT = "resonant"
    FRICTION = "friction"
    NEUTRAL = "neutral"


def resonance_for_score(score: float) -> Resonance:
    """Tag a 0-100 score using the configured thresholds."""
    config = cfg()
    resonant_above = config.get("compatibility.resonant_above", 80)
    friction_below = config.get("compatibility.friction_below", 60)
    if score > resonant_above:
        return Resonance.RESONANT
    if score < friction_below:
        return Resonance.FRICTION
    return Resonance.NEUTRAL


def normalize_resonance(value: Any) -> Resonance:
    """Normalize arbitrary inputs into a ``Resonance`` member."""

    if isinstance(value, Resonance):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return resonance_for_score(value)
    text = str(value).strip().lower()
    if text in {"+", "resonant", "harmonic"}:
        return Resonance.RESONANT
    if text in {"-", "friction", "dynamic"}:
        return Resonance.FRICTION
    return Resonance.NEUTRAL


def resonance_sign(value: Any) -> str:
    """Return a compact sign for a resonance value.

    Neutral entries are labeled with ``"0"`` to make their absence of effect
    explicit to callers.
    """

    res = normalize_resonance(value)
    if res is Resonance.RESONANT:
        return "+"
    if res is Resonance.FRICTION:
        return "-"
    return "0"
