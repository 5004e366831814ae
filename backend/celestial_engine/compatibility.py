"""Numerology compatibility between two profiles."""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from celestial_config import cfg
try:
    from ..models import MatchScore, NumerologyProfile, NumerologyResult, SynergyResult
    from ..taxonomy import FamilyRole, RelationshipCategory, RelationshipContext, get_defaults, make_context
except ImportError:  # pragma: no cover - fallback when executed as script
    from models import MatchScore, NumerologyProfile, NumerologyResult, SynergyResult
    from taxonomy import FamilyRole, RelationshipCategory, RelationshipContext, get_defaults, make_context
from .numerology import reduce_number
from .polarity import resonance_for_score

logger = logging.getLogger(__name__)

NATURAL_MATCHES: Dict[int, Tuple[int, ...]] = {
    1: (1, 3, 5, 7, 9),
    2: (2, 4, 6, 8),
    3: (1, 3, 5, 6, 9),
    4: (2, 4, 6, 7, 8),
    5: (1, 3, 5, 7, 9),
    6: (2, 3, 4, 6, 8, 9),
    7: (1, 4, 5, 7),
    8: (2, 4, 6, 8),
    9: (1, 3, 5, 6, 9),
    11: (2, 6, 8, 11, 22),
    22: (4, 6, 8, 22, 11),
}

DEFAULT_WEIGHTS: Dict[str, float] = {
    "life_path": 0.4,
    "destiny": 0.3,
    "soul_urge": 0.2,
    "personality": 0.1,
}

FACET_LABELS: Dict[str, str] = {
    "life_path": "Life Path",
    "destiny": "Destiny",
    "soul_urge": "Soul Urge",
    "personality": "Personality",
}


def calculate_match_score(n1: int, n2: int) -> MatchScore:
    """Score how well two core numbers fit together.

    Identical numbers score 90, natural matches (either direction) 85,
    same parity 70 and opposite parity 40.
    """
    if n1 == n2:
        return MatchScore(90, "Resonant frequencies. You vibrate in unison.")
    if n2 in NATURAL_MATCHES.get(n1, ()) or n1 in NATURAL_MATCHES.get(n2, ()):
        return MatchScore(85, "Harmonic convergence. Your numbers naturally support each other.")
    if n1 % 2 == n2 % 2:
        return MatchScore(70, "Compatible polarity. You share a similar rhythm.")
    return MatchScore(40, "Dynamic friction. A relationship of growth through challenge.")


def _core(result: Optional[NumerologyResult]) -> int:
    return result.core if result is not None else 0


def _weights() -> Dict[str, float]:
    configured = cfg().get("compatibility.weights")
    if configured is None:
        return dict(DEFAULT_WEIGHTS)
    weights = dict(DEFAULT_WEIGHTS)
    weights.update({k: float(v) for k, v in configured.__dict__.items() if k in weights})
    return weights


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _type_insight(context: RelationshipContext, life_path_score: int) -> str:
    defaults = get_defaults(context.category)
    insights = defaults.get("insights", {})
    high_match = life_path_score > defaults.get("high_match_above", 80)

    if context.category in (RelationshipCategory.ROMANTIC, RelationshipCategory.BUSINESS):
        return insights["high"] if high_match else insights["low"]
    if context.category is RelationshipCategory.FAMILY:
        if context.role in (FamilyRole.PARENT, FamilyRole.CHILD):
            return insights["lineage"].format(role=context.role.value.capitalize())
        if context.role is FamilyRole.SIBLING:
            return insights["sibling"]
    return insights.get("any", "Your vibrations create a unique resonance.")


def calculate_compatibility(
    profile1: NumerologyProfile,
    profile2: NumerologyProfile,
    context: RelationshipContext | str = RelationshipCategory.ROMANTIC,
) -> SynergyResult:
    """Compare two profiles facet by facet and combine into one score.

    The overall score is a weighted average of the life path, destiny, soul
    urge and personality match scores. Missing soul urge or personality
    numbers count as 0 on both sides.
    """
    if not isinstance(context, RelationshipContext):
        context = make_context(context)

    weights = _weights()
    pairs = {
        "life_path": (_core(profile1.life_path), _core(profile2.life_path)),
        "destiny": (_core(profile1.destiny), _core(profile2.destiny)),
        "soul_urge": (_core(profile1.soul_urge), _core(profile2.soul_urge)),
        "personality": (_core(profile1.personality), _core(profile2.personality)),
    }

    matches: Dict[str, MatchScore] = {}
    ledger: List[Dict[str, Any]] = []
    weighted_total = 0.0
    for key, (n1, n2) in pairs.items():
        match = calculate_match_score(n1, n2)
        matches[key] = match
        contribution = match.score * weights[key]
        weighted_total += contribution
        ledger.append(
            {
                "key": key,
                "label": FACET_LABELS[key],
                "number1": n1,
                "number2": n2,
                "score": match.score,
                "weight": weights[key],
                "contribution": contribution,
                "resonance": resonance_for_score(match.score),
                "description": match.description,
            }
        )

    overall = _round_half_up(weighted_total)
    lp1, lp2 = pairs["life_path"]
    synergy_number = reduce_number(lp1 + lp2).core

    logger.debug(
        "Compatibility %s: overall=%s ledger=%s",
        context.category.value, overall, [(e["key"], e["score"]) for e in ledger],
    )

    return SynergyResult(
        overall_score=overall,
        life_path_match=matches["life_path"],
        destiny_match=matches["destiny"],
        soul_urge_match=matches["soul_urge"],
        personality_match=matches["personality"],
        synergy_number=synergy_number,
        context=context,
        type_insight=_type_insight(context, matches["life_path"].score),
        resonance=resonance_for_score(overall),
        ledger=ledger,
    )
