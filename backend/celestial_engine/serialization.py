"""JSON-ready payloads for the presentation layer."""
from __future__ import annotations

from typing import Any, Dict, Optional

try:
    from ..models import Aspect, NatalChart, NumerologyResult, PlanetPosition, SynergyResult
except ImportError:  # pragma: no cover - fallback when executed as script
    from models import Aspect, NatalChart, NumerologyResult, PlanetPosition, SynergyResult
from .lunar import MoonPhase
from .planetary_hours import PlanetaryHour
from .rationale import build_rationale
from .utils import token_to_string


def position_to_dict(position: PlanetPosition) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "name": position.name,
        "sign": token_to_string(position.sign),
        "degree": position.degree,
        "absoluteDegree": position.absolute_degree,
        "retrograde": position.retrograde,
    }
    if position.house is not None:
        payload["house"] = position.house
    return payload


def aspect_to_dict(aspect: Aspect) -> Dict[str, Any]:
    return {
        "planet1": position_to_dict(aspect.planet1),
        "planet2": position_to_dict(aspect.planet2),
        "type": token_to_string(aspect.type),
        "angle": aspect.angle,
        "orb": aspect.orb,
        "isSynastry": aspect.is_synastry,
    }


def chart_to_dict(chart: NatalChart) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "date": chart.date,
        "planets": [position_to_dict(p) for p in chart.planets],
        "houses": [
            {
                "house": cusp.house,
                "sign": token_to_string(cusp.sign),
                "degree": cusp.degree,
                "absoluteDegree": cusp.absolute_degree,
            }
            for cusp in chart.houses
        ],
    }
    if chart.ascendant is not None:
        payload["ascendant"] = position_to_dict(PlanetPosition("Ascendant", chart.ascendant))
    return payload


def numerology_result_to_dict(result: Optional[NumerologyResult]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    payload: Dict[str, Any] = {
        "sum": result.sum,
        "core": result.core,
        "isMaster": result.is_master,
        "archetype": result.archetype,
    }
    if result.source is not None:
        payload["source"] = result.source
    return payload


def synergy_to_dict(result: SynergyResult) -> Dict[str, Any]:
    def match(m):
        return {"score": m.score, "description": m.description}

    context = {"category": token_to_string(result.context.category)}
    if result.context.role is not None:
        context["role"] = token_to_string(result.context.role)

    return {
        "overallScore": result.overall_score,
        "lifePathMatch": match(result.life_path_match),
        "destinyMatch": match(result.destiny_match),
        "soulUrgeMatch": match(result.soul_urge_match),
        "personalityMatch": match(result.personality_match),
        "synergyNumber": result.synergy_number,
        "context": context,
        "typeInsight": result.type_insight,
        "resonance": token_to_string(result.resonance),
        "rationale": build_rationale(result.ledger),
    }


def moon_phase_to_dict(phase: MoonPhase) -> Dict[str, Any]:
    return {"phase": phase.name, "emoji": phase.emoji}


def planetary_hour_to_dict(hour: PlanetaryHour) -> Dict[str, Any]:
    return {
        "isDay": hour.is_day,
        "dayRuler": hour.day_ruler,
        "hourRuler": hour.hour_ruler,
        "hourNumber": hour.hour_number,
    }
