"""Transit feed pipeline combining aspect detection, ingresses and texts."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from celestial_config import cfg

from celestial_engine.aspects import calculate_aspects
from celestial_engine.ingress import detect_ingresses
from celestial_engine.serialization import aspect_to_dict
from interpretation import describe_aspect
from models import Aspect, NatalChart, PlanetPosition

logger = logging.getLogger(__name__)

Positions = Union[NatalChart, Sequence[PlanetPosition]]


def _planets(chart: Optional[Positions]) -> List[PlanetPosition]:
    if chart is None:
        return []
    if isinstance(chart, NatalChart):
        return list(chart.planets)
    return list(chart)


def _entry(aspect: Aspect) -> Dict[str, Any]:
    return {**aspect_to_dict(aspect), "interpretation": describe_aspect(aspect)}


def build_transit_feed(
    transit: Positions,
    natal: Optional[Positions] = None,
    previous_transit: Optional[Positions] = None,
) -> Dict[str, Any]:
    """Build the "active aspects" feed for the current sky.

    The function performs the following steps:

    1. Aspects inside the transit chart (mundane), kept when tight.
    2. Aspects from the transit chart to the natal chart (personal, synastry
       mode, so a transiting body also meets its own natal place).
    3. Personal aspects first, then mundane, truncated to the feed size.
    4. Sign ingresses against the previous transit snapshot, if given.

    Every aspect in the result is a serialized dict carrying its
    interpretation card; ``headline`` is the first active entry.

    Args:
        transit: Current positions.
        natal: Birth chart positions. Without it the feed is mundane only.
        previous_transit: Earlier snapshot of the transit bodies.
    """
    config = cfg()
    mundane_max = config.get("feed.mundane_max_orb", 2.0)
    personal_max = config.get("feed.personal_max_orb", 1.5)
    max_active = int(config.get("feed.max_active", 10))

    transit_planets = _planets(transit)
    natal_planets = _planets(natal)

    mundane = [a for a in calculate_aspects(transit_planets) if a.orb <= mundane_max]

    personal: List[Aspect] = []
    if natal_planets:
        personal = [
            a
            for a in calculate_aspects(transit_planets, natal_planets, synastry_mode=True)
            if a.orb <= personal_max
        ]

    active = (personal + mundane)[:max_active]

    ingresses: List[str] = []
    if previous_transit is not None:
        ingresses = detect_ingresses(_planets(previous_transit), transit_planets)

    logger.info(
        "Transit feed: %d personal, %d mundane, %d active, ingresses=%s",
        len(personal), len(mundane), len(active), ingresses,
    )

    active_entries = [_entry(aspect) for aspect in active]
    return {
        "active": active_entries,
        "personal": [_entry(aspect) for aspect in personal],
        "mundane": [_entry(aspect) for aspect in mundane],
        "headline": active_entries[0] if active_entries else None,
        "ingresses": ingresses,
    }
