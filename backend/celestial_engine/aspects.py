"""Aspect calculations within one chart or between two charts."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

try:
    from ..models import Aspect, AspectType, PlanetPosition
except ImportError:  # pragma: no cover - fallback when executed as script
    from models import Aspect, AspectType, PlanetPosition
from .angles import angular_distance

logger = logging.getLogger(__name__)

# Checked in this order; the first window that contains the angle wins.
CLASSIFICATION_ORDER: Tuple[AspectType, ...] = (
    AspectType.CONJUNCTION,
    AspectType.OPPOSITION,
    AspectType.TRINE,
    AspectType.SQUARE,
    AspectType.SEXTILE,
)


def iter_candidate_pairs(
    chart_a: Sequence[PlanetPosition],
    chart_b: Sequence[PlanetPosition],
    synastry_mode: bool = False,
) -> Iterator[Tuple[PlanetPosition, PlanetPosition]]:
    """Yield the position pairs that are tested for an aspect.

    Chart-internal mode walks the upper triangle (``j > i``) and skips pairs
    that share a name. Synastry mode walks the full cross product, so a
    transiting body is also compared with its own natal position.
    """
    for i, pos1 in enumerate(chart_a):
        start = 0 if synastry_mode else i + 1
        for pos2 in chart_b[start:]:
            if not synastry_mode and pos1.name == pos2.name:
                continue
            yield pos1, pos2


def classify_angle(angle: float) -> Optional[AspectType]:
    """Return the first aspect whose orb window contains ``angle``."""
    for aspect_type in CLASSIFICATION_ORDER:
        if abs(angle - aspect_type.degrees) <= aspect_type.orb:
            return aspect_type
    return None


def calculate_aspects(
    chart_a: Sequence[PlanetPosition],
    chart_b: Optional[Sequence[PlanetPosition]] = None,
    synastry_mode: bool = False,
) -> List[Aspect]:
    """Find all aspects between two sets of positions, tightest orb first.

    ``chart_b`` defaults to ``chart_a`` for aspects inside a single chart.
    Pairs that fall outside every orb window are dropped. Inputs are not
    modified.
    """
    if chart_b is None:
        chart_b = chart_a
    chart_a = list(chart_a)
    chart_b = list(chart_b)

    aspects: List[Aspect] = []
    for pos1, pos2 in iter_candidate_pairs(chart_a, chart_b, synastry_mode):
        angle = angular_distance(pos1.absolute_degree, pos2.absolute_degree)
        aspect_type = classify_angle(angle)
        if aspect_type is None:
            continue

        orb = abs(angle - aspect_type.degrees)
        logger.debug(
            "%s %s %s (angle %.2f, orb %.2f)",
            pos1.name, aspect_type.display_name, pos2.name, angle, orb,
        )
        aspects.append(
            Aspect(
                planet1=pos1,
                planet2=pos2,
                type=aspect_type,
                angle=angle,
                orb=orb,
                is_synastry=synastry_mode,
            )
        )

    return sorted(aspects, key=lambda a: a.orb)


def tightest_aspect(aspects: Sequence[Aspect]) -> Optional[Aspect]:
    """The most exact aspect of an already sorted result, if any."""
    return aspects[0] if aspects else None
