"""Chart positions from the Swiss Ephemeris.

This is the ephemeris provider feeding the aspect engine: it turns a moment
and a location into :class:`PlanetPosition` records with houses assigned.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import swisseph as swe

from celestial_config import CelestialError, cfg
try:
    from ..models import HouseCusp, NatalChart, PlanetPosition
except ImportError:  # pragma: no cover - fallback when executed as script
    from models import HouseCusp, NatalChart, PlanetPosition
from .angles import DateLike, normalize_degrees, to_utc

logger = logging.getLogger(__name__)

DEFAULT_BODIES: Dict[str, int] = {
    "Sun": swe.SUN,
    "Moon": swe.MOON,
    "Mercury": swe.MERCURY,
    "Venus": swe.VENUS,
    "Mars": swe.MARS,
    "Jupiter": swe.JUPITER,
    "Saturn": swe.SATURN,
    "Uranus": swe.URANUS,
    "Neptune": swe.NEPTUNE,
    "Pluto": swe.PLUTO,
    "North Node": swe.MEAN_NODE,
}


def _bodies() -> Dict[str, int]:
    configured = cfg().get("ephemeris.bodies")
    if configured is None:
        return dict(DEFAULT_BODIES)
    return {str(name): int(body_id) for name, body_id in configured.__dict__.items()}


def assign_house(absolute_degree: float, cusps: Sequence[float]) -> Optional[int]:
    """Return the 1-based house whose arc contains ``absolute_degree``.

    Each house runs from its cusp up to the next one, wrapping past 360.
    """
    degree = normalize_degrees(absolute_degree)
    count = len(cusps)
    for i in range(count):
        start = cusps[i]
        end = cusps[(i + 1) % count]
        span = (end - start) % 360.0
        offset = (degree - start) % 360.0
        if offset < span:
            return i + 1
    return None


def calculate_chart(moment: DateLike, lat: float, lon: float) -> NatalChart:
    """Cast a chart for ``moment`` (UTC) at the given coordinates."""
    utc = to_utc(moment)
    hour = utc.hour + utc.minute / 60.0 + utc.second / 3600.0
    jd_ut = swe.julday(utc.year, utc.month, utc.day, hour)

    logger.info(f"Calculating chart for {utc.isoformat()}Z at ({lat:.4f}, {lon:.4f}), JD {jd_ut}")

    house_system = str(cfg().get("ephemeris.house_system", "P")).encode("ascii")
    try:
        cusps, ascmc = swe.houses(jd_ut, lat, lon, house_system)
    except swe.Error as e:
        logger.error(f"Error calculating houses: {e}")
        raise CelestialError(f"House calculation failed: {e}") from e
    cusps = [float(c) for c in cusps[:12]]

    planets: List[PlanetPosition] = []
    for name, body_id in _bodies().items():
        try:
            data, _ret_flag = swe.calc_ut(jd_ut, body_id, swe.FLG_SWIEPH | swe.FLG_SPEED)
        except swe.Error as e:
            logger.error(f"Error calculating {name}: {e}")
            raise CelestialError(f"Position calculation failed for {name}: {e}") from e

        longitude = data[0]
        speed = data[3]  # degrees/day
        planets.append(
            PlanetPosition(
                name=name,
                absolute_degree=longitude,
                retrograde=speed < 0,
                house=assign_house(longitude, cusps),
            )
        )

    return NatalChart(
        date=utc.isoformat() + "Z",
        planets=planets,
        houses=[HouseCusp(house=i + 1, absolute_degree=c) for i, c in enumerate(cusps)],
        ascendant=float(ascmc[0]),
        julian_day=jd_ut,
        location=(lat, lon),
    )
