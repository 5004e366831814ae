"""Planetary day and hour rulers ("celestial weather").

Sunrise and sunset are fixed clock hours (06:00 and 18:00 UTC by default,
see ``planetary_hours`` in the config). Hours are counted from the start of
the current day or night, and each advances one step through the Chaldean
order starting from the ruler of the day.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Optional, Tuple

from celestial_config import cfg
from .angles import DateLike, to_utc

CHALDEAN_ORDER: Tuple[str, ...] = ("Saturn", "Jupiter", "Mars", "Sun", "Venus", "Mercury", "Moon")

# Indexed by weekday with Sunday as 0
DAY_RULERS: Tuple[str, ...] = ("Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn")


@dataclass(frozen=True)
class PlanetaryHour:
    is_day: bool
    day_ruler: str
    hour_ruler: str
    hour_number: int  # 1-12 within the day or the night


def day_ruler(day: datetime.date) -> str:
    return DAY_RULERS[(day.weekday() + 1) % 7]


def planetary_hour(moment: Optional[DateLike] = None) -> PlanetaryHour:
    """Planetary hour in effect at ``moment`` (defaults to now, UTC).

    Before sunrise the night that began at the previous sunset is still
    running, so the previous day's ruler applies.
    """
    if moment is None:
        moment = datetime.datetime.now(datetime.timezone.utc)
    utc = to_utc(moment)

    config = cfg()
    sunrise_hour = int(config.get("planetary_hours.sunrise_hour", 6))
    sunset_hour = int(config.get("planetary_hours.sunset_hour", 18))

    midnight = datetime.datetime(utc.year, utc.month, utc.day)
    sunrise = midnight + datetime.timedelta(hours=sunrise_hour)
    sunset = midnight + datetime.timedelta(hours=sunset_hour)

    if sunrise <= utc < sunset:
        is_day, start = True, sunrise
    elif utc >= sunset:
        is_day, start = False, sunset
    else:
        is_day, start = False, sunset - datetime.timedelta(days=1)

    ruler = day_ruler(start.date())
    hours_passed = int((utc - start).total_seconds() // 3600)
    hour_ruler = CHALDEAN_ORDER[(CHALDEAN_ORDER.index(ruler) + hours_passed) % 7]

    return PlanetaryHour(
        is_day=is_day,
        day_ruler=ruler,
        hour_ruler=hour_ruler,
        hour_number=hours_passed % 12 + 1,
    )
