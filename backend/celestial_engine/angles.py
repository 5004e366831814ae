"""Angle and calendar helpers shared by the engine."""
from __future__ import annotations

import datetime
import math
from typing import Union

DateLike = Union[datetime.date, datetime.datetime]


def normalize_degrees(value: float) -> float:
    """Return ``value`` wrapped into ``[0, 360)``."""
    result = value % 360.0
    # a tiny negative input rounds up to exactly 360
    if result >= 360.0:
        result = 0.0
    return result


def angular_distance(deg1: float, deg2: float) -> float:
    """Shortest arc between two longitudes, in ``[0, 180]``."""
    diff = abs(normalize_degrees(deg1) - normalize_degrees(deg2))
    return min(diff, 360.0 - diff)


def julian_day_from_parts(
    year: int, month: int, day: float, hour: float = 0.0, minute: float = 0.0
) -> float:
    """Gregorian calendar components (UTC) to Julian Day.

    January and February are counted as months 13 and 14 of the previous
    year. Out-of-range components are not validated; the arithmetic simply
    runs on whatever it is given.
    """
    y = year
    m = month
    d = day + hour / 24.0 + minute / 1440.0

    if m <= 2:
        y -= 1
        m += 12

    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)

    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + d + b - 1524.5


def to_utc(moment: DateLike) -> datetime.datetime:
    """Coerce a date or datetime to a naive UTC datetime.

    Naive datetimes and plain dates are assumed to already be in UTC.
    """
    if isinstance(moment, datetime.datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return moment
    return datetime.datetime(moment.year, moment.month, moment.day)


def julian_day(moment: DateLike) -> float:
    """Julian Day for ``moment`` at minute precision (seconds are ignored)."""
    utc = to_utc(moment)
    return julian_day_from_parts(utc.year, utc.month, utc.day, utc.hour, utc.minute)
