"""Mean lunar phase from days elapsed since a reference new moon."""
from __future__ import annotations

import datetime
import math
from dataclasses import dataclass
from typing import Optional

from celestial_config import cfg
from .angles import DateLike, julian_day, to_utc

PHASE_NAMES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)

PHASE_EMOJIS = ("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘")


@dataclass(frozen=True)
class MoonPhase:
    index: int
    name: str
    emoji: str
    cycle_fraction: float


@dataclass(frozen=True)
class NextMoonPhase:
    phase: str
    emoji: str
    moment: datetime.datetime
    time_remaining: str


def _reference_new_moon() -> datetime.datetime:
    raw = cfg().get("lunar.reference_new_moon", "2000-01-06T18:14:00+00:00")
    return datetime.datetime.fromisoformat(str(raw))


def calculate_moon_phase(moment: Optional[DateLike] = None) -> MoonPhase:
    """Phase of the Moon at ``moment`` (defaults to now, UTC)."""
    if moment is None:
        moment = datetime.datetime.now(datetime.timezone.utc)
    synodic_month = float(cfg().get("lunar.synodic_month", 29.53058867))

    elapsed = julian_day(moment) - julian_day(_reference_new_moon())
    fraction = (elapsed % synodic_month) / synodic_month
    index = min(int(math.floor(fraction * 8)), 7)
    return MoonPhase(
        index=index,
        name=PHASE_NAMES[index],
        emoji=PHASE_EMOJIS[index],
        cycle_fraction=fraction,
    )


def _format_remaining(delta: datetime.timedelta) -> str:
    minutes = int(delta.total_seconds() // 60)
    hours = minutes // 60
    if hours < 1:
        return f"{minutes}m"
    if hours < 48:
        return f"{hours}h"
    return f"{math.ceil(hours / 24)}d"


def next_moon_phase(moment: Optional[DateLike] = None) -> Optional[NextMoonPhase]:
    """Step forward hour by hour until the phase changes.

    Returns ``None`` when no change is found inside the configured lookahead
    window.
    """
    start = to_utc(moment) if moment is not None else to_utc(
        datetime.datetime.now(datetime.timezone.utc)
    )
    current = calculate_moon_phase(start).name
    lookahead = int(cfg().get("lunar.lookahead_hours", 192))

    step = start
    for _ in range(lookahead):
        step += datetime.timedelta(hours=1)
        phase = calculate_moon_phase(step)
        if phase.name != current:
            return NextMoonPhase(
                phase=phase.name,
                emoji=phase.emoji,
                moment=step,
                time_remaining=_format_remaining(step - start),
            )
    return None
