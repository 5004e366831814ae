"""Numerology reductions, name numbers and personal cycles.

All reductions preserve the master numbers 11, 22 and 33: the check runs on
every intermediate digit sum, so 29 stops at 11 instead of continuing to 2.
"""
from __future__ import annotations

import datetime
import logging
import re
from enum import Enum
from typing import Dict, Optional, Union

try:
    from ..models import NumerologyProfile, NumerologyResult, Reduction
except ImportError:  # pragma: no cover - fallback when executed as script
    from models import NumerologyProfile, NumerologyResult, Reduction

logger = logging.getLogger(__name__)

DateInput = Union[datetime.date, datetime.datetime, str]

MASTER_NUMBERS = frozenset({11, 22, 33})
VOWELS = frozenset("aeiou")
UNKNOWN_ARCHETYPE = "The Unknown"


class NumerologySystem(str, Enum):
    PYTHAGOREAN = "pythagorean"
    CHALDEAN = "chaldean"


# A=1 .. I=9, repeating every nine letters
PYTHAGOREAN_MAP: Dict[str, int] = {
    letter: index % 9 + 1 for index, letter in enumerate("abcdefghijklmnopqrstuvwxyz")
}

# Nothing maps to 9 in the Chaldean table
CHALDEAN_MAP: Dict[str, int] = {
    "a": 1, "i": 1, "j": 1, "q": 1, "y": 1,
    "b": 2, "k": 2, "r": 2,
    "c": 3, "g": 3, "l": 3, "s": 3,
    "d": 4, "m": 4, "t": 4,
    "e": 5, "h": 5, "n": 5, "x": 5,
    "u": 6, "v": 6, "w": 6,
    "o": 7, "z": 7,
    "f": 8, "p": 8,
}

LETTER_TABLES: Dict[NumerologySystem, Dict[str, int]] = {
    NumerologySystem.PYTHAGOREAN: PYTHAGOREAN_MAP,
    NumerologySystem.CHALDEAN: CHALDEAN_MAP,
}

ARCHETYPES: Dict[int, str] = {
    1: "The Primal Initiator",
    2: "The Cosmic Diplomat",
    3: "The Radiant Creator",
    4: "The Master Builder",
    5: "The Chaos Navigator",
    6: "The Harmonics Keeper",
    7: "The Mystic Seeker",
    8: "The Abundance Engine",
    9: "The Universal Sage",
    11: "The Illumined Messenger",
    22: "The Reality Architect",
    33: "The Ascended Guide",
}

RICH_ARCHETYPES: Dict[int, Dict[str, str]] = {
    1: {
        "title": "The Primal Initiator",
        "gift": "Unstoppable willpower, innovation, and leadership.",
        "shadow": "Domineering, aggressive, or egotistical behavior.",
        "challenge": "To lead without tyranny and innovate without isolation.",
    },
    2: {
        "title": "The Cosmic Diplomat",
        "gift": "Intuition, empathy, and harmonization of opposites.",
        "shadow": "Over-sensitivity, codependency, or indecision.",
        "challenge": "To seek peace without sacrificing your own boundaries.",
    },
    3: {
        "title": "The Radiant Creator",
        "gift": "Expression, optimism, and artistic brilliance.",
        "shadow": "Superficiality, scattered energy, or moodiness.",
        "challenge": "To find depth in expression and focus your scattered light.",
    },
    4: {
        "title": "The Master Builder",
        "gift": "Stability, pragmatism, and foundational strength.",
        "shadow": "Rigidity, stubbornness, or narrow-mindedness.",
        "challenge": "To build structures that can flex and evolve.",
    },
    5: {
        "title": "The Chaos Navigator",
        "gift": "Freedom, adaptability, and magnetic charisma.",
        "shadow": "Restlessness, irresponsibility, or addiction to stimulation.",
        "challenge": "To find freedom within discipline.",
    },
    6: {
        "title": "The Harmonics Keeper",
        "gift": "Nurturing, responsibility, and service to others.",
        "shadow": "Martyrdom, perfectionism, or interference.",
        "challenge": "To care for others without neglecting the self.",
    },
    7: {
        "title": "The Mystic Seeker",
        "gift": "Analysis, spiritual depth, and truth-seeking.",
        "shadow": "Isolation, cynicism, or emotional detachment.",
        "challenge": "To trust intuition as much as logic.",
    },
    8: {
        "title": "The Abundance Engine",
        "gift": "Power, authority, and material mastery.",
        "shadow": "Greed, manipulation, or abuse of power.",
        "challenge": "To balance material success with spiritual integrity.",
    },
    9: {
        "title": "The Universal Sage",
        "gift": "Compassion, wisdom, and global consciousness.",
        "shadow": "Fanaticism, resentment, or loss of self.",
        "challenge": "To let go of the past and embrace universal love.",
    },
    11: {
        "title": "The Illumined Messenger",
        "gift": "High intuition, inspiration, and electric energy.",
        "shadow": "Nervous tension, impracticality, or ego inflation.",
        "challenge": "To channel high-voltage inspiration into practical reality.",
    },
    22: {
        "title": "The Reality Architect",
        "gift": "Manifesting large-scale dreams into matter.",
        "shadow": "Overwhelming pressure, destructive capability.",
        "challenge": "To build a better world, not just a rigid empire.",
    },
    33: {
        "title": "The Ascended Guide",
        "gift": "Master teacher, unconditional love, and healing.",
        "shadow": "Overextending, emotional burnout.",
        "challenge": "To heal the world by first healing yourself.",
    },
}

UNKNOWN_DETAILS: Dict[str, str] = {
    "title": UNKNOWN_ARCHETYPE,
    "gift": "Mystery",
    "shadow": "Uncertainty",
    "challenge": "To discover the self.",
}

DAILY_PULSE_MAP: Dict[int, Dict[str, str]] = {
    1: {
        "message": "New beginnings are surging. Plant seeds now for the cycle ahead. Your energy is electric.",
        "focus": "Action",
        "color": "Red",
        "context": "Personal Day 1 is the seed-point. Red aligns with the Root Chakra and vitality needed for new starts.",
    },
    2: {
        "message": "Patience is your power. Connect, cooperate, and listen to the subtle frequencies.",
        "focus": "Balance",
        "color": "Orange",
        "context": "Personal Day 2 follows the spark with incubation. Orange reflects the Sacral Chakra's connection and emotional balance.",
    },
    3: {
        "message": "Express yourself freely. Creative sparks will fly if you lower your shield.",
        "focus": "Joy",
        "color": "Yellow",
        "context": "Personal Day 3 is about expression. Yellow mirrors the Solar Plexus, radiating confidence and joy.",
    },
    4: {
        "message": "Ground your energy. Attend to details and build a foundation for your wilder dreams.",
        "focus": "Order",
        "color": "Green",
        "context": "Personal Day 4 demands structure. Green connects to the Heart, grounding you in stabilizing earth energy.",
    },
    5: {
        "message": "Expect the unexpected. Break free. Sudden insights or disruptions are shaking up your routine.",
        "focus": "Freedom",
        "color": "Blue",
        "context": "Personal Day 5 brings change. Blue aligns with the Throat Chakra, encouraging freedom of truth and adaptability.",
    },
    6: {
        "message": "Tend to your tribe. Healing, harmony, and responsibility are calling for your heart.",
        "focus": "Love",
        "color": "Indigo",
        "context": "Personal Day 6 focuses on harmony. Indigo represents the Third Eye's insight into responsibility and care.",
    },
    7: {
        "message": "Inward reflection reveals universal truths. Step back from the noise and listen.",
        "focus": "Spirit",
        "color": "Violet",
        "context": "Personal Day 7 is the pause. Violet connects to the Crown, inviting spiritual reflection and solitude.",
    },
    8: {
        "message": "Manifestation power is high. Claim your authority and execute your will.",
        "focus": "Power",
        "color": "Gold",
        "context": "Personal Day 8 is the harvest. Gold symbolizes value, power, and the high-frequency manifestation of the Aura.",
    },
    9: {
        "message": "Release what no longer serves. Clear the deck for the new wave incoming.",
        "focus": "Release",
        "color": "White",
        "context": "Personal Day 9 is the completion. White contains all colors, representing clarity, release, and purification before the next cycle.",
    },
}


# ----------------------------------------------------------------------
# Reduction
# ----------------------------------------------------------------------

def digit_sum(n: int) -> int:
    """Sum of the decimal digits of ``n``."""
    return sum(int(ch) for ch in str(abs(int(n))))


def reduce_number(n: int) -> Reduction:
    """Reduce ``n`` by repeated digit sums, stopping at a master number."""
    if n in MASTER_NUMBERS:
        return Reduction(core=n, is_master=True)
    if n < 10:
        return Reduction(core=n, is_master=False)

    current = n
    while current > 9 and current not in MASTER_NUMBERS:
        current = digit_sum(current)
    return Reduction(core=current, is_master=current in MASTER_NUMBERS)


def get_archetype(number: int) -> str:
    return ARCHETYPES.get(number, UNKNOWN_ARCHETYPE)


def get_rich_details(number: int) -> Dict[str, str]:
    return dict(RICH_ARCHETYPES.get(number, UNKNOWN_DETAILS))


def _result(total: int, source: Optional[str]) -> NumerologyResult:
    final = reduce_number(total)
    return NumerologyResult(
        sum=total,
        core=final.core,
        is_master=final.is_master,
        archetype=get_archetype(final.core),
        source=source,
    )


# ----------------------------------------------------------------------
# Input coercion
# ----------------------------------------------------------------------

# Leading YYYY-MM-DD of a string whose components may be out of range
_DATE_PREFIX = re.compile(r"^(-?\d{1,6})-(\d{1,2})-(\d{1,2})")


def _roll_date(year: int, month: int, day: int) -> Optional[datetime.date]:
    """Build a date letting month and day overflow into the next unit.

    ``(2024, 2, 30)`` becomes 1 March 2024 and ``(1990, 13, 1)`` becomes
    1 January 1991. Returns ``None`` only outside the representable years.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        return datetime.date(year, month, 1) + datetime.timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def _coerce_date(value: DateInput) -> Optional[datetime.date]:
    """Accept a date, datetime or ISO string and return the UTC calendar date.

    Out-of-range components roll forward. Anything that cannot be read as a
    date at all gives ``None`` and a logged warning; callers turn that into
    a zero result instead of failing.
    """
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            if len(text) == 10:
                return datetime.date.fromisoformat(text)
            return _coerce_date(datetime.datetime.fromisoformat(text))
        except ValueError:
            match = _DATE_PREFIX.match(text)
            if match:
                rolled = _roll_date(*(int(part) for part in match.groups()))
                if rolled is not None:
                    return rolled
    logger.warning("Unrecognised date %r, numerology treats it as unknown", value)
    return None


def _today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


def _target(target_date: Optional[DateInput]) -> Optional[datetime.date]:
    return _coerce_date(target_date) if target_date is not None else _today()


def _resolve_system(system: Union[NumerologySystem, str]) -> NumerologySystem:
    """Pythagorean when asked for by name, Chaldean for anything else."""
    if isinstance(system, NumerologySystem):
        return system
    if str(system).strip().lower() == NumerologySystem.PYTHAGOREAN.value:
        return NumerologySystem.PYTHAGOREAN
    return NumerologySystem.CHALDEAN


def letter_value_sum(text: str, system: Union[NumerologySystem, str]) -> int:
    """Sum letter values of ``text``; anything outside a-z counts as zero."""
    table = LETTER_TABLES[_resolve_system(system)]
    clean = re.sub(r"[^a-z]", "", (text or "").lower())
    return sum(table.get(ch, 0) for ch in clean)


# ----------------------------------------------------------------------
# Core numbers
# ----------------------------------------------------------------------

def calculate_life_path(birth_date: DateInput) -> NumerologyResult:
    """Life Path from a birth date.

    Year, month and day are each digit-summed and reduced on their own, then
    the three reduced values are summed and reduced again. An unreadable date
    gives a zero result with ``"The Unknown"`` archetype.
    """
    d = _coerce_date(birth_date)
    if d is None:
        return _result(0, str(birth_date))
    reduced_year = reduce_number(digit_sum(d.year)).core
    reduced_month = reduce_number(digit_sum(d.month)).core
    reduced_day = reduce_number(digit_sum(d.day)).core

    total = reduced_year + reduced_month + reduced_day
    return _result(total, d.isoformat())


def calculate_name(name: str, system: Union[NumerologySystem, str]) -> NumerologyResult:
    return _result(letter_value_sum(name, system), name)


def calculate_soul_urge(name: str, system: Union[NumerologySystem, str]) -> NumerologyResult:
    """Soul Urge (heart's desire): vowels only."""
    vowels = "".join(ch for ch in (name or "").lower() if ch in VOWELS)
    return _result(letter_value_sum(vowels, system), "Soul Urge")


def calculate_personality(name: str, system: Union[NumerologySystem, str]) -> NumerologyResult:
    """Personality (outer mask): consonants only."""
    consonants = "".join(
        ch for ch in (name or "").lower() if "a" <= ch <= "z" and ch not in VOWELS
    )
    return _result(letter_value_sum(consonants, system), "Personality")


def build_profile(
    birth_date: DateInput,
    full_name: str,
    active_name: Optional[str] = None,
) -> NumerologyProfile:
    """Assemble the standard profile: Pythagorean date and birth name numbers,
    Chaldean number for the name in everyday use."""
    return NumerologyProfile(
        life_path=calculate_life_path(birth_date),
        destiny=calculate_name(full_name, NumerologySystem.PYTHAGOREAN),
        active=calculate_name(active_name or "Initiate", NumerologySystem.CHALDEAN),
        soul_urge=calculate_soul_urge(full_name, NumerologySystem.PYTHAGOREAN),
        personality=calculate_personality(full_name, NumerologySystem.PYTHAGOREAN),
    )


# ----------------------------------------------------------------------
# Personal cycles
# ----------------------------------------------------------------------
# Each cycle is 0 when a date it depends on cannot be read.

def calculate_personal_year(
    birth_date: DateInput, target_date: Optional[DateInput] = None
) -> int:
    birth = _coerce_date(birth_date)
    target = _target(target_date)
    if birth is None or target is None:
        return 0

    day = reduce_number(birth.day).core
    month = reduce_number(birth.month).core
    year = reduce_number(target.year).core
    return reduce_number(day + month + year).core


def calculate_personal_month(
    personal_year: int, target_date: Optional[DateInput] = None
) -> int:
    target = _target(target_date)
    if target is None:
        return 0
    return reduce_number(personal_year + target.month).core


def calculate_personal_day(
    birth_date: DateInput, target_date: Optional[DateInput] = None
) -> int:
    target = _target(target_date)
    if target is None:
        return 0
    personal_year = calculate_personal_year(birth_date, target)
    if personal_year == 0:
        return 0
    return reduce_number(personal_year + target.month + target.day).core


def get_daily_pulse(
    birth_date: DateInput, target_date: Optional[DateInput] = None
) -> Dict[str, object]:
    """Guidance card for the personal day, with the derivation spelled out."""
    target = _target(target_date)
    personal_year = calculate_personal_year(birth_date, target) if target else 0
    day_number = calculate_personal_day(birth_date, target) if target else 0
    # master and unknown personal days fall back to the day-1 card
    pulse = DAILY_PULSE_MAP.get(day_number, DAILY_PULSE_MAP[1])

    month = target.month if target else 0
    day = target.day if target else 0
    context = (
        f"Derived from your Personal Year ({personal_year}) + Month ({month}) "
        f"+ Day ({day}). {pulse['context']}"
    )
    return {**pulse, "day_number": day_number, "context": context}
