"""Zodiac sign decomposition of absolute ecliptic degrees."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .angles import normalize_degrees

SIGN_WIDTH = 30.0


class ZodiacSign(Enum):
    """The twelve tropical signs, in order; each spans 30 degrees."""

    ARIES = (0, "Aries")
    TAURUS = (30, "Taurus")
    GEMINI = (60, "Gemini")
    CANCER = (90, "Cancer")
    LEO = (120, "Leo")
    VIRGO = (150, "Virgo")
    LIBRA = (180, "Libra")
    SCORPIO = (210, "Scorpio")
    SAGITTARIUS = (240, "Sagittarius")
    CAPRICORN = (270, "Capricorn")
    AQUARIUS = (300, "Aquarius")
    PISCES = (330, "Pisces")

    def __init__(self, start_degree, sign_name):
        self.start_degree = start_degree
        self.sign_name = sign_name

    @property
    def index(self) -> int:
        return self.start_degree // 30

    def __str__(self) -> str:
        return self.sign_name


SIGNS = tuple(ZodiacSign)


@dataclass(frozen=True)
class SignPlacement:
    sign: ZodiacSign
    degree_in_sign: float


def decompose(absolute_degree: float) -> SignPlacement:
    """Split an absolute degree into its sign and the degree within that sign.

    A value exactly on a cusp belongs to the following sign, and 360 wraps to
    Aries 0.
    """
    normalized = normalize_degrees(absolute_degree)
    if math.isnan(normalized):
        return SignPlacement(ZodiacSign.ARIES, normalized)
    # guard against 359.99999... flooring to 12 after float rounding
    index = min(int(normalized // SIGN_WIDTH), len(SIGNS) - 1)
    return SignPlacement(SIGNS[index], normalized % SIGN_WIDTH)


def sign_of(absolute_degree: float) -> ZodiacSign:
    return decompose(absolute_degree).sign


def sign_index(sign: ZodiacSign) -> int:
    return sign.index


def sign_from_name(name: str) -> Optional[ZodiacSign]:
    """Look up a sign by its display name, case-insensitively."""
    key = (name or "").strip().upper()
    return ZodiacSign.__members__.get(key)
