from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any
import logging

from celestial_config import cfg
from celestial_engine.angles import normalize_degrees
from celestial_engine.zodiac import ZodiacSign, decompose


logger = logging.getLogger(__name__)

__all__ = [
    "ZodiacSign",
    "AspectType",
    "PlanetPosition",
    "Aspect",
    "HouseCusp",
    "NatalChart",
    "Reduction",
    "NumerologyResult",
    "NumerologyProfile",
    "MatchScore",
    "SynergyResult",
]


class AspectType(Enum):
    """Major Ptolemaic aspects with configurable orbs."""
    CONJUNCTION = (0, "conjunction", "Conjunction")
    SEXTILE = (60, "sextile", "Sextile")
    SQUARE = (90, "square", "Square")
    TRINE = (120, "trine", "Trine")
    OPPOSITION = (180, "opposition", "Opposition")

    def __init__(self, degrees, config_key, display_name):
        self.degrees = degrees
        self.config_key = config_key
        self.display_name = display_name

    @property
    def orb(self) -> float:
        """Get orb from configuration."""
        try:
            return cfg().orbs.__dict__[self.config_key]
        except (AttributeError, KeyError):
            logger.warning(f"Orb not found for {self.config_key}, using default 8.0")
            return 8.0

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class PlanetPosition:
    """One body's placement in a chart.

    ``absolute_degree`` is canonical and is normalized into ``[0, 360)`` on
    construction; ``sign`` and ``degree`` are always derived from it.
    """
    name: str
    absolute_degree: float
    retrograde: bool = False
    house: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "absolute_degree", normalize_degrees(self.absolute_degree))

    @property
    def sign(self) -> ZodiacSign:
        return decompose(self.absolute_degree).sign

    @property
    def degree(self) -> float:
        return decompose(self.absolute_degree).degree_in_sign


@dataclass(frozen=True)
class Aspect:
    planet1: PlanetPosition
    planet2: PlanetPosition
    type: AspectType
    angle: float
    orb: float
    is_synastry: bool = False


@dataclass(frozen=True)
class HouseCusp:
    house: int
    absolute_degree: float

    @property
    def sign(self) -> ZodiacSign:
        return decompose(self.absolute_degree).sign

    @property
    def degree(self) -> float:
        return decompose(self.absolute_degree).degree_in_sign


@dataclass
class NatalChart:
    date: str  # ISO timestamp (UTC) the chart was cast for
    planets: List[PlanetPosition]
    houses: List[HouseCusp] = field(default_factory=list)
    ascendant: Optional[float] = None
    julian_day: float = 0.0
    location: Optional[tuple] = None  # (latitude, longitude)

    def position(self, name: str) -> Optional[PlanetPosition]:
        for planet in self.planets:
            if planet.name == name:
                return planet
        return None


@dataclass(frozen=True)
class Reduction:
    core: int
    is_master: bool


@dataclass(frozen=True)
class NumerologyResult:
    sum: int  # raw compound total before reduction
    core: int  # reduced digit or master number
    is_master: bool
    archetype: str
    source: Optional[str] = None


@dataclass(frozen=True)
class NumerologyProfile:
    life_path: NumerologyResult  # Pythagorean, birth date
    destiny: NumerologyResult  # Pythagorean, full birth name
    active: NumerologyResult  # Chaldean, chosen name
    soul_urge: Optional[NumerologyResult] = None  # vowels
    personality: Optional[NumerologyResult] = None  # consonants


@dataclass(frozen=True)
class MatchScore:
    score: int
    description: str


@dataclass
class SynergyResult:
    overall_score: int
    life_path_match: MatchScore
    destiny_match: MatchScore
    soul_urge_match: MatchScore
    personality_match: MatchScore
    synergy_number: int
    context: Any  # taxonomy.RelationshipContext
    type_insight: str
    resonance: Any  # celestial_engine.polarity.Resonance
    ledger: List[Dict[str, Any]] = field(default_factory=list)
