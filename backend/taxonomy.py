from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class RelationshipCategory(str, Enum):
    """Kinds of relationship a compatibility reading can be framed in."""

    ROMANTIC = "romantic"
    PLATONIC = "platonic"
    BUSINESS = "business"
    FAMILY = "family"


class FamilyRole(str, Enum):
    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    EXTENDED = "extended"
    GENERAL = "general"


# ``high_match_above`` is the life path match score that counts as a strong
# alignment when picking the narrative insight for the category.
CATEGORY_DEFAULTS: Dict[RelationshipCategory, Dict[str, Any]] = {
    RelationshipCategory.ROMANTIC: {
        "high_match_above": 80,
        "insights": {
            "high": "A deeply resonant romantic alignment with high soulful compatibility.",
            "low": "A relationship of growth. Dynamic friction sparks passion and evolution.",
        },
    },
    RelationshipCategory.BUSINESS: {
        "high_match_above": 70,
        "insights": {
            "high": "Strong professional synergy. Efficient execution of shared goals.",
            "low": "Requires clear role definition to avoid vibrational overlap.",
        },
    },
    RelationshipCategory.PLATONIC: {
        "high_match_above": 80,
        "insights": {
            "any": "A meeting of minds and spirits. Mutual support on external journeys.",
        },
    },
    RelationshipCategory.FAMILY: {
        "high_match_above": 80,
        "insights": {
            "lineage": "Ancient karmic bond. This {role} connection focuses on ancestral learning and patterns.",
            "sibling": "Parallel soul journeys. Shared roots with individual vibrational expressions.",
            "any": "A foundational familial tie rooted in shared energetic heritage.",
        },
    },
}


@dataclass(frozen=True)
class RelationshipContext:
    category: RelationshipCategory
    role: Optional[FamilyRole] = None


def resolve_category(value: Optional[str | RelationshipCategory]) -> Optional[RelationshipCategory]:
    """Resolve a category value to :class:`RelationshipCategory`.

    Accepts either an enum member or its string value (case-insensitive).
    Unknown strings are logged and re-raised as ``ValueError``.
    """

    if value is None or value == "":
        return None
    if isinstance(value, RelationshipCategory):
        return value
    try:
        return RelationshipCategory(str(value).strip().lower())
    except ValueError as exc:
        logger.warning("Unknown relationship category '%s'", value)
        raise exc


def resolve_role(value: Optional[str | FamilyRole]) -> Optional[FamilyRole]:
    if value is None or value == "":
        return None
    if isinstance(value, FamilyRole):
        return value
    try:
        return FamilyRole(str(value).strip().lower())
    except ValueError as exc:
        logger.warning("Unknown family role '%s'", value)
        raise exc


def make_context(
    category: str | RelationshipCategory,
    role: Optional[str | FamilyRole] = None,
) -> RelationshipContext:
    cat = resolve_category(category)
    if cat is None:
        raise ValueError("A relationship category is required")
    return RelationshipContext(category=cat, role=resolve_role(role))


def get_defaults(category: str | RelationshipCategory) -> Dict[str, Any]:
    cat = resolve_category(category)
    return CATEGORY_DEFAULTS.get(cat, {})
