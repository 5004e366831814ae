"""Sign ingress detection between two snapshots of the same bodies."""
from __future__ import annotations

from typing import Dict, List, Sequence

try:
    from ..models import PlanetPosition
except ImportError:  # pragma: no cover - fallback when executed as script
    from models import PlanetPosition


def format_ingress(position: PlanetPosition) -> str:
    return f"{position.name} Entered {position.sign.sign_name}"


def detect_ingresses(
    previous: Sequence[PlanetPosition], current: Sequence[PlanetPosition]
) -> List[str]:
    """Report bodies whose sign changed between ``previous`` and ``current``.

    Output follows the order of ``current``. Bodies with no counterpart in
    ``previous`` are skipped.
    """
    previous_by_name: Dict[str, PlanetPosition] = {}
    for pos in previous:
        # first occurrence wins, matching a linear search
        previous_by_name.setdefault(pos.name, pos)

    ingresses: List[str] = []
    for curr in current:
        prev = previous_by_name.get(curr.name)
        if prev is not None and prev.sign is not curr.sign:
            ingresses.append(format_ingress(curr))
    return ingresses
