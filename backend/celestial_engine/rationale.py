"""Utilities for turning a compatibility ledger into human-readable text."""
from __future__ import annotations

from typing import Any, Dict, List

from .polarity import Resonance, resonance_sign
from .utils import token_to_string


def build_rationale(ledger: List[Dict[str, Any]]) -> List[str]:
    """Create a rationale list from a contribution ledger.

    The function is pure and does not mutate the input ledger.
    """
    result: List[str] = []
    for entry in ledger:
        label = token_to_string(entry.get("label", entry.get("key", "")))
        numbers = f"{entry.get('number1', '?')}/{entry.get('number2', '?')}"
        contribution = entry.get("contribution", 0.0)
        sign = resonance_sign(entry.get("resonance", Resonance.NEUTRAL))
        if sign == "0":
            result.append(f"{label} {numbers} ({sign})")
        else:
            result.append(f"{label} {numbers} ({sign}{contribution:g})")
    return result
