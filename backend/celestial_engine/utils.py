"""Miscellaneous utility helpers for the celestial engine."""
from __future__ import annotations

from enum import Enum
from typing import Any


def token_to_string(token: Any) -> str:
    """Return a stable string representation of an enum member or value.

    Enums with a ``display_name`` or ``sign_name`` use it; other enums use
    their ``value``. Anything else is simply ``str()``-ed, making the helper
    safe for logging or JSON serialisation.
    """
    if isinstance(token, Enum):
        for attr in ("display_name", "sign_name"):
            name = getattr(token, attr, None)
            if isinstance(name, str):
                return name
        return str(token.value)
    if token is None:
        return ""
    return str(token)
