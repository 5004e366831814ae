"""Configuration loading for the celestial engine.

Defaults live in ``celestial_engine/celestial_config.yaml``. A second YAML
file named by the ``CELESTIAL_CONFIG`` environment variable may override any
subset of keys; the two documents are deep-merged.

Access goes through :func:`cfg`, which returns a cached, attribute-style view::

    cfg().orbs.conjunction
    cfg().get("feed.max_active", 10)
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "celestial_engine" / "celestial_config.yaml"
CONFIG_ENV_VAR = "CELESTIAL_CONFIG"

_ORB_KEYS = ("conjunction", "sextile", "square", "trine", "opposition")


class CelestialError(Exception):
    """Raised for invalid configuration or inputs the engine cannot interpret."""


class ConfigNamespace(SimpleNamespace):
    """Nested namespace with dotted-path lookups."""

    def get(self, path: str, default: Any = None) -> Any:
        node: Any = self
        for part in path.split("."):
            if isinstance(node, SimpleNamespace) and part in node.__dict__:
                node = node.__dict__[part]
            elif isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: value.to_dict() if isinstance(value, ConfigNamespace) else value
            for key, value in self.__dict__.items()
        }


def _to_namespace(value: Any) -> Any:
    if isinstance(value, dict):
        return ConfigNamespace(**{str(k): _to_namespace(v) for k, v in value.items()})
    if isinstance(value, list):
        return [_to_namespace(v) for v in value]
    return value


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as exc:
        raise CelestialError(f"Configuration file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise CelestialError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise CelestialError(f"Configuration root in {path} must be a mapping")
    return data


def _validate(data: Dict[str, Any]) -> None:
    """Reject configurations the engine cannot run with."""
    orbs = data.get("orbs", {})
    if not isinstance(orbs, dict):
        raise CelestialError("'orbs' must be a mapping of aspect name to degrees")
    for key in _ORB_KEYS:
        if key not in orbs:
            continue
        value = orbs[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise CelestialError(f"Orb '{key}' must be a non-negative number, got {value!r}")

    weights = data.get("compatibility", {}).get("weights", {})
    for key, value in weights.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise CelestialError(f"Compatibility weight '{key}' must be a non-negative number")


def load_config(path: Optional[str | Path] = None) -> ConfigNamespace:
    """Load defaults, apply an optional override file and return a namespace."""
    data = _read_yaml(DEFAULT_CONFIG_PATH)

    override_path = path or os.getenv(CONFIG_ENV_VAR)
    if override_path:
        logger.info("Applying configuration overrides from %s", override_path)
        data = _deep_merge(data, _read_yaml(Path(override_path)))

    _validate(data)
    return _to_namespace(data)


@lru_cache(maxsize=1)
def get_config() -> ConfigNamespace:
    config = load_config()
    logger.debug("Configuration loaded: %s", config.to_dict())
    return config


def cfg() -> ConfigNamespace:
    """Shortcut used throughout the engine."""
    return get_config()


def reset_config() -> None:
    """Drop the cached configuration so the next ``cfg()`` call reloads it."""
    get_config.cache_clear()
