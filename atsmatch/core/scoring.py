"""Product tunables (weights, credits, importance bonuses) from ``config/scoring.yaml``.

``ATS_SCORING_CONFIG`` points at an alternative file. Values are read lazily
and cached for the process lifetime.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "scoring.yaml"

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None


def scoring_config_path() -> Path:
    override = (os.getenv("ATS_SCORING_CONFIG") or "").strip()
    return Path(override) if override else DEFAULT_SCORING_CONFIG_PATH


def _check_weights(parsed: dict[str, Any], path: Path) -> None:
    weights = (parsed.get("scoring") or {}).get("weights") or {}
    if not weights:
        return
    total = float(weights.get("hard", 0)) + float(weights.get("soft", 0))
    if total != 100:
        raise RuntimeError(f"Invalid scoring config '{path}': scoring.weights must sum to 100, got {total:g}.")


def get_scoring_config() -> dict[str, Any]:
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    path = scoring_config_path()
    if not path.exists():
        raise RuntimeError(f"Scoring config not found at '{path}'. Expected file: config/scoring.yaml")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")
    _check_weights(parsed, path)

    logger.debug("scoring_config_loaded path=%s", path)
    _SCORING_CONFIG_CACHE = parsed
    return _SCORING_CONFIG_CACHE


def reset_scoring_config() -> None:
    """Drop the cached config so the next lookup re-reads the file."""
    global _SCORING_CONFIG_CACHE
    _SCORING_CONFIG_CACHE = None


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Nested value by dot path, e.g. ``scoring.weights.hard``; ``default`` when any key is missing."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
