"""Tuning constants for the team divider."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Dict, Mapping, Tuple


logger = logging.getLogger(__name__)

_MAX_PASSES_ENV = "PYTEAMS_MAX_OPTIMIZER_PASSES"
_REMAINDER_JITTER_ENV = "PYTEAMS_REMAINDER_JITTER"


@dataclass(frozen=True)
class BalanceRules:
    allowed_team_counts: Tuple[int, ...] = (2, 4)
    max_optimizer_passes: int = 100
    jitter_partitions: int = 3
    remainder_jitter: float = 0.5
    preference_weights: Tuple[float, ...] = (1.0, 0.7, 0.4)
    position_need_scale: float = 10.0
    rating_balance_base: float = 10.0
    rating_balance_weight: float = 1.5
    mean_weight: float = 3.0
    stddev_weight: float = 2.0
    position_weight: float = 1.0
    guest_default_rating: float = 6.0


# Labels offered on the check-in form for guests without a known rating.
SKILL_LEVELS: Mapping[str, float] = {
    "Beginner": 5.0,
    "Intermediate": 6.0,
    "Experienced": 7.0,
    "Advanced": 8.0,
}


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def load_rules(**overrides) -> BalanceRules:
    """Return default rules with environment and keyword overrides applied."""

    defaults = BalanceRules()
    env_values: Dict[str, object] = {
        "max_optimizer_passes": _env_int(_MAX_PASSES_ENV, defaults.max_optimizer_passes, min_value=0),
        "remainder_jitter": _env_float(_REMAINDER_JITTER_ENV, defaults.remainder_jitter, clamp_min=0.0, clamp_max=5.0),
    }
    changed = {key: value for key, value in env_values.items() if value != getattr(defaults, key)}
    if changed:
        logger.info("Balance rules overridden from environment: %s", changed)
    return replace(defaults, **{**changed, **overrides})


def skill_rating(label: str) -> float:
    """Resolve a skill level label (case-insensitive), raising KeyError if unknown."""

    for name, value in SKILL_LEVELS.items():
        if name.lower() == label.strip().lower():
            return value
    raise KeyError(f"Unknown skill level {label!r}")
