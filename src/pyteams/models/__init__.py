"""Player and team models."""

from .player import (
    ATTACKER,
    DEFAULT_POSITION,
    DEFAULT_RATING,
    DEFENDER,
    MIDFIELDER,
    POSITION_ORDER,
    POSITIONS,
    Player,
    normalize_position,
)
from .team import Team, TeamStats

__all__ = [
    "ATTACKER",
    "DEFAULT_POSITION",
    "DEFAULT_RATING",
    "DEFENDER",
    "MIDFIELDER",
    "POSITION_ORDER",
    "POSITIONS",
    "Player",
    "Team",
    "TeamStats",
    "normalize_position",
]
