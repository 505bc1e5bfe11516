"""Canonical player model shared across ingestion and divider layers."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


ATTACKER = "Attacker"
MIDFIELDER = "Midfielder"
DEFENDER = "Defender"

POSITIONS: tuple[str, ...] = (ATTACKER, MIDFIELDER, DEFENDER)
DEFAULT_POSITION = MIDFIELDER
DEFAULT_RATING = 7.0

# Display order inside a finished team.
POSITION_ORDER: Dict[str, int] = {DEFENDER: 0, MIDFIELDER: 1, ATTACKER: 2}

_POSITION_LOOKUP = {position.lower(): position for position in POSITIONS}


def normalize_position(value: str) -> str:
    """Return the canonical spelling of ``value``, raising ValueError if unknown."""

    key = value.strip().lower()
    if key not in _POSITION_LOOKUP:
        raise ValueError(f"Unknown position {value!r}; expected one of {', '.join(POSITIONS)}")
    return _POSITION_LOOKUP[key]


class Player(BaseModel):
    """Roster entry consumed by the divider.

    ``positions`` is the ranked preference list; the first entry is the primary
    position. An empty list means the player declared nothing.
    """

    player_id: str = Field(..., min_length=1)
    name: str
    rating: float = Field(default=DEFAULT_RATING, ge=0.0)
    positions: List[str] = Field(default_factory=list)
    is_guest: bool = False
    host_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("rating", mode="before")
    @classmethod
    def _default_rating(cls, value: Any) -> Any:
        if value is None or value == 0:
            return DEFAULT_RATING
        return value

    @field_validator("positions", mode="before")
    @classmethod
    def _canonical_positions(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        seen: list[str] = []
        for item in value:
            position = normalize_position(str(item))
            if position not in seen:
                seen.append(position)
        return seen

    @property
    def declared_position(self) -> Optional[str]:
        return self.positions[0] if self.positions else None

    @property
    def primary_position(self) -> str:
        return self.positions[0] if self.positions else DEFAULT_POSITION
