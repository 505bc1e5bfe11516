"""Team containers produced by the divider."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .player import Player


@dataclass
class Team:
    """Mutable team under construction; ``elo`` is the sum of member ratings."""

    players: List[Player] = field(default_factory=list)
    elo: float = 0.0

    def __len__(self) -> int:
        return len(self.players)

    def refresh_elo(self) -> float:
        self.elo = sum(player.rating for player in self.players)
        return self.elo


@dataclass(frozen=True)
class TeamStats:
    average_rating: float
    rating_stddev: float
    position_counts: Dict[str, int]
