from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from pyteams.ingest import GuestEntry
from pyteams.models import Player, Team
from pyteams.divider import BalanceReport


class PlayerPayload(BaseModel):
    player_id: str
    name: str
    rating: float | None = None
    positions: List[str] = Field(default_factory=list)
    is_guest: bool = False
    host_name: str | None = None

    def to_player(self) -> Player:
        return Player(
            player_id=self.player_id,
            name=self.name,
            rating=self.rating,
            positions=self.positions,
            is_guest=self.is_guest,
            host_name=self.host_name,
        )


class DivideRequest(BaseModel):
    players: List[PlayerPayload] = Field(default_factory=list)
    team_count: int = Field(default=2)
    seed: int | None = None
    guests: List[GuestEntry] = Field(default_factory=list)
    host_id: str | None = None


class TeamPlayerResponse(BaseModel):
    player_id: str
    name: str
    rating: float
    positions: List[str]
    primary_position: str
    is_guest: bool
    host_name: str | None


class TeamResponse(BaseModel):
    index: int
    elo: float
    average_rating: float
    players: List[TeamPlayerResponse]

    @classmethod
    def from_team(cls, index: int, team: Team) -> "TeamResponse":
        size = len(team.players)
        return cls(
            index=index,
            elo=team.elo,
            average_rating=team.elo / size if size else 0.0,
            players=[
                TeamPlayerResponse(
                    player_id=player.player_id,
                    name=player.name,
                    rating=player.rating,
                    positions=list(player.positions),
                    primary_position=player.primary_position,
                    is_guest=player.is_guest,
                    host_name=player.host_name,
                )
                for player in team.players
            ],
        )


class BalanceSummary(BaseModel):
    average_ratings: List[float]
    rating_stddevs: List[float]
    position_counts: List[Dict[str, int]]
    team_sizes: List[int]
    elos: List[float]
    rating_spread: float

    @classmethod
    def from_report(cls, report: BalanceReport) -> "BalanceSummary":
        return cls(
            average_ratings=list(report.average_ratings),
            rating_stddevs=list(report.rating_stddevs),
            position_counts=[dict(counts) for counts in report.position_counts],
            team_sizes=list(report.team_sizes),
            elos=list(report.elos),
            rating_spread=report.rating_spread,
        )


class DivideResponse(BaseModel):
    team_count: int
    seed: int | None
    teams: List[TeamResponse]
    balance: BalanceSummary
