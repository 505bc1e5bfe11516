"""Per-team statistics and balance scoring."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean, pstdev
from typing import Dict, Sequence

from pyteams.config import BalanceRules
from pyteams.models import POSITIONS, Player, Team, TeamStats


@dataclass(frozen=True)
class BalanceReport:
    """Side-by-side view of how evenly a set of teams came out."""

    average_ratings: tuple[float, ...]
    rating_stddevs: tuple[float, ...]
    position_counts: tuple[Dict[str, int], ...]
    team_sizes: tuple[int, ...]
    elos: tuple[float, ...]

    @property
    def rating_spread(self) -> float:
        if not self.average_ratings:
            return 0.0
        return max(self.average_ratings) - min(self.average_ratings)


def position_counts(players: Sequence[Player]) -> Dict[str, int]:
    counts = {position: 0 for position in POSITIONS}
    for player in players:
        counts[player.primary_position] += 1
    return counts


def compute_team_stats(players: Sequence[Player]) -> TeamStats:
    """Compute stats for ``players`` without touching the sequence."""

    ratings = [player.rating for player in players]
    return TeamStats(
        average_rating=fmean(ratings) if ratings else 0.0,
        rating_stddev=pstdev(ratings) if len(ratings) > 1 else 0.0,
        position_counts=position_counts(players),
    )


def imbalance_score(a: TeamStats, b: TeamStats, rules: BalanceRules) -> float:
    """Weighted distance between two teams; zero means identical profiles."""

    position_gap = sum(abs(a.position_counts[pos] - b.position_counts[pos]) for pos in POSITIONS)
    return (
        rules.mean_weight * abs(a.average_rating - b.average_rating)
        + rules.stddev_weight * abs(a.rating_stddev - b.rating_stddev)
        + rules.position_weight * position_gap
    )


def evaluate_team_balance(teams: Sequence[Team]) -> BalanceReport:
    stats = [compute_team_stats(team.players) for team in teams]
    return BalanceReport(
        average_ratings=tuple(item.average_rating for item in stats),
        rating_stddevs=tuple(item.rating_stddev for item in stats),
        position_counts=tuple(item.position_counts for item in stats),
        team_sizes=tuple(len(team.players) for team in teams),
        elos=tuple(sum(player.rating for player in team.players) for team in teams),
    )
