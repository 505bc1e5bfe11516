"""Entry point that splits a roster into balanced teams."""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence

from pyteams.config import BalanceRules, load_rules
from pyteams.models import POSITION_ORDER, POSITIONS, Player, Team

from .distribution import distribute_by_position, distribute_remainder, split_evenly
from .optimizer import optimize_swaps, reconcile_uneven_sizes


logger = logging.getLogger(__name__)

NO_POSITION = "none"


class TeamDivisionError(ValueError):
    """Base class for rejected division requests."""


class InvalidTeamCount(TeamDivisionError):
    def __init__(self, team_count: int, allowed: Sequence[int]):
        self.team_count = team_count
        self.allowed = tuple(allowed)
        choices = " or ".join(str(value) for value in self.allowed)
        super().__init__(f"Number of teams must be {choices}, got {team_count}")


class InsufficientPlayers(TeamDivisionError):
    def __init__(self, player_count: int, team_count: int):
        self.player_count = player_count
        self.team_count = team_count
        super().__init__(f"Cannot create {team_count} teams with only {player_count} players")


def group_by_position(players: Sequence[Player]) -> Dict[str, List[Player]]:
    """Bucket players by declared primary position, each bucket sorted by rating (desc)."""

    groups: Dict[str, List[Player]] = {position: [] for position in (*POSITIONS, NO_POSITION)}
    for player in players:
        groups[player.declared_position or NO_POSITION].append(player)
    for members in groups.values():
        members.sort(key=lambda player: player.rating, reverse=True)
    return groups


def local_jitter(players: Sequence[Player], rng: random.Random, partitions: int = 3) -> List[Player]:
    """Shuffle within contiguous rank bands only, keeping the coarse rating order."""

    result: List[Player] = []
    start = 0
    for size in split_evenly(len(players), partitions):
        band = list(players[start:start + size])
        rng.shuffle(band)
        result.extend(band)
        start += size
    return result


def _finalize(teams: List[Team]) -> None:
    for team in teams:
        team.refresh_elo()
        team.players.sort(key=lambda player: POSITION_ORDER[player.primary_position])


def divide_teams(
    players: Sequence[Player],
    team_count: int,
    *,
    rng: Optional[random.Random] = None,
    rules: Optional[BalanceRules] = None,
) -> List[Team]:
    """Split ``players`` into ``team_count`` teams balanced on rating, positions and size.

    ``rng`` drives every random choice; pass a seeded ``random.Random`` for
    reproducible output. The input sequence is never modified.
    """

    rules = rules or load_rules()
    if team_count not in rules.allowed_team_counts:
        raise InvalidTeamCount(team_count, rules.allowed_team_counts)
    roster = list(players)
    if len(roster) < team_count:
        raise InsufficientPlayers(len(roster), team_count)
    rng = rng or random.Random()

    size_targets = split_evenly(len(roster), team_count)
    teams = [Team() for _ in range(team_count)]

    groups = {
        key: local_jitter(members, rng, rules.jitter_partitions)
        for key, members in group_by_position(roster).items()
    }

    leftovers = distribute_by_position(groups, teams, size_targets)
    pool = sorted([*leftovers, *groups[NO_POSITION]], key=lambda player: player.rating, reverse=True)
    distribute_remainder(pool, teams, size_targets, rng, rules)

    swaps = optimize_swaps(teams, rng, rules)
    exchanges = reconcile_uneven_sizes(teams)
    _finalize(teams)

    logger.info(
        "Divided %d players into %d teams (sizes=%s, elos=%s, swaps=%d, exchanges=%d)",
        len(roster),
        team_count,
        [len(team.players) for team in teams],
        [round(team.elo, 2) for team in teams],
        swaps,
        exchanges,
    )
    return teams
