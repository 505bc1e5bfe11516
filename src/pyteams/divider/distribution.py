"""Initial placement of players onto teams.

Two passes run back to back. The position pass walks each position group
through a snake sweep so every team receives its share of attackers,
midfielders and defenders. Whatever that pass cannot place (quota or size
already met elsewhere, or no declared position) goes through the remainder
pass, which drops players one at a time onto the team they fit best.
"""

from __future__ import annotations

import logging
import random
from typing import Iterator, List, Mapping, Sequence

from pyteams.config import BalanceRules
from pyteams.models import DEFAULT_POSITION, POSITIONS, Player, Team

from .stats import compute_team_stats


logger = logging.getLogger(__name__)


def split_evenly(total: int, parts: int) -> list[int]:
    """Split ``total`` into ``parts`` sizes; the first ``total % parts`` get one extra."""

    base, remainder = divmod(total, parts)
    return [base + 1 if index < remainder else base for index in range(parts)]


class SnakeSweep:
    """Endless 0..k-1, k-1..0 walk over team indexes."""

    def __init__(self, team_count: int):
        forward = list(range(team_count))
        self._order = forward + forward[::-1]
        self._cursor = 0

    @property
    def cycle_length(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        index = self._order[self._cursor % len(self._order)]
        self._cursor += 1
        return index


def distribute_by_position(
    groups: Mapping[str, Sequence[Player]],
    teams: List[Team],
    size_targets: Sequence[int],
) -> list[Player]:
    """Place position groups with a snake sweep and return the players left over."""

    sweep = SnakeSweep(len(teams))
    leftovers: list[Player] = []

    for position in POSITIONS:
        group = list(groups.get(position, ()))
        if not group:
            continue
        position_targets = split_evenly(len(group), len(teams))
        placed = [0] * len(teams)

        for offset, player in enumerate(group):
            target_index = None
            for _ in range(sweep.cycle_length):
                index = next(sweep)
                if placed[index] < position_targets[index] and len(teams[index].players) < size_targets[index]:
                    target_index = index
                    break
            if target_index is None:
                leftovers.extend(group[offset:])
                break
            teams[target_index].players.append(player)
            placed[target_index] += 1

    if leftovers:
        logger.debug("Position pass left %d players for remainder placement", len(leftovers))
    return leftovers


def _position_need(player: Player, team: Team, rules: BalanceRules) -> float:
    counts = compute_team_stats(team.players).position_counts
    max_count = max(counts.values())
    preferences = player.positions or [DEFAULT_POSITION]
    score = 0.0
    for position, weight in zip(preferences, rules.preference_weights):
        need = 1.0 if max_count == 0 else 1.0 - counts[position] / max_count
        score += need * rules.position_need_scale * weight
    return score


def _rating_balance(player: Player, team: Team, rules: BalanceRules) -> float:
    if not team.players:
        return rules.rating_balance_base
    average = compute_team_stats(team.players).average_rating
    return rules.rating_balance_base - abs(player.rating - average)


def fit_score(player: Player, team: Team, rules: BalanceRules) -> float:
    return _position_need(player, team, rules) + _rating_balance(player, team, rules) * rules.rating_balance_weight


def distribute_remainder(
    pool: Sequence[Player],
    teams: List[Team],
    size_targets: Sequence[int],
    rng: random.Random,
    rules: BalanceRules,
) -> None:
    """Greedily place every pooled player on the eligible team with the best fit."""

    jittered = [(player.rating + rng.uniform(0.0, rules.remainder_jitter), player) for player in pool]
    jittered.sort(key=lambda item: item[0], reverse=True)

    for _, player in jittered:
        eligible = [index for index, team in enumerate(teams) if len(team.players) < size_targets[index]]
        if not eligible:
            raise RuntimeError("No team has room left; size targets do not cover the roster")
        best = max(eligible, key=lambda index: fit_score(player, teams[index], rules))
        teams[best].players.append(player)
