"""Swap-based refinement of an initial team assignment."""

from __future__ import annotations

import logging
import math
import random
from itertools import combinations
from typing import List

from pyteams.config import BalanceRules
from pyteams.models import Player, Team

from .stats import compute_team_stats, imbalance_score


logger = logging.getLogger(__name__)

_TOLERANCE = 1e-9


def _swapped(players: List[Player], index: int, replacement: Player) -> List[Player]:
    updated = list(players)
    updated[index] = replacement
    return updated


def _first_improving_swap(team_a: Team, team_b: Team, rules: BalanceRules) -> tuple[int, int] | None:
    stats_a = compute_team_stats(team_a.players)
    stats_b = compute_team_stats(team_b.players)
    current = imbalance_score(stats_a, stats_b, rules)
    if current <= _TOLERANCE:
        return None

    for i, player_a in enumerate(team_a.players):
        for j, player_b in enumerate(team_b.players):
            if player_a.rating == player_b.rating and player_a.primary_position == player_b.primary_position:
                continue
            candidate = imbalance_score(
                compute_team_stats(_swapped(team_a.players, i, player_b)),
                compute_team_stats(_swapped(team_b.players, j, player_a)),
                rules,
            )
            if candidate < current - _TOLERANCE:
                return i, j
    return None


def optimize_swaps(teams: List[Team], rng: random.Random, rules: BalanceRules) -> int:
    """Run first-improvement passes until one accepts nothing or the cap is hit.

    Returns the number of swaps applied.
    """

    pairs = list(combinations(range(len(teams)), 2))
    applied = 0
    for pass_number in range(rules.max_optimizer_passes):
        rng.shuffle(pairs)
        improved = False
        for a, b in pairs:
            swap = _first_improving_swap(teams[a], teams[b], rules)
            if swap is None:
                continue
            i, j = swap
            team_a, team_b = teams[a], teams[b]
            team_a.players[i], team_b.players[j] = team_b.players[j], team_a.players[i]
            applied += 1
            improved = True
        if not improved:
            logger.debug("Optimizer converged after %d passes (%d swaps)", pass_number + 1, applied)
            break
    else:
        logger.debug("Optimizer stopped at pass cap %d (%d swaps)", rules.max_optimizer_passes, applied)
    return applied


def _average_after(players: List[Player], index: int, replacement: Player) -> float:
    return compute_team_stats(_swapped(players, index, replacement)).average_rating


def reconcile_uneven_sizes(teams: List[Team]) -> int:
    """Move rating from larger, stronger teams toward smaller ones.

    A team with an extra player carries a higher rating sum by headcount alone,
    so pairs of (largest, smallest) teams trade the big team's best player for
    the small team's weakest. An exchange is kept only when it narrows the
    pair's average gap without reversing it; the first one that would not ends
    that pair. Returns the number of exchanges made.
    """

    sizes = [len(team.players) for team in teams]
    if len(set(sizes)) <= 1:
        return 0

    by_size = sorted(range(len(teams)), key=lambda index: sizes[index], reverse=True)
    exchanges = 0
    for rank in range(len(teams) // 2):
        big, small = teams[by_size[rank]], teams[by_size[-1 - rank]]
        size_diff = len(big.players) - len(small.players)
        if size_diff <= 0:
            continue
        gap = compute_team_stats(big.players).average_rating - compute_team_stats(small.players).average_rating
        if gap <= 0:
            continue

        limit = min(math.ceil(size_diff / 2), min(len(big.players), len(small.players)) // 3)
        # Slots already traded; a player who just arrived is never sent back.
        touched_big: set[int] = set()
        touched_small: set[int] = set()
        for _ in range(limit):
            donor = max(
                (i for i in range(len(big.players)) if i not in touched_big),
                key=lambda i: big.players[i].rating,
                default=None,
            )
            receiver = min(
                (j for j in range(len(small.players)) if j not in touched_small),
                key=lambda j: small.players[j].rating,
                default=None,
            )
            if donor is None or receiver is None:
                break
            giving, taking = big.players[donor], small.players[receiver]
            if giving.rating <= taking.rating:
                break
            new_gap = _average_after(big.players, donor, taking) - _average_after(small.players, receiver, giving)
            if not 0 <= new_gap < gap - _TOLERANCE:
                break
            big.players[donor], small.players[receiver] = taking, giving
            touched_big.add(donor)
            touched_small.add(receiver)
            gap = new_gap
            exchanges += 1

    if exchanges:
        logger.debug("Uneven-size reconciliation made %d exchanges", exchanges)
    return exchanges
