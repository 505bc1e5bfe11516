import random

import pytest

from pyteams.config import BalanceRules
from pyteams.divider.distribution import (
    SnakeSweep,
    distribute_by_position,
    distribute_remainder,
    fit_score,
    split_evenly,
)
from pyteams.models import Player, Team


def _player(pid: str, rating: float, *positions: str) -> Player:
    return Player(player_id=pid, name=f"Player {pid}", rating=rating, positions=list(positions))


def _ids(team: Team) -> list[str]:
    return [player.player_id for player in team.players]


@pytest.mark.parametrize(
    "total, parts, expected",
    [(10, 4, [3, 3, 2, 2]), (8, 2, [4, 4]), (2, 3, [1, 1, 0]), (0, 3, [0, 0, 0])],
)
def test_split_evenly(total, parts, expected):
    assert split_evenly(total, parts) == expected


def test_snake_sweep_reverses_at_the_ends():
    sweep = SnakeSweep(3)
    assert [next(sweep) for _ in range(8)] == [0, 1, 2, 2, 1, 0, 0, 1]
    assert sweep.cycle_length == 6


def test_position_pass_snakes_each_group():
    attackers = [_player(f"a{i}", 10 - i, "Attacker") for i in range(4)]
    mids = [_player(f"m{i}", 8 - i, "Midfielder") for i in range(2)]
    teams = [Team(), Team()]

    leftovers = distribute_by_position(
        {"Attacker": attackers, "Midfielder": mids, "Defender": []},
        teams,
        size_targets=[3, 3],
    )

    assert leftovers == []
    assert _ids(teams[0]) == ["a0", "a3", "m0"]
    assert _ids(teams[1]) == ["a1", "a2", "m1"]


def test_position_pass_returns_players_it_cannot_place():
    attackers = [_player(f"a{i}", 9 - i, "Attacker") for i in range(3)]
    teams = [Team(), Team()]

    leftovers = distribute_by_position({"Attacker": attackers}, teams, size_targets=[1, 1])

    assert _ids(teams[0]) == ["a0"]
    assert _ids(teams[1]) == ["a1"]
    assert [player.player_id for player in leftovers] == ["a2"]


def test_fit_score_rewards_missing_positions():
    rules = BalanceRules()
    team = Team(players=[_player("d1", 8, "Defender"), _player("d2", 8, "Defender")])

    attacker = _player("x", 8, "Attacker")
    defender = _player("y", 8, "Defender")

    assert fit_score(attacker, team, rules) == pytest.approx(10.0 + 15.0)
    assert fit_score(defender, team, rules) == pytest.approx(15.0)


def test_fit_score_uses_ranked_preference_weights():
    rules = BalanceRules()
    team = Team(players=[_player("a", 7, "Attacker")])
    player = _player("x", 7, "Attacker", "Midfielder", "Defender")
    # Attacker is covered; Midfielder and Defender are fully needed.
    assert fit_score(player, team, rules) == pytest.approx(0.0 + 7.0 + 4.0 + 15.0)


def test_fit_score_on_empty_team():
    rules = BalanceRules()
    assert fit_score(_player("x", 9), Team(), rules) == pytest.approx(10.0 + 15.0)


def test_remainder_pass_prefers_positional_need():
    rules = BalanceRules(remainder_jitter=0.0)
    teams = [
        Team(players=[_player("d", 7, "Defender")]),
        Team(players=[_player("a", 7, "Attacker")]),
    ]

    distribute_remainder([_player("x", 7, "Attacker")], teams, [2, 2], random.Random(1), rules)

    assert _ids(teams[0]) == ["d", "x"]
    assert _ids(teams[1]) == ["a"]


def test_remainder_pass_respects_size_targets():
    rules = BalanceRules()
    teams = [Team(), Team()]
    pool = [_player(f"p{i}", 5 + i) for i in range(5)]

    distribute_remainder(pool, teams, [3, 2], random.Random(4), rules)

    assert [len(team.players) for team in teams] == [3, 2]
    placed = {pid for team in teams for pid in _ids(team)}
    assert placed == {f"p{i}" for i in range(5)}
