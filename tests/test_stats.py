import pytest

from pyteams.config import BalanceRules
from pyteams.divider import compute_team_stats, evaluate_team_balance
from pyteams.divider.stats import imbalance_score
from pyteams.models import Player, Team


def _player(pid: str, rating: float, *positions: str) -> Player:
    return Player(player_id=pid, name=f"Player {pid}", rating=rating, positions=list(positions))


def test_stats_are_population_based():
    players = [
        _player("a", 9, "Attacker"),
        _player("b", 7, "Defender"),
        _player("c", 5, "Defender"),
        _player("d", 7),
    ]
    stats = compute_team_stats(players)
    assert stats.average_rating == pytest.approx(7.0)
    assert stats.rating_stddev == pytest.approx(2 ** 0.5)
    assert stats.position_counts == {"Attacker": 1, "Midfielder": 1, "Defender": 2}


def test_stats_of_empty_team_are_zero():
    stats = compute_team_stats([])
    assert stats.average_rating == 0.0
    assert stats.rating_stddev == 0.0
    assert stats.position_counts == {"Attacker": 0, "Midfielder": 0, "Defender": 0}


def test_stats_computation_is_pure():
    players = [_player("a", 8, "Midfielder"), _player("b", 6, "Attacker")]
    snapshot = list(players)
    first = compute_team_stats(players)
    second = compute_team_stats(players)
    assert first == second
    assert players == snapshot


def test_imbalance_score_weights():
    rules = BalanceRules()
    team_a = compute_team_stats([_player("a", 8, "Attacker"), _player("b", 6, "Attacker")])
    team_b = compute_team_stats([_player("c", 7, "Defender"), _player("d", 7, "Defender")])
    # 3 * 0 (means) + 2 * 1 (stddev) + (2 attackers + 2 defenders apart)
    assert imbalance_score(team_a, team_b, rules) == pytest.approx(6.0)
    assert imbalance_score(team_a, team_a, rules) == 0.0


def test_evaluate_team_balance_reports_each_team():
    teams = [
        Team(players=[_player("a", 8, "Attacker"), _player("b", 6, "Defender")]),
        Team(players=[_player("c", 7, "Midfielder")]),
    ]
    report = evaluate_team_balance(teams)
    assert report.team_sizes == (2, 1)
    assert report.elos == (14, 7)
    assert report.average_ratings == (7.0, 7.0)
    assert report.rating_spread == 0.0
    assert report.position_counts[1]["Midfielder"] == 1
