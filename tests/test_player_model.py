import pytest
from pydantic import ValidationError

from pyteams.models import Player, Team


def test_player_is_frozen():
    player = Player(player_id="p1", name="Test Player", rating=8, positions=["Attacker"])

    assert player.player_id == "p1"
    assert player.positions == ["Attacker"]

    with pytest.raises((TypeError, ValidationError)):
        player.rating = 9  # type: ignore[misc]


@pytest.mark.parametrize("rating", [None, 0])
def test_missing_or_zero_rating_defaults_to_seven(rating):
    player = Player(player_id="p1", name="Unrated", rating=rating)
    assert player.rating == 7.0


def test_positions_are_canonicalized_and_deduplicated():
    player = Player(player_id="p1", name="Flexible", positions=["defender", "ATTACKER", "Defender"])
    assert player.positions == ["Defender", "Attacker"]
    assert player.primary_position == "Defender"
    assert player.declared_position == "Defender"


def test_empty_positions_resolve_primary_to_midfielder():
    player = Player(player_id="p1", name="Undeclared")
    assert player.positions == []
    assert player.declared_position is None
    assert player.primary_position == "Midfielder"


def test_unknown_position_rejected():
    with pytest.raises(ValidationError):
        Player(player_id="p1", name="Goalie", positions=["Goalkeeper"])


def test_negative_rating_rejected():
    with pytest.raises(ValidationError):
        Player(player_id="p1", name="Bad", rating=-1)


def test_team_refresh_elo_sums_ratings():
    team = Team(players=[
        Player(player_id="a", name="A", rating=8),
        Player(player_id="b", name="B", rating=6.5),
    ])
    assert team.refresh_elo() == pytest.approx(14.5)
    assert team.elo == pytest.approx(14.5)
    assert len(team) == 2


def test_player_fields_are_the_roster_columns():
    assert set(Player.model_fields) == {"player_id", "name", "rating", "positions", "is_guest", "host_name"}
