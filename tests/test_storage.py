import csv
from datetime import datetime, timezone
from io import StringIO

import pytest

from pyteams.models import Player, Team
from pyteams.storage import (
    CSV_HEADERS,
    export_teams_to_csv,
    player_to_minimal,
    record_to_teams,
    teams_to_record,
)


def _teams() -> list[Team]:
    member = Player(player_id="u1", name="Ana Silva", rating=9, positions=["Attacker"])
    guest = Player(player_id="guest-1", name="Pat", rating=6, positions=["Midfielder"], is_guest=True, host_name="Ana Silva")
    other = Player(player_id="u2", name="Ben Okafor", rating=8, positions=["Defender"])
    teams = [Team(players=[member, guest]), Team(players=[other])]
    for team in teams:
        team.refresh_elo()
    return teams


def test_player_to_minimal_member_and_guest():
    member, guest = _teams()[0].players
    assert player_to_minimal(member) == {"name": "Ana Silva", "uuid": "u1"}
    assert player_to_minimal(guest) == {"name": "Pat", "isGuest": True, "hostName": "Ana Silva"}


def test_teams_to_record_layout():
    stamp = datetime(2024, 5, 1, 18, 30, tzinfo=timezone.utc)
    record = teams_to_record("game-7", _teams(), now=stamp)

    assert record["GameId"] == "game-7"
    assert [item["name"] for item in record["Team1"]] == ["Ana Silva", "Pat"]
    assert record["Team2"] == [{"name": "Ben Okafor", "uuid": "u2"}]
    assert "Team3" not in record
    assert record["CreatedAt"] == record["UpdatedAt"] == stamp.isoformat()


def test_teams_to_record_rejects_more_than_four_teams():
    with pytest.raises(ValueError):
        teams_to_record("game-7", [Team() for _ in range(5)])


def test_record_to_teams_restores_defaults():
    record = teams_to_record("game-7", _teams())
    teams = record_to_teams(record)

    assert len(teams) == 2
    member, guest = teams[0].players
    assert member.player_id == "u1"
    assert member.rating == 7.0
    assert member.positions == ["Midfielder"]
    assert guest.is_guest
    assert guest.host_name == "Ana Silva"
    assert guest.player_id.startswith("guest-")
    assert teams[1].elo == pytest.approx(7.0)


def test_export_teams_to_csv():
    rows = list(csv.reader(StringIO(export_teams_to_csv(_teams()))))
    assert tuple(rows[0]) == CSV_HEADERS
    assert rows[1] == ["1", "u1", "Ana Silva", "9", "Attacker", "", ""]
    assert rows[2] == ["1", "guest-1", "Pat", "6", "Midfielder", "yes", "Ana Silva"]
    assert rows[3][0] == "2"
