"""Convert divided teams to and from compact storage payloads."""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Dict, List, Mapping, Optional, Sequence
from uuid import uuid4

from pyteams.models import DEFAULT_POSITION, DEFAULT_RATING, Player, Team


MAX_STORED_TEAMS = 4

CSV_HEADERS = (
    "team",
    "player_id",
    "name",
    "rating",
    "primary_position",
    "is_guest",
    "host_name",
)


def _team_key(index: int) -> str:
    return f"Team{index + 1}"


def player_to_minimal(player: Player) -> Dict[str, Any]:
    """Keep only what is needed to show the player again later."""

    data: Dict[str, Any] = {"name": player.name}
    if player.is_guest:
        data["isGuest"] = True
        if player.host_name:
            data["hostName"] = player.host_name
    else:
        data["uuid"] = player.player_id
    return data


def minimal_to_player(data: Mapping[str, Any]) -> Player:
    """Rebuild a player from stored data; rating and positions fall back to defaults."""

    player_id = data.get("uuid") or data.get("UserId") or f"guest-{uuid4().hex[:8]}"
    return Player(
        player_id=str(player_id),
        name=str(data.get("name", "")),
        rating=data.get("rating") or DEFAULT_RATING,
        positions=[DEFAULT_POSITION],
        is_guest=bool(data.get("isGuest", False)),
        host_name=data.get("hostName"),
    )


def teams_to_record(game_id: str, teams: Sequence[Team], *, now: Optional[datetime] = None) -> Dict[str, Any]:
    if len(teams) > MAX_STORED_TEAMS:
        raise ValueError(f"At most {MAX_STORED_TEAMS} teams can be stored, got {len(teams)}")
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    record: Dict[str, Any] = {"GameId": game_id}
    for index, team in enumerate(teams):
        record[_team_key(index)] = [player_to_minimal(player) for player in team.players]
    record["CreatedAt"] = timestamp
    record["UpdatedAt"] = timestamp
    return record


def record_to_teams(record: Mapping[str, Any]) -> List[Team]:
    teams: List[Team] = []
    for index in range(MAX_STORED_TEAMS):
        stored = record.get(_team_key(index))
        if stored is None:
            continue
        team = Team(players=[minimal_to_player(item) for item in stored])
        team.refresh_elo()
        teams.append(team)
    return teams


def export_teams_to_csv(teams: Sequence[Team]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for index, team in enumerate(teams, start=1):
        for player in team.players:
            writer.writerow([
                index,
                player.player_id,
                player.name,
                f"{player.rating:g}",
                player.primary_position,
                "yes" if player.is_guest else "",
                player.host_name or "",
            ])
    return buffer.getvalue()
