"""Serialization helpers for handing teams to storage and display layers."""

from .records import (
    CSV_HEADERS,
    MAX_STORED_TEAMS,
    export_teams_to_csv,
    minimal_to_player,
    player_to_minimal,
    record_to_teams,
    teams_to_record,
)

__all__ = [
    "CSV_HEADERS",
    "MAX_STORED_TEAMS",
    "export_teams_to_csv",
    "minimal_to_player",
    "player_to_minimal",
    "record_to_teams",
    "teams_to_record",
]
