"""Input adapters that normalize raw roster data."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    GuestEntry,
    RosterRow,
    guests_to_players,
    load_players_from_csv,
    load_roster_csv,
    parse_positions,
    parse_rating,
    rows_to_players,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "GuestEntry",
    "RosterRow",
    "guests_to_players",
    "load_players_from_csv",
    "load_roster_csv",
    "parse_positions",
    "parse_rating",
    "rows_to_players",
]
