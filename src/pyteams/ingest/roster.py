"""Helpers to load roster CSVs and emit canonical players."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel

from pyteams.config import load_rules, skill_rating
from pyteams.models import DEFAULT_POSITION, DEFAULT_RATING, Player, normalize_position


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "rating": "rating",
    "positions": "positions",
    "is_guest": "is_guest",
    "host_name": "host_name",
}

_POSITION_SPLIT = re.compile(r"[/,;|]")
_TRUTHY = {"1", "true", "yes", "y", "guest"}


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_rating: Optional[str] = None
    raw_positions: Optional[str] = None
    raw_is_guest: Optional[str] = None
    raw_host_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key, DEFAULT_ROSTER_MAPPING.get(key))
            if isinstance(spec, str) and "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_id=extract(parse_spec("player_id")) or None,
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_rating=extract(parse_spec("rating")),
            raw_positions=extract(parse_spec("positions")),
            raw_is_guest=extract(parse_spec("is_guest")),
            raw_host_name=extract(parse_spec("host_name")) or None,
        )


def parse_rating(raw: Optional[str], *, name: str = "") -> float:
    """Parse a numeric rating or skill-level label; blank, zero and junk become the default."""

    if raw is None or not raw.strip():
        return DEFAULT_RATING
    try:
        value = float(raw)
    except ValueError:
        try:
            return skill_rating(raw)
        except KeyError:
            logger.warning("Unparseable rating %r for %s; using default %.1f", raw, name or "player", DEFAULT_RATING)
            return DEFAULT_RATING
    if not value > 0:
        return DEFAULT_RATING
    return value


def parse_positions(raw: Optional[str], *, name: str = "") -> List[str]:
    """Split a ranked position list, dropping unknown entries; empty becomes [Midfielder]."""

    positions: List[str] = []
    for token in _POSITION_SPLIT.split(raw or ""):
        if not token.strip():
            continue
        try:
            position = normalize_position(token)
        except ValueError:
            logger.warning("Dropping unknown position %r for %s", token.strip(), name or "player")
            continue
        if position not in positions:
            positions.append(position)
    return positions or [DEFAULT_POSITION]


def load_roster_csv(path: Path, mapping: Optional[Mapping[str, str]] = None) -> List[RosterRow]:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        return [RosterRow.from_mapping(row, mapping) for row in reader]


def rows_to_players(rows: Iterable[RosterRow]) -> List[Player]:
    players: List[Player] = []
    seen: set[str] = set()
    for index, row in enumerate(rows, start=1):
        name = row.raw_name.strip()
        if not name:
            logger.warning("Skipping roster row %d without a name", index)
            continue
        player_id = row.raw_id or f"row-{index}"
        if player_id in seen:
            raise ValueError(f"Duplicate player id {player_id!r} in roster")
        seen.add(player_id)
        players.append(
            Player(
                player_id=player_id,
                name=name,
                rating=parse_rating(row.raw_rating, name=name),
                positions=parse_positions(row.raw_positions, name=name),
                is_guest=(row.raw_is_guest or "").strip().lower() in _TRUTHY,
                host_name=row.raw_host_name,
            )
        )
    return players


def load_players_from_csv(path: Path, mapping: Optional[Mapping[str, str]] = None) -> List[Player]:
    players = rows_to_players(load_roster_csv(path, mapping))
    logger.info("Loaded %d players from %s", len(players), path)
    return players


class GuestEntry(BaseModel):
    """Ad-hoc guest brought by a registered player."""

    name: str
    rating: Optional[float] = None


def guests_to_players(guests: Iterable[GuestEntry], host: Player) -> List[Player]:
    """Turn guest entries into synthetic players attached to ``host``."""

    default_rating = load_rules().guest_default_rating
    players: List[Player] = []
    for guest in guests:
        name = guest.name.strip()
        if not name:
            continue
        players.append(
            Player(
                player_id=f"guest-{uuid4().hex[:8]}",
                name=name,
                rating=guest.rating or default_rating,
                positions=[DEFAULT_POSITION],
                is_guest=True,
                host_name=host.name,
            )
        )
    return players
