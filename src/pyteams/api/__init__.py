"""REST API for the team divider."""

from __future__ import annotations

import json
import logging
import random
import tempfile
from pathlib import Path
from typing import List, Sequence

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from pyteams.api.schemas import (
    BalanceSummary,
    DivideRequest,
    DivideResponse,
    TeamResponse,
)
from pyteams.divider import TeamDivisionError, divide_teams, evaluate_team_balance
from pyteams.ingest import guests_to_players, load_players_from_csv
from pyteams.models import Player


logger = logging.getLogger(__name__)


def _parse_mapping(raw: str | None) -> dict[str, str] | None:
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Mapping JSON must be an object")
    return {str(key): str(value) for key, value in data.items()}


def _divide(players: Sequence[Player], team_count: int, seed: int | None) -> DivideResponse:
    try:
        teams = divide_teams(players, team_count, rng=random.Random(seed))
    except TeamDivisionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return DivideResponse(
        team_count=team_count,
        seed=seed,
        teams=[TeamResponse.from_team(index, team) for index, team in enumerate(teams, start=1)],
        balance=BalanceSummary.from_report(evaluate_team_balance(teams)),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="pyteams divider")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/teams/divide", response_model=DivideResponse)
    async def divide(request: DivideRequest) -> DivideResponse:
        try:
            players: List[Player] = [payload.to_player() for payload in request.players]
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if request.guests:
            host = next((player for player in players if player.player_id == request.host_id), None)
            if host is None and request.host_id is not None:
                raise HTTPException(status_code=400, detail=f"Unknown host_id {request.host_id!r}")
            if host is None and not players:
                raise HTTPException(status_code=400, detail="Guests need a host player")
            players.extend(guests_to_players(request.guests, host or players[0]))

        return _divide(players, request.team_count, request.seed)

    @app.post("/teams/divide/csv", response_model=DivideResponse)
    async def divide_csv(
        roster: UploadFile = File(...),
        team_count: int = Form(2),
        seed: int | None = Form(None),
        roster_mapping: str | None = Form(None),
    ) -> DivideResponse:
        content = await roster.read()
        if not content:
            raise HTTPException(status_code=400, detail="roster file is empty")
        mapping = _parse_mapping(roster_mapping)

        with tempfile.NamedTemporaryFile(delete=False, suffix=".csv") as tmp:
            tmp.write(content)
            roster_path = Path(tmp.name)
        try:
            players = load_players_from_csv(roster_path, mapping)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        finally:
            roster_path.unlink(missing_ok=True)

        logger.info("Dividing uploaded roster %s (%d players)", roster.filename, len(players))
        return _divide(players, team_count, seed)

    return app
