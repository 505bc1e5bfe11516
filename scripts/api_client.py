"""Lightweight REST client for the pyteams API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> dict[str, str]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pyteams REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV")
    parser.add_argument("--teams", type=int, default=2, help="Number of teams to request")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible teams")
    parser.add_argument("--roster-mapping", default="", help="JSON mapping for roster columns")
    parser.add_argument("--health", action="store_true", help="Check the API health endpoint and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        if args.health:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.roster is None:
            raise SystemExit("A roster CSV is required unless --health is given")

        data: dict[str, str] = {"team_count": str(args.teams)}
        if args.seed is not None:
            data["seed"] = str(args.seed)
        mapping = build_mapping(args.roster_mapping)
        if mapping:
            data["roster_mapping"] = json.dumps(mapping)

        with args.roster.open("rb") as roster_file:
            files = {"roster": (args.roster.name, roster_file, "text/csv")}
            resp = client.post("/teams/divide/csv", data=data, files=files)

    if resp.status_code >= 400:
        raise SystemExit(f"Request failed ({resp.status_code}): {resp.text}")

    payload = resp.json()
    for team in payload["teams"]:
        names = ", ".join(player["name"] for player in team["players"])
        print(f"Team {team['index']} (elo {team['elo']:.1f}): {names}")
    print(f"Average rating spread: {payload['balance']['rating_spread']:.2f}")


if __name__ == "__main__":
    main()
