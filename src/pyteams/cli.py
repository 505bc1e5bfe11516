"""Command-line interface for dividing a roster CSV into teams."""

from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Sequence

from pyteams.config_loader import MappingProfile
from pyteams.divider import TeamDivisionError, divide_teams, evaluate_team_balance
from pyteams.ingest import load_players_from_csv
from pyteams.storage import export_teams_to_csv, teams_to_record


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Divide a roster into balanced teams")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument("--teams", type=int, default=2, choices=(2, 4), help="Number of teams to build")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible teams")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=None, help="Write teams CSV to this path")
    parser.add_argument("--json", type=Path, default=None, help="Write storage record JSON to this path")
    parser.add_argument("--game-id", default="local", help="Game id stored in the JSON record")
    parser.add_argument("--verbose", action="store_true", help="Log optimizer details")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    roster_mapping = _parse_mapping(args.column)
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        roster_mapping = profile.roster_mapping | roster_mapping
    if args.save_profile:
        MappingProfile(roster_mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    try:
        players = load_players_from_csv(args.roster, mapping=roster_mapping or None)
        teams = divide_teams(players, args.teams, rng=random.Random(args.seed))
    except TeamDivisionError as exc:
        raise SystemExit(f"Cannot divide roster: {exc}") from exc
    except ValueError as exc:
        raise SystemExit(f"Invalid roster: {exc}") from exc

    report = evaluate_team_balance(teams)
    for index, team in enumerate(teams, start=1):
        counts = report.position_counts[index - 1]
        print(
            "Team {}: {} players, elo {:.1f}, avg {:.2f} (D{} M{} A{})".format(
                index,
                len(team.players),
                team.elo,
                report.average_ratings[index - 1],
                counts["Defender"],
                counts["Midfielder"],
                counts["Attacker"],
            )
        )
        print("  " + ", ".join(player.name for player in team.players))
    print(f"Average rating spread: {report.rating_spread:.2f}")

    if args.output:
        args.output.write_text(export_teams_to_csv(teams), encoding="utf-8")
        print(f"Wrote teams CSV to {args.output}")
    if args.json:
        record = teams_to_record(args.game_id, teams)
        args.json.write_text(json.dumps(record, indent=2), encoding="utf-8")
        print(f"Wrote storage record to {args.json}")


if __name__ == "__main__":
    main()
