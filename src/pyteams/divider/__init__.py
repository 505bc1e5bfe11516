"""Balanced team division built from position sweeps and swap refinement."""

from .service import (
    InsufficientPlayers,
    InvalidTeamCount,
    TeamDivisionError,
    divide_teams,
)
from .stats import BalanceReport, compute_team_stats, evaluate_team_balance

__all__ = [
    "BalanceReport",
    "InsufficientPlayers",
    "InvalidTeamCount",
    "TeamDivisionError",
    "compute_team_stats",
    "divide_teams",
    "evaluate_team_balance",
]
