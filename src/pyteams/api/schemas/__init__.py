"""Pydantic models for API I/O."""

from .teams import (
    BalanceSummary,
    DivideRequest,
    DivideResponse,
    PlayerPayload,
    TeamPlayerResponse,
    TeamResponse,
)

__all__ = [
    "BalanceSummary",
    "DivideRequest",
    "DivideResponse",
    "PlayerPayload",
    "TeamPlayerResponse",
    "TeamResponse",
]
