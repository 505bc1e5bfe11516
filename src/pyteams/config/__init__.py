"""Configuration helpers for balancing rules."""

from .balance import SKILL_LEVELS, BalanceRules, load_rules, skill_rating

__all__ = [
    "BalanceRules",
    "SKILL_LEVELS",
    "load_rules",
    "skill_rating",
]
