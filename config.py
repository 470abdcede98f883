"""
Centralized configuration for the team balancing engine.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# League-level team generation bounds used when a league has not overridden them
TEAM_GENERATION_DEFAULTS: dict[str, int] = {
    "minTeams": _parse_int("TEAM_GEN_MIN_TEAMS", 2),
    "maxTeams": _parse_int("TEAM_GEN_MAX_TEAMS", 5),
    "minPlayersPerTeam": _parse_int("TEAM_GEN_MIN_PLAYERS_PER_TEAM", 5),
    "maxPlayersPerTeam": _parse_int("TEAM_GEN_MAX_PLAYERS_PER_TEAM", 7),
}

# Rating Source defaults for players with no entry
DEFAULT_RATING = 1000.0
DEFAULT_SECONDARY_RATING = 0.5  # Neutral attack/control rating

BALANCER_SETTINGS: dict[str, Any] = {
    # Games played before a rating is fully trusted
    "established_games_threshold": _parse_int("ESTABLISHED_GAMES_THRESHOLD", 5),
    # Provisional players start just below the weakest established player
    "anchor_multiplier": _parse_float("PROVISIONAL_ANCHOR_MULTIPLIER", 0.99),
    # Reject any arrangement pairing teammates this many times before (or more)
    "pairing_hard_limit": _parse_int("PAIRING_HARD_LIMIT", 3),
    "max_iterations": _parse_int("BALANCER_MAX_ITERATIONS", 5000),
    "early_exit_iteration": _parse_int("BALANCER_EARLY_EXIT_ITERATION", 2000),
    "early_exit_score": _parse_float("BALANCER_EARLY_EXIT_SCORE", 0.25),
    "fallback_iterations": _parse_int("BALANCER_FALLBACK_ITERATIONS", 5),
    "max_swaps": _parse_int("BALANCER_MAX_SWAPS", 200),
    # hard delta limit = max(floor, floor(fraction * pool rating range))
    "rating_delta_floor": _parse_float("HARD_RATING_DELTA_FLOOR", 60.0),
    "rating_delta_fraction": _parse_float("HARD_RATING_DELTA_FRACTION", 0.15),
}

# Score weights; pairing novelty dominates
SCORE_WEIGHTS: dict[str, float] = {
    "rating": 1.0,
    "spread": 0.7,
    "pairing": 1.3,
    "attack": 0.8,
    "control": 0.8,
}
# A 0.2 gap in per-team secondary rating means is treated as fully unacceptable
SECONDARY_RATING_DELTA_CAP = 0.2

# Number of most recent sessions folded into the teammate history matrix
TEAMMATE_HISTORY_SESSION_LIMIT = _parse_int("TEAMMATE_HISTORY_SESSION_LIMIT", 12)
