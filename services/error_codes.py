"""
Standard error codes for team generation.

These error codes allow callers to programmatically handle specific
validation failures without parsing error message text. The domain layer
raises them on ConfigError; services pass them through on failed Results.

Usage:
    from services.error_codes import INSUFFICIENT_PLAYERS
    from services.result import Result

    if needed > available:
        return Result.fail("Not enough players", code=INSUFFICIENT_PLAYERS)
"""

from domain.error_codes import (
    DUPLICATE_PLAYERS,
    INSUFFICIENT_PLAYERS,
    INVALID_CONFIG,
    INVALID_HISTORY,
    INVALID_METHOD,
    INVALID_SETTINGS,
    NO_PLAYERS,
    SETTINGS_MISSING,
    VALIDATION_ERROR,
)

__all__ = [
    "VALIDATION_ERROR",
    "SETTINGS_MISSING",
    "INVALID_SETTINGS",
    "INVALID_METHOD",
    "INVALID_CONFIG",
    "INSUFFICIENT_PLAYERS",
    "NO_PLAYERS",
    "DUPLICATE_PLAYERS",
    "INVALID_HISTORY",
]
