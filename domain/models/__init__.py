"""
Domain models - pure data structures representing business entities.
"""

from domain.models.player import EffectivePlayer, Player, RatingAnchors
from domain.models.team import (
    DrawHistory,
    DrawStep,
    GenerationResult,
    Pot,
    TeamConfiguration,
    TeamGenerationSettings,
)
from domain.models.teammate_history import TeammateHistory

__all__ = [
    "Player",
    "RatingAnchors",
    "EffectivePlayer",
    "TeamConfiguration",
    "TeamGenerationSettings",
    "Pot",
    "DrawStep",
    "DrawHistory",
    "GenerationResult",
    "TeammateHistory",
]
