"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts for the application services.
Services should inherit from their corresponding interface to ensure consistent APIs.

Usage:
    class MyService(ITeamGenerationService):
        def generate_teams(self, ...) -> Result[GenerationResult]:
            ...
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import random

    from domain.models.team import GenerationResult, TeamConfiguration
    from services.result import Result


class ITeamGenerationService(ABC):
    """Interface for team configuration and generation."""

    @abstractmethod
    def get_configurations(
        self, settings: Any, player_count: int
    ) -> "Result[list[TeamConfiguration]]":
        """List feasible team configurations for a pool size."""
        ...

    @abstractmethod
    def generate_teams(
        self,
        settings: Any,
        players: list[str],
        method: str,
        config: Any,
        *,
        ratings: dict[str, Any] | None = None,
        teammate_history: Any = None,
        rng: "random.Random | None" = None,
    ) -> "Result[GenerationResult]":
        """Generate teams for the given players, method and configuration."""
        ...
