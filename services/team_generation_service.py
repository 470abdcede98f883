"""
Service layer for team configuration and generation.
"""

import logging
import random
from typing import Any

from domain.errors import ConfigError
from domain.models.team import GenerationResult, TeamConfiguration
from domain.models.teammate_history import TeammateHistory
from services.interfaces import ITeamGenerationService
from services.result import Result
from team_generator import TeamGenerator

logger = logging.getLogger("balancer.team_generation_service")


class TeamGenerationService(ITeamGenerationService):
    """
    Wraps TeamGenerator so caller mistakes come back as failed Results.

    GenerationFailure is not a caller mistake and propagates unchanged.
    """

    def __init__(self, max_iterations: int | None = None, record_history: bool = True):
        self.max_iterations = max_iterations
        self.record_history = record_history

    def get_configurations(self, settings: Any, player_count: int) -> Result[list[TeamConfiguration]]:
        """
        List feasible team configurations.

        Args:
            settings: League settings (or its teamGeneration mapping)
            player_count: Number of players in the pool

        Returns:
            Result.ok(configurations), or Result.fail(error, code) for bad settings
        """
        try:
            generator = TeamGenerator(settings=settings)
            return Result.ok(generator.calculate_configurations(player_count))
        except ConfigError as e:
            logger.warning(f"Configuration lookup rejected: {e}")
            return Result.fail(str(e), code=e.code)

    def generate_teams(
        self,
        settings: Any,
        players: list[str],
        method: str,
        config: Any,
        *,
        ratings: dict[str, Any] | None = None,
        teammate_history: Any = None,
        rng: random.Random | None = None,
    ) -> Result[GenerationResult]:
        """
        Generate teams.

        Args:
            settings: League settings (or its teamGeneration mapping)
            players: Unique player names
            method: "random" or "seeded"
            config: TeamConfiguration, mapping with teamSizes, or list of sizes
            ratings: Rating Source entries keyed by player name
            teammate_history: TeammateHistory or its persisted dict form
            rng: Random source (seed it for reproducible output)

        Returns:
            Result.ok(GenerationResult), or Result.fail(error, code) for invalid input

        Raises:
            GenerationFailure: If seeded search could not produce any arrangement
        """
        try:
            generator = TeamGenerator(
                settings=settings,
                players=players,
                ratings=ratings,
                teammate_history=teammate_history,
                rng=rng,
                record_history=self.record_history,
                max_iterations=self.max_iterations,
            )
            return Result.ok(generator.generate_teams(method, config))
        except ConfigError as e:
            logger.warning(f"Team generation rejected ({e.code}): {e}")
            return Result.fail(str(e), code=e.code)

    def build_teammate_history(
        self, sessions: list[tuple[str, dict[str, list[str]]]], session_limit: int | None = None
    ) -> Result[TeammateHistory]:
        """Build pairing history from recent sessions (newest first by date)."""
        try:
            return Result.ok(TeammateHistory.from_sessions(sessions, session_limit=session_limit))
        except ConfigError as e:
            return Result.fail(str(e), code=e.code)
