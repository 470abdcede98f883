"""
Application services layer.

Services wrap the balancing engine and report caller mistakes as Result values.
Import concrete services from their modules, e.g.
from services.team_generation_service import TeamGenerationService
"""

# Result type for consistent error handling
from services.result import Result

# Service interfaces (ABCs)
from services.interfaces import ITeamGenerationService

__all__ = [
    "Result",
    "ITeamGenerationService",
]
