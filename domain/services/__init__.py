"""
Domain services containing pure business logic.
"""

from domain.services.configuration_service import enumerate_configurations
from domain.services.draft_service import DraftService
from domain.services.rating_normalizer import RatingNormalizer
from domain.services.swap_optimizer import SwapOptimizer
from domain.services.team_balancing_service import TeamBalancingService

__all__ = [
    "enumerate_configurations",
    "DraftService",
    "RatingNormalizer",
    "SwapOptimizer",
    "TeamBalancingService",
]
