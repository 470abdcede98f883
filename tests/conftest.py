"""
Pytest fixtures for tests.

This module provides centralized constants and fixtures to reduce duplication
across the test suite. Every stochastic test takes a seeded RNG from here so
results are reproducible.
"""

import random

import pytest

from domain.models.player import Player
from domain.models.team import TeamGenerationSettings
from domain.services.rating_normalizer import RatingNormalizer


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_SEED = 42
"""Seed for every RNG fixture. Import and use this constant."""

LEAGUE_SETTINGS = {
    "teamGeneration": {
        "minTeams": 2,
        "maxTeams": 4,
        "minPlayersPerTeam": 3,
        "maxPlayersPerTeam": 6,
    }
}
"""League settings document in its persisted (camelCase, nested) form."""


def make_ratings(count: int, base: int = 1500, step: int = 25, games_played: int = 10) -> dict:
    """Rating Source entries for Player0..PlayerN-1, strongest first."""
    return {
        f"Player{i}": {
            "rating": base - i * step,
            "games_played": games_played,
            "attack_rating": 0.5 + (i % 3) * 0.05,
            "control_rating": 0.55 - (i % 2) * 0.05,
        }
        for i in range(count)
    }


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(TEST_SEED)


@pytest.fixture
def league_settings():
    """League settings in persisted form."""
    return LEAGUE_SETTINGS


@pytest.fixture
def settings():
    """Parsed team generation bounds: 2-4 teams of 3-6 players."""
    return TeamGenerationSettings(
        min_teams=2, max_teams=4, min_players_per_team=3, max_players_per_team=6
    )


@pytest.fixture
def sample_ratings():
    """Twelve established players spaced 25 rating points apart."""
    return make_ratings(12)


@pytest.fixture
def sample_players(sample_ratings):
    """Names matching sample_ratings, in input order."""
    return list(sample_ratings)


@pytest.fixture
def effective_players(sample_ratings):
    """sample_ratings normalized into effective players."""
    players = [Player.from_rating_entry(name, entry) for name, entry in sample_ratings.items()]
    _anchors, effective = RatingNormalizer().normalize(players)
    return effective
