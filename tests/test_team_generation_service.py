"""
Tests for TeamGenerationService Result reporting.
"""

import dataclasses
import math
import random

import pytest

from domain.errors import GenerationFailure
from domain.services.team_balancing_service import TeamBalancingService
from services import error_codes
from services.interfaces import ITeamGenerationService
from services.team_generation_service import TeamGenerationService


@pytest.fixture
def service():
    return TeamGenerationService(max_iterations=200)


class TestGetConfigurations:
    """Test configuration lookups."""

    def test_success(self, service, league_settings):
        result = service.get_configurations(league_settings, 12)
        assert result.success
        assert [c.team_sizes for c in result.value] == [(6, 6), (4, 4, 4), (3, 3, 3, 3)]

    def test_missing_settings(self, service):
        result = service.get_configurations(None, 12)
        assert not result
        assert result.error_code == error_codes.SETTINGS_MISSING


class TestGenerateTeams:
    """Test generation through the service."""

    def test_implements_interface(self, service):
        assert isinstance(service, ITeamGenerationService)

    def test_success(self, service, league_settings, sample_players, sample_ratings, rng):
        result = service.generate_teams(
            league_settings, sample_players, "seeded", [6, 6], ratings=sample_ratings, rng=rng
        )
        assert result.success
        assert result.value.team_count == 2
        assert result.value.draw_history is not None

    @pytest.mark.parametrize(
        "method,config,code",
        [
            ("seeded", [7, 7], error_codes.INSUFFICIENT_PLAYERS),
            ("coin_flip", [6, 6], error_codes.INVALID_METHOD),
            ("random", None, error_codes.INVALID_CONFIG),
        ],
    )
    def test_validation_failures(self, service, league_settings, sample_players, method, config, code):
        result = service.generate_teams(league_settings, sample_players, method, config)
        assert not result.success
        assert result.error_code == code

    def test_insufficient_message(self, service, league_settings, sample_players):
        result = service.generate_teams(league_settings, sample_players, "random", [10, 10])
        assert result.error == "Not enough players: need 20, have 12"

    def test_generation_failure_propagates(
        self, service, league_settings, sample_players, monkeypatch
    ):
        """Exhausted search is not reported as a caller mistake."""
        real_score = TeamBalancingService.score
        monkeypatch.setattr(
            TeamBalancingService, "violates_hard_constraints", lambda self, teams, context: True
        )
        monkeypatch.setattr(
            TeamBalancingService,
            "score",
            lambda self, teams, context: dataclasses.replace(
                real_score(self, teams, context), total=math.nan
            ),
        )
        service.max_iterations = 5

        with pytest.raises(GenerationFailure):
            service.generate_teams(
                league_settings, sample_players, "seeded", [6, 6], rng=random.Random(1)
            )


class TestBuildTeammateHistory:
    """Test history building through the service."""

    def test_success(self, service):
        result = service.build_teammate_history(
            [("2024-02-01", {"a": ["Ann", "Bob"]}), ("2024-02-08", {"b": ["Bob", "Ann"]})]
        )
        assert result.unwrap().pair_count("Ann", "Bob") == 2
