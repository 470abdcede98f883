"""
Tests for team configuration enumeration.
"""

import pytest

from domain.errors import ConfigError
from domain.models.team import TeamGenerationSettings
from domain.services.configuration_service import enumerate_configurations
from services import error_codes


class TestEnumerateConfigurations:
    """Test enumerate_configurations."""

    def test_twelve_players(self, settings):
        """Twelve players split evenly into 2, 3 and 4 teams."""
        configs = enumerate_configurations(12, settings)
        assert [c.team_sizes for c in configs] == [(6, 6), (4, 4, 4), (3, 3, 3, 3)]
        assert [c.team_count for c in configs] == [2, 3, 4]

    def test_uneven_split_front_loads_extras(self, settings):
        """The first (n % t) teams take one extra player."""
        configs = enumerate_configurations(11, settings)
        assert [c.team_sizes for c in configs] == [(6, 5), (4, 4, 3)]

    def test_seven_players_single_team(self):
        """Seven players with a minimum of four per team only fit one team."""
        bounds = TeamGenerationSettings(
            min_teams=1, max_teams=3, min_players_per_team=4, max_players_per_team=7
        )
        configs = enumerate_configurations(7, bounds)
        assert [c.team_sizes for c in configs] == [(7,)]

    def test_seven_players_no_single_team_allowed(self):
        """Without a one-team option the result is empty."""
        bounds = TeamGenerationSettings(
            min_teams=2, max_teams=3, min_players_per_team=4, max_players_per_team=7
        )
        assert enumerate_configurations(7, bounds) == []

    def test_oversized_teams_are_dropped(self, settings):
        """Sizes above the per-team maximum drop the configuration."""
        configs = enumerate_configurations(14, settings)
        assert all(max(c.team_sizes) <= 6 for c in configs)
        assert [c.team_count for c in configs] == [3, 4]

    @pytest.mark.parametrize("player_count", range(0, 30))
    def test_every_player_is_used(self, settings, player_count):
        """Every returned configuration sums to the player count."""
        for config in enumerate_configurations(player_count, settings):
            assert config.players_needed == player_count

    def test_zero_players(self, settings):
        """An empty pool has no configurations."""
        assert enumerate_configurations(0, settings) == []

    def test_missing_settings(self):
        """None settings raise settings_missing."""
        with pytest.raises(ConfigError) as exc_info:
            enumerate_configurations(12, None)
        assert exc_info.value.code == error_codes.SETTINGS_MISSING

    def test_negative_player_count(self, settings):
        """A negative player count is rejected."""
        with pytest.raises(ConfigError):
            enumerate_configurations(-1, settings)


class TestTeamGenerationSettings:
    """Test parsing and validation of league bounds."""

    def test_from_nested_camel_case(self, league_settings):
        """The persisted league document is accepted as-is."""
        parsed = TeamGenerationSettings.from_mapping(league_settings)
        assert parsed == TeamGenerationSettings(2, 4, 3, 6)

    def test_from_snake_case(self):
        """Snake-case keys are accepted too."""
        parsed = TeamGenerationSettings.from_mapping(
            {"min_teams": 2, "max_teams": 5, "min_players_per_team": 5, "max_players_per_team": 7}
        )
        assert parsed.max_teams == 5

    def test_none_is_missing(self):
        """None settings raise settings_missing."""
        with pytest.raises(ConfigError) as exc_info:
            TeamGenerationSettings.from_mapping(None)
        assert exc_info.value.code == error_codes.SETTINGS_MISSING

    def test_incomplete_is_missing(self):
        """Absent keys raise settings_missing."""
        with pytest.raises(ConfigError) as exc_info:
            TeamGenerationSettings.from_mapping({"teamGeneration": {"minTeams": 2}})
        assert exc_info.value.code == error_codes.SETTINGS_MISSING

    def test_min_above_max_is_invalid(self):
        """Inverted bounds raise invalid_settings."""
        with pytest.raises(ConfigError) as exc_info:
            TeamGenerationSettings(min_teams=4, max_teams=2, min_players_per_team=3, max_players_per_team=6)
        assert exc_info.value.code == error_codes.INVALID_SETTINGS

    def test_league_defaults(self):
        """New leagues allow 2-5 teams of 5-7 players."""
        defaults = TeamGenerationSettings.league_defaults()
        assert defaults == TeamGenerationSettings(2, 5, 5, 7)
        assert [c.team_sizes for c in enumerate_configurations(15, defaults)] == [(5, 5, 5)]

    def test_non_integer_is_invalid(self):
        """Non-integer bounds raise invalid_settings."""
        with pytest.raises(ConfigError) as exc_info:
            TeamGenerationSettings.from_mapping(
                {"minTeams": "2", "maxTeams": 4, "minPlayersPerTeam": 3, "maxPlayersPerTeam": 6}
            )
        assert exc_info.value.code == error_codes.INVALID_SETTINGS
