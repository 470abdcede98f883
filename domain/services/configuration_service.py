"""
Team configuration enumeration.
"""

from domain import error_codes
from domain.errors import ConfigError
from domain.models.team import TeamConfiguration, TeamGenerationSettings


def enumerate_configurations(
    player_count: int, settings: TeamGenerationSettings | None
) -> list[TeamConfiguration]:
    """
    List every feasible team configuration for a player count.

    Team counts run from min_teams to max_teams while t * min_players_per_team
    still fits. Players are spread as evenly as possible with the first
    (player_count % t) teams taking one extra, so every player is used.
    Configurations with any size outside the per-team bounds are dropped.

    Args:
        player_count: Number of players available
        settings: League team generation bounds

    Returns:
        Configurations ordered by team count (may be empty)

    Raises:
        ConfigError: If settings are absent
    """
    if settings is None:
        raise ConfigError(
            "Settings must be set before calculating configurations", error_codes.SETTINGS_MISSING
        )
    if player_count < 0:
        raise ConfigError(f"Invalid player count: {player_count}", error_codes.VALIDATION_ERROR)

    configurations: list[TeamConfiguration] = []
    t = settings.min_teams
    while t <= settings.max_teams and t * settings.min_players_per_team <= player_count:
        base, remainder = divmod(player_count, t)
        sizes = [base + 1 if i < remainder else base for i in range(t)]

        if all(
            settings.min_players_per_team <= size <= settings.max_players_per_team
            for size in sizes
        ):
            configurations.append(TeamConfiguration(team_count=t, team_sizes=tuple(sizes)))
        t += 1

    return configurations
