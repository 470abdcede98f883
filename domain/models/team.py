"""
Team, configuration and generation result domain models.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from config import TEAM_GENERATION_DEFAULTS
from domain import error_codes
from domain.errors import ConfigError
from domain.models.player import EffectivePlayer


def _read_setting(raw: Mapping[str, Any], snake: str, camel: str) -> Any:
    if snake in raw:
        return raw[snake]
    return raw.get(camel)


@dataclass(frozen=True)
class TeamGenerationSettings:
    """League bounds on team count and team size."""

    min_teams: int
    max_teams: int
    min_players_per_team: int
    max_players_per_team: int

    def __post_init__(self):
        values = (
            self.min_teams,
            self.max_teams,
            self.min_players_per_team,
            self.max_players_per_team,
        )
        if any(not isinstance(v, int) or isinstance(v, bool) for v in values):
            raise ConfigError("Team generation settings must be integers", error_codes.INVALID_SETTINGS)
        if self.min_teams < 1 or self.min_players_per_team < 1:
            raise ConfigError("Team generation minimums must be at least 1", error_codes.INVALID_SETTINGS)
        if self.min_teams > self.max_teams or self.min_players_per_team > self.max_players_per_team:
            raise ConfigError(
                "Team generation minimums must not exceed maximums", error_codes.INVALID_SETTINGS
            )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "TeamGenerationSettings":
        """
        Parse league settings.

        Accepts either the league settings document (with a nested
        ``teamGeneration`` mapping) or the ``teamGeneration`` mapping itself,
        using camelCase or snake_case keys.

        Raises:
            ConfigError: If settings are absent or incomplete
        """
        if raw is None:
            raise ConfigError("Settings must be set before generating teams", error_codes.SETTINGS_MISSING)
        if not isinstance(raw, Mapping):
            raise ConfigError("Team generation settings must be a mapping", error_codes.INVALID_SETTINGS)
        nested = raw.get("teamGeneration", raw.get("team_generation"))
        if nested is not None:
            raw = nested
        if not isinstance(raw, Mapping):
            raise ConfigError("Team generation settings are missing", error_codes.SETTINGS_MISSING)

        values = {
            "min_teams": _read_setting(raw, "min_teams", "minTeams"),
            "max_teams": _read_setting(raw, "max_teams", "maxTeams"),
            "min_players_per_team": _read_setting(raw, "min_players_per_team", "minPlayersPerTeam"),
            "max_players_per_team": _read_setting(raw, "max_players_per_team", "maxPlayersPerTeam"),
        }
        missing = [key for key, value in values.items() if value is None]
        if missing:
            raise ConfigError(
                f"Team generation settings missing: {', '.join(missing)}", error_codes.SETTINGS_MISSING
            )
        return cls(**values)

    @classmethod
    def league_defaults(cls) -> "TeamGenerationSettings":
        """Bounds a new league starts with before an admin overrides them."""
        return cls.from_mapping(TEAM_GENERATION_DEFAULTS)


@dataclass(frozen=True)
class TeamConfiguration:
    """Number of teams and the target size of each."""

    team_count: int
    team_sizes: tuple[int, ...]

    @property
    def players_needed(self) -> int:
        return sum(self.team_sizes)

    @classmethod
    def from_sizes(cls, team_sizes) -> "TeamConfiguration":
        """
        Build a configuration from a caller-supplied list of team sizes.

        Raises:
            ConfigError: If the size list is missing or malformed
        """
        if team_sizes is None or isinstance(team_sizes, (str, bytes)):
            raise ConfigError("Invalid team configuration provided", error_codes.INVALID_CONFIG)
        try:
            sizes = tuple(team_sizes)
        except TypeError:
            raise ConfigError("Invalid team configuration provided", error_codes.INVALID_CONFIG) from None
        if not sizes or any(not isinstance(s, int) or isinstance(s, bool) or s < 1 for s in sizes):
            raise ConfigError("Invalid team configuration provided", error_codes.INVALID_CONFIG)
        return cls(team_count=len(sizes), team_sizes=sizes)

    @classmethod
    def coerce(cls, config: Any) -> "TeamConfiguration":
        """Accept a TeamConfiguration, a mapping with teamSizes, or a bare size list."""
        if isinstance(config, TeamConfiguration):
            return cls.from_sizes(config.team_sizes)
        if isinstance(config, Mapping):
            return cls.from_sizes(_read_setting(config, "team_sizes", "teamSizes"))
        return cls.from_sizes(config)

    def to_dict(self) -> dict:
        return {"teams": self.team_count, "teamSizes": list(self.team_sizes)}


@dataclass
class Pot:
    """An ordered band of similarly-rated players."""

    index: int
    name: str
    players: list[EffectivePlayer]

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.players]

    def to_dict(self) -> dict:
        return {"name": self.name, "players": [p.to_dict() for p in self.players]}


@dataclass(frozen=True)
class DrawStep:
    """One replayed pick in the reconstructed draw."""

    order: int
    player: str
    pot_index: int
    destination_team: str
    pot_players_remaining_after: int

    def to_dict(self) -> dict:
        return {
            "step": self.order,
            "player": self.player,
            "fromPot": self.pot_index,
            "toTeam": self.destination_team,
            "potPlayersRemaining": self.pot_players_remaining_after,
        }


@dataclass
class DrawHistory:
    """Audit replay of how the final teams could have been drawn."""

    steps: list[DrawStep]
    initial_pots: list[Pot]
    method: str

    def to_dict(self) -> dict:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "initialPots": [p.to_dict() for p in self.initial_pots],
            "method": self.method,
        }


@dataclass
class GenerationResult:
    """Teams produced by one generate call."""

    teams: dict[str, list[str]]
    method: str
    team_count: int
    total_players: int
    players_used: int
    unassigned: list[str] = field(default_factory=list)
    draw_history: DrawHistory | None = None

    @property
    def config(self) -> dict:
        return {
            "method": self.method,
            "teamCount": self.team_count,
            "totalPlayers": self.total_players,
            "playersUsed": self.players_used,
        }

    def to_dict(self) -> dict:
        """Serialize to the document the persistence layer stores."""
        data = {
            "teams": {name: list(roster) for name, roster in self.teams.items()},
            "config": self.config,
            "unassigned": list(self.unassigned),
        }
        if self.draw_history is not None:
            data["drawHistory"] = self.draw_history.to_dict()
        return data
