"""
Balanced team generation.

Seeded generation is a bounded stochastic local search: many randomized
snake drafts over fixed rating pots, hard-constraint filtering, normalized
scoring, then greedy within-pot swaps. Results are good, not provably optimal.
"""

import logging
import math
import random
from collections.abc import Mapping
from typing import Any

from config import BALANCER_SETTINGS
from domain import error_codes
from domain.errors import ConfigError, GenerationFailure
from domain.models.player import EffectivePlayer, Player, RatingAnchors
from domain.models.team import (
    DrawHistory,
    GenerationResult,
    Pot,
    TeamConfiguration,
    TeamGenerationSettings,
)
from domain.models.teammate_history import TeammateHistory
from domain.services.configuration_service import enumerate_configurations
from domain.services.draft_service import DraftService
from domain.services.draw_history_service import build_draw_history
from domain.services.rating_normalizer import RatingNormalizer
from domain.services.swap_optimizer import SwapOptimizer
from domain.services.team_balancing_service import (
    BalanceContext,
    ScoreBreakdown,
    TeamBalancingService,
)
from domain.services.team_naming import generate_team_names

logger = logging.getLogger("balancer.team_generator")

METHOD_RANDOM = "random"
METHOD_SEEDED = "seeded"
METHODS = (METHOD_RANDOM, METHOD_SEEDED)


def _is_better(
    score: ScoreBreakdown, best_score: float, best_rating_delta: float
) -> bool:
    """Keep-best reduction: lower total wins, ties go to the lower rating delta."""
    return score.total < best_score or (
        score.total == best_score and score.rating_delta < best_rating_delta
    )


class TeamGenerator:
    """
    Splits a player pool into teams of prescribed sizes.

    Supports two methods:
    - "random": uniform shuffle with round-robin fill
    - "seeded": pot-based snake drafts optimized for rating balance, spread
      fairness, pairing novelty and secondary-rating balance
    """

    def __init__(
        self,
        settings: TeamGenerationSettings | Mapping[str, Any] | None = None,
        players: list[str] | None = None,
        ratings: Mapping[str, Any] | None = None,
        teammate_history: TeammateHistory | Mapping[str, Any] | None = None,
        rng: random.Random | None = None,
        record_history: bool = False,
        max_iterations: int | None = None,
        early_exit_iteration: int | None = None,
        early_exit_score: float | None = None,
        fallback_iterations: int | None = None,
        normalizer: RatingNormalizer | None = None,
        balancing_service: TeamBalancingService | None = None,
        swap_optimizer: SwapOptimizer | None = None,
        draft_service: DraftService | None = None,
    ):
        """
        Initialize the generator.

        Args:
            settings: League settings (or its teamGeneration mapping)
            players: Unique names of the players to balance
            ratings: Rating Source entries keyed by player name (Player
                     instances or mappings); missing entries use defaults
            teammate_history: Recent pairing counts; None disables the pairing
                              rule and scores pairing as neutral
            rng: Random source for every shuffle (seed it for reproducible output)
            record_history: Whether to attach a reconstructed draw history
            max_iterations: Candidate budget for seeded search (default 5000)
            early_exit_iteration: Iteration after which a good score stops the search (default 2000)
            early_exit_score: Score considered good enough to stop (default 0.25)
            fallback_iterations: Unconstrained attempts when nothing is valid (default 5)
        """
        settings_defaults = BALANCER_SETTINGS
        self.settings = settings
        self.players = list(players or [])
        self.ratings = ratings or {}
        self.teammate_history = teammate_history
        self.rng = rng if rng is not None else random.Random()
        self.record_history = record_history
        self.max_iterations = (
            max_iterations if max_iterations is not None else settings_defaults["max_iterations"]
        )
        self.early_exit_iteration = (
            early_exit_iteration
            if early_exit_iteration is not None
            else settings_defaults["early_exit_iteration"]
        )
        self.early_exit_score = (
            early_exit_score if early_exit_score is not None else settings_defaults["early_exit_score"]
        )
        self.fallback_iterations = (
            fallback_iterations
            if fallback_iterations is not None
            else settings_defaults["fallback_iterations"]
        )
        self.normalizer = normalizer or RatingNormalizer()
        self.balancing_service = balancing_service or TeamBalancingService()
        self.swap_optimizer = swap_optimizer or SwapOptimizer(self.balancing_service)
        self.draft_service = draft_service or DraftService()

    def _get_settings(self) -> TeamGenerationSettings:
        if isinstance(self.settings, TeamGenerationSettings):
            return self.settings
        return TeamGenerationSettings.from_mapping(self.settings)

    def _get_history(self) -> TeammateHistory | None:
        if self.teammate_history is None or isinstance(self.teammate_history, TeammateHistory):
            return self.teammate_history
        return TeammateHistory.from_dict(self.teammate_history)

    def _build_players(self) -> list[Player]:
        players = []
        for name in self.players:
            entry = self.ratings.get(name)
            players.append(entry if isinstance(entry, Player) else Player.from_rating_entry(name, entry))
        return players

    def calculate_configurations(self, player_count: int | None = None) -> list[TeamConfiguration]:
        """
        Calculate possible team configurations.

        Args:
            player_count: Number of players (defaults to the configured pool size)

        Returns:
            Feasible configurations

        Raises:
            ConfigError: If settings are missing or invalid
        """
        count = player_count if player_count is not None else len(self.players)
        return enumerate_configurations(count, self._get_settings())

    def _validate_request(self, method: str, config: Any) -> TeamConfiguration:
        """Reject caller mistakes before any search begins."""
        self._get_settings()
        configuration = TeamConfiguration.coerce(config)

        if method not in METHODS:
            raise ConfigError(f"Invalid team generation method: {method}", error_codes.INVALID_METHOD)
        if not self.players:
            raise ConfigError("No players available for team generation", error_codes.NO_PLAYERS)
        if len(set(self.players)) != len(self.players):
            raise ConfigError("Player names must be unique", error_codes.DUPLICATE_PLAYERS)

        needed = configuration.players_needed
        if needed > len(self.players):
            raise ConfigError(
                f"Not enough players: need {needed}, have {len(self.players)}",
                error_codes.INSUFFICIENT_PLAYERS,
            )
        return configuration

    def generate_teams(self, method: str, config: Any) -> GenerationResult:
        """
        Generate teams using the specified method.

        Args:
            method: "random" or "seeded"
            config: TeamConfiguration, mapping with teamSizes, or list of sizes

        Returns:
            GenerationResult with teams, metadata, leftover players and
            (if enabled) the draw history

        Raises:
            ConfigError: Invalid settings, method, configuration or pool
            GenerationFailure: Seeded search produced no arrangement at all
        """
        configuration = self._validate_request(method, config)
        history = self._get_history()
        players = self._build_players()
        team_names = generate_team_names(configuration.team_count, self.rng)

        if method == METHOD_SEEDED:
            teams, pots = self._generate_seeded(configuration, team_names, players, history)
        else:
            teams, pots = self._generate_random(configuration, team_names, players)

        assigned = {name for roster in teams.values() for name in roster}
        unassigned = [name for name in self.players if name not in assigned]

        draw_history = None
        if self.record_history:
            draw_history = DrawHistory(
                steps=build_draw_history(teams, pots, team_names),
                initial_pots=pots,
                method=method,
            )

        logger.info(
            f"Generated {configuration.team_count} teams ({method}) using "
            f"{len(assigned)}/{len(self.players)} players"
        )
        return GenerationResult(
            teams=teams,
            method=method,
            team_count=configuration.team_count,
            total_players=len(self.players),
            players_used=configuration.players_needed,
            unassigned=unassigned,
            draw_history=draw_history,
        )

    def _generate_random(
        self, config: TeamConfiguration, team_names: list[str], players: list[Player]
    ) -> tuple[dict[str, list[str]], list[Pot]]:
        """Shuffle uniformly, then deal one player per not-full team per round."""
        shuffled = [p.name for p in players]
        self.rng.shuffle(shuffled)

        teams: dict[str, list[str]] = {name: [] for name in team_names}
        player_index = 0
        for _round in range(max(config.team_sizes)):
            for team_name, size in zip(team_names, config.team_sizes):
                if player_index >= len(shuffled):
                    break
                if len(teams[team_name]) >= size:
                    continue
                teams[team_name].append(shuffled[player_index])
                player_index += 1

        # Pot structure is irrelevant to random teams; one pot keeps history replay uniform
        _anchors, effective = self.normalizer.normalize(players, RatingAnchors())
        pots = [Pot(index=0, name="All Players", players=effective)]
        return teams, pots

    def _build_context(
        self, effective: list[EffectivePlayer], history: TeammateHistory | None
    ) -> BalanceContext:
        pool_range = self.normalizer.pool_rating_range(effective)
        return BalanceContext(
            players={p.name: p for p in effective},
            pool_rating_range=pool_range,
            hard_rating_delta_limit=self.balancing_service.hard_rating_delta_limit(pool_range),
            teammate_history=history,
        )

    def _generate_seeded(
        self,
        config: TeamConfiguration,
        team_names: list[str],
        players: list[Player],
        history: TeammateHistory | None,
    ) -> tuple[dict[str, list[str]], list[Pot]]:
        """
        Configure -> Partition -> {Generate -> Reject|Score}* -> SelectBest -> Swap-Refine.
        """
        anchors, effective = self.normalizer.normalize(players)
        logger.debug(
            f"Provisional anchors: rating={anchors.rating:.1f}, "
            f"attack={anchors.attack:.3f}, control={anchors.control:.3f}"
        )

        pots = self.draft_service.partition_pots(effective, config.team_count)
        context = self._build_context(effective, history)

        best_teams, _breakdown, constrained = self._search(config, team_names, pots, context)

        if len(best_teams) >= 2:
            best_teams = self.swap_optimizer.optimize(
                best_teams, pots, context, enforce_pairing_limit=constrained
            )

        return best_teams, pots

    def _search(
        self,
        config: TeamConfiguration,
        team_names: list[str],
        pots: list[Pot],
        context: BalanceContext,
    ) -> tuple[dict[str, list[str]], ScoreBreakdown, bool]:
        """
        Iterative search for the best valid candidate.

        Returns:
            Tuple of (best teams, best score breakdown, whether the hard
            constraints were satisfied)

        Raises:
            GenerationFailure: If not even the unconstrained fallback produced teams
        """
        best_teams: dict[str, list[str]] | None = None
        best_breakdown: ScoreBreakdown | None = None
        best_score = math.inf
        best_rating_delta = math.inf
        rejected = 0

        iteration = 0
        for iteration in range(self.max_iterations):
            teams = self.draft_service.draft_iteration(pots, team_names, config, self.rng)

            if self.balancing_service.violates_hard_constraints(teams, context):
                rejected += 1
                continue

            breakdown = self.balancing_service.score(teams, context)
            if _is_better(breakdown, best_score, best_rating_delta):
                best_score = breakdown.total
                best_rating_delta = breakdown.rating_delta
                best_teams = teams
                best_breakdown = breakdown

            if iteration > self.early_exit_iteration and best_score <= self.early_exit_score:
                logger.info(f"Early termination at iteration {iteration}: score {best_score:.4f}")
                break

        if best_teams is not None:
            logger.info(
                f"Seeded search: {iteration + 1} iterations, {rejected} rejected, "
                f"best score {best_breakdown.total:.4f} (rating delta {best_breakdown.rating_delta:.1f}, "
                f"spread {best_breakdown.spread_norm:.3f}, pairing {best_breakdown.pair_norm:.3f}, "
                f"attack {best_breakdown.attack_norm:.3f}, control {best_breakdown.control_norm:.3f})"
            )
            return best_teams, best_breakdown, True

        logger.warning(
            f"No arrangement satisfied hard constraints in {self.max_iterations} iterations "
            f"(rating delta limit {context.hard_rating_delta_limit:.0f}); falling back to unconstrained search"
        )
        for _fallback in range(self.fallback_iterations):
            teams = self.draft_service.draft_iteration(pots, team_names, config, self.rng)
            breakdown = self.balancing_service.score(teams, context)
            if math.isfinite(breakdown.total):
                return teams, breakdown, False

        logger.error("Failed to generate a team configuration even with unconstrained fallback")
        raise GenerationFailure("Failed to generate valid team configuration even with fallback")
