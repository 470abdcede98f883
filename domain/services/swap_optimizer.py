"""
Within-pot swap refinement.

Greedy hill climbing over the winning arrangement: only players from the same
pot who sit on different teams may trade places, which keeps the skill banding
the draft set up. This is a heuristic; it stops at a local optimum.
"""

import logging

from config import BALANCER_SETTINGS
from domain.models.team import Pot
from domain.services.team_balancing_service import (
    BalanceContext,
    ScoreBreakdown,
    TeamBalancingService,
)

logger = logging.getLogger("balancer.swap_optimizer")


def copy_teams(teams: dict[str, list[str]]) -> dict[str, list[str]]:
    return {name: list(roster) for name, roster in teams.items()}


class SwapOptimizer:
    """Sequential swap optimizer; each accepted swap changes what the next attempt sees."""

    def __init__(self, balancing_service: TeamBalancingService, max_swaps: int | None = None):
        """
        Args:
            balancing_service: Scorer and constraint checker
            max_swaps: Probe budget (default 200)
        """
        self.balancing_service = balancing_service
        self.max_swaps = max_swaps if max_swaps is not None else BALANCER_SETTINGS["max_swaps"]

    def _is_improvement(
        self,
        candidate: dict[str, list[str]],
        test: ScoreBreakdown,
        current: ScoreBreakdown,
        context: BalanceContext,
        enforce_pairing_limit: bool,
    ) -> bool:
        if test.rating_delta > context.hard_rating_delta_limit:
            return False
        if not (
            test.total < current.total
            or (test.total == current.total and test.rating_delta < current.rating_delta)
        ):
            return False
        if enforce_pairing_limit and self.balancing_service.violates_pairing_limit(candidate, context):
            return False
        return True

    def optimize(
        self,
        teams: dict[str, list[str]],
        pots: list[Pot],
        context: BalanceContext,
        enforce_pairing_limit: bool = True,
    ) -> dict[str, list[str]]:
        """
        Improve teams with within-pot, cross-team swaps.

        Args:
            teams: Winning arrangement (not modified)
            pots: Pot structure used for drafting
            context: Pool context for scoring
            enforce_pairing_limit: Also reject swaps that create a pair at the
                                   pairing hard limit (off on the fallback path)

        Returns:
            Optimized copy of teams
        """
        if len(teams) < 2 or not pots:
            return copy_teams(teams)

        optimized = copy_teams(teams)
        team_of = {name: team for team, roster in optimized.items() for name in roster}
        swaps_attempted = 0
        swaps_accepted = 0
        starting_score = self.balancing_service.score(optimized, context)
        current = starting_score
        improvement_made = True

        while improvement_made and swaps_attempted < self.max_swaps:
            improvement_made = False

            for pot in pots:
                # Group this pot's players by their current team, in pot order
                players_by_team: dict[str, list[str]] = {}
                for name in pot.names:
                    team = team_of.get(name)
                    if team is not None:
                        players_by_team.setdefault(team, []).append(name)

                teams_in_pot = list(players_by_team)
                for i, team_a in enumerate(teams_in_pot):
                    for team_b in teams_in_pot[i + 1 :]:
                        for player_a in players_by_team[team_a]:
                            for player_b in players_by_team[team_b]:
                                if swaps_attempted >= self.max_swaps:
                                    break
                                swaps_attempted += 1

                                test_teams = copy_teams(optimized)
                                roster_a = test_teams[team_a]
                                roster_b = test_teams[team_b]
                                roster_a[roster_a.index(player_a)] = player_b
                                roster_b[roster_b.index(player_b)] = player_a

                                test = self.balancing_service.score(test_teams, context)
                                if self._is_improvement(
                                    test_teams, test, current, context, enforce_pairing_limit
                                ):
                                    logger.debug(
                                        f"Swap {player_a} ({team_a}) <-> {player_b} ({team_b}): "
                                        f"{current.total:.4f} -> {test.total:.4f}"
                                    )
                                    optimized = test_teams
                                    team_of[player_a] = team_b
                                    team_of[player_b] = team_a
                                    current = test
                                    swaps_accepted += 1
                                    improvement_made = True
                                    break
                            if improvement_made or swaps_attempted >= self.max_swaps:
                                break
                        if improvement_made or swaps_attempted >= self.max_swaps:
                            break
                    if improvement_made or swaps_attempted >= self.max_swaps:
                        break
                if improvement_made or swaps_attempted >= self.max_swaps:
                    break

        logger.info(
            f"Swap optimization: {swaps_accepted} swaps accepted from {swaps_attempted} attempts, "
            f"score {starting_score.total:.4f} -> {current.total:.4f}"
        )
        return optimized
