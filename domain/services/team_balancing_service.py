"""
Team balancing domain service.

Handles hard-constraint checks and normalized balance scoring.
"""

import math
from dataclasses import dataclass

from config import BALANCER_SETTINGS, SCORE_WEIGHTS, SECONDARY_RATING_DELTA_CAP
from domain.models.player import EffectivePlayer
from domain.models.teammate_history import TeammateHistory, extract_teammate_pairs


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def value_range(values: list[float]) -> float:
    if not values:
        return 0.0
    return max(values) - min(values)


@dataclass(frozen=True)
class BalanceContext:
    """
    Everything scoring needs about the pool, fixed for one generate call.

    Anchors are already folded into the effective players, so the context is
    passed explicitly to every scoring and swap call.
    """

    players: dict[str, EffectivePlayer]
    pool_rating_range: float
    hard_rating_delta_limit: float
    teammate_history: TeammateHistory | None = None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Normalized metrics where lower is better."""

    total: float
    rating_norm: float
    spread_norm: float
    pair_norm: float
    attack_norm: float
    control_norm: float
    rating_delta: float
    spread_balance: float
    attack_delta: float
    control_delta: float


class TeamBalancingService:
    """
    Pure domain service for team balancing logic.

    Responsibilities:
    - Calculate per-team rating averages and spreads
    - Check hard constraints (pairing cap, rating delta cap)
    - Combine balance metrics into one normalized score
    """

    def __init__(
        self,
        pairing_hard_limit: int | None = None,
        rating_delta_floor: float | None = None,
        rating_delta_fraction: float | None = None,
        weights: dict[str, float] | None = None,
    ):
        """
        Initialize team balancing service.

        Args:
            pairing_hard_limit: Reject pairs with at least this many prior pairings (default 3)
            rating_delta_floor: Minimum hard rating delta limit (default 60)
            rating_delta_fraction: Fraction of pool range allowed as rating delta (default 0.15)
            weights: Score weights keyed rating/spread/pairing/attack/control
        """
        settings = BALANCER_SETTINGS
        self.pairing_hard_limit = (
            pairing_hard_limit if pairing_hard_limit is not None else settings["pairing_hard_limit"]
        )
        self.rating_delta_floor = (
            rating_delta_floor if rating_delta_floor is not None else settings["rating_delta_floor"]
        )
        self.rating_delta_fraction = (
            rating_delta_fraction
            if rating_delta_fraction is not None
            else settings["rating_delta_fraction"]
        )
        self.weights = {**SCORE_WEIGHTS, **(weights or {})}

    def hard_rating_delta_limit(self, pool_rating_range: float) -> float:
        """max(floor, floor(fraction * pool range))."""
        return max(self.rating_delta_floor, math.floor(pool_rating_range * self.rating_delta_fraction))

    def calculate_team_averages(
        self, teams: dict[str, list[str]], context: BalanceContext, attribute: str = "effective_rating"
    ) -> list[float]:
        """
        Mean of an effective attribute per team, in team order.

        Empty teams contribute 0 for ratings and the neutral 0.5 for secondary ratings.
        """
        empty_value = 0.0 if attribute == "effective_rating" else 0.5
        averages = []
        for roster in teams.values():
            if not roster:
                averages.append(empty_value)
                continue
            total = sum(getattr(context.players[name], attribute) for name in roster)
            averages.append(total / len(roster))
        return averages

    def calculate_rating_delta(self, teams: dict[str, list[str]], context: BalanceContext) -> float:
        """Difference between the strongest and weakest team mean."""
        return value_range(self.calculate_team_averages(teams, context))

    def calculate_spread_balance(self, teams: dict[str, list[str]], context: BalanceContext) -> float:
        """
        Spread imbalance across teams (lower is better).

        Stops one team collecting every top-of-pot player while another gets
        every bottom-of-pot player even when their means match.
        """
        distributions = []
        for roster in teams.values():
            if not roster:
                continue
            ratings = sorted((context.players[name].effective_rating for name in roster), reverse=True)
            distributions.append((ratings[0], ratings[-1], ratings[len(ratings) // 2]))

        if len(distributions) < 2:
            return 0.0

        max_range = value_range([d[0] for d in distributions])
        min_range = value_range([d[1] for d in distributions])
        median_range = value_range([d[2] for d in distributions])

        # Median weighted most, then max, then min
        return median_range * 1.0 + max_range * 0.6 + min_range * 0.4

    def calculate_pairing_score(self, teams: dict[str, list[str]], context: BalanceContext) -> float:
        """
        Normalized pairing novelty in [0, 1] (0 = every pair is fresh).

        No history is treated as the best score.
        """
        history = context.teammate_history
        if history is None:
            return 0.0

        pairs = extract_teammate_pairs(teams)
        if not pairs:
            return 0.0

        total = 0.0
        for a, b in pairs:
            total += self._pair_bucket(history.pair_count(a, b))

        average = total / len(pairs)
        return clamp01((average + 1) / 2)

    @staticmethod
    def _pair_bucket(count: int) -> float:
        if count <= 0:
            return -1.0
        if count == 1:
            return -0.5
        if count == 2:
            return 0.0
        if count == 3:
            return 0.5
        return 1.0

    def violates_pairing_limit(self, teams: dict[str, list[str]], context: BalanceContext) -> bool:
        history = context.teammate_history
        if history is None:
            return False
        return any(
            history.pair_count(a, b) >= self.pairing_hard_limit
            for a, b in extract_teammate_pairs(teams)
        )

    def violates_hard_constraints(self, teams: dict[str, list[str]], context: BalanceContext) -> bool:
        """
        Check both hard rules.

        Returns:
            True if any teammate pair hits the pairing limit, or the team
            rating delta exceeds the hard limit
        """
        if self.violates_pairing_limit(teams, context):
            return True
        return self.calculate_rating_delta(teams, context) > context.hard_rating_delta_limit

    def score(self, teams: dict[str, list[str]], context: BalanceContext) -> ScoreBreakdown:
        """
        Combine every balance metric into one normalized score.

        Args:
            teams: Candidate arrangement
            context: Pool context for this generate call

        Returns:
            ScoreBreakdown with the weighted total and each component
        """
        limit = context.hard_rating_delta_limit
        rating_delta = self.calculate_rating_delta(teams, context)
        rating_norm = clamp01(rating_delta / limit) if limit else 0.0

        attack_delta = value_range(self.calculate_team_averages(teams, context, "effective_attack"))
        control_delta = value_range(self.calculate_team_averages(teams, context, "effective_control"))
        attack_norm = clamp01(attack_delta / SECONDARY_RATING_DELTA_CAP)
        control_norm = clamp01(control_delta / SECONDARY_RATING_DELTA_CAP)

        pair_norm = self.calculate_pairing_score(teams, context)

        spread_balance = self.calculate_spread_balance(teams, context)
        spread_ideal = context.pool_rating_range * 0.5
        spread_worst = max(spread_ideal + 1, context.pool_rating_range * 1.5)
        spread_norm = clamp01((spread_balance - spread_ideal) / (spread_worst - spread_ideal))

        w = self.weights
        weighted = (
            rating_norm * w["rating"]
            + spread_norm * w["spread"]
            + pair_norm * w["pairing"]
            + attack_norm * w["attack"]
            + control_norm * w["control"]
        )
        total = weighted / sum(w[k] for k in ("rating", "spread", "pairing", "attack", "control"))

        return ScoreBreakdown(
            total=total,
            rating_norm=rating_norm,
            spread_norm=spread_norm,
            pair_norm=pair_norm,
            attack_norm=attack_norm,
            control_norm=control_norm,
            rating_delta=rating_delta,
            spread_balance=spread_balance,
            attack_delta=attack_delta,
            control_delta=control_delta,
        )
