"""
Provisional rating normalization.

Players with fewer than the established threshold of games have their ratings
pulled toward a conservative anchor, interpolating linearly from the anchor at
zero games to their actual rating at the threshold.
"""

from config import BALANCER_SETTINGS, DEFAULT_RATING
from domain.models.player import EffectivePlayer, Player, RatingAnchors


def rating_sort_key(player: Player) -> tuple[float, float, float]:
    """Descending order on rating, then ranking score, then total points."""
    return (-player.rating, -player.ranking_score, -player.total_points)


class RatingNormalizer:
    """
    Pure domain service for provisional rating adjustment.

    Responsibilities:
    - Split players into established and provisional
    - Derive anchors from the weakest established player
    - Compute effective ratings and the pool rating range
    """

    def __init__(
        self,
        established_threshold: int | None = None,
        anchor_multiplier: float | None = None,
    ):
        """
        Initialize the normalizer.

        Args:
            established_threshold: Games played before a rating is fully trusted (default 5)
            anchor_multiplier: Fraction of the weakest established values used as anchors (default 0.99)
        """
        settings = BALANCER_SETTINGS
        self.established_threshold = (
            established_threshold
            if established_threshold is not None
            else settings["established_games_threshold"]
        )
        self.anchor_multiplier = (
            anchor_multiplier if anchor_multiplier is not None else settings["anchor_multiplier"]
        )
        if self.established_threshold < 1:
            raise ValueError("established_threshold must be at least 1")

    def is_established(self, player: Player) -> bool:
        return player.is_established(self.established_threshold)

    def calculate_provisional_value(self, actual: float, games_played: int, anchor: float) -> float:
        """
        Interpolate from the anchor (0 games) to the actual value (threshold games).

        Args:
            actual: The player's actual value
            games_played: Games the player has played
            anchor: Starting value for a player with no games

        Returns:
            Effective value
        """
        if games_played >= self.established_threshold:
            return actual
        pull_factor = max(games_played, 0) / self.established_threshold
        return anchor + (actual - anchor) * pull_factor

    def calculate_anchors(self, players: list[Player]) -> RatingAnchors:
        """
        Calculate anchors from the weakest established player in the pool.

        Falls back to absolute defaults when nobody in the pool is established
        (new league or year start).
        """
        established = sorted(
            (p for p in players if self.is_established(p)),
            key=rating_sort_key,
        )
        if not established:
            return RatingAnchors()

        weakest = established[-1]
        return RatingAnchors(
            rating=weakest.rating * self.anchor_multiplier,
            attack=weakest.attack_rating * self.anchor_multiplier,
            control=weakest.control_rating * self.anchor_multiplier,
        )

    def effective_player(self, player: Player, anchors: RatingAnchors) -> EffectivePlayer:
        games = player.games_played
        return EffectivePlayer(
            player=player,
            effective_rating=self.calculate_provisional_value(player.rating, games, anchors.rating),
            effective_attack=self.calculate_provisional_value(player.attack_rating, games, anchors.attack),
            effective_control=self.calculate_provisional_value(
                player.control_rating, games, anchors.control
            ),
            is_provisional=not self.is_established(player),
        )

    def normalize(
        self, players: list[Player], anchors: RatingAnchors | None = None
    ) -> tuple[RatingAnchors, list[EffectivePlayer]]:
        """
        Apply provisional anchoring to every player.

        Args:
            players: Pool being balanced
            anchors: Explicit anchors; derived from the pool when omitted

        Returns:
            Tuple of (anchors used, effective players in input order)
        """
        if anchors is None:
            anchors = self.calculate_anchors(players)
        return anchors, [self.effective_player(p, anchors) for p in players]

    def pool_rating_range(self, players: list[EffectivePlayer]) -> float:
        """
        Max minus min rating across the pool.

        Provisional players count as the default rating here, so newcomers
        neither widen nor narrow the range.
        """
        if not players:
            return 0.0
        values = [
            DEFAULT_RATING if p.is_provisional else p.effective_rating
            for p in players
        ]
        return max(values) - min(values)
