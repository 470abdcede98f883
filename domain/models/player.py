"""
Player domain models.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from config import DEFAULT_RATING, DEFAULT_SECONDARY_RATING


@dataclass(frozen=True)
class Player:
    """
    A player as supplied by the external Rating Source.

    This is a pure domain model with no infrastructure dependencies.
    """

    name: str
    rating: float = DEFAULT_RATING
    games_played: int = 0
    attack_rating: float = DEFAULT_SECONDARY_RATING
    control_rating: float = DEFAULT_SECONDARY_RATING
    ranking_score: float = 0.0
    total_points: float = 0.0
    appearances: int = 0

    @classmethod
    def from_rating_entry(cls, name: str, entry: Mapping[str, Any] | None) -> "Player":
        """
        Build a player from a Rating Source entry.

        Missing entries (or missing/None fields) fall back to the documented
        defaults: rating 1000, secondary ratings 0.5, counters 0.

        Args:
            name: Player name
            entry: Mapping with any of rating, games_played, attack_rating,
                   control_rating, ranking_score, total_points, appearances
                   (camelCase keys such as gamesPlayed are accepted too)

        Returns:
            Player with defaults applied
        """
        entry = entry or {}

        def _get(snake: str, camel: str, default):
            value = entry.get(snake)
            if value is None:
                value = entry.get(camel)
            return default if value is None else value

        return cls(
            name=name,
            rating=float(_get("rating", "rating", DEFAULT_RATING)),
            games_played=int(_get("games_played", "gamesPlayed", 0)),
            attack_rating=float(_get("attack_rating", "attackRating", DEFAULT_SECONDARY_RATING)),
            control_rating=float(_get("control_rating", "controlRating", DEFAULT_SECONDARY_RATING)),
            ranking_score=float(_get("ranking_score", "rankingScore", 0.0)),
            total_points=float(_get("total_points", "totalPoints", 0.0)),
            appearances=int(_get("appearances", "appearances", 0)),
        )

    def is_established(self, threshold: int) -> bool:
        """Check whether the player has played enough games to trust their rating."""
        return self.games_played >= threshold

    def __str__(self) -> str:
        return f"{self.name} (Rating: {self.rating:.0f}, GP: {self.games_played})"


@dataclass(frozen=True)
class RatingAnchors:
    """Baseline values provisional players are pulled toward."""

    rating: float = DEFAULT_RATING
    attack: float = DEFAULT_SECONDARY_RATING
    control: float = DEFAULT_SECONDARY_RATING


@dataclass(frozen=True)
class EffectivePlayer:
    """A player with provisional anchoring applied to every rating."""

    player: Player
    effective_rating: float
    effective_attack: float
    effective_control: float
    is_provisional: bool

    @property
    def name(self) -> str:
        return self.player.name

    def to_dict(self) -> dict:
        """Serialize for draw-history pot display."""
        return {
            "name": self.player.name,
            "rating": round(self.effective_rating),
            "actualRating": round(self.player.rating),
            "isProvisional": self.is_provisional,
            "attackRating": self.effective_attack,
            "controlRating": self.effective_control,
            "appearances": self.player.appearances,
        }
