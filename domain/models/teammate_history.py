"""
Teammate history domain model.

Tracks how many times players have been teammates across recent sessions as a
symmetric PxP matrix where matrix[i][j] is the number of sessions in which
players i and j shared a team.
"""

import itertools
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from config import TEAMMATE_HISTORY_SESSION_LIMIT
from domain import error_codes
from domain.errors import ConfigError


def extract_teammate_pairs(teams: Mapping[str, Iterable[str]]) -> list[tuple[str, str]]:
    """
    Extract every unordered teammate pair from a team sheet.

    Blank or non-string names are ignored. Pairs are sorted so (A, B) and
    (B, A) produce the same key.
    """
    pairs: list[tuple[str, str]] = []
    for roster in teams.values():
        if isinstance(roster, (str, bytes)) or not isinstance(roster, Iterable):
            continue
        valid = [p for p in roster if isinstance(p, str) and p.strip()]
        for a, b in itertools.combinations(valid, 2):
            pairs.append((a, b) if a <= b else (b, a))
    return pairs


@dataclass
class TeammateHistory:
    """Read-only pairing counts over a known player index."""

    players: list[str]
    matrix: list[list[int]]
    total_sessions: int = 0
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        size = len(self.players)
        if len(self.matrix) != size or any(len(row) != size for row in self.matrix):
            raise ConfigError(
                f"Teammate history matrix must be {size}x{size}", error_codes.INVALID_HISTORY
            )
        self._index = {name: i for i, name in enumerate(self.players)}
        if len(self._index) != size:
            raise ConfigError("Teammate history players must be unique", error_codes.INVALID_HISTORY)

    def pair_count(self, player1: str, player2: str) -> int:
        """Number of prior sessions the two players were teammates (0 if either is unknown)."""
        i = self._index.get(player1)
        j = self._index.get(player2)
        if i is None or j is None:
            return 0
        return self.matrix[i][j]

    @property
    def metadata(self) -> dict:
        counts = [
            self.matrix[i][j]
            for i in range(len(self.players))
            for j in range(i + 1, len(self.players))
            if self.matrix[i][j] > 0
        ]
        return {
            "totalPlayers": len(self.players),
            "totalUniquePairs": len(counts),
            "maxPairings": max(counts) if counts else 0,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "TeammateHistory | None":
        """
        Load a persisted teammate history document.

        Returns None when no history is supplied.

        Raises:
            ConfigError: If the document is malformed
        """
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ConfigError("Teammate history must be a mapping", error_codes.INVALID_HISTORY)
        players = data.get("players")
        matrix = data.get("matrix")
        if not isinstance(players, list) or not isinstance(matrix, list):
            raise ConfigError("Teammate history requires players and matrix", error_codes.INVALID_HISTORY)
        try:
            rows = [[int(v) for v in row] for row in matrix]
        except (TypeError, ValueError):
            raise ConfigError("Teammate history matrix must contain integers", error_codes.INVALID_HISTORY) from None
        return cls(
            players=list(players),
            matrix=rows,
            total_sessions=int(data.get("totalSessions", 0) or 0),
        )

    @classmethod
    def from_sessions(
        cls,
        sessions: Iterable[tuple[str, Mapping[str, Iterable[str]]]],
        session_limit: int | None = None,
    ) -> "TeammateHistory":
        """
        Build teammate history from recent session team sheets.

        Args:
            sessions: (session_date, {team_name: roster}) pairs; dates in
                      YYYY-MM-DD form so they sort chronologically
            session_limit: Most recent sessions to include (default 12)

        Returns:
            TeammateHistory with a sorted player index and symmetric matrix
        """
        limit = session_limit if session_limit is not None else TEAMMATE_HISTORY_SESSION_LIMIT
        recent = sorted(sessions, key=lambda s: s[0], reverse=True)[:limit]

        pair_counts: Counter[tuple[str, str]] = Counter()
        for _date, teams in recent:
            if not teams:
                continue
            pair_counts.update(extract_teammate_pairs(teams))

        player_list = sorted({name for pair in pair_counts for name in pair})
        index = {name: i for i, name in enumerate(player_list)}
        matrix = [[0] * len(player_list) for _ in player_list]
        for (a, b), count in pair_counts.items():
            matrix[index[a]][index[b]] = count
            matrix[index[b]][index[a]] = count

        return cls(players=player_list, matrix=matrix, total_sessions=len(recent))

    def to_dict(self) -> dict:
        return {
            "players": list(self.players),
            "matrix": [list(row) for row in self.matrix],
            "totalSessions": self.total_sessions,
            "metadata": self.metadata,
        }
