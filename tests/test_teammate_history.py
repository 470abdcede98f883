"""
Tests for teammate history building and loading.
"""

import pytest

from domain.errors import ConfigError
from domain.models.teammate_history import TeammateHistory, extract_teammate_pairs
from services import error_codes


SESSIONS = [
    ("2024-01-01", {"blue Owls": ["Ann", "Bob", "Cat"], "white Foxes": ["Dan", "Eve"]}),
    ("2024-01-08", {"green Tides": ["Ann", "Bob"], "black Stags": ["Cat", "Dan", "Eve"]}),
    ("2024-01-15", {"orange Pines": ["Bob", "Ann", " "], "blue Comets": ["Eve", "Cat"]}),
]


class TestExtractTeammatePairs:
    """Test extract_teammate_pairs."""

    def test_sorted_pairs(self):
        """Pairs are sorted within and counted once per team."""
        pairs = extract_teammate_pairs({"x": ["Cat", "Ann", "Bob"]})
        assert sorted(pairs) == [("Ann", "Bob"), ("Ann", "Cat"), ("Bob", "Cat")]

    def test_blank_names_ignored(self):
        """Blank names never form pairs."""
        assert extract_teammate_pairs({"x": ["Ann", "", "  "]}) == []


class TestFromSessions:
    """Test TeammateHistory.from_sessions."""

    def test_counts(self):
        """Ann and Bob shared a team in all three sessions."""
        history = TeammateHistory.from_sessions(SESSIONS)
        assert history.pair_count("Ann", "Bob") == 3
        assert history.pair_count("Cat", "Eve") == 2
        assert history.pair_count("Eve", "Cat") == 2
        assert history.pair_count("Ann", "Dan") == 0
        assert history.total_sessions == 3

    def test_symmetric(self):
        """The matrix is symmetric."""
        history = TeammateHistory.from_sessions(SESSIONS)
        size = len(history.players)
        for i in range(size):
            for j in range(size):
                assert history.matrix[i][j] == history.matrix[j][i]

    def test_sorted_index(self):
        """Players are indexed alphabetically."""
        history = TeammateHistory.from_sessions(SESSIONS)
        assert history.players == ["Ann", "Bob", "Cat", "Dan", "Eve"]

    def test_session_limit_keeps_newest(self):
        """Only the newest sessions count."""
        history = TeammateHistory.from_sessions(SESSIONS, session_limit=1)
        assert history.pair_count("Ann", "Bob") == 1
        assert history.pair_count("Dan", "Eve") == 0
        assert history.total_sessions == 1

    def test_metadata(self):
        history = TeammateHistory.from_sessions(SESSIONS)
        assert history.metadata == {"totalPlayers": 5, "totalUniquePairs": 6, "maxPairings": 3}

    def test_no_sessions(self):
        """An empty history knows no pairs."""
        history = TeammateHistory.from_sessions([])
        assert history.players == []
        assert history.pair_count("Ann", "Bob") == 0


class TestFromDict:
    """Test loading persisted history."""

    def test_round_trip(self):
        """to_dict output loads back to the same counts."""
        history = TeammateHistory.from_sessions(SESSIONS)
        loaded = TeammateHistory.from_dict(history.to_dict())
        assert loaded.pair_count("Ann", "Bob") == 3
        assert loaded.total_sessions == 3

    def test_none(self):
        """No document means no history."""
        assert TeammateHistory.from_dict(None) is None

    def test_non_square_matrix(self):
        """A matrix that does not match the player list is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            TeammateHistory.from_dict({"players": ["Ann", "Bob"], "matrix": [[0, 1]]})
        assert exc_info.value.code == error_codes.INVALID_HISTORY

    def test_missing_fields(self):
        """Documents without players or matrix are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            TeammateHistory.from_dict({"players": ["Ann"]})
        assert exc_info.value.code == error_codes.INVALID_HISTORY

    def test_not_a_mapping(self):
        """A list in place of the document is rejected with a code."""
        with pytest.raises(ConfigError) as exc_info:
            TeammateHistory.from_dict([["Ann", "Bob"], [[0, 1], [1, 0]]])
        assert exc_info.value.code == error_codes.INVALID_HISTORY

    def test_duplicate_players(self):
        """Duplicate names make the index ambiguous."""
        with pytest.raises(ConfigError):
            TeammateHistory(players=["Ann", "Ann"], matrix=[[0, 0], [0, 0]])
