"""
Tests for draw history reconstruction.
"""

from domain.models.team import TeamConfiguration
from domain.services.draft_service import DraftService
from domain.services.draw_history_service import build_draw_history


class TestBuildDrawHistory:
    """Test build_draw_history."""

    def _drafted(self, effective_players, rng, team_count=3, sizes=(4, 4, 4)):
        service = DraftService()
        names = [f"team{i}" for i in range(team_count)]
        pots = service.partition_pots(effective_players, team_count)
        teams = service.draft_iteration(pots, names, TeamConfiguration(team_count, sizes), rng)
        return teams, pots, names

    def test_one_step_per_assigned_player(self, effective_players, rng):
        """Every rostered player appears in exactly one step."""
        teams, pots, names = self._drafted(effective_players, rng)
        steps = build_draw_history(teams, pots, names)
        assert sorted(s.player for s in steps) == sorted(n for r in teams.values() for n in r)

    def test_steps_land_on_final_team(self, effective_players, rng):
        """Each step's destination is the player's final team."""
        teams, pots, names = self._drafted(effective_players, rng)
        team_of = {n: t for t, r in teams.items() for n in r}
        for step in build_draw_history(teams, pots, names):
            assert step.destination_team == team_of[step.player]

    def test_pot_order_and_numbering(self, effective_players, rng):
        """Steps run pot by pot and are numbered from 1."""
        teams, pots, names = self._drafted(effective_players, rng)
        steps = build_draw_history(teams, pots, names)
        assert [s.order for s in steps] == list(range(1, len(steps) + 1))
        assert [s.pot_index for s in steps] == sorted(s.pot_index for s in steps)

    def test_remaining_counts_down(self, effective_players, rng):
        """The last pick from each pot leaves it empty."""
        teams, pots, names = self._drafted(effective_players, rng)
        steps = build_draw_history(teams, pots, names)
        for pot in pots:
            pot_steps = [s for s in steps if s.pot_index == pot.index]
            remaining = [s.pot_players_remaining_after for s in pot_steps]
            assert remaining == list(range(len(pot_steps) - 1, -1, -1))

    def test_snake_order_within_pot(self, effective_players, rng):
        """First round goes forward through the teams, second round backward."""
        teams, pots, names = self._drafted(effective_players, rng)
        steps = build_draw_history(teams, pots, names)
        first_pot = [s.destination_team for s in steps if s.pot_index == 0]
        assert first_pot == names + list(reversed(names))

    def test_partial_pool_skips_unassigned(self, effective_players, rng):
        """Players left out of every team are not in the history."""
        teams, pots, names = self._drafted(effective_players, rng, team_count=2, sizes=(4, 4))
        steps = build_draw_history(teams, pots, names)
        assert len(steps) == 8

    def test_empty_inputs(self):
        """No pots means no steps."""
        assert build_draw_history({}, [], []) == []

    def test_serialized_keys(self, effective_players, rng):
        """Steps serialize with display keys."""
        teams, pots, names = self._drafted(effective_players, rng)
        data = build_draw_history(teams, pots, names)[0].to_dict()
        assert set(data) == {"step", "player", "fromPot", "toTeam", "potPlayersRemaining"}
