"""
Pot partitioning and snake-draft assignment.

Contains pure domain logic for banding players into pots and drafting one
candidate arrangement from them. All randomness comes from the injected RNG.
"""

import random

from domain.models.player import EffectivePlayer
from domain.models.team import Pot, TeamConfiguration


def pot_sort_key(player: EffectivePlayer) -> tuple[float, float, float, int]:
    """Descending effective rating, then ranking score, total points, appearances."""
    p = player.player
    return (-player.effective_rating, -p.ranking_score, -p.total_points, -p.appearances)


def snake_order(team_count: int, round_num: int) -> list[int]:
    """Team indices for a draft round: forward on even rounds, reversed on odd rounds."""
    order = list(range(team_count))
    if round_num % 2 == 1:
        order.reverse()
    return order


class DraftService:
    """
    Pure domain logic for seeded drafting.

    Handles:
    - Ordering players into pots (2 x team count per pot)
    - Snake-drafting each shuffled pot into teams
    """

    POT_SIZE_MULTIPLIER = 2

    def sort_players(self, players: list[EffectivePlayer]) -> list[EffectivePlayer]:
        """Sort strongest first. The sort is stable, so full ties keep input order."""
        return sorted(players, key=pot_sort_key)

    def partition_pots(self, players: list[EffectivePlayer], team_count: int) -> list[Pot]:
        """
        Slice players into ordered pots, strongest pot first.

        Args:
            players: Effective players (any order)
            team_count: Number of teams being generated

        Returns:
            Pots of size min(2 * team_count, remaining)
        """
        if team_count < 1:
            raise ValueError(f"team_count must be at least 1, got {team_count}")

        ordered = self.sort_players(players)
        pot_size = team_count * self.POT_SIZE_MULTIPLIER
        pots = []
        for start in range(0, len(ordered), pot_size):
            index = len(pots)
            pots.append(Pot(index=index, name=f"Pot {index + 1}", players=ordered[start : start + pot_size]))
        return pots

    def draft_iteration(
        self,
        pots: list[Pot],
        team_names: list[str],
        config: TeamConfiguration,
        rng: random.Random,
    ) -> dict[str, list[str]]:
        """
        Draft one candidate arrangement.

        Each pot is shuffled, then handed out in snake rounds over a fixed team
        order, one player per not-yet-full team per round. Drafting stops once
        every team has reached its configured size.

        Args:
            pots: Pot structure shared by every iteration
            team_names: Team names in creation order
            config: Target team sizes
            rng: Random source for the within-pot shuffle

        Returns:
            Mapping of team name to roster
        """
        team_sizes = config.team_sizes
        team_count = len(team_sizes)
        teams: dict[str, list[str]] = {name: [] for name in team_names}
        rosters = [teams[name] for name in team_names]

        for pot in pots:
            if all(len(rosters[i]) >= team_sizes[i] for i in range(team_count)):
                break

            current_pot = pot.names
            rng.shuffle(current_pot)

            pot_player_index = 0
            round_in_pot = 0
            while pot_player_index < len(current_pot):
                assigned_this_round = False
                for team_index in snake_order(team_count, round_in_pot):
                    if pot_player_index >= len(current_pot):
                        break
                    if len(rosters[team_index]) >= team_sizes[team_index]:
                        continue
                    rosters[team_index].append(current_pot[pot_player_index])
                    pot_player_index += 1
                    assigned_this_round = True

                # Every team is full; the rest of this pot sits out
                if not assigned_this_round:
                    break
                round_in_pot += 1

        return teams
