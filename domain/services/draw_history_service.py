"""
Draw history reconstruction.

Generation is randomized and iterative, so there is no literal draw to record.
Instead a plausible snake-draft sequence is replayed from the final teams and
the fixed pot structure, purely for display.
"""

from collections import deque

from domain.models.team import DrawStep, Pot


def build_draw_history(
    teams: dict[str, list[str]],
    pots: list[Pot],
    team_names: list[str],
) -> list[DrawStep]:
    """
    Replay a snake draft that ends in the given teams.

    Args:
        teams: Final team rosters
        pots: Pot structure used for generation
        team_names: Team names in creation order

    Returns:
        Ordered draw steps, pot by pot
    """
    if not pots or not team_names:
        return []

    pot_of = {name: pot.index for pot in pots for name in pot.names}

    # Per team, per pot: the roster players drawn from that pot, in roster order
    picks_by_team = []
    for team_name in team_names:
        by_pot = [deque() for _ in pots]
        for player in teams.get(team_name, []):
            by_pot[pot_of.get(player, 0)].append(player)
        picks_by_team.append((team_name, by_pot))

    steps: list[DrawStep] = []
    for pot_index in range(len(pots)):
        rounds = max(len(by_pot[pot_index]) for _name, by_pot in picks_by_team)
        remaining = sum(len(by_pot[pot_index]) for _name, by_pot in picks_by_team)

        for round_num in range(rounds):
            order = picks_by_team if round_num % 2 == 0 else list(reversed(picks_by_team))
            for team_name, by_pot in order:
                if not by_pot[pot_index]:
                    continue
                player = by_pot[pot_index].popleft()
                remaining -= 1
                steps.append(
                    DrawStep(
                        order=len(steps) + 1,
                        player=player,
                        pot_index=pot_index,
                        destination_team=team_name,
                        pot_players_remaining_after=remaining,
                    )
                )

    return steps
