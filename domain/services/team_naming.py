"""
Cosmetic team names: a team colour paired with a noun.
"""

import random

TEAM_COLOURS = ["blue", "white", "orange", "green", "black"]

NOUNS = [
    "Badgers", "Falcons", "Otters", "Wolves", "Herons", "Foxes", "Ravens", "Lynxes",
    "Bison", "Comets", "Rockets", "Anchors", "Pilots", "Hammers", "Arrows", "Thistles",
    "Pines", "Tides", "Storms", "Embers", "Glaciers", "Meteors", "Hornets", "Vipers",
    "Stags", "Owls", "Sharks", "Cobras", "Panthers", "Rangers", "Sparrows", "Cyclones",
]


def generate_team_names(count: int, rng: random.Random) -> list[str]:
    """
    Generate distinct team names.

    The first ``count`` colours are shuffled and cycled when there are more
    teams than colours; nouns are drawn without repeats.
    """
    if count < 1:
        return []
    colours = TEAM_COLOURS[:count]
    rng.shuffle(colours)

    names: list[str] = []
    used_nouns: set[str] = set()
    for i in range(count):
        available = [noun for noun in NOUNS if noun not in used_nouns] or NOUNS
        noun = rng.choice(available)
        used_nouns.add(noun)
        name = f"{colours[i % len(colours)]} {noun}"
        suffix = 2
        while name in names:
            name = f"{colours[i % len(colours)]} {noun} {suffix}"
            suffix += 1
        names.append(name)
    return names
