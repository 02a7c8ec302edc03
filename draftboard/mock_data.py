"""
Synthetic players for ADP sources that have no live feed.
"""

from typing import List

import numpy as np

from . import config
from .player import Player


def generate_mock_players(
    source: str,
    count: int = config.MOCK_PLAYER_COUNT,
    seed: int = config.MOCK_SEED
) -> List[Player]:
    """
    Generate placeholder players for a source.

    Positions cycle QB, RB, WR, TE; ADP is a seeded random integer in
    [1, MOCK_PLAYER_COUNT]; tiers run 1-4 and restart every 60 players.

    Args:
        source: Source label used for ids and names
        count: Number of players to generate
        seed: RNG seed, same seed gives the same players

    Returns:
        List of mock players
    """
    rng = np.random.default_rng(seed)
    adps = rng.integers(1, config.MOCK_PLAYER_COUNT + 1, size=count)
    positions = config.MOCK_POSITIONS

    players = []
    for i in range(count):
        players.append(Player(
            id=f"{source}-{i}",
            name=f"{source} Player {i + 1}",
            team='',
            bye='',
            position=positions[i % len(positions)],
            adp=float(adps[i]),
            tier=(i % config.MOCK_TIER_CYCLE) // config.TIER_SIZE + 1,
            source=source,
        ))

    return players
