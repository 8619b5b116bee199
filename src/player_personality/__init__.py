"""
Player Personality

Deterministic personality vectors keyed by player id.
"""

from player_personality.generator import generate_personality, seed_for, seeded_draw
from player_personality.personality import PlayerPersonality, TeamPriority

__all__ = [
    'PlayerPersonality',
    'TeamPriority',
    'generate_personality',
    'seed_for',
    'seeded_draw',
]
