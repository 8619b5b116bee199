"""
Personality Generator

Derives a PlayerPersonality from a stable player id.

Each slider and priority draw hashes "<player_id>|<salt>" with SHA-256 and
seeds a private random.Random with the first 8 bytes. Python's built-in
hash() is salted per process and the module-level random state is shared,
so neither is used.
"""

import hashlib
import random
from typing import List, Tuple

from player_personality.personality import PlayerPersonality, TeamPriority


# Slider -> (min, max) sub-range the draw is mapped into
SLIDER_RANGES = {
    "risk_tolerance": (0.2, 0.8),
    "security_pref": (0.3, 0.9),
    "agent_quality": (0.4, 0.9),
    "loyalty": (0.1, 0.8),
    "money_vs_role": (0.3, 0.9),
    "market_savvy": (0.3, 0.8),
}

# (type, value, weight, threshold): emitted when the salted draw exceeds threshold
PRIORITY_RULES: Tuple[Tuple[str, str, float, float], ...] = (
    ("role", "starter", 0.8, 0.5),
    ("contender", "playoff_team", 0.7, 0.6),
    ("location", "hometown", 0.6, 0.7),
)


def seed_for(player_id: str, salt: str) -> int:
    """Deterministic 64-bit seed for a (player, salt) pair."""
    raw = f"{player_id}|{salt}"
    digest = hashlib.sha256(raw.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def seeded_draw(player_id: str, salt: str) -> float:
    """Reproducible uniform draw in [0, 1) for a (player, salt) pair."""
    return random.Random(seed_for(player_id, salt)).random()


def _slider(player_id: str, name: str) -> float:
    low, high = SLIDER_RANGES[name]
    return low + seeded_draw(player_id, name) * (high - low)


def generate_personality(player_id: str) -> PlayerPersonality:
    """
    Generate the personality for a player id.

    Args:
        player_id: Stable player identifier

    Returns:
        PlayerPersonality (identical on every call for the same id)

    Raises:
        ValueError: If player_id is empty
    """
    if not player_id:
        raise ValueError("player_id is required to generate a personality")

    priorities: List[TeamPriority] = []
    for priority_type, value, weight, threshold in PRIORITY_RULES:
        if seeded_draw(player_id, f"priority:{priority_type}") > threshold:
            priorities.append(TeamPriority(priority_type, value, weight))

    return PlayerPersonality(
        player_id=player_id,
        team_priorities=tuple(priorities),
        **{name: _slider(player_id, name) for name in SLIDER_RANGES},
    )
