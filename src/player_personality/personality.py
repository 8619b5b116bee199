"""
Player Personality

Negotiation temperament of a player. A personality is derived from the
player id (see player_personality.generator) and is never stored as
mutable state: recomputing it for the same id always yields the same value.

Sliders (all within [0, 1]):
- risk_tolerance: willingness to trade guarantees for money
- security_pref: preference for long, safe contracts
- agent_quality: negotiating strength of the player's agent
- loyalty: attachment to the current organization
- money_vs_role: how much the player prioritizes money over role
- market_savvy: awareness of comparable contracts
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


SLIDER_NAMES = (
    "risk_tolerance",
    "security_pref",
    "agent_quality",
    "loyalty",
    "money_vs_role",
    "market_savvy",
)


@dataclass(frozen=True)
class TeamPriority:
    """A weighted preference about the signing team (e.g. role: starter)."""

    priority_type: str
    value: str
    weight: float

    def __post_init__(self):
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"Priority weight must be 0-1, got {self.weight}")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.priority_type, "value": self.value, "weight": self.weight}


@dataclass(frozen=True)
class PlayerPersonality:
    """Deterministic personality vector for one player."""

    player_id: str
    risk_tolerance: float
    security_pref: float
    agent_quality: float
    loyalty: float
    money_vs_role: float
    market_savvy: float
    team_priorities: Tuple[TeamPriority, ...] = field(default_factory=tuple)

    def __post_init__(self):
        self._validate_sliders()
        object.__setattr__(self, "team_priorities", tuple(self.team_priorities))

    def _validate_sliders(self):
        for name in SLIDER_NAMES:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be 0-1, got {value}")

    def has_priority(self, priority_type: str) -> bool:
        return any(p.priority_type == priority_type for p in self.team_priorities)

    def to_dict(self) -> Dict[str, Any]:
        data = {"player_id": self.player_id}
        data.update({name: getattr(self, name) for name in SLIDER_NAMES})
        data["team_priorities"] = [p.to_dict() for p in self.team_priorities]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerPersonality":
        return cls(
            player_id=data["player_id"],
            team_priorities=tuple(
                TeamPriority(p["type"], p["value"], p["weight"])
                for p in data.get("team_priorities", [])
            ),
            **{name: data[name] for name in SLIDER_NAMES},
        )
