"""
Player model and position set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Position(Enum):
    """Closed set of roster positions (offense, kicker, team defense, IDP families)."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"
    DL = "DL"
    LB = "LB"
    DB = "DB"

    @classmethod
    def from_string(cls, value: str) -> "Position":
        """Parse a position abbreviation (case-insensitive)."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown position: {value!r}") from None


MIN_OVERALL = 50
MAX_OVERALL = 99


@dataclass(frozen=True)
class Player:
    """
    Player as seen by the contract economy.

    Immutable for the duration of a negotiation or market cycle. The overall
    rating is derived by PlayerRatingService and passed in here.
    """

    player_id: str
    age: int
    position: Position
    overall: int
    years_exp: int = 0
    name: Optional[str] = None

    def __post_init__(self):
        if not self.player_id:
            raise ValueError("Player requires a player_id")
        if not isinstance(self.position, Position):
            object.__setattr__(self, "position", Position.from_string(self.position))
        if not MIN_OVERALL <= self.overall <= MAX_OVERALL:
            raise ValueError(
                f"overall must be between {MIN_OVERALL} and {MAX_OVERALL}, got {self.overall}"
            )
        if self.age <= 0:
            raise ValueError(f"age must be positive, got {self.age}")
        if self.years_exp < 0:
            raise ValueError(f"years_exp cannot be negative, got {self.years_exp}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "age": self.age,
            "position": self.position.value,
            "overall": self.overall,
            "years_exp": self.years_exp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            player_id=data["player_id"],
            age=data["age"],
            position=Position.from_string(data["position"]),
            overall=data["overall"],
            years_exp=data.get("years_exp", 0),
            name=data.get("name"),
        )
