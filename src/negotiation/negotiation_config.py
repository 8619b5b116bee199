"""
Negotiation Configuration

Tuning constants for session creation, utility scoring, acceptance and
counter-offer generation. The lowball ratios and threshold arithmetic are
empirically chosen; adjust them here rather than in the engine.
"""

from dataclasses import dataclass, field
from typing import Dict

from negotiation.models import SeasonStage
from player_valuation.player import Position


def _default_positional_demand() -> Dict[Position, float]:
    return {
        Position.QB: 0.9,
        Position.RB: 0.7,
        Position.WR: 0.8,
        Position.TE: 0.6,
        Position.K: 0.3,
        Position.DEF: 0.5,
    }


def _default_stage_bonus() -> Dict[SeasonStage, float]:
    return {
        SeasonStage.EARLY_FA: 0.1,
        SeasonStage.MID_FA: 0.2,
        SeasonStage.CAMP: 0.3,
        SeasonStage.MID_SEASON: 0.4,
    }


@dataclass(frozen=True)
class NegotiationConfig:
    """Negotiation constants (defaults reproduce the standard league behaviour)."""

    # ------------------------------------------------------------------
    # Session creation
    # ------------------------------------------------------------------
    value_per_overall_point: int = 100_000
    default_max_years: int = 5
    base_patience: int = 4

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    agent_toughness_base: float = 0.8
    agent_toughness_scale: float = 0.4

    # ------------------------------------------------------------------
    # Market pressure
    # ------------------------------------------------------------------
    competing_offer_weight: float = 0.1
    positional_demand_weight: float = 0.2
    cap_space_pressure_cap: float = 0.3
    cap_space_pressure_unit: int = 100_000_000
    max_market_pressure: float = 0.5
    stage_bonus: Dict[SeasonStage, float] = field(default_factory=_default_stage_bonus)

    # ------------------------------------------------------------------
    # Acceptance threshold
    # ------------------------------------------------------------------
    base_threshold: float = 0.95
    patience_reference: int = 5
    patience_step: float = 0.05
    agent_quality_threshold_weight: float = 0.1
    no_competition_relief: float = 0.1
    min_threshold: float = 0.8
    max_threshold: float = 1.1

    # ------------------------------------------------------------------
    # Lowball detection and reservation drift
    # ------------------------------------------------------------------
    lowball_aav_ratio: float = 0.85
    lowball_gtd_ratio: float = 0.80
    lowball_aav_raise: float = 0.06
    lowball_gtd_raise: float = 0.05
    max_reservation_gtd: float = 0.95

    # ------------------------------------------------------------------
    # Counter offers
    # ------------------------------------------------------------------
    counter_aav_close: float = 0.75
    counter_gtd_close: float = 0.85
    counter_years_close: float = 0.5

    positional_demand: Dict[Position, float] = field(default_factory=_default_positional_demand)
    default_positional_demand: float = 0.5

    @classmethod
    def create_default(cls) -> "NegotiationConfig":
        return cls()
