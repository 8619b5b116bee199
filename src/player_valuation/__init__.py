"""
Player Valuation

Turns raw season statistics into ratings and ratings into contract floors.

Components:
- player: Position set and Player model
- rating_service: 50-99 overall rating from season stats
- contract_minimum: tier, veteran and rookie minimums, minimum validation
- rookie_scale: auto-assigned rookie contracts
"""

from player_valuation.contract_minimum import (
    ContractTier,
    MinimumValidation,
    minimum_rookie_contract,
    minimum_veteran_contract,
    tier_of,
    validate_contract_minimum,
)
from player_valuation.player import Player, Position
from player_valuation.rating_service import (
    PlayerRatingService,
    RatingContext,
    estimate_overall_from_rank,
)
from player_valuation.rookie_scale import RookieScaleCalculator

__all__ = [
    'Player',
    'Position',
    'PlayerRatingService',
    'RatingContext',
    'estimate_overall_from_rank',
    'ContractTier',
    'MinimumValidation',
    'tier_of',
    'minimum_veteran_contract',
    'minimum_rookie_contract',
    'validate_contract_minimum',
    'RookieScaleCalculator',
]
