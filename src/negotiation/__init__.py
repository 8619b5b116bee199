"""
Negotiation

Multi-round contract negotiation between a player's agent and a team.

Usage:
    from negotiation import NegotiationEngine, Offer, MarketContext

    engine = NegotiationEngine()
    session = engine.create_session(player, "BUF", max_years=5)
    result = engine.evaluate_offer(Offer(8_500_000, 0.6, 3), session, player,
                                   MarketContext(competing_offers=1))
    print(result.message)
"""

from negotiation.engine import NegotiationEngine
from negotiation.models import (
    ContractTerms,
    CounterOffer,
    EventKind,
    MarketContext,
    NegotiationEvent,
    NegotiationResult,
    NegotiationSession,
    Offer,
    SeasonStage,
    SessionStatus,
)
from negotiation.negotiation_config import NegotiationConfig
from negotiation.negotiation_desk import NegotiationDesk

__all__ = [
    'NegotiationEngine',
    'NegotiationDesk',
    'NegotiationConfig',
    'ContractTerms',
    'Offer',
    'CounterOffer',
    'MarketContext',
    'SeasonStage',
    'SessionStatus',
    'EventKind',
    'NegotiationEvent',
    'NegotiationSession',
    'NegotiationResult',
]
