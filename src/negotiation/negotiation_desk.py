"""
Negotiation Desk

In-memory registry holding at most one live negotiation per (player, team)
pair. Starting a new negotiation for a pair supersedes (expires and
archives) the existing one. Sessions that reach a terminal state are moved
to the archive.

The desk is single-threaded: callers serialize offer submission per pair.
"""

from typing import Dict, List, Optional, Tuple
import logging

from negotiation.engine import NegotiationEngine
from negotiation.models import MarketContext, NegotiationResult, NegotiationSession, Offer
from player_valuation.player import Player


SessionKey = Tuple[str, str]


class NegotiationDesk:
    """Tracks live sessions and routes team actions through the engine."""

    def __init__(self, engine: Optional[NegotiationEngine] = None):
        self.engine = engine or NegotiationEngine()
        self.logger = logging.getLogger(__name__)
        self._live: Dict[SessionKey, NegotiationSession] = {}
        self._archive: List[NegotiationSession] = []

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def start(self, player: Player, team_id: str, max_years: Optional[int] = None) -> NegotiationSession:
        """Open a negotiation, superseding any live session for the pair."""
        key = (player.player_id, team_id)
        existing = self._live.pop(key, None)

        if existing is not None:
            superseded = self.engine.expire(existing).session or existing
            self._archive.append(superseded)
            self.logger.info(f"Superseded negotiation {existing.session_id} for {key}")

        session = self.engine.create_session(player, team_id, max_years)
        self._live[key] = session
        return session

    def submit_offer(
        self,
        player: Player,
        team_id: str,
        offer: Offer,
        market_context: Optional[MarketContext] = None
    ) -> NegotiationResult:
        session = self._live.get((player.player_id, team_id))
        if session is None:
            return self._missing(player.player_id, team_id)
        return self._record(self.engine.evaluate_offer(offer, session, player, market_context))

    def accept_counter(
        self,
        player: Player,
        team_id: str,
        market_context: Optional[MarketContext] = None
    ) -> NegotiationResult:
        session = self._live.get((player.player_id, team_id))
        if session is None:
            return self._missing(player.player_id, team_id)
        return self._record(self.engine.accept_counter(session, player, market_context))

    def decline(self, player_id: str, team_id: str) -> NegotiationResult:
        session = self._live.get((player_id, team_id))
        if session is None:
            return self._missing(player_id, team_id)
        return self._record(self.engine.decline(session))

    def end(self, player_id: str, team_id: str) -> NegotiationResult:
        """End talks without a deal (the session expires)."""
        session = self._live.get((player_id, team_id))
        if session is None:
            return self._missing(player_id, team_id)
        return self._record(self.engine.expire(session))

    # ========================================================================
    # QUERIES
    # ========================================================================

    def get_session(self, player_id: str, team_id: str) -> Optional[NegotiationSession]:
        return self._live.get((player_id, team_id))

    def team_sessions(self, team_id: str) -> List[NegotiationSession]:
        return [s for (_, team), s in self._live.items() if team == team_id]

    @property
    def archived(self) -> List[NegotiationSession]:
        return list(self._archive)

    def player_history(self, player_id: str) -> List[NegotiationSession]:
        """Archived sessions for a player, oldest first."""
        return [s for s in self._archive if s.player_id == player_id]

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _record(self, result: NegotiationResult) -> NegotiationResult:
        session = result.session
        if not result.ok or session is None:
            return result

        key = (session.player_id, session.team_id)
        if session.is_terminal:
            self._live.pop(key, None)
            self._archive.append(session)
        else:
            self._live[key] = session
        return result

    def _missing(self, player_id: str, team_id: str) -> NegotiationResult:
        reason = f"No active negotiation between player {player_id} and team {team_id}"
        self.logger.warning(reason)
        return NegotiationResult.failed(None, reason)
