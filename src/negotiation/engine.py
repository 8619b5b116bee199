"""
Negotiation Engine

Per-(player, team) negotiation state machine:

    active -> accepted | declined | expired   (all terminal)

Each offer goes through the same steps:
1. Player utility: weighted fit of the offer against the reservation,
   scaled by agent toughness
2. Market pressure from competing offers, positional demand, cap space and
   season stage (capped)
3. Acceptance threshold from patience, agent quality and competition
4. Accept when utility + pressure clears the threshold
5. Otherwise a lowball raises the reservation and costs extra patience
6. Otherwise the agent counters, closing part of the largest gaps
7. Non-accepted rounds advance the round and spend patience; the session
   expires when patience reaches zero

Transitions never mutate a session. They return a NegotiationResult carrying
a new NegotiationSession value. Predictable domain conditions (terminal
session, stale snapshot, missing data) come back as failed results rather
than exceptions.

Usage:
    engine = NegotiationEngine()
    session = engine.create_session(player, team_id="BUF")
    result = engine.evaluate_offer(Offer(aav=9_000_000, gtd_pct=0.6, years=3),
                                   session, player, market_context)
    if result.counter:
        result = engine.accept_counter(result.session, player, market_context)
"""

from dataclasses import replace
from typing import Callable, Dict, Optional
import logging
import math
import uuid

from cap_ledger.cap_utils import format_currency, to_whole_units
from negotiation import messages
from negotiation.models import (
    ContractTerms,
    CounterOffer,
    EventKind,
    MarketContext,
    NegotiationEvent,
    NegotiationResult,
    NegotiationSession,
    Offer,
    SessionStatus,
)
from negotiation.negotiation_config import NegotiationConfig
from player_personality.generator import generate_personality
from player_personality.personality import PlayerPersonality
from player_valuation.player import Player, Position


PersonalityProvider = Callable[[str], PlayerPersonality]

GAP_ORDER = ("aav", "gtd", "years")


def _ratio(value: float, target: float) -> float:
    """value / target, treating a zero target as fully met."""
    if target <= 0:
        return 1.0
    return value / target


class NegotiationEngine:
    """
    Stateless evaluator for negotiation sessions.

    Args:
        config: Negotiation constants (defaults to NegotiationConfig())
        personality_provider: Maps a player id to a personality. Defaults to
            the deterministic generator; tests inject crafted personalities.
    """

    def __init__(
        self,
        config: Optional[NegotiationConfig] = None,
        personality_provider: Optional[PersonalityProvider] = None
    ):
        self.config = config or NegotiationConfig.create_default()
        self.personality_provider = personality_provider or generate_personality
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # SESSION CREATION
    # ========================================================================

    def create_session(
        self,
        player: Player,
        team_id: str,
        max_years: Optional[int] = None
    ) -> NegotiationSession:
        """
        Open a negotiation between a player and a team.

        Reservation (player's minimum):
        - aav: overall x 100,000, scaled up to +10% by risk tolerance
        - gtd_pct: 0.5 + up to 0.3 for risk-averse players
        - years: 2 + security preference x 3, clamped to [1, max_years]

        Ask anchor (opening ask) inflates the reservation by agent quality.

        Args:
            player: Player being negotiated with
            team_id: Negotiating team
            max_years: League maximum contract length (default 5)

        Returns:
            New active NegotiationSession at round 1
        """
        cfg = self.config
        personality = self.personality_provider(player.player_id)
        max_years = max_years or cfg.default_max_years

        expected_value = player.overall * cfg.value_per_overall_point

        reservation = ContractTerms(
            aav=to_whole_units(expected_value * (0.9 + personality.risk_tolerance * 0.1)),
            gtd_pct=0.5 + (1 - personality.risk_tolerance) * 0.3,
            years=max(1, min(max_years, round(2 + personality.security_pref * 3))),
        )

        ask_anchor = ContractTerms(
            aav=to_whole_units(reservation.aav * (1.1 + personality.agent_quality * 0.1)),
            gtd_pct=min(cfg.max_reservation_gtd, reservation.gtd_pct * (1.05 + personality.agent_quality * 0.1)),
            years=min(max_years, reservation.years + math.ceil(personality.security_pref * 2)),
        )

        session = NegotiationSession(
            session_id=f"neg_{player.player_id}_{team_id}_{uuid.uuid4().hex[:12]}",
            player_id=player.player_id,
            team_id=team_id,
            reservation=reservation,
            ask_anchor=ask_anchor,
            patience=cfg.base_patience + math.floor(personality.agent_quality * 2),
            max_years=max_years,
        )

        self.logger.info(
            f"Negotiation {session.session_id} opened: reservation "
            f"{format_currency(reservation.aav)}/yr, {reservation.gtd_pct:.0%} gtd, "
            f"{reservation.years} yrs; patience {session.patience}"
        )

        return session

    # ========================================================================
    # SCORING PRIMITIVES
    # ========================================================================

    def positional_demand(self, position: Position) -> float:
        return self.config.positional_demand.get(position, self.config.default_positional_demand)

    def calculate_utility(
        self,
        offer: ContractTerms,
        reservation: ContractTerms,
        personality: PlayerPersonality
    ) -> float:
        """
        Player utility of an offer.

        Weighted sum of how fully the offer meets the reservation on money,
        guarantees and length, weighted by money_vs_role, (1 - risk_tolerance)
        and security_pref, then scaled by 0.8 + agent_quality x 0.4.
        """
        aav_fit = min(1.0, _ratio(offer.aav, reservation.aav))
        gtd_fit = min(1.0, _ratio(offer.gtd_pct, reservation.gtd_pct))
        years_fit = min(1.0, _ratio(offer.years, reservation.years))

        utility = (
            aav_fit * personality.money_vs_role
            + gtd_fit * (1 - personality.risk_tolerance)
            + years_fit * personality.security_pref
        )

        toughness = self.config.agent_toughness_base + personality.agent_quality * self.config.agent_toughness_scale
        return utility * toughness

    def calculate_market_pressure(self, market_context: MarketContext) -> float:
        """Market pressure on the player to sign, capped at 0.5."""
        cfg = self.config
        pressure = (
            market_context.competing_offers * cfg.competing_offer_weight
            + market_context.positional_demand * cfg.positional_demand_weight
            + min(cfg.cap_space_pressure_cap, market_context.cap_space_available / cfg.cap_space_pressure_unit)
            + cfg.stage_bonus.get(market_context.season_stage, 0.0)
        )
        return min(cfg.max_market_pressure, pressure)

    def calculate_acceptance_threshold(
        self,
        patience: int,
        personality: PlayerPersonality,
        market_context: MarketContext
    ) -> float:
        """
        Adjusted utility needed to accept.

        Starts at 0.95, drops 0.05 per patience point below 5, rises with
        agent quality, drops 0.1 without competing offers; clamped to [0.8, 1.1].
        """
        cfg = self.config
        threshold = cfg.base_threshold
        threshold -= cfg.patience_step * (cfg.patience_reference - patience)
        threshold += personality.agent_quality * cfg.agent_quality_threshold_weight

        if market_context.competing_offers == 0:
            threshold -= cfg.no_competition_relief

        return max(cfg.min_threshold, min(cfg.max_threshold, threshold))

    def is_lowball(self, offer: ContractTerms, reservation: ContractTerms) -> bool:
        return (
            _ratio(offer.aav, reservation.aav) < self.config.lowball_aav_ratio
            or _ratio(offer.gtd_pct, reservation.gtd_pct) < self.config.lowball_gtd_ratio
        )

    # ========================================================================
    # TRANSITIONS
    # ========================================================================

    def evaluate_offer(
        self,
        offer: Optional[Offer],
        session: Optional[NegotiationSession],
        player: Optional[Player],
        market_context: Optional[MarketContext] = None,
        expected_round: Optional[int] = None
    ) -> NegotiationResult:
        """
        Evaluate a team's offer and advance the session.

        Args:
            offer: Terms submitted by the team
            session: Current session snapshot
            player: Player being negotiated with
            market_context: Market snapshot (neutral defaults when omitted)
            expected_round: Round the caller believes the session is at;
                a mismatch means the caller holds a stale snapshot

        Returns:
            NegotiationResult with the new session. Failed results carry a
            failure_reason and the unchanged session.
        """
        failure = self._check_preconditions(offer, session, player, expected_round)
        if failure:
            return failure

        market_context = market_context or MarketContext()
        personality = self.personality_provider(player.player_id)

        utility = self.calculate_utility(offer, session.reservation, personality)
        pressure = self.calculate_market_pressure(market_context)
        adjusted_utility = utility + pressure
        threshold = self.calculate_acceptance_threshold(session.patience, personality, market_context)

        self.logger.debug(
            f"{session.session_id} round {session.round}: utility={utility:.3f} "
            f"pressure={pressure:.3f} threshold={threshold:.3f}"
        )

        history = session.history + (NegotiationEvent(EventKind.OFFER, session.round, offer),)

        if adjusted_utility >= threshold:
            message = messages.acceptance_message(personality)
            accepted = replace(
                session,
                status=SessionStatus.ACCEPTED,
                history=history + (NegotiationEvent(EventKind.ACCEPT, session.round, offer, message),),
            )
            self.logger.info(f"Negotiation {session.session_id} accepted in round {session.round}")
            return NegotiationResult(
                accepted=True,
                session=accepted,
                message=message,
                utility=utility,
                market_pressure=pressure,
                threshold=threshold,
            )

        if self.is_lowball(offer, session.reservation):
            message = messages.lowball_message(personality)
            reserved = replace(
                session,
                reservation=self._raise_reservation(session.reservation),
                patience=max(1, session.patience - 1),
            )
            return NegotiationResult(
                accepted=False,
                session=self._advance_round(reserved, history),
                message=message,
                utility=utility,
                market_pressure=pressure,
                threshold=threshold,
                lowball=True,
            )

        counter = self._generate_counter(offer, session, personality)
        history = history + (NegotiationEvent(EventKind.COUNTER, session.round, counter, counter.message),)

        return NegotiationResult(
            accepted=False,
            session=self._advance_round(session, history),
            message=counter.message,
            counter=counter,
            utility=utility,
            market_pressure=pressure,
            threshold=threshold,
        )

    def accept_counter(
        self,
        session: Optional[NegotiationSession],
        player: Optional[Player],
        market_context: Optional[MarketContext] = None
    ) -> NegotiationResult:
        """Team accepts the latest counter: resubmit its terms as an offer."""
        if session is None:
            return self._fail(None, "No negotiation session supplied")

        counter = session.last_counter
        if counter is None:
            return self._fail(session, f"Session {session.session_id} has no counter-offer to accept")

        return self.evaluate_offer(counter.as_offer(), session, player, market_context)

    def decline(self, session: Optional[NegotiationSession]) -> NegotiationResult:
        """Team walks away: active -> declined."""
        return self._close(session, SessionStatus.DECLINED, EventKind.DECLINE, messages.decline_message())

    def expire(self, session: Optional[NegotiationSession]) -> NegotiationResult:
        """End talks without a deal (scheduler tick or superseded session): active -> expired."""
        return self._close(session, SessionStatus.EXPIRED, EventKind.EXPIRE, messages.expiry_message())

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _check_preconditions(
        self,
        offer: Optional[Offer],
        session: Optional[NegotiationSession],
        player: Optional[Player],
        expected_round: Optional[int]
    ) -> Optional[NegotiationResult]:
        if session is None:
            return self._fail(None, "No negotiation session supplied")
        if player is None:
            return self._fail(session, f"No player data for session {session.session_id}")
        if offer is None:
            return self._fail(session, f"No offer supplied for session {session.session_id}")
        if player.player_id != session.player_id:
            return self._fail(
                session,
                f"Player {player.player_id} does not belong to session {session.session_id}"
            )
        if session.status.is_terminal:
            return self._fail(session, f"Negotiation session is {session.status.value}")
        if session.patience <= 0:
            return self._fail(session, "Negotiation session has run out of patience")
        if expected_round is not None and expected_round != session.round:
            return self._fail(
                session,
                f"Stale session: expected round {expected_round}, session is at round {session.round}"
            )
        return None

    def _fail(self, session: Optional[NegotiationSession], reason: str) -> NegotiationResult:
        self.logger.warning(reason)
        return NegotiationResult.failed(session, reason)

    def _raise_reservation(self, reservation: ContractTerms) -> ContractTerms:
        cfg = self.config
        return ContractTerms(
            aav=to_whole_units(reservation.aav * (1 + cfg.lowball_aav_raise)),
            gtd_pct=min(cfg.max_reservation_gtd, reservation.gtd_pct * (1 + cfg.lowball_gtd_raise)),
            years=reservation.years,
        )

    def _advance_round(self, session: NegotiationSession, history: tuple) -> NegotiationSession:
        """Spend a round of patience; expire the session when patience runs out."""
        patience = max(0, session.patience - 1)
        status = session.status

        if patience <= 0:
            status = SessionStatus.EXPIRED
            history = history + (NegotiationEvent(EventKind.EXPIRE, session.round, None, messages.expiry_message()),)
            self.logger.info(f"Negotiation {session.session_id} expired after round {session.round}")

        return replace(
            session,
            round=session.round + 1,
            patience=patience,
            status=status,
            history=history,
        )

    def _relative_gaps(self, offer: ContractTerms, target: ContractTerms) -> Dict[str, float]:
        return {
            "aav": 1 - _ratio(offer.aav, target.aav),
            "gtd": 1 - _ratio(offer.gtd_pct, target.gtd_pct),
            "years": 1 - _ratio(offer.years, target.years),
        }

    def _generate_counter(
        self,
        offer: ContractTerms,
        session: NegotiationSession,
        personality: PlayerPersonality
    ) -> CounterOffer:
        """
        Close part of every unmet gap and theme the message on the largest one.

        Gaps are measured against the reservation only. An offer that already
        meets it on every dimension is countered with its own terms.
        """
        cfg = self.config
        target = session.reservation
        gaps = self._relative_gaps(offer, target)

        # max() keeps the first of equal gaps, so ties resolve aav, gtd, years
        theme = max(GAP_ORDER, key=lambda name: gaps[name])

        aav = offer.aav + to_whole_units(max(0, target.aav - offer.aav) * cfg.counter_aav_close)
        gtd_pct = min(1.0, offer.gtd_pct + max(0.0, target.gtd_pct - offer.gtd_pct) * cfg.counter_gtd_close)
        years = offer.years + math.ceil(max(0, target.years - offer.years) * cfg.counter_years_close)
        years = max(1, min(session.max_years, years))

        return CounterOffer(
            aav=aav,
            gtd_pct=gtd_pct,
            years=years,
            theme=theme,
            message=messages.counter_message(theme, personality),
        )

    def _close(
        self,
        session: Optional[NegotiationSession],
        status: SessionStatus,
        kind: EventKind,
        message: str
    ) -> NegotiationResult:
        if session is None:
            return self._fail(None, "No negotiation session supplied")
        if session.status.is_terminal:
            return self._fail(session, f"Negotiation session is already {session.status.value}")
        if session.patience <= 0:
            return self._fail(session, "Negotiation session has run out of patience")

        closed = replace(
            session,
            status=status,
            history=session.history + (NegotiationEvent(kind, session.round, None, message),),
        )
        self.logger.info(f"Negotiation {session.session_id} {status.value}")

        return NegotiationResult(accepted=False, session=closed, message=message)
