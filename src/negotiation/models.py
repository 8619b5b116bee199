"""
Negotiation Data Models

Value objects for the per-(player, team) negotiation protocol:
- ContractTerms / Offer / CounterOffer: the (aav, guaranteed %, years) triple
- MarketContext: read-only market snapshot passed into every evaluation
- NegotiationEvent: one entry in a session's history
- NegotiationSession: immutable snapshot of a session's state machine
- NegotiationResult: outcome of a single transition

Sessions are frozen. Every transition in NegotiationEngine returns a new
session value, so a caller holding an older snapshot can detect staleness
by comparing round and status.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from cap_ledger.cap_utils import to_whole_units
from cap_ledger.contract import Contract


class SeasonStage(Enum):
    """Point in the league calendar a negotiation happens in."""

    EARLY_FA = "EarlyFA"
    MID_FA = "MidFA"
    CAMP = "Camp"
    MID_SEASON = "MidSeason"


class SessionStatus(Enum):
    """Negotiation session states. Everything except ACTIVE is terminal."""

    ACTIVE = "active"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self != SessionStatus.ACTIVE


class EventKind(Enum):
    OFFER = "offer"
    COUNTER = "counter"
    ACCEPT = "accept"
    DECLINE = "decline"
    EXPIRE = "expire"


# ============================================================================
# TERMS
# ============================================================================

@dataclass(frozen=True)
class ContractTerms:
    """
    Headline contract terms.

    Attributes:
        aav: Average annual value (whole units)
        gtd_pct: Guaranteed money as a fraction of total value (0-1)
        years: Contract length
    """

    aav: int
    gtd_pct: float
    years: int

    def __post_init__(self):
        self._validate_terms()

    def _validate_terms(self):
        if self.aav < 0:
            raise ValueError(f"aav cannot be negative, got {self.aav}")
        if not 0.0 <= self.gtd_pct <= 1.0:
            raise ValueError(f"gtd_pct must be 0-1, got {self.gtd_pct}")
        if self.years < 0:
            raise ValueError(f"years cannot be negative, got {self.years}")


@dataclass(frozen=True)
class Offer(ContractTerms):
    """Terms submitted by a team."""

    @classmethod
    def from_contract(cls, contract: Contract) -> "Offer":
        """Summarize a full contract as negotiation terms."""
        return cls(
            aav=to_whole_units(contract.aav),
            gtd_pct=min(1.0, contract.guaranteed_pct),
            years=contract.contract_length,
        )


@dataclass(frozen=True)
class CounterOffer(ContractTerms):
    """
    Terms proposed back by the player's side.

    Attributes:
        theme: Dimension with the largest unmet gap ("aav", "gtd" or "years")
        message: Agent's message themed to that dimension
    """

    theme: str = "aav"
    message: str = ""

    def as_offer(self) -> Offer:
        return Offer(aav=self.aav, gtd_pct=self.gtd_pct, years=self.years)


@dataclass(frozen=True)
class MarketContext:
    """
    Read-only market snapshot.

    Attributes:
        competing_offers: Other teams currently bidding for the player
        positional_demand: League-wide demand for the position (0-1)
        cap_space_available: Combined cap space of interested teams
        season_stage: Calendar stage of the negotiation
        recent_comps: AAVs of recent comparable contracts
        team_reputation: Reputation of the negotiating team (0-1)
    """

    competing_offers: int = 0
    positional_demand: float = 0.5
    cap_space_available: int = 0
    season_stage: SeasonStage = SeasonStage.EARLY_FA
    recent_comps: Tuple[int, ...] = field(default_factory=tuple)
    team_reputation: float = 0.5

    def __post_init__(self):
        if self.competing_offers < 0:
            raise ValueError(f"competing_offers cannot be negative, got {self.competing_offers}")
        if not 0.0 <= self.positional_demand <= 1.0:
            raise ValueError(f"positional_demand must be 0-1, got {self.positional_demand}")
        if not 0.0 <= self.team_reputation <= 1.0:
            raise ValueError(f"team_reputation must be 0-1, got {self.team_reputation}")
        object.__setattr__(self, "recent_comps", tuple(self.recent_comps))


# ============================================================================
# SESSION STATE
# ============================================================================

@dataclass(frozen=True)
class NegotiationEvent:
    """One entry in a session's history."""

    kind: EventKind
    round: int
    terms: Optional[ContractTerms] = None
    message: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class NegotiationSession:
    """
    Snapshot of a negotiation between one player and one team.

    Attributes:
        session_id: Unique session identifier
        player_id: Player being negotiated with
        team_id: Team making offers
        round: Current round (starts at 1, increases after each non-accepted offer)
        reservation: Player's minimum acceptable terms (drifts upward on lowballs)
        ask_anchor: Opening ask, fixed at creation
        patience: Rounds left before the session expires
        max_years: Longest contract the league allows in this session
        history: Offer/counter/accept/decline/expire events in order
        status: Session state
    """

    session_id: str
    player_id: str
    team_id: str
    reservation: ContractTerms
    ask_anchor: ContractTerms
    patience: int
    max_years: int
    round: int = 1
    history: Tuple[NegotiationEvent, ...] = field(default_factory=tuple)
    status: SessionStatus = SessionStatus.ACTIVE
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_terminal(self) -> bool:
        """Terminal once accepted/declined/expired or out of patience."""
        return self.status.is_terminal or self.patience <= 0

    @property
    def last_counter(self) -> Optional[CounterOffer]:
        for event in reversed(self.history):
            if event.kind == EventKind.COUNTER:
                return event.terms
        return None

    @property
    def offers(self) -> Tuple[ContractTerms, ...]:
        return tuple(e.terms for e in self.history if e.kind == EventKind.OFFER)


@dataclass(frozen=True)
class NegotiationResult:
    """
    Outcome of a session transition.

    A failed result (failure_reason set) leaves the session unchanged; the
    session is None only when no session was supplied.
    """

    accepted: bool
    session: Optional[NegotiationSession]
    message: str
    counter: Optional[CounterOffer] = None
    utility: float = 0.0
    market_pressure: float = 0.0
    threshold: float = 0.0
    lowball: bool = False
    failure_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure_reason is None

    @classmethod
    def failed(cls, session: Optional[NegotiationSession], reason: str) -> "NegotiationResult":
        return cls(accepted=False, session=session, message=reason, failure_reason=reason)
