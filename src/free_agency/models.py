"""
Free Agency Data Models

- FAWeekSettings: market rules for weekly bid evaluation and open FA
- FABid: a contract offer submitted by a team for a player
- FAWeek: one weekly cycle (or the open-FA phase after the weekly cycles)
- PlayerDecision: a player's verdict on all bids received in a cycle
- FAWeekEvaluation: decisions plus updated bids for a processed week
- OpenFASigning: direct-assignment signing record from open free agency
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from cap_ledger.contract import Contract


class FAPhase(Enum):
    FA_WEEK = "FA_WEEK"
    OPEN_FA = "OPEN_FA"


class BidStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"


VALID_TIE_BREAKERS = ("guarantees", "apy", "length")


@dataclass(frozen=True)
class FAWeekSettings:
    """
    Free-agency market rules.

    Attributes:
        max_concurrent_offers: Pending bids a team may hold at once
        shortlist_size: Runners-up held without a trust penalty instead of rejected
        trust_penalty: Trust lost by each team whose bid is rejected
        trust_bonus: Trust gained by the team whose bid is accepted
        acceptance_score: Minimum bid score for a player to accept
        open_fa_discount: Percent discount applied to open-FA contracts
        fa_weeks: Weekly cycles before unresolved players reach open FA
        team_score: Neutral team-context score used in bid scoring
        tie_breakers: Order of tie breakers for equal scores
    """

    max_concurrent_offers: int = 6
    shortlist_size: int = 3
    trust_penalty: float = 0.2
    trust_bonus: float = 0.1
    acceptance_score: float = 0.70
    open_fa_discount: int = 20
    fa_weeks: int = 4
    team_score: float = 0.5
    tie_breakers: Tuple[str, ...] = VALID_TIE_BREAKERS

    def __post_init__(self):
        if self.max_concurrent_offers < 1:
            raise ValueError(f"max_concurrent_offers must be at least 1, got {self.max_concurrent_offers}")
        if self.shortlist_size < 0:
            raise ValueError(f"shortlist_size cannot be negative, got {self.shortlist_size}")
        if not 0 <= self.open_fa_discount <= 100:
            raise ValueError(f"open_fa_discount must be 0-100, got {self.open_fa_discount}")
        if not 0.0 <= self.team_score <= 1.0:
            raise ValueError(f"team_score must be 0-1, got {self.team_score}")
        unknown = [t for t in self.tie_breakers if t not in VALID_TIE_BREAKERS]
        if unknown:
            raise ValueError(f"Unknown tie breakers: {unknown}")


@dataclass(frozen=True)
class FABid:
    """
    Team's contract offer for a free agent.

    Attributes:
        bid_id: Unique bid identifier
        team_id: Submitting team
        player_id: Target player
        contract: Offered contract
        week_number: FA week the bid was submitted in
        submitted_order: Submission sequence, the final tie breaker
        status: Bid status after evaluation
    """

    bid_id: str
    team_id: str
    player_id: str
    contract: Contract
    week_number: int = 1
    submitted_order: int = 0
    status: BidStatus = BidStatus.PENDING

    def __post_init__(self):
        if not self.bid_id:
            raise ValueError("FABid requires a bid_id")
        if not isinstance(self.contract, Contract):
            raise TypeError(f"FABid contract must be a Contract, got {self.contract!r}")

    @property
    def apy(self) -> float:
        return self.contract.aav

    @property
    def guarantee_count(self) -> int:
        return len(self.contract.guarantees)

    @property
    def years(self) -> int:
        return self.contract.contract_length

    @property
    def is_pending(self) -> bool:
        return self.status == BidStatus.PENDING


@dataclass(frozen=True)
class FAWeek:
    """One cycle of the free-agency calendar."""

    league_id: str
    week_number: int
    phase: FAPhase
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_open_fa(self) -> bool:
        return self.phase == FAPhase.OPEN_FA


@dataclass(frozen=True)
class PlayerDecision:
    """
    A player's verdict on every bid received in a cycle.

    Attributes:
        player_id: Deciding player
        accepted_bid_id: Winning bid, or None when nothing cleared the bar
        shortlisted_bid_ids: Runners-up held without a rejection; later weeks
            only evaluate PENDING bids, so these are not revisited
        rejected_bid_ids: Bids turned down
        feedback: Player's message to the bidding teams
        trust_impact: team_id -> trust delta from this decision
        scores: bid_id -> score, in ranked order
    """

    player_id: str
    accepted_bid_id: Optional[str]
    shortlisted_bid_ids: Tuple[str, ...]
    rejected_bid_ids: Tuple[str, ...]
    feedback: str
    trust_impact: Dict[str, float] = field(default_factory=dict)
    scores: Dict[str, float] = field(default_factory=dict)

    @property
    def is_resolved(self) -> bool:
        return self.accepted_bid_id is not None

    def status_for(self, bid_id: str) -> BidStatus:
        if bid_id == self.accepted_bid_id:
            return BidStatus.ACCEPTED
        if bid_id in self.shortlisted_bid_ids:
            return BidStatus.SHORTLISTED
        if bid_id in self.rejected_bid_ids:
            return BidStatus.REJECTED
        return BidStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "accepted_bid_id": self.accepted_bid_id,
            "shortlisted_bid_ids": list(self.shortlisted_bid_ids),
            "rejected_bid_ids": list(self.rejected_bid_ids),
            "feedback": self.feedback,
            "trust_impact": dict(self.trust_impact),
        }


@dataclass(frozen=True)
class FAWeekEvaluation:
    """Result of processing one week of bids."""

    week_number: int
    decisions: List[PlayerDecision]
    bids: List[FABid]

    def decision_for(self, player_id: str) -> Optional[PlayerDecision]:
        for decision in self.decisions:
            if decision.player_id == player_id:
                return decision
        return None

    @property
    def trust_impact(self) -> Dict[str, float]:
        """Trust deltas summed across every player's decision."""
        totals: Dict[str, float] = {}
        for decision in self.decisions:
            for team_id, delta in decision.trust_impact.items():
                totals[team_id] = totals.get(team_id, 0.0) + delta
        return totals


@dataclass(frozen=True)
class OpenFASigning:
    """Immediate open-FA signing (no negotiation)."""

    signing_id: str
    player_id: str
    team_id: str
    contract: Contract
    market_price: int
    discount_applied: int
    contract_type: str = "prove_it"
    signed_at: datetime = field(default_factory=datetime.now)
