"""
Free Agency Week Manager

Batch market clearing for the weekly free-agency cycles.

Each week, every bid is grouped by target player and the player decides:
- Score each bid (0-1):
    40% money:      min(1, apy / expected AAV)
    30% guarantees: min(1, guarantee count / 2)
    20% length:     age-banded preferred contract length
    10% team:       team-context score (neutral 0.5 unless a provider is set)
- Rank bids by score (ties broken by guarantees, apy, length, then
  submission order)
- Top score >= 0.70: accept it, shortlist the next bids up to the shortlist
  size and reject the rest. Each rejected team loses trust, the accepted
  team gains trust
- Otherwise shortlist the top bids up to the shortlist size and reject the
  rest; the player stays on the market

Players still unsigned after the configured number of weeks move to open
free agency (see free_agency.open_fa_manager).

Player bid groups are independent, so a week can be evaluated on a thread
pool; results always come back in the order players first appear.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence
import logging

from cap_ledger.cap_calculator import cap_hit
from cap_ledger.cap_utils import format_currency, to_whole_units
from cap_ledger.contract import Team
from cap_ledger.contract_validator import validate_contract
from cap_ledger.league_config import LeagueConfig
from free_agency.models import (
    BidStatus,
    FABid,
    FAPhase,
    FAWeek,
    FAWeekEvaluation,
    FAWeekSettings,
    PlayerDecision,
)
from negotiation.models import MarketContext, SeasonStage
from player_valuation.contract_minimum import validate_contract_minimum
from player_valuation.player import Player


TeamScoreProvider = Callable[[FABid, Player], float]

ACCEPTED_FEEDBACK = (
    "I'm excited to join the team! The offer meets my expectations and I'm ready to contribute."
)


class FAWeekManager:
    """
    Evaluates weekly free-agency bids.

    Args:
        settings: Market rules (defaults to FAWeekSettings())
        league: League rules used for bid validation
        team_score_provider: Optional callable scoring the team context of a
            bid (0-1). Defaults to the neutral settings.team_score.
    """

    # Bid score weights
    MONEY_WEIGHT = 0.4
    GUARANTEE_WEIGHT = 0.3
    LENGTH_WEIGHT = 0.2
    TEAM_WEIGHT = 0.1

    FULL_GUARANTEE_COUNT = 2
    VALUE_PER_OVERALL_POINT = 100_000

    def __init__(
        self,
        settings: Optional[FAWeekSettings] = None,
        league: Optional[LeagueConfig] = None,
        team_score_provider: Optional[TeamScoreProvider] = None
    ):
        self.settings = settings or FAWeekSettings()
        self.league = league or LeagueConfig.create_default()
        self.team_score_provider = team_score_provider
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # WEEK SETUP AND BID INTAKE
    # ========================================================================

    def create_fa_week(self, league_id: str, week_number: int) -> FAWeek:
        """Weekly cycles run through settings.fa_weeks; after that the market is open FA."""
        phase = FAPhase.FA_WEEK if week_number <= self.settings.fa_weeks else FAPhase.OPEN_FA
        return FAWeek(league_id=league_id, week_number=week_number, phase=phase)

    def can_submit_bid(self, team_id: str, bids: Iterable[FABid]) -> bool:
        """True while the team holds fewer pending bids than the concurrent-offer limit."""
        pending = sum(1 for b in bids if b.team_id == team_id and b.is_pending)
        return pending < self.settings.max_concurrent_offers

    def calculate_cap_hold(self, bid: FABid) -> int:
        """Cap space reserved while a bid is pending: the offer's first-year cap hit."""
        return cap_hit(bid.contract, bid.contract.start_year)

    def validate_bid(
        self,
        team: Team,
        bid: FABid,
        player: Player,
        pending_bids: Sequence[FABid]
    ) -> List[str]:
        """
        Check a bid before it enters the market.

        Returns:
            List of problems (empty when the bid can be submitted)
        """
        errors = validate_contract(bid.contract, self.league.max_contract_years)

        if bid.player_id != player.player_id or bid.contract.player_id != player.player_id:
            errors.append(f"Bid {bid.bid_id} does not target player {player.player_id}")

        if not self.can_submit_bid(team.team_id, pending_bids):
            errors.append(
                f"Team {team.team_id} already has {self.settings.max_concurrent_offers} pending offers"
            )

        minimum = validate_contract_minimum(bid.contract, player, self.league.salary_cap)
        if not minimum.is_valid:
            errors.append(minimum.message)

        held = sum(
            self.calculate_cap_hold(b) for b in pending_bids
            if b.team_id == team.team_id and b.is_pending
        )
        required = held + self.calculate_cap_hold(bid)
        if required > team.cap_space:
            errors.append(
                f"Insufficient cap space for cap hold. Need {format_currency(required - team.cap_space)} more"
            )

        return errors

    # ========================================================================
    # BID SCORING
    # ========================================================================

    def expected_aav(self, player: Player, market_context: MarketContext) -> int:
        """
        Market-expected AAV for a player.

        overall x 100,000, +20% for hot positions (demand > 0.7), -20% for
        cold ones (demand < 0.3), +10% in early free agency.
        """
        expected = player.overall * self.VALUE_PER_OVERALL_POINT

        if market_context.positional_demand > 0.7:
            expected *= 1.2
        elif market_context.positional_demand < 0.3:
            expected *= 0.8

        if market_context.season_stage == SeasonStage.EARLY_FA:
            expected *= 1.1

        return to_whole_units(expected)

    def length_score(self, years: int, age: int) -> float:
        """Younger players want term; veterans prefer short deals."""
        if age < 26:
            if years >= 3:
                return 1.0
            if years == 2:
                return 0.7
            return 0.3
        if age < 30:
            if years >= 2:
                return 1.0
            if years >= 1:
                return 0.8
            return 0.4
        if years == 1:
            return 1.0
        if years == 2:
            return 0.6
        return 0.2

    def team_score(self, bid: FABid, player: Player) -> float:
        if self.team_score_provider is None:
            return self.settings.team_score
        return max(0.0, min(1.0, self.team_score_provider(bid, player)))

    def score_bid(self, bid: FABid, player: Player, market_context: MarketContext) -> float:
        expected = self.expected_aav(player, market_context)
        money = 1.0 if expected <= 0 else min(1.0, bid.apy / expected)
        guarantees = min(1.0, bid.guarantee_count / self.FULL_GUARANTEE_COUNT)

        return (
            self.MONEY_WEIGHT * money
            + self.GUARANTEE_WEIGHT * guarantees
            + self.LENGTH_WEIGHT * self.length_score(bid.years, player.age)
            + self.TEAM_WEIGHT * self.team_score(bid, player)
        )

    # ========================================================================
    # PLAYER DECISIONS
    # ========================================================================

    def evaluate_player_bids(
        self,
        player: Player,
        bids: Sequence[FABid],
        market_context: MarketContext
    ) -> PlayerDecision:
        """
        Decide on every bid one player received this cycle.

        Args:
            player: Player receiving the bids
            bids: Bids targeting the player
            market_context: Market snapshot for the player

        Returns:
            PlayerDecision classifying every bid as accepted, shortlisted
            or rejected
        """
        scored = [(self.score_bid(bid, player, market_context), bid) for bid in bids]
        scored.sort(key=lambda item: self._rank_key(item[0], item[1]))
        scores = {bid.bid_id: score for score, bid in scored}

        if not scored:
            return PlayerDecision(player.player_id, None, (), (), "No offers received.")

        top_score, top_bid = scored[0]
        trust: Dict[str, float] = {}
        shortlist_size = self.settings.shortlist_size

        if top_score >= self.settings.acceptance_score:
            # Runners-up within the shortlist are held without a trust penalty
            shortlisted = [bid for _, bid in scored[1:shortlist_size + 1]]
            rejected = [bid for _, bid in scored[shortlist_size + 1:]]
            trust[top_bid.team_id] = trust.get(top_bid.team_id, 0.0) + self.settings.trust_bonus
            for bid in rejected:
                trust[bid.team_id] = trust.get(bid.team_id, 0.0) - self.settings.trust_penalty

            self.logger.info(
                f"{player.player_id} accepted bid {top_bid.bid_id} from {top_bid.team_id} "
                f"(score {top_score:.3f})"
            )

            return PlayerDecision(
                player_id=player.player_id,
                accepted_bid_id=top_bid.bid_id,
                shortlisted_bid_ids=tuple(b.bid_id for b in shortlisted),
                rejected_bid_ids=tuple(b.bid_id for b in rejected),
                feedback=ACCEPTED_FEEDBACK,
                trust_impact=trust,
                scores=scores,
            )

        shortlisted = [bid for _, bid in scored[:shortlist_size]]
        rejected = [bid for _, bid in scored[shortlist_size:]]
        for bid in rejected:
            trust[bid.team_id] = trust.get(bid.team_id, 0.0) - self.settings.trust_penalty

        feedback = f"I'm considering {len(shortlisted)} offers."
        if rejected:
            feedback += " Some offers were below market value and have been declined."

        return PlayerDecision(
            player_id=player.player_id,
            accepted_bid_id=None,
            shortlisted_bid_ids=tuple(b.bid_id for b in shortlisted),
            rejected_bid_ids=tuple(b.bid_id for b in rejected),
            feedback=feedback,
            trust_impact=trust,
            scores=scores,
        )

    def process_week(
        self,
        week_number: int,
        bids: Sequence[FABid],
        players: Dict[str, Player],
        market_context: Optional[MarketContext] = None,
        player_contexts: Optional[Dict[str, MarketContext]] = None,
        max_workers: Optional[int] = None
    ) -> FAWeekEvaluation:
        """
        Evaluate every pending bid submitted for the week.

        Args:
            week_number: Week being processed
            bids: All bids in the market (non-pending bids are ignored)
            players: player_id -> Player
            market_context: Default market snapshot
            player_contexts: Optional per-player market snapshots
            max_workers: Evaluate player groups on a thread pool of this size

        Returns:
            FAWeekEvaluation with decisions in first-seen player order and
            every bid's updated status
        """
        market_context = market_context or MarketContext()
        player_contexts = player_contexts or {}

        groups: Dict[str, List[FABid]] = {}
        for bid in bids:
            if bid.is_pending:
                groups.setdefault(bid.player_id, []).append(bid)

        work = []
        for player_id, player_bids in groups.items():
            player = players.get(player_id)
            if player is None:
                self.logger.warning(
                    f"No player data for {player_id}; {len(player_bids)} bids left pending"
                )
                continue
            work.append((player, player_bids, player_contexts.get(player_id, market_context)))

        if max_workers and len(work) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                decisions = list(executor.map(lambda args: self.evaluate_player_bids(*args), work))
        else:
            decisions = [self.evaluate_player_bids(*args) for args in work]

        by_player = {d.player_id: d for d in decisions}
        updated = []
        for bid in bids:
            decision = by_player.get(bid.player_id)
            if decision is not None and bid.is_pending:
                bid = replace(bid, status=decision.status_for(bid.bid_id))
            updated.append(bid)

        self.logger.info(
            f"FA week {week_number}: {len(decisions)} players evaluated, "
            f"{sum(1 for d in decisions if d.is_resolved)} signed"
        )

        return FAWeekEvaluation(week_number=week_number, decisions=decisions, bids=updated)

    def find_unresolved_players(
        self,
        evaluations: Iterable[FAWeekEvaluation],
        player_ids: Iterable[str]
    ) -> List[str]:
        """Players with no accepted bid in any of the given weeks."""
        signed = {
            decision.player_id
            for evaluation in evaluations
            for decision in evaluation.decisions
            if decision.is_resolved
        }
        return [player_id for player_id in player_ids if player_id not in signed]

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _rank_key(self, score: float, bid: FABid):
        """Sort key: score first, then configured tie breakers, then submission order."""
        breakers = {
            "guarantees": -bid.guarantee_count,
            "apy": -bid.apy,
            "length": -bid.years,
        }
        return (
            (-score,)
            + tuple(breakers[name] for name in self.settings.tie_breakers)
            + (bid.submitted_order,)
        )
