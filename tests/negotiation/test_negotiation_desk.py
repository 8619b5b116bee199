"""
Tests for NegotiationDesk: one live session per (player, team) pair.
"""

import pytest

from negotiation.models import MarketContext, Offer, SessionStatus
from negotiation.negotiation_desk import NegotiationDesk


@pytest.fixture
def desk(crafted_engine):
    return NegotiationDesk(engine=crafted_engine)


class TestSessionRegistry:

    def test_start_registers_live_session(self, desk, veteran_receiver):
        session = desk.start(veteran_receiver, "BUF")
        assert desk.get_session("p_wr_1", "BUF") is session
        assert desk.team_sessions("BUF") == [session]

    def test_restart_supersedes_existing(self, desk, veteran_receiver):
        first = desk.start(veteran_receiver, "BUF")
        second = desk.start(veteran_receiver, "BUF")

        assert desk.get_session("p_wr_1", "BUF") is second
        assert len(desk.archived) == 1
        assert desk.archived[0].session_id == first.session_id
        assert desk.archived[0].status is SessionStatus.EXPIRED

    def test_teams_negotiate_independently(self, desk, veteran_receiver):
        desk.start(veteran_receiver, "BUF")
        desk.start(veteran_receiver, "NYJ")
        assert desk.get_session("p_wr_1", "BUF") is not None
        assert desk.get_session("p_wr_1", "NYJ") is not None
        assert desk.archived == []


class TestOfferRouting:

    def test_counter_keeps_session_live(self, desk, veteran_receiver, quiet_market):
        desk.start(veteran_receiver, "BUF")
        result = desk.submit_offer(veteran_receiver, "BUF", Offer(7_448_000, 0.504, 3), quiet_market)

        assert result.counter is not None
        live = desk.get_session("p_wr_1", "BUF")
        assert live is result.session
        assert live.round == 2

    def test_accepted_session_archived(self, desk, veteran_receiver, quiet_market):
        desk.start(veteran_receiver, "BUF")
        desk.submit_offer(veteran_receiver, "BUF", Offer(7_448_000, 0.504, 3), quiet_market)
        result = desk.accept_counter(veteran_receiver, "BUF", quiet_market)

        assert result.accepted is True
        assert desk.get_session("p_wr_1", "BUF") is None
        assert desk.player_history("p_wr_1")[-1].status is SessionStatus.ACCEPTED

    def test_decline_and_end(self, desk, veteran_receiver, free_agent_receiver):
        desk.start(veteran_receiver, "BUF")
        desk.start(free_agent_receiver, "BUF")

        declined = desk.decline("p_wr_1", "BUF")
        ended = desk.end("fa_wr_1", "BUF")

        assert declined.session.status is SessionStatus.DECLINED
        assert ended.session.status is SessionStatus.EXPIRED
        assert desk.team_sessions("BUF") == []

    def test_offer_without_session(self, desk, veteran_receiver):
        result = desk.submit_offer(veteran_receiver, "BUF", Offer(8_000_000, 0.6, 3), MarketContext())
        assert result.ok is False
        assert result.session is None
        assert "No active negotiation" in result.failure_reason

    def test_failed_transition_leaves_registry_alone(self, desk, veteran_receiver, free_agent_receiver):
        desk.start(veteran_receiver, "BUF")
        before = desk.get_session("p_wr_1", "BUF")

        result = desk.accept_counter(veteran_receiver, "BUF")

        assert result.ok is False
        assert desk.get_session("p_wr_1", "BUF") is before
