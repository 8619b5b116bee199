"""
Tests for open free agency: discounted one-year deals, first come first served.
"""

import pytest

from cap_ledger.contract_validator import validate_contract
from free_agency.models import FAWeekSettings
from free_agency.open_fa_manager import OpenFAManager


@pytest.fixture
def open_fa():
    return OpenFAManager(league_id="league_1")


class TestOpenFAContract:

    def test_prove_it_contract_terms(self, open_fa, free_agent_receiver, mid_fa_market):
        contract = open_fa.calculate_open_fa_contract(free_agent_receiver, "DET", mid_fa_market, 2025)

        assert contract.contract_length == 1
        assert contract.base_salary == {2025: 5_760_000}
        assert contract.signing_bonus == 0
        assert contract.guarantees == ()
        assert validate_contract(contract) == []

    def test_market_price_is_expected_aav(self, open_fa, free_agent_receiver, mid_fa_market):
        assert open_fa.market_price(free_agent_receiver, mid_fa_market) == 7_200_000

    def test_custom_discount(self, free_agent_receiver, mid_fa_market):
        manager = OpenFAManager(FAWeekSettings(open_fa_discount=50))
        contract = manager.calculate_open_fa_contract(free_agent_receiver, "DET", mid_fa_market, 2026)
        assert contract.base_salary == {2026: 3_600_000}


class TestRequestSigning:

    def test_first_request_signs_player(self, open_fa, free_agent_receiver, mid_fa_market):
        signing = open_fa.request_signing(free_agent_receiver, "DET", mid_fa_market, 2025)

        assert signing.signing_id == "league_1_openfa_fa_wr_1_DET"
        assert signing.team_id == "DET"
        assert signing.market_price == 7_200_000
        assert signing.discount_applied == 20
        assert signing.contract_type == "prove_it"
        assert open_fa.is_available("fa_wr_1") is False
        assert open_fa.get_signing("fa_wr_1") is signing

    def test_second_request_refused(self, open_fa, free_agent_receiver, mid_fa_market):
        open_fa.request_signing(free_agent_receiver, "DET", mid_fa_market, 2025)
        assert open_fa.request_signing(free_agent_receiver, "KC", mid_fa_market, 2025) is None
        assert open_fa.get_signing("fa_wr_1").team_id == "DET"

    def test_unsigned_player_available(self, open_fa):
        assert open_fa.is_available("nobody") is True
        assert open_fa.get_signing("nobody") is None
