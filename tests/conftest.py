"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- League configuration
- Sample contracts and teams
- Players and a crafted personality
- Market contexts
"""

import sys
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src/ must come first so the engine packages import by bare name.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    if str(src_path) in new_path:
        new_path.remove(str(src_path))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture
def league_config():
    """Default league rules (255M cap, 7-year max)."""
    from cap_ledger.league_config import LeagueConfig
    return LeagueConfig.create_default(season_year=2025)


@pytest.fixture
def test_season():
    """Standard season year for testing."""
    return 2025


# ============================================================================
# CONTRACT FIXTURES
# ============================================================================

@pytest.fixture
def no_bonus_contract():
    """2-year, $2M/$2M contract with no signing bonus."""
    from cap_ledger.contract import Contract
    return Contract.create_flat("p_rb_1", "DET", 2025, 2, 2_000_000)


@pytest.fixture
def five_year_bonus_contract():
    """5-year contract with a $5M signing bonus and $3M base salaries."""
    from cap_ledger.contract import Contract, Guarantee
    return Contract.create_flat(
        "p_qb_1", "DET", 2025, 5, 3_000_000,
        signing_bonus=5_000_000,
        guarantees=(Guarantee(4_000_000, 2025), Guarantee(2_000_000, 2027)),
    )


@pytest.fixture
def seven_year_bonus_contract():
    """7-year contract: bonus prorates over the first 5 years only."""
    from cap_ledger.contract import Contract
    return Contract.create_flat("p_edge_1", "KC", 2025, 7, 10_000_000, signing_bonus=35_000_000)


@pytest.fixture
def detroit():
    """Team with $20M of cap space."""
    from cap_ledger.contract import Team
    return Team(team_id="DET", cap_space=20_000_000, roster=frozenset({"p_qb_1"}))


# ============================================================================
# PLAYER FIXTURES
# ============================================================================

@pytest.fixture
def veteran_receiver():
    """27-year-old WR, 80 overall, 5 years experience."""
    from player_valuation.player import Player, Position
    return Player(player_id="p_wr_1", age=27, position=Position.WR, overall=80, years_exp=5)


@pytest.fixture
def free_agent_receiver():
    """27-year-old WR, 72 overall (depth tier), 5 years experience."""
    from player_valuation.player import Player, Position
    return Player(player_id="fa_wr_1", age=27, position=Position.WR, overall=72, years_exp=5)


@pytest.fixture
def crafted_personality():
    """
    Hand-set personality with known negotiation numbers.

    With an 80-overall player this gives:
    - reservation: $7,840,000 aav, 0.56 gtd, 3 years
    - patience: 4
    - agent toughness multiplier: 0.96
    """
    from player_personality.personality import PlayerPersonality
    return PlayerPersonality(
        player_id="crafted",
        risk_tolerance=0.8,
        security_pref=0.3,
        agent_quality=0.4,
        loyalty=0.5,
        money_vs_role=0.3,
        market_savvy=0.5,
    )


@pytest.fixture
def crafted_engine(crafted_personality):
    """NegotiationEngine that returns the crafted personality for every player."""
    from negotiation.engine import NegotiationEngine
    return NegotiationEngine(personality_provider=lambda player_id: crafted_personality)


# ============================================================================
# MARKET FIXTURES
# ============================================================================

@pytest.fixture
def quiet_market():
    """No competition, no positional demand, no cap space: pressure is the 0.1 EarlyFA bonus."""
    from negotiation.models import MarketContext, SeasonStage
    return MarketContext(
        competing_offers=0,
        positional_demand=0.0,
        cap_space_available=0,
        season_stage=SeasonStage.EARLY_FA,
    )


@pytest.fixture
def mid_fa_market():
    """Neutral mid free-agency market (no expected-AAV adjustments)."""
    from negotiation.models import MarketContext, SeasonStage
    return MarketContext(
        competing_offers=1,
        positional_demand=0.5,
        cap_space_available=50_000_000,
        season_stage=SeasonStage.MID_FA,
    )
