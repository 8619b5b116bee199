"""
Open Free Agency

Players left unsigned after the weekly cycles can be signed directly by the
first team that asks. There is no negotiation: the player gets a one-year
"prove it" deal at the discounted market price, with no signing bonus and no
guarantees.
"""

from typing import Dict, Optional
import logging

from cap_ledger.cap_utils import format_currency, to_whole_units
from cap_ledger.contract import Contract
from free_agency.fa_week_manager import FAWeekManager
from free_agency.models import FAWeekSettings, OpenFASigning
from negotiation.models import MarketContext
from player_valuation.player import Player


class OpenFAManager:
    """
    First-come, first-served signings for unresolved free agents.

    Args:
        settings: Market rules (open_fa_discount is the percent discount)
        fa_manager: Source of expected AAV pricing
        league_id: League the signing records belong to
    """

    def __init__(
        self,
        settings: Optional[FAWeekSettings] = None,
        fa_manager: Optional[FAWeekManager] = None,
        league_id: str = "league"
    ):
        self.settings = settings or FAWeekSettings()
        self.fa_manager = fa_manager or FAWeekManager(self.settings)
        self.league_id = league_id
        self.logger = logging.getLogger(__name__)
        self._signings: Dict[str, OpenFASigning] = {}

    def market_price(self, player: Player, market_context: MarketContext) -> int:
        return self.fa_manager.expected_aav(player, market_context)

    def calculate_open_fa_contract(
        self,
        player: Player,
        team_id: str,
        market_context: MarketContext,
        season_year: int
    ) -> Contract:
        """One-year deal at expected AAV less the open-FA discount."""
        price = self.market_price(player, market_context)
        salary = to_whole_units(price * (1 - self.settings.open_fa_discount / 100))

        return Contract(
            player_id=player.player_id,
            team_id=team_id,
            start_year=season_year,
            end_year=season_year,
            base_salary={season_year: salary},
            signing_bonus=0,
            guarantees=(),
        )

    def is_available(self, player_id: str) -> bool:
        return player_id not in self._signings

    def request_signing(
        self,
        player: Player,
        team_id: str,
        market_context: MarketContext,
        season_year: int
    ) -> Optional[OpenFASigning]:
        """
        Sign a player to the first requesting team.

        Returns:
            OpenFASigning, or None when the player has already signed
        """
        if not self.is_available(player.player_id):
            holder = self._signings[player.player_id].team_id
            self.logger.warning(
                f"Open FA request from {team_id} for {player.player_id} refused: "
                f"already signed by {holder}"
            )
            return None

        contract = self.calculate_open_fa_contract(player, team_id, market_context, season_year)
        signing = OpenFASigning(
            signing_id=f"{self.league_id}_openfa_{player.player_id}_{team_id}",
            player_id=player.player_id,
            team_id=team_id,
            contract=contract,
            market_price=self.market_price(player, market_context),
            discount_applied=self.settings.open_fa_discount,
        )
        self._signings[player.player_id] = signing

        self.logger.info(
            f"Open FA: {player.player_id} signed with {team_id} for "
            f"{format_currency(contract.total_value)} (1 year)"
        )

        return signing

    def get_signing(self, player_id: str) -> Optional[OpenFASigning]:
        return self._signings.get(player_id)
