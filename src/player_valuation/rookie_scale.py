"""
Rookie Wage Scale

Drafted and undrafted rookies are auto-assigned a fixed-length contract
instead of negotiating. The total value is the rookie minimum for the draft
slot (a percentage of the salary cap), so rookie deals scale automatically
with cap growth.

Structure of an auto-assigned contract:
- Signing bonus: percentage of total value by draft slot
- Base salaries: remainder escalating across the contract years
- Guarantees: first-round base salaries are fully guaranteed
"""

from typing import List, Optional
import logging

from cap_ledger.contract import Contract, Guarantee, GuaranteeType
from player_valuation.contract_minimum import minimum_rookie_contract


class RookieScaleCalculator:
    """
    Build rookie contracts from the draft slot and the salary cap.

    Percentages are constant; only the input salary cap changes
    year-over-year.
    """

    # Signing bonus as percentage of total value
    SIGNING_BONUS_PERCENT_R1_TOP = 0.665  # Picks 1-10
    SIGNING_BONUS_PERCENT_R1_MID = 0.55  # Picks 11-20
    SIGNING_BONUS_PERCENT_R1_LATE = 0.50  # Picks 21+
    SIGNING_BONUS_PERCENT_R2 = 0.40
    SIGNING_BONUS_PERCENT_R3 = 0.30
    SIGNING_BONUS_PERCENT_LATE = 0.10
    SIGNING_BONUS_PERCENT_UDFA = 0.0

    # Share of post-bonus value paid as base salary in each contract year
    BASE_SALARY_WEIGHTS = (0.10, 0.20, 0.30, 0.40)

    def __init__(self, salary_cap: int, rookie_years: int = 4):
        """
        Initialize calculator with current salary cap.

        Args:
            salary_cap: Current year's salary cap (e.g., 255_000_000)
            rookie_years: Length of every rookie contract

        Raises:
            ValueError: If salary_cap is not a positive integer
        """
        if not isinstance(salary_cap, int) or salary_cap <= 0:
            raise ValueError(
                f"salary_cap must be a positive integer, got {salary_cap!r}"
            )
        if rookie_years < 1:
            raise ValueError(f"rookie_years must be at least 1, got {rookie_years}")

        self.salary_cap = salary_cap
        self.rookie_years = rookie_years
        self.logger = logging.getLogger(__name__)

    def create_rookie_contract(
        self,
        player_id: str,
        team_id: str,
        draft_round: Optional[int],
        pick_number: Optional[int],
        start_year: int
    ) -> Contract:
        """
        Auto-assign a rookie contract for a draft slot.

        Args:
            player_id: Drafted player
            team_id: Drafting team
            draft_round: Round 1-7, or None for an undrafted player
            pick_number: Pick within round 1 (used for the round-one bands)
            start_year: First contract season

        Returns:
            Contract whose total value equals the rookie minimum
        """
        total_value = minimum_rookie_contract(draft_round, self.salary_cap, pick_number)
        signing_bonus = int(total_value * self._get_signing_bonus_percent(draft_round, pick_number))
        base_salaries = self._calculate_base_salaries(total_value - signing_bonus)

        years = [start_year + i for i in range(self.rookie_years)]

        if draft_round == 1:
            guarantees = tuple(
                Guarantee(amount=salary, year=year, guarantee_type=GuaranteeType.FULL)
                for year, salary in zip(years, base_salaries)
            )
        else:
            guarantees = ()

        contract = Contract(
            player_id=player_id,
            team_id=team_id,
            start_year=start_year,
            end_year=years[-1],
            base_salary=dict(zip(years, base_salaries)),
            signing_bonus=signing_bonus,
            guarantees=guarantees,
        )

        self.logger.debug(
            f"Rookie contract for {player_id} (round {draft_round}, pick {pick_number}): "
            f"${total_value:,} total, ${signing_bonus:,} bonus"
        )

        return contract

    def _get_signing_bonus_percent(self, draft_round: Optional[int], pick_number: Optional[int]) -> float:
        """Get signing bonus as percentage of total value."""
        if draft_round == 1:
            pick = pick_number if pick_number is not None else 32
            if pick <= 10:
                return self.SIGNING_BONUS_PERCENT_R1_TOP
            elif pick <= 20:
                return self.SIGNING_BONUS_PERCENT_R1_MID
            return self.SIGNING_BONUS_PERCENT_R1_LATE
        elif draft_round == 2:
            return self.SIGNING_BONUS_PERCENT_R2
        elif draft_round == 3:
            return self.SIGNING_BONUS_PERCENT_R3
        elif draft_round in (4, 5, 6, 7):
            return self.SIGNING_BONUS_PERCENT_LATE
        return self.SIGNING_BONUS_PERCENT_UDFA

    def _calculate_base_salaries(self, remaining: int) -> List[int]:
        """
        Spread the post-bonus value over the contract years.

        Salaries escalate by BASE_SALARY_WEIGHTS (evenly when the contract
        length differs). The final year absorbs rounding so the schedule sums
        exactly to remaining.
        """
        if len(self.BASE_SALARY_WEIGHTS) == self.rookie_years:
            weights = self.BASE_SALARY_WEIGHTS
        else:
            weights = tuple(1 / self.rookie_years for _ in range(self.rookie_years))

        salaries = [int(remaining * weight) for weight in weights[:-1]]
        salaries.append(remaining - sum(salaries))
        return salaries
