"""
Contract Minimum Calculator

Computes the floor contract value a player will accept:
- Veterans: salary cap x tier base x age modifier x position modifier
- Rookies: fixed percentage of cap by draft round (round 1 split by pick band)

validate_contract_minimum() compares a contract's total value (base salaries
plus signing bonus) against the applicable floor and returns a structured
verdict. It never raises for a below-minimum contract.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cap_ledger.cap_utils import format_millions, to_whole_units
from cap_ledger.contract import Contract
from player_valuation.player import Player, Position


class ContractTier(Enum):
    """Market tier a player's floor is priced from."""

    ELITE = "elite"
    STARTER = "starter"
    DEPTH = "depth"


TIER_BASE_PERCENT = {
    ContractTier.ELITE: 0.20,
    ContractTier.STARTER: 0.10,
    ContractTier.DEPTH: 0.03,
}

POSITION_MODIFIERS = {
    Position.QB: 1.0,
    Position.RB: 0.8,
    Position.WR: 0.8,
    Position.TE: 0.6,
    Position.K: 0.2,
    Position.DEF: 0.5,
}
DEFAULT_POSITION_MODIFIER = 0.5

# Round -> percent of cap. Round 1 is keyed by pick band instead.
ROUND_ONE_PICK_BANDS = (
    (8, 0.08),
    (16, 0.07),
)
ROUND_ONE_LATE_PERCENT = 0.06
ROOKIE_ROUND_PERCENT = {
    2: 0.04,
    3: 0.03,
    4: 0.025,
    5: 0.02,
    6: 0.015,
    7: 0.01,
}
UDFA_PERCENT = 0.005


@dataclass(frozen=True)
class MinimumValidation:
    """Verdict of a minimum-contract check."""

    is_valid: bool
    minimum_required: int
    current_value: int
    message: str


def tier_of(overall: int, years_exp: int) -> ContractTier:
    """
    Market tier for a player.

    Elite: overall >= 85, or 3+ years experience with overall >= 80.
    Starter: overall >= 75, or at most 2 years experience with overall >= 70.
    Everyone else is depth.
    """
    if overall >= 85 or (years_exp >= 3 and overall >= 80):
        return ContractTier.ELITE
    if overall >= 75 or (years_exp <= 2 and overall >= 70):
        return ContractTier.STARTER
    return ContractTier.DEPTH


def age_modifier(age: int) -> float:
    if age < 24:
        return 0.8
    if age <= 29:
        return 1.0
    if age <= 33:
        return 0.7
    return 0.5


def position_modifier(position: Position) -> float:
    return POSITION_MODIFIERS.get(position, DEFAULT_POSITION_MODIFIER)


def minimum_veteran_contract(
    tier: ContractTier,
    age: int,
    position: Position,
    salary_cap: int
) -> int:
    """
    Floor total value for a veteran contract.

    Examples:
        >>> minimum_veteran_contract(ContractTier.ELITE, 27, Position.QB, 200_000_000)
        40000000
    """
    value = salary_cap * TIER_BASE_PERCENT[tier] * age_modifier(age) * position_modifier(position)
    return to_whole_units(value)


def rookie_percent(draft_round: Optional[int], pick_number: Optional[int] = None) -> float:
    """Percent of cap for a draft slot. Unknown round-one picks use the late band."""
    if draft_round == 1:
        if pick_number is not None:
            for last_pick, percent in ROUND_ONE_PICK_BANDS:
                if pick_number <= last_pick:
                    return percent
        return ROUND_ONE_LATE_PERCENT

    return ROOKIE_ROUND_PERCENT.get(draft_round, UDFA_PERCENT)


def minimum_rookie_contract(
    draft_round: Optional[int],
    salary_cap: int,
    pick_number: Optional[int] = None
) -> int:
    """
    Floor total value for a rookie contract.

    Args:
        draft_round: Round 1-7, or None for an undrafted player
        salary_cap: League salary cap
        pick_number: Pick within round 1 (ignored for later rounds)
    """
    return to_whole_units(salary_cap * rookie_percent(draft_round, pick_number))


def validate_contract_minimum(
    contract: Contract,
    player: Player,
    salary_cap: int,
    is_rookie: bool = False,
    draft_round: Optional[int] = None,
    pick_number: Optional[int] = None
) -> MinimumValidation:
    """
    Check a contract against the player's minimum.

    Args:
        contract: Contract under review
        player: Player being signed
        salary_cap: League salary cap
        is_rookie: Price from the rookie scale instead of the veteran formula
        draft_round: Rookie's draft round (None for undrafted)
        pick_number: Rookie's pick within round 1

    Returns:
        MinimumValidation with the floor, the contract value and a message
    """
    current_value = contract.total_value

    if is_rookie:
        minimum = minimum_rookie_contract(draft_round, salary_cap, pick_number)
        round_label = draft_round if draft_round else "UDFA"
        shortfall_message = (
            f"Rookie contract must be at least {format_millions(minimum)} "
            f"(Round {round_label} minimum)"
        )
    else:
        tier = tier_of(player.overall, player.years_exp)
        minimum = minimum_veteran_contract(tier, player.age, player.position, salary_cap)
        shortfall_message = (
            f"{tier.value.capitalize()} {player.position.value} age {player.age} "
            f"minimum: {format_millions(minimum)}"
        )

    is_valid = current_value >= minimum

    return MinimumValidation(
        is_valid=is_valid,
        minimum_required=minimum,
        current_value=current_value,
        message="Contract meets minimum requirements" if is_valid else shortfall_message,
    )
