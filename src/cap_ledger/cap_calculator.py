"""
Salary Cap Calculator

Pure arithmetic over a Contract's year-by-year schedule:
- Signing bonus proration (5-year max rule)
- Per-year cap hits and team totals
- Dead money on release, with the June 1 designation split
- Guaranteed money vesting
- Affordability checks that always return a structured result

Every function is stateless. Money is whole-unit integers throughout; the
proration schedule spreads the integer remainder of the bonus over the
earliest years so the amortized amounts always sum back to the bonus.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List
import logging

from cap_ledger.cap_utils import format_currency
from cap_ledger.contract import (
    AffordabilityResult,
    Contract,
    DeadMoneySplit,
    ReleaseResult,
    Team,
)


logger = logging.getLogger(__name__)

MAX_PRORATION_YEARS = 5


# ============================================================================
# SIGNING BONUS PRORATION
# ============================================================================

def proration_schedule(
    contract: Contract,
    max_proration_years: int = MAX_PRORATION_YEARS
) -> Dict[int, int]:
    """
    Amortize the signing bonus across the contract.

    The bonus is spread evenly over the first min(length, 5) seasons. Any
    integer remainder is added one unit at a time to the earliest seasons.

    Args:
        contract: Contract to amortize
        max_proration_years: Amortization window (league rule, default 5)

    Returns:
        Mapping of season -> prorated amount (empty when there is no bonus)

    Examples:
        >>> c = Contract.create_flat("p1", "t1", 2025, 5, 1_000_000, signing_bonus=5_000_000)
        >>> proration_schedule(c)[2027]
        1000000
    """
    length = contract.contract_length
    if contract.signing_bonus <= 0 or length == 0:
        return {}

    years = min(length, max_proration_years)
    per_year, remainder = divmod(contract.signing_bonus, years)

    return {
        contract.start_year + index: per_year + (1 if index < remainder else 0)
        for index in range(years)
    }


def prorated_bonus(
    contract: Contract,
    year: int,
    max_proration_years: int = MAX_PRORATION_YEARS
) -> int:
    """Signing bonus amount charged to one season (0 outside the proration window)."""
    return proration_schedule(contract, max_proration_years).get(year, 0)


# ============================================================================
# CAP HITS
# ============================================================================

def cap_hit(contract: Contract, year: int) -> int:
    """
    Cap charge for a season.

    Returns:
        base salary + prorated bonus, or 0 when the season is outside the
        contract range
    """
    if not contract.covers(year):
        return 0

    base = contract.base_salary.get(year) or 0
    return base + prorated_bonus(contract, year)


def team_cap_hit(contracts: Iterable[Contract], year: int) -> int:
    """Total cap charge of a set of contracts for a season."""
    return sum(cap_hit(contract, year) for contract in contracts)


def remaining_cap_space(contracts: Iterable[Contract], year: int, salary_cap: int) -> int:
    """Salary cap minus committed cap hits (negative when over the cap)."""
    return salary_cap - team_cap_hit(contracts, year)


def cap_summary(
    team_id: str,
    contracts: List[Contract],
    year: int,
    salary_cap: int
) -> Dict[str, Any]:
    """
    Build a season cap summary for a team.

    Returns:
        Dict consumed by cap_utils.format_cap_summary()
    """
    active = [c for c in contracts if c.covers(year)]
    base_total = sum(c.base_salary.get(year) or 0 for c in active)
    proration_total = sum(prorated_bonus(c, year) for c in active)
    total_used = base_total + proration_total

    return {
        'team_id': team_id,
        'season': year,
        'salary_cap': salary_cap,
        'contract_count': len(active),
        'base_salary_total': base_total,
        'proration_total': proration_total,
        'total_cap_used': total_used,
        'cap_space': salary_cap - total_used,
    }


# ============================================================================
# DEAD MONEY
# ============================================================================

def remaining_bonus(contract: Contract, cut_year: int) -> int:
    """
    Signing bonus not yet amortized before the cut season.

    Args:
        contract: Contract being terminated
        cut_year: Season in which the player is released

    Returns:
        Bonus amortized in seasons >= cut_year
    """
    schedule = proration_schedule(contract)
    amortized = sum(amount for season, amount in schedule.items() if season <= cut_year - 1)
    return max(0, max(0, contract.signing_bonus) - amortized)


def dead_money(contract: Contract, cut_year: int, pre_june_1: bool) -> DeadMoneySplit:
    """
    Dead money created by releasing a player.

    Pre-June 1 releases accelerate all remaining bonus into the cut season.
    Otherwise the cut season keeps its own proration and the rest moves to
    the following season.

    Args:
        contract: Contract being terminated
        cut_year: Season in which the player is released
        pre_june_1: Whether the release happens before June 1

    Returns:
        DeadMoneySplit(current_year, next_year)

    Examples:
        5-year, $5M bonus contract starting 2025, released in 2027:
        - pre_june_1=True  -> DeadMoneySplit(3_000_000, 0)
        - pre_june_1=False -> DeadMoneySplit(1_000_000, 2_000_000)
    """
    remaining = remaining_bonus(contract, cut_year)

    if pre_june_1:
        return DeadMoneySplit(current_year=remaining, next_year=0)

    current = min(remaining, prorated_bonus(contract, cut_year))
    return DeadMoneySplit(current_year=current, next_year=max(0, remaining - current))


def guaranteed_money(contract: Contract, year: int) -> int:
    """Guaranteed money vested through a season (guarantee.year <= year)."""
    return sum(g.amount for g in contract.guarantees if g.year <= year)


# ============================================================================
# AFFORDABILITY
# ============================================================================

def can_afford(team: Team, contract: Contract, year: int) -> AffordabilityResult:
    """
    Check a contract against a team's current cap space.

    The team's cap space already nets out its existing commitments, so the
    breakdown reports current_cap_hit as 0.
    """
    new_hit = cap_hit(contract, year)
    remaining = team.cap_space - new_hit
    affordable = team.cap_space >= new_hit

    return AffordabilityResult(
        can_afford=affordable,
        current_cap_hit=0,
        new_cap_hit=new_hit,
        remaining_cap=remaining,
        message=_affordability_message(affordable, remaining),
    )


def can_afford_by_year(
    team: Team,
    new_contract: Contract,
    existing_contracts: Iterable[Contract],
    year: int,
    salary_cap: int
) -> AffordabilityResult:
    """
    Check a contract against the salary cap for a season.

    Only existing contracts held by the team and covering the season count.

    Args:
        team: Team taking on the contract
        new_contract: Contract being considered
        existing_contracts: Team's current contracts
        year: Season to check
        salary_cap: League salary cap for the season

    Returns:
        AffordabilityResult with the current, new and remaining figures
    """
    current_hit = team_cap_hit(
        (c for c in existing_contracts if c.team_id == team.team_id and c.covers(year)),
        year
    )
    new_hit = cap_hit(new_contract, year)
    total = current_hit + new_hit
    remaining = salary_cap - total
    affordable = total <= salary_cap

    return AffordabilityResult(
        can_afford=affordable,
        current_cap_hit=current_hit,
        new_cap_hit=new_hit,
        remaining_cap=remaining,
        message=_affordability_message(affordable, remaining),
    )


def _affordability_message(affordable: bool, remaining: int) -> str:
    if affordable:
        return f"Contract fits with {format_currency(remaining)} cap space remaining"
    return f"Insufficient cap space. Need {format_currency(-remaining)} more"


# ============================================================================
# TEAM TRANSACTIONS
# ============================================================================

def apply_signing(team: Team, contract: Contract, year: int) -> Team:
    """Return the team after signing a contract (cap space reduced by the season's cap hit)."""
    return replace(
        team,
        cap_space=team.cap_space - cap_hit(contract, year),
        roster=team.roster | {contract.player_id},
    )


def apply_release(
    team: Team,
    contract: Contract,
    cut_year: int,
    pre_june_1: bool
) -> ReleaseResult:
    """
    Release (or trade away) a contract.

    The team regains the cut season's cap hit less the dead money charged to
    that season.

    Returns:
        ReleaseResult with the updated team, dead money split and cap savings
    """
    split = dead_money(contract, cut_year, pre_june_1)
    savings = cap_hit(contract, cut_year) - split.current_year

    updated = replace(
        team,
        cap_space=team.cap_space + savings,
        roster=team.roster - {contract.player_id},
    )

    logger.debug(
        f"Released {contract.player_id} from {team.team_id} in {cut_year}: "
        f"{format_currency(split.total)} dead money, {format_currency(savings)} cap savings"
    )

    return ReleaseResult(team=updated, dead_money=split, cap_savings=savings)
