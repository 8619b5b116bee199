"""
Cap Ledger

Salary-cap arithmetic over multi-year contracts.

Components:
- contract: Contract, Guarantee and Team value objects plus ledger results
- cap_calculator: proration, cap hits, dead money, affordability
- contract_validator: structural contract validation
- league_config: configured league rules
- cap_utils: whole-unit rounding and display formatting
"""

from cap_ledger.cap_calculator import (
    apply_release,
    apply_signing,
    can_afford,
    can_afford_by_year,
    cap_hit,
    cap_summary,
    dead_money,
    guaranteed_money,
    prorated_bonus,
    proration_schedule,
    remaining_bonus,
    remaining_cap_space,
    team_cap_hit,
)
from cap_ledger.contract import (
    AffordabilityResult,
    Contract,
    DeadMoneySplit,
    Guarantee,
    GuaranteeType,
    ReleaseResult,
    Team,
)
from cap_ledger.contract_validator import is_rookie_contract, validate_contract
from cap_ledger.league_config import LeagueConfig

__all__ = [
    # Models
    'Contract',
    'Guarantee',
    'GuaranteeType',
    'Team',
    'AffordabilityResult',
    'DeadMoneySplit',
    'ReleaseResult',
    'LeagueConfig',
    # Calculations
    'proration_schedule',
    'prorated_bonus',
    'cap_hit',
    'team_cap_hit',
    'remaining_cap_space',
    'cap_summary',
    'remaining_bonus',
    'dead_money',
    'guaranteed_money',
    'can_afford',
    'can_afford_by_year',
    'apply_signing',
    'apply_release',
    # Validation
    'validate_contract',
    'is_rookie_contract',
]

__version__ = '1.0.0'
