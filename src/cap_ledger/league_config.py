"""
League Configuration

League-wide rule set consumed by the cap ledger, the minimum-wage model,
negotiation sessions and the free-agency market.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueConfig:
    """
    Configured league rules.

    Attributes:
        salary_cap: League-wide salary cap for the season
        max_contract_years: Longest contract a team may sign
        max_proration_years: Signing bonus amortization window
        rookie_contract_years: Length of a drafted player's first contract
        roster_limit: Maximum players per roster
        season_year: Current league season
        fa_weeks: Weekly free-agency cycles before open free agency
    """

    salary_cap: int = 255_000_000
    max_contract_years: int = 7
    max_proration_years: int = 5
    rookie_contract_years: int = 4
    roster_limit: int = 53
    season_year: int = 2025
    fa_weeks: int = 4

    def __post_init__(self):
        if not isinstance(self.salary_cap, int) or self.salary_cap < 0:
            raise ValueError(f"salary_cap must be a non-negative integer, got {self.salary_cap!r}")
        if self.max_contract_years < 1:
            raise ValueError(f"max_contract_years must be at least 1, got {self.max_contract_years}")
        if self.max_proration_years < 1:
            raise ValueError(f"max_proration_years must be at least 1, got {self.max_proration_years}")
        if self.fa_weeks < 0:
            raise ValueError(f"fa_weeks cannot be negative, got {self.fa_weeks}")

    @classmethod
    def create_default(cls, season_year: int = 2025) -> "LeagueConfig":
        """Default league rules for a season."""
        return cls(season_year=season_year)
