"""
Contract Data Models

Value objects the cap ledger computes over:
- Guarantee: guaranteed amount vesting in a single contract year
- Contract: year-by-year base salary schedule plus signing bonus for one
  (player, team) pair over an inclusive year range
- Team: current cap space and roster reference

Plus the structured results returned by ledger operations so callers can
render diagnostics without catching exceptions.

Structural problems with a contract (bad year range, missing salary year,
out-of-range guarantee) are NOT rejected here. They are reported by
cap_ledger.contract_validator.validate_contract. Construction only rejects
values of the wrong type.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional


class GuaranteeType(Enum):
    """Kind of guarantee attached to a contract year."""

    FULL = "full"
    INJURY_ONLY = "injury-only"


@dataclass(frozen=True)
class Guarantee:
    """Guaranteed money vesting in a contract year."""

    amount: int
    year: int
    guarantee_type: GuaranteeType = GuaranteeType.FULL

    def __post_init__(self):
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise TypeError(f"Guarantee amount must be an int, got {self.amount!r}")
        if not isinstance(self.year, int) or isinstance(self.year, bool):
            raise TypeError(f"Guarantee year must be an int, got {self.year!r}")
        if not isinstance(self.guarantee_type, GuaranteeType):
            object.__setattr__(self, "guarantee_type", GuaranteeType(self.guarantee_type))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.guarantee_type.value,
            "amount": self.amount,
            "year": self.year,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Guarantee":
        return cls(
            amount=data["amount"],
            year=data["year"],
            guarantee_type=GuaranteeType(data.get("type", "full")),
        )


@dataclass(frozen=True)
class Contract:
    """
    Multi-year contract between one player and one team.

    Attributes:
        player_id: Player the contract belongs to
        team_id: Team holding the contract
        start_year: First contract season (inclusive)
        end_year: Last contract season (inclusive)
        base_salary: Mapping of season -> base salary
        signing_bonus: Total signing bonus, prorated by the cap ledger
        guarantees: Guarantees ordered as submitted
        contract_id: Optional identifier assigned by the caller
        no_trade_clause: Whether the player can veto trades
    """

    player_id: str
    team_id: str
    start_year: int
    end_year: int
    base_salary: Dict[int, int]
    signing_bonus: int = 0
    guarantees: tuple = field(default_factory=tuple)
    contract_id: Optional[str] = None
    no_trade_clause: bool = False

    def __post_init__(self):
        self._validate_identity()
        self._validate_types()
        # Freeze the guarantee list so a signed contract cannot be edited in place
        object.__setattr__(self, "guarantees", tuple(self.guarantees))
        object.__setattr__(self, "base_salary", dict(self.base_salary))

    def _validate_identity(self):
        if not self.player_id:
            raise ValueError("Contract requires a player_id")
        if not self.team_id:
            raise ValueError("Contract requires a team_id")

    def _validate_types(self):
        for name in ("start_year", "end_year", "signing_bonus"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Contract {name} must be an int, got {value!r}")
        if not isinstance(self.base_salary, dict):
            raise TypeError("Contract base_salary must be a mapping of year -> salary")
        for guarantee in self.guarantees:
            if not isinstance(guarantee, Guarantee):
                raise TypeError(f"Contract guarantees must be Guarantee objects, got {guarantee!r}")

    # ========================================================================
    # DERIVED VALUES
    # ========================================================================

    @property
    def contract_length(self) -> int:
        """Number of seasons covered (0 when the year range is inverted)."""
        return max(0, self.end_year - self.start_year + 1)

    @property
    def years(self) -> List[int]:
        return list(range(self.start_year, self.end_year + 1))

    def covers(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    @property
    def total_base_salary(self) -> int:
        return sum(self.base_salary.get(year, 0) or 0 for year in self.years)

    @property
    def total_value(self) -> int:
        """Sum of base salaries plus signing bonus."""
        return self.total_base_salary + self.signing_bonus

    @property
    def aav(self) -> float:
        """Average annual value (0.0 for an empty contract)."""
        if self.contract_length == 0:
            return 0.0
        return self.total_value / self.contract_length

    @property
    def total_guaranteed(self) -> int:
        return sum(g.amount for g in self.guarantees)

    @property
    def guaranteed_pct(self) -> float:
        """Guaranteed money as a fraction of total value."""
        if self.total_value <= 0:
            return 0.0
        return self.total_guaranteed / self.total_value

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "start_year": self.start_year,
            "end_year": self.end_year,
            "base_salary": dict(self.base_salary),
            "signing_bonus": self.signing_bonus,
            "guarantees": [g.to_dict() for g in self.guarantees],
            "no_trade_clause": self.no_trade_clause,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contract":
        return cls(
            player_id=data["player_id"],
            team_id=data["team_id"],
            start_year=data["start_year"],
            end_year=data["end_year"],
            # Stored records may carry string keys (e.g. after JSON round-trip)
            base_salary={int(year): salary for year, salary in data["base_salary"].items()},
            signing_bonus=data.get("signing_bonus", 0),
            guarantees=tuple(Guarantee.from_dict(g) for g in data.get("guarantees", [])),
            contract_id=data.get("contract_id"),
            no_trade_clause=data.get("no_trade_clause", False),
        )

    @classmethod
    def create_flat(
        cls,
        player_id: str,
        team_id: str,
        start_year: int,
        years: int,
        annual_salary: int,
        signing_bonus: int = 0,
        guarantees: Iterable[Guarantee] = (),
        contract_id: Optional[str] = None,
    ) -> "Contract":
        """
        Build a contract paying the same base salary every season.

        Examples:
            >>> Contract.create_flat("p1", "t1", 2025, 2, 2_000_000).total_value
            4000000
        """
        return cls(
            player_id=player_id,
            team_id=team_id,
            start_year=start_year,
            end_year=start_year + years - 1,
            base_salary={start_year + i: annual_salary for i in range(years)},
            signing_bonus=signing_bonus,
            guarantees=tuple(guarantees),
            contract_id=contract_id,
        )


@dataclass(frozen=True)
class Team:
    """Team cap position. Cap space may be negative when a team is over the cap."""

    team_id: str
    cap_space: int
    roster: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if not self.team_id:
            raise ValueError("Team requires a team_id")
        if not isinstance(self.cap_space, int) or isinstance(self.cap_space, bool):
            raise TypeError(f"Team cap_space must be an int, got {self.cap_space!r}")
        object.__setattr__(self, "roster", frozenset(self.roster))


# ============================================================================
# LEDGER RESULTS
# ============================================================================

@dataclass(frozen=True)
class DeadMoneySplit:
    """Dead money charged to the cut year and the following year."""

    current_year: int
    next_year: int

    @property
    def total(self) -> int:
        return self.current_year + self.next_year


@dataclass(frozen=True)
class AffordabilityResult:
    """
    Outcome of an affordability check.

    Attributes:
        can_afford: Whether the new contract fits
        current_cap_hit: Cap already committed for the year by existing
            contracts (0 when checked against a team's net cap space)
        new_cap_hit: Cap hit of the contract being checked
        remaining_cap: Cap left after adding the new contract (may be negative)
        message: Human-readable summary
    """

    can_afford: bool
    current_cap_hit: int
    new_cap_hit: int
    remaining_cap: int
    message: str = ""


@dataclass(frozen=True)
class ReleaseResult:
    """Cap consequences of cutting (or trading away) a contract."""

    team: Team
    dead_money: DeadMoneySplit
    cap_savings: int
