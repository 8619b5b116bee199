"""
Contract Validator

Structural validation of contract records. Problems are returned as a list
of descriptive strings so callers can show every issue at once; nothing in
this module raises for an invalid contract.
"""

from typing import List

from cap_ledger.contract import Contract


MAX_CONTRACT_YEARS = 7
ROOKIE_CONTRACT_YEARS = 4


def validate_contract(contract: Contract, max_years: int = MAX_CONTRACT_YEARS) -> List[str]:
    """
    Validate a contract's year range, salary schedule and guarantees.

    Args:
        contract: Contract to check
        max_years: Longest allowed contract

    Returns:
        List of error messages (empty when the contract is valid)
    """
    errors = []

    if contract.start_year > contract.end_year:
        errors.append("Start year must be before or equal to end year")

    if contract.contract_length > max_years:
        errors.append(f"Contract cannot exceed {max_years} years")

    if contract.signing_bonus < 0:
        errors.append("Signing bonus cannot be negative")

    for year in contract.years:
        salary = contract.base_salary.get(year)
        if not isinstance(salary, int) or isinstance(salary, bool) or salary < 0:
            errors.append(f"Invalid base salary for year {year}")

    for index, guarantee in enumerate(contract.guarantees):
        if guarantee.amount < 0:
            errors.append(f"Guarantee {index} amount cannot be negative")
        if not contract.covers(guarantee.year):
            errors.append(f"Guarantee {index} year must be within contract period")

    return errors


def is_rookie_contract(contract: Contract, rookie_years: int = ROOKIE_CONTRACT_YEARS) -> bool:
    """Rookie deals run exactly the rookie contract length."""
    return contract.contract_length == rookie_years
