"""
Cap Ledger Utilities

Helper functions for rounding money to whole units and formatting cap
figures for display.

Money is stored as whole-unit integers everywhere in the ledger. Fractional
values only exist transiently inside pricing formulas and are converted with
to_whole_units() before they are stored on a contract or offer.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict


def to_whole_units(amount: float) -> int:
    """
    Round a money amount to the nearest whole unit (halves round up).

    Args:
        amount: Amount that may carry a fractional part

    Returns:
        Integer amount

    Examples:
        >>> to_whole_units(1_049_999.5)
        1050000
    """
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: int) -> str:
    """
    Format integer amount as currency string.

    Args:
        amount: Amount in dollars

    Returns:
        Formatted string (e.g., "$25,000,000" or "-$5,000,000")
    """
    if amount >= 0:
        return f"${amount:,}"
    else:
        return f"-${abs(amount):,}"


def format_millions(amount: int) -> str:
    """
    Format amount in millions with one decimal place.

    Returns:
        Formatted string (e.g., "$1.5M")
    """
    millions = amount / 1_000_000
    if millions < 0:
        return f"-${abs(millions):.1f}M"
    return f"${millions:.1f}M"


def calculate_cap_percentage(amount: int, cap_limit: int) -> float:
    """
    Calculate what percentage of the cap an amount represents.

    Args:
        amount: Dollar amount
        cap_limit: Salary cap limit

    Returns:
        Percentage (0.0 to 100.0)
    """
    if cap_limit <= 0:
        return 0.0

    return (amount / cap_limit) * 100.0


def format_cap_percentage(amount: int, cap_limit: int) -> str:
    """Format cap percentage for display (e.g., "10.5% of cap")."""
    percentage = calculate_cap_percentage(amount, cap_limit)
    return f"{percentage:.1f}% of cap"


def format_cap_summary(cap_summary: Dict[str, Any]) -> str:
    """
    Format team cap summary for display.

    Args:
        cap_summary: Summary dict from cap_calculator.cap_summary()

    Returns:
        Formatted multi-line string
    """
    if not cap_summary:
        return "No cap data available"

    lines = []
    lines.append("=" * 60)
    lines.append(f"SALARY CAP SUMMARY - Team {cap_summary['team_id']} - Season {cap_summary['season']}")
    lines.append("=" * 60)
    lines.append("")

    lines.append(f"Salary Cap Limit:      {format_currency(cap_summary['salary_cap'])}")
    lines.append(f"Active Contracts:      {cap_summary['contract_count']}")
    lines.append(f"Base Salaries:         {format_currency(cap_summary['base_salary_total'])}")
    lines.append(f"Bonus Proration:       {format_currency(cap_summary['proration_total'])}")
    lines.append(f"Total Used:            {format_currency(cap_summary['total_cap_used'])}")
    lines.append("")

    cap_space = cap_summary['cap_space']
    compliance_status = "COMPLIANT" if cap_space >= 0 else "OVER CAP"
    lines.append(f"Cap Space:             {format_currency(cap_space)}  {compliance_status}")
    lines.append(
        f"Cap Used:              "
        f"{format_cap_percentage(cap_summary['total_cap_used'], cap_summary['salary_cap'])}"
    )

    lines.append("=" * 60)

    return "\n".join(lines)
