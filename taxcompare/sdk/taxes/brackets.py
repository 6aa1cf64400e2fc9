"""Progressive bracket tax evaluation.

Used by every jurisdiction that has a bracket table. Tables are assumed to
be valid (ordered, contiguous, open-ended); that is checked once when the
rule file is loaded, see schemas.validate_bracket_table.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..formatting import format_rate
from .schemas import BracketLine, TaxBracket, validate_bracket_table


@dataclass(frozen=True)
class BracketTaxResult:
    """Total tax from a bracket table plus the per-bracket lines."""

    total_tax: float
    breakdown: Tuple[BracketLine, ...]


def calculate_progressive_tax(income: float, brackets: Sequence[TaxBracket]) -> BracketTaxResult:
    """Calculate progressive tax on income using a bracket table.

    Income exactly at a bracket's lower bound pays nothing in that bracket.
    A line item is recorded only for brackets with a positive slice, so
    brackets above the income never appear.

    Args:
        income: Income to tax (non-negative)
        brackets: Bracket table in ascending order

    Returns:
        BracketTaxResult with the summed tax and one line per contributing bracket
    """
    total_tax = 0.0
    breakdown = []

    for i, bracket in enumerate(brackets):
        if income <= bracket.min:
            break

        upper = bracket.max if bracket.max is not None else income
        taxable_in_bracket = min(income - bracket.min, upper - bracket.min)

        if taxable_in_bracket > 0:
            tax = taxable_in_bracket * bracket.rate
            total_tax += tax
            breakdown.append(BracketLine(
                name=f"Bracket {i + 1} ({format_rate(bracket.rate * 100)})",
                amount=tax,
                rate=bracket.rate,
            ))

    return BracketTaxResult(total_tax=total_tax, breakdown=tuple(breakdown))


__all__ = ["BracketTaxResult", "calculate_progressive_tax", "validate_bracket_table"]
