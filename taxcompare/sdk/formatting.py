"""Display formatting for amounts and rates.

Amounts are rounded to whole units only here. The engine itself carries
fractional values through every calculation.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP


# Whitespace (including non-breaking and thin spaces) and common grouping marks
_SALARY_SEPARATORS = re.compile(r"[\s\u00a0\u2009\u202f,_']")


def format_currency(amount: float) -> str:
    """Round to the nearest whole unit and group thousands with spaces.

    Halves round up, as JavaScript's Math.round does. No currency symbol is
    added; see format_currency_with_symbol.

    Example:
        format_currency(1234567.5)  # -> '1 234 568'
    """
    rounded = math.floor(amount + 0.5)
    return f"{rounded:,}".replace(",", " ")


def format_currency_with_symbol(amount: float, currency: str) -> str:
    """Prefix a formatted amount with the currency's symbol (e.g., 'kr1 000')."""
    from .currency import get_currency_symbol

    return f"{get_currency_symbol(currency)}{format_currency(amount)}"


def format_rate(rate: float) -> str:
    """Format a percentage with one decimal place.

    Halves round up, so 13.25 formats as '13.3%'.
    """
    value = Decimal(rate).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{value}%"


def parse_salary(text: str) -> float:
    """Parse a salary typed by a user, e.g. '1 000 000' or '85,000'.

    Blank input parses as 0.

    Raises:
        ValueError: If the text is not a finite number
    """
    cleaned = _SALARY_SEPARATORS.sub("", text or "")
    if not cleaned:
        return 0.0

    value = float(cleaned)
    if not math.isfinite(value):
        raise ValueError(f"Salary must be a finite number, got '{text}'")
    return value
