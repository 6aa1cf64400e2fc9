"""Currency conversion through a single pivot currency.

All rates in tax_rules/currencies.yaml are expressed relative to the pivot
(AUD = 1). Converting between two currencies is one division and one
multiplication, never a chain through further intermediates.

The table is static and needs a manual update from time to time; rates are
not fetched live.
"""

import logging
from typing import Dict, List, Mapping, Optional

from .errors import InvalidCurrencyCodeError
from .taxes.loader import load_exchange_rates

logger = logging.getLogger(__name__)


def get_exchange_rates() -> Dict[str, float]:
    """Rates per pivot unit, keyed by currency code."""
    return load_exchange_rates().rates


def list_currencies() -> List[str]:
    """Supported currency codes, in table order."""
    return list(load_exchange_rates().currencies)


def normalize_currency(code: str) -> str:
    """Validate a currency code and return it upper-cased.

    Raises:
        InvalidCurrencyCodeError: If the code is not in the rate table
    """
    normalized = (code or "").strip().upper()
    if normalized not in load_exchange_rates().currencies:
        raise InvalidCurrencyCodeError(code)
    return normalized


def get_currency_name(code: str) -> str:
    return load_exchange_rates().currencies[normalize_currency(code)].name


def get_currency_symbol(code: str) -> str:
    return load_exchange_rates().currencies[normalize_currency(code)].symbol


def _lookup_rate(rates: Mapping[str, float], code: str) -> float:
    try:
        return rates[code]
    except KeyError:
        raise InvalidCurrencyCodeError(code) from None


def exchange_rate(
    from_currency: str,
    to_currency: str,
    rates: Optional[Mapping[str, float]] = None,
) -> float:
    """Units of to_currency per one unit of from_currency.

    Args:
        from_currency: Source currency code (case-insensitive)
        to_currency: Target currency code (case-insensitive)
        rates: Optional rate table keyed by upper-case code; defaults to the
            bundled table

    Raises:
        InvalidCurrencyCodeError: If either code is missing from the table
    """
    table = get_exchange_rates() if rates is None else rates
    source = (from_currency or "").strip().upper()
    target = (to_currency or "").strip().upper()
    return _lookup_rate(table, target) / _lookup_rate(table, source)


def convert(
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: Optional[Mapping[str, float]] = None,
) -> float:
    """Convert an amount between currencies via the pivot.

    Converting a currency to itself returns the input unchanged, with no
    rate arithmetic applied.

    Args:
        amount: Amount in from_currency (not validated)
        from_currency: Source currency code (case-insensitive)
        to_currency: Target currency code (case-insensitive)
        rates: Optional rate table keyed by upper-case code; defaults to the
            bundled table

    Returns:
        Amount in to_currency

    Raises:
        InvalidCurrencyCodeError: If either code is missing from the table
    """
    table = get_exchange_rates() if rates is None else rates
    source = (from_currency or "").strip().upper()
    target = (to_currency or "").strip().upper()

    # Validate both codes even for a no-op conversion
    _lookup_rate(table, source)
    _lookup_rate(table, target)

    if source == target:
        return amount

    rate = table[target] / table[source]
    logger.debug(f"convert {amount} {source} -> {target} at {rate}")
    return amount * rate
