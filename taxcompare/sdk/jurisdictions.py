"""Jurisdiction registry and top-level calculation entry points.

This module contains the business logic the CLI and MCP tools call.
They should stay thin wrappers around these functions.

Identifiers are case-insensitive and accept either the two-letter code or
the English country name ("no", "Norway", " NORWAY " all resolve to the
same entry). Anything else raises UnsupportedJurisdictionError; callers
never receive a partially populated result.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .currency import convert, exchange_rate, get_exchange_rates, normalize_currency
from .errors import RuleFileError, UnsupportedJurisdictionError
from .schemas import ConvertedTaxResult, JurisdictionSummary
from .taxes.loader import load_profile
from .taxes.rules import CALCULATORS
from .taxes.schemas import DisplayMetadata, JurisdictionProfile, TaxBracket, TaxResult

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Jurisdiction:
    """Registered jurisdiction: its rule profile and calculation function."""

    code: str
    profile: JurisdictionProfile
    calculate: Callable[[float], TaxResult]

    @property
    def display(self) -> DisplayMetadata:
        return self.profile.display

    @property
    def name(self) -> str:
        return self.profile.display.name

    @property
    def currency(self) -> str:
        return self.profile.currency

    @property
    def brackets(self) -> Tuple[TaxBracket, ...]:
        return self.profile.brackets


@lru_cache(maxsize=None)
def _registry() -> Dict[str, Jurisdiction]:
    """Build the registry once: code -> Jurisdiction, in display order."""
    known_currencies = get_exchange_rates()
    registry = {}
    for code, calculate in CALCULATORS.items():
        profile = load_profile(code)
        if profile.currency not in known_currencies:
            raise RuleFileError(f"Rule file {code}.yaml uses unknown currency {profile.currency}")
        registry[code] = Jurisdiction(code=code, profile=profile, calculate=calculate)
    return registry


@lru_cache(maxsize=None)
def _alias_index() -> Dict[str, str]:
    """Map every lower-cased code, alias and display name to its code."""
    index = {}
    for code, jurisdiction in _registry().items():
        names = {code, jurisdiction.name.lower(), *(alias.lower() for alias in jurisdiction.profile.aliases)}
        for name in names:
            if name in index and index[name] != code:
                raise RuleFileError(f"Identifier '{name}' is claimed by both {index[name]} and {code}")
            index[name] = code
    return index


def resolve(identifier: str) -> Jurisdiction:
    """Resolve a country code or name to its registered jurisdiction.

    Raises:
        UnsupportedJurisdictionError: If nothing matches
    """
    key = (identifier or "").strip().lower()
    code = _alias_index().get(key)
    if code is None:
        raise UnsupportedJurisdictionError(identifier)

    logger.debug(f"resolved '{identifier}' -> {code}")
    return _registry()[code]


def list_jurisdictions() -> List[Jurisdiction]:
    """All registered jurisdictions, in display order."""
    return list(_registry().values())


def get_country_currency(identifier: str) -> str:
    """Local currency code for a country code or name."""
    return resolve(identifier).currency


def calculate_tax(
    country: str,
    salary: float,
    currency: Optional[str] = None,
) -> ConvertedTaxResult:
    """Calculate taxes for a salary entered in any supported currency.

    The salary is converted into the jurisdiction's currency first; the
    resulting TaxResult is in that local currency.

    Args:
        country: Country code or name (e.g., 'no', 'Norway')
        salary: Gross annual salary in `currency`
        currency: Currency the salary is given in; None means the
            jurisdiction's own currency

    Returns:
        ConvertedTaxResult with the conversion details and the local result

    Raises:
        UnsupportedJurisdictionError: Unknown country
        InvalidCurrencyCodeError: Unknown currency
    """
    jurisdiction = resolve(country)
    local_currency = jurisdiction.currency
    display_currency = normalize_currency(currency) if currency else local_currency

    local_salary = convert(salary, display_currency, local_currency)
    result = jurisdiction.calculate(local_salary)

    return ConvertedTaxResult(
        country=jurisdiction.code,
        display_currency=display_currency,
        local_currency=local_currency,
        salary=salary,
        local_salary=local_salary,
        exchange_rate=exchange_rate(display_currency, local_currency),
        result=result,
    )


def compare_jurisdictions(
    salary: float,
    currency: str,
    countries: Optional[Iterable[str]] = None,
) -> List[JurisdictionSummary]:
    """Run one salary through several jurisdictions and rank them.

    Args:
        salary: Gross annual salary in `currency`
        currency: Display currency for the salary and the summary amounts
        countries: Country codes or names to include (default: all)

    Returns:
        Summaries sorted by effective tax rate, lowest first (ties by code)
    """
    display_currency = normalize_currency(currency)
    if countries is None:
        selected = list_jurisdictions()
    else:
        # Resolve everything up front so a bad identifier fails before any work
        selected = []
        seen = set()
        for identifier in countries:
            jurisdiction = resolve(identifier)
            if jurisdiction.code not in seen:
                seen.add(jurisdiction.code)
                selected.append(jurisdiction)

    summaries = []
    for jurisdiction in selected:
        converted = calculate_tax(jurisdiction.code, salary, display_currency)
        result = converted.result
        local = jurisdiction.currency

        summaries.append(JurisdictionSummary(
            code=jurisdiction.code,
            name=jurisdiction.name,
            flag=jurisdiction.display.flag,
            local_currency=local,
            display_currency=display_currency,
            effective_tax_rate=result.effective_tax_rate,
            marginal_tax_rate=result.marginal_tax_rate,
            total_taxes=convert(result.total_taxes, local, display_currency),
            net_pay=convert(result.net_pay, local, display_currency),
            total_employment_cost=convert(result.total_employment_cost, local, display_currency),
            result=result,
        ))

    summaries.sort(key=lambda s: (s.effective_tax_rate, s.code))
    return summaries
