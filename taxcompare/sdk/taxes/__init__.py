"""taxes - Jurisdiction tax rules and the calculation engine.

Scope:
- Rule file schemas and loading (tax_rules/*.yaml)
- Progressive bracket evaluation
- Levies: flat, threshold-gated and tiered surcharges
- Per-jurisdiction calculation pipelines
- Result aggregation (totals, rates, employer cost, periodic pay)

Constraints:
- Pure calculation - no I/O beyond reading rule files once per process
- No ambient state - every entry point takes its salary explicitly
- Amounts stay fractional; rounding happens only in display formatting

Usage:
    from taxcompare.sdk.taxes import calculate_progressive_tax, load_profile

    profile = load_profile("au")
    tax = calculate_progressive_tax(20000, profile.brackets)
"""

from .schemas import (
    TaxBracket,
    Levy,
    SurchargeTier,
    Deductions,
    Employer,
    EmployerLevy,
    MarginalStep,
    MarginalRateTable,
    DisplayMetadata,
    JurisdictionProfile,
    CurrencyInfo,
    ExchangeRateTable,
    BracketLine,
    TaxComponent,
    DeductionAmounts,
    PeriodicBreakdown,
    TaxResult,
    validate_bracket_table,
)

from .loader import (
    load_profile,
    load_exchange_rates,
    get_available_codes,
)

from .brackets import BracketTaxResult, calculate_progressive_tax

from .levies import LevyAmount, apply_levy, levy_component

from .result import (
    ANNUAL_WORKING_DAYS,
    ANNUAL_WORKING_HOURS,
    MONTHS_PER_YEAR,
    FORTNIGHTS_PER_YEAR,
    build_tax_result,
    resolve_marginal_rate,
    calc_working_days_for_taxes,
    calc_periodic_breakdown,
)

from .rules import (
    CALCULATORS,
    calculate_norwegian_tax,
    calculate_australian_tax,
    calculate_french_tax,
    calculate_spanish_tax,
    calculate_greek_tax,
    calculate_austrian_tax,
    calculate_swiss_zurich_tax,
    calculate_mexican_tax,
    calculate_portuguese_tax,
    calculate_japanese_tax,
    calculate_estonian_tax,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "Levy",
    "SurchargeTier",
    "Deductions",
    "Employer",
    "EmployerLevy",
    "MarginalStep",
    "MarginalRateTable",
    "DisplayMetadata",
    "JurisdictionProfile",
    "CurrencyInfo",
    "ExchangeRateTable",
    "BracketLine",
    "TaxComponent",
    "DeductionAmounts",
    "PeriodicBreakdown",
    "TaxResult",
    "validate_bracket_table",
    # Loading
    "load_profile",
    "load_exchange_rates",
    "get_available_codes",
    # Evaluation
    "BracketTaxResult",
    "calculate_progressive_tax",
    "LevyAmount",
    "apply_levy",
    "levy_component",
    # Aggregation
    "ANNUAL_WORKING_DAYS",
    "ANNUAL_WORKING_HOURS",
    "MONTHS_PER_YEAR",
    "FORTNIGHTS_PER_YEAR",
    "build_tax_result",
    "resolve_marginal_rate",
    "calc_working_days_for_taxes",
    "calc_periodic_breakdown",
    # Jurisdictions
    "CALCULATORS",
    "calculate_norwegian_tax",
    "calculate_australian_tax",
    "calculate_french_tax",
    "calculate_spanish_tax",
    "calculate_greek_tax",
    "calculate_austrian_tax",
    "calculate_swiss_zurich_tax",
    "calculate_mexican_tax",
    "calculate_portuguese_tax",
    "calculate_japanese_tax",
    "calculate_estonian_tax",
]
