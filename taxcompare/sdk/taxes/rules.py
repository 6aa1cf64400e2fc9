"""Per-jurisdiction tax calculations.

Each calculate_* function is a fixed pipeline over its jurisdiction's
profile. The shape of the computation differs per country: which base each
levy applies to, whether deductions come before the bracket table, and
whether a second taxable base exists. Each function therefore spells out
its own order of operations, then hands its components to build_tax_result.

All functions take the gross salary in the jurisdiction's own currency.
A gross salary <= 0 is treated as 0 and yields an all-zero result.
"""

from typing import Iterable, List

from ..errors import RuleFileError
from .brackets import calculate_progressive_tax
from .levies import apply_levy, levy_component
from .loader import load_profile
from .result import build_tax_result
from .schemas import DeductionAmounts, JurisdictionProfile, Levy, TaxComponent, TaxResult


def _clamp_gross(gross_salary: float) -> float:
    gross = float(gross_salary)
    # NaN fails the comparison too, so it clamps to zero as well
    return gross if gross > 0 else 0.0


def _load(code: str, *pipelines: str) -> JurisdictionProfile:
    """Load a profile and check its rule file is tagged for this pipeline."""
    profile = load_profile(code)
    if profile.pipeline not in pipelines:
        raise RuleFileError(
            f"Rule file {code}.yaml declares pipeline '{profile.pipeline}', "
            f"expected one of: {', '.join(pipelines)}"
        )
    return profile


def _levy_components(levies: Iterable[Levy], gross: float, taxable: float) -> List[TaxComponent]:
    components = []
    for levy in levies:
        component = levy_component(levy, gross, taxable)
        if component is not None:
            components.append(component)
    return components


def _bracketed_with_levies(code: str, gross_salary: float) -> TaxResult:
    """Deductions, then the bracket table on taxable income, then levies in order."""
    profile = _load(code, "progressive", "deduction_first")
    gross = _clamp_gross(gross_salary)
    deductions = profile.deductions
    taxable = max(0.0, gross - deductions.standard - deductions.personal_allowance)

    income_tax = calculate_progressive_tax(taxable, profile.brackets)
    components = [
        TaxComponent(
            name=profile.income_tax_name,
            amount=income_tax.total_tax,
            brackets=income_tax.breakdown,
        )
    ]
    components.extend(_levy_components(profile.levies, gross, taxable))

    return build_tax_result(
        profile,
        gross,
        taxable,
        DeductionAmounts(
            standard=deductions.standard,
            personal_allowance=deductions.personal_allowance,
        ),
        components,
    )


# =============================================================================
# Jurisdictions
# =============================================================================


def calculate_norwegian_tax(gross_salary: float) -> TaxResult:
    """Norway: two bases from one gross salary.

    National insurance and the bracket tax apply to gross income. The 22%
    general income tax applies to gross minus the standard deduction and
    personal allowance.
    """
    profile = _load("no", "dual_base")
    gross = _clamp_gross(gross_salary)
    deductions = profile.deductions
    taxable = max(0.0, gross - deductions.standard - deductions.personal_allowance)

    national_insurance_levy = profile.levy("national_insurance")
    national_insurance = apply_levy(national_insurance_levy, gross, taxable)
    progressive = calculate_progressive_tax(gross, profile.brackets)
    general_levy = profile.levy("general_income_tax")
    general = apply_levy(general_levy, gross, taxable)

    components = [
        TaxComponent(
            name=national_insurance_levy.name,
            amount=national_insurance.amount,
            rate=national_insurance.rate,
        ),
        TaxComponent(
            name=profile.income_tax_name,
            amount=progressive.total_tax,
            brackets=progressive.breakdown,
        ),
        TaxComponent(name=general_levy.name, amount=general.amount, rate=general.rate),
    ]

    return build_tax_result(
        profile,
        gross,
        taxable,
        DeductionAmounts(
            standard=deductions.standard,
            personal_allowance=deductions.personal_allowance,
        ),
        components,
    )


def calculate_australian_tax(gross_salary: float) -> TaxResult:
    """Australia: brackets plus the Medicare levy above the low-income threshold."""
    return _bracketed_with_levies("au", gross_salary)


def calculate_french_tax(gross_salary: float) -> TaxResult:
    return _bracketed_with_levies("fr", gross_salary)


def calculate_spanish_tax(gross_salary: float) -> TaxResult:
    return _bracketed_with_levies("es", gross_salary)


def calculate_greek_tax(gross_salary: float) -> TaxResult:
    """Greece: brackets, social security, and a solidarity contribution on
    the whole taxable income once it exceeds the threshold."""
    return _bracketed_with_levies("gr", gross_salary)


def calculate_austrian_tax(gross_salary: float) -> TaxResult:
    return _bracketed_with_levies("at", gross_salary)


def calculate_swiss_zurich_tax(gross_salary: float) -> TaxResult:
    """Switzerland: combined federal, cantonal and municipal rate for Zurich city."""
    return _bracketed_with_levies("ch", gross_salary)


def calculate_mexican_tax(gross_salary: float) -> TaxResult:
    return _bracketed_with_levies("mx", gross_salary)


def calculate_portuguese_tax(gross_salary: float) -> TaxResult:
    """Portugal: brackets, social security, and a two-tier solidarity surcharge.

    Only the highest crossed tier's rate applies, to the whole taxable
    income. This is a simplification of the real surcharge, which is
    progressive across tiers.
    """
    return _bracketed_with_levies("pt", gross_salary)


def calculate_japanese_tax(gross_salary: float) -> TaxResult:
    """Japan: basic deduction before the brackets; residence tax on its own base.

    Residence tax uses a different basic deduction than national income
    tax, so its base is computed separately from taxable_income.
    """
    return _bracketed_with_levies("jp", gross_salary)


def calculate_estonian_tax(gross_salary: float) -> TaxResult:
    """Estonia: flat income tax above the tax-free allowance, plus flat levies on gross."""
    profile = _load("ee", "flat")
    gross = _clamp_gross(gross_salary)
    allowance = min(profile.deductions.personal_allowance, gross)
    taxable = max(0.0, gross - allowance)

    components = _levy_components(profile.levies, gross, taxable)

    return build_tax_result(
        profile,
        gross,
        taxable,
        DeductionAmounts(standard=profile.deductions.standard, personal_allowance=allowance),
        components,
    )


# Display order of the country list
CALCULATORS = {
    "no": calculate_norwegian_tax,
    "au": calculate_australian_tax,
    "fr": calculate_french_tax,
    "es": calculate_spanish_tax,
    "gr": calculate_greek_tax,
    "at": calculate_austrian_tax,
    "ch": calculate_swiss_zurich_tax,
    "mx": calculate_mexican_tax,
    "pt": calculate_portuguese_tax,
    "jp": calculate_japanese_tax,
    "ee": calculate_estonian_tax,
}
