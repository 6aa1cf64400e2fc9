"""Result aggregation.

Every jurisdiction pipeline produces taxable income, deductions and an
ordered list of tax components. build_tax_result turns those into the
final TaxResult: totals, net pay, rates, employer cost and periodic pay.
"""

import logging
import math
from typing import Sequence

from .schemas import (
    DeductionAmounts,
    JurisdictionProfile,
    MarginalRateTable,
    PeriodicBreakdown,
    TaxComponent,
    TaxResult,
)

logger = logging.getLogger(__name__)

# Calendar model shared by all jurisdictions: non-leap year, five-day week
ANNUAL_WORKING_DAYS = 250
ANNUAL_WORKING_HOURS = 2000
MONTHS_PER_YEAR = 12
FORTNIGHTS_PER_YEAR = 26


def resolve_marginal_rate(table: MarginalRateTable, gross: float, taxable: float) -> float:
    """Resolve the marginal rate (as a decimal) from a descending step table.

    Returns the rate of the first step whose threshold the income is strictly
    above, or the table's floor rate.
    """
    income = gross if table.basis == "gross" else taxable
    for step in table.steps:
        if income > step.above:
            return step.rate
    return table.floor


def calc_working_days_for_taxes(effective_tax_rate: float) -> int:
    """Working days per year whose earnings go to tax.

    Presentation metric only. Halves round up.
    """
    if effective_tax_rate <= 0:
        return 0
    return math.floor((effective_tax_rate / 100) * ANNUAL_WORKING_DAYS + 0.5)


def calc_periodic_breakdown(net_pay: float) -> PeriodicBreakdown:
    """Spread annual net pay over months, fortnights, working days and hours."""
    return PeriodicBreakdown(
        per_month=net_pay / MONTHS_PER_YEAR,
        per_fortnight=net_pay / FORTNIGHTS_PER_YEAR,
        per_day=net_pay / ANNUAL_WORKING_DAYS,
        per_hour=net_pay / ANNUAL_WORKING_HOURS,
    )


def build_tax_result(
    profile: JurisdictionProfile,
    gross: float,
    taxable: float,
    deductions: DeductionAmounts,
    components: Sequence[TaxComponent],
) -> TaxResult:
    """Assemble the final TaxResult from itemized components.

    Args:
        profile: Jurisdiction the components were computed for
        gross: Gross salary (already clamped to >= 0)
        taxable: Taxable income used for the bracket table
        deductions: Deductions reported with the result
        components: Tax components in display order

    Returns:
        TaxResult where total_taxes is the sum of component amounts and
        net_pay + total_taxes == gross
    """
    # Plain left-to-right accumulation keeps totals reproducible
    total_taxes = 0.0
    for component in components:
        total_taxes += component.amount

    net_pay = gross - total_taxes
    effective_tax_rate = (total_taxes / gross) * 100 if gross > 0 else 0.0
    marginal_tax_rate = resolve_marginal_rate(profile.marginal, gross, taxable) * 100
    employer_tax = gross * profile.employer.rate

    logger.debug(
        f"{profile.code}: gross={gross:.2f} taxable={taxable:.2f} "
        f"taxes={total_taxes:.2f} effective={effective_tax_rate:.2f}%"
    )

    return TaxResult(
        gross_salary=gross,
        taxable_income=taxable,
        deductions=deductions,
        taxes=tuple(components),
        total_taxes=total_taxes,
        net_pay=net_pay,
        effective_tax_rate=effective_tax_rate,
        marginal_tax_rate=marginal_tax_rate,
        working_days_for_taxes=calc_working_days_for_taxes(effective_tax_rate),
        employer_tax=employer_tax,
        total_employment_cost=gross + employer_tax,
        breakdown=calc_periodic_breakdown(net_pay),
    )
