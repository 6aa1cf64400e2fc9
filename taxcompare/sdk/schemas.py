"""Pydantic schemas for results that combine a calculation with currency data.

Jurisdiction rule and tax result schemas live in sdk/taxes/schemas.py.
"""

from pydantic import BaseModel, ConfigDict, Field

from .taxes.schemas import TaxResult


class ConvertedTaxResult(BaseModel):
    """A calculation for a salary entered in a display currency.

    The nested result is in the jurisdiction's local currency.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    country: str = Field(..., description="Jurisdiction code (e.g., 'no')")
    display_currency: str = Field(..., description="Currency the salary was entered in")
    local_currency: str = Field(..., description="Jurisdiction currency")
    salary: float = Field(..., description="Salary as entered, in display currency")
    local_salary: float = Field(..., description="Salary converted to local currency")
    exchange_rate: float = Field(..., description="Local units per display unit")
    result: TaxResult


class JurisdictionSummary(BaseModel):
    """One row of a cross-country comparison.

    Money amounts are converted back to the display currency; the nested
    result keeps local-currency amounts.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str
    name: str
    flag: str
    local_currency: str
    display_currency: str
    effective_tax_rate: float
    marginal_tax_rate: float
    total_taxes: float = Field(..., description="In display currency")
    net_pay: float = Field(..., description="In display currency")
    total_employment_cost: float = Field(..., description="In display currency")
    result: TaxResult
