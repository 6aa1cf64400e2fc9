"""Pydantic schemas for jurisdiction rule files and tax results.

Rule schemas validate the tax_rules/*.yaml files and provide typed access
to bracket tables, levies, deductions and employer contribution rates.
Result schemas describe what every calculate_* function returns.

All schemas use extra='forbid' so a typo in a rule file is a load-time
error rather than a silently ignored field. Everything is frozen: profiles
are process-wide constants and results are never mutated after construction.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


LevyKind = Literal["gross_percentage", "taxable_percentage", "threshold_gated", "tiered_surcharge"]
Pipeline = Literal["progressive", "dual_base", "deduction_first", "flat"]


def validate_bracket_table(brackets) -> None:
    """Check that a bracket table is ordered, contiguous and open-ended.

    This is a configuration-time check. The evaluator assumes a valid table
    and never re-checks it per call.

    Raises:
        ValueError: If the table is empty, has gaps or overlaps, is out of
            order, or its last bracket is bounded.
    """
    if not brackets:
        raise ValueError("bracket table is empty")

    for i, (current, following) in enumerate(zip(brackets, brackets[1:])):
        if current.max is None:
            raise ValueError(f"bracket {i + 1} is unbounded but is not the last bracket")
        if following.min != current.max:
            raise ValueError(
                f"bracket {i + 2} starts at {following.min}, expected {current.max} "
                f"(end of bracket {i + 1})"
            )

    if brackets[-1].max is not None:
        raise ValueError(f"last bracket must be unbounded, got max={brackets[-1].max}")


# =============================================================================
# Rule file schemas
# =============================================================================


class TaxBracket(BaseModel):
    """Single progressive tax bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound of the bracket")
    max: Optional[float] = Field(default=None, description="Upper bound (None if unbounded)")
    rate: float = Field(..., ge=0, lt=1, description="Tax rate as decimal")

    @model_validator(mode="after")
    def check_bounds(self) -> "TaxBracket":
        if self.max is not None and self.max <= self.min:
            raise ValueError(f"max ({self.max}) must be greater than min ({self.min})")
        return self


class SurchargeTier(BaseModel):
    """One tier of a tiered surcharge."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold: float = Field(..., ge=0, description="Applies when base is strictly above this")
    rate: float = Field(..., ge=0, lt=1)


class Levy(BaseModel):
    """A tax component computed outside the main bracket table."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str = Field(..., description="Identifier used by the jurisdiction pipeline")
    name: str = Field(..., description="Display name of the resulting tax component")
    kind: LevyKind
    rate: Optional[float] = Field(default=None, ge=0, lt=1)
    threshold: Optional[float] = Field(default=None, ge=0)
    tiers: Optional[Tuple[SurchargeTier, ...]] = None
    base: Literal["gross", "taxable"] = Field(
        default="taxable",
        description="Income the gate compares against and the rate applies to (gated kinds only)",
    )
    deduction: float = Field(
        default=0, ge=0,
        description="Levy-specific deduction; gives a taxable_percentage levy its own base",
    )
    listed: Literal["always", "when_positive"] = "always"

    @model_validator(mode="after")
    def check_kind_fields(self) -> "Levy":
        if self.kind == "tiered_surcharge":
            if not self.tiers:
                raise ValueError(f"levy '{self.key}': tiered_surcharge requires tiers")
            if self.rate is not None:
                raise ValueError(f"levy '{self.key}': tiered_surcharge takes rates from its tiers")
            thresholds = [t.threshold for t in self.tiers]
            if thresholds != sorted(set(thresholds)):
                raise ValueError(f"levy '{self.key}': tier thresholds must be strictly ascending")
        else:
            if self.rate is None:
                raise ValueError(f"levy '{self.key}': {self.kind} requires rate")
            if self.tiers:
                raise ValueError(f"levy '{self.key}': only tiered_surcharge takes tiers")

        if self.kind == "threshold_gated" and self.threshold is None:
            raise ValueError(f"levy '{self.key}': threshold_gated requires threshold")
        if self.deduction and self.kind != "taxable_percentage":
            raise ValueError(f"levy '{self.key}': deduction only applies to taxable_percentage")
        return self


class Deductions(BaseModel):
    """Fixed pre-tax deductions subtracted from gross."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard: float = Field(default=0, ge=0)
    personal_allowance: float = Field(default=0, ge=0)


class EmployerLevy(BaseModel):
    """Named employer-side contribution."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    rate: float = Field(..., ge=0, lt=1)


class Employer(BaseModel):
    """Employer contribution rule: gross times the sum of its levy rates."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    levies: Tuple[EmployerLevy, ...] = Field(..., min_length=1)

    @property
    def rate(self) -> float:
        """Combined employer rate."""
        return sum(levy.rate for levy in self.levies)


class MarginalStep(BaseModel):
    """Marginal rate that applies once income is strictly above a threshold."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    above: float = Field(..., ge=0)
    rate: float = Field(..., ge=0, lt=1)


class MarginalRateTable(BaseModel):
    """Descending step function used to resolve the marginal rate.

    Tabulated per jurisdiction rather than derived from the bracket table,
    since surcharge tiers can move the marginal rate independently.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    basis: Literal["gross", "taxable"] = "gross"
    floor: float = Field(default=0, ge=0, lt=1, description="Rate when no step applies")
    steps: Tuple[MarginalStep, ...] = Field(default=())

    @model_validator(mode="after")
    def check_descending(self) -> "MarginalRateTable":
        thresholds = [step.above for step in self.steps]
        if thresholds != sorted(set(thresholds), reverse=True):
            raise ValueError("marginal steps must be strictly descending by 'above'")
        return self


class DisplayMetadata(BaseModel):
    """Static, pass-through presentation data for a jurisdiction."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    flag: str
    location: str
    employer_rate: str = Field(..., description="Employer rate as shown to users (e.g., '14.1%')")
    employer_note: str


class JurisdictionProfile(BaseModel):
    """Complete rule set for one jurisdiction."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(..., pattern=r"^[a-z]{2}$")
    aliases: Tuple[str, ...] = Field(default=())
    currency: str = Field(..., pattern=r"^[A-Z]{3}$")
    pipeline: Pipeline
    income_tax_name: Optional[str] = Field(
        default=None,
        description="Component name for the bracket-evaluated tax (not used by flat pipelines)",
    )
    deductions: Deductions = Field(default_factory=Deductions)
    brackets: Tuple[TaxBracket, ...]
    levies: Tuple[Levy, ...] = Field(default=())
    employer: Employer
    marginal: MarginalRateTable
    display: DisplayMetadata

    @model_validator(mode="after")
    def check_profile(self) -> "JurisdictionProfile":
        validate_bracket_table(self.brackets)

        keys = [levy.key for levy in self.levies]
        if len(keys) != len(set(keys)):
            raise ValueError(f"duplicate levy keys in profile '{self.code}'")

        if self.pipeline == "flat":
            if "income_tax" not in keys:
                raise ValueError("flat pipeline requires a levy with key 'income_tax'")
        elif not self.income_tax_name:
            raise ValueError(f"{self.pipeline} pipeline requires income_tax_name")
        return self

    def levy(self, key: str) -> Levy:
        """Look up a levy by key."""
        for levy in self.levies:
            if levy.key == key:
                return levy
        raise KeyError(f"Profile '{self.code}' has no levy '{key}'")


class CurrencyInfo(BaseModel):
    """One currency in the exchange rate table."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    symbol: str
    rate: float = Field(..., gt=0, description="Units of this currency per one pivot unit")


class ExchangeRateTable(BaseModel):
    """Static exchange rates, all relative to one pivot currency."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    pivot: str
    currencies: Dict[str, CurrencyInfo]

    @model_validator(mode="after")
    def check_pivot(self) -> "ExchangeRateTable":
        if self.pivot not in self.currencies:
            raise ValueError(f"pivot currency {self.pivot} missing from table")
        if self.currencies[self.pivot].rate != 1:
            raise ValueError(f"pivot currency {self.pivot} must have rate 1")
        return self

    @property
    def rates(self) -> Dict[str, float]:
        return {code: info.rate for code, info in self.currencies.items()}


# =============================================================================
# Result schemas
# =============================================================================


class BracketLine(BaseModel):
    """Tax contributed by one bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="e.g., 'Bracket 2 (19.0%)'")
    amount: float = Field(..., ge=0)
    rate: float


class TaxComponent(BaseModel):
    """One named tax in a result, with optional rate or bracket breakdown."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    amount: float
    rate: Optional[float] = None
    brackets: Optional[Tuple[BracketLine, ...]] = None


class DeductionAmounts(BaseModel):
    """Deductions applied when computing taxable income."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard: float = 0
    personal_allowance: float = 0


class PeriodicBreakdown(BaseModel):
    """Net pay spread over fixed calendar periods."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    per_month: float
    per_fortnight: float
    per_day: float
    per_hour: float


class TaxResult(BaseModel):
    """Full outcome of one calculation, in the jurisdiction's currency."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float
    taxable_income: float
    deductions: DeductionAmounts
    taxes: Tuple[TaxComponent, ...]
    total_taxes: float
    net_pay: float
    effective_tax_rate: float = Field(..., description="Percent of gross")
    marginal_tax_rate: float = Field(..., description="Percent")
    working_days_for_taxes: int
    employer_tax: float
    total_employment_cost: float
    breakdown: PeriodicBreakdown

    def component(self, name: str) -> Optional[TaxComponent]:
        """Find a tax component by name."""
        for tax in self.taxes:
            if tax.name == name:
                return tax
        return None
