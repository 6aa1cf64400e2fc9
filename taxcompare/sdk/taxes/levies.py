"""Levies: tax components computed outside the main bracket table.

Kinds:
- gross_percentage: flat rate on gross salary
- taxable_percentage: flat rate on taxable income, or on a levy-specific
  base (gross minus the levy's own deduction) when one is configured
- threshold_gated: flat rate on the whole base once the base is strictly
  above the threshold, zero otherwise
- tiered_surcharge: like threshold_gated, but with several thresholds; only
  the highest crossed tier's rate applies, to the whole base (no stacking)
"""

from dataclasses import dataclass
from typing import Optional

from .schemas import Levy, TaxComponent


@dataclass(frozen=True)
class LevyAmount:
    """Computed levy: amount, the rate that applied, and the base it applied to."""

    amount: float
    rate: float
    base: float


def _gate_base(levy: Levy, gross: float, taxable: float) -> float:
    return gross if levy.base == "gross" else taxable


def apply_levy(levy: Levy, gross: float, taxable: float) -> LevyAmount:
    """Compute a levy for one salary.

    Args:
        levy: Levy rule from a jurisdiction profile
        gross: Gross salary
        taxable: Taxable income after the jurisdiction's deductions

    Returns:
        LevyAmount with amount, applied rate and base
    """
    if levy.kind == "gross_percentage":
        return LevyAmount(amount=gross * levy.rate, rate=levy.rate, base=gross)

    if levy.kind == "taxable_percentage":
        # A levy-specific deduction gives this levy its own base, distinct
        # from the taxable income used for the bracket table.
        base = max(0.0, gross - levy.deduction) if levy.deduction else taxable
        return LevyAmount(amount=base * levy.rate, rate=levy.rate, base=base)

    base = _gate_base(levy, gross, taxable)

    if levy.kind == "threshold_gated":
        amount = base * levy.rate if base > levy.threshold else 0.0
        return LevyAmount(amount=amount, rate=levy.rate, base=base)

    # tiered_surcharge
    applied = None
    for tier in reversed(levy.tiers):
        if base > tier.threshold:
            applied = tier
            break

    if applied is None:
        return LevyAmount(amount=0.0, rate=levy.tiers[0].rate, base=base)
    return LevyAmount(amount=base * applied.rate, rate=applied.rate, base=base)


def levy_component(levy: Levy, gross: float, taxable: float) -> Optional[TaxComponent]:
    """Compute a levy and wrap it as a result component.

    Returns None for a 'when_positive' levy that came to zero, so callers
    can leave it out of the result.
    """
    computed = apply_levy(levy, gross, taxable)
    if levy.listed == "when_positive" and computed.amount <= 0:
        return None
    return TaxComponent(name=levy.name, amount=computed.amount, rate=computed.rate)
