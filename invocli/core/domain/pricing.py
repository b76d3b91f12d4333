"""
Pricing — Parameters and breakdown of invoice totals

Immutable Pydantic models consumed and produced by the pricing engine.

Rates are fractions in [0, 1]. Callers holding percentages (8 for 8%) must
normalize them first (see invocli.invoice.inputs.normalize_rate); the models
reject anything outside [0, 1] so a rate is never divided by 100 twice.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TaxMode(str, Enum):
    """How line rates relate to tax."""

    EXCLUSIVE = "exclusive"  # tax is added on top of the discounted subtotal
    INCLUSIVE = "inclusive"  # rates already include tax, tax is extracted


# =============================================================================
# PRICING PARAMETERS
# =============================================================================


class PricingParameters(BaseModel):
    """
    Tax/discount terms of an invoice.

    Immutable model (frozen=True). Both rates are normalized fractions.
    """

    tax_rate: float = Field(0.0, ge=0, le=1, description="Tax rate as a fraction (0.08 = 8%)")
    discount_rate: float = Field(
        0.0, ge=0, le=1, description="Discount rate as a fraction (0.05 = 5%)"
    )
    tax_mode: TaxMode = Field(TaxMode.EXCLUSIVE, description="exclusive/inclusive pricing")

    model_config = {"frozen": True}


# =============================================================================
# PRICING BREAKDOWN
# =============================================================================


class PricingBreakdown(BaseModel):
    """
    Result of a pricing computation.

    Immutable model (frozen=True), finite values kept at full float precision;
    rounding happens only when an amount is formatted for display.

    Invariants (both tax modes):
    - discounted_subtotal = gross_subtotal - discount_amount
    - total = net_subtotal + tax_amount

    EXCLUSIVE: net_subtotal == discounted_subtotal, tax is added on top.
    INCLUSIVE: net_subtotal is the pre-tax baseline extracted from
    discounted_subtotal, and total == discounted_subtotal.
    """

    gross_subtotal: float = Field(..., ge=0, description="Σ quantity × rate, before discount")
    discount_amount: float = Field(..., ge=0, description="gross_subtotal × discount_rate")
    discounted_subtotal: float = Field(
        ..., ge=0, description="gross_subtotal - discount_amount"
    )
    net_subtotal: float = Field(..., ge=0, description="Pre-tax amount after discount")
    tax_amount: float = Field(..., ge=0, description="Tax added or extracted")
    total: float = Field(..., ge=0, description="Amount due")

    model_config = {"frozen": True, "allow_inf_nan": False}
