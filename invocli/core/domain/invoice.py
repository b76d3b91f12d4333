"""
Invoice — Parties and the normalized invoice document data

Immutable Pydantic models describing everything an invoice needs besides
its computed totals: sender/recipient, lines, terms and currency.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from invocli.core.domain.line_item import LineItem
from invocli.core.domain.pricing import PricingParameters, TaxMode


# =============================================================================
# PARTY
# =============================================================================


class Party(BaseModel):
    """Sender or recipient of an invoice."""

    name: str = Field(..., min_length=1, description="Company or person name")
    address: Optional[str] = Field(None, description="Postal address")
    email: Optional[str] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, description="Contact phone")
    tax_id: Optional[str] = Field(None, description="Tax ID / registration number")

    model_config = {"frozen": True}


# =============================================================================
# INVOICE DATA
# =============================================================================


class InvoiceData(BaseModel):
    """
    Normalized invoice input.

    Immutable model (frozen=True). Rates are already fractions here; the
    percent-to-fraction step belongs to invocli.invoice.inputs.
    """

    sender: Party = Field(..., description="Issuing party")
    recipient: Party = Field(..., description="Billed party")
    items: tuple[LineItem, ...] = Field(..., min_length=1, description="Invoice lines")

    tax_rate: float = Field(0.0, ge=0, le=1, description="Tax rate as a fraction")
    discount_rate: float = Field(0.0, ge=0, le=1, description="Discount rate as a fraction")
    tax_mode: TaxMode = Field(TaxMode.EXCLUSIVE, description="exclusive/inclusive pricing")
    currency: str = Field("USD", min_length=1, description="Currency code (may be custom)")

    invoice_number: Optional[str] = Field(None, description="Document number")
    note: Optional[str] = Field(None, description="Free text printed under the totals")
    logo: Optional[str] = Field(None, description="Logo file path or URL")

    model_config = {"frozen": True}

    @field_validator("currency")
    @classmethod
    def strip_currency(cls, v: str) -> str:
        """Surrounding whitespace is never part of a code."""
        v = v.strip()
        if not v:
            raise ValueError("currency must not be blank")
        return v

    def pricing_parameters(self) -> PricingParameters:
        """Terms in the form the pricing engine consumes."""
        return PricingParameters(
            tax_rate=self.tax_rate,
            discount_rate=self.discount_rate,
            tax_mode=self.tax_mode,
        )
