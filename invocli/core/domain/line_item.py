"""
LineItem — Model of a single invoice line

Immutable Pydantic model: description, quantity and unit rate.
The line amount is derived on demand and never stored.
"""

import math

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# LINE ITEM MODEL
# =============================================================================


class LineItem(BaseModel):
    """
    Single invoice line.

    Immutable model (frozen=True): a line is never edited in place,
    corrections create a new instance.
    """

    description: str = Field(..., description="What is being billed")
    quantity: float = Field(..., gt=0, description="Billed quantity (always positive)")
    rate: float = Field(..., gt=0, description="Unit price in the invoice currency")

    model_config = {"frozen": True}

    @field_validator("quantity", "rate")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """Reject Inf (NaN already fails the gt=0 constraint)."""
        if not math.isfinite(v):
            raise ValueError(f"value must be finite, got {v}")
        return v

    @property
    def amount(self) -> float:
        """Line amount: quantity × rate."""
        return self.quantity * self.rate
