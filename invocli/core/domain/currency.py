"""
CurrencyRule — Display convention of one ISO currency

Immutable Pydantic model used by the currency formatter's rule table.
"""

from pydantic import BaseModel, Field


class CurrencyRule(BaseModel):
    """
    Formatting rule for one currency code.

    Immutable model (frozen=True); the formatter keeps one instance per code
    in a read-only table built at import time.
    """

    code: str = Field(..., pattern="^[A-Z]{3}$", description="ISO 4217 code")
    symbol: str = Field(..., min_length=1, description="Display symbol ('$', '€', 'CHF')")
    thousands_separator: str = Field(
        ..., description="Integer digit grouping separator ('' disables grouping)"
    )
    decimal_separator: str = Field(..., description="Separator before the fractional digits")
    symbol_on_left: bool = Field(..., description="Symbol precedes the amount")
    space_between_amount_and_symbol: bool = Field(
        ..., description="Single space between symbol and amount"
    )
    decimal_digits: int = Field(..., ge=0, description="Fractional digits shown")

    model_config = {"frozen": True}
