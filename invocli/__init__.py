"""
invocli — invoice totals and currency formatting.

Public surface of the core:
- compute_breakdown: line items + tax/discount terms → PricingBreakdown
- format_currency: amount + currency code → display string
- is_currency_supported: case-insensitive currency table lookup
"""

from invocli.core.domain import LineItem, PricingBreakdown, PricingParameters, TaxMode
from invocli.core.math import (
    InvalidInput,
    compute_breakdown,
    format_currency,
    is_currency_supported,
)

__version__ = "1.0.0"

__all__ = [
    "LineItem",
    "PricingParameters",
    "PricingBreakdown",
    "TaxMode",
    "InvalidInput",
    "compute_breakdown",
    "format_currency",
    "is_currency_supported",
]
