"""
Domain models and value objects.

Contains the immutable invoice entities: LineItem, pricing terms and
breakdown, currency rules, parties and invoice data.
"""

from invocli.core.domain.currency import CurrencyRule
from invocli.core.domain.invoice import InvoiceData, Party
from invocli.core.domain.line_item import LineItem
from invocli.core.domain.pricing import PricingBreakdown, PricingParameters, TaxMode

__all__ = [
    # Line items
    "LineItem",
    # Pricing
    "TaxMode",
    "PricingParameters",
    "PricingBreakdown",
    # Currency
    "CurrencyRule",
    # Invoice
    "Party",
    "InvoiceData",
]
