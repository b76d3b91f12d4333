"""Invoice assembly — input normalization and formatted views over the core."""

from .inputs import (
    InvoiceDataError,
    items_from_flags,
    load_invoice_data,
    normalize_rate,
    parse_invoice_data,
    parse_tax_mode,
)
from .view import InvoiceView, LineView, build_invoice_view, percent_label

__all__ = [
    "InvoiceDataError",
    "normalize_rate",
    "parse_tax_mode",
    "items_from_flags",
    "parse_invoice_data",
    "load_invoice_data",
    "InvoiceView",
    "LineView",
    "build_invoice_view",
    "percent_label",
]
