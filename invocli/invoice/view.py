"""
Invoice view — formatted figures for document templates

Computes the breakdown of an InvoiceData once and renders every monetary
value a template shows (line rates and amounts, subtotal, discount, net
subtotal, tax, total) in the invoice currency.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from invocli.core.domain import InvoiceData, PricingBreakdown, TaxMode
from invocli.core.math.currency_formatter import format_currency
from invocli.core.math.numerical_safeguards import to_fixed
from invocli.core.math.pricing_engine import compute_breakdown

logger = logging.getLogger(__name__)

TAX_MODE_LABELS = {
    TaxMode.EXCLUSIVE: "Exclusive (tax is added to the subtotal)",
    TaxMode.INCLUSIVE: "Inclusive (subtotal already includes tax)",
}


# =============================================================================
# VIEW RECORDS
# =============================================================================


@dataclass(frozen=True)
class LineView:
    """One formatted invoice line."""

    description: str
    quantity: str
    rate: str
    amount: str


@dataclass(frozen=True)
class InvoiceView:
    """Everything a template needs, already formatted."""

    invoice: InvoiceData
    breakdown: PricingBreakdown

    lines: tuple[LineView, ...]
    subtotal: str
    discount_label: Optional[str]  # None when no discount applies
    discount: Optional[str]
    net_subtotal: str
    tax_label: str
    tax: str
    total: str
    tax_mode_label: str

    def as_lines(self) -> list[str]:
        """Plain text summary (one string per row)."""
        rows = []
        number = self.invoice.invoice_number
        rows.append(f"Invoice {number}" if number else "Invoice")
        rows.append(f"From: {self.invoice.sender.name}")
        rows.append(f"To:   {self.invoice.recipient.name}")
        rows.append("")
        for line in self.lines:
            rows.append(f"{line.description}  {line.quantity} x {line.rate} = {line.amount}")
        rows.append("")
        rows.append(f"Subtotal: {self.subtotal}")
        if self.discount is not None:
            rows.append(f"{self.discount_label}: {self.discount}")
        rows.append(f"Net Subtotal: {self.net_subtotal}")
        rows.append(f"{self.tax_label}: {self.tax}")
        rows.append(f"Total: {self.total}")
        rows.append(f"Tax type: {self.tax_mode_label}")
        if self.invoice.note:
            rows.append("")
            rows.append(self.invoice.note)
        return rows


# =============================================================================
# BUILDERS
# =============================================================================


def percent_label(name: str, rate: float) -> str:
    """'Tax (8%)' style label; the percentage is shown without decimals."""
    return f"{name} ({to_fixed(rate * 100, 0)}%)"


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


def build_invoice_view(invoice: InvoiceData) -> InvoiceView:
    """
    Price an invoice and format all of its figures.

    Raises:
        InvalidInput: If the invoice breaks the pricing contract
    """
    breakdown = compute_breakdown(invoice.items, invoice.pricing_parameters())
    currency = invoice.currency

    lines = tuple(
        LineView(
            description=item.description,
            quantity=_format_quantity(item.quantity),
            rate=format_currency(item.rate, currency),
            amount=format_currency(item.amount, currency),
        )
        for item in invoice.items
    )

    if invoice.discount_rate > 0:
        discount_label = percent_label("Discount", invoice.discount_rate)
        discount = f"-{format_currency(breakdown.discount_amount, currency)}"
    else:
        discount_label = None
        discount = None

    logger.debug("built view for %d lines in %s", len(lines), currency)

    return InvoiceView(
        invoice=invoice,
        breakdown=breakdown,
        lines=lines,
        subtotal=format_currency(breakdown.gross_subtotal, currency),
        discount_label=discount_label,
        discount=discount,
        net_subtotal=format_currency(breakdown.net_subtotal, currency),
        tax_label=percent_label("Tax", invoice.tax_rate),
        tax=format_currency(breakdown.tax_amount, currency),
        total=format_currency(breakdown.total, currency),
        tax_mode_label=TAX_MODE_LABELS[invoice.tax_mode],
    )
