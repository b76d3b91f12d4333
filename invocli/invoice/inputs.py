"""
Invoice inputs — from flags and data files to InvoiceData

The only place where user-facing values are normalized:
- tax/discount given as percentages (8) or fractions (0.08) become fractions
- kebab-case data file keys become InvoiceData fields
- `item` is accepted as an alias of a line's `description`

The pricing engine downstream accepts fractions only, so normalization
happens exactly once, here.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional

from jsonschema import ValidationError as ContractViolation
from pydantic import ValidationError

from invocli.core.contracts import validate_invoice_data
from invocli.core.domain import InvoiceData, LineItem, Party, TaxMode
from invocli.core.math.pricing_engine import InvalidInput

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvoiceDataError(Exception):
    """
    Invoice data could not be loaded.

    Raised when:
    - the data file is missing or unreadable
    - the file is not valid JSON
    - the contents violate the invoice_data contract
    """

    pass


# =============================================================================
# RATES
# =============================================================================


def normalize_rate(value: float) -> float:
    """
    Turn a user-supplied tax/discount rate into a fraction.

    Values >= 1 are percentages (20 → 0.20); values in [0, 1) are already
    fractions and pass unchanged. 1 itself is read as 1%, like every
    other value >= 1.

    Raises:
        InvalidInput: If value is negative or NaN/Inf

    Examples:
        >>> normalize_rate(8)
        0.08
        >>> normalize_rate(0.08)
        0.08
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"rate must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInput(f"rate must be finite, got {value}")
    if value < 0:
        raise InvalidInput(f"rate must be non-negative, got {value}")

    if value >= 1:
        return value / 100.0
    return float(value)


def parse_tax_mode(value: Optional[str], default: TaxMode = TaxMode.EXCLUSIVE) -> TaxMode:
    """
    Read a tax-type selector; missing means `default`.

    Raises:
        InvalidInput: For anything but exclusive/inclusive
    """
    if value is None:
        return default
    try:
        return TaxMode(value.strip().lower())
    except (AttributeError, ValueError) as e:
        raise InvalidInput(
            f"tax type must be 'exclusive' or 'inclusive', got {value!r}"
        ) from e


# =============================================================================
# FLAGS
# =============================================================================


def items_from_flags(
    item: Optional[str],
    quantity: Optional[float],
    rate: Optional[float],
) -> list[LineItem]:
    """
    Single-line item list from --item/--quantity/--rate.

    Returns an empty list when any of the three is missing.

    Raises:
        InvalidInput: If quantity or rate is not positive
    """
    if not item or quantity is None or rate is None:
        return []
    try:
        return [LineItem(description=item, quantity=quantity, rate=rate)]
    except ValidationError as e:
        raise InvalidInput(f"item {item!r} is invalid: {e}") from e


# =============================================================================
# DATA FILES
# =============================================================================


def _party(raw: Dict[str, Any], prefix: str) -> Party:
    return Party(
        name=raw[prefix],
        address=raw.get(f"{prefix}-address"),
        email=raw.get(f"{prefix}-email"),
        phone=raw.get(f"{prefix}-phone"),
        tax_id=raw.get(f"{prefix}-tax-id"),
    )


def _line_item(raw: Dict[str, Any]) -> LineItem:
    return LineItem(
        description=raw.get("description", raw.get("item")),
        quantity=raw["quantity"],
        rate=raw["rate"],
    )


def parse_invoice_data(
    raw: Dict[str, Any],
    default_currency: str = "USD",
    default_tax_mode: TaxMode = TaxMode.EXCLUSIVE,
) -> InvoiceData:
    """
    Map a decoded invoice data object onto InvoiceData.

    Args:
        raw: Decoded JSON object (kebab-case keys)
        default_currency: Currency used when the data names none
        default_tax_mode: Tax mode used when the data has no tax-type

    Returns:
        InvoiceData with normalized (fractional) rates

    Raises:
        InvoiceDataError: If raw violates the invoice_data contract
        InvalidInput: If a rate cannot be normalized
    """
    try:
        validate_invoice_data(raw)
    except ContractViolation as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise InvoiceDataError(f"invoice data is invalid at {location}: {e.message}") from e

    invoice_number = raw.get("invoice-number")
    try:
        invoice = InvoiceData(
            sender=_party(raw, "from"),
            recipient=_party(raw, "to"),
            items=tuple(_line_item(item) for item in raw["items"]),
            tax_rate=normalize_rate(raw.get("tax", 0)),
            discount_rate=normalize_rate(raw.get("discount", 0)),
            tax_mode=parse_tax_mode(raw.get("tax-type"), default_tax_mode),
            currency=raw.get("currency") or default_currency,
            invoice_number=None if invoice_number is None else str(invoice_number),
            note=raw.get("note"),
            logo=raw.get("logo"),
        )
    except ValidationError as e:
        raise InvoiceDataError(f"invoice data is invalid: {e}") from e

    logger.debug(
        "parsed invoice %s: %d items, currency=%s",
        invoice.invoice_number or "<unnumbered>",
        len(invoice.items),
        invoice.currency,
    )
    return invoice


def load_invoice_data(
    path: str | Path,
    default_currency: str = "USD",
    default_tax_mode: TaxMode = TaxMode.EXCLUSIVE,
) -> InvoiceData:
    """
    Read and parse an invoice data file.

    Raises:
        InvoiceDataError: If the file is unreadable, not UTF-8 JSON, or invalid
        InvalidInput: If a rate cannot be normalized
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise InvoiceDataError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InvoiceDataError(f"{path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise InvoiceDataError(f"{path} is not valid UTF-8: {e}") from e

    if not isinstance(raw, dict):
        raise InvoiceDataError(f"{path} must contain a JSON object")

    logger.info("loaded invoice data from %s", path)
    return parse_invoice_data(
        raw,
        default_currency=default_currency,
        default_tax_mode=default_tax_mode,
    )
