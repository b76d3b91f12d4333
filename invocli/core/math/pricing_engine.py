"""
PricingEngine — Invoice totals under exclusive/inclusive tax

Turns line items plus tax/discount terms into a PricingBreakdown:
- gross subtotal (Σ quantity × rate)
- discount (applied to the gross figure, before tax in both modes)
- net subtotal and tax, partitioned according to the tax mode
- total

EXCLUSIVE (rates exclude tax):
    discount   = gross * discount_rate
    net        = gross - discount
    tax        = net * tax_rate
    total      = net + tax

INCLUSIVE (rates include tax, tax is extracted after the discount):
    discount   = gross * discount_rate
    discounted = gross - discount
    net        = discounted / (1 + tax_rate)
    tax        = discounted - net
    total      = discounted

No rounding is applied here; figures keep full float precision until they
are formatted for display, so discount and tax steps never compound
rounding error.

Rates must already be fractions in [0, 1]. Percent normalization is the
job of the input layer (invocli.invoice.inputs.normalize_rate).
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import ValidationError

from invocli.core.domain.line_item import LineItem
from invocli.core.domain.pricing import PricingBreakdown, PricingParameters, TaxMode
from invocli.core.math.numerical_safeguards import (
    is_valid_float,
    validate_in_range,
    validate_positive,
)

logger = logging.getLogger(__name__)

LineItemLike = Union[LineItem, Mapping[str, Any]]
ParametersLike = Union[PricingParameters, Mapping[str, Any]]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidInput(ValueError):
    """
    Pricing input violates the engine contract.

    Raised when:
    - a line item has a non-positive or non-finite quantity/rate
    - tax_rate or discount_rate is outside [0, 1] (e.g. a percentage that
      was never normalized)
    - an amount to format is NaN/Inf

    Not retried; propagated to the caller for user-facing reporting.
    """

    pass


# =============================================================================
# INPUT COERCION
# =============================================================================


def _coerce_item(item: LineItemLike, index: int) -> LineItem:
    if isinstance(item, LineItem):
        return item

    try:
        return LineItem.model_validate(item)
    except ValidationError as e:
        raise InvalidInput(f"line item #{index + 1} is invalid: {e}") from e


def _coerce_parameters(params: ParametersLike) -> PricingParameters:
    if isinstance(params, PricingParameters):
        return params

    try:
        return PricingParameters.model_validate(params)
    except ValidationError as e:
        raise InvalidInput(f"pricing parameters are invalid: {e}") from e


def validate_pricing_inputs(
    items: Iterable[LineItemLike],
    params: ParametersLike,
) -> tuple[list[LineItem], PricingParameters]:
    """
    Check every precondition of compute_breakdown up front.

    Models built with model_construct() bypass pydantic validation, so the
    numeric contract is re-checked here on the values themselves.

    Returns:
        (items as LineItem list, PricingParameters)

    Raises:
        InvalidInput: On the first violated precondition
    """
    checked_params = _coerce_parameters(params)
    try:
        validate_in_range(checked_params.tax_rate, "tax_rate", 0.0, 1.0)
        validate_in_range(checked_params.discount_rate, "discount_rate", 0.0, 1.0)
    except ValueError as e:
        raise InvalidInput(str(e)) from e

    checked_items = []
    for index, raw in enumerate(items):
        item = _coerce_item(raw, index)
        try:
            validate_positive(item.quantity, f"line item #{index + 1} quantity")
            validate_positive(item.rate, f"line item #{index + 1} rate")
        except ValueError as e:
            raise InvalidInput(str(e)) from e
        checked_items.append(item)

    return checked_items, checked_params


# =============================================================================
# PRICING
# =============================================================================


def line_item_amount(item: LineItemLike) -> float:
    """
    Amount of a single line: quantity × rate.

    Raises:
        InvalidInput: If the item is invalid
    """
    return _coerce_item(item, 0).amount


def gross_subtotal(items: Iterable[LineItem]) -> float:
    """Σ quantity × rate over all items (0.0 for no items)."""
    return sum((item.amount for item in items), 0.0)


def compute_breakdown(
    items: Iterable[LineItemLike],
    params: ParametersLike,
) -> PricingBreakdown:
    """
    Compute the totals breakdown of an invoice.

    Args:
        items: Line items (LineItem or mappings with description/quantity/rate)
        params: PricingParameters (or an equivalent mapping)

    Returns:
        PricingBreakdown at full float precision

    Raises:
        InvalidInput: If an item or a rate breaks the engine contract

    Examples:
        >>> b = compute_breakdown(
        ...     [{"description": "Widget", "quantity": 2, "rate": 150}],
        ...     PricingParameters(tax_rate=0.08, discount_rate=0.05),
        ... )
        >>> b.gross_subtotal, b.discount_amount, b.net_subtotal
        (300.0, 15.0, 285.0)
        >>> round(b.total, 6)
        307.8
    """
    checked_items, checked_params = validate_pricing_inputs(items, params)

    gross = gross_subtotal(checked_items)
    if not is_valid_float(gross):
        raise InvalidInput(f"gross subtotal is not a finite number (overflow), got {gross}")

    discount_amount = gross * checked_params.discount_rate
    discounted = gross - discount_amount

    if checked_params.tax_mode == TaxMode.INCLUSIVE:
        # Tax is already inside the discounted figure: extract it
        net = discounted / (1.0 + checked_params.tax_rate)
        tax_amount = discounted - net
        total = discounted
    else:
        net = discounted
        tax_amount = net * checked_params.tax_rate
        total = net + tax_amount

    logger.debug(
        "priced %d items (%s): gross=%r discount=%r net=%r tax=%r total=%r",
        len(checked_items),
        checked_params.tax_mode.value,
        gross,
        discount_amount,
        net,
        tax_amount,
        total,
    )

    try:
        return PricingBreakdown(
            gross_subtotal=gross,
            discount_amount=discount_amount,
            discounted_subtotal=discounted,
            net_subtotal=net,
            tax_amount=tax_amount,
            total=total,
        )
    except ValidationError as e:
        raise InvalidInput(f"pricing produced an invalid breakdown: {e}") from e
