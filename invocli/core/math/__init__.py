"""
Core math modules for invocli

Pricing arithmetic and currency display, with deterministic rounding.
"""

# Numerical Safeguards
from invocli.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf
    is_valid_float,
    # Epsilon comparisons
    is_close,
    # Rounding
    round_half_away_from_zero,
    to_fixed,
    # Validation
    validate_in_range,
    validate_positive,
)

# Pricing Engine
from invocli.core.math.pricing_engine import (
    InvalidInput,
    compute_breakdown,
    gross_subtotal,
    line_item_amount,
    validate_pricing_inputs,
)

# Currency Formatter
from invocli.core.math.currency_formatter import (
    CURRENCY_RULES,
    FALLBACK_DECIMAL_DIGITS,
    POPULAR_CURRENCIES,
    format_currency,
    format_with_rule,
    get_currency_rule,
    is_currency_supported,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — NaN/Inf
    "is_valid_float",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    # Numerical Safeguards — Rounding
    "round_half_away_from_zero",
    "to_fixed",
    # Numerical Safeguards — Validation
    "validate_in_range",
    "validate_positive",
    # Pricing Engine — Exceptions
    "InvalidInput",
    # Pricing Engine — Functions
    "compute_breakdown",
    "gross_subtotal",
    "line_item_amount",
    "validate_pricing_inputs",
    # Currency Formatter — Constants
    "CURRENCY_RULES",
    "FALLBACK_DECIMAL_DIGITS",
    "POPULAR_CURRENCIES",
    # Currency Formatter — Functions
    "format_currency",
    "format_with_rule",
    "get_currency_rule",
    "is_currency_supported",
]
