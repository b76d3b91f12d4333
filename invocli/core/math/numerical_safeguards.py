"""
Numerical Safeguards — Safe Money Math Primitives

The helpers shared by the pricing engine and the currency formatter:
- NaN/Inf detection so invalid values never reach an invoice
- Tolerance-aware float comparison
- Fixed-point rounding (round half away from zero) for display
- Range/positivity validation with readable error messages

CRITICAL INVARIANTS:
1. NaN/Inf never propagate into a computed figure
2. Float comparisons always account for machine precision
3. Display rounding never depends on binary float artefacts (1.005 → 1.01)
4. All operations are deterministic and reproducible
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

# =============================================================================
# EPSILON PARAMETERS
# =============================================================================

# Relative tolerance for float comparison of money figures
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Absolute tolerance for float comparison of money figures
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-9


# =============================================================================
# NaN/Inf SANITIZATION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check that a float is usable (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if the value is finite, False for NaN or Inf
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON COMPARISONS
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Compare two floats with machine precision in mind.

    Algorithm:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(307.8, 285.0 + 22.8)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# FIXED-POINT ROUNDING
# =============================================================================


def round_half_away_from_zero(value: float, digits: int) -> Decimal:
    """
    Round a value to a fixed number of decimal digits.

    Rounding is done on the shortest decimal representation of the float,
    so 1.005 rounds to 1.01 and 2.5 rounds to 3 (half away from zero),
    independent of how the float is stored in binary.

    Args:
        value: Value to round (int, float or Decimal)
        digits: Number of decimal digits to keep (>= 0)

    Returns:
        Decimal with exactly `digits` fractional digits

    Raises:
        ValueError: If digits is negative or value is NaN/Inf

    Examples:
        >>> round_half_away_from_zero(1234.5, 2)
        Decimal('1234.50')
        >>> round_half_away_from_zero(2.5, 0)
        Decimal('3')
        >>> round_half_away_from_zero(-2.5, 0)
        Decimal('-3')
    """
    if digits < 0:
        raise ValueError(f"digits must be non-negative, got {digits}")

    if isinstance(value, Decimal):
        exact = value
    else:
        if not is_valid_float(value):
            raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")
        exact = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)

    if not exact.is_finite():
        raise ValueError(f"value must be a valid number (not NaN/Inf), got {value}")

    quantum = Decimal(1).scaleb(-digits)
    # quantize needs room for every integer digit plus the kept fraction
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, max(exact.adjusted(), 0) + digits + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)

    # -0.00 is displayed as 0.00
    if rounded.is_zero():
        rounded = abs(rounded)

    return rounded


def to_fixed(value: float, digits: int) -> str:
    """
    Render a value as a plain fixed-point string ('.' separator, no grouping).

    Examples:
        >>> to_fixed(42, 2)
        '42.00'
        >>> to_fixed(1000, 0)
        '1000'
    """
    return f"{round_half_away_from_zero(value, digits):f}"


# =============================================================================
# VALIDATION
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Validate that a value is strictly positive.

    Args:
        value: Value to check
        name: Parameter name (for the error message)

    Raises:
        ValueError: If value <= 0 or NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """
    Validate that a value lies within [min_value, max_value].

    Args:
        value: Value to check
        name: Parameter name (for the error message)
        min_value: Lower bound, inclusive (optional)
        max_value: Upper bound, inclusive (optional)

    Raises:
        ValueError: If value is outside the range or NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
