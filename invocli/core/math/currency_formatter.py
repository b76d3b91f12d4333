"""
CurrencyFormatter — Table-driven currency display

Maps an ISO currency code to its CurrencyRule (symbol, separators, decimal
digits, symbol placement) and renders amounts as display strings:

    format_currency(1234.5, "USD")  -> "$1,234.50"
    format_currency(1234.5, "EUR")  -> "1 234,50 €"
    format_currency(1000, "JPY")    -> "¥1,000"
    format_currency(1234.5, "CHF")  -> "CHF 1'234.50"
    format_currency(42, "XXX")      -> "42.00 XXX"   (unknown code fallback)

Unknown or custom codes are not an error: they degrade to
"<amount fixed to 2 decimals> <code as given>" so invoices can still be
issued in unofficial currencies.

The rule table is built once at import and exposed read-only.
"""

import re
from decimal import Decimal
from types import MappingProxyType
from typing import Final, Mapping, Optional

from invocli.core.domain.currency import CurrencyRule
from invocli.core.math.numerical_safeguards import (
    is_valid_float,
    round_half_away_from_zero,
    to_fixed,
)
from invocli.core.math.pricing_engine import InvalidInput


# =============================================================================
# CONSTANTS
# =============================================================================

# Decimal digits of the unknown-code fallback
FALLBACK_DECIMAL_DIGITS: Final[int] = 2

# Position between groups of three integer digits (counted from the right)
_THOUSANDS_BOUNDARY: Final[re.Pattern] = re.compile(r"\B(?=(\d{3})+(?!\d))")


# =============================================================================
# RULE TABLE
# =============================================================================

# code, symbol, thousands, decimal, symbol_on_left, space, decimal_digits
_RULE_ROWS: Final[tuple[tuple[str, str, str, str, bool, bool, int], ...]] = (
    ("USD", "$", ",", ".", True, False, 2),
    ("EUR", "€", " ", ",", False, True, 2),
    ("TRY", "₺", ".", ",", True, False, 2),
    ("GBP", "£", ",", ".", True, False, 2),
    ("JPY", "¥", ",", ".", True, False, 0),
    ("CAD", "$", ",", ".", True, False, 2),
    ("AUD", "$", ",", ".", True, False, 2),
    ("CHF", "CHF", "'", ".", True, True, 2),
    ("CNY", "¥", ",", ".", True, False, 2),
    ("INR", "₹", ",", ".", True, False, 2),
    ("KRW", "₩", ",", ".", True, False, 0),
    ("BRL", "R$", ".", ",", True, True, 2),
    ("MXN", "$", ",", ".", True, False, 2),
    ("RUB", "₽", " ", ",", False, True, 2),
    ("PLN", "zł", " ", ",", False, True, 2),
    ("SEK", "kr", ".", ",", False, True, 2),
    ("NOK", "kr", " ", ",", True, True, 2),
    ("DKK", "kr.", "", ",", False, True, 2),
    ("SGD", "$", ",", ".", True, False, 2),
    ("HKD", "HK$", ",", ".", True, False, 2),
    ("NZD", "$", ",", ".", True, False, 2),
    ("ZAR", "R", " ", ",", True, False, 2),
    ("AED", "د.إ.‏", ",", ".", True, True, 2),
    ("SAR", "﷼", ",", ".", True, True, 2),
    ("THB", "฿", ",", ".", True, False, 2),
    ("PHP", "₱", ",", ".", True, False, 2),
    ("MYR", "RM", ",", ".", True, False, 2),
    ("IDR", "Rp", ".", ",", True, False, 0),
    ("VND", "₫", ".", ".", False, True, 0),
    ("ILS", "₪", ",", ".", True, True, 2),
    ("CZK", "Kč", " ", ",", False, True, 2),
    ("HUF", "Ft", " ", ",", False, True, 2),
)


def _build_rule_table() -> Mapping[str, CurrencyRule]:
    rules = {}
    for code, symbol, thousands, decimal, on_left, space, digits in _RULE_ROWS:
        rules[code] = CurrencyRule(
            code=code,
            symbol=symbol,
            thousands_separator=thousands,
            decimal_separator=decimal,
            symbol_on_left=on_left,
            space_between_amount_and_symbol=space,
            decimal_digits=digits,
        )
    return MappingProxyType(rules)


CURRENCY_RULES: Final[Mapping[str, CurrencyRule]] = _build_rule_table()

# Short selection list offered to users, in display order
POPULAR_CURRENCIES: Final[tuple[tuple[str, str], ...]] = (
    ("USD ($) - US Dollar", "USD"),
    ("EUR (€) - Euro", "EUR"),
    ("TRY (₺) - Turkish Lira", "TRY"),
    ("GBP (£) - British Pound", "GBP"),
    ("JPY (¥) - Japanese Yen", "JPY"),
    ("CAD ($) - Canadian Dollar", "CAD"),
    ("AUD ($) - Australian Dollar", "AUD"),
    ("CHF - Swiss Franc", "CHF"),
    ("CNY (¥) - Chinese Yuan", "CNY"),
    ("INR (₹) - Indian Rupee", "INR"),
    ("BRL (R$) - Brazilian Real", "BRL"),
    ("RUB (₽) - Russian Ruble", "RUB"),
    ("KRW (₩) - South Korean Won", "KRW"),
)


# =============================================================================
# LOOKUP
# =============================================================================


def get_currency_rule(currency_code: object) -> Optional[CurrencyRule]:
    """
    Look up the rule for a code, case-insensitively (surrounding whitespace
    is not ignored).

    Returns:
        CurrencyRule, or None for unknown, empty or non-string codes
    """
    if not isinstance(currency_code, str):
        return None
    return CURRENCY_RULES.get(currency_code.upper())


def is_currency_supported(currency_code: object) -> bool:
    """
    Case-insensitive membership test against the rule table.

    Examples:
        >>> is_currency_supported("usd")
        True
        >>> is_currency_supported("XXX")
        False
    """
    return get_currency_rule(currency_code) is not None


# =============================================================================
# FORMATTING
# =============================================================================


def _group_thousands(integer_part: str, separator: str) -> str:
    if not separator:
        return integer_part
    return _THOUSANDS_BOUNDARY.sub(separator, integer_part)


def format_with_rule(amount: float, rule: CurrencyRule) -> str:
    """
    Render an amount with an explicit rule.

    Steps:
    1. Round half away from zero to rule.decimal_digits
    2. Group integer digits by three with the thousands separator
    3. Append decimal separator + fraction (only if decimal_digits > 0)
    4. Attach the symbol left/right, with one space if the rule asks for it
    """
    rounded = round_half_away_from_zero(amount, rule.decimal_digits)
    integer_part, _, fraction_part = f"{rounded:f}".partition(".")

    number = _group_thousands(integer_part, rule.thousands_separator)
    if rule.decimal_digits > 0:
        number += rule.decimal_separator + fraction_part

    space = " " if rule.space_between_amount_and_symbol else ""
    if rule.symbol_on_left:
        return f"{rule.symbol}{space}{number}"
    return f"{number}{space}{rule.symbol}"


def format_currency(amount: float, currency_code: object) -> str:
    """
    Render an amount in the display convention of a currency.

    Args:
        amount: Amount to render (int, float or Decimal, finite)
        currency_code: ISO code, any case; unknown/custom codes are accepted

    Returns:
        Display string. Unknown codes fall back to
        "<amount fixed to 2 decimals> <code as given>", the code untouched
        (no trimming, no case change); an empty, whitespace-only or
        non-string code yields the fixed amount alone.

    Raises:
        InvalidInput: If amount is NaN/Inf
    """
    if isinstance(amount, Decimal):
        finite = amount.is_finite()
    else:
        finite = is_valid_float(amount)
    if not finite:
        raise InvalidInput(f"amount must be a finite number, got {amount}")

    rule = get_currency_rule(currency_code)
    if rule is None:
        fixed = to_fixed(amount, FALLBACK_DECIMAL_DIGITS)
        if isinstance(currency_code, str) and currency_code.strip():
            return f"{fixed} {currency_code}"
        return fixed

    return format_with_rule(amount, rule)
