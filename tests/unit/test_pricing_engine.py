"""
Unit tests for PricingEngine

Checks:
1. Worked examples in EXCLUSIVE and INCLUSIVE mode
2. Invariants: total = net + tax, discounted = gross - discount
3. Mode equivalence when tax_rate = 0
4. Edge cases: empty items, zero discount, 100% tax
5. InvalidInput on contract violations (fail fast)
"""

import itertools

import pytest

from invocli.core.domain import LineItem, PricingBreakdown, PricingParameters, TaxMode
from invocli.core.math.numerical_safeguards import is_close
from invocli.core.math.pricing_engine import (
    InvalidInput,
    compute_breakdown,
    gross_subtotal,
    line_item_amount,
    validate_pricing_inputs,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def widget_items():
    """Two widgets at 150."""
    return [LineItem(description="Widget", quantity=2, rate=150)]


@pytest.fixture
def mixed_items():
    """Several lines with fractional quantities/rates."""
    return [
        LineItem(description="Consulting", quantity=7.5, rate=120.0),
        LineItem(description="Hosting", quantity=1, rate=49.99),
        LineItem(description="Licenses", quantity=3, rate=19.95),
    ]


def exclusive(tax: float, discount: float) -> PricingParameters:
    return PricingParameters(tax_rate=tax, discount_rate=discount, tax_mode=TaxMode.EXCLUSIVE)


def inclusive(tax: float, discount: float) -> PricingParameters:
    return PricingParameters(tax_rate=tax, discount_rate=discount, tax_mode=TaxMode.INCLUSIVE)


# =============================================================================
# WORKED EXAMPLES
# =============================================================================


class TestExclusiveMode:
    """Tax added on top of the discounted subtotal"""

    def test_widget_example(self, widget_items) -> None:
        b = compute_breakdown(widget_items, exclusive(0.08, 0.05))

        assert b.gross_subtotal == pytest.approx(300.0)
        assert b.discount_amount == pytest.approx(15.0)
        assert b.discounted_subtotal == pytest.approx(285.0)
        assert b.net_subtotal == pytest.approx(285.0)
        assert b.tax_amount == pytest.approx(22.8)
        assert b.total == pytest.approx(307.8)

    def test_net_equals_discounted(self, mixed_items) -> None:
        b = compute_breakdown(mixed_items, exclusive(0.2, 0.1))
        assert b.net_subtotal == b.discounted_subtotal

    def test_no_rounding_inside_engine(self) -> None:
        """Full precision is kept: 1/3 of a cent survives"""
        items = [LineItem(description="Third", quantity=1, rate=10.0)]
        b = compute_breakdown(items, exclusive(1 / 3, 0.0))
        assert b.tax_amount == pytest.approx(10.0 / 3, abs=1e-12)
        assert b.tax_amount != round(b.tax_amount, 2)


class TestInclusiveMode:
    """Tax extracted from the discounted total"""

    def test_widget_example(self, widget_items) -> None:
        b = compute_breakdown(widget_items, inclusive(0.08, 0.05))

        assert b.gross_subtotal == pytest.approx(300.0)
        assert b.discount_amount == pytest.approx(15.0)
        assert b.discounted_subtotal == pytest.approx(285.0)
        assert b.net_subtotal == pytest.approx(285.0 / 1.08)
        assert b.net_subtotal == pytest.approx(263.8888888889, abs=1e-9)
        assert b.tax_amount == pytest.approx(285.0 - 285.0 / 1.08)
        assert b.tax_amount == pytest.approx(21.1111111111, abs=1e-9)
        assert b.total == pytest.approx(285.0)

    def test_total_is_discounted_subtotal(self, mixed_items) -> None:
        b = compute_breakdown(mixed_items, inclusive(0.19, 0.03))
        assert b.total == b.discounted_subtotal

    def test_full_tax_halves_net(self, widget_items) -> None:
        """tax_rate = 1 is a valid 100% tax: net = discounted / 2"""
        b = compute_breakdown(widget_items, inclusive(1.0, 0.0))
        assert b.net_subtotal == pytest.approx(150.0)
        assert b.tax_amount == pytest.approx(150.0)
        assert b.total == pytest.approx(300.0)


# =============================================================================
# INVARIANTS
# =============================================================================


RATES = [0.0, 0.05, 0.08, 0.2, 0.5, 1.0]


class TestInvariants:
    """Invariants over a grid of rates and both modes"""

    @pytest.mark.parametrize("mode", list(TaxMode))
    def test_total_is_net_plus_tax(self, mixed_items, mode: TaxMode) -> None:
        for tax, discount in itertools.product(RATES, RATES):
            params = PricingParameters(tax_rate=tax, discount_rate=discount, tax_mode=mode)
            b = compute_breakdown(mixed_items, params)
            assert abs(b.total - (b.net_subtotal + b.tax_amount)) <= 1e-9

    @pytest.mark.parametrize("mode", list(TaxMode))
    def test_discounted_is_gross_minus_discount(self, mixed_items, mode: TaxMode) -> None:
        for tax, discount in itertools.product(RATES, RATES):
            params = PricingParameters(tax_rate=tax, discount_rate=discount, tax_mode=mode)
            b = compute_breakdown(mixed_items, params)
            assert is_close(b.discounted_subtotal, b.gross_subtotal - b.discount_amount)

    @pytest.mark.parametrize("mode", list(TaxMode))
    def test_all_fields_non_negative(self, mixed_items, mode: TaxMode) -> None:
        for tax, discount in itertools.product(RATES, RATES):
            params = PricingParameters(tax_rate=tax, discount_rate=discount, tax_mode=mode)
            b = compute_breakdown(mixed_items, params)
            assert min(b.model_dump().values()) >= 0

    @pytest.mark.parametrize("discount", RATES)
    def test_modes_agree_without_tax(self, mixed_items, discount: float) -> None:
        ex = compute_breakdown(mixed_items, exclusive(0.0, discount))
        inc = compute_breakdown(mixed_items, inclusive(0.0, discount))
        assert ex.total == pytest.approx(inc.total, abs=1e-9)
        assert ex.net_subtotal == pytest.approx(inc.net_subtotal, abs=1e-9)
        assert ex.tax_amount == 0.0
        assert inc.tax_amount == 0.0

    def test_deterministic(self, mixed_items) -> None:
        params = inclusive(0.18, 0.07)
        assert compute_breakdown(mixed_items, params) == compute_breakdown(mixed_items, params)


# =============================================================================
# EDGE CASES
# =============================================================================


class TestEdgeCases:
    """Empty lists, zero rates, input shapes"""

    @pytest.mark.parametrize("mode", list(TaxMode))
    def test_empty_items_all_zero(self, mode: TaxMode) -> None:
        params = PricingParameters(tax_rate=0.2, discount_rate=0.1, tax_mode=mode)
        b = compute_breakdown([], params)
        assert b == PricingBreakdown(
            gross_subtotal=0.0,
            discount_amount=0.0,
            discounted_subtotal=0.0,
            net_subtotal=0.0,
            tax_amount=0.0,
            total=0.0,
        )

    def test_zero_discount(self, widget_items) -> None:
        b = compute_breakdown(widget_items, exclusive(0.08, 0.0))
        assert b.discount_amount == 0.0
        assert b.total == pytest.approx(324.0)

    def test_full_discount(self, widget_items) -> None:
        b = compute_breakdown(widget_items, exclusive(0.08, 1.0))
        assert b.discounted_subtotal == 0.0
        assert b.total == 0.0

    def test_mapping_inputs(self) -> None:
        """Plain dicts are accepted for items and parameters"""
        b = compute_breakdown(
            [{"description": "Widget", "quantity": 2, "rate": 150}],
            {"tax_rate": 0.08, "discount_rate": 0.05, "tax_mode": "inclusive"},
        )
        assert b.total == pytest.approx(285.0)

    def test_generator_items(self) -> None:
        items = (LineItem(description=f"L{i}", quantity=1, rate=10) for i in range(3))
        assert compute_breakdown(items, exclusive(0.0, 0.0)).total == pytest.approx(30.0)

    def test_default_parameters(self, widget_items) -> None:
        b = compute_breakdown(widget_items, PricingParameters())
        assert b.total == pytest.approx(300.0)

    def test_breakdown_is_frozen(self, widget_items) -> None:
        b = compute_breakdown(widget_items, exclusive(0.08, 0.05))
        with pytest.raises(Exception):  # pydantic ValidationError (frozen instance)
            b.total = 0.0


class TestHelpers:
    """line_item_amount / gross_subtotal"""

    def test_line_item_amount(self) -> None:
        assert line_item_amount(LineItem(description="x", quantity=2.5, rate=4)) == 10.0
        assert line_item_amount({"description": "x", "quantity": 3, "rate": 7}) == 21.0

    def test_gross_subtotal(self, mixed_items) -> None:
        assert gross_subtotal(mixed_items) == pytest.approx(900.0 + 49.99 + 59.85)
        assert gross_subtotal([]) == 0.0


# =============================================================================
# INVALID INPUT
# =============================================================================


class TestInvalidInput:
    """Contract violations fail fast with InvalidInput"""

    @pytest.mark.parametrize(
        "item",
        [
            {"description": "x", "quantity": 0, "rate": 10},
            {"description": "x", "quantity": -1, "rate": 10},
            {"description": "x", "quantity": 1, "rate": 0},
            {"description": "x", "quantity": 1, "rate": -5},
            {"description": "x", "quantity": 1, "rate": float("inf")},
            {"description": "x", "quantity": float("nan"), "rate": 1},
            {"quantity": 1, "rate": 1},
        ],
    )
    def test_bad_item(self, item) -> None:
        with pytest.raises(InvalidInput, match="line item #1"):
            compute_breakdown([item], PricingParameters())

    def test_bad_item_index_reported(self) -> None:
        items = [
            {"description": "ok", "quantity": 1, "rate": 1},
            {"description": "bad", "quantity": 1, "rate": -1},
        ]
        with pytest.raises(InvalidInput, match="line item #2"):
            compute_breakdown(items, PricingParameters())

    @pytest.mark.parametrize(
        "params",
        [
            {"tax_rate": 8},  # percentage never normalized
            {"tax_rate": -0.01},
            {"discount_rate": 1.5},
            {"discount_rate": float("nan")},
            {"tax_mode": "gross"},
        ],
    )
    def test_bad_parameters(self, widget_items, params) -> None:
        with pytest.raises(InvalidInput):
            compute_breakdown(widget_items, params)

    def test_unvalidated_models_are_rechecked(self, widget_items) -> None:
        """model_construct() skips pydantic, the engine still refuses"""
        params = PricingParameters.model_construct(
            tax_rate=20.0, discount_rate=0.0, tax_mode=TaxMode.EXCLUSIVE
        )
        with pytest.raises(InvalidInput, match="tax_rate must be <= 1.0"):
            compute_breakdown(widget_items, params)

        item = LineItem.model_construct(description="x", quantity=-2.0, rate=1.0)
        with pytest.raises(InvalidInput, match="quantity must be positive"):
            compute_breakdown([item], PricingParameters())

    @pytest.mark.parametrize("mode", list(TaxMode))
    def test_overflowing_gross_subtotal(self, mode: TaxMode) -> None:
        """quantity x rate beyond the float range never yields NaN figures"""
        items = [{"description": "x", "quantity": 1e200, "rate": 1e200}]
        params = PricingParameters(tax_rate=0.08, discount_rate=0.05, tax_mode=mode)
        with pytest.raises(InvalidInput, match="gross subtotal is not a finite number"):
            compute_breakdown(items, params)

    def test_overflowing_total(self) -> None:
        """A finite gross whose tax pushes the total past the float range"""
        items = [{"description": "x", "quantity": 1, "rate": 1.5e308}]
        with pytest.raises(InvalidInput, match="invalid breakdown"):
            compute_breakdown(items, exclusive(0.5, 0.0))

    def test_invalid_input_is_value_error(self) -> None:
        assert issubclass(InvalidInput, ValueError)

    def test_validate_pricing_inputs_returns_models(self) -> None:
        items, params = validate_pricing_inputs(
            [{"description": "x", "quantity": 1, "rate": 2}], {"tax_rate": 0.1}
        )
        assert items == [LineItem(description="x", quantity=1, rate=2)]
        assert params == PricingParameters(tax_rate=0.1)
