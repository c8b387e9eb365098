"""
Tests for product_amounts (line items and order totals in cents)

Checks:
1. Line amount = quantity * rate, rounded half-up to cents
2. Order total is exactly the sum of line amounts
3. Quantity / rate / amount ceilings
4. Missing-field errors name the index and the payload
"""

import pytest

from pottycrm.core.domain import LineItem
from pottycrm.core.errors import InvalidArgument
from pottycrm.core.limits import MAX_QUANTITY, MAX_RATE, MoneyLimits
from pottycrm.core.math.price_calculations import cents_to_dollars, dollars_to_cents, multiply
from pottycrm.core.math.product_amounts import (
    calculate_order_total,
    calculate_order_total_cents,
    calculate_product_amount,
    calculate_product_amount_cents,
)

# =============================================================================
# LINE ITEMS
# =============================================================================


class TestProductAmount:
    """Tests for calculate_product_amount(_cents)"""

    def test_basic(self) -> None:
        assert calculate_product_amount_cents(3, 65) == 19500
        assert calculate_product_amount(3, 65) == "195.00"

    def test_numeric_strings(self) -> None:
        assert calculate_product_amount("2", "19.99") == "39.98"

    def test_fractional_quantity_rounds_half_up(self) -> None:
        """2.5 * 19.99 = 49.975 -> 49.98"""
        assert calculate_product_amount_cents("2.5", "19.99") == 4998

    def test_float_inputs_do_not_drift(self) -> None:
        assert calculate_product_amount_cents(3, 0.1) == 30
        assert calculate_product_amount_cents(0.29, 100) == 2900

    def test_zero(self) -> None:
        assert calculate_product_amount(0, 65) == "0.00"
        assert calculate_product_amount(3, 0) == "0.00"

    def test_quantity_bounds(self) -> None:
        assert calculate_product_amount_cents(MAX_QUANTITY, 1) == MAX_QUANTITY * 100
        with pytest.raises(InvalidArgument, match="Quantity 1000001 exceeds maximum"):
            calculate_product_amount_cents(1_000_001, 1)
        with pytest.raises(InvalidArgument, match="Invalid quantity"):
            calculate_product_amount_cents(-1, 1)

    def test_rate_bounds(self) -> None:
        assert calculate_product_amount_cents(1, MAX_RATE) == MAX_RATE * 100
        with pytest.raises(InvalidArgument, match="exceeds maximum"):
            calculate_product_amount_cents(1, MAX_RATE + 1)
        with pytest.raises(InvalidArgument, match="Invalid rate"):
            calculate_product_amount_cents(1, -0.01)

    def test_largest_line_amount_exceeds_cents_ceiling(self) -> None:
        """MAX_QUANTITY * MAX_RATE = $1e12 is above the $1e10 cents ceiling"""
        with pytest.raises(InvalidArgument, match="exceeds maximum"):
            calculate_product_amount_cents(MAX_QUANTITY, MAX_RATE)

    @pytest.mark.parametrize("raw", ["abc", None, float("nan"), True])
    def test_invalid_input(self, raw) -> None:
        with pytest.raises(InvalidArgument):
            calculate_product_amount_cents(raw, 10)
        with pytest.raises(InvalidArgument):
            calculate_product_amount_cents(1, raw)

    def test_custom_limits(self) -> None:
        limits = MoneyLimits(max_quantity=10, max_amount_cents=50_000)
        with pytest.raises(InvalidArgument, match="Quantity 11 exceeds maximum allowed \\(10\\)"):
            calculate_product_amount_cents(11, 1, limits=limits)
        with pytest.raises(InvalidArgument, match="Calculated amount exceeds maximum"):
            calculate_product_amount_cents(10, 501, limits=limits)


# =============================================================================
# ORDERS
# =============================================================================


class TestOrderTotal:
    """Tests for calculate_order_total(_cents)"""

    def test_sum_of_lines(self) -> None:
        products = [{"quantity": 3, "rate": 65}, {"quantity": 1, "rate": 45}]
        assert calculate_order_total_cents(products) == 24000
        assert calculate_order_total(products) == "240.00"

    def test_empty_and_none(self) -> None:
        assert calculate_order_total([]) == "0.00"
        assert calculate_order_total(None) == "0.00"
        assert calculate_order_total_cents(()) == 0

    def test_total_equals_sum_of_rounded_lines(self) -> None:
        """Each line is rounded before summing; no drift on the total"""
        products = [{"quantity": "2.5", "rate": "19.99"}] * 3
        line = calculate_product_amount_cents("2.5", "19.99")
        assert calculate_order_total_cents(products) == 3 * line

    def test_additive_over_concatenation(self) -> None:
        first = [{"quantity": 3, "rate": 0.1}, {"quantity": "1.5", "rate": "33.33"}]
        second = [{"quantity": 7, "rate": "12.345"}]
        assert calculate_order_total_cents(first + second) == (
            calculate_order_total_cents(first) + calculate_order_total_cents(second)
        )

    def test_line_item_models(self) -> None:
        products = [
            LineItem(item="Standard unit", quantity=3, rate=65),
            LineItem(item="Hand wash station", quantity="1", rate="45.00"),
        ]
        assert calculate_order_total(products) == "240.00"

    def test_generator_accepted(self) -> None:
        products = ({"quantity": q, "rate": 10} for q in (1, 2, 3))
        assert calculate_order_total_cents(products) == 6000

    def test_extra_fields_ignored(self) -> None:
        products = [{"item": "Unit", "quantity": 1, "rate": 10, "amount": "999.00"}]
        assert calculate_order_total(products) == "10.00"

    def test_missing_quantity_names_index_and_payload(self) -> None:
        products = [{"quantity": 1, "rate": 10}, {"item": "Unit", "rate": 10}]
        with pytest.raises(InvalidArgument) as exc_info:
            calculate_order_total_cents(products)
        message = str(exc_info.value)
        assert "Product at index 1 is missing 'quantity' field" in message
        assert '"item": "Unit"' in message

    def test_missing_rate(self) -> None:
        with pytest.raises(InvalidArgument, match="index 0 is missing 'rate' field"):
            calculate_order_total_cents([{"quantity": 1}])

    @pytest.mark.parametrize("raw", ["products", {"quantity": 1, "rate": 1}, 42])
    def test_non_sequence_rejected(self, raw) -> None:
        with pytest.raises(InvalidArgument, match="must be a sequence"):
            calculate_order_total_cents(raw)

    def test_invalid_item_propagates(self) -> None:
        with pytest.raises(InvalidArgument, match="Invalid quantity"):
            calculate_order_total_cents([{"quantity": "three", "rate": 10}])

    def test_total_ceiling(self) -> None:
        limits = MoneyLimits(max_amount_cents=10_000)
        products = [{"quantity": 1, "rate": 60}, {"quantity": 1, "rate": 50}]
        with pytest.raises(InvalidArgument, match="Order total \\(11000 cents\\) exceeds maximum"):
            calculate_order_total_cents(products, limits=limits)


class TestCentsRoundTrip:
    """cents_to_dollars(dollars_to_cents(q * r)) matches calculate_product_amount"""

    @pytest.mark.parametrize(
        "quantity, rate",
        [(3, 65), ("2.5", "19.99"), (7, 0.1), ("0.333", "3"), (1_000_000, "0.01")],
    )
    def test_round_trip(self, quantity, rate) -> None:
        dollars = multiply(quantity, rate)
        assert cents_to_dollars(dollars_to_cents(dollars)) == calculate_product_amount(quantity, rate)
