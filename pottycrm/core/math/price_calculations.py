"""
Price Calculations — money-safe arithmetic

MONEY/CURRENCY OPERATIONS ONLY. This is the only module where dollar
arithmetic happens; general numeric helpers live in numeric_calculations.

Every public function:
1. Parses its inputs through parse_money_input (number, numeric string or
   Decimal -> Decimal).
2. Raises InvalidArgument on malformed/non-finite input, on a negative
   money operand and on ceiling violations.
3. Computes in Decimal and quantizes the result to cents (ROUND_HALF_UP)
   before returning, so chained calls cannot accumulate drift.

Return types:
- dollar values: Decimal with two fractional digits
- cents: int
- display values: str ("195.00")

INVARIANTS:
1. add / multiply / divide never return a negative value (they raise).
   Legitimate negative deltas (overpayment, refunds) go through subtract.
2. calculate_balance_due and calculate_net_paid_amount are floored at 0.
3. calculate_order_revenue and calculate_price_difference_percentage are
   signed and never clamped.
"""

import math
import sys
from decimal import Decimal, InvalidOperation
from typing import Union

from pottycrm.core.errors import InvalidArgument
from pottycrm.core.limits import CENTS_PER_DOLLAR, DEFAULT_LIMITS, MONEY_DECIMALS, MoneyLimits
from pottycrm.core.math.numeric_calculations import quantize_half_away

MoneyInput = Union[int, float, str, Decimal]

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# Anything a float cannot hold is rejected like Inf
_MAX_MAGNITUDE = Decimal(sys.float_info.max)


# =============================================================================
# PARSING AND ROUNDING
# =============================================================================


def parse_money_input(value: MoneyInput, name: str = "value") -> Decimal:
    """
    Parse a number or numeric string into a finite Decimal.

    Floats are converted through their shortest repr, so 0.1 becomes
    Decimal("0.1") rather than its binary expansion.

    Args:
        value: int, float, Decimal or numeric string (surrounding whitespace ok)
        name: Parameter name (for the error message)

    Raises:
        InvalidArgument: If value is None, a bool, malformed, NaN, Inf or
            beyond the float range
    """
    if value is None or isinstance(value, bool):
        raise InvalidArgument(
            f"Invalid {name}: {value}. {name} must be a valid finite number."
        )

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgument(
                f"Invalid {name}: {value}. {name} must be a valid finite number."
            )
        parsed = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidArgument(
                f"Invalid {name}: {value!r}. {name} must be a valid finite number."
            ) from None
    else:
        raise InvalidArgument(
            f"Invalid {name}: {value!r}. {name} must be a number or numeric string."
        )

    if not parsed.is_finite() or parsed.copy_abs() > _MAX_MAGNITUDE:
        raise InvalidArgument(
            f"Invalid {name}: {value}. {name} must be a valid finite number."
        )
    return parsed


def to_money(value: Decimal) -> Decimal:
    """Quantize a Decimal to cents, half away from zero."""
    return quantize_half_away(value, MONEY_DECIMALS)


def _require_non_negative(value: Decimal, raw: MoneyInput, name: str) -> None:
    if value < 0:
        raise InvalidArgument(f"Invalid {name}: {raw}. {name} must be >= 0.")


def round_price(value: MoneyInput, *, limits: MoneyLimits = DEFAULT_LIMITS) -> Decimal:
    """
    Round a price to 2 decimal places.

    The canonical "is this a legal price" gate: 0 <= value <= max_price.

    Raises:
        InvalidArgument: If value is invalid, negative or above max_price

    Examples:
        >>> round_price("19.999")
        Decimal('20.00')
    """
    price = parse_money_input(value, "price")
    if price < 0:
        raise InvalidArgument(f"Invalid price value: {value}. Price must be >= 0.")
    if price > limits.max_price:
        raise InvalidArgument(
            f"Price {value} exceeds maximum allowed ({limits.max_price})"
        )
    return to_money(price)


# =============================================================================
# DOLLARS <-> CENTS
# =============================================================================


def dollars_to_cents(amount: MoneyInput, *, limits: MoneyLimits = DEFAULT_LIMITS) -> int:
    """
    Convert dollars to integer cents (payment-provider minor units).

    Raises:
        InvalidArgument: If amount is invalid, negative or the cents exceed max_cents

    Examples:
        >>> dollars_to_cents("19.99")
        1999
        >>> dollars_to_cents(0.005)
        1
    """
    dollars = parse_money_input(amount, "amount")
    if dollars < 0:
        raise InvalidArgument(f"Invalid amount: {amount}. Amount cannot be negative.")

    cents = int(quantize_half_away(dollars * CENTS_PER_DOLLAR, 0))
    if cents > limits.max_cents:
        raise InvalidArgument(
            f"Amount in cents ({cents}) exceeds maximum allowed ({limits.max_cents} cents)"
        )
    return cents


def cents_to_dollars(cents: Union[int, float, Decimal]) -> str:
    """
    Convert integer cents to a two-decimal dollar string.

    Integral floats/Decimals (e.g. 1999.0) are accepted.

    Raises:
        InvalidArgument: If cents is negative, non-finite or not a whole number

    Examples:
        >>> cents_to_dollars(19500)
        '195.00'
        >>> cents_to_dollars(0)
        '0.00'
    """
    if isinstance(cents, bool) or not isinstance(cents, (int, float, Decimal)):
        raise InvalidArgument(
            f"Invalid cents value: {cents!r}. Cents must be a valid non-negative integer."
        )
    value = parse_money_input(cents, "cents")
    if value < 0 or value != value.to_integral_value():
        raise InvalidArgument(
            f"Invalid cents value: {cents}. Cents must be a valid non-negative integer."
        )
    return f"{value / CENTS_PER_DOLLAR:.2f}"


# =============================================================================
# BASIC ARITHMETIC
# =============================================================================


def add(a: MoneyInput, b: MoneyInput) -> Decimal:
    """
    Add two monetary values.

    Raises:
        InvalidArgument: If an input is invalid or the sum is negative
    """
    a_num = parse_money_input(a)
    b_num = parse_money_input(b)
    result = a_num + b_num
    if result < 0:
        raise InvalidArgument(
            f"Price addition resulted in negative value: {a} + {b} = {result}"
        )
    return to_money(result)


def subtract(a: MoneyInput, b: MoneyInput) -> Decimal:
    """
    Subtract two monetary values.

    The one binary operation allowed to go negative (overpayment, refund
    deltas).
    """
    a_num = parse_money_input(a)
    b_num = parse_money_input(b)
    return to_money(a_num - b_num)


def multiply(a: MoneyInput, b: MoneyInput) -> Decimal:
    """
    Multiply for money (quantity * rate, price * multiplier).

    Raises:
        InvalidArgument: If an input is invalid or the product is negative
    """
    a_num = parse_money_input(a)
    b_num = parse_money_input(b)
    result = a_num * b_num
    if result < 0:
        raise InvalidArgument(
            f"Price multiplication resulted in negative value: {a} * {b} = {result}"
        )
    return to_money(result)


def divide(a: MoneyInput, b: MoneyInput) -> Decimal:
    """
    Divide for money.

    Raises:
        InvalidArgument: If an input is invalid, b is zero or the quotient is negative
    """
    a_num = parse_money_input(a)
    b_num = parse_money_input(b)
    if b_num == 0:
        raise InvalidArgument("Division by zero is not allowed.")
    result = a_num / b_num
    if result < 0:
        raise InvalidArgument(
            f"Price division resulted in negative value: {a} / {b} = {result}"
        )
    return to_money(result)


def max_amount(a: MoneyInput, b: MoneyInput) -> Decimal:
    """Larger of two validated values."""
    return max(parse_money_input(a), parse_money_input(b))


def min_amount(a: MoneyInput, b: MoneyInput) -> Decimal:
    """Smaller of two validated values."""
    return min(parse_money_input(a), parse_money_input(b))


def abs_amount(value: MoneyInput) -> Decimal:
    return abs(parse_money_input(value))


def floor_amount(value: MoneyInput) -> int:
    return math.floor(parse_money_input(value))


def ceil_amount(value: MoneyInput) -> int:
    return math.ceil(parse_money_input(value))


# =============================================================================
# PERCENTAGE / MARGIN / MULTIPLIER
# =============================================================================


def calculate_percentage(amount: MoneyInput, percentage: MoneyInput) -> Decimal:
    """
    Percentage of an amount (e.g. sales tax, card fee).

    Args:
        amount: Base amount, dollars (>= 0)
        percentage: Percent, 0-100 (8.5 means 8.5%)

    Returns:
        round_price(amount * percentage / 100)

    Examples:
        >>> calculate_percentage(200, 8.5)
        Decimal('17.00')
    """
    amount_num = parse_money_input(amount, "amount")
    percentage_num = parse_money_input(percentage, "percentage")
    _require_non_negative(amount_num, amount, "amount")
    if percentage_num < 0 or percentage_num > 100:
        raise InvalidArgument(
            f"Invalid percentage: {percentage}. Percentage must be between 0 and 100."
        )
    return round_price(amount_num * percentage_num / _HUNDRED)


def add_margin(base_price: MoneyInput, margin_amount: MoneyInput) -> Decimal:
    """
    Base price plus a margin amount.

    The margin may be negative (a discount) as long as the result is not.
    """
    base = parse_money_input(base_price, "base price")
    margin = parse_money_input(margin_amount, "margin amount")
    _require_non_negative(base, base_price, "base price")
    return round_price(add(base, margin))


def apply_multiplier(base_price: MoneyInput, multiplier: MoneyInput) -> Decimal:
    """
    Base price times a non-negative multiplier (1.2 = 20% markup).
    """
    base = parse_money_input(base_price, "base price")
    factor = parse_money_input(multiplier, "multiplier")
    _require_non_negative(base, base_price, "base price")
    _require_non_negative(factor, multiplier, "multiplier")
    return round_price(multiply(base, factor))


# =============================================================================
# PAYMENTS
# =============================================================================


def calculate_balance_due(order_total: MoneyInput, paid_amount: MoneyInput) -> Decimal:
    """
    Balance still owed on an order, floored at 0.

    Examples:
        >>> calculate_balance_due(240, 300)
        Decimal('0.00')
    """
    total = parse_money_input(order_total, "order total")
    paid = parse_money_input(paid_amount, "paid amount")
    _require_non_negative(total, order_total, "order total")
    _require_non_negative(paid, paid_amount, "paid amount")
    return to_money(max(_ZERO, subtract(total, paid)))


def calculate_net_paid_amount(total_paid: MoneyInput, total_refunded: MoneyInput) -> Decimal:
    """Amount paid minus refunds, floored at 0."""
    paid = parse_money_input(total_paid, "total paid")
    refunded = parse_money_input(total_refunded, "total refunded")
    _require_non_negative(paid, total_paid, "total paid")
    _require_non_negative(refunded, total_refunded, "total refunded")
    return to_money(max(_ZERO, subtract(paid, refunded)))


def calculate_available_refund(
    payment_amount: MoneyInput, refunded_amount: MoneyInput = 0
) -> Decimal:
    """
    How much of a payment can still be refunded.

    Raises:
        InvalidArgument: If refunded_amount exceeds payment_amount
    """
    payment = parse_money_input(payment_amount, "payment amount")
    refunded = parse_money_input(refunded_amount, "refunded amount")
    _require_non_negative(payment, payment_amount, "payment amount")
    _require_non_negative(refunded, refunded_amount, "refunded amount")
    if refunded > payment:
        raise InvalidArgument(
            f"Refunded amount ({refunded_amount}) cannot exceed payment amount ({payment_amount})"
        )
    return subtract(payment, refunded)


def calculate_order_revenue(
    sales_order_amount: MoneyInput,
    total_job_order_amount: MoneyInput,
    vendor_charges: MoneyInput = 0,
) -> Decimal:
    """
    Revenue of one sales order.

    revenue = sales_order_amount - total_job_order_amount + vendor_charges

    Signed: a job-order cost above the sales amount yields negative revenue.
    """
    sales = parse_money_input(sales_order_amount, "sales order amount")
    job_orders = parse_money_input(total_job_order_amount, "job order amount")
    vendor = parse_money_input(vendor_charges, "vendor charges")
    _require_non_negative(sales, sales_order_amount, "sales order amount")
    _require_non_negative(job_orders, total_job_order_amount, "job order amount")
    return to_money(subtract(sales, job_orders) + vendor)


# =============================================================================
# QUOTE ACCURACY
# =============================================================================


def calculate_price_difference_percentage(
    original_price: MoneyInput, new_price: MoneyInput
) -> Decimal:
    """
    Signed percent change from original_price to new_price, 2 decimals.

    Raises:
        InvalidArgument: If original_price <= 0

    Examples:
        >>> calculate_price_difference_percentage(100, 90)
        Decimal('-10.00')
    """
    original = parse_money_input(original_price, "original price")
    new = parse_money_input(new_price, "new price")
    if original <= 0:
        raise InvalidArgument(
            f"Invalid original price: {original_price}. Original price must be > 0."
        )
    return to_money((new - original) / original * _HUNDRED)


def calculate_accuracy_rating(original_price: MoneyInput, actual_price: MoneyInput) -> Decimal:
    """
    Quote estimation accuracy in [0, 100]; 100 is a perfect match.

    Examples:
        >>> calculate_accuracy_rating(100, 90)
        Decimal('90.00')
    """
    difference = abs(calculate_price_difference_percentage(original_price, actual_price))
    return to_money(max(_ZERO, _HUNDRED - difference))
