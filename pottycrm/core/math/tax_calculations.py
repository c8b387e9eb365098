"""
Tax Calculations — sales tax on order subtotals

Tax is computed on the integer-cents subtotal and rounded half-up to whole
cents, so subtotal + tax == total holds exactly.
"""

from decimal import Decimal
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field

from pottycrm.core.errors import InvalidArgument
from pottycrm.core.limits import DEFAULT_LIMITS, MoneyLimits
from pottycrm.core.math.numeric_calculations import quantize_half_away
from pottycrm.core.math.price_calculations import (
    MoneyInput,
    cents_to_dollars,
    parse_money_input,
)
from pottycrm.core.math.product_amounts import calculate_order_total_cents


# =============================================================================
# RESULTS
# =============================================================================


class OrderTotalsCents(BaseModel):
    """Order subtotal, tax and total in integer cents."""

    subtotal_cents: int = Field(..., ge=0)
    tax_amount_cents: int = Field(..., ge=0)
    total_cents: int = Field(..., ge=0)

    model_config = {"frozen": True}


class OrderTotals(BaseModel):
    """Order subtotal, tax and total as two-decimal strings (for templates)."""

    subtotal: str
    tax_amount: str
    total: str
    tax_rate: float = Field(..., ge=0, description="Tax rate, percent")

    model_config = {"frozen": True}


# =============================================================================
# TAX AMOUNT
# =============================================================================


def _parse_tax_rate(tax_rate: MoneyInput, limits: MoneyLimits) -> Decimal:
    rate = parse_money_input(tax_rate, "tax rate")
    if rate < 0:
        raise InvalidArgument(f"Invalid tax rate: {tax_rate}. Tax rate must be >= 0.")
    if rate > limits.max_tax_rate:
        raise InvalidArgument(
            f"Tax rate {tax_rate}% exceeds maximum allowed ({limits.max_tax_rate}%)"
        )
    return rate


def calculate_tax_amount_cents(
    subtotal_cents: int,
    tax_rate: MoneyInput,
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> int:
    """
    Tax on a subtotal, in integer cents.

    Args:
        subtotal_cents: Subtotal in cents (>= 0)
        tax_rate: Percent, e.g. 8.5 for 8.5%
        limits: Ceilings (default: DEFAULT_LIMITS)

    Raises:
        InvalidArgument: If the rate is invalid or above max_tax_rate, the
            subtotal is negative/non-finite, or the tax exceeds max_tax_amount_cents

    Examples:
        >>> calculate_tax_amount_cents(24000, 8.5)
        2040
    """
    rate = _parse_tax_rate(tax_rate, limits)

    if isinstance(subtotal_cents, bool):
        raise InvalidArgument(
            f"Invalid subtotal: {subtotal_cents}. Subtotal must be a valid non-negative number."
        )
    subtotal = parse_money_input(subtotal_cents, "subtotal")
    if subtotal < 0:
        raise InvalidArgument(
            f"Invalid subtotal: {subtotal_cents}. Subtotal must be a valid non-negative number."
        )

    tax_cents = int(quantize_half_away(subtotal * rate / 100, 0))
    if tax_cents > limits.max_tax_amount_cents:
        raise InvalidArgument(
            f"Calculated tax amount ({tax_cents} cents) exceeds maximum allowed "
            f"({limits.max_tax_amount_cents} cents)"
        )
    return tax_cents


def calculate_tax_amount(
    subtotal_cents: int,
    tax_rate: MoneyInput,
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> str:
    """Tax on a subtotal as a two-decimal string ("15.60")."""
    return cents_to_dollars(calculate_tax_amount_cents(subtotal_cents, tax_rate, limits=limits))


# =============================================================================
# ORDER TOTALS WITH TAX
# =============================================================================


def _effective_tax_rate(tax_rate: Optional[MoneyInput], limits: MoneyLimits) -> Decimal:
    # Missing, empty and zero rates all mean "no tax"
    if tax_rate is None or tax_rate == "":
        return Decimal(0)
    return _parse_tax_rate(tax_rate, limits)


def calculate_order_totals_with_tax_cents(
    products: Optional[Iterable[Any]],
    tax_rate: Optional[MoneyInput] = None,
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> OrderTotalsCents:
    """
    Subtotal, tax and total of an order, in cents.

    Examples:
        >>> calculate_order_totals_with_tax_cents([{"quantity": 3, "rate": 65}], 10)
        OrderTotalsCents(subtotal_cents=19500, tax_amount_cents=1950, total_cents=21450)
    """
    subtotal_cents = calculate_order_total_cents(products, limits=limits)
    rate = _effective_tax_rate(tax_rate, limits)
    tax_amount_cents = (
        calculate_tax_amount_cents(subtotal_cents, rate, limits=limits) if rate > 0 else 0
    )
    return OrderTotalsCents(
        subtotal_cents=subtotal_cents,
        tax_amount_cents=tax_amount_cents,
        total_cents=subtotal_cents + tax_amount_cents,
    )


def calculate_order_totals_with_tax(
    products: Optional[Iterable[Any]],
    tax_rate: Optional[MoneyInput] = None,
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> OrderTotals:
    """
    Subtotal, tax and total of an order as display strings.
    """
    totals = calculate_order_totals_with_tax_cents(products, tax_rate, limits=limits)
    return OrderTotals(
        subtotal=cents_to_dollars(totals.subtotal_cents),
        tax_amount=cents_to_dollars(totals.tax_amount_cents),
        total=cents_to_dollars(totals.total_cents),
        tax_rate=float(_effective_tax_rate(tax_rate, limits)),
    )
