"""
Product Amounts — line-item amounts and order totals

Line items are turned into amounts in the integer-cents domain; dollar
strings only appear at the boundary (templates, emails). Use the *_cents
variants for payment-provider APIs that expect minor units.

Summing cents instead of rounded dollar strings means the order total is
always exactly the sum of its line amounts.

Line-item ceilings (quantity, rate) are separate from the generic price
ceiling and come from pottycrm.core.limits.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pottycrm.core.errors import InvalidArgument
from pottycrm.core.limits import DEFAULT_LIMITS, MoneyLimits
from pottycrm.core.math.price_calculations import (
    MoneyInput,
    add,
    cents_to_dollars,
    dollars_to_cents,
    parse_money_input,
)


# =============================================================================
# LINE ITEMS
# =============================================================================


def calculate_product_amount_cents(
    quantity: MoneyInput,
    rate: MoneyInput,
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> int:
    """
    Line amount (quantity * rate) in integer cents.

    Args:
        quantity: Quantity, 0 <= quantity <= max_quantity (number or numeric string)
        rate: Rate in dollars, 0 <= rate <= max_rate (number or numeric string)
        limits: Ceilings (default: DEFAULT_LIMITS)

    Returns:
        Amount in cents

    Raises:
        InvalidArgument: If quantity/rate are invalid or out of range, or the
            amount exceeds max_amount_cents

    Examples:
        >>> calculate_product_amount_cents(3, 65)
        19500
        >>> calculate_product_amount_cents("2.5", "19.99")
        4998
    """
    qty = parse_money_input(quantity, "quantity")
    if qty < 0:
        raise InvalidArgument(f"Invalid quantity: {quantity}. Quantity must be >= 0.")
    if qty > limits.max_quantity:
        raise InvalidArgument(
            f"Quantity {quantity} exceeds maximum allowed ({limits.max_quantity})"
        )

    product_rate = parse_money_input(rate, "rate")
    if product_rate < 0:
        raise InvalidArgument(f"Invalid rate: {rate}. Rate must be >= 0.")
    if product_rate > limits.max_rate:
        raise InvalidArgument(f"Rate {rate} exceeds maximum allowed ({limits.max_rate})")

    amount_cents = dollars_to_cents(qty * product_rate, limits=limits)
    if amount_cents > limits.max_amount_cents:
        raise InvalidArgument(
            f"Calculated amount exceeds maximum allowed ({limits.max_amount_cents} cents). "
            f"quantity: {quantity}, rate: {rate}"
        )
    return amount_cents


def calculate_product_amount(
    quantity: MoneyInput,
    rate: MoneyInput,
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> str:
    """
    Line amount as a two-decimal string.

    Examples:
        >>> calculate_product_amount(3, 65)
        '195.00'
    """
    return cents_to_dollars(calculate_product_amount_cents(quantity, rate, limits=limits))


# =============================================================================
# ORDERS
# =============================================================================


def _get_field(product: Any, name: str) -> Any:
    if isinstance(product, Mapping):
        return product.get(name)
    return getattr(product, name, None)


def _describe(product: Any) -> str:
    if hasattr(product, "model_dump"):
        product = product.model_dump(by_alias=True)
    try:
        return json.dumps(product, default=str, sort_keys=True)
    except (TypeError, ValueError):
        return repr(product)


def calculate_order_total_cents(
    products: Optional[Iterable[Any]],
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> int:
    """
    Order total in integer cents.

    Args:
        products: Line items. Each item is a mapping or an object exposing
            ``quantity`` and ``rate``; other fields are ignored. None or an
            empty sequence is a valid, zero-total order.
        limits: Ceilings (default: DEFAULT_LIMITS)

    Returns:
        Sum of calculate_product_amount_cents over the items

    Raises:
        InvalidArgument: If an item lacks quantity/rate (message names the
            index and the item payload), an item is invalid, or the total
            exceeds max_amount_cents

    Examples:
        >>> calculate_order_total_cents([{"quantity": 3, "rate": 65}, {"quantity": 1, "rate": 45}])
        24000
        >>> calculate_order_total_cents([])
        0
    """
    if products is None:
        return 0
    if isinstance(products, (str, bytes, Mapping)) or not isinstance(products, Iterable):
        raise InvalidArgument(
            f"Invalid products: {products!r}. Products must be a sequence of line items."
        )

    total_cents = 0
    for index, product in enumerate(products):
        quantity = _get_field(product, "quantity")
        rate = _get_field(product, "rate")

        if quantity is None:
            raise InvalidArgument(
                f"Product at index {index} is missing 'quantity' field. "
                f"Product: {_describe(product)}"
            )
        if rate is None:
            raise InvalidArgument(
                f"Product at index {index} is missing 'rate' field. "
                f"Product: {_describe(product)}"
            )

        item_cents = calculate_product_amount_cents(quantity, rate, limits=limits)
        total_cents = int(add(total_cents, item_cents))

    if total_cents > limits.max_amount_cents:
        raise InvalidArgument(
            f"Order total ({total_cents} cents) exceeds maximum allowed "
            f"({limits.max_amount_cents} cents)"
        )
    return total_cents


def calculate_order_total(
    products: Optional[Iterable[Any]],
    *,
    limits: MoneyLimits = DEFAULT_LIMITS,
) -> str:
    """
    Order total as a two-decimal string.

    Examples:
        >>> calculate_order_total([{"quantity": 3, "rate": 65}, {"quantity": 1, "rate": 45}])
        '240.00'
        >>> calculate_order_total([])
        '0.00'
    """
    return cents_to_dollars(calculate_order_total_cents(products, limits=limits))
