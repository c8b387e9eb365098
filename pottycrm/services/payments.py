"""
Payment provider payloads

Payment providers expect integer minor units (cents). Amounts headed for a
provider are produced here, from either an order's cents total (preferred,
exact) or a dollar amount, and the resulting payload is checked against the
payment_link_request contract before it leaves the process.
"""

import logging
from typing import Any, Mapping, Optional

from pottycrm.core.contracts import validate_payment_link_request
from pottycrm.core.errors import InvalidArgument
from pottycrm.core.math.price_calculations import MoneyInput, cents_to_dollars, dollars_to_cents
from pottycrm.core.math.product_amounts import calculate_order_total_cents

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "usd"
DEFAULT_PRODUCT_NAME = "Invoice Payment"


def amount_to_cents(amount: MoneyInput) -> int:
    """
    Dollar amount (number or string such as "195.00") to provider cents.

    Raises:
        InvalidArgument: If the amount is invalid or negative
    """
    return dollars_to_cents(amount)


def cents_to_amount(cents: int) -> str:
    """Provider cents back to a display string."""
    return cents_to_dollars(cents)


def build_payment_link_request(
    *,
    amount: Optional[MoneyInput] = None,
    amount_cents: Optional[int] = None,
    description: Optional[str] = None,
    currency: str = DEFAULT_CURRENCY,
    customer_email: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """
    Build an invoice payment link payload (single line item, quantity 1).

    Exactly one of ``amount`` (dollars) or ``amount_cents`` must be given.

    Raises:
        InvalidArgument: If both/neither amount is given or the amount is invalid
        jsonschema.ValidationError: If the payload violates the contract
            (e.g. zero amount, unsupported currency)
    """
    if (amount is None) == (amount_cents is None):
        raise InvalidArgument("Exactly one of amount or amount_cents must be provided")

    if amount_cents is None:
        unit_amount = amount_to_cents(amount)
    else:
        if isinstance(amount_cents, bool) or not isinstance(amount_cents, int):
            raise InvalidArgument(
                f"Invalid amount_cents: {amount_cents!r}. amount_cents must be an integer."
            )
        unit_amount = amount_cents

    payload: dict[str, Any] = {
        "currency": currency,
        "unit_amount": unit_amount,
        "quantity": 1,
        "product_name": description or DEFAULT_PRODUCT_NAME,
    }
    if customer_email:
        payload["customer_email"] = customer_email
    if metadata:
        payload["metadata"] = {str(k): str(v) for k, v in metadata.items()}

    validate_payment_link_request(payload)
    logger.debug(
        "Payment link payload built: %s %s", cents_to_dollars(unit_amount), currency
    )
    return payload


def build_order_payment_link_request(
    products: Any,
    *,
    description: Optional[str] = None,
    customer_email: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """
    Payment link payload for an order, priced from its line items in cents.
    """
    return build_payment_link_request(
        amount_cents=calculate_order_total_cents(products),
        description=description,
        customer_email=customer_email,
        metadata=metadata,
    )
