"""
Product amount validation — server-side recalculation of line amounts

The client sends line items with its own computed `amount`. Before an order
is stored, every amount is recomputed from quantity x rate; the server value
always wins. Client values that differ by more than the tolerance are
reported as discrepancies (and logged for audit).

Order of operations:
0. Check the payload against the products_payload contract
1. Normalize quantity / rate / client amount (missing or blank -> 0)
2. Recompute the amount through calculate_product_amount
3. Compare rounded server and client amounts
4. Replace the item amount with the server amount
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from jsonschema import ValidationError

from pottycrm.core.contracts import validate_products_payload
from pottycrm.core.domain.line_item import LineItem
from pottycrm.core.errors import InvalidArgument
from pottycrm.core.limits import PRICE_DISCREPANCY_TOLERANCE
from pottycrm.core.math.price_calculations import (
    MoneyInput,
    cents_to_dollars,
    parse_money_input,
    round_price,
)
from pottycrm.core.math.product_amounts import calculate_product_amount_cents

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ProductDiscrepancy:
    """Client amount that disagrees with the server amount."""

    index: int
    item: str
    quantity: Decimal
    rate: Decimal
    frontend_amount: Decimal
    server_amount: Decimal
    difference: Decimal


@dataclass(frozen=True)
class ProductValidationResult:
    """Result of validating a products payload."""

    products: tuple[LineItem, ...]
    discrepancies: tuple[ProductDiscrepancy, ...]
    product_count: int
    total_amount: str  # "N.NN", sum of server amounts

    @property
    def has_discrepancy(self) -> bool:
        return len(self.discrepancies) > 0


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ProductValidationConfig:
    """Configuration of the product amount validator."""

    # Allowed |server - client| in dollars before an item counts as a discrepancy
    tolerance: Decimal = field(default_factory=lambda: Decimal(str(PRICE_DISCREPANCY_TOLERANCE)))


# =============================================================================
# VALIDATOR
# =============================================================================


def _normalize(value: Optional[MoneyInput], name: str) -> Decimal:
    # Missing and blank values count as zero, like an empty form field
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal(0)
    return parse_money_input(value, name)


def _as_mapping(product: Any, index: int) -> dict[str, Any]:
    if isinstance(product, LineItem):
        return product.model_dump(by_alias=True)
    if isinstance(product, Mapping):
        return dict(product)
    raise InvalidArgument(
        f"Product at index {index} must be a mapping or LineItem, "
        f"got {type(product).__name__}: {product!r}"
    )


def _check_contract(items: list[dict[str, Any]]) -> None:
    try:
        validate_products_payload({"products": items})
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "payload"
        raise InvalidArgument(f"Invalid products payload at {location}: {e.message}") from e


class ProductAmountValidator:
    """
    Recomputes line amounts and reports client/server disagreements.

    Raises InvalidArgument for payloads that cannot be priced at all:
    non-mapping items, contract violations (malformed numbers), negative
    values and ceilings.
    """

    def __init__(self, config: ProductValidationConfig | None = None):
        self.config = config or ProductValidationConfig()

    def evaluate(self, products: Optional[Iterable[Any]]) -> ProductValidationResult:
        """
        Validate and recalculate a list of line items.

        Args:
            products: Line items as mappings or LineItem models (None/empty allowed)

        Returns:
            ProductValidationResult with server-priced LineItems
        """
        validated: list[LineItem] = []
        discrepancies: list[ProductDiscrepancy] = []
        total_cents = 0

        if products is None:
            products = []
        if isinstance(products, (str, bytes, Mapping)) or not isinstance(products, Iterable):
            raise InvalidArgument(
                f"Invalid products: {products!r}. Products must be a sequence of line items."
            )

        items = [_as_mapping(product, index) for index, product in enumerate(products)]
        _check_contract(items)

        for index, data in enumerate(items):
            quantity = _normalize(data.get("quantity"), "quantity")
            rate = _normalize(data.get("rate"), "rate")
            frontend_amount = round_price(_normalize(data.get("amount"), "amount"))

            server_cents = calculate_product_amount_cents(quantity, rate)
            server_amount = round_price(cents_to_dollars(server_cents))
            total_cents += server_cents

            difference = abs(server_amount - frontend_amount)
            if difference > self.config.tolerance:
                discrepancies.append(
                    ProductDiscrepancy(
                        index=index,
                        item=str(data.get("item") or ""),
                        quantity=quantity,
                        rate=rate,
                        frontend_amount=frontend_amount,
                        server_amount=server_amount,
                        difference=difference,
                    )
                )

            validated.append(
                LineItem.model_validate(
                    {
                        **data,
                        "quantity": quantity,
                        "rate": rate,
                        "amount": server_amount,
                        "usageType": data.get("usageType") or "",
                    }
                )
            )

        if discrepancies:
            logger.warning(
                "Product amount discrepancies detected: %d of %d items (indexes %s)",
                len(discrepancies),
                len(validated),
                [d.index for d in discrepancies],
            )

        return ProductValidationResult(
            products=tuple(validated),
            discrepancies=tuple(discrepancies),
            product_count=len(validated),
            total_amount=cents_to_dollars(total_cents),
        )


def validate_and_recalculate_products(
    products: Optional[Iterable[Any]],
) -> ProductValidationResult:
    """Convenience wrapper with the default configuration."""
    return ProductAmountValidator().evaluate(products)
