"""
LineItem — one product line of a quote, sales order or job order

Carries quantity and rate as the client sent them (number or numeric
string) plus arbitrary passthrough fields. Range checks happen in the
aggregation layer, not here, so a payload can be inspected before it is
priced.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from pottycrm.core.math.product_amounts import (
    calculate_product_amount,
    calculate_product_amount_cents,
)

RawNumber = Union[int, float, Decimal, str]


class LineItem(BaseModel):
    """
    Line item of an order.

    Unknown fields are kept (extra="allow") and round-trip through
    model_dump().
    """

    item: Optional[str] = Field(None, description="Product name (e.g. 'Standard Unit')")
    quantity: Optional[RawNumber] = Field(None, description="Quantity, number or numeric string")
    rate: Optional[RawNumber] = Field(None, description="Rate in dollars, number or numeric string")
    amount: Optional[RawNumber] = Field(None, description="Client-computed line amount")
    usage_type: str = Field("", alias="usageType", description="Usage type (e.g. 'Event')")

    model_config = {"extra": "allow", "populate_by_name": True}

    @field_validator("quantity", "rate", "amount", mode="before")
    @classmethod
    def reject_booleans(cls, v: object) -> object:
        if isinstance(v, bool):
            raise ValueError("must be a number or numeric string, not a boolean")
        return v

    def amount_cents(self) -> int:
        """Server-side line amount in cents."""
        return calculate_product_amount_cents(self.quantity, self.rate)

    def amount_display(self) -> str:
        """Server-side line amount as a two-decimal string."""
        return calculate_product_amount(self.quantity, self.rate)
