"""
Money limits — single source of numeric ceilings

The price layer, the product/order aggregation layer and the tax layer all
read their ceilings from here. Do not redeclare these values in other modules.

Units:
- *_PRICE, *_RATE: US dollars
- *_CENTS: integer cents
- *_QUANTITY: dimensionless count
- *_TAX_RATE: percent (0-100)

MAX_PRICE ($1e9) bounds a single price value passed through round_price,
while MAX_CENTS / MAX_AMOUNT_CENTS (1e12 cents = $1e10) bound line-item and
order totals, which may legitimately exceed a single price.
"""

from typing import Final

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# CEILINGS
# =============================================================================

# Largest legal single price, dollars
MAX_PRICE: Final[int] = 1_000_000_000

# Largest amount dollars_to_cents may produce
MAX_CENTS: Final[int] = 1_000_000_000_000

# Line-item ceilings
MAX_QUANTITY: Final[int] = 1_000_000
MAX_RATE: Final[int] = 1_000_000

# Largest line-item amount or order total, cents
MAX_AMOUNT_CENTS: Final[int] = 1_000_000_000_000

# Tax
MAX_TAX_RATE: Final[int] = 100
MAX_TAX_AMOUNT_CENTS: Final[int] = 1_000_000_000_000


# =============================================================================
# OTHER CONSTANTS
# =============================================================================

CENTS_PER_DOLLAR: Final[int] = 100

# Money values are quantized to this many fractional digits
MONEY_DECIMALS: Final[int] = 2

# Client-submitted line amounts may differ from the server amount by this much
PRICE_DISCREPANCY_TOLERANCE: Final[float] = 0.01

# Invoice payment links expire this many hours after creation
INVOICE_EXPIRATION_HOURS: Final[int] = 24


# =============================================================================
# LIMITS BUNDLE
# =============================================================================


class MoneyLimits(BaseModel):
    """
    Ceilings shared by the price, aggregation and tax layers.

    Immutable. Functions that enforce ceilings take an optional ``limits``
    keyword and default to DEFAULT_LIMITS, so a caller can tighten them (e.g.
    in tests) without touching module constants.
    """

    max_price: int = Field(MAX_PRICE, gt=0, description="Single price ceiling, dollars")
    max_cents: int = Field(MAX_CENTS, gt=0, description="dollars_to_cents ceiling, cents")
    max_quantity: int = Field(MAX_QUANTITY, gt=0, description="Line-item quantity ceiling")
    max_rate: int = Field(MAX_RATE, gt=0, description="Line-item rate ceiling, dollars")
    max_amount_cents: int = Field(
        MAX_AMOUNT_CENTS, gt=0, description="Line amount / order total ceiling, cents"
    )
    max_tax_rate: int = Field(MAX_TAX_RATE, gt=0, le=100, description="Tax rate ceiling, percent")
    max_tax_amount_cents: int = Field(
        MAX_TAX_AMOUNT_CENTS, gt=0, description="Tax amount ceiling, cents"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_consistency(self) -> "MoneyLimits":
        """
        Aggregate ceilings must fit through dollars_to_cents.

        Every line amount is produced by dollars_to_cents, so a
        max_amount_cents above max_cents could never be reached and signals a
        unit mix-up.
        """
        if self.max_amount_cents > self.max_cents:
            raise ValueError(
                f"max_amount_cents ({self.max_amount_cents}) exceeds "
                f"max_cents ({self.max_cents})"
            )
        if self.max_tax_amount_cents > self.max_cents:
            raise ValueError(
                f"max_tax_amount_cents ({self.max_tax_amount_cents}) exceeds "
                f"max_cents ({self.max_cents})"
            )
        return self

    @property
    def max_price_cents(self) -> int:
        """max_price expressed in cents."""
        return self.max_price * CENTS_PER_DOLLAR


DEFAULT_LIMITS: Final[MoneyLimits] = MoneyLimits()
