"""
Orders — sales order / job order shapes consumed by revenue reporting

Only the fields the revenue calculation reads are modelled; persistence
documents carry many more.

A sales order is what the customer pays; a job order is what the vendor
servicing the units is paid, billed per cycle (units x rate per cycle).
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Final, Optional

from pydantic import BaseModel, Field

from pottycrm.core.domain.line_item import RawNumber


# =============================================================================
# STATUSES
# =============================================================================

PAYMENT_STATUS_PAID: Final[str] = "Paid"
EMAIL_STATUS_SENT: Final[str] = "Sent"


class VendorChargesMode(str, Enum):
    """How vendor transaction charges are expressed"""

    PERCENTAGE = "percentage"
    DOLLAR = "dollar"


# =============================================================================
# JOB ORDERS
# =============================================================================


class BillingUnit(BaseModel):
    """One unit line of a billing cycle. quantity/rate may be missing in legacy data."""

    item: Optional[str] = None
    quantity: Optional[RawNumber] = None
    rate: Optional[RawNumber] = None

    model_config = {"extra": "allow"}


class BillingCycle(BaseModel):
    """A billing period of a job order."""

    cycle_start_date: Optional[datetime] = None
    cycle_end_date: Optional[datetime] = None
    units: list[BillingUnit] = Field(default_factory=list)

    model_config = {"extra": "allow"}


class JobOrder(BaseModel):
    """Vendor-facing order attached to a sales order."""

    id: str = Field(..., min_length=1)
    job_order_no: Optional[str] = None
    sales_order_id: Optional[str] = Field(None, description="Owning sales order id")
    email_status: str = "Pending"
    created_at: Optional[datetime] = None
    billing_cycles: list[BillingCycle] = Field(default_factory=list)

    model_config = {"extra": "allow"}

    @property
    def is_sent(self) -> bool:
        return self.email_status == EMAIL_STATUS_SENT


# =============================================================================
# SALES ORDERS
# =============================================================================


class SalesOrder(BaseModel):
    """Customer-facing order."""

    id: str = Field(..., min_length=1)
    sales_order_no: Optional[str] = None
    payment_status: str = "Unpaid"
    order_total: Optional[RawNumber] = Field(None, description="Order total, dollars")
    created_at: Optional[datetime] = None

    model_config = {"extra": "allow"}

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAYMENT_STATUS_PAID


# =============================================================================
# EXPENSES
# =============================================================================


class AdsSpending(BaseModel):
    """Marketing spend and other expenses for a reporting period, dollars."""

    google_ads: RawNumber = 0
    facebook_ads: RawNumber = 0
    instagram_ads: RawNumber = 0
    linkedin_ads: RawNumber = 0
    others: RawNumber = 0

    model_config = {"frozen": True}

    def amounts(self) -> list[RawNumber]:
        return [
            self.google_ads,
            self.facebook_ads,
            self.instagram_ads,
            self.linkedin_ads,
            self.others,
        ]


# =============================================================================
# REPORT
# =============================================================================


class SalesOrderRevenue(BaseModel):
    """Revenue breakdown of one sales order."""

    sales_order_id: str
    sales_order_no: Optional[str]
    sales_order_amount: Decimal
    job_order_amount: Decimal
    vendor_charges: Decimal
    revenue: Decimal

    model_config = {"frozen": True}


class RevenueReport(BaseModel):
    """Revenue over a reporting period."""

    total_revenue: Decimal
    sales_order_count: int = Field(..., ge=0)
    job_order_count: int = Field(..., ge=0)
    sales_order_revenues: list[SalesOrderRevenue]
    ads_total: Decimal
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    model_config = {"frozen": True}
