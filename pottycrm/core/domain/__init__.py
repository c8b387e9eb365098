"""
Domain models and value shapes.

Line items, sales/job orders and revenue report models. Nothing here is
persisted; these are the shapes passed across the calculation boundary.
"""

from pottycrm.core.domain.line_item import LineItem, RawNumber
from pottycrm.core.domain.orders import (
    EMAIL_STATUS_SENT,
    PAYMENT_STATUS_PAID,
    AdsSpending,
    BillingCycle,
    BillingUnit,
    JobOrder,
    RevenueReport,
    SalesOrder,
    SalesOrderRevenue,
    VendorChargesMode,
)

__all__ = [
    # Line items
    "LineItem",
    "RawNumber",
    # Orders
    "EMAIL_STATUS_SENT",
    "PAYMENT_STATUS_PAID",
    "BillingCycle",
    "BillingUnit",
    "JobOrder",
    "SalesOrder",
    "VendorChargesMode",
    # Revenue
    "AdsSpending",
    "RevenueReport",
    "SalesOrderRevenue",
]
