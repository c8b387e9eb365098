"""
Revenue reporting over sales orders and job orders

A sales order counts toward revenue when:
1. its payment status is "Paid",
2. it falls inside the reporting window (when one is given), and
3. at least one of its job orders has been sent to the vendor.

Per counted sales order:
    job_order_amount = sum over sent job orders, billing cycles, units of quantity x rate
    vendor_charges   = percentage of the order total, or a flat dollar amount
    revenue          = order_total - job_order_amount + vendor_charges

total_revenue = sum of per-order revenue + ads/other spending total.

Records with missing data (order without a total, unit without quantity or
rate) are skipped and logged; they never abort the report.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, time, timezone
from decimal import Decimal
from typing import Iterable, Optional

from pottycrm.core.domain.line_item import RawNumber
from pottycrm.core.domain.orders import (
    AdsSpending,
    JobOrder,
    RevenueReport,
    SalesOrder,
    SalesOrderRevenue,
    VendorChargesMode,
)
from pottycrm.core.math.price_calculations import (
    add,
    calculate_order_revenue,
    calculate_percentage,
    parse_money_input,
    to_money,
)
from pottycrm.core.math.product_amounts import calculate_product_amount_cents

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class RevenueConfig:
    """Vendor transaction charge settings."""

    vendor_transaction_charges: RawNumber = 0
    vendor_transaction_charges_mode: VendorChargesMode = VendorChargesMode.PERCENTAGE


# =============================================================================
# HELPERS
# =============================================================================


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def day_window(start_date: datetime, end_date: datetime) -> tuple[datetime, datetime]:
    """
    Expand a date range to whole days: start 00:00:00.000, end 23:59:59.999.
    """
    start = _as_utc(datetime.combine(start_date.date(), time.min, tzinfo=start_date.tzinfo))
    end = _as_utc(
        datetime.combine(end_date.date(), time(23, 59, 59, 999000), tzinfo=end_date.tzinfo)
    )
    return start, end


def _in_window(
    created_at: Optional[datetime], start: Optional[datetime], end: Optional[datetime]
) -> bool:
    if start is None or end is None:
        return True
    if created_at is None:
        return False
    return start <= _as_utc(created_at) <= end


def job_order_amount_cents(job_order: JobOrder) -> int:
    """
    Total of a job order over all billing cycles, in cents.

    Units with a missing quantity or rate are skipped (and logged).
    """
    total_cents = 0
    for cycle in job_order.billing_cycles:
        for unit in cycle.units:
            if unit.quantity is None or unit.rate is None:
                logger.error(
                    "Job order %s has unit with missing quantity or rate; skipping unit: %s",
                    job_order.id,
                    unit.model_dump(),
                )
                continue
            total_cents += calculate_product_amount_cents(unit.quantity, unit.rate)
    return total_cents


def ads_total(ads: AdsSpending | None) -> Decimal:
    """Sum of ads and other spending."""
    total = Decimal("0.00")
    if ads is None:
        return total
    for amount in ads.amounts():
        total = add(total, amount or 0)
    return total


# =============================================================================
# CALCULATOR
# =============================================================================


class RevenueCalculator:
    """
    Revenue report over already-loaded sales orders and job orders.
    """

    def __init__(self, config: RevenueConfig | None = None):
        self.config = config or RevenueConfig()

    def vendor_charges(self, sales_order_amount: RawNumber) -> Decimal:
        """Vendor transaction charges for one sales order."""
        value = self.config.vendor_transaction_charges
        if value is None:
            value = 0
        if self.config.vendor_transaction_charges_mode == VendorChargesMode.PERCENTAGE:
            return calculate_percentage(sales_order_amount, value)
        return to_money(parse_money_input(value, "vendor charges"))

    def calculate(
        self,
        sales_orders: Iterable[SalesOrder],
        job_orders: Iterable[JobOrder],
        ads: AdsSpending | None = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> RevenueReport:
        """
        Build the revenue report.

        Args:
            sales_orders: Candidate sales orders (unpaid ones are ignored)
            job_orders: Candidate job orders (unsent ones are ignored)
            ads: Ads and other spending for the period
            start_date: Window start (whole day, inclusive); both or neither
            end_date: Window end (whole day, inclusive)

        Returns:
            RevenueReport
        """
        start: Optional[datetime] = None
        end: Optional[datetime] = None
        if start_date is not None and end_date is not None:
            start, end = day_window(start_date, end_date)

        paid_orders = [
            order
            for order in sales_orders
            if order.is_paid and _in_window(order.created_at, start, end)
        ]
        sent_job_orders = [
            job
            for job in job_orders
            if job.is_sent and _in_window(job.created_at, start, end)
        ]

        jobs_by_sales_order: dict[str, list[JobOrder]] = defaultdict(list)
        for job in sent_job_orders:
            if job.sales_order_id:
                jobs_by_sales_order[job.sales_order_id].append(job)

        total_revenue = Decimal("0.00")
        revenues: list[SalesOrderRevenue] = []

        for order in paid_orders:
            associated = jobs_by_sales_order.get(order.id, [])
            if not associated:
                continue

            if order.order_total is None:
                logger.error(
                    "Sales order %s has no order total; skipping revenue calculation",
                    order.id,
                )
                continue

            sales_amount = to_money(parse_money_input(order.order_total, "order total"))
            job_cents = sum(job_order_amount_cents(job) for job in associated)
            job_amount = to_money(Decimal(job_cents) / 100)
            vendor = self.vendor_charges(sales_amount)

            revenue = calculate_order_revenue(sales_amount, job_amount, vendor)
            total_revenue = to_money(total_revenue + revenue)

            revenues.append(
                SalesOrderRevenue(
                    sales_order_id=order.id,
                    sales_order_no=order.sales_order_no,
                    sales_order_amount=sales_amount,
                    job_order_amount=job_amount,
                    vendor_charges=vendor,
                    revenue=revenue,
                )
            )

        spending = ads_total(ads)
        total_revenue = to_money(total_revenue + spending)

        logger.info(
            "Revenue calculated: %d sales orders, %d job orders, total %s",
            len(revenues),
            len(sent_job_orders),
            total_revenue,
        )

        return RevenueReport(
            total_revenue=total_revenue,
            sales_order_count=len(revenues),
            job_order_count=len(sent_job_orders),
            sales_order_revenues=revenues,
            ads_total=spending,
            start=start,
            end=end,
        )
