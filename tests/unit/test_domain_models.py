"""
Tests for domain models (line items, orders, revenue report shapes)
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pottycrm.core.domain import (
    AdsSpending,
    BillingCycle,
    BillingUnit,
    JobOrder,
    LineItem,
    RevenueReport,
    SalesOrder,
    VendorChargesMode,
)
from pottycrm.core.errors import InvalidArgument

# =============================================================================
# LINE ITEM
# =============================================================================


class TestLineItem:
    """Tests for LineItem"""

    def test_raw_values_preserved(self) -> None:
        item = LineItem(item="Standard Unit", quantity="3", rate=65)
        assert item.quantity == "3"
        assert item.rate == 65

    def test_usage_type_alias(self) -> None:
        assert LineItem(usageType="Event").usage_type == "Event"
        assert LineItem(usage_type="Construction").usage_type == "Construction"
        dumped = LineItem(usage_type="Event").model_dump(by_alias=True)
        assert dumped["usageType"] == "Event"

    def test_extra_fields_kept(self) -> None:
        item = LineItem.model_validate({"quantity": 1, "rate": 2, "notes": "gate code 1234"})
        assert item.model_dump()["notes"] == "gate code 1234"

    def test_booleans_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LineItem(quantity=True, rate=10)

    def test_amounts(self) -> None:
        item = LineItem(quantity=3, rate="65")
        assert item.amount_cents() == 19500
        assert item.amount_display() == "195.00"

    def test_amount_without_rate_raises(self) -> None:
        with pytest.raises(InvalidArgument):
            LineItem(quantity=3).amount_cents()


# =============================================================================
# ORDERS
# =============================================================================


class TestOrders:
    """Tests for SalesOrder / JobOrder"""

    def test_sales_order_paid(self) -> None:
        assert SalesOrder(id="so-1", payment_status="Paid").is_paid
        assert not SalesOrder(id="so-1").is_paid
        assert not SalesOrder(id="so-1", payment_status="paid").is_paid

    def test_job_order_sent(self) -> None:
        assert JobOrder(id="jo-1", email_status="Sent").is_sent
        assert not JobOrder(id="jo-1").is_sent

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SalesOrder(id="")

    def test_job_order_from_document(self) -> None:
        job = JobOrder.model_validate(
            {
                "id": "jo-1",
                "sales_order_id": "so-1",
                "email_status": "Sent",
                "created_at": "2025-03-01T12:00:00Z",
                "billing_cycles": [
                    {"units": [{"item": "Unit", "quantity": 2, "rate": "150"}]},
                ],
            }
        )
        assert job.created_at == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
        assert job.billing_cycles == [
            BillingCycle(units=[BillingUnit(item="Unit", quantity=2, rate="150")])
        ]

    def test_vendor_charges_mode(self) -> None:
        assert VendorChargesMode("percentage") is VendorChargesMode.PERCENTAGE
        assert VendorChargesMode.DOLLAR == "dollar"


# =============================================================================
# REVENUE SHAPES
# =============================================================================


class TestRevenueShapes:
    """Tests for AdsSpending / RevenueReport"""

    def test_ads_defaults(self) -> None:
        assert AdsSpending().amounts() == [0, 0, 0, 0, 0]

    def test_ads_amounts_order(self) -> None:
        ads = AdsSpending(google_ads=1, facebook_ads=2, instagram_ads=3, linkedin_ads=4, others=5)
        assert ads.amounts() == [1, 2, 3, 4, 5]

    def test_report_counts_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            RevenueReport(
                total_revenue=Decimal("0"),
                sales_order_count=-1,
                job_order_count=0,
                sales_order_revenues=[],
                ads_total=Decimal("0"),
            )
