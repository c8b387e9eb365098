"""Services built on the calculation core: validation, revenue, payments, invoices."""

from .formatting import format_currency
from .invoice_expiration import (
    calculate_invoice_expiration_cutoff,
    calculate_invoice_expiration_date,
    calculate_invoice_expiration_iso,
    calculate_invoice_expiration_timestamp,
    format_invoice_expiration_date,
    format_invoice_expiration_date_short,
    is_invoice_expired,
)
from .payments import (
    amount_to_cents,
    build_order_payment_link_request,
    build_payment_link_request,
    cents_to_amount,
)
from .product_validation import (
    ProductAmountValidator,
    ProductDiscrepancy,
    ProductValidationConfig,
    ProductValidationResult,
    validate_and_recalculate_products,
)
from .revenue import RevenueCalculator, RevenueConfig

__all__ = [
    "format_currency",
    "calculate_invoice_expiration_cutoff",
    "calculate_invoice_expiration_date",
    "calculate_invoice_expiration_iso",
    "calculate_invoice_expiration_timestamp",
    "format_invoice_expiration_date",
    "format_invoice_expiration_date_short",
    "is_invoice_expired",
    "amount_to_cents",
    "build_order_payment_link_request",
    "build_payment_link_request",
    "cents_to_amount",
    "ProductAmountValidator",
    "ProductDiscrepancy",
    "ProductValidationConfig",
    "ProductValidationResult",
    "validate_and_recalculate_products",
    "RevenueCalculator",
    "RevenueConfig",
]
