"""
Core math modules for pottycrm

Three layers, each depending only on the one below:
numeric_calculations -> price_calculations -> product_amounts (+ tax_calculations).
"""

# Numeric primitives (non-money)
from pottycrm.core.math.numeric_calculations import (
    bytes_to_mb,
    calculate_average,
    calculate_exponential_backoff,
    calculate_reading_time,
    calculate_skip,
    calculate_total_pages,
    clamp,
    is_valid_float,
    parse_finite,
    require_finite,
    round_half_away,
    round_to_decimals,
)

# Price primitives (money)
from pottycrm.core.math.price_calculations import (
    MoneyInput,
    abs_amount,
    add,
    add_margin,
    apply_multiplier,
    calculate_accuracy_rating,
    calculate_available_refund,
    calculate_balance_due,
    calculate_net_paid_amount,
    calculate_order_revenue,
    calculate_percentage,
    calculate_price_difference_percentage,
    ceil_amount,
    cents_to_dollars,
    divide,
    dollars_to_cents,
    floor_amount,
    max_amount,
    min_amount,
    multiply,
    parse_money_input,
    round_price,
    subtract,
    to_money,
)

# Product / order aggregation
from pottycrm.core.math.product_amounts import (
    calculate_order_total,
    calculate_order_total_cents,
    calculate_product_amount,
    calculate_product_amount_cents,
)

# Tax
from pottycrm.core.math.tax_calculations import (
    OrderTotals,
    OrderTotalsCents,
    calculate_order_totals_with_tax,
    calculate_order_totals_with_tax_cents,
    calculate_tax_amount,
    calculate_tax_amount_cents,
)

__all__ = [
    # Numeric: Validation
    "is_valid_float",
    "parse_finite",
    "require_finite",
    # Numeric: Rounding
    "round_half_away",
    "round_to_decimals",
    # Numeric: Pagination
    "calculate_skip",
    "calculate_total_pages",
    # Numeric: Utilities
    "bytes_to_mb",
    "calculate_average",
    "calculate_exponential_backoff",
    "calculate_reading_time",
    "clamp",
    # Price: Types
    "MoneyInput",
    # Price: Parsing / rounding
    "parse_money_input",
    "round_price",
    "to_money",
    # Price: Conversion
    "cents_to_dollars",
    "dollars_to_cents",
    # Price: Arithmetic
    "abs_amount",
    "add",
    "ceil_amount",
    "divide",
    "floor_amount",
    "max_amount",
    "min_amount",
    "multiply",
    "subtract",
    # Price: Business formulas
    "add_margin",
    "apply_multiplier",
    "calculate_accuracy_rating",
    "calculate_available_refund",
    "calculate_balance_due",
    "calculate_net_paid_amount",
    "calculate_order_revenue",
    "calculate_percentage",
    "calculate_price_difference_percentage",
    # Product amounts
    "calculate_order_total",
    "calculate_order_total_cents",
    "calculate_product_amount",
    "calculate_product_amount_cents",
    # Tax: Types
    "OrderTotals",
    "OrderTotalsCents",
    # Tax: Functions
    "calculate_order_totals_with_tax",
    "calculate_order_totals_with_tax_cents",
    "calculate_tax_amount",
    "calculate_tax_amount_cents",
]
