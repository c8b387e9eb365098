"""
Numeric Calculations — general (non-money) numeric primitives

Counts, scores, ratings, pagination, file sizes, reading time, backoff.
For money/price arithmetic use price_calculations instead.

INVARIANTS:
1. Every function validates its inputs and raises InvalidArgument on
   NaN/Inf or out-of-domain values; nothing is silently sanitized.
2. Rounding is half-away-from-zero on the decimal value the caller sees
   (1.005 -> 1.01), not on the binary float expansion.
3. All functions are pure and deterministic.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from numbers import Real
from typing import Iterable

from pottycrm.core.errors import InvalidArgument


# =============================================================================
# VALIDATION
# =============================================================================


def is_valid_float(value: object) -> bool:
    """
    True if value is a real number that is neither NaN nor Inf.

    Booleans are not numbers here.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def require_finite(value: object, name: str) -> float:
    """
    Validate that value is a finite real number.

    Args:
        value: Value to check
        name: Parameter name (for the error message)

    Returns:
        value unchanged

    Raises:
        InvalidArgument: If value is not a finite number
    """
    if not is_valid_float(value):
        raise InvalidArgument(
            f"Invalid {name}: {value}. {name} must be a valid finite number."
        )
    return value


def parse_finite(value: object, name: str) -> float:
    """
    Parse a number or numeric string into a finite float.

    Raises:
        InvalidArgument: If value cannot be parsed or is NaN/Inf
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgument(
            f"Invalid {name}: {value}. {name} must be a valid finite number."
        )
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(
            f"Invalid {name}: {value!r}. {name} must be a valid finite number."
        ) from None
    if not math.isfinite(parsed):
        raise InvalidArgument(
            f"Invalid {name}: {value}. {name} must be a valid finite number."
        )
    return parsed


# =============================================================================
# ROUNDING
# =============================================================================


def quantize_half_away(value: Decimal, decimals: int) -> Decimal:
    """
    Quantize a Decimal to ``decimals`` places, half away from zero.

    Precision is widened for large magnitudes so quantize never overflows the
    context.
    """
    exponent = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        ctx.prec = max(28, value.adjusted() + decimals + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def round_to_decimals(value: float, decimals: int = 2) -> float:
    """
    Round a number to the given number of decimal places.

    Half-away-from-zero on the shortest decimal representation of value.

    Args:
        value: Number to round
        decimals: Number of decimal places (default: 2)

    Returns:
        Rounded number

    Raises:
        InvalidArgument: If value is not finite or decimals is negative/non-finite

    Examples:
        >>> round_to_decimals(1.005)
        1.01
        >>> round_to_decimals(-2.345)
        -2.35
        >>> round_to_decimals(12.3456, 3)
        12.346
    """
    require_finite(value, "value")
    if not is_valid_float(decimals) or decimals < 0:
        raise InvalidArgument(
            f"Invalid decimals: {decimals}. Decimals must be a valid non-negative number."
        )
    if decimals != int(decimals):
        raise InvalidArgument(f"Invalid decimals: {decimals}. Decimals must be an integer.")

    rounded = quantize_half_away(Decimal(str(value)), int(decimals))
    return float(rounded)


def round_half_away(value: float) -> int:
    """
    Round a number to the nearest integer, half away from zero.

    Examples:
        >>> round_half_away(2.5)
        3
        >>> round_half_away(-2.5)
        -3
    """
    require_finite(value, "value")
    return int(quantize_half_away(Decimal(str(value)), 0))


# =============================================================================
# PAGINATION
# =============================================================================


def calculate_total_pages(total: int, limit: int) -> int:
    """
    Total pages for pagination.

    Args:
        total: Total number of items
        limit: Items per page

    Returns:
        ceil(total / limit)
    """
    if not is_valid_float(total) or total < 0:
        raise InvalidArgument(
            f"Invalid total: {total}. Total must be a valid non-negative number."
        )
    if not is_valid_float(limit) or limit <= 0:
        raise InvalidArgument(
            f"Invalid limit: {limit}. Limit must be a valid positive number."
        )
    return math.ceil(total / limit)


def calculate_skip(page: int, limit: int) -> int:
    """
    Number of records to skip for a 1-based page.
    """
    if not is_valid_float(page) or page < 1:
        raise InvalidArgument(f"Invalid page: {page}. Page must be >= 1.")
    if not is_valid_float(limit) or limit <= 0:
        raise InvalidArgument(
            f"Invalid limit: {limit}. Limit must be a valid positive number."
        )
    return (page - 1) * limit


# =============================================================================
# UTILITIES
# =============================================================================


def clamp(value: float, min_value: float, max_value: float) -> float:
    """
    Clamp value into [min_value, max_value].

    Raises:
        InvalidArgument: If any argument is non-finite or min_value > max_value

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    require_finite(value, "value")
    require_finite(min_value, "min")
    require_finite(max_value, "max")
    if min_value > max_value:
        raise InvalidArgument(
            f"Invalid range: min ({min_value}) must be <= max ({max_value})."
        )
    return min(max_value, max(min_value, value))


def calculate_average(values: Iterable[float | str]) -> float:
    """
    Arithmetic mean of the values that parse to finite numbers.

    Elements that do not parse (or parse to NaN/Inf) are dropped. The result
    is not rounded.

    Raises:
        InvalidArgument: If values is empty or no element is a valid number
    """
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidArgument("Values must be a non-empty sequence")
    items = list(values)
    if not items:
        raise InvalidArgument("Values must be a non-empty sequence")

    numeric: list[float] = []
    for item in items:
        try:
            numeric.append(parse_finite(item, "value"))
        except InvalidArgument:
            continue

    if not numeric:
        raise InvalidArgument("No valid numeric values found in values")

    average = math.fsum(numeric) / len(numeric)
    if not math.isfinite(average):
        raise InvalidArgument(
            f"Average calculation resulted in invalid value. Values: {items}"
        )
    return average


def calculate_reading_time(word_count: int, words_per_minute: int = 200) -> int:
    """Estimated reading time in whole minutes (rounded up)."""
    if not is_valid_float(word_count) or word_count < 0:
        raise InvalidArgument(
            f"Invalid word_count: {word_count}. Word count must be a valid non-negative number."
        )
    if not is_valid_float(words_per_minute) or words_per_minute <= 0:
        raise InvalidArgument(
            f"Invalid words_per_minute: {words_per_minute}. "
            "Words per minute must be a valid positive number."
        )
    if word_count == 0:
        return 0
    return math.ceil(word_count / words_per_minute)


def bytes_to_mb(size_bytes: int, decimals: int = 2) -> str:
    """
    Convert bytes to megabytes, formatted with a fixed number of decimals.

    Examples:
        >>> bytes_to_mb(1_572_864)
        '1.50'
    """
    if not is_valid_float(size_bytes) or size_bytes < 0:
        raise InvalidArgument(
            f"Invalid bytes: {size_bytes}. Bytes must be a valid non-negative number."
        )
    megabytes = size_bytes / (1024 * 1024)
    return f"{round_to_decimals(megabytes, decimals):.{int(decimals)}f}"


def calculate_exponential_backoff(attempts: int, base_delay_ms: float = 1000) -> float:
    """
    Delay before the next retry: 2**attempts * base_delay_ms.
    """
    if not is_valid_float(attempts) or attempts < 0:
        raise InvalidArgument(
            f"Invalid attempts: {attempts}. Attempts must be a valid non-negative number."
        )
    if not is_valid_float(base_delay_ms) or base_delay_ms <= 0:
        raise InvalidArgument(
            f"Invalid base_delay_ms: {base_delay_ms}. Base delay must be a valid positive number."
        )
    return (2**attempts) * base_delay_ms
