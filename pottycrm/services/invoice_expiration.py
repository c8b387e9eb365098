"""
Invoice payment link expiration

Payment links expire INVOICE_EXPIRATION_HOURS (24h) after creation. All
datetimes are timezone-aware; naive inputs and ISO strings without an offset
are taken as UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from pottycrm.core.errors import InvalidArgument
from pottycrm.core.limits import INVOICE_EXPIRATION_HOURS

DateInput = Union[datetime, str]

EXPIRATION_WINDOW = timedelta(hours=INVOICE_EXPIRATION_HOURS)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: DateInput) -> datetime:
    """
    Parse a datetime or ISO-8601 string into an aware datetime.

    A trailing "Z" is accepted.

    Raises:
        InvalidArgument: If the string is not ISO-8601
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidArgument(f"Invalid date: {value!r}. Expected ISO-8601.") from None
    else:
        raise InvalidArgument(f"Invalid date: {value!r}. Expected datetime or ISO-8601 string.")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def calculate_invoice_expiration_date(start_date: Optional[DateInput] = None) -> datetime:
    """Expiration moment: start_date (default: now) + 24h."""
    base = to_datetime(start_date) if start_date is not None else _utcnow()
    return base + EXPIRATION_WINDOW


def calculate_invoice_expiration_timestamp(start_date: Optional[DateInput] = None) -> int:
    """Expiration moment as epoch milliseconds."""
    expiration = calculate_invoice_expiration_date(start_date)
    return int(expiration.timestamp() * 1000)


def calculate_invoice_expiration_iso(start_date: Optional[DateInput] = None) -> str:
    """
    Expiration moment as an ISO-8601 UTC string, for payment metadata.

    Examples:
        >>> calculate_invoice_expiration_iso("2025-03-01T10:00:00Z")
        '2025-03-02T10:00:00.000Z'
    """
    expiration = calculate_invoice_expiration_date(start_date).astimezone(timezone.utc)
    return expiration.strftime("%Y-%m-%dT%H:%M:%S.") + f"{expiration.microsecond // 1000:03d}Z"


def calculate_invoice_expiration_cutoff(now: Optional[datetime] = None) -> datetime:
    """Invoices created at or before this moment have expired."""
    current = to_datetime(now) if now is not None else _utcnow()
    return current - EXPIRATION_WINDOW


def is_invoice_expired(created_at: DateInput, now: Optional[datetime] = None) -> bool:
    """True if the invoice is at least 24h old."""
    return to_datetime(created_at) <= calculate_invoice_expiration_cutoff(now)


def format_invoice_expiration_date(expiration_date: DateInput) -> str:
    """
    Long form for emails and PDFs.

    Examples:
        >>> format_invoice_expiration_date("2025-03-02T15:05:00Z")
        'March 2, 2025 at 03:05 PM UTC'
    """
    value = to_datetime(expiration_date)
    return f"{value:%B} {value.day}, {value:%Y} at {value:%I:%M %p} {value.tzname()}"


def format_invoice_expiration_date_short(expiration_date: DateInput) -> str:
    """
    Short form for the UI.

    Examples:
        >>> format_invoice_expiration_date_short("2025-03-02T15:05:00Z")
        'Mar 2, 3:05 PM'
    """
    value = to_datetime(expiration_date)
    hour = value.hour % 12 or 12
    return f"{value:%b} {value.day}, {hour}:{value:%M %p}"
