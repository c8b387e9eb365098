"""
Tests for invoice payment link expiration
"""

from datetime import datetime, timedelta, timezone

import pytest

from pottycrm.core.errors import InvalidArgument
from pottycrm.services.invoice_expiration import (
    EXPIRATION_WINDOW,
    calculate_invoice_expiration_cutoff,
    calculate_invoice_expiration_date,
    calculate_invoice_expiration_iso,
    calculate_invoice_expiration_timestamp,
    format_invoice_expiration_date,
    format_invoice_expiration_date_short,
    is_invoice_expired,
    to_datetime,
)

UTC = timezone.utc
CREATED = datetime(2025, 3, 1, 10, 0, tzinfo=UTC)


class TestToDatetime:
    """Tests for to_datetime"""

    def test_iso_with_z(self) -> None:
        assert to_datetime("2025-03-01T10:00:00Z") == CREATED

    def test_iso_with_offset(self) -> None:
        assert to_datetime("2025-03-01T12:00:00+02:00") == CREATED

    def test_naive_taken_as_utc(self) -> None:
        assert to_datetime(datetime(2025, 3, 1, 10)) == CREATED
        assert to_datetime("2025-03-01T10:00:00").tzinfo is not None

    @pytest.mark.parametrize("raw", ["yesterday", "", 1740823200, None])
    def test_invalid(self, raw) -> None:
        with pytest.raises(InvalidArgument, match="Invalid date"):
            to_datetime(raw)


class TestExpiration:
    """Tests for expiration date / timestamp / ISO / cutoff"""

    def test_window_is_24_hours(self) -> None:
        assert EXPIRATION_WINDOW == timedelta(hours=24)

    def test_expiration_date(self) -> None:
        assert calculate_invoice_expiration_date(CREATED) == datetime(2025, 3, 2, 10, tzinfo=UTC)

    def test_expiration_defaults_to_now(self) -> None:
        before = datetime.now(UTC)
        expiration = calculate_invoice_expiration_date()
        after = datetime.now(UTC)
        assert before + EXPIRATION_WINDOW <= expiration <= after + EXPIRATION_WINDOW

    def test_timestamp_ms(self) -> None:
        assert calculate_invoice_expiration_timestamp("2025-03-01T10:00:00Z") == 1_740_909_600_000

    def test_iso(self) -> None:
        assert calculate_invoice_expiration_iso("2025-03-01T10:00:00Z") == "2025-03-02T10:00:00.000Z"
        assert (
            calculate_invoice_expiration_iso("2025-03-01T12:00:00.250+02:00")
            == "2025-03-02T10:00:00.250Z"
        )

    def test_cutoff(self) -> None:
        now = datetime(2025, 3, 2, 10, tzinfo=UTC)
        assert calculate_invoice_expiration_cutoff(now) == CREATED

    def test_is_expired_boundary(self) -> None:
        now = datetime(2025, 3, 2, 10, tzinfo=UTC)
        assert is_invoice_expired(CREATED, now=now)
        assert is_invoice_expired("2025-03-01T09:59:59Z", now=now)
        assert not is_invoice_expired("2025-03-01T10:00:01Z", now=now)


class TestFormatting:
    """Tests for the display formats"""

    def test_long_format(self) -> None:
        assert format_invoice_expiration_date("2025-03-02T15:05:00Z") == "March 2, 2025 at 03:05 PM UTC"

    def test_long_format_morning(self) -> None:
        assert format_invoice_expiration_date(datetime(2025, 12, 25, 9, 0)) == (
            "December 25, 2025 at 09:00 AM UTC"
        )

    def test_short_format(self) -> None:
        assert format_invoice_expiration_date_short("2025-03-02T15:05:00Z") == "Mar 2, 3:05 PM"

    def test_short_format_midnight_and_noon(self) -> None:
        assert format_invoice_expiration_date_short("2025-03-02T00:07:00Z") == "Mar 2, 12:07 AM"
        assert format_invoice_expiration_date_short("2025-03-02T12:30:00Z") == "Mar 2, 12:30 PM"
