"""Tests for time utilities."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from rest_mediator.utils import to_unix_timestamp, utc_now


class TestUnixTimestamp:
    """Test to_unix_timestamp."""

    def test_aware_datetime(self):
        """Test a timezone-aware datetime."""
        value = datetime(2020, 1, 1, 1, tzinfo=timezone(timedelta(hours=1)))
        assert to_unix_timestamp(value) == 1577836800

    def test_naive_datetime_is_utc(self):
        """Test that naive datetimes are read as UTC."""
        assert to_unix_timestamp(datetime(2020, 1, 1)) == 1577836800

    def test_iso_string(self):
        """Test parsing an ISO 8601 string."""
        assert to_unix_timestamp("2020-01-01 00:00:00") == 1577836800

    def test_date(self):
        """Test a plain date is taken at midnight UTC."""
        assert to_unix_timestamp(date(2020, 1, 1)) == 1577836800

    def test_passthrough(self):
        """Test None and numeric values."""
        assert to_unix_timestamp(None) is None
        assert to_unix_timestamp(1577836800.7) == 1577836800

    def test_utc_now_is_aware(self):
        """Test utc_now carries a UTC timezone."""
        assert utc_now().tzinfo == timezone.utc
