"""Tests for spendlog.dates pure functions."""

from datetime import date, datetime

from spendlog.dates import (
    format_date_display,
    format_date_iso,
    is_date_in_range,
    is_future_date,
    parse_date,
)


class TestParseDate:
    """Tests for parse_date."""

    def test_parses_iso_format(self) -> None:
        """Should parse YYYY-MM-DD."""
        assert parse_date("2025-01-15") == date(2025, 1, 15)

    def test_parses_day_first_format(self) -> None:
        """Should parse DD/MM/YYYY."""
        assert parse_date("15/01/2025") == date(2025, 1, 15)

    def test_strips_whitespace(self) -> None:
        """Should ignore surrounding whitespace."""
        assert parse_date("  2025-01-15 ") == date(2025, 1, 15)

    def test_accepts_date_and_datetime(self) -> None:
        """Should pass dates through and truncate datetimes."""
        assert parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
        assert parse_date(datetime(2024, 2, 29, 13, 45)) == date(2024, 2, 29)

    def test_rejects_impossible_dates(self) -> None:
        """Should return None for dates that don't exist."""
        assert parse_date("2025-02-29") is None
        assert parse_date("31/04/2025") is None
        assert parse_date("2025-13-01") is None

    def test_rejects_other_formats(self) -> None:
        """Should return None for unsupported formats and types."""
        assert parse_date("01-15-2025") is None
        assert parse_date("2025/01/15") is None
        assert parse_date("") is None
        assert parse_date(None) is None
        assert parse_date(20250115) is None


class TestFormatting:
    """Tests for format_date_iso and format_date_display."""

    def test_iso_from_day_first(self) -> None:
        """Should convert DD/MM/YYYY to YYYY-MM-DD."""
        assert format_date_iso("05/03/2024") == "2024-03-05"

    def test_iso_is_idempotent(self) -> None:
        """Should leave canonical dates unchanged."""
        assert format_date_iso("2024-03-05") == "2024-03-05"

    def test_iso_empty_for_invalid(self) -> None:
        """Should return empty string for unparseable values."""
        assert format_date_iso("not a date") == ""

    def test_display_format(self) -> None:
        """Should format stored dates as DD/MM/YYYY."""
        assert format_date_display("2024-03-05") == "05/03/2024"
        assert format_date_display("garbage") == ""


class TestIsFutureDate:
    """Tests for is_future_date."""

    def test_today_is_not_future(self) -> None:
        """Should treat today as not in the future."""
        assert is_future_date(date(2025, 6, 1), today=date(2025, 6, 1)) is False

    def test_tomorrow_is_future(self) -> None:
        """Should treat tomorrow as in the future."""
        assert is_future_date(date(2025, 6, 2), today=date(2025, 6, 1)) is True


class TestIsDateInRange:
    """Tests for is_date_in_range."""

    def test_bounds_are_inclusive(self) -> None:
        """Should include both the start and the end date."""
        assert is_date_in_range("2024-01-01", "2024-01-01", "2024-01-31")
        assert is_date_in_range("2024-01-31", "2024-01-01", "2024-01-31")

    def test_outside_range(self) -> None:
        """Should exclude dates before start or after end."""
        assert not is_date_in_range("2023-12-31", "2024-01-01", "2024-01-31")
        assert not is_date_in_range("2024-02-01", "2024-01-01", "2024-01-31")

    def test_open_ended_ranges(self) -> None:
        """Should allow either bound to be missing."""
        assert is_date_in_range("2030-01-01", "2024-01-01", None)
        assert is_date_in_range("1990-01-01", None, "2024-01-31")
        assert is_date_in_range("2024-01-15")

    def test_mixed_formats(self) -> None:
        """Should compare dates regardless of input format."""
        assert is_date_in_range("2024-01-15", "01/01/2024", "31/01/2024")

    def test_unparseable_bound_is_ignored(self) -> None:
        """Should ignore a bound that can't be parsed."""
        assert is_date_in_range("2024-01-15", "garbage", "2024-01-31")

    def test_unparseable_date_is_never_in_range(self) -> None:
        """Should return False for an invalid date."""
        assert not is_date_in_range("garbage")
