"""Date utilities for spendlog.

Pure functions for parsing, formatting and range checks. Dates are stored
as YYYY-MM-DD strings and typed by users as DD/MM/YYYY or YYYY-MM-DD.
"""

import re
from datetime import date, datetime

from spendlog.domain.models import IsoDate

_DMY_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_YMD_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_date(value: object) -> date | None:
    """Parse a date in DD/MM/YYYY or YYYY-MM-DD format.

    Args:
        value: Date string, date or datetime.

    Returns:
        Parsed date, or None if the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    match = _DMY_RE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
    else:
        match = _YMD_RE.match(text)
        if not match:
            return None
        year, month, day = (int(part) for part in match.groups())

    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date_iso(value: object) -> IsoDate:
    """Format a date for storage.

    Args:
        value: Date string (DD/MM/YYYY or YYYY-MM-DD), date or datetime.

    Returns:
        Date in YYYY-MM-DD format, or an empty string if it cannot be parsed.
    """
    parsed = parse_date(value)
    if parsed is None:
        return IsoDate("")
    return IsoDate(parsed.strftime("%Y-%m-%d"))


def format_date_display(value: object) -> str:
    """Format a stored date as DD/MM/YYYY (empty string if invalid)."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.strftime("%d/%m/%Y")


def is_future_date(value: date, today: date | None = None) -> bool:
    """Check whether a date is after today."""
    if today is None:
        today = date.today()
    return value > today


def is_date_in_range(value: object, start: object = None, end: object = None) -> bool:
    """Check if a date falls within an inclusive range.

    Args:
        value: Date to check.
        start: Optional range start (inclusive). Ignored if unparseable.
        end: Optional range end (inclusive). Ignored if unparseable.

    Returns:
        True if the date is within range. An unparseable date is never in range.
    """
    check = parse_date(value)
    if check is None:
        return False

    if start:
        start_date = parse_date(start)
        if start_date is not None and check < start_date:
            return False

    if end:
        end_date = parse_date(end)
        if end_date is not None and check > end_date:
            return False

    return True
