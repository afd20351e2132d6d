"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2025-01-15", "January 15, 2025", etc.
    - Relative dates: "today", "yesterday", "tomorrow"
    - Period starts: "this month", "last year", "next month", etc. resolve to
      the first day of that month or year, which is where fiscal periods
      usually begin.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    offsets = {"last ": -1, "this ": 0, "next ": 1}
    for prefix, offset in offsets.items():
        if date_str.startswith(prefix):
            period = date_str[len(prefix):]
            if period == "month":
                return today.replace(day=1) + relativedelta(months=offset)
            if period == "year":
                return today.replace(month=1, day=1) + relativedelta(years=offset)

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
