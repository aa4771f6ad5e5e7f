"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def _period_start(period: str, today: date, offset: int) -> Optional[date]:
    """Return the first day of a week, month or year shifted by ``offset`` periods."""
    if period == "week":
        return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    if period == "month":
        return today.replace(day=1) + relativedelta(months=offset)
    if period == "year":
        return today.replace(month=1, day=1) + relativedelta(years=offset)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-06-10", "June 10, 2024") and relative ones:
    "today", "yesterday", "tomorrow", "in N days" and "last/this/next"
    followed by "week", "month" or "year" (the first day of that period).

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    words = date_str.split()
    if len(words) == 3 and words[0] == "in" and words[2] in ("day", "days") and words[1].isdigit():
        return today + timedelta(days=int(words[1]))

    if len(words) == 2 and words[0] in ("last", "this", "next"):
        offset = {"last": -1, "this": 0, "next": 1}[words[0]]
        start = _period_start(words[1], today, offset)
        if start is not None:
            return start

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
