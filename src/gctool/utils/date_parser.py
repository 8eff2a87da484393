"""Date parsing utilities for command-line filters."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def _start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


RELATIVE_DATES = {
    "today": lambda today: today,
    "yesterday": lambda today: today - timedelta(days=1),
    "this week": _start_of_week,
    "last week": lambda today: _start_of_week(today) - timedelta(days=7),
    "this month": lambda today: today.replace(day=1),
    "last month": lambda today: (today - relativedelta(months=1)).replace(day=1),
    "this year": lambda today: today.replace(month=1, day=1),
    "last year": lambda today: today.replace(month=1, day=1) - relativedelta(years=1),
}


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Accepts absolute dates ("2024-01-15", "January 15, 2024") and the
    relative forms in RELATIVE_DATES ("today", "last month", ...). Periods
    resolve to their first day.

    Raises:
        ValueError: If date string cannot be parsed
    """
    key = " ".join(date_str.strip().lower().split())
    today = today or date.today()

    if key in RELATIVE_DATES:
        return RELATIVE_DATES[key](today)

    try:
        return date_parser.parse(key).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
