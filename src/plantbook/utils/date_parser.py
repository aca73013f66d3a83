"""Date and period parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from plantbook.domain.periods import Period

RELATIVE_PERIODS = {"last-month": -1, "this-month": 0, "next-month": 1}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2025-02-14", "14 Feb 2025") and the relative
    words "today", "yesterday" and "tomorrow". Day-first input such as
    "14/02/2025" is read as 14 February.

    Args:
        date_str: Date string

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

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_period(period_str: str) -> Period:
    """Parse a month reference into a Period.

    Accepts "2025-02", "Feb-25", "February 2025", "Feb 2025" and the relative
    forms "this-month", "last-month" and "next-month".

    Raises:
        ValueError: If the string does not name a month
    """
    text = period_str.strip().lower()
    if text in RELATIVE_PERIODS:
        return Period.from_date(date.today() + relativedelta(months=RELATIVE_PERIODS[text]))

    return Period.parse(period_str)
