"""Date parsing and period resolution utilities."""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from dompet.domain.entities import DateRange

logger = logging.getLogger(__name__)

PERIODS = ("today", "this-week", "this-month", "this-year")
DEFAULT_PERIOD = "this-month"


def _as_date(value: Optional[Union[date, datetime]]) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(day: date) -> date:
    """Return the most recent Sunday at or before ``day``."""
    # date.weekday() is Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "this month", "last month", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates, defaults to the current date

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = _as_date(today)

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return week_start(today)

    elif date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return week_start(today) - timedelta(days=7)

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def resolve_period(token: str, now: Optional[Union[date, datetime]] = None) -> DateRange:
    """Resolve a named period to inclusive start/end dates.

    Recognized tokens are ``today``, ``this-week`` (starting Sunday),
    ``this-month`` and ``this-year``. Anything else falls back to
    ``this-month``. The end bound is always the reference day itself.

    Args:
        token: Period token
        now: Reference moment, defaults to the current date

    Returns:
        DateRange for the period
    """
    today = _as_date(now)
    period = (token or "").strip().lower()

    if period not in PERIODS:
        logger.warning("Unknown period %r, falling back to %s", token, DEFAULT_PERIOD)
        period = DEFAULT_PERIOD

    if period == "today":
        start = today
    elif period == "this-week":
        start = week_start(today)
    elif period == "this-year":
        start = today.replace(month=1, day=1)
    else:
        start = today.replace(day=1)

    return DateRange(start=start, end=today)


def month_range(reference: Union[date, datetime], months_back: int = 0) -> DateRange:
    """Return full calendar-month bounds.

    Args:
        reference: Any day inside the anchor month
        months_back: How many months before the anchor month (0 = same month)

    Returns:
        DateRange from the first to the last day of the month
    """
    anchor = _as_date(reference)
    start = (anchor - relativedelta(months=months_back)).replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return DateRange(start=start, end=end)
