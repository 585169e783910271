"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024"
    - Relative dates: "today", "yesterday", "last month", "this week", etc.

    Ambiguous numeric dates are read day first ("02/03/2024" is 2 March).

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
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last ") or date_str.startswith("this "):
        which, _, period = date_str.partition(" ")
        shift = 1 if which == "last" else 0
        if period == "week":
            return week_start(today) - timedelta(weeks=shift)
        if period == "month":
            return (today - relativedelta(months=shift)).replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=shift)

    try:
        # ISO input must not be reinterpreted by dayfirst
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def to_day(value: Union[date, datetime]) -> date:
    """Strip the time of day, keeping the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(day: date) -> date:
    """Return the Sunday that starts the week containing ``day``."""
    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Weeks run Sunday to Saturday, matching weekly summaries.

    Args:
        period: Period string (this-week, this-month, this-year, last-week,
            last-month, last-year)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-week":
        return (week_start(today), today)

    elif period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-week":
        start_date = week_start(today) - timedelta(weeks=1)
        return (start_date, start_date + timedelta(days=6))

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-week, this-month, "
        "this-year, last-week, last-month, last-year"
    )
