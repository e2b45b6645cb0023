"""Date parsing utilities.

Ledger days are stored as ``dd/mm/yyyy`` strings. They are always parsed into
``date`` objects before being compared, since the string form does not sort
chronologically.
"""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

LEDGER_DATE_FORMAT = "%d/%m/%Y"


def parse_ledger_date(date_str: str) -> date:
    """Parse a stored ``dd/mm/yyyy`` day string.

    Raises:
        ValueError: If the string is not a valid ``dd/mm/yyyy`` date
    """
    try:
        return datetime.strptime(date_str.strip(), LEDGER_DATE_FORMAT).date()
    except (ValueError, AttributeError) as e:
        raise ValueError(f"Invalid ledger date '{date_str}' (expected dd/mm/yyyy): {e}")


def format_ledger_date(day: date) -> str:
    """Format a day as stored: ``dd/mm/yyyy``."""
    return day.strftime(LEDGER_DATE_FORMAT)


def _start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def parse_date(date_str: str) -> date:
    """Parse a user supplied date.

    Supports:
    - Ledger dates: "16/01/2026"
    - ISO dates: "2026-01-16"
    - Relative dates: "today", "yesterday", "tomorrow", "this month",
      "last month", "this week", "last week", "this year", "last year"
    - Anything else dateutil understands, read day-first

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
        "this week": _start_of_week(today),
        "last week": _start_of_week(today) - timedelta(days=7),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]
    if date_str.startswith(("last ", "this ", "next ")):
        raise ValueError(f"Could not parse date '{date_str}': unknown relative period")

    try:
        return parse_ledger_date(date_str)
    except ValueError:
        pass

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period ending today.

    Args:
        period: One of this-week, this-month, this-year, last-week,
            last-month, last-year, last-30-days

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    first_of_month = today.replace(day=1)
    first_of_year = today.replace(month=1, day=1)

    if period == "this-week":
        return _start_of_week(today), today
    if period == "this-month":
        return first_of_month, today
    if period == "this-year":
        return first_of_year, today
    if period == "last-week":
        start = _start_of_week(today) - timedelta(days=7)
        return start, start + timedelta(days=6)
    if period == "last-month":
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)
    if period == "last-30-days":
        return today - timedelta(days=30), today

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-week, this-month, this-year, "
        "last-week, last-month, last-year, last-30-days"
    )
