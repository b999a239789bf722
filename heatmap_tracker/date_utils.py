"""
Calendar helpers for heatmap-tracker.

All dates are plain calendar dates in UTC. Datetime strings carrying an
offset are converted to UTC before the calendar date is taken, so a grid
never shifts by a day because of the local timezone.
"""

import math
import numbers
from datetime import date, datetime, timedelta, timezone

WEEKDAYS_SHORT = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTHS_SHORT = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


class HeatmapValueError(ValueError):
    """Raised when a caller passes an invalid calendar argument."""

    pass


def utc_today() -> date:
    """Get today's date in UTC."""
    return datetime.now(timezone.utc).date()


def parse_date(date_string: str | None) -> date | None:
    """
    Parse an ISO-8601 date or datetime string into a UTC calendar date.

    Args:
        date_string: e.g. "2023-01-05", "2023-01-05T23:30:00Z"

    Returns:
        The calendar date, or None if the string is not a real date
    """
    if not isinstance(date_string, str) or not date_string.strip():
        return None

    text = date_string.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def is_valid_date(date_string: str | None) -> bool:
    """Check whether a string parses to a real calendar date."""
    return parse_date(date_string) is not None


def format_iso(value: date | datetime | None) -> str | None:
    """
    Format a date as YYYY-MM-DD.

    Args:
        value: date or datetime (aware datetimes are converted to UTC)

    Returns:
        ISO date string, or None for None/invalid input
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return None


def day_of_year(value: date) -> int:
    """1-based ordinal day within the date's year (Dec 31 of a leap year = 366)."""
    return (value - date(value.year, 1, 1)).days + 1


def _as_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, numbers.Real):
        raise HeatmapValueError("year must be a number")
    if not math.isfinite(year) or int(year) != year:
        raise HeatmapValueError("year must be a whole number")
    year = int(year)
    if not date.min.year <= year <= date.max.year:
        raise HeatmapValueError(
            f"year must be between {date.min.year} and {date.max.year}"
        )
    return year


def _as_week_start_day(week_start_day) -> int:
    if (
        isinstance(week_start_day, bool)
        or not isinstance(week_start_day, numbers.Integral)
        or not 0 <= week_start_day <= 6
    ):
        raise HeatmapValueError("week_start_day must be a whole number between 0 and 6")
    return int(week_start_day)


def first_day_of_year(year: int) -> date:
    return date(_as_year(year), 1, 1)


def last_day_of_year(year: int) -> date:
    return date(_as_year(year), 12, 31)


def days_in_year(year: int) -> int:
    """Number of days in the year (365 or 366)."""
    return day_of_year(last_day_of_year(year))


def date_from_day_of_year(year: int, day: int) -> date:
    """Calendar date for the given 1-based day of the year."""
    return first_day_of_year(year) + timedelta(days=day - 1)


def js_weekday(value: date) -> int:
    """Weekday number with Sunday = 0 through Saturday = 6."""
    return (value.weekday() + 1) % 7


def empty_days_before_year_start(year: int, week_start_day: int) -> int:
    """
    Count the filler cells needed before January 1st.

    Weeks are displayed as columns starting on week_start_day, so the first
    day of the year has to land under its weekday row.

    Args:
        year: Calendar year
        week_start_day: First day of the week (0 = Sunday .. 6 = Saturday)

    Returns:
        Number of leading filler cells, in [0, 6]

    Raises:
        HeatmapValueError: If week_start_day is not 0-6 or year is not a number
    """
    week_start_day = _as_week_start_day(week_start_day)
    first_weekday = js_weekday(first_day_of_year(year))
    return (first_weekday - week_start_day + 7) % 7


def shifted_weekdays(weekdays: list, week_start_day: int) -> list:
    """Rotate a Sunday-first weekday list so it starts at week_start_day."""
    week_start_day = _as_week_start_day(week_start_day)
    return weekdays[week_start_day:] + weekdays[:week_start_day]


def is_same_date(first: date, second: date) -> bool:
    return (first.year, first.month, first.day) == (second.year, second.month, second.day)


def month_tag(value: date) -> str:
    """Lowercase month tag used as a cell name, e.g. "month-jan"."""
    return f"month-{MONTHS_SHORT[value.month - 1].lower()}"
