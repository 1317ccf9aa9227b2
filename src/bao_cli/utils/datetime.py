"""Datetime utilities with the fixed formats used by Bao.

All datetimes handled by Bao are naive local times. Commands accept exactly
one input pattern for date/time arguments and one for date-only arguments;
renderings use a separate display pattern.
"""

from datetime import date, datetime
from typing import Optional


INPUT_DATETIME_FORMAT = "%Y-%m-%d %H%M"
DATE_ONLY_FORMAT = "%Y-%m-%d"
DISPLAY_DATETIME_FORMAT = "%b %d %Y %H:%M"
DISPLAY_DATE_FORMAT = "%b %d %Y"

# Used in hints such as "a valid date format such as 2024-08-28"
EXAMPLE_DATE = date(2024, 8, 28)


def parse_datetime(text: str, fmt: str = INPUT_DATETIME_FORMAT) -> datetime:
    """Parse a date/time argument with the fixed input pattern.

    Args:
        text: The raw argument text
        fmt: strptime pattern to apply

    Returns:
        Naive datetime

    Raises:
        ValueError: If the text does not match the pattern exactly
    """
    result = datetime.strptime(text, fmt)
    # strptime accepts single-digit fields such as 2024-8-2
    if result.strftime(fmt) != text:
        raise ValueError(f"{text!r} does not match format {fmt!r}")
    return result


def parse_date(text: str, fmt: str = DATE_ONLY_FORMAT) -> date:
    """Parse a date-only argument.

    Raises:
        ValueError: If the text does not match the pattern exactly
    """
    return parse_datetime(text, fmt).date()


def format_datetime(dt: datetime, fmt: str = DISPLAY_DATETIME_FORMAT) -> str:
    """Format a datetime for display."""
    return dt.strftime(fmt)


def format_date(d: date, fmt: str = DISPLAY_DATE_FORMAT) -> str:
    """Format a date for display."""
    return d.strftime(fmt)


def example_date(fmt: str = DATE_ONLY_FORMAT) -> str:
    """Return an example date rendered with the given input pattern."""
    return EXAMPLE_DATE.strftime(fmt)


def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
    """Convert datetime to ISO string, or None if input was None."""
    if dt is None:
        return None
    return dt.isoformat()


def from_iso_string(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO string written by :func:`to_iso_string`.

    Raises:
        ValueError: If the value is not a valid ISO datetime
    """
    if value is None:
        return None
    return datetime.fromisoformat(value)
