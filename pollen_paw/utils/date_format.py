"""
Date formatting helpers.

Every persistence key and join in the service uses the fixed-width
``YYYY-MM-DD`` form produced here.
"""
import re
from datetime import date
from typing import Mapping, Union

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_date(year: int, month: int, day: int) -> str:
    """
    Format date components as a zero-padded ``YYYY-MM-DD`` string.

    Args:
        year: Four digit year
        month: Month number (1-12)
        day: Day of month (1-31)

    Returns:
        Date key string, e.g. ``2026-01-05``
    """
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"


def format_api_date(date_obj: Mapping[str, int]) -> str:
    """
    Format an upstream ``{year, month, day}`` object as a date key.

    Args:
        date_obj: Mapping with ``year``, ``month`` and ``day`` entries

    Returns:
        Date key string
    """
    return format_date(date_obj["year"], date_obj["month"], date_obj["day"])


def is_valid_date_format(date_string: str) -> bool:
    """Check that a string is a ``YYYY-MM-DD`` date key."""
    return bool(DATE_KEY_PATTERN.match(date_string or ""))


def to_date_key(value: Union[date, str]) -> str:
    """
    Normalize a date or date string into a date key.

    Args:
        value: ``datetime.date`` (or ``datetime``) or ``YYYY-MM-DD`` string.
            Strings carrying a time part (``2026-01-05T00:00:00``) are
            truncated to the date.

    Returns:
        Date key string

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, date):
        return format_date(value.year, value.month, value.day)

    candidate = str(value).strip()[:10]
    if not is_valid_date_format(candidate):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    return candidate


def today_key() -> str:
    """Today's date key (local date)."""
    return to_date_key(date.today())
