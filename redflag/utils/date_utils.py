"""Date manipulation utilities"""

import re
from datetime import date
from typing import Optional

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def is_valid_date(value: str) -> bool:
    """True for YYYY-MM-DD or YYYY-MM strings with a real month number"""
    if not isinstance(value, str) or ISO_DATE_PATTERN.match(value) is None:
        return False
    return 1 <= int(value[5:7]) <= 12


def month_key(value: str) -> str:
    """Truncate an ISO date to its YYYY-MM month key"""
    return value[:7]


def format_month(key: str) -> str:
    """
    Convert a YYYY-MM key into a display label.

    Example:
        "2024-12" → "Dec 2024"
    """
    year, month = key.split("-")[:2]
    return f"{MONTH_NAMES[int(month) - 1]} {year}"


def parse_day(value: str) -> Optional[date]:
    """Parse a full YYYY-MM-DD date, None for month-only or invalid values"""
    if not is_valid_date(value) or len(value) != 10:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def weekend_day_name(value: str) -> Optional[str]:
    """Return "Saturday"/"Sunday" when the date falls on a weekend, else None"""
    day = parse_day(value)
    if day is None:
        return None
    if day.weekday() == 5:
        return "Saturday"
    if day.weekday() == 6:
        return "Sunday"
    return None
