# utils/timezone_utils.py
from datetime import datetime, date, timedelta
from typing import Optional
from fastapi import Header

DATE_KEY_FORMAT = '%Y-%m-%d'

def parse_timezone_offset(offset_str: Optional[str]) -> int:
    """
    Parse timezone offset from various formats.
    Examples: "300" (minutes), "+05:00", "-08:00"
    """
    if not offset_str:
        return 0

    try:
        # If it's already in minutes
        if offset_str.lstrip('-').isdigit():
            return int(offset_str)

        # If it's in format "+05:00" or "-08:00"
        if ':' in offset_str:
            sign = -1 if offset_str.startswith('-') else 1
            parts = offset_str.lstrip('+-').split(':')
            hours = int(parts[0])
            minutes = int(parts[1]) if len(parts) > 1 else 0
            return sign * (hours * 60 + minutes)
    except ValueError:
        pass

    return 0

def date_key(day: date) -> str:
    """Store key for a calendar day"""
    return day.strftime(DATE_KEY_FORMAT)

def parse_date_key(value: str) -> date:
    """
    Parse "YYYY-MM-DD" or an ISO datetime string into a calendar day.
    Raises ValueError for anything else.
    """
    if 'T' not in value:
        return datetime.strptime(value, DATE_KEY_FORMAT).date()
    return datetime.fromisoformat(value.replace('Z', '+00:00')).date()

def get_user_date(date_input: Optional[str] = None, timezone_offset: int = 0) -> date:
    """
    Calendar day for a request: the given date, or today in the user's timezone.
    ISO datetimes are shifted by the offset before taking the date.
    """
    if date_input is None:
        return get_user_today(timezone_offset)

    if 'T' not in date_input:
        return parse_date_key(date_input)

    dt = datetime.fromisoformat(date_input.replace('Z', '+00:00'))
    if timezone_offset:
        dt = dt + timedelta(minutes=timezone_offset)
    return dt.date()

def get_user_now(timezone_offset: int = 0) -> datetime:
    """Get current datetime in user's timezone."""
    utc_now = datetime.utcnow()
    return utc_now + timedelta(minutes=timezone_offset)

def get_user_today(timezone_offset: int = 0) -> date:
    """Get today's date in user's timezone."""
    return get_user_now(timezone_offset).date()

def days_between(start: date, end: date):
    """Every calendar day from start to end, inclusive"""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)

# FastAPI dependency to extract timezone from headers
async def get_timezone_offset(
    x_timezone_offset: Optional[str] = Header(None),
    x_timezone_string: Optional[str] = Header(None)
) -> int:
    """
    Extract timezone offset from request headers.
    Returns offset in minutes from UTC.
    """
    # Try the direct offset first
    if x_timezone_offset:
        return parse_timezone_offset(x_timezone_offset)

    # Try parsing the string format
    if x_timezone_string:
        return parse_timezone_offset(x_timezone_string)

    # Default to UTC
    return 0
