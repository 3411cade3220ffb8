"""
Display formatting for flight results.
"""

from datetime import datetime
from typing import Optional, Tuple

from flightlookup.models.flight import LOCATION_SEPARATOR

MISSING_TIME = '--:--'
MISSING_DATE = '--'

STATUS_CATEGORIES = {
    'on time': 'on-time',
    'delayed': 'delayed',
    'scheduled': 'scheduled',
}


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO-8601 string, or None if missing/invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None


def format_time(value: Optional[str]) -> str:
    """'2025-12-18T18:30:00' -> '18:30' (in the timestamp's own clock)."""
    dt = parse_timestamp(value)
    if dt is None:
        return MISSING_TIME
    return dt.strftime('%H:%M')


def format_date(value: Optional[str]) -> str:
    """'2025-12-18T18:30:00' -> 'Thu, Dec 18'."""
    dt = parse_timestamp(value)
    if dt is None:
        return MISSING_DATE
    return f'{dt:%a, %b} {dt.day}'


def status_category(status: Optional[str]) -> str:
    """Map a free-form status onto a display category, '' if unknown."""
    if not status:
        return ''
    return STATUS_CATEGORIES.get(status.strip().lower(), '')


def split_location(location: Optional[str]) -> Tuple[str, str]:
    """'JFK - New York' -> ('JFK', 'New York')."""
    if not location:
        return '', ''
    code, _, name = location.partition(LOCATION_SEPARATOR)
    return code.strip(), name.strip()


def extract_iata(field_value: Optional[str]) -> str:
    """
    IATA prefix of a route field.

    Works for both a selected suggestion ('JFK - John F. Kennedy ...')
    and a bare typed code ('jfk').
    """
    return split_location(field_value)[0].upper()
