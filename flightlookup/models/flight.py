"""
Flight model - the canonical record returned by every lookup.

Both the mock dataset and normalized AviationStack responses produce
this shape. Records are frozen: they are built per request and never
mutated afterwards.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

UNKNOWN_AIRLINE = 'Unknown Airline'
UNKNOWN_STATUS = 'Unknown'
DEFAULT_TIMEZONE = 'UTC'

LOCATION_SEPARATOR = ' - '


def format_location(iata: str, name: str) -> str:
    """Build the 'IATA - Airport Name' display string."""
    return f'{iata}{LOCATION_SEPARATOR}{name}'


def normalize_flight_number(value: Optional[str]) -> str:
    """Trim whitespace and uppercase a flight number for comparison."""
    if not value:
        return ''
    return value.strip().upper()


@dataclass(frozen=True)
class Flight:
    """
    Canonical flight status record.

    Fields:
        flight_number: Uppercase IATA flight code (e.g., 'AA123')
        airline: Human-readable airline name
        start_location / end_location: 'IATA - Airport Name'
        start_time / end_time: ISO-8601 strings, passed through unvalidated
        timezone_start / timezone_end: IANA name or abbreviation
        status: Free-form provider status (e.g., 'On Time', 'landed')
    """
    flight_number: str
    airline: str = UNKNOWN_AIRLINE
    start_location: str = ''
    end_location: str = ''
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    timezone_start: str = DEFAULT_TIMEZONE
    timezone_end: str = DEFAULT_TIMEZONE
    status: str = UNKNOWN_STATUS

    @property
    def origin_iata(self) -> str:
        return self.start_location.split(LOCATION_SEPARATOR)[0].strip().upper()

    @property
    def destination_iata(self) -> str:
        return self.end_location.split(LOCATION_SEPARATOR)[0].strip().upper()

    @property
    def departure_date(self) -> Optional[str]:
        """Date part (YYYY-MM-DD) of the scheduled departure, if present."""
        if not self.start_time or len(self.start_time) < 10:
            return None
        return self.start_time[:10]

    def matches_number(self, flight_number: Optional[str]) -> bool:
        """Exact, case-insensitive, whitespace-trimmed comparison."""
        query = normalize_flight_number(flight_number)
        return bool(query) and normalize_flight_number(self.flight_number) == query

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'flightNumber': self.flight_number,
            'airline': self.airline,
            'startLocation': self.start_location,
            'endLocation': self.end_location,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'timeZoneStart': self.timezone_start,
            'timeZoneEnd': self.timezone_end,
            'status': self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Flight':
        """Rebuild a Flight from its API representation."""
        return cls(
            flight_number=data.get('flightNumber') or '',
            airline=data.get('airline') or UNKNOWN_AIRLINE,
            start_location=data.get('startLocation') or '',
            end_location=data.get('endLocation') or '',
            start_time=data.get('startTime'),
            end_time=data.get('endTime'),
            timezone_start=data.get('timeZoneStart') or DEFAULT_TIMEZONE,
            timezone_end=data.get('timeZoneEnd') or DEFAULT_TIMEZONE,
            status=data.get('status') or UNKNOWN_STATUS,
        )
