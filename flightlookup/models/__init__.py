"""
Data models for Flight Lookup.

Plain frozen dataclasses; nothing here is persisted:
1. Flight - canonical flight status record
2. Airport - autocomplete reference data
3. Upstream* - partial schema of the AviationStack payload
"""

from flightlookup.models.flight import (
    DEFAULT_TIMEZONE,
    UNKNOWN_AIRLINE,
    UNKNOWN_STATUS,
    Flight,
    format_location,
    normalize_flight_number,
)
from flightlookup.models.airport import Airport
from flightlookup.models.upstream import (
    UpstreamEndpoint,
    UpstreamError,
    UpstreamFlightRecord,
    UpstreamResponse,
)

__all__ = [
    'DEFAULT_TIMEZONE',
    'UNKNOWN_AIRLINE',
    'UNKNOWN_STATUS',
    'Flight',
    'format_location',
    'normalize_flight_number',
    'Airport',
    'UpstreamEndpoint',
    'UpstreamError',
    'UpstreamFlightRecord',
    'UpstreamResponse',
]
