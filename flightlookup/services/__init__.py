"""
Search services.

Airport autocomplete over static data, and flight lookups that use the
AviationStack provider with graceful degradation to mock data.
"""

from flightlookup.services.airport_search import AirportSearchService
from flightlookup.services.flight_search import (
    ConfigurationError,
    FlightSearchError,
    FlightSearchService,
    normalize_payload,
    normalize_record,
)

__all__ = [
    'AirportSearchService',
    'ConfigurationError',
    'FlightSearchError',
    'FlightSearchService',
    'normalize_payload',
    'normalize_record',
]
