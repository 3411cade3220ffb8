"""
Lookup client.

Collects user input, debounces autocomplete and keeps the display state
for flight-number and route searches.
"""

from flightlookup.client.api import LookupApi, LookupApiError
from flightlookup.client.debounce import Debouncer
from flightlookup.client.lookup import (
    GENERIC_ERROR,
    NO_FLIGHT_NUMBER_RESULTS,
    NO_ROUTE_RESULTS,
    DisplayState,
    FieldState,
    LookupClient,
    SearchMode,
)

__all__ = [
    'LookupApi',
    'LookupApiError',
    'Debouncer',
    'GENERIC_ERROR',
    'NO_FLIGHT_NUMBER_RESULTS',
    'NO_ROUTE_RESULTS',
    'DisplayState',
    'FieldState',
    'LookupClient',
    'SearchMode',
]
