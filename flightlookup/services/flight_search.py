"""
Flight search service - lookups by flight number or by route.

Serves from the mock dataset when no AviationStack key is configured,
otherwise queries the provider once and normalizes each record into the
canonical Flight shape.

Every provider failure is converted here into either an empty result or
a FlightSearchError carrying a user-safe message. Raw exceptions and
provider payloads never leave this module.
"""

import logging
from typing import Any, List, Optional

from flightlookup.data import ReferenceDataset
from flightlookup.models import (
    DEFAULT_TIMEZONE,
    UNKNOWN_AIRLINE,
    UNKNOWN_STATUS,
    Flight,
    UpstreamEndpoint,
    UpstreamFlightRecord,
    UpstreamResponse,
    format_location,
    normalize_flight_number,
)
from flightlookup.upstream import AviationStackClient, AviationStackError

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR = 'Failed to fetch flight data'
GENERIC_PROVIDER_ERROR = 'Flight data provider returned an error'
MISSING_KEY_ERROR = 'Flight data API key is not configured'

UNKNOWN_IATA = 'N/A'
UNKNOWN_AIRPORT = 'Unknown Airport'


class FlightSearchError(Exception):
    """Lookup failed; str(error) is safe to show to end users."""

    def __init__(self, message: str = GENERIC_FETCH_ERROR):
        super().__init__(message)
        self.message = message


class ConfigurationError(FlightSearchError):
    """Live lookup required but no provider key is configured."""

    def __init__(self, message: str = MISSING_KEY_ERROR):
        super().__init__(message)


def _location(endpoint: UpstreamEndpoint) -> str:
    return format_location(
        (endpoint.iata or UNKNOWN_IATA).upper(),
        endpoint.airport or UNKNOWN_AIRPORT,
    )


def _flight_number(record: UpstreamFlightRecord) -> str:
    if record.flight.iata:
        return normalize_flight_number(record.flight.iata)
    if record.airline.iata and record.flight.number:
        return normalize_flight_number(f'{record.airline.iata}{record.flight.number}')
    return ''


def normalize_record(record: UpstreamFlightRecord) -> Flight:
    """Map one provider record onto Flight, substituting defaults."""
    return Flight(
        flight_number=_flight_number(record),
        airline=record.airline.name or UNKNOWN_AIRLINE,
        start_location=_location(record.departure),
        end_location=_location(record.arrival),
        start_time=record.departure.scheduled,
        end_time=record.arrival.scheduled,
        timezone_start=record.departure.timezone or DEFAULT_TIMEZONE,
        timezone_end=record.arrival.timezone or DEFAULT_TIMEZONE,
        status=record.flight_status or UNKNOWN_STATUS,
    )


def normalize_payload(payload: Any) -> List[Flight]:
    """
    Turn a decoded provider document into Flights.

    - data present: one Flight per record (duplicates preserved)
    - no data, error present: FlightSearchError with the provider's info
    - neither: empty list
    """
    response = UpstreamResponse.from_json(payload)

    if response.data is not None:
        return [normalize_record(record) for record in response.data]

    if response.error is not None:
        logger.warning(f'AviationStack logical error: code={response.error.code} info={response.error.info}')
        raise FlightSearchError(response.error.info or GENERIC_PROVIDER_ERROR)

    logger.info('AviationStack response had neither data nor error; treating as no results')
    return []


class FlightSearchService:
    """
    Flight lookups against the provider or the mock dataset.

    Args:
        dataset: Reference data used when the provider isn't configured
        client: AviationStack client; None or an unconfigured client
                means mock-only mode
        mock_fallback: When False, lookups without a configured key raise
                       ConfigurationError instead of using mock data
    """

    def __init__(
        self,
        dataset: ReferenceDataset,
        client: Optional[AviationStackClient] = None,
        mock_fallback: bool = True,
    ):
        self.dataset = dataset
        self.client = client
        self.mock_fallback = mock_fallback

        if not self.has_upstream:
            if mock_fallback:
                logger.info('Flight search running in mock mode')
            else:
                logger.warning('Flight search has no API key and mock fallback is disabled')

    @property
    def has_upstream(self) -> bool:
        return self.client is not None and self.client.is_configured

    def list_all(self) -> List[Flight]:
        """
        Mock flight list for the no-parameter query.

        Empty in live mode so mock records never mix with provider data.
        """
        if self.has_upstream:
            return []
        return list(self.dataset.flights)

    def search_by_number(self, flight_number: Optional[str]) -> List[Flight]:
        query = normalize_flight_number(flight_number)
        if not query:
            return []

        if self.has_upstream:
            return self._fetch({'flight_iata': query})

        self._require_fallback()
        return [f for f in self.dataset.flights if f.matches_number(query)]

    def search_by_route(
        self,
        flight_date: Optional[str],
        dep_iata: Optional[str],
        arr_iata: Optional[str],
    ) -> List[Flight]:
        flight_date = (flight_date or '').strip()
        dep_iata = (dep_iata or '').strip().upper()
        arr_iata = (arr_iata or '').strip().upper()

        # Incomplete route is "no results", not an error
        if not (flight_date and dep_iata and arr_iata):
            return []

        if self.has_upstream:
            return self._fetch({
                'flight_date': flight_date,
                'dep_iata': dep_iata,
                'arr_iata': arr_iata,
            })

        self._require_fallback()
        return [
            f for f in self.dataset.flights
            if f.origin_iata == dep_iata
            and f.destination_iata == arr_iata
            and f.departure_date == flight_date
        ]

    def suggest(self, partial: Optional[str]) -> List[Flight]:
        """
        Did-you-mean list for the flight number field.

        With the provider configured this is the same exact lookup as
        search_by_number; against mock data it is a substring match.
        """
        query = normalize_flight_number(partial)
        if not query:
            return []

        if self.has_upstream:
            return self.search_by_number(query)

        self._require_fallback()
        return [
            f for f in self.dataset.flights
            if query in normalize_flight_number(f.flight_number)
        ]

    def _require_fallback(self) -> None:
        if not self.mock_fallback:
            raise ConfigurationError()

    def _fetch(self, params: dict) -> List[Flight]:
        logger.info(f'Fetching flights from AviationStack: {params}')
        try:
            payload = self.client.get_flights(params)
        except AviationStackError as e:
            # Status and body were logged by the client
            logger.error(f'Flight lookup failed for {params}: {e}')
            raise FlightSearchError(GENERIC_FETCH_ERROR) from e

        flights = normalize_payload(payload)
        logger.info(f'AviationStack returned {len(flights)} flights for {params}')
        return flights

    @property
    def stats(self) -> dict:
        """Get service statistics."""
        return {
            'api_configured': self.has_upstream,
            'mock_fallback': self.mock_fallback,
            'mock_flights': len(self.dataset.flights),
            'upstream': self.client.stats if self.client is not None else None,
        }
