"""
HTTP wrapper around the Flight Lookup REST API.

Used by the lookup client; returns model objects instead of raw JSON.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from flightlookup.models import Airport, Flight

logger = logging.getLogger(__name__)


class LookupApiError(Exception):
    """Request never completed, or the service answered with non-2xx."""


class LookupApi:
    """
    Thin client for /api/flights and /api/airports.

    Args:
        base_url: Service root, e.g. 'http://localhost:5000'
        session: Optional requests.Session (shared connection pool)
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Dict[str, str]) -> Any:
        url = f'{self.base_url}{path}'
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            logger.error(f'Lookup API error: {e.response.status_code} for {path}')
            raise LookupApiError(f'HTTP {e.response.status_code}') from e
        except requests.exceptions.RequestException as e:
            logger.error(f'Lookup API request failed: {e}')
            raise LookupApiError(str(e)) from e
        except ValueError as e:
            logger.error(f'Lookup API returned invalid JSON for {path}')
            raise LookupApiError('Invalid JSON response') from e

    def _flights(self, path: str, params: Dict[str, str]) -> List[Flight]:
        data = self._get(path, params)
        if not isinstance(data, list):
            raise LookupApiError('Unexpected response shape')
        return [Flight.from_dict(item) for item in data if isinstance(item, dict)]

    def search_flights(self, flight_number: str) -> List[Flight]:
        return self._flights('/api/flights', {'flightNumber': flight_number})

    def search_route(self, flight_date: str, dep_iata: str, arr_iata: str) -> List[Flight]:
        return self._flights('/api/flights', {
            'flight_date': flight_date,
            'dep_iata': dep_iata,
            'arr_iata': arr_iata,
        })

    def flight_suggestions(self, partial: str) -> List[Flight]:
        return self._flights('/api/flights/suggestions', {'flightNumber': partial})

    def search_airports(self, query: str) -> List[Airport]:
        data = self._get('/api/airports', {'search': query})
        if not isinstance(data, list):
            raise LookupApiError('Unexpected response shape')
        return [Airport.from_dict(item) for item in data if isinstance(item, dict)]
