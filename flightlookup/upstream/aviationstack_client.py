"""
AviationStack API client.

Handles communication with the AviationStack REST API:
- Access key authentication (passed as the access_key query parameter)
- /flights queries by flight number or by date + route
- Short-lived response caching to avoid duplicate calls
- Error translation into a single exception type

A lookup is exactly one GET. There are no retries: the caller surfaces
failures to the user instead.
"""

import logging
from typing import Any, Dict, Optional

import requests

from flightlookup.cache import ResponseCache, make_key
from flightlookup.config import config

logger = logging.getLogger(__name__)


class AviationStackError(Exception):
    """
    Raised when the provider can't be reached or answers with non-2xx.

    Attributes:
        status_code: HTTP status, or None for network failures
        body: Raw response text (for logs only, never shown to users)
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AviationStackClient:
    """
    Client for the AviationStack /flights endpoint.

    Returns decoded JSON documents; shaping them into Flight records is
    the search service's job.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = 'https://api.aviationstack.com/v1',
        timeout: float = 10,
        cache: Optional[ResponseCache] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.cache = cache if cache is not None else ResponseCache()
        self.session = session or requests.Session()
        self._request_count = 0

        if not self.api_key:
            logger.warning('AviationStack API key not configured - live lookups disabled')

    @classmethod
    def from_config(cls) -> 'AviationStackClient':
        """Create client from application configuration."""
        return cls(
            api_key=config.aviationstack.api_key,
            base_url=config.aviationstack.base_url,
            timeout=config.aviationstack.timeout_seconds,
            cache=ResponseCache(),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def get_flights(self, params: Dict[str, str]) -> Any:
        """
        Fetch /flights for the given query parameters.

        Args:
            params: Provider query, e.g. {'flight_iata': 'AA123'} or
                    {'flight_date': ..., 'dep_iata': ..., 'arr_iata': ...}

        Returns:
            Decoded JSON document (usually a dict with 'data' or 'error')

        Raises:
            AviationStackError on network failure, non-2xx status or a
            body that isn't JSON
        """
        key = make_key(params)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f'Upstream cache hit for {dict(key)}')
            return cached

        url = f'{self.base_url}/flights'
        query = dict(params, access_key=self.api_key)

        # Never log the access key
        logger.debug(f'Fetching flights: {url} params={params}')

        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
            self._request_count += 1
        except requests.exceptions.Timeout as e:
            logger.error('AviationStack API timeout')
            raise AviationStackError('AviationStack request timed out') from e
        except requests.exceptions.RequestException as e:
            logger.error(f'AviationStack request failed: {e}')
            raise AviationStackError('AviationStack request failed') from e

        if not 200 <= response.status_code < 300:
            logger.error(f'AviationStack API error: {response.status_code} {response.text}')
            raise AviationStackError(
                f'AviationStack returned HTTP {response.status_code}',
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f'AviationStack returned invalid JSON: {response.text[:200]}')
            raise AviationStackError(
                'AviationStack returned invalid JSON',
                status_code=response.status_code,
                body=response.text,
            ) from e

        # Logical errors ride on 200 responses; don't pin them in the cache
        if isinstance(payload, dict) and 'error' in payload and 'data' not in payload:
            return payload

        self.cache.set(key, payload)
        return payload

    @property
    def stats(self) -> dict:
        """Get client statistics."""
        return {
            'configured': self.is_configured,
            'requests': self._request_count,
            'cache': self.cache.stats,
        }
