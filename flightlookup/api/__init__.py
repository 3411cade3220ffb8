"""
API module for Flight Lookup.

Provides REST endpoints for:
- Flight lookups and suggestions
- Airport autocomplete
- Service status
"""

from flightlookup.api.airports import airports_bp
from flightlookup.api.flights import flights_bp
from flightlookup.api.status import status_bp

__all__ = ['airports_bp', 'flights_bp', 'status_bp']
