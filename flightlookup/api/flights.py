"""
Flight lookup API endpoints.

Provides endpoints for:
- GET /api/flights?flightNumber=AA123 - Lookup by flight number
- GET /api/flights?flight_date=&dep_iata=&arr_iata= - Lookup by route
- GET /api/flights - Full mock flight list
- GET /api/flights/suggestions?flightNumber=AA - Did-you-mean list
"""

import logging
from datetime import datetime
from typing import List

from flask import Blueprint, current_app, jsonify, request

from flightlookup.models import Flight
from flightlookup.services import FlightSearchError, FlightSearchService

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')

ROUTE_PARAMS = ('flight_date', 'dep_iata', 'arr_iata')

# Upstream revalidation hint
CACHE_CONTROL = 'public, max-age=60'


def _service() -> FlightSearchService:
    return current_app.config['FLIGHT_SEARCH_SERVICE']


def _flights_response(flights: List[Flight]):
    response = jsonify([f.to_dict() for f in flights])
    response.headers['Cache-Control'] = CACHE_CONTROL
    return response


def _error_response(error: FlightSearchError):
    return jsonify({'error': error.message}), 500


def _is_iso_date(value: str) -> bool:
    try:
        datetime.strptime(value, '%Y-%m-%d')
    except ValueError:
        return False
    return len(value) == 10


@flights_bp.route('', methods=['GET'])
def search_flights():
    """
    Search flights by number or by route.

    Query parameters:
    - flightNumber: IATA flight code, matched case-insensitively
    - flight_date, dep_iata, arr_iata: route lookup; all three required,
      any missing yields an empty list

    A non-empty flightNumber takes precedence when both forms are given.
    With no usable parameters the mock list is returned.
    """
    service = _service()
    flight_number = request.args.get('flightNumber')

    try:
        if flight_number:
            flights = service.search_by_number(flight_number)
        elif any(name in request.args for name in ROUTE_PARAMS):
            flight_date, dep_iata, arr_iata = (
                request.args.get(name, '').strip() for name in ROUTE_PARAMS
            )
            # Incomplete route is "no results" whatever the date looks like
            if not (flight_date and dep_iata and arr_iata):
                return _flights_response([])
            if not _is_iso_date(flight_date):
                return jsonify({'error': 'flight_date must be YYYY-MM-DD'}), 400

            flights = service.search_by_route(flight_date, dep_iata, arr_iata)
        else:
            flights = service.list_all()
    except FlightSearchError as e:
        logger.error(f'Flight search failed: {e}')
        return _error_response(e)

    return _flights_response(flights)


@flights_bp.route('/suggestions', methods=['GET'])
def flight_suggestions():
    """
    Suggestions for a partially typed flight number.

    Query parameters:
    - flightNumber: partial flight code
    """
    try:
        flights = _service().suggest(request.args.get('flightNumber'))
    except FlightSearchError as e:
        logger.error(f'Flight suggestions failed: {e}')
        return _error_response(e)

    return _flights_response(flights)
