"""
Airport autocomplete endpoint.

- GET /api/airports?search=jo - Up to 10 matching airports
"""

from flask import Blueprint, current_app, jsonify, request

airports_bp = Blueprint('airports', __name__, url_prefix='/api/airports')


@airports_bp.route('', methods=['GET'])
def search_airports():
    """
    Search airports by code, name or city.

    Returns an empty list when search is missing or shorter than
    two characters.
    """
    service = current_app.config['AIRPORT_SEARCH_SERVICE']
    airports = service.search(request.args.get('search'))
    return jsonify([a.to_dict() for a in airports])
