"""
Status API endpoint.

Provides:
- GET /api/status - Provider configuration and cache statistics

Used to check whether a deployment picked up its AviationStack key.
The key itself is never returned.
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from flightlookup.config import config

logger = logging.getLogger(__name__)

status_bp = Blueprint('status', __name__, url_prefix='/api/status')


@status_bp.route('', methods=['GET'])
def get_status():
    """
    Get service status.

    Returns:
    - Whether live lookups are enabled
    - Length of the configured key (0 if absent)
    - Mock fallback setting and upstream cache statistics
    """
    service = current_app.config['FLIGHT_SEARCH_SERVICE']
    api_key = service.client.api_key if service.client is not None else None
    stats = service.stats

    return jsonify({
        'status': 'live' if service.has_upstream else 'mock',
        'provider': {
            'has_api_key': bool(api_key),
            'key_length': len(api_key) if api_key else 0,
            'base_url': service.client.base_url if service.client is not None else None,
        },
        'search': stats,
        'config': {
            'debug': config.debug,
            'cache_ttl_seconds': config.cache.ttl_seconds,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
