"""
Flight Lookup Flask Application.

Main entry point for the web service. Initializes:
- Reference dataset
- AviationStack client and search services
- API routes

Usage:
    python -m flightlookup.app

Or with gunicorn:
    gunicorn 'flightlookup.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from flightlookup.api import airports_bp, flights_bp, status_bp
from flightlookup.config import config
from flightlookup.data import ReferenceDataset, default_dataset
from flightlookup.services import AirportSearchService, FlightSearchService
from flightlookup.upstream import AviationStackClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    dataset: Optional[ReferenceDataset] = None,
    client: Optional[AviationStackClient] = None,
    mock_fallback: Optional[bool] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        dataset: Reference data for mock lookups (built-in data if None)
        client: AviationStack client (created from config if None)
        mock_fallback: Serve mock data without an API key
                       (config.search.mock_fallback if None)

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    dataset = dataset or default_dataset()
    if client is None:
        client = AviationStackClient.from_config()
    if mock_fallback is None:
        mock_fallback = config.search.mock_fallback

    app.config['AIRPORT_SEARCH_SERVICE'] = AirportSearchService(dataset)
    app.config['FLIGHT_SEARCH_SERVICE'] = FlightSearchService(
        dataset,
        client=client,
        mock_fallback=mock_fallback,
    )

    logger.info(
        f'Flight lookup ready ({"live" if client.is_configured else "mock"} mode, '
        f'{len(dataset.airports)} airports, {len(dataset.flights)} mock flights)'
    )

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(airports_bp)
    app.register_blueprint(status_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting Flight Lookup on http://localhost:{config.port}')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
