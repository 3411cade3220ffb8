"""
Flight Lookup Package.

Flight status lookup by flight number or by route, built with Flask and
the AviationStack API, with static mock data when no key is configured.

Modules:
    api/         REST endpoints for flights, airports and service status
    models/      Flight and Airport records, AviationStack payload schema
    data/        Static mock airports and flights
    services/    Airport autocomplete and flight search with normalization
    upstream/    AviationStack HTTP client
    client/      Lookup client: debounced autocomplete and display state
    cache.py     Thread-safe TTL cache for upstream responses
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
