"""
Configuration management for Flight Lookup.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    """Parse a boolean flag such as 'true', '1' or 'no'."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    """Parse an integer setting, falling back to default on garbage."""
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _api_key_from_env() -> Optional[str]:
    # Older deployments used the underscored spelling
    return os.getenv('AVIATIONSTACK_API_KEY') or os.getenv('AVIATION_STACK_API_KEY') or None


@dataclass(frozen=True)
class AviationStackConfig:
    """AviationStack API configuration for live flight lookups."""
    api_key: Optional[str] = field(default_factory=_api_key_from_env)
    base_url: str = field(
        default_factory=lambda: os.getenv('AVIATIONSTACK_BASE_URL', 'https://api.aviationstack.com/v1')
    )
    timeout_seconds: int = field(default_factory=lambda: _env_int('AVIATIONSTACK_TIMEOUT_SECONDS', 10))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class CacheConfig:
    """Upstream response cache settings."""
    ttl_seconds: int = field(default_factory=lambda: _env_int('FLIGHT_CACHE_TTL_SECONDS', 60))
    max_entries: int = 256


@dataclass(frozen=True)
class SearchConfig:
    """Search limits and fallback behaviour."""
    mock_fallback: bool = field(default_factory=lambda: _env_bool('FLIGHT_MOCK_FALLBACK', True))
    airport_min_query_length: int = field(default_factory=lambda: _env_int('AIRPORT_MIN_QUERY_LENGTH', 2))
    airport_max_results: int = field(default_factory=lambda: _env_int('AIRPORT_MAX_RESULTS', 10))


@dataclass(frozen=True)
class ClientConfig:
    """Lookup client debounce timings."""
    flight_debounce_ms: int = field(default_factory=lambda: _env_int('FLIGHT_DEBOUNCE_MS', 500))
    airport_debounce_ms: int = field(default_factory=lambda: _env_int('AIRPORT_DEBOUNCE_MS', 300))

    @property
    def flight_debounce_seconds(self) -> float:
        return self.flight_debounce_ms / 1000.0

    @property
    def airport_debounce_seconds(self) -> float:
        return self.airport_debounce_ms / 1000.0


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    aviationstack: AviationStackConfig
    cache: CacheConfig
    search: SearchConfig
    client: ClientConfig

    # Flask settings
    secret_key: str
    debug: bool
    port: int


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        aviationstack=AviationStackConfig(),
        cache=CacheConfig(),
        search=SearchConfig(),
        client=ClientConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=_env_int('PORT', 5000),
    )


# Singleton instance
config = load_config()
