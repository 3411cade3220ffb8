"""
Partial schema for AviationStack /flights responses.

Only the fields the lookup uses are modelled. Every field is optional:
the provider omits keys freely and sometimes sends null for nested
objects. Parsing never raises; anything that isn't the expected shape
is treated as absent.

Relevant response layout:
    {
      "data": [
        {
          "flight_date": "2025-12-18",
          "flight_status": "scheduled",
          "departure": {"airport", "timezone", "iata", "scheduled", ...},
          "arrival":   {"airport", "timezone", "iata", "scheduled", ...},
          "airline":   {"name", "iata", "icao"},
          "flight":    {"number", "iata", "icao"}
        }
      ]
    }
    or
    {"error": {"code": "invalid_access_key", "info": "..."}}
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> Optional[str]:
    """Return stripped string or None for missing/blank/non-string values."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class UpstreamEndpoint:
    """Departure or arrival block."""
    iata: Optional[str] = None
    airport: Optional[str] = None
    timezone: Optional[str] = None
    scheduled: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> 'UpstreamEndpoint':
        raw = _mapping(raw)
        return cls(
            iata=_text(raw.get('iata')),
            airport=_text(raw.get('airport')),
            timezone=_text(raw.get('timezone')),
            scheduled=_text(raw.get('scheduled')),
        )


@dataclass(frozen=True)
class UpstreamAirline:
    name: Optional[str] = None
    iata: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> 'UpstreamAirline':
        raw = _mapping(raw)
        return cls(name=_text(raw.get('name')), iata=_text(raw.get('iata')))


@dataclass(frozen=True)
class UpstreamFlightIdent:
    iata: Optional[str] = None
    number: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> 'UpstreamFlightIdent':
        raw = _mapping(raw)
        return cls(iata=_text(raw.get('iata')), number=_text(raw.get('number')))


@dataclass(frozen=True)
class UpstreamFlightRecord:
    """One entry of the provider's data array."""
    flight: UpstreamFlightIdent = field(default_factory=UpstreamFlightIdent)
    airline: UpstreamAirline = field(default_factory=UpstreamAirline)
    departure: UpstreamEndpoint = field(default_factory=UpstreamEndpoint)
    arrival: UpstreamEndpoint = field(default_factory=UpstreamEndpoint)
    flight_status: Optional[str] = None
    flight_date: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> 'UpstreamFlightRecord':
        raw = _mapping(raw)
        return cls(
            flight=UpstreamFlightIdent.from_dict(raw.get('flight')),
            airline=UpstreamAirline.from_dict(raw.get('airline')),
            departure=UpstreamEndpoint.from_dict(raw.get('departure')),
            arrival=UpstreamEndpoint.from_dict(raw.get('arrival')),
            flight_status=_text(raw.get('flight_status')),
            flight_date=_text(raw.get('flight_date')),
        )


@dataclass(frozen=True)
class UpstreamError:
    code: Optional[str] = None
    info: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> 'UpstreamError':
        raw = _mapping(raw)
        return cls(code=_text(raw.get('code')), info=_text(raw.get('info')))


@dataclass(frozen=True)
class UpstreamResponse:
    """
    Top-level provider document.

    data is None when the key was missing (as opposed to an empty list),
    so callers can tell "no results" from "no data field".
    """
    data: Optional[List[UpstreamFlightRecord]] = None
    error: Optional[UpstreamError] = None

    @classmethod
    def from_json(cls, payload: Any) -> 'UpstreamResponse':
        payload = _mapping(payload)

        data = None
        raw_data = payload.get('data')
        if isinstance(raw_data, list):
            data = [UpstreamFlightRecord.from_dict(item) for item in raw_data]

        error = None
        if payload.get('error') is not None:
            error = UpstreamError.from_dict(payload.get('error'))

        return cls(data=data, error=error)
