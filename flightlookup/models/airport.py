"""
Airport model - static reference data for autocomplete.
"""

from dataclasses import dataclass
from typing import Any, Dict

from flightlookup.models.flight import format_location


@dataclass(frozen=True)
class Airport:
    """
    Airport reference record.

    Fields:
        iata: 3-letter IATA code, uppercase by convention (e.g., 'JFK')
        name: Airport name (e.g., 'John F. Kennedy International Airport')
        city: City served
        country: Country name
    """
    iata: str
    name: str
    city: str
    country: str

    @property
    def label(self) -> str:
        """Text placed in a route field when this airport is selected."""
        return format_location(self.iata, self.name)

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on code, name or city."""
        needle = needle.lower()
        return (
            needle in self.iata.lower()
            or needle in self.name.lower()
            or needle in self.city.lower()
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'iata': self.iata,
            'name': self.name,
            'city': self.city,
            'country': self.country,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Airport':
        return cls(
            iata=data.get('iata') or '',
            name=data.get('name') or '',
            city=data.get('city') or '',
            country=data.get('country') or '',
        )
