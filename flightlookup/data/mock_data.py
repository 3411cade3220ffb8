"""
Static reference data used when live lookups are unavailable.

AviationStack's free tier has no airports endpoint, so airport
autocomplete always runs against this list. Flights are used as the
fallback dataset when no API key is configured.

Usage:
    from flightlookup.data import default_dataset

    dataset = default_dataset()
    dataset.airports[0].iata  # 'JFK'
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from flightlookup.models import Airport, Flight


# (IATA, Name, City, Country)
AIRPORT_ROWS: Tuple[Tuple[str, str, str, str], ...] = (
    ('JFK', 'John F. Kennedy International Airport', 'New York', 'United States'),
    ('LHR', 'Heathrow Airport', 'London', 'United Kingdom'),
    ('LAX', 'Los Angeles International Airport', 'Los Angeles', 'United States'),
    ('CDG', 'Charles de Gaulle Airport', 'Paris', 'France'),
    ('DXB', 'Dubai International Airport', 'Dubai', 'United Arab Emirates'),
    ('ORD', "O'Hare International Airport", 'Chicago', 'United States'),
    ('SFO', 'San Francisco International Airport', 'San Francisco', 'United States'),
    ('DEL', 'Indira Gandhi International Airport', 'New Delhi', 'India'),
    ('BOM', 'Chhatrapati Shivaji International Airport', 'Mumbai', 'India'),
    ('BLR', 'Kempegowda International Airport', 'Bangalore', 'India'),
    ('COK', 'Cochin International Airport', 'Kochi', 'India'),
    ('SYD', 'Sydney Airport', 'Sydney', 'Australia'),
    ('SIN', 'Singapore Changi Airport', 'Singapore', 'Singapore'),
    ('HKG', 'Hong Kong International Airport', 'Hong Kong', 'Hong Kong'),
    ('NRT', 'Narita International Airport', 'Tokyo', 'Japan'),
)


MOCK_FLIGHTS: Tuple[Flight, ...] = (
    Flight(
        flight_number='AA123',
        airline='American Airlines',
        start_location='JFK - New York',
        end_location='LHR - London',
        start_time='2025-12-18T18:30:00',
        end_time='2025-12-19T06:30:00',
        timezone_start='EST',
        timezone_end='GMT',
        status='On Time',
    ),
    Flight(
        flight_number='BA456',
        airline='British Airways',
        start_location='LHR - London',
        end_location='DXB - Dubai',
        start_time='2025-12-20T09:15:00',
        end_time='2025-12-20T20:15:00',
        timezone_start='GMT',
        timezone_end='GST',
        status='Delayed',
    ),
    Flight(
        flight_number='DL789',
        airline='Delta',
        start_location='LAX - Los Angeles',
        end_location='HND - Tokyo',
        start_time='2025-12-21T11:00:00',
        end_time='2025-12-22T15:30:00',
        timezone_start='PST',
        timezone_end='JST',
        status='Scheduled',
    ),
    Flight(
        flight_number='QF1',
        airline='Qantas',
        start_location='SYD - Sydney',
        end_location='SIN - Singapore',
        start_time='2025-12-22T16:00:00',
        end_time='2025-12-22T21:20:00',
        timezone_start='AEDT',
        timezone_end='SGT',
        status='On Time',
    ),
)


@dataclass(frozen=True)
class ReferenceDataset:
    """
    Read-only airports and flights handed to the search services.

    Services receive the dataset at construction time instead of reading
    module globals, so tests can inject their own fixtures.
    """
    airports: Tuple[Airport, ...] = ()
    flights: Tuple[Flight, ...] = ()

    @classmethod
    def build(cls, airports: Iterable[Airport] = (), flights: Iterable[Flight] = ()) -> 'ReferenceDataset':
        return cls(airports=tuple(airports), flights=tuple(flights))


def default_dataset() -> ReferenceDataset:
    """Return the built-in mock dataset."""
    return ReferenceDataset.build(
        airports=(Airport(*row) for row in AIRPORT_ROWS),
        flights=MOCK_FLIGHTS,
    )
