"""
Mock data store.

Static airports and flights used as a fallback when live lookup is
unavailable.
"""

from flightlookup.data.mock_data import AIRPORT_ROWS, MOCK_FLIGHTS, ReferenceDataset, default_dataset

__all__ = ['AIRPORT_ROWS', 'MOCK_FLIGHTS', 'ReferenceDataset', 'default_dataset']
