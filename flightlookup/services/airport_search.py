"""
Airport search service - autocomplete over the static airport list.
"""

import logging
from typing import List, Optional

from flightlookup.config import config
from flightlookup.data import ReferenceDataset
from flightlookup.models import Airport

logger = logging.getLogger(__name__)


class AirportSearchService:
    """
    Case-insensitive substring search over code, name and city.

    Results keep dataset order; there is no ranking. Queries shorter
    than min_query_length return nothing to avoid overly broad matches.
    """

    def __init__(
        self,
        dataset: ReferenceDataset,
        min_query_length: Optional[int] = None,
        max_results: Optional[int] = None,
    ):
        self.dataset = dataset
        self.min_query_length = (
            min_query_length if min_query_length is not None else config.search.airport_min_query_length
        )
        self.max_results = max_results if max_results is not None else config.search.airport_max_results

    def search(self, query: Optional[str]) -> List[Airport]:
        if not query or len(query) < self.min_query_length:
            return []

        matches = []
        for airport in self.dataset.airports:
            if airport.matches(query):
                matches.append(airport)
                if len(matches) >= self.max_results:
                    break

        logger.debug(f'Airport search {query!r}: {len(matches)} matches')
        return matches
