"""
Lookup client - orchestrates user input into searches.

Two mutually exclusive modes:
- FLIGHT_NUMBER: typing debounces (500ms) into a suggestions query;
  picking a suggestion shows that record without a new search
- ROUTE: origin and destination fields each debounce (300ms) into
  airport autocomplete; submit builds the route query from the IATA
  prefix of each field

Per-field state machine:
    IDLE -> DEBOUNCE_PENDING          (keystroke)
    DEBOUNCE_PENDING -> SUGGESTIONS_SHOWN  (timer fires, non-empty result)
    DEBOUNCE_PENDING -> IDLE          (timer fires, short query or no result)
    any -> RESULT_SHOWN               (submit or suggestion pick)
    RESULT_SHOWN -> DEBOUNCE_PENDING  (new keystroke)

Every request is tagged with a per-channel sequence number. A response
that arrives after a newer request on the same channel was issued is
discarded, so a slow stale response can't overwrite fresher state.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional

from flightlookup.client.api import LookupApi, LookupApiError
from flightlookup.client.debounce import Debouncer, TimerFactory
from flightlookup.client.formatting import extract_iata
from flightlookup.config import config
from flightlookup.models import Airport, Flight

logger = logging.getLogger(__name__)

NO_FLIGHT_NUMBER_RESULTS = 'No flights found with that number.'
NO_ROUTE_RESULTS = 'No flights found for this route on the selected date.'
GENERIC_ERROR = 'An error occurred while fetching flight details.'


class SearchMode(str, Enum):
    FLIGHT_NUMBER = 'flight_number'
    ROUTE = 'route'


class FieldState(str, Enum):
    IDLE = 'idle'
    DEBOUNCE_PENDING = 'debounce_pending'
    SUGGESTIONS_SHOWN = 'suggestions_shown'
    RESULT_SHOWN = 'result_shown'


FLIGHT_FIELD = 'flight_number'
ORIGIN_FIELD = 'origin'
DESTINATION_FIELD = 'destination'
RESULTS_CHANNEL = 'results'


def _initial_fields() -> Dict[str, FieldState]:
    return {
        FLIGHT_FIELD: FieldState.IDLE,
        ORIGIN_FIELD: FieldState.IDLE,
        DESTINATION_FIELD: FieldState.IDLE,
    }


@dataclass
class DisplayState:
    """Everything a UI needs to render the lookup form and results."""
    mode: SearchMode = SearchMode.FLIGHT_NUMBER
    flight_number: str = ''
    origin: str = ''
    destination: str = ''
    flight_date: str = ''
    flight_suggestions: List[Flight] = field(default_factory=list)
    origin_suggestions: List[Airport] = field(default_factory=list)
    destination_suggestions: List[Airport] = field(default_factory=list)
    results: List[Flight] = field(default_factory=list)
    message: str = ''
    loading: bool = False
    searched: bool = False
    fields: Dict[str, FieldState] = field(default_factory=_initial_fields)

    def copy(self) -> 'DisplayState':
        return replace(
            self,
            flight_suggestions=list(self.flight_suggestions),
            origin_suggestions=list(self.origin_suggestions),
            destination_suggestions=list(self.destination_suggestions),
            results=list(self.results),
            fields=dict(self.fields),
        )


class LookupClient:
    """
    Drives a DisplayState from user events.

    Timer callbacks run on their own threads (threading.Timer), so all
    state changes go through a re-entrant lock. Network calls are made
    outside the lock.
    """

    def __init__(
        self,
        api: LookupApi,
        flight_debounce: Optional[float] = None,
        airport_debounce: Optional[float] = None,
        min_query_length: Optional[int] = None,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self.api = api
        self.min_query_length = (
            min_query_length if min_query_length is not None else config.search.airport_min_query_length
        )
        flight_delay = flight_debounce if flight_debounce is not None else config.client.flight_debounce_seconds
        airport_delay = airport_debounce if airport_debounce is not None else config.client.airport_debounce_seconds

        self._state = DisplayState()
        self._lock = threading.RLock()
        self._sequence: Dict[str, int] = {}
        self._listeners: List[Callable[[DisplayState], None]] = []

        self._debouncers = {
            FLIGHT_FIELD: Debouncer(flight_delay, self._load_flight_suggestions, timer_factory),
            ORIGIN_FIELD: Debouncer(
                airport_delay, lambda text: self._load_airport_suggestions(ORIGIN_FIELD, text), timer_factory
            ),
            DESTINATION_FIELD: Debouncer(
                airport_delay, lambda text: self._load_airport_suggestions(DESTINATION_FIELD, text), timer_factory
            ),
        }

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> DisplayState:
        """Snapshot of the current display state."""
        with self._lock:
            return self._state.copy()

    def add_listener(self, callback: Callable[[DisplayState], None]) -> None:
        """Register a callback invoked with a snapshot after each change."""
        with self._lock:
            self._listeners.append(callback)

    def _notify(self) -> None:
        with self._lock:
            snapshot = self._state.copy()
            listeners = list(self._listeners)
        for callback in listeners:
            try:
                callback(snapshot)
            except Exception as e:
                logger.error(f'Display listener failed: {e}')

    def _issue(self, channel: str) -> int:
        with self._lock:
            seq = self._sequence.get(channel, 0) + 1
            self._sequence[channel] = seq
            return seq

    def _is_current(self, channel: str, seq: int) -> bool:
        return self._sequence.get(channel, 0) == seq

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------

    def set_mode(self, mode: SearchMode) -> None:
        """Switch search mode, dropping pending work and previous output."""
        mode = SearchMode(mode)
        for debouncer in self._debouncers.values():
            debouncer.cancel()

        with self._lock:
            for channel in (FLIGHT_FIELD, ORIGIN_FIELD, DESTINATION_FIELD, RESULTS_CHANNEL):
                self._issue(channel)
            self._state.mode = mode
            self._state.flight_suggestions = []
            self._state.origin_suggestions = []
            self._state.destination_suggestions = []
            self._state.results = []
            self._state.message = ''
            self._state.loading = False
            self._state.searched = False
            self._state.fields = _initial_fields()
        self._notify()

    # ------------------------------------------------------------------
    # Flight number mode
    # ------------------------------------------------------------------

    def type_flight_number(self, text: str) -> None:
        with self._lock:
            self._state.flight_number = text
            self._state.fields[FLIGHT_FIELD] = FieldState.DEBOUNCE_PENDING
        self._debouncers[FLIGHT_FIELD].trigger(text)
        self._notify()

    def _load_flight_suggestions(self, text: str) -> None:
        query = text.strip()
        if len(query) < self.min_query_length:
            with self._lock:
                self._issue(FLIGHT_FIELD)
                self._state.flight_suggestions = []
                self._state.fields[FLIGHT_FIELD] = FieldState.IDLE
            self._notify()
            return

        seq = self._issue(FLIGHT_FIELD)
        try:
            suggestions = self.api.flight_suggestions(query)
        except LookupApiError as e:
            logger.warning(f'Flight suggestions failed for {query!r}: {e}')
            suggestions = []

        with self._lock:
            if not self._is_current(FLIGHT_FIELD, seq):
                logger.debug(f'Discarding stale flight suggestions for {query!r}')
                return
            self._state.flight_suggestions = suggestions
            self._state.fields[FLIGHT_FIELD] = (
                FieldState.SUGGESTIONS_SHOWN if suggestions else FieldState.IDLE
            )
        self._notify()

    def select_flight_suggestion(self, flight: Flight) -> None:
        """Show the picked record directly, bypassing a fresh search."""
        self._debouncers[FLIGHT_FIELD].cancel()
        with self._lock:
            self._issue(FLIGHT_FIELD)
            self._issue(RESULTS_CHANNEL)
            self._state.flight_number = flight.flight_number
            self._state.flight_suggestions = []
            self._state.results = [flight]
            self._state.message = ''
            self._state.loading = False
            self._state.searched = True
            self._state.fields[FLIGHT_FIELD] = FieldState.RESULT_SHOWN
        self._notify()

    # ------------------------------------------------------------------
    # Route mode
    # ------------------------------------------------------------------

    def type_origin(self, text: str) -> None:
        self._type_airport(ORIGIN_FIELD, text)

    def type_destination(self, text: str) -> None:
        self._type_airport(DESTINATION_FIELD, text)

    def set_date(self, value: str) -> None:
        with self._lock:
            self._state.flight_date = value
        self._notify()

    def _type_airport(self, field_name: str, text: str) -> None:
        with self._lock:
            setattr(self._state, field_name, text)
            self._state.fields[field_name] = FieldState.DEBOUNCE_PENDING
        self._debouncers[field_name].trigger(text)
        self._notify()

    def _load_airport_suggestions(self, field_name: str, text: str) -> None:
        suggestions_attr = f'{field_name}_suggestions'
        query = text.strip()
        if len(query) < self.min_query_length:
            with self._lock:
                self._issue(field_name)
                setattr(self._state, suggestions_attr, [])
                self._state.fields[field_name] = FieldState.IDLE
            self._notify()
            return

        seq = self._issue(field_name)
        try:
            airports = self.api.search_airports(query)
        except LookupApiError as e:
            logger.warning(f'Airport search failed for {query!r}: {e}')
            airports = []

        with self._lock:
            if not self._is_current(field_name, seq):
                logger.debug(f'Discarding stale airport suggestions for {query!r}')
                return
            setattr(self._state, suggestions_attr, airports)
            self._state.fields[field_name] = (
                FieldState.SUGGESTIONS_SHOWN if airports else FieldState.IDLE
            )
        self._notify()

    def select_airport(self, field_name: str, airport: Airport) -> None:
        """Fill origin or destination with 'IATA - Name'."""
        if field_name not in (ORIGIN_FIELD, DESTINATION_FIELD):
            raise ValueError(f'Unknown airport field: {field_name}')

        self._debouncers[field_name].cancel()
        with self._lock:
            self._issue(field_name)
            setattr(self._state, field_name, airport.label)
            setattr(self._state, f'{field_name}_suggestions', [])
            self._state.fields[field_name] = FieldState.IDLE
        self._notify()

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    def submit(self) -> DisplayState:
        """
        Run the final search for the current mode.

        Replaces suggestions with results. Returns the resulting state.
        """
        with self._lock:
            mode = self._state.mode
            flight_number = self._state.flight_number.strip()
            flight_date = self._state.flight_date.strip()
            origin = extract_iata(self._state.origin)
            destination = extract_iata(self._state.destination)

        if mode == SearchMode.FLIGHT_NUMBER and not flight_number:
            return self.state

        touched = [FLIGHT_FIELD] if mode == SearchMode.FLIGHT_NUMBER else [ORIGIN_FIELD, DESTINATION_FIELD]
        for name in touched:
            self._debouncers[name].cancel()

        with self._lock:
            for name in touched:
                self._issue(name)
            seq = self._issue(RESULTS_CHANNEL)
            self._state.flight_suggestions = []
            self._state.origin_suggestions = []
            self._state.destination_suggestions = []
            self._state.results = []
            self._state.message = ''
            self._state.loading = True
            self._state.searched = True
        self._notify()

        error = None
        results: List[Flight] = []
        try:
            if mode == SearchMode.FLIGHT_NUMBER:
                results = self.api.search_flights(flight_number)
            else:
                results = self.api.search_route(flight_date, origin, destination)
        except LookupApiError as e:
            logger.error(f'Flight search failed: {e}')
            error = e

        with self._lock:
            if not self._is_current(RESULTS_CHANNEL, seq):
                logger.debug('Discarding stale search results')
                return self._state.copy()

            self._state.loading = False
            self._state.results = results
            if error is not None:
                self._state.message = GENERIC_ERROR
            elif not results:
                self._state.message = (
                    NO_FLIGHT_NUMBER_RESULTS if mode == SearchMode.FLIGHT_NUMBER else NO_ROUTE_RESULTS
                )
            for name in touched:
                self._state.fields[name] = FieldState.RESULT_SHOWN
        self._notify()
        return self.state

    def close(self) -> None:
        """Cancel pending timers."""
        for debouncer in self._debouncers.values():
            debouncer.cancel()
