"""Tests for LookupClient and LookupApi against the real Flask app."""

import pytest
import requests

from conftest import FakeSession, FlaskSession
from flightlookup.client import (
    GENERIC_ERROR,
    NO_FLIGHT_NUMBER_RESULTS,
    NO_ROUTE_RESULTS,
    FieldState,
    LookupApi,
    LookupApiError,
    LookupClient,
    SearchMode,
)
from flightlookup.models import Airport, Flight


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)


@pytest.fixture
def api(flask_session):
    return LookupApi('http://testserver', session=flask_session)


@pytest.fixture
def lookup(api, timers):
    return LookupClient(api, flight_debounce=0.5, airport_debounce=0.3, min_query_length=2, timer_factory=timers)


class StubApi:
    """LookupApi stand-in whose calls can be interleaved by hand."""

    def __init__(self):
        self.flight_calls = []
        self.hook = None

    def flight_suggestions(self, partial):
        self.flight_calls.append(partial)
        if self.hook is not None:
            hook, self.hook = self.hook, None
            hook()
        return [Flight(flight_number=partial.upper())]

    def search_flights(self, flight_number):
        if self.hook is not None:
            hook, self.hook = self.hook, None
            hook()
        return [Flight(flight_number=flight_number.upper())]


# ---------------------------------------------------------------------------
# LookupApi
# ---------------------------------------------------------------------------

def test_api_search_flights(api):
    flights = api.search_flights('aa123')
    assert [f.flight_number for f in flights] == ['AA123']
    assert flights[0].status == 'On Time'


def test_api_search_airports(api):
    airports = api.search_airports('jo')
    assert any(a.iata == 'JFK' for a in airports)


def test_api_network_failure():
    api = LookupApi('http://testserver', session=FakeSession(requests.exceptions.ConnectionError('down')))
    with pytest.raises(LookupApiError):
        api.search_flights('AA123')


def test_api_server_error(dataset, offline_client):
    from flightlookup.app import create_app

    app = create_app(dataset=dataset, client=offline_client, mock_fallback=False)
    api = LookupApi('http://testserver', session=FlaskSession(app.test_client()))

    with pytest.raises(LookupApiError):
        api.search_flights('AA123')


# ---------------------------------------------------------------------------
# Flight number mode
# ---------------------------------------------------------------------------

def test_typing_debounces_to_single_query(lookup, flask_session, timers):
    lookup.type_flight_number('a')
    lookup.type_flight_number('aa')
    lookup.type_flight_number('aa1')

    assert lookup.state.fields['flight_number'] == FieldState.DEBOUNCE_PENDING
    assert flask_session.calls == []

    timers.fire_all()

    assert flask_session.calls == [{'path': '/api/flights/suggestions', 'params': {'flightNumber': 'aa1'}}]
    state = lookup.state
    assert [f.flight_number for f in state.flight_suggestions] == ['AA123']
    assert state.fields['flight_number'] == FieldState.SUGGESTIONS_SHOWN


def test_short_query_goes_idle_without_request(lookup, flask_session, timers):
    lookup.type_flight_number('a')
    timers.fire_all()

    assert flask_session.calls == []
    assert lookup.state.fields['flight_number'] == FieldState.IDLE


def test_no_suggestions_goes_idle(lookup, timers):
    lookup.type_flight_number('zz9')
    timers.fire_all()

    assert lookup.state.flight_suggestions == []
    assert lookup.state.fields['flight_number'] == FieldState.IDLE


def test_selecting_suggestion_skips_search(lookup, flask_session, timers):
    lookup.type_flight_number('ba4')
    timers.fire_all()
    suggestion = lookup.state.flight_suggestions[0]
    calls_before = len(flask_session.calls)

    lookup.select_flight_suggestion(suggestion)

    state = lookup.state
    assert state.results == [suggestion]
    assert state.flight_suggestions == []
    assert state.flight_number == 'BA456'
    assert state.fields['flight_number'] == FieldState.RESULT_SHOWN
    assert len(flask_session.calls) == calls_before


def test_keystroke_after_result_restarts(lookup, timers):
    lookup.select_flight_suggestion(Flight(flight_number='QF1'))
    lookup.type_flight_number('QF')
    assert lookup.state.fields['flight_number'] == FieldState.DEBOUNCE_PENDING


def test_submit_flight_number(lookup, timers):
    lookup.type_flight_number(' aa123 ')
    state = lookup.submit()

    assert [f.flight_number for f in state.results] == ['AA123']
    assert state.message == ''
    assert state.loading is False
    assert state.searched is True
    assert state.fields['flight_number'] == FieldState.RESULT_SHOWN
    # Pending suggestion timer was cancelled by submit
    assert timers.live() == []


def test_submit_flight_number_no_results(lookup):
    lookup.type_flight_number('ZZ999')
    state = lookup.submit()

    assert state.results == []
    assert state.message == NO_FLIGHT_NUMBER_RESULTS


def test_submit_blank_is_noop(lookup, flask_session):
    lookup.type_flight_number('   ')
    state = lookup.submit()

    assert state.searched is False
    assert flask_session.calls == []


def test_submit_failure_shows_generic_error(timers):
    api = LookupApi('http://testserver', session=FakeSession(requests.exceptions.ConnectionError('down')))
    lookup = LookupClient(api, min_query_length=2, timer_factory=timers)

    lookup.type_flight_number('AA123')
    state = lookup.submit()

    assert state.message == GENERIC_ERROR
    assert state.results == []
    assert state.loading is False


# ---------------------------------------------------------------------------
# Route mode
# ---------------------------------------------------------------------------

def test_airport_autocomplete_and_select(lookup, flask_session, timers):
    lookup.set_mode(SearchMode.ROUTE)
    lookup.type_origin('n')
    lookup.type_origin('ne')
    lookup.type_origin('new')
    timers.fire_all()

    assert flask_session.calls == [{'path': '/api/airports', 'params': {'search': 'new'}}]
    suggestions = lookup.state.origin_suggestions
    assert [a.iata for a in suggestions] == ['JFK', 'DEL']
    assert lookup.state.fields['origin'] == FieldState.SUGGESTIONS_SHOWN

    lookup.select_airport('origin', suggestions[0])
    state = lookup.state
    assert state.origin == 'JFK - John F. Kennedy International Airport'
    assert state.origin_suggestions == []
    assert state.fields['origin'] == FieldState.IDLE


def test_origin_and_destination_debounce_independently(lookup, flask_session, timers):
    lookup.set_mode(SearchMode.ROUTE)
    lookup.type_origin('lon')
    lookup.type_destination('dub')
    timers.fire_all()

    paths = sorted(c['params']['search'] for c in flask_session.calls)
    assert paths == ['dub', 'lon']
    assert [a.iata for a in lookup.state.origin_suggestions] == ['LHR']
    assert [a.iata for a in lookup.state.destination_suggestions] == ['DXB']


def test_route_submit_extracts_iata(lookup, flask_session):
    lookup.set_mode(SearchMode.ROUTE)
    lookup.select_airport('origin', Airport('LHR', 'Heathrow Airport', 'London', 'United Kingdom'))
    lookup.select_airport('destination', Airport('DXB', 'Dubai International Airport', 'Dubai', 'UAE'))
    lookup.set_date('2025-12-20')

    state = lookup.submit()

    assert flask_session.calls[-1] == {
        'path': '/api/flights',
        'params': {'flight_date': '2025-12-20', 'dep_iata': 'LHR', 'arr_iata': 'DXB'},
    }
    assert [f.flight_number for f in state.results] == ['BA456']
    assert state.fields['origin'] == FieldState.RESULT_SHOWN
    assert state.fields['destination'] == FieldState.RESULT_SHOWN


def test_route_submit_no_results(lookup):
    lookup.set_mode(SearchMode.ROUTE)
    lookup.type_origin('SYD')
    lookup.type_destination('LHR')
    lookup.set_date('2025-12-22')

    state = lookup.submit()

    assert state.results == []
    assert state.message == NO_ROUTE_RESULTS


def test_select_airport_unknown_field(lookup):
    with pytest.raises(ValueError):
        lookup.select_airport('stopover', Airport('JFK', 'x', 'y', 'z'))


def test_mode_switch_clears_state(lookup, timers):
    lookup.type_flight_number('AA123')
    lookup.submit()
    lookup.type_flight_number('BA')

    lookup.set_mode(SearchMode.ROUTE)

    state = lookup.state
    assert state.mode == SearchMode.ROUTE
    assert state.results == []
    assert state.message == ''
    assert timers.live() == []


# ---------------------------------------------------------------------------
# Stale responses
# ---------------------------------------------------------------------------

def test_stale_suggestion_response_is_discarded(timers):
    api = StubApi()
    lookup = LookupClient(api, min_query_length=2, timer_factory=timers)

    lookup.type_flight_number('aa')
    first = timers.timers[-1]

    # While the 'aa' request is in flight, a newer request goes out
    def newer_request():
        lookup.type_flight_number('ba4')
        timers.timers[-1].fire()

    api.hook = newer_request
    first.fire()

    assert api.flight_calls == ['aa', 'ba4']
    assert [f.flight_number for f in lookup.state.flight_suggestions] == ['BA4']


def test_stale_submit_response_is_discarded(timers):
    api = StubApi()
    lookup = LookupClient(api, min_query_length=2, timer_factory=timers)

    lookup.type_flight_number('aa123')

    def newer_submit():
        lookup.type_flight_number('qf1')
        lookup.submit()

    api.hook = newer_submit
    lookup.submit()

    assert [f.flight_number for f in lookup.state.results] == ['QF1']


def test_listener_added_during_notify_waits_for_next_change(lookup):
    late = []
    registered = []

    def register(state):
        if not registered:
            registered.append(True)
            lookup.add_listener(late.append)

    lookup.add_listener(register)

    lookup.set_date('2025-12-20')
    assert late == []

    lookup.set_date('2025-12-21')
    assert [s.flight_date for s in late] == ['2025-12-21']


def test_listeners_receive_snapshots(lookup):
    seen = []
    lookup.add_listener(seen.append)

    lookup.type_flight_number('AA123')
    lookup.submit()

    assert seen[-1].results[0].flight_number == 'AA123'
    assert any(s.loading for s in seen)
