"""Shared fixtures: fake HTTP sessions, manual timers, app clients."""

from typing import Any, List, Optional

import pytest
import requests

from flightlookup.app import create_app
from flightlookup.cache import ResponseCache
from flightlookup.data import default_dataset
from flightlookup.upstream import AviationStackClient


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else repr(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'HTTP {self.status_code}', response=self)


class FakeSession:
    """Records GET calls and replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.responses: List[Any] = list(responses)
        self.calls: List[dict] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({'url': url, 'params': dict(params or {}), 'timeout': timeout})
        if not self.responses:
            raise AssertionError(f'Unexpected GET {url}')
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FlaskSession:
    """Routes requests-style GETs into a Flask test client."""

    def __init__(self, test_client, base_url: str = 'http://testserver'):
        self.test_client = test_client
        self.base_url = base_url
        self.calls: List[dict] = []

    def get(self, url, params=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append({'path': path, 'params': dict(params or {})})
        resp = self.test_client.get(path, query_string=params or {})
        return FakeResponse(resp.status_code, resp.get_json(), resp.get_data(as_text=True))


class ManualTimer:
    """threading.Timer look-alike that only fires when told to."""

    def __init__(self, interval, function, args=None):
        self.interval = interval
        self.function = function
        self.args = tuple(args or ())
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args)


class TimerRecorder:
    """Timer factory that keeps every timer it creates."""

    def __init__(self):
        self.timers: List[ManualTimer] = []

    def __call__(self, interval, function, args=None):
        timer = ManualTimer(interval, function, args)
        self.timers.append(timer)
        return timer

    def live(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def fire_all(self) -> None:
        for timer in list(self.timers):
            timer.fire()


def upstream_record(**overrides) -> dict:
    """A complete AviationStack flight record."""
    record = {
        'flight_date': '2025-12-18',
        'flight_status': 'scheduled',
        'departure': {
            'airport': 'John F Kennedy International',
            'timezone': 'America/New_York',
            'iata': 'JFK',
            'scheduled': '2025-12-18T18:30:00+00:00',
        },
        'arrival': {
            'airport': 'Heathrow',
            'timezone': 'Europe/London',
            'iata': 'LHR',
            'scheduled': '2025-12-19T06:30:00+00:00',
        },
        'airline': {'name': 'American Airlines', 'iata': 'AA'},
        'flight': {'number': '100', 'iata': 'AA100'},
    }
    record.update(overrides)
    return record


@pytest.fixture
def dataset():
    return default_dataset()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def live_client(fake_session):
    """AviationStack client with a key and a scripted session."""
    return AviationStackClient(
        api_key='test-key',
        base_url='https://api.example.test/v1',
        cache=ResponseCache(ttl_seconds=60, max_entries=16),
        session=fake_session,
    )


@pytest.fixture
def offline_client():
    """AviationStack client without a key."""
    return AviationStackClient(api_key=None, cache=ResponseCache(ttl_seconds=60), session=FakeSession())


@pytest.fixture
def mock_app(dataset, offline_client):
    app = create_app(dataset=dataset, client=offline_client, mock_fallback=True)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(mock_app):
    return mock_app.test_client()


@pytest.fixture
def live_app(dataset, live_client):
    app = create_app(dataset=dataset, client=live_client, mock_fallback=True)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def timers():
    return TimerRecorder()
