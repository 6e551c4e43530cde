"""
Shared fixtures: app, HTTP test client, and requests adapters that route
EntryClient traffic into the Flask test client.
"""
import json
from datetime import date, datetime, timedelta
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from moodjournal import create_app
from moodjournal.client.api_client import EntryClient
from moodjournal.client.session import JournalSession
from moodjournal.models import db

BASE_URL = "http://journal.test"
TODAY = date(2024, 1, 15)


def build_response(request, status_code, body=b"", headers=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"
    response.url = request.url
    response.request = request
    return response


class FlaskAdapter(BaseAdapter):
    """Serve requests from a Flask test client and count them."""

    def __init__(self, app):
        super().__init__()
        self.client = app.test_client()
        self.calls = []

    def send(self, request, **kwargs):
        url = urlsplit(request.url)
        path = url.path + (f"?{url.query}" if url.query else "")
        self.calls.append((request.method, path))
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}
        result = self.client.open(path, method=request.method, data=request.body, headers=headers)
        return build_response(request, result.status_code, result.get_data(), dict(result.headers))

    def close(self):
        pass


class StubAdapter(BaseAdapter):
    """Answer every request with a canned status/body, or raise ``error``."""

    def __init__(self, status_code=200, body=None, error=None):
        super().__init__()
        self.status_code = status_code
        self.body = body
        self.error = error
        self.calls = []

    def send(self, request, **kwargs):
        self.calls.append((request.method, request.url, request.body))
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (bytes, str)):
            content = self.body.encode() if isinstance(self.body, str) else self.body
        else:
            content = json.dumps(self.body).encode()
        return build_response(request, self.status_code, content, {"Content-Type": "application/json"})

    def close(self):
        pass


def mounted_session(adapter, prefix=BASE_URL):
    session = requests.Session()
    session.mount(prefix, adapter)
    return session


class SteppingClock:
    """Store clock that moves forward one minute per call."""

    def __init__(self, start=datetime(2024, 1, 15, 9, 0, 0)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
                      "HUGGINGFACE_API_KEY": None, "AUTO_CREATE_TABLES": True})
    app.entry_service.store.clock = SteppingClock()
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def service(app):
    return app.entry_service


@pytest.fixture
def store(service):
    return service.store


@pytest.fixture
def flask_adapter(app):
    return FlaskAdapter(app)


@pytest.fixture
def entry_client(flask_adapter):
    return EntryClient(BASE_URL, session=mounted_session(flask_adapter))


@pytest.fixture
def journal(entry_client):
    session = JournalSession(entry_client, today=lambda: TODAY)
    session.start()
    return session


def make_entry_payload(**overrides):
    payload = {
        "date": "2024-01-15",
        "moodValue": 75,
        "moodLabel": "Content",
        "text": "Had a good day",
    }
    payload.update(overrides)
    return payload
