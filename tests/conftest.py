import os
import tempfile

import pytest
import requests

# Keep the file log out of the working tree; config reads this at import.
os.environ.setdefault("GRADER_LOG_FILE", os.path.join(tempfile.gettempdir(), "grader_tests.log"))

import config
from core import rules


class FakeResponse:
    def __init__(self, status_code=200, json_data=None):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeSession:
    """Stands in for requests.Session; routes URLs to canned responses.

    A route value may be a FakeResponse, an int status, or an exception
    instance to raise. Unrouted URLs answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _answer(self, method, url):
        self.calls.append((method, url))
        answer = self.routes.get((method, url), self.routes.get(url, 404))
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, int):
            return FakeResponse(answer)
        return answer

    def get(self, url, **kwargs):
        return self._answer("GET", url)

    def request(self, method, url, **kwargs):
        return self._answer(method, url)


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    monkeypatch.setattr(config, "RETRY_ATTEMPTS", 1)
    monkeypatch.setattr(rules, "_rules_cache", None)
    monkeypatch.setattr(config, "RULES_FILE", None)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
