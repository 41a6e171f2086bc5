"""Pytest configuration and fixtures."""
import json

import pytest
import requests

from nocodb_client.client import Client


def make_response(status_code=200, payload=None, text=None):
    """Build a real ``requests.Response`` with the given body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    if text is not None:
        response._content = text.encode("utf-8")
    elif payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = b""
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Stands in for ``requests.Session``: records calls, replays queued responses."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.closed = False

    def queue(self, status_code=200, payload=None, text=None):
        self.responses.append(make_response(status_code, payload, text))
        return self

    def fail_with(self, exc):
        self.responses.append(exc)
        return self

    def request(self, method, url, params=None, data=None, headers=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "data": data,
                "headers": headers,
                "timeout": timeout,
            }
        )
        if not self.responses:
            return make_response(200, {})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True

    @property
    def last(self):
        return self.calls[-1]

    def last_body(self):
        data = self.last["data"]
        return json.loads(data) if data is not None else None


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return Client("https://nocodb.example.com/", "secret-token", session=session)


@pytest.fixture
def table(client):
    return client.table("m1users")
