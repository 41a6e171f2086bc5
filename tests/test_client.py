import pytest
import requests

from nocodb_client.client import Client, new_client
from nocodb_client.errors import (
    APIError,
    APITokenRequiredError,
    BaseURLRequiredError,
    ConfigurationError,
    DecodeError,
    HTTPClientRequiredError,
    TransportError,
)


def test_builder_requires_base_url():
    with pytest.raises(BaseURLRequiredError, match="base URL is required"):
        new_client().with_api_token("t").build()


def test_builder_requires_token():
    with pytest.raises(APITokenRequiredError):
        new_client().with_base_url("https://x").build()


def test_builder_rejects_cleared_http_client():
    builder = new_client().with_base_url("https://x").with_api_token("t").with_http_client(None)
    with pytest.raises(HTTPClientRequiredError):
        builder.build()


def test_builder_uses_given_session_and_timeout(session):
    client = (
        new_client()
        .with_base_url("https://x/")
        .with_api_token("t")
        .with_http_client(session)
        .with_http_timeout(5)
        .build()
    )
    assert client.session is session
    assert client.base_url == "https://x"
    assert client.timeout == 5


def test_client_rejects_bad_timeout():
    with pytest.raises(ConfigurationError):
        Client("https://x", "t", timeout=0)


def test_request_sends_token_and_joins_url(client, session):
    session.queue(payload={"ok": True})

    result = client.request("GET", "/api/v2/tables/t1/records", query={"limit": "1"})

    assert result == {"ok": True}
    call = session.last
    assert call["url"] == "https://nocodb.example.com/api/v2/tables/t1/records"
    assert call["headers"]["xc-token"] == "secret-token"
    assert call["params"] == {"limit": "1"}
    assert call["data"] is None
    assert call["timeout"] == client.timeout


def test_request_encodes_body_as_json(client, session):
    client.request("POST", "/p", body=[{"Name": "A"}], timeout=3)

    assert session.last["headers"]["Content-Type"] == "application/json"
    assert session.last_body() == [{"Name": "A"}]
    assert session.last["timeout"] == 3


def test_request_rejects_unserialisable_body(client, session):
    with pytest.raises(DecodeError, match="failed to create records: failed to marshal data"):
        client.request("POST", "/p", body=[{"x": object()}], action="create records")
    assert session.calls == []


def test_empty_response_body_returns_none(client, session):
    session.queue(status_code=200)
    assert client.request("DELETE", "/p") is None


def test_api_error_uses_message_field(client, session):
    session.queue(status_code=404, payload={"msg": "Table not found"})

    with pytest.raises(APIError) as excinfo:
        client.request("GET", "/p", action="list records")

    err = excinfo.value
    assert err.status_code == 404
    assert err.message == "Table not found"
    assert str(err) == "failed to list records: status code 404: API error: Table not found"


def test_api_error_with_non_json_body(client, session):
    session.queue(status_code=502, text="Bad Gateway")

    with pytest.raises(APIError) as excinfo:
        client.request("GET", "/p")

    assert excinfo.value.message == "failed to unmarshal API error: Bad Gateway"


def test_transport_error_is_wrapped(client, session):
    session.fail_with(requests.ConnectionError("connection refused"))

    with pytest.raises(TransportError, match="failed to send request"):
        client.request("GET", "/p")


def test_invalid_json_response_raises_decode_error(client, session):
    session.queue(status_code=200, text="<html>")

    with pytest.raises(DecodeError):
        client.request("GET", "/p")


def test_close_leaves_borrowed_session_open(client, session):
    client.close()
    assert session.closed is False


def test_context_manager_closes_owned_session(monkeypatch):
    closed = []
    monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(self))

    with Client("https://x", "t") as client:
        assert client.table("t1").table_id == "t1"

    assert len(closed) == 1
