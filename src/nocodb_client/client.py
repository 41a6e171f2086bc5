"""nocodb_client.client

HTTP transport for the NocoDB v2 API.

:class:`Client` owns a ``requests.Session`` and turns a method, path, query
mapping and optional JSON body into a single HTTP round-trip, authenticated
with the ``xc-token`` header. Record and link operations live on
:class:`~nocodb_client.table.Table`, obtained with :meth:`Client.table`.

Example::

    client = new_client().with_base_url("https://app.nocodb.com") \\
        .with_api_token(token).build()
    users = client.table("m1abc").list_records().where_is_greater_than("Age", 18).execute()
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from .config import DEFAULT_TIMEOUT, TOKEN_HEADER, ClientSettings
from .errors import (
    APIError,
    APITokenRequiredError,
    BaseURLRequiredError,
    ConfigurationError,
    DecodeError,
    HTTPClientRequiredError,
    TransportError,
)
from .table import Table
from .utils import encode_json

__all__ = ["Client", "ClientBuilder", "new_client"]

logger = logging.getLogger(__name__)

HEADERS = {
    "Accept": "application/json",
    "User-Agent": "nocodb-client-python/0.1",
}


def _failed(action: Optional[str], text: str) -> str:
    return f"failed to {action}: {text}" if action else text


def _error_message(response: requests.Response) -> str:
    """Pull the human readable message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        text = (response.text or "").strip() or response.reason or ""
        return f"failed to unmarshal API error: {text}"
    if isinstance(payload, dict):
        for key in ("message", "msg", "error"):
            if payload.get(key):
                return str(payload[key])
    return str(payload)


class Client:
    """Public client for the NocoDB REST API."""

    def __init__(
        self,
        base_url: str,
        api_token: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        base_url = (base_url or "").rstrip("/")
        if not base_url:
            raise BaseURLRequiredError()
        if not api_token:
            raise APITokenRequiredError()
        if not timeout or timeout <= 0:
            raise ConfigurationError("timeout must be a positive number of seconds")

        self.base_url = base_url
        self.timeout = timeout
        self._api_token = api_token
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, session: Optional[requests.Session] = None
    ) -> "Client":
        return cls(settings.base_url, settings.api_token, session=session, timeout=settings.timeout)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Client":
        """Build a client from ``NOCODB_BASE_URL`` / ``NOCODB_API_TOKEN``."""
        return cls.from_settings(ClientSettings.from_env(env_file))

    def __repr__(self) -> str:
        return f"Client(base_url={self.base_url!r})"

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self.session.close()

    def table(self, table_id: str) -> Table:
        return Table(self, table_id)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        action: Optional[str] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` when the response has no body. Raises
        :class:`APIError` for status codes >= 400, :class:`TransportError`
        when the request cannot be sent and :class:`DecodeError` when a body
        cannot be encoded or decoded.
        """
        url = self.url_for(path)
        headers = dict(HEADERS)
        headers[TOKEN_HEADER] = self._api_token

        data = None
        if body is not None:
            try:
                data = encode_json(body)
            except DecodeError as exc:
                raise DecodeError(_failed(action, str(exc))) from exc
            headers["Content-Type"] = "application/json"

        params = dict(query) if query else None
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Request failed %s %s: %s", method, url, exc)
            raise TransportError(_failed(action, f"failed to send request: {exc}")) from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                "Request failed status=%s method=%s url=%s reason=%s",
                response.status_code, method, url, message,
            )
            raise APIError(response.status_code, message, action=action)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(_failed(action, f"failed to decode response body: {exc}")) from exc


class ClientBuilder:
    """Fluent construction of a :class:`Client`."""

    def __init__(self) -> None:
        self._base_url = ""
        self._api_token = ""
        self._session: Optional[requests.Session] = None
        self._session_cleared = False
        self._timeout = DEFAULT_TIMEOUT

    def with_base_url(self, base_url: str) -> "ClientBuilder":
        self._base_url = (base_url or "").rstrip("/")
        return self

    def with_api_token(self, api_token: str) -> "ClientBuilder":
        self._api_token = api_token
        return self

    def with_http_client(self, session: Optional[requests.Session]) -> "ClientBuilder":
        self._session = session
        self._session_cleared = session is None
        return self

    def with_http_timeout(self, seconds: float) -> "ClientBuilder":
        self._timeout = seconds
        return self

    def build(self) -> Client:
        if not self._base_url:
            raise BaseURLRequiredError()
        if not self._api_token:
            raise APITokenRequiredError()
        if self._session_cleared:
            raise HTTPClientRequiredError()
        return Client(self._base_url, self._api_token, session=self._session, timeout=self._timeout)


def new_client() -> ClientBuilder:
    return ClientBuilder()
