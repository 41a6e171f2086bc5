"""nocodb_client.errors

Exception hierarchy raised by the client. Everything derives from
:class:`NocoDBError` so callers can catch a single type.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "NocoDBError",
    "ConfigurationError",
    "BaseURLRequiredError",
    "APITokenRequiredError",
    "HTTPClientRequiredError",
    "ValidationError",
    "RowIDRequiredError",
    "LinkFieldIDRequiredError",
    "TransportError",
    "APIError",
    "DecodeError",
]


class NocoDBError(Exception):
    """Base class for every error raised by nocodb_client."""


class ConfigurationError(NocoDBError):
    """The client was built with missing or invalid settings."""


class BaseURLRequiredError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("base URL is required")


class APITokenRequiredError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("API token is required")


class HTTPClientRequiredError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("HTTP client is required")


class ValidationError(NocoDBError):
    """A builder was executed without a required identifier."""


class RowIDRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__("row ID is required")


class LinkFieldIDRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__("link field ID is required")


class TransportError(NocoDBError):
    """The HTTP request could not be sent or its response could not be read."""


class APIError(NocoDBError):
    """NocoDB answered with a status code >= 400."""

    def __init__(self, status_code: int, message: str, action: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message
        self.action = action
        text = f"status code {status_code}: API error: {message}"
        if action:
            text = f"failed to {action}: {text}"
        super().__init__(text)


class DecodeError(NocoDBError):
    """A payload could not be encoded to or decoded from JSON."""
