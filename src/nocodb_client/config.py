"""nocodb_client.config

Connection settings for the NocoDB client, loadable from the environment.
"""
from __future__ import annotations

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

__all__ = [
    "API_PREFIX",
    "DEFAULT_TIMEOUT",
    "TOKEN_HEADER",
    "ENV_BASE_URL",
    "ENV_API_TOKEN",
    "ENV_TIMEOUT",
    "ClientSettings",
]

API_PREFIX = "/api/v2/tables"
DEFAULT_TIMEOUT = 30.0
TOKEN_HEADER = "xc-token"

ENV_BASE_URL = "NOCODB_BASE_URL"
ENV_API_TOKEN = "NOCODB_API_TOKEN"
ENV_TIMEOUT = "NOCODB_TIMEOUT"


class ClientSettings(BaseModel):
    """Configuration options for :class:`nocodb_client.client.Client`."""

    base_url: str = Field(
        default="",
        description="Base URL of the NocoDB instance, e.g. https://app.nocodb.com",
    )
    api_token: str = Field(
        default="",
        description="API token sent in the xc-token header",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ClientSettings":
        """Read settings from ``NOCODB_*`` variables, after loading a .env file."""
        load_dotenv(env_file or find_dotenv(usecwd=True))
        values = {
            "base_url": os.getenv(ENV_BASE_URL, ""),
            "api_token": os.getenv(ENV_API_TOKEN, ""),
        }
        timeout = os.getenv(ENV_TIMEOUT)
        try:
            if timeout:
                values["timeout"] = float(timeout)
            return cls(**values)
        except (ValueError, PydanticValidationError) as exc:
            raise ConfigurationError(f"invalid {ENV_TIMEOUT}: {timeout!r}") from exc
