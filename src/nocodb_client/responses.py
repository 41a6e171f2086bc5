"""nocodb_client.responses

Typed wrappers around the JSON returned by list and read calls.
"""
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError
from .utils import decode_into

__all__ = ["PageInfo", "ListResponse", "ReadResponse"]


class PageInfo(BaseModel):
    """Pagination block returned next to a page of records."""

    model_config = ConfigDict(populate_by_name=True)

    total_rows: int = Field(default=0, alias="totalRows")
    page: int = Field(default=0, alias="page")
    page_size: int = Field(default=0, alias="pageSize")
    is_first_page: bool = Field(default=False, alias="isFirstPage")
    is_last_page: bool = Field(default=False, alias="isLastPage")


def _single_page(records: List[Any]) -> Dict[str, Any]:
    size = len(records)
    return {
        "list": records,
        "pageInfo": {
            "totalRows": size,
            "page": 1,
            "pageSize": size,
            "isFirstPage": True,
            "isLastPage": True,
        },
    }


def _is_envelope(data: Dict[str, Any]) -> bool:
    if {"list", "pageInfo"} & data.keys():
        return True
    # keyword construction, e.g. ListResponse(records=[...])
    return data.keys() <= {"records", "page_info"} and isinstance(data.get("records", []), list)


class ListResponse(BaseModel):
    """A page of records plus its :class:`PageInfo`.

    NocoDB normally answers ``{"list": [...], "pageInfo": {...}}``. Some
    endpoints (e.g. a has-one link) return a bare object or array instead;
    those are normalised into a single page.
    """

    model_config = ConfigDict(populate_by_name=True)

    records: List[Dict[str, Any]] = Field(default_factory=list, alias="list")
    page_info: PageInfo = Field(default_factory=PageInfo, alias="pageInfo")

    @model_validator(mode="before")
    @classmethod
    def _normalise_payload(cls, data: Any) -> Any:
        if data is None:
            return _single_page([])
        if isinstance(data, list):
            return _single_page(data)
        if isinstance(data, dict):
            if not data:
                return _single_page([])
            if not _is_envelope(data):
                return _single_page([data])
        return data

    @classmethod
    def from_payload(cls, payload: Any, action: str = "list records") -> "ListResponse":
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as exc:
            raise DecodeError(f"failed to unmarshal {action} response: {exc}") from exc

    def decode_into(self, target: Any) -> List[Any]:
        """Decode every record into ``target`` and return the list."""
        if target is None:
            raise DecodeError("decode target is required")
        try:
            list_type = List[target]
        except TypeError as exc:
            raise DecodeError(f"invalid decode target {target!r}: {exc}") from exc
        return decode_into(self.records, list_type)


class ReadResponse(BaseModel):
    """A single record as returned by the read endpoint."""

    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "ReadResponse":
        if not isinstance(payload, dict):
            raise DecodeError(
                f"failed to unmarshal read response: expected an object, got {type(payload).__name__}"
            )
        return cls(data=payload)

    def decode_into(self, target: Any) -> Any:
        return decode_into(self.data, target)
