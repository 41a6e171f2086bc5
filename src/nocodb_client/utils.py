"""nocodb_client.utils

Utility helpers shared across the nocodb_client package: converting between
plain JSON records and typed objects (pydantic models, dataclasses,
TypedDicts).
"""
from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Iterable, List, Mapping

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError

__all__ = [
    "decode_into",
    "to_record",
    "to_records",
    "encode_json",
]

Record = Dict[str, Any]


def encode_json(data: Any) -> str:
    """``json.dumps`` that raises :class:`DecodeError` instead of TypeError."""
    try:
        return json.dumps(data)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"failed to marshal data: {exc}") from exc


def decode_into(data: Any, target: Any) -> Any:
    """Decode a record (or list of records) into ``target``.

    ``target`` is a type pydantic can validate: a model, a dataclass, a
    TypedDict, or a container such as ``List[User]``. The data goes through
    JSON first so field aliases (``Field(alias="Id")``) behave exactly as
    they would for a raw API response.
    """
    if target is None:
        raise DecodeError("decode target is required")
    raw = encode_json(data)
    try:
        adapter = TypeAdapter(target)
    except TypeError as exc:
        raise DecodeError(f"invalid decode target {target!r}: {exc}") from exc
    try:
        return adapter.validate_json(raw)
    except PydanticValidationError as exc:
        raise DecodeError(f"failed to unmarshal data: {exc}") from exc


def to_record(obj: Any) -> Record:
    """Convert a mapping, pydantic model or dataclass into a JSON-ready dict."""
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return TypeAdapter(type(obj)).dump_python(obj, mode="json", by_alias=True)
    raise DecodeError(f"cannot convert {type(obj).__name__} into a record")


def to_records(objs: Iterable[Any]) -> List[Record]:
    if isinstance(objs, (Mapping, BaseModel, str, bytes)) or dataclasses.is_dataclass(objs):
        raise DecodeError("expected a list of records")
    return [to_record(obj) for obj in objs]
