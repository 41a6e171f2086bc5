"""nocodb_client.records

Builders for record CRUD on ``/api/v2/tables/{tableId}/records``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .errors import DecodeError, NocoDBError, RowIDRequiredError
from .providers import (
    FieldProvider,
    FilterProvider,
    PaginationProvider,
    ShuffleProvider,
    SortProvider,
    TimeoutProvider,
    ViewProvider,
)
from .responses import ListResponse, ReadResponse
from .utils import to_record, to_records

__all__ = [
    "ListRecordsBuilder",
    "CountRecordsBuilder",
    "ReadRecordBuilder",
    "CreateRecordBuilder",
    "CreateRecordsBuilder",
    "UpdateRecordBuilder",
    "UpdateRecordsBuilder",
    "DeleteRecordBuilder",
    "DeleteRecordsBuilder",
]

logger = logging.getLogger(__name__)

ID_FIELD = "Id"


def _convert(fn: Callable[[Any], Any], data: Any) -> Tuple[Any, Optional[DecodeError]]:
    # Conversion errors surface from execute() so chains can still be built.
    try:
        return fn(data), None
    except DecodeError as exc:
        return None, exc


def _raise_chain_error(error: Optional[DecodeError]) -> None:
    if error is not None:
        raise DecodeError(f"error in the chain of methods: {error}") from error


def _extract_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class ListRecordsBuilder(
    TimeoutProvider,
    FilterProvider,
    SortProvider,
    PaginationProvider,
    FieldProvider,
    ShuffleProvider,
    ViewProvider,
):
    """List records, one page at a time.

    Example::

        page = (
            table.list_records()
            .where_is_greater_than("Age", 18)
            .sort_asc_by("Name")
            .limit(10)
            .execute()
        )
    """

    def execute(self) -> ListResponse:
        payload = self._client.request(
            "GET",
            self._table.records_path(),
            query=self.build_query(),
            timeout=self._request_timeout,
            action="list records",
        )
        return ListResponse.from_payload(payload, action="list records")


class CountRecordsBuilder(TimeoutProvider, FilterProvider, ViewProvider):
    """Count the records matching the filters."""

    def execute(self) -> int:
        payload = self._client.request(
            "GET",
            self._table.records_path() + "/count",
            query=self.build_query(),
            timeout=self._request_timeout,
            action="count records",
        )
        try:
            return int(payload["count"])
        except (TypeError, KeyError, ValueError) as exc:
            raise DecodeError(f"failed to unmarshal count response: {payload!r}") from exc


class ReadRecordBuilder(TimeoutProvider, FieldProvider):
    def __init__(self, table: Any, record_id: Any) -> None:
        super().__init__(table)
        self._record_id = record_id

    def execute(self) -> ReadResponse:
        if not self._record_id:
            raise RowIDRequiredError()
        payload = self._client.request(
            "GET",
            self._table.records_path(self._record_id),
            query=self.build_query(),
            timeout=self._request_timeout,
            action="read record",
        )
        return ReadResponse.from_payload(payload)


class CreateRecordsBuilder(TimeoutProvider):
    """Create several records in one request and return their ids."""

    def __init__(self, table: Any, data: Iterable[Any]) -> None:
        super().__init__(table)
        self._data, self._chain_error = _convert(to_records, data)

    def execute(self) -> List[int]:
        _raise_chain_error(self._chain_error)
        if not self._data:
            logger.debug("No records to create in table %s", self._table.table_id)
            return []

        payload = self._client.request(
            "POST",
            self._table.records_path(),
            body=self._data,
            timeout=self._request_timeout,
            action="create records",
        )
        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list):
            raise DecodeError(f"failed to unmarshal create response: {payload!r}")

        ids = []
        for record in payload:
            if isinstance(record, dict):
                record_id = _extract_id(record.get(ID_FIELD))
                if record_id is not None:
                    ids.append(record_id)
        return ids


class CreateRecordBuilder(TimeoutProvider):
    def __init__(self, table: Any, data: Any) -> None:
        super().__init__(table)
        self._data, self._chain_error = _convert(to_record, data)

    def execute(self) -> int:
        """Create the record and return its id."""
        _raise_chain_error(self._chain_error)
        ids = (
            self._table.create_records([self._data])
            .with_timeout(self._request_timeout)
            .execute()
        )
        if not ids:
            raise NocoDBError("failed to create record: no record created")
        return ids[0]


class UpdateRecordsBuilder(TimeoutProvider):
    """Patch several records; every record must include its ``Id``."""

    def __init__(self, table: Any, data: Iterable[Any]) -> None:
        super().__init__(table)
        self._data, self._chain_error = _convert(to_records, data)

    def execute(self) -> None:
        _raise_chain_error(self._chain_error)
        if not self._data:
            logger.debug("No records to update in table %s", self._table.table_id)
            return None
        if any(not record.get(ID_FIELD) for record in self._data):
            raise RowIDRequiredError()

        self._client.request(
            "PATCH",
            self._table.records_path(),
            body=self._data,
            timeout=self._request_timeout,
            action="update records",
        )
        return None


class UpdateRecordBuilder(TimeoutProvider):
    def __init__(self, table: Any, record_id: Any, data: Any) -> None:
        super().__init__(table)
        self._record_id = record_id
        self._data, self._chain_error = _convert(to_record, data)

    def execute(self) -> None:
        if not self._record_id:
            raise RowIDRequiredError()
        _raise_chain_error(self._chain_error)

        record: Dict[str, Any] = dict(self._data)
        record[ID_FIELD] = self._record_id
        self._table.update_records([record]).with_timeout(self._request_timeout).execute()


class DeleteRecordsBuilder(TimeoutProvider):
    def __init__(self, table: Any, record_ids: Iterable[Any]) -> None:
        super().__init__(table)
        self._record_ids = list(record_ids or [])

    def execute(self) -> None:
        if not self._record_ids:
            logger.debug("No records to delete in table %s", self._table.table_id)
            return None
        if any(not record_id for record_id in self._record_ids):
            raise RowIDRequiredError()

        self._client.request(
            "DELETE",
            self._table.records_path(),
            body=[{ID_FIELD: record_id} for record_id in self._record_ids],
            timeout=self._request_timeout,
            action="delete records",
        )
        return None


class DeleteRecordBuilder(TimeoutProvider):
    def __init__(self, table: Any, record_id: Any) -> None:
        super().__init__(table)
        self._record_id = record_id

    def execute(self) -> None:
        if not self._record_id:
            raise RowIDRequiredError()
        self._table.delete_records([self._record_id]).with_timeout(self._request_timeout).execute()
