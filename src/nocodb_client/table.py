"""nocodb_client.table

Entry point for record and link operations on one table.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Union

from .config import API_PREFIX
from .links import (
    CreateLinkBuilder,
    CreateLinksBuilder,
    DeleteLinkBuilder,
    DeleteLinksBuilder,
    ListLinksBuilder,
)
from .records import (
    CountRecordsBuilder,
    CreateRecordBuilder,
    CreateRecordsBuilder,
    DeleteRecordBuilder,
    DeleteRecordsBuilder,
    ListRecordsBuilder,
    ReadRecordBuilder,
    UpdateRecordBuilder,
    UpdateRecordsBuilder,
)

if TYPE_CHECKING:
    from .client import Client

__all__ = ["Table"]

RecordID = Union[int, str]


class Table:
    """A NocoDB table. Every method returns a builder; call ``execute()`` on it."""

    def __init__(self, client: "Client", table_id: str) -> None:
        self.client = client
        self.table_id = table_id

    def __repr__(self) -> str:
        return f"Table({self.table_id!r})"

    def records_path(self, record_id: Any = None) -> str:
        path = f"{API_PREFIX}/{self.table_id}/records"
        if record_id is not None and record_id != "":
            path = f"{path}/{record_id}"
        return path

    def links_path(self, link_field_id: str, record_id: RecordID) -> str:
        return f"{API_PREFIX}/{self.table_id}/links/{link_field_id}/records/{record_id}"

    # Records

    def list_records(self) -> ListRecordsBuilder:
        return ListRecordsBuilder(self)

    def count_records(self) -> CountRecordsBuilder:
        return CountRecordsBuilder(self)

    def read_record(self, record_id: RecordID) -> ReadRecordBuilder:
        return ReadRecordBuilder(self, record_id)

    def create_record(self, data: Any) -> CreateRecordBuilder:
        """``data`` may be a dict, a pydantic model or a dataclass instance."""
        return CreateRecordBuilder(self, data)

    def create_records(self, data: Iterable[Any]) -> CreateRecordsBuilder:
        return CreateRecordsBuilder(self, data)

    def update_record(self, record_id: RecordID, data: Any) -> UpdateRecordBuilder:
        return UpdateRecordBuilder(self, record_id, data)

    def update_records(self, data: Iterable[Any]) -> UpdateRecordsBuilder:
        """Each record must carry its ``Id``."""
        return UpdateRecordsBuilder(self, data)

    def delete_record(self, record_id: RecordID) -> DeleteRecordBuilder:
        return DeleteRecordBuilder(self, record_id)

    def delete_records(self, record_ids: Iterable[RecordID]) -> DeleteRecordsBuilder:
        return DeleteRecordsBuilder(self, record_ids)

    # Links

    def list_links(self, link_field_id: str, record_id: RecordID) -> ListLinksBuilder:
        return ListLinksBuilder(self, link_field_id, record_id)

    def create_link(
        self, link_field_id: str, record_id: RecordID, target_id: RecordID
    ) -> CreateLinkBuilder:
        return CreateLinkBuilder(self, link_field_id, record_id, target_id)

    def create_links(
        self, link_field_id: str, record_id: RecordID, target_ids: Iterable[RecordID]
    ) -> CreateLinksBuilder:
        return CreateLinksBuilder(self, link_field_id, record_id, target_ids)

    def delete_link(
        self, link_field_id: str, record_id: RecordID, target_id: RecordID
    ) -> DeleteLinkBuilder:
        return DeleteLinkBuilder(self, link_field_id, record_id, target_id)

    def delete_links(
        self, link_field_id: str, record_id: RecordID, target_ids: Iterable[RecordID]
    ) -> DeleteLinksBuilder:
        return DeleteLinksBuilder(self, link_field_id, record_id, target_ids)
