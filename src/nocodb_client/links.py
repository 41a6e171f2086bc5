"""nocodb_client.links

Builders for linked records on
``/api/v2/tables/{tableId}/links/{linkFieldId}/records/{recordId}``.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from .errors import LinkFieldIDRequiredError, RowIDRequiredError
from .providers import (
    FieldProvider,
    FilterProvider,
    PaginationProvider,
    SortProvider,
    TimeoutProvider,
)
from .responses import ListResponse

__all__ = [
    "ListLinksBuilder",
    "CreateLinkBuilder",
    "CreateLinksBuilder",
    "DeleteLinkBuilder",
    "DeleteLinksBuilder",
]

logger = logging.getLogger(__name__)


def _check_ids(link_field_id: str, record_id: Any) -> None:
    if not link_field_id:
        raise LinkFieldIDRequiredError()
    if not record_id:
        raise RowIDRequiredError()


class ListLinksBuilder(
    TimeoutProvider,
    FilterProvider,
    SortProvider,
    PaginationProvider,
    FieldProvider,
):
    """List the records linked to one record through a link field."""

    def __init__(self, table: Any, link_field_id: str, record_id: Any) -> None:
        super().__init__(table)
        self._link_field_id = link_field_id
        self._record_id = record_id

    def execute(self) -> ListResponse:
        _check_ids(self._link_field_id, self._record_id)
        payload = self._client.request(
            "GET",
            self._table.links_path(self._link_field_id, self._record_id),
            query=self.build_query(),
            timeout=self._request_timeout,
            action="list linked records",
        )
        return ListResponse.from_payload(payload, action="list linked records")


class _LinksMutationBuilder(TimeoutProvider):
    method = ""
    action = ""

    def __init__(
        self, table: Any, link_field_id: str, record_id: Any, target_ids: Iterable[Any]
    ) -> None:
        super().__init__(table)
        self._link_field_id = link_field_id
        self._record_id = record_id
        self._target_ids = [t for t in (target_ids or []) if t]

    def execute(self) -> None:
        _check_ids(self._link_field_id, self._record_id)
        if not self._target_ids:
            logger.debug("No target records to %s for record %s", self.action, self._record_id)
            return None

        self._client.request(
            self.method,
            self._table.links_path(self._link_field_id, self._record_id),
            body=[{"Id": target_id} for target_id in self._target_ids],
            timeout=self._request_timeout,
            action=self.action,
        )
        return None


class CreateLinksBuilder(_LinksMutationBuilder):
    """Link several target records to one record."""

    method = "POST"
    action = "link records"


class DeleteLinksBuilder(_LinksMutationBuilder):
    """Unlink several target records from one record."""

    method = "DELETE"
    action = "unlink records"


class CreateLinkBuilder(CreateLinksBuilder):
    def __init__(self, table: Any, link_field_id: str, record_id: Any, target_id: Any) -> None:
        super().__init__(table, link_field_id, record_id, [target_id])


class DeleteLinkBuilder(DeleteLinksBuilder):
    def __init__(self, table: Any, link_field_id: str, record_id: Any, target_id: Any) -> None:
        super().__init__(table, link_field_id, record_id, [target_id])
