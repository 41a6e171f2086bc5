"""nocodb_client.providers

Query-option mixins shared by the request builders.

Each provider keeps one piece of query state, exposes chainable methods that
return the builder, and renders its state in ``_apply``. Builders inherit
the providers they support; ``_apply`` is cooperative so every provider in
the MRO gets a turn.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .filters import (
    ComparisonOperator,
    DateWithinSubOperator,
    Filter,
    FilterGroup,
    combine_filters,
)

__all__ = [
    "QueryBuilder",
    "TimeoutProvider",
    "FilterProvider",
    "SortProvider",
    "PaginationProvider",
    "FieldProvider",
    "ShuffleProvider",
    "ViewProvider",
]

Query = Dict[str, str]


class QueryBuilder:
    """Root of every builder: holds the table and renders the query string."""

    def __init__(self, table: Any, *args: Any, **kwargs: Any) -> None:
        self._table = table

    @property
    def _client(self):
        return self._table.client

    @property
    def _request_timeout(self) -> Optional[float]:
        return None

    def _apply(self, query: Query) -> Query:
        return query

    def build_query(self) -> Query:
        """Return the query parameters this builder would send."""
        return self._apply({})

    def execute(self) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError


class TimeoutProvider(QueryBuilder):
    """Per-request deadline, overriding the client timeout."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._timeout: Optional[float] = None

    def with_timeout(self, seconds: float):
        """Give up on this request after ``seconds``."""
        if seconds and seconds > 0:
            self._timeout = seconds
        return self

    @property
    def _request_timeout(self) -> Optional[float]:
        return self._timeout


class FilterProvider(QueryBuilder):
    """Adds filters to the ``where`` query parameter.

    Every call appends one expression; several expressions are joined with
    ``~and``. See
    https://docs.nocodb.com/developer-resources/rest-apis/overview/#comparison-operators
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._filters: List[str] = []

    def _apply(self, query: Query) -> Query:
        query = super()._apply(query)
        where = combine_filters(self._filters)
        if where:
            query["where"] = where
        return query

    def _add(self, item: Union[Filter, FilterGroup]):
        expression = str(item)
        if expression:
            self._filters.append(expression)
        return self

    def where(self, expression: str):
        """Add a raw filter expression.

        Example::

            table.list_records().where("(Check,eq,55)~or((Amount,gt,10)~and(Amount,lt,20))")
        """
        if expression:
            self._filters.append(expression)
        return self

    def where_filter(self, item: Union[Filter, FilterGroup]):
        """Add a :class:`Filter` or :class:`FilterGroup`."""
        return self._add(item)

    def where_is_equal_to(self, column: str, value: Any):
        return self._add(Filter.equal(column, value))

    def where_is_not_equal_to(self, column: str, value: Any):
        return self._add(Filter.not_equal(column, value))

    def where_is_greater_than(self, column: str, value: Any):
        return self._add(Filter.greater_than(column, value))

    def where_is_greater_than_or_equal(self, column: str, value: Any):
        return self._add(Filter.greater_than_or_equal(column, value))

    def where_is_less_than(self, column: str, value: Any):
        return self._add(Filter.less_than(column, value))

    def where_is_less_than_or_equal(self, column: str, value: Any):
        return self._add(Filter.less_than_or_equal(column, value))

    def where_is_null(self, column: str):
        return self._add(Filter.is_null(column))

    def where_is_not_null(self, column: str):
        return self._add(Filter.is_not_null(column))

    def where_is_true(self, column: str):
        return self._add(Filter.is_true(column))

    def where_is_false(self, column: str):
        return self._add(Filter.is_false(column))

    def where_is_in(self, column: str, *values: Any):
        if not values:
            return self
        return self._add(Filter.is_in(column, *values))

    def where_is_between(self, column: str, low: Any, high: Any):
        """Inclusive range match."""
        return self._add(Filter.between(column, low, high))

    def where_is_not_between(self, column: str, low: Any, high: Any):
        return self._add(Filter.not_between(column, low, high))

    def where_is_like(self, column: str, pattern: Any):
        """Pattern match, ``%`` matches any sequence of characters."""
        return self._add(Filter.like(column, pattern))

    def where_is_not_like(self, column: str, pattern: Any):
        return self._add(Filter.not_like(column, pattern))

    def where_is_within(
        self,
        column: str,
        sub_operator: Union[DateWithinSubOperator, str],
        *values: Any,
    ):
        """Date/DateTime columns only, e.g. ``where_is_within("Due", "pastWeek")``."""
        return self._add(Filter.is_within(column, sub_operator, *values))

    def where_is_all_of(self, column: str, *values: Any):
        if not values:
            return self
        return self._add(Filter.all_of(column, *values))

    def where_is_any_of(self, column: str, *values: Any):
        if not values:
            return self
        return self._add(Filter.any_of(column, *values))

    def where_is_not_all_of(self, column: str, *values: Any):
        if not values:
            return self
        return self._add(Filter.not_all_of(column, *values))

    def where_is_not_any_of(self, column: str, *values: Any):
        if not values:
            return self
        return self._add(Filter.not_any_of(column, *values))

    def where_compare(self, column: str, operator: Union[ComparisonOperator, str], *values: Any):
        """Add a comparison with an explicit operator."""
        if not values:
            return self._add(Filter(column, operator, ""))
        return self._add(Filter(column, operator, *values))


class SortProvider(QueryBuilder):
    """Renders the ``sort`` parameter; criteria apply in the order added."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._sorts: List[str] = []

    def _apply(self, query: Query) -> Query:
        query = super()._apply(query)
        if self._sorts:
            query["sort"] = ",".join(self._sorts)
        return query

    def sort_asc_by(self, column: str):
        if column:
            self._sorts.append(column)
        return self

    def sort_desc_by(self, column: str):
        if column:
            self._sorts.append("-" + column)
        return self


class PaginationProvider(QueryBuilder):
    """Renders ``limit`` and ``offset``; values that make no sense are ignored."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._limit = 0
        self._offset = 0

    def _apply(self, query: Query) -> Query:
        query = super()._apply(query)
        if self._limit > 0:
            query["limit"] = str(self._limit)
        if self._offset > 0:
            query["offset"] = str(self._offset)
        return query

    def limit(self, limit: int):
        if limit >= 1:
            self._limit = limit
        return self

    def offset(self, offset: int):
        if offset >= 0:
            self._offset = offset
        return self

    def page(self, page: int, page_size: int):
        """Translate a 1-based page number into limit/offset."""
        if page < 1 or page_size < 1:
            return self
        self._limit = page_size
        self._offset = (page - 1) * page_size
        return self


class FieldProvider(QueryBuilder):
    """Restricts the returned columns via ``fields``."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._fields: List[str] = []

    def _apply(self, query: Query) -> Query:
        query = super()._apply(query)
        if self._fields:
            query["fields"] = ",".join(self._fields)
        return query

    def return_fields(self, *fields: str):
        self._fields = [f for f in fields if f]
        return self


class ShuffleProvider(QueryBuilder):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._shuffle = False

    def _apply(self, query: Query) -> Query:
        query = super()._apply(query)
        if self._shuffle:
            query["shuffle"] = "1"
        return query

    def shuffle(self):
        """Return records in random order."""
        self._shuffle = True
        return self


class ViewProvider(QueryBuilder):
    """Selects a view via ``viewId``.

    Records come back in the view's order and filtered by the view; explicit
    sorts take precedence and explicit filters apply on top of the view's.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._view_id = ""

    def _apply(self, query: Query) -> Query:
        query = super()._apply(query)
        if self._view_id:
            query["viewId"] = self._view_id
        return query

    def with_view_id(self, view_id: str):
        if view_id:
            self._view_id = view_id
        return self
