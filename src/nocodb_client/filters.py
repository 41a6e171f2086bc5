"""nocodb_client.filters

Building blocks for the ``where`` query parameter.

NocoDB filters are written as ``(column,operator,value)`` triples joined by
logical operators, e.g. ``(Age,gt,18)~and((Name,like,Jo%)~or(Name,eq,Ann))``.
:class:`Filter` renders one comparison and :class:`FilterGroup` combines
filters and nested groups. Both render with ``str()``.

See https://docs.nocodb.com/developer-resources/rest-apis/overview/#query-params
"""
from __future__ import annotations

import datetime as _dt
from enum import Enum
from typing import Any, Iterable, List, Union

__all__ = [
    "ComparisonOperator",
    "LogicalOperator",
    "DateSubOperator",
    "DateWithinSubOperator",
    "Filter",
    "FilterGroup",
    "format_value",
    "and_group",
    "or_group",
    "not_group",
    "combine_filters",
]


class ComparisonOperator(str, Enum):
    EQUAL = "eq"
    NOT_EQUAL = "neq"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "ge"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "le"
    IS = "is"
    IS_NOT = "isnot"
    IN = "in"
    BETWEEN = "btw"
    NOT_BETWEEN = "nbtw"
    LIKE = "like"
    NOT_LIKE = "nlike"
    IS_WITHIN = "isWithin"
    ALL_OF = "allof"
    ANY_OF = "anyof"
    NOT_ALL_OF = "nallof"
    NOT_ANY_OF = "nanyof"


class LogicalOperator(str, Enum):
    AND = "~and"
    OR = "~or"
    NOT = "~not"


class DateSubOperator(str, Enum):
    """Sub-operators accepted after eq/gt/lt... on Date columns."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"
    ONE_WEEK_AGO = "oneWeekAgo"
    ONE_WEEK_FROM_NOW = "oneWeekFromNow"
    ONE_MONTH_AGO = "oneMonthAgo"
    ONE_MONTH_FROM_NOW = "oneMonthFromNow"
    DAYS_AGO = "daysAgo"
    DAYS_FROM_NOW = "daysFromNow"
    EXACT_DATE = "exactDate"


class DateWithinSubOperator(str, Enum):
    """Sub-operators accepted by ``isWithin``."""

    PAST_WEEK = "pastWeek"
    PAST_MONTH = "pastMonth"
    PAST_YEAR = "pastYear"
    NEXT_WEEK = "nextWeek"
    NEXT_MONTH = "nextMonth"
    NEXT_YEAR = "nextYear"
    NEXT_NUMBER_OF_DAYS = "nextNumberOfDays"
    PAST_NUMBER_OF_DAYS = "pastNumberOfDays"


def format_value(value: Any) -> str:
    """Render a Python value the way NocoDB expects it inside a filter."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (_dt.date, _dt.datetime, _dt.time)):
        return value.isoformat()
    return str(value)


class Filter:
    """A single ``(column,operator,value[,value...])`` comparison."""

    def __init__(
        self,
        column: str,
        operator: Union[ComparisonOperator, str],
        value: Any,
        *sub_values: Any,
    ) -> None:
        self.column = column
        self.operator = ComparisonOperator(operator)
        self.value = value
        self.sub_values = list(sub_values)

    def __str__(self) -> str:
        values = [format_value(v) for v in [self.value, *self.sub_values]]
        return f"({self.column},{self.operator.value},{','.join(values)})"

    def __repr__(self) -> str:
        return f"Filter({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Filter) and str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    # Shorthand constructors, mirroring the builder ``where_is_*`` methods.

    @classmethod
    def equal(cls, column: str, value: Any) -> "Filter":
        return cls(column, ComparisonOperator.EQUAL, value)

    @classmethod
    def not_equal(cls, column: str, value: Any) -> "Filter":
        return cls(column, ComparisonOperator.NOT_EQUAL, value)

    @classmethod
    def greater_than(cls, column: str, value: Any) -> "Filter":
        return cls(column, ComparisonOperator.GREATER_THAN, value)

    @classmethod
    def greater_than_or_equal(cls, column: str, value: Any) -> "Filter":
        return cls(column, ComparisonOperator.GREATER_THAN_OR_EQUAL, value)

    @classmethod
    def less_than(cls, column: str, value: Any) -> "Filter":
        return cls(column, ComparisonOperator.LESS_THAN, value)

    @classmethod
    def less_than_or_equal(cls, column: str, value: Any) -> "Filter":
        return cls(column, ComparisonOperator.LESS_THAN_OR_EQUAL, value)

    @classmethod
    def is_null(cls, column: str) -> "Filter":
        return cls(column, ComparisonOperator.IS, "null")

    @classmethod
    def is_not_null(cls, column: str) -> "Filter":
        return cls(column, ComparisonOperator.IS_NOT, "null")

    @classmethod
    def is_true(cls, column: str) -> "Filter":
        return cls(column, ComparisonOperator.IS, "true")

    @classmethod
    def is_false(cls, column: str) -> "Filter":
        return cls(column, ComparisonOperator.IS, "false")

    @classmethod
    def is_in(cls, column: str, *values: Any) -> "Filter":
        return cls._multi(column, ComparisonOperator.IN, values)

    @classmethod
    def between(cls, column: str, low: Any, high: Any) -> "Filter":
        return cls(column, ComparisonOperator.BETWEEN, low, high)

    @classmethod
    def not_between(cls, column: str, low: Any, high: Any) -> "Filter":
        return cls(column, ComparisonOperator.NOT_BETWEEN, low, high)

    @classmethod
    def like(cls, column: str, pattern: Any) -> "Filter":
        return cls(column, ComparisonOperator.LIKE, pattern)

    @classmethod
    def not_like(cls, column: str, pattern: Any) -> "Filter":
        return cls(column, ComparisonOperator.NOT_LIKE, pattern)

    @classmethod
    def is_within(
        cls, column: str, sub_operator: Union[DateWithinSubOperator, str], *values: Any
    ) -> "Filter":
        return cls(column, ComparisonOperator.IS_WITHIN, sub_operator, *values)

    @classmethod
    def all_of(cls, column: str, *values: Any) -> "Filter":
        return cls._multi(column, ComparisonOperator.ALL_OF, values)

    @classmethod
    def any_of(cls, column: str, *values: Any) -> "Filter":
        return cls._multi(column, ComparisonOperator.ANY_OF, values)

    @classmethod
    def not_all_of(cls, column: str, *values: Any) -> "Filter":
        return cls._multi(column, ComparisonOperator.NOT_ALL_OF, values)

    @classmethod
    def not_any_of(cls, column: str, *values: Any) -> "Filter":
        return cls._multi(column, ComparisonOperator.NOT_ANY_OF, values)

    @classmethod
    def _multi(cls, column: str, operator: ComparisonOperator, values: Iterable[Any]) -> "Filter":
        values = list(values)
        if not values:
            return cls(column, operator, "")
        return cls(column, operator, values[0], *values[1:])


FilterItem = Union[Filter, "FilterGroup"]


class FilterGroup:
    """Filters and nested groups joined by one logical operator."""

    def __init__(self, operator: Union[LogicalOperator, str], *items: FilterItem) -> None:
        self.operator = LogicalOperator(operator)
        self.items: List[FilterItem] = list(items)

    def add(self, *items: FilterItem) -> "FilterGroup":
        self.items.extend(items)
        return self

    def __str__(self) -> str:
        parts = [str(item) for item in self.items]
        if not parts:
            return ""
        if len(parts) == 1:
            if self.operator is LogicalOperator.NOT:
                return f"{LogicalOperator.NOT.value}{parts[0]}"
            return parts[0]
        return "(" + self.operator.value.join(parts) + ")"

    def __repr__(self) -> str:
        return f"FilterGroup({str(self)!r})"

    def __bool__(self) -> bool:
        return bool(self.items)


def and_group(*items: FilterItem) -> FilterGroup:
    return FilterGroup(LogicalOperator.AND, *items)


def or_group(*items: FilterItem) -> FilterGroup:
    return FilterGroup(LogicalOperator.OR, *items)


def not_group(item: FilterItem) -> FilterGroup:
    return FilterGroup(LogicalOperator.NOT, item)


def combine_filters(expressions: Iterable[str]) -> str:
    """Join filter expressions with ``~and``, skipping empty ones.

    Compound expressions are parenthesised first so ``a~or b`` combined with
    ``c`` reads ``(a~or b)~and c`` rather than changing precedence.
    """
    parts = [e for e in expressions if e]
    if len(parts) > 1:
        parts = [_enclose(p) for p in parts]
    return LogicalOperator.AND.value.join(parts)


def _enclose(expression: str) -> str:
    if "~" not in expression or _is_single_group(expression):
        return expression
    return f"({expression})"


def _is_single_group(expression: str) -> bool:
    # True when the first "(" closes at the very last character.
    if not expression.startswith("("):
        return False
    depth = 0
    for index, char in enumerate(expression):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index == len(expression) - 1
    return False
