import datetime as dt

import pytest

from nocodb_client.filters import (
    ComparisonOperator,
    DateWithinSubOperator,
    Filter,
    FilterGroup,
    LogicalOperator,
    and_group,
    combine_filters,
    format_value,
    not_group,
    or_group,
)


def test_filter_renders_triple():
    assert str(Filter.equal("Name", "John")) == "(Name,eq,John)"


def test_filter_renders_extra_values():
    assert str(Filter.between("Age", 18, 30)) == "(Age,btw,18,30)"
    assert str(Filter.is_in("Status", "a", "b", "c")) == "(Status,in,a,b,c)"


def test_null_and_boolean_shorthands():
    assert str(Filter.is_null("Email")) == "(Email,is,null)"
    assert str(Filter.is_not_null("Email")) == "(Email,isnot,null)"
    assert str(Filter.is_true("Active")) == "(Active,is,true)"
    assert str(Filter.is_false("Active")) == "(Active,is,false)"


def test_is_within_uses_sub_operator():
    item = Filter.is_within("Due", DateWithinSubOperator.PAST_NUMBER_OF_DAYS, 14)
    assert str(item) == "(Due,isWithin,pastNumberOfDays,14)"


def test_multi_value_operator_without_values_keeps_empty_slot():
    assert str(Filter.any_of("Tags")) == "(Tags,anyof,)"


def test_unknown_operator_is_rejected():
    with pytest.raises(ValueError):
        Filter("Age", "bogus", 1)


def test_operator_accepts_plain_string():
    assert Filter("Age", "ge", 21).operator is ComparisonOperator.GREATER_THAN_OR_EQUAL


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (3.5, "3.5"),
        (dt.date(2024, 1, 31), "2024-01-31"),
        (DateWithinSubOperator.PAST_WEEK, "pastWeek"),
    ],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_group_joins_with_operator():
    group = or_group(Filter.equal("A", 1), Filter.equal("B", 2))
    assert str(group) == "((A,eq,1)~or(B,eq,2))"


def test_nested_groups():
    group = and_group(
        Filter.greater_than("Age", 18),
        or_group(Filter.like("Name", "Jo%"), Filter.equal("Name", "Ann")),
    )
    assert str(group) == "((Age,gt,18)~and((Name,like,Jo%)~or(Name,eq,Ann)))"


def test_single_item_group_renders_item():
    assert str(and_group(Filter.equal("A", 1))) == "(A,eq,1)"


def test_not_group_with_single_item_keeps_operator():
    assert str(not_group(Filter.equal("A", 1))) == "~not(A,eq,1)"


def test_empty_group_is_falsy():
    group = FilterGroup(LogicalOperator.AND)
    assert not group
    assert str(group) == ""
    group.add(Filter.equal("A", 1))
    assert group


def test_combine_filters_skips_empty_and_joins_with_and():
    assert combine_filters(["(A,eq,1)", "", "(B,eq,2)"]) == "(A,eq,1)~and(B,eq,2)"


def test_combine_filters_parenthesises_compound_expressions():
    combined = combine_filters(["(A,eq,1)~or(B,eq,2)", "(C,eq,3)"])
    assert combined == "((A,eq,1)~or(B,eq,2))~and(C,eq,3)"


def test_combine_filters_keeps_single_expression_untouched():
    assert combine_filters(["(A,eq,1)~or(B,eq,2)"]) == "(A,eq,1)~or(B,eq,2)"


def test_combine_filters_does_not_double_wrap_groups():
    group = str(or_group(Filter.equal("A", 1), Filter.equal("B", 2)))
    assert combine_filters([group, "(C,eq,3)"]) == "((A,eq,1)~or(B,eq,2))~and(C,eq,3)"


def test_filters_are_hashable():
    seen = {Filter.equal("A", 1), Filter.equal("A", 1), Filter.equal("B", 1)}
    assert len(seen) == 2
