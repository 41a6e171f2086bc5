import datetime as dt

import pytest

from nocodb_client.filters import DateWithinSubOperator, Filter, or_group


def test_empty_builder_renders_no_params(table):
    assert table.list_records().build_query() == {}


def test_full_list_query(table):
    query = (
        table.list_records()
        .where_is_greater_than("Age", 18)
        .where_is_like("Name", "Jo%")
        .sort_desc_by("CreatedAt")
        .sort_asc_by("Name")
        .limit(10)
        .offset(20)
        .return_fields("Id", "Name")
        .shuffle()
        .with_view_id("vw123")
        .build_query()
    )
    assert query == {
        "where": "(Age,gt,18)~and(Name,like,Jo%)",
        "sort": "-CreatedAt,Name",
        "limit": "10",
        "offset": "20",
        "fields": "Id,Name",
        "shuffle": "1",
        "viewId": "vw123",
    }


def test_pagination_ignores_invalid_values(table):
    query = table.list_records().limit(0).offset(-5).build_query()
    assert "limit" not in query
    assert "offset" not in query


def test_page_translates_to_limit_and_offset(table):
    query = table.list_records().page(3, 25).build_query()
    assert query == {"limit": "25", "offset": "50"}


def test_page_with_invalid_arguments_is_ignored(table):
    builder = table.list_records().limit(5).page(0, 10).page(2, 0)
    assert builder.build_query() == {"limit": "5"}


def test_return_fields_replaces_selection(table):
    query = table.list_records().return_fields("A", "B").return_fields("C").build_query()
    assert query["fields"] == "C"


def test_where_filter_accepts_groups(table):
    group = or_group(Filter.equal("A", 1), Filter.equal("B", 2))
    query = table.list_records().where_filter(group).where_is_null("C").build_query()
    assert query["where"] == "((A,eq,1)~or(B,eq,2))~and(C,is,null)"


def test_raw_where_is_combined(table):
    query = table.list_records().where("").where("(A,eq,1)~or(B,eq,2)").where_is_true("Active")
    assert query.build_query()["where"] == "((A,eq,1)~or(B,eq,2))~and(Active,is,true)"


def test_multi_value_helpers_without_values_are_ignored(table):
    builder = table.list_records().where_is_in("Status").where_is_any_of("Tags")
    assert builder.build_query() == {}


def test_where_compare_with_explicit_operator(table):
    query = table.count_records().where_compare("Age", "neq", 3).build_query()
    assert query == {"where": "(Age,neq,3)"}


def test_empty_view_id_is_ignored(table):
    assert table.count_records().with_view_id("").build_query() == {}


def test_with_timeout_ignores_non_positive(table):
    builder = table.list_records().with_timeout(0).with_timeout(-1)
    assert builder._request_timeout is None
    assert builder.with_timeout(2.5)._request_timeout == 2.5


def test_link_list_supports_filters_and_sort(table):
    query = (
        table.list_links("fld1", 7)
        .where_is_not_equal_to("Status", "done")
        .sort_asc_by("Title")
        .limit(5)
        .build_query()
    )
    assert query == {"where": "(Status,neq,done)", "sort": "Title", "limit": "5"}


@pytest.mark.parametrize(
    "method,args,expected",
    [
        ("where_is_less_than", ("Age", 65), "(Age,lt,65)"),
        ("where_is_less_than_or_equal", ("Age", 65), "(Age,le,65)"),
        ("where_is_greater_than_or_equal", ("Age", 18), "(Age,ge,18)"),
        ("where_is_not_like", ("Name", "%bot"), "(Name,nlike,%bot)"),
        ("where_is_between", ("Price", 10, 20), "(Price,btw,10,20)"),
        ("where_is_not_between", ("Price", 10, 20), "(Price,nbtw,10,20)"),
        ("where_is_within", ("Due", DateWithinSubOperator.PAST_WEEK), "(Due,isWithin,pastWeek)"),
        ("where_is_within", ("Due", "nextNumberOfDays", 3), "(Due,isWithin,nextNumberOfDays,3)"),
        ("where_is_in", ("Status", "open", "closed"), "(Status,in,open,closed)"),
        ("where_is_all_of", ("Tags", "a", "b"), "(Tags,allof,a,b)"),
        ("where_is_any_of", ("Tags", "a"), "(Tags,anyof,a)"),
        ("where_is_not_all_of", ("Tags", "a", "b"), "(Tags,nallof,a,b)"),
        ("where_is_not_any_of", ("Tags", "c"), "(Tags,nanyof,c)"),
        (
            "where_is_equal_to",
            ("CreatedAt", dt.datetime(2024, 5, 1, 12, 30)),
            "(CreatedAt,eq,2024-05-01T12:30:00)",
        ),
    ],
)
def test_where_helpers_render_filter(table, method, args, expected):
    builder = getattr(table.list_records(), method)(*args)
    assert builder.build_query() == {"where": expected}


@pytest.mark.parametrize(
    "method",
    ["where_is_in", "where_is_all_of", "where_is_any_of", "where_is_not_all_of", "where_is_not_any_of"],
)
def test_multi_value_helpers_without_values_are_noops(table, method):
    builder = getattr(table.list_records(), method)("Tags")
    assert builder.build_query() == {}
