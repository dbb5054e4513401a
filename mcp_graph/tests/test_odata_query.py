"""
OData query builder tests
"""

from mcp_graph.odata_query import FilterBuilder, odata_literal, search_phrase


def test_literal_doubles_single_quotes():
    assert odata_literal("O'Brien") == "'O''Brien'"


def test_search_phrase_escapes_quotes():
    assert search_phrase('say "hi"') == '"say \\"hi\\""'


def test_conditions_joined_with_and():
    query = (
        FilterBuilder()
        .from_sender("a@b.com")
        .subject_contains("report")
        .unread()
        .build()
    )
    assert query == (
        "from/emailAddress/address eq 'a@b.com' and contains(subject, 'report') and isRead eq false"
    )


def test_range_and_equality():
    query = FilterBuilder().ge("start/dateTime", "2025-01-01").le("end/dateTime", "2025-01-31").eq("status", "x").build()
    assert query == "start/dateTime ge '2025-01-01' and end/dateTime le '2025-01-31' and status eq 'x'"


def test_empty_builder():
    assert FilterBuilder().build() == ""


def test_only_public_builder_methods():
    public = {name for name in vars(FilterBuilder) if not name.startswith("_")}
    assert public == {"unread", "from_sender", "subject_contains", "eq", "ge", "le", "build"}
