from decimal import Decimal

import pytest

from gql_upload.transport.common.query_rewriter import (
    extract_selection_set,
    rewrite_query,
    variable_literal,
)


def test_rewrite_query_numeric_id():
    body = {
        "operation": "getUser",
        "query": "{ user(id: $id) { name } }",
        "variables": {"id": 5},
    }

    rewritten = rewrite_query(body)

    assert rewritten == {
        "operationName": "getUser",
        "query": " query {  user(id: 5) { name }  } ",
        "variables": None,
    }


def test_rewrite_query_uses_operation_key_not_operation_name():
    body = {
        "operationName": "getUser",
        "query": "{ user(id: $id) { name } }",
        "variables": {"id": 5},
    }

    rewritten = rewrite_query(body)

    assert rewritten["operationName"] is None


def test_rewrite_query_keeps_only_selection_set_and_strips_newlines():
    body = {
        "query": """query getUser($name: String!) {
  user(name: $name) {
    id
  }
}""",
        "variables": {"name": "bob"},
    }

    rewritten = rewrite_query(body)

    assert rewritten["query"] == " query {   user(name: 'bob') {    id  } } "


def test_rewrite_query_string_id_is_not_quoted():
    body = {"query": "{ node(ID: $ID) { id } }", "variables": {"ID": "abc"}}

    assert rewrite_query(body)["query"] == " query {  node(ID: abc) { id }  } "


def test_rewrite_query_numbers_are_not_quoted():
    body = {
        "query": "{ items(first: $first, ratio: $ratio) { id } }",
        "variables": {"first": 10, "ratio": 0.5},
    }

    assert (
        rewrite_query(body)["query"]
        == " query {  items(first: 10, ratio: 0.5) { id }  } "
    )


def test_rewrite_query_number_for_string_typed_variable_is_not_quoted():
    # The literal depends on the python type of the value only
    body = {
        "query": "query ($zip: String) { city(zip: $zip) { name } }",
        "variables": {"zip": 75001},
    }

    assert rewrite_query(body)["query"] == " query {  city(zip: 75001) { name }  } "


def test_rewrite_query_placeholder_is_case_insensitive():
    body = {"query": "{ user(name: $NAME) { id } }", "variables": {"name": "bob"}}

    assert rewrite_query(body)["query"] == " query {  user(name: 'bob') { id }  } "


def test_rewrite_query_replaces_first_occurrence_only():
    body = {
        "query": "{ a(x: $x) { id } b(x: $x) { id } }",
        "variables": {"x": 1},
    }

    assert (
        rewrite_query(body)["query"] == " query {  a(x: 1) { id } b(x: $x) { id }  } "
    )


def test_rewrite_query_shared_prefix_matches_longer_name():
    # Known limitation: $id matches the beginning of $idExtra
    body = {
        "query": "{ user(extra: $idExtra, id: $id) { name } }",
        "variables": {"id": 1, "idExtra": "x"},
    }

    assert (
        rewrite_query(body)["query"]
        == " query {  user(extra: 1Extra, id: $id) { name }  } "
    )


def test_rewrite_query_string_values_are_not_escaped():
    # Known unsafe case: the single quote of the value is sent as is
    body = {
        "query": "{ users(name: $name) { id } }",
        "variables": {"name": "O'Brien"},
    }

    assert (
        rewrite_query(body)["query"] == " query {  users(name: 'O'Brien') { id }  } "
    )


def test_rewrite_query_value_with_regex_replacement_syntax():
    body = {
        "query": "{ users(name: $name) { id } }",
        "variables": {"name": r"a\1$&b"},
    }

    assert rewrite_query(body)["query"] == r" query {  users(name: 'a\1$&b') { id }  } "


def test_rewrite_query_without_variables():
    body = {"query": "{ hero { name } }", "variables": None}

    assert rewrite_query(body) == {
        "operationName": None,
        "query": " query {  hero { name }  } ",
        "variables": None,
    }


def test_rewrite_query_without_query_is_unchanged():
    body = {"operationName": "op", "variables": {"id": 1}}

    assert rewrite_query(body) is body


def test_rewrite_query_without_braces():
    body = {"query": "not a query", "variables": {}}

    assert rewrite_query(body)["query"] == " query {  } "


@pytest.mark.parametrize(
    "key, value, expected",
    [
        ("id", 5, "5"),
        ("Id", "abc", "abc"),
        ("count", 3, "3"),
        ("price", Decimal("1.5"), "1.5"),
        ("name", "bob", "'bob'"),
        ("flag", True, "'true'"),
        ("file", None, "'null'"),
    ],
)
def test_variable_literal(key, value, expected):
    assert variable_literal(key, value) == expected


def test_extract_selection_set():
    assert extract_selection_set("query q { a { b } }") == " a { b } "
    assert extract_selection_set("{}") == ""
    assert extract_selection_set("query q { a") == ""
