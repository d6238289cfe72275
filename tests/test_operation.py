import pytest
from graphql import parse

from gql_upload import Operation, gql


def test_operation_string_is_kept_verbatim():
    query = """
    query getUser($id: ID!) {
      user(id: $id) { name }
    }
    """

    operation = gql(query, variable_values={"id": 5}, operation_name="getUser")

    assert operation.query == query
    assert operation.payload == {
        "operationName": "getUser",
        "variables": {"id": 5},
        "query": query,
    }


def test_operation_from_document():
    operation = Operation(parse("{ hero { name } }"))

    assert operation.query == "{\n  hero {\n    name\n  }\n}"


def test_operation_from_operation():
    base = Operation("{ a }", variable_values={"x": 1}, operation_name="op")

    operation = Operation(base, variable_values={"x": 2})

    assert operation.query == "{ a }"
    assert operation.variable_values == {"x": 2}
    assert operation.operation_name == "op"


def test_operation_invalid_type():
    with pytest.raises(TypeError):
        Operation(42)


def test_operation_context():
    operation = Operation("{ a }", context={"initial": True})

    assert operation.get_context() == {"initial": True}

    context = operation.set_context({"response": "resp"})

    assert context == {"initial": True, "response": "resp"}
    assert operation.get_context() is context
