import pytest

from gql_upload.transport.common.serialize import serialize_fetch_parameter
from gql_upload.transport.exceptions import TransportSerializationError


def test_serialize_fetch_parameter():
    assert serialize_fetch_parameter({"a": [1, None]}, "Payload") == (
        '{"a": [1, null]}'
    )


def test_serialize_fetch_parameter_circular_reference():
    value = {"a": 1}
    value["self"] = value

    with pytest.raises(TransportSerializationError) as exc_info:
        serialize_fetch_parameter(value, "Payload")

    assert str(exc_info.value).startswith("Payload is not serializable")
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_serialize_fetch_parameter_unsupported_type():
    with pytest.raises(TransportSerializationError, match="Payload is not serializable"):
        serialize_fetch_parameter({"a": object()}, "Payload")


def test_serialize_fetch_parameter_custom_serializer():
    def json_serialize(value):
        return "custom"

    assert serialize_fetch_parameter({}, "Payload", json_serialize) == "custom"
