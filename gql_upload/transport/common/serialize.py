import json
from typing import Any, Callable

from ..exceptions import TransportSerializationError


def serialize_fetch_parameter(
    value: Any,
    label: str,
    json_serialize: Callable[[Any], str] = json.dumps,
) -> str:
    """Serialize a request parameter to JSON text.

    :param value: the object to serialize
    :param label: name of the parameter, used in the error message
    :param json_serialize: Json serializer callable
    :raises TransportSerializationError: for circular references
        or values the serializer does not support
    """
    try:
        return json_serialize(value)
    except (TypeError, ValueError) as e:
        raise TransportSerializationError(f"{label} is not serializable: {e}") from e
