import json
import logging
from typing import Any, Callable

import aiohttp
from graphql import ExecutionResult

from ...operation import Operation
from ..exceptions import TransportProtocolError, TransportServerError

log = logging.getLogger(__name__)


async def parse_and_check_http_response(
    operation: Operation,
    response: aiohttp.ClientResponse,
    json_deserialize: Callable[[str], Any] = json.loads,
) -> ExecutionResult:
    """Interpret the HTTP response of an operation.

    :raises TransportProtocolError: if the body is not a GraphQL answer
    :raises TransportServerError: if the status code is 300 or higher,
        the parsed answer being kept in the result attribute
    """

    body_text = await response.text()

    if log.isEnabledFor(logging.DEBUG):
        log.debug("<<< %s", body_text)

    try:
        result = json_deserialize(body_text)
    except ValueError as e:
        if response.status >= 400:
            raise TransportServerError(
                f"{response.status}, message='{response.reason}'", response.status
            ) from e
        raise TransportProtocolError(
            f"Server did not return a valid GraphQL result: "
            f"Not a JSON answer: {body_text}",
            code=response.status,
            body_text=body_text,
        ) from e

    if response.status >= 300:
        raise TransportServerError(
            f"Response not successful: Received status code {response.status}",
            response.status,
            result=result,
        )

    if not isinstance(result, dict) or ("data" not in result and "errors" not in result):
        raise TransportProtocolError(
            "Server response was missing for query "
            f"'{operation.operation_name}'.",
            code=response.status,
            body_text=body_text,
        )

    return ExecutionResult(
        errors=result.get("errors"),
        data=result.get("data"),
        extensions=result.get("extensions"),
    )
