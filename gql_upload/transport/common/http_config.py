from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from aiohttp import BasicAuth
from multidict import CIMultiDict
from yarl import URL

from ...operation import Operation

DEFAULT_URI = "/graphql"


@dataclass
class HttpConfig:
    """HTTP configuration of an upload transport.

    An instance is built once per transport. Per-call changes are given
    with :class:`HttpOverrides` instead of mutating it.
    """

    uri: Optional[Union[str, URL]] = None
    headers: Optional[Dict[str, str]] = None
    auth: Optional[BasicAuth] = None
    fetch_options: Optional[Dict[str, Any]] = None
    include_extensions: Optional[bool] = None
    include_query: Optional[bool] = None


@dataclass
class HttpOverrides(HttpConfig):
    """Per-call overrides, merged over the transport :class:`HttpConfig`."""


@dataclass
class HttpOptions:
    """Resolved options of a single HTTP exchange."""

    method: str = "POST"
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    auth: Optional[BasicAuth] = None
    extra: Dict[str, Any] = field(default_factory=dict)


FALLBACK_HTTP_CONFIG = HttpConfig(
    uri=DEFAULT_URI,
    headers={"accept": "*/*", "content-type": "application/json"},
    fetch_options={"method": "POST"},
    include_extensions=False,
    include_query=True,
)


def select_uri(
    overrides: Optional[HttpConfig],
    fallback_uri: Union[str, URL, None] = DEFAULT_URI,
) -> str:
    if overrides is not None and overrides.uri is not None:
        return str(overrides.uri)
    return str(fallback_uri if fallback_uri is not None else DEFAULT_URI)


def select_http_options_and_body(
    operation: Operation,
    fallback: HttpConfig,
    *configs: Optional[HttpConfig],
) -> Tuple[HttpOptions, Dict[str, Any]]:
    """Merge the configs over the fallback config, the last one winning,
    and build the candidate request body of the operation."""

    options = HttpOptions()
    include_extensions = bool(fallback.include_extensions)
    include_query = fallback.include_query is not False

    for config in (fallback,) + configs:
        if config is None:
            continue

        if config.fetch_options:
            fetch_options = dict(config.fetch_options)
            options.method = fetch_options.pop("method", options.method)
            fetch_headers = fetch_options.pop("headers", None)
            if fetch_headers:
                options.headers.update(fetch_headers)
            options.extra.update(fetch_options)

        if config.auth is not None:
            options.auth = config.auth

        if config.headers:
            options.headers.update(config.headers)

        if config.include_extensions is not None:
            include_extensions = config.include_extensions

        if config.include_query is not None:
            include_query = config.include_query

    payload = operation.payload
    body: Dict[str, Any] = {
        "operationName": payload["operationName"],
        "variables": payload["variables"],
    }

    if include_extensions:
        body["extensions"] = operation.extensions

    if include_query:
        body["query"] = payload["query"]

    return options, body
