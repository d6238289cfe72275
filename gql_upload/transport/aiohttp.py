import io
import json
import logging
from ssl import SSLContext
from typing import Any, AsyncGenerator, Callable, Dict, Optional, Tuple, Type, Union

import aiohttp
from aiohttp.client_reqrep import Fingerprint
from aiohttp.helpers import BasicAuth
from graphql import ExecutionResult
from yarl import URL

from ..operation import Operation
from .async_transport import AsyncTransport
from .common.execution import ExecutionHandle
from .common.http_config import (
    FALLBACK_HTTP_CONFIG,
    HttpConfig,
    HttpOverrides,
    select_http_options_and_body,
    select_uri,
)
from .common.http_response import parse_and_check_http_response
from .common.multipart import build_wire_body
from .common.query_rewriter import rewrite_query
from .common.serialize import serialize_fetch_parameter
from .exceptions import (
    TransportAlreadyConnected,
    TransportClosed,
    TransportConnectionFailed,
    TransportError,
)
from .file_upload import close_files, extract_files, open_files

log = logging.getLogger(__name__)


class AIOHTTPUploadTransport(AsyncTransport):
    """:ref:`Async Transport <async_transports>` to execute GraphQL operations
    on remote servers with an HTTP connection, with support for file uploads.

    Files found in the variables are sent following the
    `GraphQL multipart request spec`_.

    Before being sent, the variables of every operation are inlined in the
    query text (see :mod:`gql_upload.transport.common.query_rewriter`).

    This transport use the aiohttp library with asyncio.

    .. _GraphQL multipart request spec:
      https://github.com/jaydenseric/graphql-multipart-request-spec
    """

    file_classes: Tuple[Type[Any], ...] = (
        io.IOBase,
        aiohttp.StreamReader,
        AsyncGenerator,
    )

    def __init__(
        self,
        url: Union[str, URL] = "/graphql",
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[BasicAuth] = None,
        fetch_options: Optional[Dict[str, Any]] = None,
        include_extensions: bool = False,
        ssl: Union[SSLContext, bool, Fingerprint] = True,
        timeout: Optional[int] = None,
        json_serialize: Callable = json.dumps,
        json_deserialize: Callable = json.loads,
        client_session_args: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the transport with the given aiohttp parameters.

        :param url: The GraphQL server URL. Example: 'https://server.com:PORT/path'.
        :param headers: Dict of HTTP Headers, merged over the default headers.
        :param auth: BasicAuth object to enable Basic HTTP auth if needed
        :param fetch_options: Dict of extra args passed to the aiohttp request
                method. A "method" key changes the HTTP method (Default: POST).
        :param include_extensions: Send the extensions of the operations.
        :param ssl: ssl_context of the connection.
                    Use ssl=False to not verify ssl certificates.
        :param timeout: total timeout in seconds of the aiohttp session.
        :param json_serialize: Json serializer callable.
                By default json.dumps() function
        :param json_deserialize: Json deserializer callable.
                By default json.loads() function
        :param client_session_args: Dict of extra args passed to
                `aiohttp.ClientSession`_

        .. _aiohttp.ClientSession:
          https://docs.aiohttp.org/en/stable/client_reference.html#aiohttp.ClientSession
        """
        self.config = HttpConfig(
            uri=url,
            headers=headers,
            auth=auth,
            fetch_options=fetch_options,
            include_extensions=include_extensions,
        )
        self.ssl: Union[SSLContext, bool, Fingerprint] = ssl
        self.timeout: Optional[int] = timeout
        self.client_session_args = client_session_args
        self.session: Optional[aiohttp.ClientSession] = None
        self.json_serialize: Callable = json_serialize
        self.json_deserialize: Callable = json_deserialize

    @property
    def url(self) -> str:
        return select_uri(None, self.config.uri)

    async def connect(self) -> None:
        """Coroutine which will create an aiohttp ClientSession() as self.session.

        Don't call this coroutine directly on the transport, instead use
        :code:`async with` on the client and this coroutine will be executed
        to create the session.

        Should be cleaned with a call to the close coroutine.
        """

        if self.session is None:

            client_session_args: Dict[str, Any] = {}

            if self.timeout is not None:
                client_session_args["timeout"] = aiohttp.ClientTimeout(
                    total=self.timeout
                )

            # Adding custom parameters passed from init
            if self.client_session_args:
                client_session_args.update(self.client_session_args)

            log.debug("Connecting transport")

            self.session = aiohttp.ClientSession(**client_session_args)

        else:
            raise TransportAlreadyConnected("Transport is already connected")

    async def close(self) -> None:
        """Coroutine which will close the aiohttp session.

        Don't call this coroutine directly on the transport, instead use
        :code:`async with` on the client and this coroutine will be executed
        when you exit the async context manager.
        """
        if self.session is not None:

            log.debug("Closing transport")

            await self.session.close()

        self.session = None

    def _prepare_request(
        self,
        operation: Operation,
        overrides: Optional[HttpOverrides] = None,
    ) -> Tuple[str, Dict[str, Any], list]:

        url = select_uri(overrides, self.config.uri)

        options, body = select_http_options_and_body(
            operation,
            FALLBACK_HTTP_CONFIG,
            self.config,
            overrides,
        )

        # The files are replaced by null values in the body
        nulled_body, files = extract_files(body, self.file_classes)

        payload = serialize_fetch_parameter(nulled_body, "Payload", self.json_serialize)

        # The variables are inlined in the query on the serialized form of the body
        rewritten_body = rewrite_query(self.json_deserialize(payload))
        payload = serialize_fetch_parameter(
            rewritten_body, "Payload", self.json_serialize
        )

        # Log the payload
        if log.isEnabledFor(logging.DEBUG):
            log.debug(">>> %s", payload)

        request_args: Dict[str, Any] = {
            "method": options.method,
            "payload": payload,
            "headers": options.headers,
            "auth": options.auth,
            "ssl": self.ssl,
        }

        # Pass extra fetch options to aiohttp request method
        request_args.update(options.extra)

        return url, request_args, files

    async def _send(
        self,
        operation: Operation,
        url: str,
        request_args: Dict[str, Any],
        files: list,
    ) -> ExecutionResult:

        if self.session is None:
            raise TransportClosed("Transport is not connected")

        payload = request_args.pop("payload")

        try:
            open_files(files)

            data, headers = build_wire_body(
                payload,
                files,
                request_args.pop("headers"),
                json_serialize=self.json_serialize,
            )

            async with self.session.request(
                url=url, data=data, headers=headers, **request_args
            ) as resp:

                # Forward the response on the context
                operation.set_context({"response": resp})

                return await parse_and_check_http_response(
                    operation, resp, self.json_deserialize
                )
        except TransportError:
            raise
        except Exception as e:
            raise TransportConnectionFailed(str(e)) from e
        finally:
            close_files(files)

    def execute(
        self,
        operation: Operation,
        overrides: Optional[HttpOverrides] = None,
    ) -> ExecutionHandle:
        """Start the execution of the provided operation against the configured
        remote server using the current session.

        The request is prepared at once: a payload which cannot be serialized
        raises here, before any network activity. The HTTP request is then
        sent in a new task.

        Don't call this method directly on the transport, instead use
        :code:`execute` on a client session, unless you need the
        :class:`ExecutionHandle <gql_upload.transport.common.ExecutionHandle>`
        to cancel the request.

        :param operation: GraphQL operation as an
                          :class:`Operation <gql_upload.Operation>` object.
        :param overrides: per-call HTTP options merged over the transport config.
        :returns: a started ExecutionHandle.
        :raises TransportSerializationError: if the payload is not serializable.
        """

        if self.session is None:
            raise TransportClosed("Transport is not connected")

        url, request_args, files = self._prepare_request(operation, overrides)

        async def send() -> ExecutionResult:
            return await self._send(operation, url, request_args, files)

        return ExecutionHandle(send).start()
