from typing import Any, Dict, Optional, Union

from anyio import fail_after
from graphql import ExecutionResult

from .operation import Operation
from .transport.async_transport import AsyncTransport
from .transport.common.http_config import HttpOverrides
from .transport.exceptions import TransportQueryError
from .utils import str_first_element


class Client:
    """The Client class is the entrypoint to execute GraphQL operations
    on an upload transport.

    To connect to the transport and get an
    :class:`async session <gql_upload.client.AsyncClientSession>`,
    use :code:`async with client as session:`
    """

    def __init__(
        self,
        *,
        transport: AsyncTransport,
        execute_timeout: Optional[Union[int, float]] = 10,
    ):
        """Initialize the client with the given parameters.

        :param transport: The provided :ref:`transport <Transports>`.
        :param execute_timeout: The maximum time in seconds for the execution of a
                request before a TimeoutError is raised. The request is aborted.
                Passing None results in waiting forever for a response.
        """
        assert isinstance(
            transport, AsyncTransport
        ), "Only a transport of type AsyncTransport can be used"

        self.transport: AsyncTransport = transport

        # Enforced timeout of the execute function
        self.execute_timeout = execute_timeout

    async def connect_async(self) -> "AsyncClientSession":
        r"""Connect asynchronously with the underlying async transport to
        produce a session.

        If you call this method, you should call the
        :meth:`close_async <gql_upload.client.Client.close_async>` method
        for cleanup.
        """
        self.session = AsyncClientSession(client=self)

        await self.transport.connect()

        return self.session

    async def close_async(self) -> None:
        """Close the async transport."""

        await self.transport.close()

    async def __aenter__(self):
        return await self.connect_async()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close_async()


class AsyncClientSession:
    """An instance of this class is created when using :code:`async with` on a
    :class:`client <gql_upload.client.Client>`.

    It contains the async methods (execute) to send operations
    on the async transport using the same session.
    """

    def __init__(self, client: Client):
        """:param client: the :class:`client <gql_upload.client.Client>` used"""
        self.client = client

    @property
    def transport(self) -> AsyncTransport:
        return self.client.transport

    async def _execute(
        self,
        operation: Operation,
        overrides: Optional[HttpOverrides] = None,
    ) -> ExecutionResult:
        """Coroutine to execute the provided operation asynchronously using
        the async transport, returning an ExecutionResult object.

        If this coroutine is cancelled or times out, the HTTP request is aborted.
        """

        handle = self.transport.execute(operation, overrides)

        try:
            # Wait for the result with a timeout
            with fail_after(self.client.execute_timeout):
                return await handle.result()
        finally:
            handle.cancel()

    async def execute(
        self,
        operation: Operation,
        overrides: Optional[HttpOverrides] = None,
        *,
        get_execution_result: bool = False,
    ) -> Union[Dict[str, Any], ExecutionResult]:
        """Coroutine to execute the provided operation asynchronously using
        the async transport.

        Raises a TransportQueryError if an error has been returned in
            the ExecutionResult.

        :param operation: GraphQL operation as :class:`Operation <gql_upload.Operation>`.
        :param overrides: per-call HTTP options.
        :param get_execution_result: return the full ExecutionResult instance instead of
            only the "data" field. Necessary if you want to get the "extensions" field.
        """

        result = await self._execute(operation, overrides)

        # Raise an error if an error is returned in the ExecutionResult object
        if result.errors:
            raise TransportQueryError(
                str_first_element(result.errors),
                errors=result.errors,
                data=result.data,
                extensions=result.extensions,
            )

        assert (
            result.data is not None
        ), "Transport returned an ExecutionResult without data or errors"

        if get_execution_result:
            return result

        return result.data
