from typing import Any, List, Optional


class TransportError(Exception):
    pass


class TransportProtocolError(TransportError):
    """Transport protocol error.

    The answer received from the server does not correspond to the transport protocol.
    """

    def __init__(
        self,
        msg: str,
        code: Optional[int] = None,
        body_text: Optional[str] = None,
    ):
        super().__init__(msg)
        self.code = code
        self.body_text = body_text


class TransportServerError(TransportError):
    """The server returned a global error.

    The answer may still contain a GraphQL result (data alongside errors),
    in which case it is available in the result attribute.
    """

    def __init__(
        self,
        msg: str,
        code: Optional[int] = None,
        result: Optional[Any] = None,
    ):
        super().__init__(msg)
        self.code = code
        self.result = result


class TransportConnectionFailed(TransportError):
    """Transport connection failed.

    The HTTP exchange could not be completed (connection refused, reset, ...).
    """


class TransportSerializationError(TransportError):
    """The request payload could not be serialized.

    Raised before any network activity.
    """


class TransportQueryError(Exception):
    """The server returned an error for a specific query."""

    def __init__(
        self,
        msg: str,
        errors: Optional[List[Any]] = None,
        data: Optional[Any] = None,
        extensions: Optional[Any] = None,
    ):
        super().__init__(msg)
        self.errors = errors
        self.data = data
        self.extensions = extensions


class TransportClosed(TransportError):
    """Transport is already closed.

    This exception is generated when the client is trying to use the transport
    while the transport was previously closed.
    """


class TransportAlreadyConnected(TransportError):
    """Transport is already connected.

    Exception generated when the client is trying to connect to the transport
    while the transport is already connected.
    """
