"""The primary :mod:`gql_upload` package includes everything you need to
send GraphQL operations with file uploads over HTTP:

 - the :class:`Operation <gql_upload.Operation>` class and the
   :func:`gql <gql_upload.gql>` helper to describe an operation
 - the :class:`Client <gql_upload.Client>` class as the entrypoint to execute
   operations in a session
 - the :class:`AIOHTTPUploadTransport <gql_upload.AIOHTTPUploadTransport>`
   transport and the :class:`FileVar <gql_upload.FileVar>` file marker
"""

from .__version__ import __version__
from .client import Client
from .operation import Operation, gql
from .transport.aiohttp import AIOHTTPUploadTransport
from .transport.common.http_config import HttpOverrides
from .transport.file_upload import FileVar

__all__ = [
    "__version__",
    "gql",
    "AIOHTTPUploadTransport",
    "Client",
    "FileVar",
    "HttpOverrides",
    "Operation",
]
