from .aiohttp import AIOHTTPUploadTransport
from .async_transport import AsyncTransport
from .file_upload import ExtractedFile, FileVar

__all__ = [
    "AIOHTTPUploadTransport",
    "AsyncTransport",
    "ExtractedFile",
    "FileVar",
]
