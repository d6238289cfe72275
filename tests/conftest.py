import json
import logging
import os
import tempfile
from typing import Union

import pytest
import pytest_asyncio


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "aiohttp: mark test as necessitating the aiohttp test server"
    )


async def aiohttp_server_base():
    """Factory to create a TestServer instance, given an app.

    aiohttp_server(app, **kwargs)
    """
    from aiohttp.test_utils import TestServer as AIOHTTPTestServer

    servers = []

    async def go(app, *, port=None, **kwargs):  # type: ignore
        server = AIOHTTPTestServer(app, port=port)
        await server.start_server(**kwargs)
        servers.append(server)
        return server

    yield go

    while servers:
        await servers.pop().close()


@pytest_asyncio.fixture
async def aiohttp_server():
    async for server in aiohttp_server_base():
        yield server


# Adding debug logs
for name in [
    "gql_upload.transport.aiohttp",
    "gql_upload.transport.common.execution",
    "gql_upload.transport.common.http_response",
    "gql_upload.transport.common.multipart",
    "gql_upload.transport.common.query_rewriter",
]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    if len(logger.handlers) < 1:
        logger.addHandler(logging.StreamHandler())


class TemporaryFile:
    """Class used to generate temporary files for the tests"""

    def __init__(self, content: Union[str, bytearray, bytes]):

        mode = "w" if isinstance(content, str) else "wb"

        # We need to set the newline to '' so that the line returns
        # are not replaced by '\r\n' on windows
        newline = "" if isinstance(content, str) else None

        self.file = tempfile.NamedTemporaryFile(
            mode=mode, newline=newline, delete=False
        )

        with self.file as f:
            f.write(content)

    @property
    def filename(self):
        return self.file.name

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        os.unlink(self.filename)


async def read_upload_request(request):
    """Decode a multipart upload request the way a compliant server does.

    The file parts are looked up by the indexes of the map, whatever
    their position in the body.

    Returns the operations, the map and a dict index -> (filename, content)
    """
    reader = await request.multipart()

    operations = None
    file_map = None
    parts = {}

    while True:
        field = await reader.next()
        if field is None:
            break

        if field.name == "operations":
            operations = json.loads(await field.text())
        elif field.name == "map":
            file_map = json.loads(await field.text())
        else:
            parts[field.name] = (field.filename, bytes(await field.read()))

    assert operations is not None
    assert file_map is not None

    files = {index: parts[index] for index in file_map}

    return operations, file_map, files


def make_upload_handler(
    expected_map,
    expected_contents,
    filenames=None,
    server_answer='{"data":{"success":true}}',
    received=None,
):
    async def upload_handler(request):
        from aiohttp import web

        assert request.content_type == "multipart/form-data"

        operations, file_map, files = await read_upload_request(request)

        assert file_map == expected_map
        assert len(files) == len(expected_contents)

        for index, expected_content in enumerate(expected_contents):
            filename, content = files[str(index)]
            assert content == expected_content
            if filenames is not None:
                assert filename == filenames[index]

        if received is not None:
            received.append(operations)

        return web.Response(text=server_answer, content_type="application/json")

    return upload_handler
