import json
import logging
from typing import Any, Callable, Dict, List, Tuple, Union

import aiohttp
from multidict import CIMultiDict

from ..file_upload import ExtractedFile

log = logging.getLogger(__name__)


def build_file_map(files: List[ExtractedFile]) -> Dict[str, List[str]]:
    # path is nested in a list because the spec allows multiple pointers
    # to the same file. But we don't support that.
    # Will generate something like {"0": ["variables.file"]}
    return {str(index): [extracted.path] for index, extracted in enumerate(files)}


def build_wire_body(
    payload: str,
    files: List[ExtractedFile],
    headers: CIMultiDict,
    json_serialize: Callable[[Any], str] = json.dumps,
) -> Tuple[Union[str, aiohttp.FormData], CIMultiDict]:
    """Build the body of the HTTP request.

    Without files, the payload is the body. With files, the body follows
    the GraphQL multipart request spec:
    https://github.com/jaydenseric/graphql-multipart-request-spec

    The files must have been opened before.

    :returns: the body and the headers to send with it
    """
    headers = CIMultiDict(headers)

    if not files:
        return payload, headers

    # Set by aiohttp with the multipart boundary
    headers.popall("content-type", None)

    data = aiohttp.FormData()

    log.debug("operations %s", payload)
    data.add_field("operations", payload, content_type="application/json")

    file_map_str = json_serialize(build_file_map(files))
    log.debug("file_map %s", file_map_str)
    data.add_field("map", file_map_str, content_type="application/json")

    for index, extracted in enumerate(files):
        file_var = extracted.file
        data.add_field(
            str(index),
            file_var.f,
            filename=file_var.filename,
            content_type=file_var.content_type,
        )

    return data, headers
