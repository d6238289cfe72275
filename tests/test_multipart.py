import io

import aiohttp
from multidict import CIMultiDict

from gql_upload import FileVar
from gql_upload.transport.common.multipart import build_file_map, build_wire_body
from gql_upload.transport.file_upload import ExtractedFile

payload = '{"operationName": null, "query": " query {  a  } ", "variables": null}'


def test_build_file_map():
    files = [
        ExtractedFile("variables.file", FileVar("a.txt")),
        ExtractedFile("variables.files.0", FileVar("b.txt")),
    ]

    assert build_file_map(files) == {
        "0": ["variables.file"],
        "1": ["variables.files.0"],
    }

    assert build_file_map([]) == {}


def test_build_wire_body_without_files():
    headers = CIMultiDict({"Accept": "*/*", "Content-Type": "application/json"})

    data, wire_headers = build_wire_body(payload, [], headers)

    assert data == payload
    assert wire_headers["content-type"] == "application/json"
    assert wire_headers["accept"] == "*/*"


def test_build_wire_body_with_files_removes_content_type():
    headers = CIMultiDict(
        {"Accept": "*/*", "Content-Type": "application/json", "x-custom": "1"}
    )
    files = [
        ExtractedFile(
            "variables.file",
            FileVar(io.BytesIO(b"content"), filename="a.txt", content_type="text/plain"),
        )
    ]

    data, wire_headers = build_wire_body(payload, files, headers)

    assert isinstance(data, aiohttp.FormData)
    assert "content-type" not in wire_headers
    assert wire_headers["x-custom"] == "1"
    assert wire_headers["accept"] == "*/*"

    # The headers given are not modified
    assert headers["Content-Type"] == "application/json"


def test_build_wire_body_field_order():
    files = [
        ExtractedFile("variables.file1", FileVar(io.BytesIO(b"1"), filename="1.txt")),
        ExtractedFile("variables.file2", FileVar(io.BytesIO(b"2"), filename="2.txt")),
    ]

    data, _ = build_wire_body(payload, files, CIMultiDict())

    names = [type_options["name"] for type_options, _, _ in data._fields]

    assert names == ["operations", "map", "0", "1"]

    _, _, map_value = data._fields[1]
    assert map_value == '{"0": ["variables.file1"], "1": ["variables.file2"]}'

    _, _, operations_value = data._fields[0]
    assert operations_value == payload
