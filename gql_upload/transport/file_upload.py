import io
import os
import warnings
from typing import Any, Dict, List, NamedTuple, Optional, Set, Tuple, Type


class FileVar:
    def __init__(
        self,
        f: Any,  # str | io.IOBase | aiohttp.StreamReader | AsyncGenerator
        *,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        streaming: bool = False,
        streaming_block_size: int = 64 * 1024,
    ):
        self.f = f
        self.filename = filename
        self.content_type = content_type
        self.streaming = streaming
        self.streaming_block_size = streaming_block_size

        self._file_opened: bool = False

    def open_file(self) -> None:
        assert self._file_opened is False

        if self.streaming:
            self._make_file_streamer()
        else:
            if isinstance(self.f, str):
                if self.filename is None:
                    # By default we set the filename to the basename
                    # of the opened file
                    self.filename = os.path.basename(self.f)
                self.f = open(self.f, "rb")
                self._file_opened = True

    def close_file(self) -> None:
        if self._file_opened:
            assert isinstance(self.f, io.IOBase)
            self.f.close()
            self._file_opened = False

    def _make_file_streamer(self) -> None:
        assert isinstance(self.f, str), "streaming option needs a filepath str"

        import aiofiles

        if self.filename is None:
            self.filename = os.path.basename(self.f)

        async def file_sender(file_name):
            async with aiofiles.open(file_name, "rb") as f:
                while chunk := await f.read(self.streaming_block_size):
                    yield chunk

        self.f = file_sender(self.f)


class ExtractedFile(NamedTuple):
    """A file found in a request body and the dotted path where it sat."""

    path: str
    file: FileVar


def open_files(files: List[ExtractedFile]) -> None:
    for extracted in files:
        extracted.file.open_file()


def close_files(files: List[ExtractedFile]) -> None:
    for extracted in files:
        extracted.file.close_file()


FILE_UPLOAD_DOCS = "https://github.com/jaydenseric/graphql-multipart-request-spec"


def extract_files(
    body: Dict[str, Any], file_classes: Tuple[Type[Any], ...]
) -> Tuple[Dict[str, Any], List[ExtractedFile]]:
    """Find the files of a request body.

    Returns a copy of the body in which every file is replaced by None,
    and the list of extracted files with their path inside the body,
    in traversal order.
    """
    files: List[ExtractedFile] = []

    # ids of the containers being copied, to stop on circular references
    parents: Set[int] = set()

    def recurse_extract(path, obj):
        """
        recursively traverse obj, doing a deepcopy, but
        replacing any file-like objects with nulls and
        shunting the originals off to the side.
        """
        if isinstance(obj, (list, dict)):
            if id(obj) in parents:
                # left as is, the serializer will reject it
                return obj

            parents.add(id(obj))
            try:
                if isinstance(obj, list):
                    return [
                        recurse_extract(f"{path}.{key}", value)
                        for key, value in enumerate(obj)
                    ]
                return {
                    key: recurse_extract(f"{path}.{key}" if path else key, value)
                    for key, value in obj.items()
                }
            finally:
                parents.discard(id(obj))
        elif isinstance(obj, FileVar):
            files.append(ExtractedFile(path, obj))
            return None
        elif isinstance(obj, file_classes):
            warnings.warn(
                "Not using FileVar for file upload is deprecated. "
                f"See {FILE_UPLOAD_DOCS} for details.",
                DeprecationWarning,
            )
            name = getattr(obj, "name", None)
            if isinstance(name, str):
                name = os.path.basename(name)
            else:
                name = None
            content_type = getattr(obj, "content_type", None)
            files.append(
                ExtractedFile(
                    path, FileVar(obj, filename=name, content_type=content_type)
                )
            )
            return None
        else:
            # base case: pass through unchanged
            return obj

    nulled_body = recurse_extract("", body)

    return nulled_body, files
