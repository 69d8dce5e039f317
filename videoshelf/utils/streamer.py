"""
utils/streamer.py

Turns a resolved video plus a parsed Range outcome into a Flask Response whose
body is read from disk one chunk at a time.
"""

import logging
from typing import BinaryIO, Callable, Dict, Optional

from flask import Response

from ..config import CHUNK_SIZE, DEFAULT_MIME_TYPE
from .media import ResourceDescriptor, describe_resource
from .ranges import NoRange, RangeOutcome, Satisfiable, Unsatisfiable, parse_range_header

logger = logging.getLogger("videoshelf.streamer")

Opener = Callable[[str], BinaryIO]


class IncompleteReadError(IOError):
    """The file ended before the promised number of bytes was read."""


def open_binary(path: str) -> BinaryIO:
    return open(path, "rb")


class FileWindow:
    """
    Iterable body over `length` bytes of an open file starting at `start`.

    Holds at most one chunk at a time. The WSGI server pulls the next chunk
    only after the previous one was written, and calls close() when the
    response ends for any reason (done, client gone, error).
    """

    def __init__(self, fileobj: BinaryIO, start: int, length: int,
                 chunk_size: int = CHUNK_SIZE, name: str = ""):
        self._file: Optional[BinaryIO] = fileobj
        self.start = start
        self.length = length
        self.chunk_size = chunk_size
        self.name = name
        self.bytes_sent = 0

    @property
    def closed(self) -> bool:
        return self._file is None

    def __iter__(self):
        if self._file is None:
            raise ValueError("FileWindow is closed")
        fh = self._file
        try:
            fh.seek(self.start)
            remaining = self.length
            while remaining > 0:
                chunk = fh.read(min(self.chunk_size, remaining))
                if not chunk:
                    raise IncompleteReadError(
                        f"{self.name}: expected {remaining} more bytes at offset "
                        f"{self.start + self.bytes_sent}"
                    )
                remaining -= len(chunk)
                self.bytes_sent += len(chunk)
                yield chunk
        except OSError:
            logger.exception("Aborting stream of %s after %d/%d bytes",
                             self.name, self.bytes_sent, self.length)
            self.close()
            raise
        logger.debug("Completed stream of %s (%d bytes)", self.name, self.bytes_sent)

    def close(self):
        if self._file is not None:
            if self.bytes_sent < self.length:
                logger.debug("Stream of %s closed early after %d/%d bytes",
                             self.name, self.bytes_sent, self.length)
            self._file.close()
            self._file = None


def _unsatisfiable_response(resource: ResourceDescriptor) -> Response:
    return Response(
        b"",
        status=416,
        headers={"Content-Range": f"bytes */{resource.size}"},
    )


def build_stream_response(
    resource: ResourceDescriptor,
    outcome: RangeOutcome,
    chunk_size: int = CHUNK_SIZE,
    opener: Optional[Opener] = None,
) -> Response:
    """
    Frame the response for one request.

    NoRange -> 200 with the whole file, Satisfiable -> 206 with the window,
    Unsatisfiable -> 416 without opening the file. The file is opened before
    any headers exist, so an open failure raises here instead of producing a
    half-sent response.
    """
    if isinstance(outcome, Unsatisfiable):
        logger.info("416 for %s (%d bytes): %s", resource.name, resource.size, outcome.reason)
        return _unsatisfiable_response(resource)

    headers: Dict[str, str] = {}
    if isinstance(outcome, Satisfiable):
        rng = outcome.byte_range
        start, length, status = rng.start, rng.length, 206
        headers["Content-Range"] = rng.content_range(resource.size)
        headers["Accept-Ranges"] = "bytes"
    elif isinstance(outcome, NoRange):
        start, length, status = 0, resource.size, 200
    else:
        raise TypeError(f"unknown range outcome: {outcome!r}")
    headers["Content-Length"] = str(length)

    fh = (opener or open_binary)(resource.path)
    body = FileWindow(fh, start, length, chunk_size=chunk_size, name=resource.name)
    logger.debug("%d for %s: offset=%d length=%d", status, resource.name, start, length)
    return Response(
        body,
        status=status,
        headers=headers,
        mimetype=resource.content_type,
        direct_passthrough=True,
    )


def handle_stream_request(
    resource_path: str,
    range_header: Optional[str],
    chunk_size: int = CHUNK_SIZE,
    mime_types: Optional[Dict[str, str]] = None,
    default_mime_type: str = DEFAULT_MIME_TYPE,
    opener: Optional[Opener] = None,
) -> Response:
    """
    Resolve, parse and frame a streaming request.
    Raises ResourceNotFoundError before looking at the Range header.
    """
    resource = describe_resource(resource_path, mime_types, default_mime_type)
    outcome = parse_range_header(range_header, resource.size)
    return build_stream_response(resource, outcome, chunk_size=chunk_size, opener=opener)
