"""Compression transforms wrapped around the codec's byte stream.

The codec itself only sees a readable or writable binary stream; this module
supplies the gzip- and zlib-framed variants of that stream. Transforms opened
here are always closed on exit, the caller's stream never is.
"""

from __future__ import annotations

import gzip
import io
import zlib
from contextlib import contextmanager
from typing import IO, Iterator

from structlog import get_logger

from ..config import Compression

logger = get_logger()

_CHUNK_SIZE = 64 * 1024

GZIP_MAGIC = b"\x1f\x8b"


def detect_compression(head: bytes) -> Compression:
    """Guess the compression of a stream from its first two bytes.

    Args:
        head: At least the first two bytes of the stream

    Returns:
        "gzip" for the gzip magic number, "zlib" for a valid zlib header
        (deflate method with a correct header checksum), otherwise "none"

    Example:
        >>> detect_compression(b"\\x1f\\x8b")
        'gzip'
        >>> detect_compression(b"\\x0a\\x00")
        'none'
    """
    if head[:2] == GZIP_MAGIC:
        return "gzip"
    if len(head) >= 2 and head[0] & 0x0F == 8 and ((head[0] << 8) | head[1]) % 31 == 0:
        return "zlib"
    return "none"


class ZlibReader(io.RawIOBase):
    """Readable stream that inflates a zlib-framed source stream.

    Raises EOFError if the source ends before the zlib end-of-stream marker.
    Bytes after the marker are left unread in the decompressor.
    """

    def __init__(self, fileobj: IO[bytes]) -> None:
        self._fileobj = fileobj
        self._decompressor = zlib.decompressobj()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray) -> int:  # type: ignore[override]
        while not self._pending:
            if self._decompressor.eof:
                return 0
            raw = self._fileobj.read(_CHUNK_SIZE)
            if not raw:
                raise EOFError(
                    "Compressed stream ended before the end-of-stream marker was reached"
                )
            self._pending = self._decompressor.decompress(raw)

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


class ZlibWriter(io.RawIOBase):
    """Writable stream that deflates into a zlib-framed target stream.

    close() flushes the compressor and writes the trailer; the target stream
    itself stays open.
    """

    def __init__(self, fileobj: IO[bytes], level: int = 9) -> None:
        self._fileobj = fileobj
        self._compressor = zlib.compressobj(level)

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:  # type: ignore[override]
        self._fileobj.write(self._compressor.compress(data))
        return len(data)

    def close(self) -> None:
        if not self.closed:
            self._fileobj.write(self._compressor.flush())
        super().close()


class _ReplayReader(io.RawIOBase):
    """Readable stream that returns already-consumed bytes before the rest."""

    def __init__(self, head: bytes, fileobj: IO[bytes]) -> None:
        self._head = head
        self._fileobj = fileobj

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray) -> int:  # type: ignore[override]
        if self._head:
            size = min(len(buffer), len(self._head))
            buffer[:size] = self._head[:size]
            self._head = self._head[size:]
            return size
        data = self._fileobj.read(len(buffer))
        if not data:
            return 0
        buffer[: len(data)] = data
        return len(data)


@contextmanager
def open_reader(stream: IO[bytes], compression: Compression = "none") -> Iterator[IO[bytes]]:
    """Wrap a readable binary stream in a decompressing transform.

    Args:
        stream: Source stream (left open)
        compression: "none", "gzip", "zlib" or "auto"

    Yields:
        A readable binary stream of uncompressed bytes

    Example:
        >>> with open("level.dat", "rb") as f, open_reader(f, "gzip") as src:
        ...     root = read_root(StreamReader(src))
    """
    if compression == "auto":
        head = stream.read(2)
        compression = detect_compression(head)
        logger.debug("compression detected", compression=compression)
        stream = _ReplayReader(head, stream)

    if compression == "none":
        yield stream
    elif compression == "gzip":
        with gzip.GzipFile(fileobj=stream, mode="rb") as gz:
            yield gz
    elif compression == "zlib":
        with ZlibReader(stream) as zr:
            yield zr
    else:
        raise ValueError(f"Invalid compression: {compression!r}")


@contextmanager
def open_writer(
    stream: IO[bytes], compression: Compression = "none", level: int = 9
) -> Iterator[IO[bytes]]:
    """Wrap a writable binary stream in a compressing transform.

    Args:
        stream: Target stream (left open, not flushed)
        compression: "none", "gzip" or "zlib"
        level: Compression level 0-9

    Yields:
        A writable binary stream; the compressed trailer is written on exit

    Raises:
        ValueError: For "auto" or an unknown compression name
    """
    if compression == "none":
        yield stream
    elif compression == "gzip":
        # mtime=0 keeps the output byte-for-byte reproducible
        with gzip.GzipFile(fileobj=stream, mode="wb", compresslevel=level, mtime=0) as gz:
            yield gz
    elif compression == "zlib":
        with ZlibWriter(stream, level) as zw:
            yield zw
    else:
        raise ValueError(f"Invalid compression for writing: {compression!r}")
