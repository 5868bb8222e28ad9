"""Decoding entry points.

This module provides read(), decode() and load(), which turn a (possibly
compressed) byte stream into a root Compound.
"""

from __future__ import annotations

import io
import os
from typing import IO, Optional, Union

from structlog import get_logger

from ..compression import open_reader
from ..config import CodecConfig, Compression, resolve_config
from ..models.values import Compound
from .containers import read_root
from .primitives import StreamReader

logger = get_logger()


def read(
    stream: IO[bytes],
    compression: Optional[Compression] = None,
    config: Optional[CodecConfig] = None,
) -> Compound:
    """Decode one root Compound from a binary stream.

    The stream is read sequentially and only as far as the root's END tag
    (or, for compressed input, the end of the compressed member).

    Args:
        stream: Readable binary stream (left open)
        compression: "none", "gzip", "zlib" or "auto"; overrides config
        config: Codec options (default CodecConfig())

    Returns:
        The decoded root Compound

    Raises:
        MalformedInputError: If the stream is structurally invalid
        TruncatedError: If the stream ends inside the tree
        OSError, EOFError, zlib.error: Failures of the underlying stream

    Examples:
        ```python
        from nbtcodec import read

        with open("level.dat", "rb") as f:
            root = read(f, compression="gzip")
        print(root["Data"]["LevelName"].value)
        ```
    """
    config = resolve_config(compression, config)
    log = logger.new(compression=config.compression)

    with open_reader(stream, config.compression) as source:
        reader = StreamReader(source, max_depth=config.max_depth)
        root = read_root(reader)

    log.debug("root decoded", fields=len(root.value), size=reader.position())
    return root


def decode(
    data: bytes,
    compression: Optional[Compression] = None,
    config: Optional[CodecConfig] = None,
) -> Compound:
    """Decode one root Compound from bytes.

    Examples:
        ```python
        from nbtcodec import decode, encode

        data = encode(root, compression="zlib")
        assert decode(data, compression="auto") == root
        ```
    """
    return read(io.BytesIO(data), compression, config)


def load(
    path: Union[str, os.PathLike[str]],
    compression: Optional[Compression] = None,
    config: Optional[CodecConfig] = None,
) -> Compound:
    """Decode the root Compound stored in a file."""
    with open(path, "rb") as f:
        return read(f, compression, config)
