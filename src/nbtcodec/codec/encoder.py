"""Encoding entry points.

This module provides write(), encode() and save(), which serialize a root
Compound into a (possibly compressed) byte stream.
"""

from __future__ import annotations

import io
import os
from typing import IO, Optional, Union

from structlog import get_logger

from ..compression import open_writer
from ..config import CodecConfig, Compression, resolve_config
from ..models.values import Compound
from .containers import write_root
from .primitives import StreamWriter

logger = get_logger()


def write(
    root: Compound,
    stream: IO[bytes],
    compression: Optional[Compression] = None,
    config: Optional[CodecConfig] = None,
) -> None:
    """Encode a root Compound to a binary stream.

    The whole tree is serialized in memory first; the target stream is only
    written to once encoding has succeeded, so an encode error leaves it
    untouched.

    Args:
        root: Compound to write as the stream's root
        stream: Writable binary stream (left open)
        compression: "none", "gzip" or "zlib"; overrides config
        config: Codec options (default CodecConfig())

    Raises:
        EncodeError: If root is not a Compound or a value cannot be packed
        HeterogeneousListError: If a List mixes element tags
        UnrepresentableValueError: If the tree holds a non-tag value
        ValueError: If compression is "auto"

    Examples:
        ```python
        from nbtcodec import Compound, Int, List, String, write

        player = Compound({
            "name": String("Bob"),
            "hp": Int(20),
            "tags": List([String("fast"), String("brave")]),
        })
        with open("player.dat", "wb") as f:
            write(player, f, compression="gzip")
        ```
    """
    config = resolve_config(compression, config)
    if config.compression == "auto":
        raise ValueError("compression='auto' is only valid for reading")
    log = logger.new(compression=config.compression)

    buffer = io.BytesIO()
    writer = StreamWriter(buffer, max_depth=config.max_depth)
    write_root(writer, root)

    with open_writer(stream, config.compression, config.compress_level) as target:
        target.write(buffer.getvalue())

    log.debug("root encoded", fields=len(root.value), size=writer.position())


def encode(
    root: Compound,
    compression: Optional[Compression] = None,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Encode a root Compound to bytes.

    Examples:
        ```python
        from nbtcodec import Compound, Int, encode

        data = encode(Compound({"hp": Int(20)}))
        assert data == b"\\x0a\\x00\\x00\\x03\\x00\\x02hp\\x00\\x00\\x00\\x14\\x00"
        ```
    """
    out = io.BytesIO()
    write(root, out, compression, config)
    return out.getvalue()


def save(
    root: Compound,
    path: Union[str, os.PathLike[str]],
    compression: Optional[Compression] = None,
    config: Optional[CodecConfig] = None,
) -> None:
    """Encode a root Compound to a file, replacing its contents.

    The file is only opened after encoding succeeded.
    """
    data = encode(root, compression, config)
    with open(path, "wb") as f:
        f.write(data)
