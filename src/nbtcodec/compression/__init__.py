"""Stream compression adapters for nbtcodec.

This module provides the gzip and zlib transforms applied around the codec's
byte stream.
"""

from __future__ import annotations

from .streams import (
    ZlibReader,
    ZlibWriter,
    detect_compression,
    open_reader,
    open_writer,
)

__all__ = [
    "open_reader",
    "open_writer",
    "detect_compression",
    "ZlibReader",
    "ZlibWriter",
]
