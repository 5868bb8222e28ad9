"""nbtcodec: Named Binary Tag codec

A Python library for reading and writing the tag-based, length-prefixed
binary tree format used to persist hierarchical game and world state.

Key Features:
- Pydantic-based, validated tag value model (one class per tag id)
- Recursive, fail-fast encoder/decoder over any binary stream
- Transparent gzip and zlib stream compression, with auto-detection on read
- Pure Python implementation

Quick Start:
    >>> from nbtcodec import Compound, Int, List, String, decode, encode
    >>>
    >>> player = Compound({
    ...     "name": String("Bob"),
    ...     "hp": Int(20),
    ...     "tags": List([String("fast"), String("brave")]),
    ... })
    >>> data = encode(player, compression="gzip")
    >>> decode(data, compression="auto") == player
    True
"""

from __future__ import annotations

from .codec import decode, encode, load, read, save, write
from .compression import detect_compression
from .config import CodecConfig, Compression
from .exceptions import (
    DecodeError,
    EncodeError,
    HeterogeneousListError,
    MalformedInputError,
    NbtError,
    TruncatedError,
    UnrepresentableValueError,
)
from .models import (
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
    Tag,
    TagId,
    from_native,
    to_native,
)
from .utils import encoded_size, field_sizes, root_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "read",
    "write",
    "decode",
    "encode",
    "load",
    "save",
    # Configuration
    "CodecConfig",
    "Compression",
    "detect_compression",
    # Tag model
    "TagId",
    "Tag",
    "Byte",
    "Short",
    "Int",
    "Long",
    "Float",
    "Double",
    "ByteArray",
    "String",
    "List",
    "Compound",
    "IntArray",
    "LongArray",
    "from_native",
    "to_native",
    # Exceptions
    "NbtError",
    "DecodeError",
    "MalformedInputError",
    "TruncatedError",
    "EncodeError",
    "UnrepresentableValueError",
    "HeterogeneousListError",
    # Sizing
    "encoded_size",
    "root_size",
    "field_sizes",
    # Version
    "__version__",
]
