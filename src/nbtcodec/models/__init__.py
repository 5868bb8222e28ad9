"""Tag value model for nbtcodec.

This module provides the TagId enumeration and the pydantic-based value
classes that make up an in-memory tag tree.
"""

from __future__ import annotations

from .base import Tag, TagId
from .native import from_native, to_native
from .values import (
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
)

__all__ = [
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
]
