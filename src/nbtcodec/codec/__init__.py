"""Binary tag codec for nbtcodec.

This module provides the stream-level primitives, the tag registry, the
recursive container codec and the read/write entry points built on them.
"""

from __future__ import annotations

from .containers import (
    read_compound,
    read_field,
    read_list,
    read_root,
    write_compound,
    write_field,
    write_list,
    write_root,
)
from .decoder import decode, load, read
from .encoder import encode, save, write
from .primitives import StreamReader, StreamWriter
from .registry import decoder_for, register, tag_and_encoder_for

__all__ = [
    "read",
    "write",
    "decode",
    "encode",
    "load",
    "save",
    "StreamReader",
    "StreamWriter",
    "decoder_for",
    "tag_and_encoder_for",
    "register",
    "read_field",
    "write_field",
    "read_compound",
    "write_compound",
    "read_list",
    "write_list",
    "read_root",
    "write_root",
]
