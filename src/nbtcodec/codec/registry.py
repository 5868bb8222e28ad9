"""Dispatch table between tag ids, value classes and payload codecs.

The table maps each tag id to its value class, a payload decoder and a
payload encoder. Scalar and array entries are registered here; the List and
Compound entries are registered by the container codec, whose codecs call
back into this table for their elements.
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Optional

from ..exceptions import UnrepresentableValueError
from ..models.base import Tag, TagId
from ..models.values import (
    Byte,
    ByteArray,
    Double,
    Float,
    Int,
    IntArray,
    Long,
    LongArray,
    Short,
    String,
)
from .primitives import StreamReader, StreamWriter

# (reader, depth) -> value
Decoder = Callable[[StreamReader, int], Tag]
# (writer, value, depth) -> None
Encoder = Callable[[StreamWriter, Any, int], None]


class TagCodec(NamedTuple):
    """Registry entry for one tag id."""

    tag_id: TagId
    variant: type[Tag]
    decoder: Decoder
    encoder: Encoder


_BY_ID: dict[int, TagCodec] = {}
_BY_VARIANT: dict[type[Tag], TagCodec] = {}


def register(tag_id: TagId, variant: type[Tag], decoder: Decoder, encoder: Encoder) -> None:
    """Register the payload codecs for a tag id.

    Args:
        tag_id: Wire tag id (END cannot be registered)
        variant: Value class carrying this tag id
        decoder: Reads one payload and returns a value of ``variant``
        encoder: Writes the payload of a ``variant`` value

    Raises:
        ValueError: If tag_id is END or disagrees with ``variant.tag_id``
    """
    if tag_id == TagId.END:
        raise ValueError("END is a terminator and carries no payload")
    if variant.tag_id != tag_id:
        raise ValueError(
            f"{variant.__name__} carries tag id {variant.tag_id!r}, not {tag_id!r}"
        )

    entry = TagCodec(tag_id, variant, decoder, encoder)
    _BY_ID[int(tag_id)] = entry
    _BY_VARIANT[variant] = entry


def decoder_for(tag_id: int) -> Optional[Decoder]:
    """Return the payload decoder for a tag id, or None for END and unknown ids."""
    entry = _BY_ID.get(tag_id)
    return entry.decoder if entry is not None else None


def tag_and_encoder_for(value: object) -> tuple[TagId, Encoder]:
    """Return the tag id and payload encoder for a value.

    Raises:
        UnrepresentableValueError: If the value is not a registered tag type
    """
    for cls in type(value).__mro__:
        entry = _BY_VARIANT.get(cls)
        if entry is not None:
            return entry.tag_id, entry.encoder
    raise UnrepresentableValueError(f"{type(value).__name__} has no representable tag")


def registered_ids() -> list[TagId]:
    """Return the registered tag ids in wire order."""
    return sorted(entry.tag_id for entry in _BY_ID.values())


# ── Scalar and array payloads ─────────────────────────────────
# Decoders ignore depth; only containers nest.

register(
    TagId.BYTE,
    Byte,
    lambda reader, depth: Byte(reader.read_byte()),
    lambda writer, tag, depth: writer.write_byte(tag.value),
)
register(
    TagId.SHORT,
    Short,
    lambda reader, depth: Short(reader.read_short()),
    lambda writer, tag, depth: writer.write_short(tag.value),
)
register(
    TagId.INT,
    Int,
    lambda reader, depth: Int(reader.read_int()),
    lambda writer, tag, depth: writer.write_int(tag.value),
)
register(
    TagId.LONG,
    Long,
    lambda reader, depth: Long(reader.read_long()),
    lambda writer, tag, depth: writer.write_long(tag.value),
)
register(
    TagId.FLOAT,
    Float,
    lambda reader, depth: Float(reader.read_float()),
    lambda writer, tag, depth: writer.write_float(tag.value),
)
register(
    TagId.DOUBLE,
    Double,
    lambda reader, depth: Double(reader.read_double()),
    lambda writer, tag, depth: writer.write_double(tag.value),
)
register(
    TagId.BYTE_ARRAY,
    ByteArray,
    lambda reader, depth: ByteArray(reader.read_byte_array()),
    lambda writer, tag, depth: writer.write_byte_array(tag.value),
)
register(
    TagId.STRING,
    String,
    lambda reader, depth: String(reader.read_string()),
    lambda writer, tag, depth: writer.write_string(tag.value),
)
register(
    TagId.INT_ARRAY,
    IntArray,
    lambda reader, depth: IntArray(reader.read_int_array()),
    lambda writer, tag, depth: writer.write_int_array(tag.value),
)
register(
    TagId.LONG_ARRAY,
    LongArray,
    lambda reader, depth: LongArray(reader.read_long_array()),
    lambda writer, tag, depth: writer.write_long_array(tag.value),
)
